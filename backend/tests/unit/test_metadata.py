"""Unit tests for typed standard metadata"""
import pytest

from tokenforge.schemas.metadata import (
    ERC1155Metadata,
    ERC1400Metadata,
    ERC20Metadata,
    ERC4626Metadata,
    parse_metadata,
)
from tokenforge.schemas.token import ERC1155TokenType, TokenStandard
from tokenforge.services.catalog import default_block_metadata


class TestParseMetadata:
    """Tests for reading metadata mappings as per-standard variants"""

    def test_variant_per_standard(self):
        assert isinstance(parse_metadata(TokenStandard.ERC20, {}), ERC20Metadata)
        assert isinstance(parse_metadata("ERC1400", None), ERC1400Metadata)
        assert isinstance(parse_metadata("ERC4626", {}), ERC4626Metadata)

    def test_known_fields_typed(self):
        metadata = parse_metadata("ERC1400", {
            "securityType": "Equity",
            "restrictedJurisdictions": ["Cuba"],
            "kycRequired": False,
        })
        assert metadata.security_type == "Equity"
        assert metadata.restricted_jurisdictions == ["Cuba"]
        assert metadata.kyc_required is False

    def test_unknown_keys_kept(self):
        metadata = parse_metadata("ERC20", {"description": "x", "futureField": {"a": 1}})
        assert metadata.extensions == {"futureField": {"a": 1}}

    @pytest.mark.parametrize("metadata", ["oops", ["a", "b"], 42, None])
    def test_non_mapping_reads_as_empty(self, metadata):
        parsed = parse_metadata("ERC20", metadata)
        assert parsed == parse_metadata("ERC20", {})
        assert parsed.extensions == {}

    def test_malformed_field_falls_back(self):
        """A known key with the wrong shape uses its default instead of failing"""
        metadata = parse_metadata("ERC721", {"royalties": "lots", "collectionName": "Art"})
        assert metadata.royalties == 0
        assert metadata.collection_name == "Art"

    def test_erc1155_sub_tokens(self):
        metadata = parse_metadata("ERC1155", {
            "tokens": [{"type": "Semi-Fungible", "name": "Ticket", "amount": 50}],
        })
        assert isinstance(metadata, ERC1155Metadata)
        assert metadata.tokens[0].type is ERC1155TokenType.SEMI_FUNGIBLE
        assert metadata.tokens[0].amount == 50

    def test_erc1400_restricted_by_default(self):
        assert parse_metadata("ERC1400", {}).transfer_restrictions is True
        assert parse_metadata("ERC20", {}).transfer_restrictions is False

    def test_catalog_defaults_parse_cleanly(self):
        """New block metadata reads back without dropped fields"""
        for standard in TokenStandard:
            metadata = parse_metadata(standard, default_block_metadata(standard))
            assert metadata.mintable is True
