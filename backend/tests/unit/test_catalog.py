"""Unit tests for the token standard catalog"""
import pytest

from tokenforge.schemas.token import TokenStandard
from tokenforge.services.catalog import (
    SANCTIONED_JURISDICTIONS,
    MetadataFieldType,
    default_block_metadata,
    default_metadata_fields,
    list_standards,
    standard_info,
)


class TestDefaultMetadataFields:
    """Tests for the per-standard editor field sets"""

    @pytest.mark.parametrize("standard", list(TokenStandard))
    def test_every_standard_has_fields(self, standard):
        """Each enumerated standard offers at least one field"""
        fields = default_metadata_fields(standard)
        assert len(fields) > 0
        assert all(isinstance(f.type, MetadataFieldType) for f in fields)

    @pytest.mark.parametrize("unknown", ["ERC777", "", None, 20, "erc20"])
    def test_unknown_standard_is_empty(self, unknown):
        """Anything outside the enum yields an empty list, never an error"""
        assert default_metadata_fields(unknown) == []

    def test_erc20_fields_in_order(self):
        """ERC20 fields keep their display order and defaults"""
        fields = default_metadata_fields("ERC20")
        assert [f.name for f in fields] == ["Description", "External URL", "Max Supply", "Is Transferable"]
        max_supply = fields[2]
        assert max_supply.type is MetadataFieldType.NUMBER
        assert max_supply.required is True
        assert max_supply.default_value == 1000000
        assert fields[3].default_value is True

    def test_erc1400_kyc_defaults_on(self):
        """KYC is required by default for security tokens"""
        kyc = [f for f in default_metadata_fields(TokenStandard.ERC1400) if f.key == "kycRequired"][0]
        assert kyc.type is MetadataFieldType.BOOLEAN
        assert kyc.default_value is True

    def test_field_serialization(self):
        """Fields serialize with camelCase defaultValue and a plain type tag"""
        data = default_metadata_fields("ERC4626")[2].to_dict()
        assert data == {
            "name": "Management Fee",
            "key": "managementFee",
            "type": "number",
            "description": "Annual fee percentage for vault management",
            "required": False,
            "defaultValue": 0,
        }

    def test_returned_list_is_a_copy(self):
        """Callers cannot alter the catalog through a returned list"""
        fields = default_metadata_fields("ERC721")
        fields.clear()
        assert len(default_metadata_fields("ERC721")) == 4


class TestDefaultBlockMetadata:
    """Tests for the initial metadata of a new block"""

    def test_common_flags_present(self):
        """Every standard starts with the common feature flags"""
        for standard in TokenStandard:
            metadata = default_block_metadata(standard)
            for flag in ("mintable", "burnable", "pausable", "transferRestrictions"):
                assert flag in metadata

    def test_field_defaults_included(self):
        """Catalog field defaults are copied under their keys"""
        metadata = default_block_metadata("ERC20")
        assert metadata["maxSupply"] == 1000000
        assert metadata["isTransferable"] is True
        assert metadata["description"] == ""

    def test_erc1400_restrictions(self):
        """Security tokens start restricted with no jurisdictions"""
        metadata = default_block_metadata("ERC1400")
        assert metadata["transferRestrictions"] is True
        assert metadata["restrictedJurisdictions"] == []
        assert metadata["lockupPeriods"] is False

    def test_erc1155_default_sub_token(self):
        """A new ERC1155 block carries one fungible sub-token"""
        tokens = default_block_metadata("ERC1155")["tokens"]
        assert len(tokens) == 1
        assert tokens[0]["type"] == "Fungible"

    def test_defaults_are_independent(self):
        """Mutating one block's metadata does not leak into the next"""
        first = default_block_metadata("ERC1400")
        first["restrictedJurisdictions"].append("Cuba")
        assert default_block_metadata("ERC1400")["restrictedJurisdictions"] == []

    def test_unknown_standard(self):
        assert default_block_metadata("ERC9999") == {}


class TestStandardInfo:
    """Tests for standard descriptions"""

    def test_list_covers_all_standards(self):
        """One description per enumerated standard, in enum order"""
        assert [info.standard for info in list_standards()] == list(TokenStandard)

    def test_info_serialization(self):
        data = standard_info("ERC3525").to_dict()
        assert data["id"] == "ERC3525"
        assert data["useCases"]
        assert data["pros"] and data["cons"]
        assert all({"name", "description", "supported"} <= set(f) for f in data["features"])

    def test_unknown_standard(self):
        assert standard_info("BEP20") is None

    def test_jurisdictions(self):
        """Jurisdiction catalog is non-empty and free of duplicates"""
        assert "North Korea" in SANCTIONED_JURISDICTIONS
        assert len(SANCTIONED_JURISDICTIONS) == len(set(SANCTIONED_JURISDICTIONS))
