"""Unit tests for the contract template engine"""
import pytest

from tokenforge.schemas.token import TokenBlock, TokenStandard
from tokenforge.services.contract_templates import (
    TEMPLATES,
    UnsupportedStandardError,
    contract_identifier,
    generate_contract,
    numeral,
    solidity_string,
    unix_timestamp,
)

from fixtures.sample_tokens import sample_block


class TestHelpers:
    """Tests for the literal and identifier helpers"""

    @pytest.mark.parametrize("name,expected", [
        ("My Token", "MyToken"),
        ("  Spaced\tOut\nName ", "SpacedOutName"),
        ("NoSpaces", "NoSpaces"),
        ("", ""),
        (None, ""),
    ])
    def test_contract_identifier(self, name, expected):
        """All whitespace is removed from the name"""
        assert contract_identifier(name) == expected

    def test_solidity_string_escapes(self):
        assert solidity_string('Say "hi"') == 'Say \\"hi\\"'
        assert solidity_string("back\\slash") == "back\\\\slash"
        assert solidity_string("two\nlines") == "two\\nlines"
        assert solidity_string(None) == ""

    @pytest.mark.parametrize("value,expected", [
        (1000000, "1000000"),
        (1000000.0, "1000000"),
        (2.5, "2.5"),
        (0, "0"),
        (None, "0"),
        ("abc", "0"),
        (True, "0"),
    ])
    def test_numeral(self, value, expected):
        """Integral amounts render without a fractional part"""
        assert numeral(value) == expected

    def test_unix_timestamp(self):
        assert unix_timestamp("2024-01-01T00:00:00Z") == 1704067200
        assert unix_timestamp("2024-01-01") == 1704067200
        assert unix_timestamp("not a date") is None
        assert unix_timestamp("") is None


class TestDispatch:
    """Tests for the standard -> generator table"""

    def test_table_covers_every_standard(self):
        assert set(TEMPLATES) == set(TokenStandard)

    @pytest.mark.parametrize("standard", ["ERC777", "", None, "erc20"])
    def test_unsupported_standard_rejected(self, standard):
        """Unknown standards fail up front instead of falling through"""
        block = sample_block("ERC20", standard=standard)
        with pytest.raises(UnsupportedStandardError) as exc_info:
            generate_contract(block)
        assert exc_info.value.standard == standard

    @pytest.mark.parametrize("standard", [s.value for s in TokenStandard])
    def test_deterministic(self, standard):
        """Identical input yields byte-identical output"""
        block = sample_block(standard)
        assert generate_contract(block) == generate_contract(dict(block))

    @pytest.mark.parametrize("standard", [s.value for s in TokenStandard])
    def test_identifier_derived_from_name(self, standard):
        """'My Token' becomes contract MyToken for every standard"""
        source = generate_contract(sample_block(standard, name="My Token"))
        assert "contract MyToken {" in source
        assert 'string public name = "My Token";' in source

    @pytest.mark.parametrize("standard", [s.value for s in TokenStandard])
    def test_header(self, standard):
        source = generate_contract(sample_block(standard))
        assert source.startswith("// SPDX-License-Identifier: MIT\npragma solidity ^0.8.0;\n")

    def test_model_and_mapping_agree(self):
        """A validated TokenBlock renders the same as its wire mapping"""
        data = sample_block("ERC1400")
        assert generate_contract(TokenBlock.model_validate(data)) == generate_contract(data)

    def test_partial_block(self):
        """A partially filled block still renders"""
        source = generate_contract({"standard": "ERC20"})
        assert 'string public name = "";' in source
        assert "uint256 public totalSupply = 0;" in source

    def test_non_mapping_metadata_ignored(self):
        source = generate_contract({"standard": "ERC20", "metadata": "oops"})
        assert "uint256 public totalSupply = 0;" in source

    def test_string_literals_escaped(self):
        source = generate_contract(sample_block("ERC20", name='Quote "Token"'))
        assert 'string public name = "Quote \\"Token\\"";' in source


class TestERC20:
    """Tests for the fungible token template"""

    @pytest.mark.parametrize("supply", [0, 1, 1000000, 21000000])
    def test_name_symbol_supply_verbatim(self, supply):
        block = sample_block("ERC20", totalSupply=supply)
        source = generate_contract(block)
        assert block["name"] in source
        assert block["symbol"] in source
        assert f"uint256 public totalSupply = {supply};" in source

    def test_interface(self):
        source = generate_contract(sample_block("ERC20", decimals=6))
        assert "uint8 public decimals = 6;" in source
        assert "balanceOf[msg.sender] = totalSupply;" in source
        for function in ("transfer(", "approve(", "transferFrom("):
            assert f"function {function}" in source


class TestERC721:
    def test_hooks_and_uri(self):
        source = generate_contract(sample_block("ERC721"))
        assert "function tokenURI(uint256 tokenId)" in source
        assert "function _beforeTokenTransfer(address from, address to, uint256 tokenId) internal virtual {}" in source
        assert "function _afterTokenTransfer(address from, address to, uint256 tokenId) internal virtual {}" in source


class TestERC1155:
    def test_transfers_and_approvals(self):
        source = generate_contract(sample_block("ERC1155"))
        assert "function safeTransferFrom(" in source
        assert "function safeBatchTransferFrom(" in source
        assert "function setApprovalForAll(" in source
        assert "function _beforeTokenTransfer(" in source

    def test_sub_tokens_seeded(self):
        """Configured sub-tokens get ids from 1 with their uri and amount"""
        source = generate_contract(sample_block("ERC1155"))
        assert '_uris[1] = "https://items.example/gold.json";' in source
        assert '_uris[2] = "https://items.example/sword.json";' in source
        assert "_balances[1][msg.sender] = 10000;" in source
        assert "// Token #2: Non-Fungible (Legendary Sword)" in source

    def test_no_sub_tokens_no_constructor(self):
        block = sample_block("ERC1155")
        block["metadata"]["tokens"] = []
        assert "constructor()" not in generate_contract(block)


class TestERC1400:
    """Tests for the security token template"""

    def test_compliance_gating(self):
        """Restricted jurisdictions and KYC both appear in the compliance logic"""
        block = sample_block("ERC1400")
        block["metadata"]["restrictedJurisdictions"] = ["Cuba", "Iran"]
        block["metadata"]["transferRestrictions"] = True
        source = generate_contract(block)
        assert "isJurisdictionRestricted" in source
        assert "KYC verification required" in source
        assert '_restrictedJurisdictions["Cuba"] = true;' in source
        assert '_restrictedJurisdictions["Iran"] = true;' in source
        assert "transferRestrictions = true;" in source

    def test_admin_operations(self):
        source = generate_contract(sample_block("ERC1400"))
        assert "modifier onlyAdmin()" in source
        for function in ("issue", "redeem", "setKYC", "setJurisdiction", "setRestrictedJurisdiction", "setLockup"):
            assert f"function {function}(" in source
        assert "public onlyAdmin" in source

    def test_decimals_default_to_18(self):
        """Zero decimals on a security token render as 18"""
        source = generate_contract(sample_block("ERC1400", decimals=0))
        assert "uint8 public decimals = 18;" in source
        source = generate_contract(sample_block("ERC1400", decimals=6))
        assert "uint8 public decimals = 6;" in source

    def test_dates_seeded(self):
        source = generate_contract(sample_block("ERC1400"))
        assert "issuanceDate = 1704067200;" in source
        assert "maturityDate = 1861920000;" in source

    def test_missing_issuance_date_uses_deployment_time(self):
        block = sample_block("ERC1400")
        del block["metadata"]["issuanceDate"]
        assert "issuanceDate = block.timestamp;" in generate_contract(block)

    def test_restrictions_on_by_default(self):
        block = sample_block("ERC1400", metadata={})
        assert "transferRestrictions = true;" in generate_contract(block)

    def test_duplicate_jurisdictions_seeded_once(self):
        block = sample_block("ERC1400")
        block["metadata"]["restrictedJurisdictions"] = ["Cuba", "Cuba", ""]
        source = generate_contract(block)
        assert source.count('_restrictedJurisdictions["Cuba"] = true;') == 1
        assert '_restrictedJurisdictions[""]' not in source


class TestERC3525:
    def test_slot_value_model(self):
        source = generate_contract(sample_block("ERC3525"))
        for function in ("slotOf", "valueOf", "transferValueFrom", "_mint", "_splitValue"):
            assert f"function {function}(" in source

    def test_initial_mint(self):
        source = generate_contract(sample_block("ERC3525"))
        assert "_mint(msg.sender, 1, 3, 250000);" in source

    def test_no_initial_value_no_constructor(self):
        block = sample_block("ERC3525")
        block["metadata"]["value"] = 0
        assert "constructor()" not in generate_contract(block)


class TestERC4626:
    def test_vault_accounting(self):
        source = generate_contract(sample_block("ERC4626"))
        for function in ("totalAssets", "convertToShares", "convertToAssets", "deposit", "withdraw", "maxWithdraw"):
            assert f"function {function}(" in source
        assert "// Underlying asset: USDC" in source

    def test_empty_vault_is_one_to_one(self):
        source = generate_contract(sample_block("ERC4626"))
        assert "(supply == 0 || managed == 0) ? assets" in source
        assert "supply == 0 ? shares" in source

    def test_drained_vault_does_not_divide_by_zero(self):
        """Shares outstanding with no managed assets convert one to one"""
        source = generate_contract(sample_block("ERC4626"))
        assert "(assets * supply) / managed" in source
        assert "(assets * totalSupply()) / totalAssets()" not in source
