"""
Token Standard Catalog

Single source of truth for what a new block of each standard starts with,
which metadata fields the editor offers, and the descriptive text shown
next to each standard.
"""
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from tokenforge.schemas.token import ERC1155TokenType, TokenStandard


class MetadataFieldType(str, Enum):
    """Editor widget kinds for a metadata field"""
    TEXT = "text"
    MULTILINE_TEXT = "multiline-text"
    BOOLEAN = "boolean"
    NUMBER = "number"


@dataclass(frozen=True)
class MetadataField:
    """A metadata property offered by the editor for one standard"""
    name: str  # display label
    key: str  # metadata mapping key
    type: MetadataFieldType
    description: str = ""
    required: bool = False
    default_value: Union[str, bool, int, float] = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "key": self.key,
            "type": self.type.value,
            "description": self.description,
            "required": self.required,
            "defaultValue": self.default_value,
        }


@dataclass(frozen=True)
class StandardFeature:
    name: str
    description: str
    supported: Union[bool, str]  # True, False or "partial"


@dataclass(frozen=True)
class StandardInfo:
    """Display description of a token standard"""
    standard: TokenStandard
    name: str
    description: str
    use_cases: List[str] = field(default_factory=list)
    features: List[StandardFeature] = field(default_factory=list)
    pros: List[str] = field(default_factory=list)
    cons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.standard.value,
            "name": self.name,
            "description": self.description,
            "useCases": list(self.use_cases),
            "features": [
                {"name": f.name, "description": f.description, "supported": f.supported}
                for f in self.features
            ],
            "pros": list(self.pros),
            "cons": list(self.cons),
        }


T = MetadataFieldType

_METADATA_FIELDS: Dict[TokenStandard, List[MetadataField]] = {
    TokenStandard.ERC20: [
        MetadataField("Description", "description", T.MULTILINE_TEXT,
                      "Token details and use case summary", required=True),
        MetadataField("External URL", "externalUrl", T.TEXT,
                      "Link to project website or documentation"),
        MetadataField("Max Supply", "maxSupply", T.NUMBER,
                      "Maximum number of tokens that will ever exist",
                      required=True, default_value=1000000),
        MetadataField("Is Transferable", "isTransferable", T.BOOLEAN,
                      "Whether the token can be transferred between addresses",
                      default_value=True),
    ],
    TokenStandard.ERC721: [
        MetadataField("Collection Name", "collectionName", T.TEXT,
                      "Name of the NFT collection", required=True),
        MetadataField("Description", "description", T.MULTILINE_TEXT,
                      "Description of the NFT collection", required=True),
        MetadataField("Base URI", "baseUri", T.TEXT,
                      "Base URI for token metadata"),
        MetadataField("Royalty Percentage", "royalties", T.NUMBER,
                      "Percentage of secondary sales that goes to creator",
                      default_value=0),
    ],
    TokenStandard.ERC1155: [
        MetadataField("Collection Name", "collectionName", T.TEXT,
                      "Name of the multi-token collection", required=True),
        MetadataField("Description", "description", T.MULTILINE_TEXT,
                      "Description of the multi-token collection", required=True),
        MetadataField("Base URI", "baseUri", T.TEXT,
                      "Base URI for token metadata"),
        MetadataField("Supports Batch Transfers", "supportsBatchTransfers", T.BOOLEAN,
                      "Whether batch transfers are enabled", default_value=True),
    ],
    TokenStandard.ERC1400: [
        MetadataField("Security Type", "securityType", T.TEXT,
                      "Type of security token (e.g., equity, debt, real estate)",
                      required=True),
        MetadataField("Issuer Name", "issuerName", T.TEXT,
                      "Legal entity issuing the security token", required=True),
        MetadataField("Compliance Requirements", "complianceRequirements", T.MULTILINE_TEXT,
                      "Regulatory requirements for token holders"),
        MetadataField("KYC Required", "kycRequired", T.BOOLEAN,
                      "Whether KYC verification is required for token holders",
                      default_value=True),
    ],
    TokenStandard.ERC3525: [
        MetadataField("Slot Description", "slotDescription", T.MULTILINE_TEXT,
                      "Description of what the slot represents", required=True),
        MetadataField("Value Unit", "valueUnit", T.TEXT,
                      "Unit of measurement for token values (e.g., shares, credits)",
                      required=True),
        MetadataField("Allows Value Transfer", "allowsValueTransfer", T.BOOLEAN,
                      "Whether value can be transferred between tokens in the same slot",
                      default_value=True),
    ],
    TokenStandard.ERC4626: [
        MetadataField("Underlying Asset", "underlyingAsset", T.TEXT,
                      "Token address of the asset held in the vault", required=True),
        MetadataField("Yield Strategy", "yieldStrategy", T.MULTILINE_TEXT,
                      "Description of how yield is generated", required=True),
        MetadataField("Management Fee", "managementFee", T.NUMBER,
                      "Annual fee percentage for vault management", default_value=0),
        MetadataField("Performance Fee", "performanceFee", T.NUMBER,
                      "Percentage of profits taken as performance fee", default_value=0),
    ],
}

# Feature toggles every block carries regardless of standard
COMMON_FEATURE_FLAGS: Dict[str, bool] = {
    "mintable": True,
    "burnable": False,
    "pausable": False,
    "transferRestrictions": False,
}

_BLOCK_PROPERTIES: Dict[TokenStandard, Dict[str, Any]] = {
    TokenStandard.ERC20: {},
    TokenStandard.ERC721: {
        "imageUrl": "",
        "customUri": "",
        "attributes": {},
        "transferable": True,
    },
    TokenStandard.ERC1155: {
        "tokens": [
            {
                "type": ERC1155TokenType.FUNGIBLE.value,
                "name": "",
                "amount": 0,
                "maxSupply": 0,
                "uri": "",
                "burnable": False,
                "transferable": True,
            }
        ],
    },
    TokenStandard.ERC1400: {
        "restrictedJurisdictions": [],
        "whitelistRequirements": "",
        "issuanceDate": "",
        "maturityDate": "",
        "transferRestrictions": True,
        "lockupPeriods": False,
        "complianceModules": False,
    },
    TokenStandard.ERC3525: {
        "slot": 0,
        "value": 0,
        "interestRate": 0,
        "splitMergeEnabled": False,
        "redeemableValue": False,
        "expiration": False,
    },
    TokenStandard.ERC4626: {
        "asset": "",
        "totalAssets": 0,
        "depositEnabled": True,
        "withdrawEnabled": True,
        "convertToSharesEnabled": True,
        "convertToAssetsEnabled": True,
        "maxWithdrawEnabled": True,
    },
}

# Offered by the ERC1400 editor's "Select All"
SANCTIONED_JURISDICTIONS: List[str] = [
    "Cuba",
    "North Korea",
    "Russia",
    "Donetsk (Ukraine)",
    "Belarus",
    "Venezuela",
    "Democratic Republic of the Congo",
    "Lebanon",
    "Somalia",
    "Yemen",
    "Iran",
    "Syria",
    "Crimea (Ukraine)",
    "Luhansk (Ukraine)",
    "Myanmar (Burma)",
    "Zimbabwe",
    "Iraq",
    "Libya",
    "Sudan",
]


def _as_standard(standard: Any) -> Optional[TokenStandard]:
    try:
        return TokenStandard(standard)
    except (TypeError, ValueError):
        return None


def default_metadata_fields(standard: Any) -> List[MetadataField]:
    """Editor fields for a standard, in display order.

    Anything that is not one of the enumerated standards yields an empty
    list rather than an error.
    """
    resolved = _as_standard(standard)
    if resolved is None:
        return []
    return list(_METADATA_FIELDS.get(resolved, []))


def default_block_metadata(standard: Any) -> Dict[str, Any]:
    """Initial metadata mapping for a newly created block"""
    resolved = _as_standard(standard)
    if resolved is None:
        return {}
    metadata: Dict[str, Any] = dict(COMMON_FEATURE_FLAGS)
    metadata.update(deepcopy(_BLOCK_PROPERTIES[resolved]))
    for meta_field in _METADATA_FIELDS[resolved]:
        metadata.setdefault(meta_field.key, meta_field.default_value)
    return metadata


_STANDARDS: Dict[TokenStandard, StandardInfo] = {
    TokenStandard.ERC20: StandardInfo(
        standard=TokenStandard.ERC20,
        name="ERC20 - Fungible Token",
        description=(
            "The most common token standard for fungible assets, where each "
            "token is identical and has the same value."
        ),
        use_cases=[
            "Cryptocurrencies",
            "Utility tokens",
            "Governance tokens",
            "Stablecoins",
            "Reward points",
        ],
        features=[
            StandardFeature("Fungibility", "All tokens are identical and interchangeable", True),
            StandardFeature("Divisibility", "Can be divided into smaller units (e.g., 0.01 tokens)", True),
            StandardFeature("Metadata", "Support for rich metadata and attributes", False),
            StandardFeature("Batch Transfers", "Transfer multiple tokens in a single transaction", False),
        ],
        pros=[
            "Widely adopted and supported by most wallets and exchanges",
            "Simple implementation with low gas costs",
            "Well-suited for financial applications",
        ],
        cons=[
            "Limited metadata capabilities",
            "No built-in support for batch operations",
            "Cannot represent unique items",
        ],
    ),
    TokenStandard.ERC721: StandardInfo(
        standard=TokenStandard.ERC721,
        name="ERC721 - Non-Fungible Token",
        description=(
            "The standard for non-fungible tokens (NFTs), where each token is "
            "unique and has distinct properties."
        ),
        use_cases=[
            "Digital art and collectibles",
            "Virtual real estate",
            "Gaming items",
            "Certificates and licenses",
            "Identity verification",
        ],
        features=[
            StandardFeature("Uniqueness", "Each token has a unique ID and properties", True),
            StandardFeature("Metadata", "Rich metadata support via tokenURI", True),
            StandardFeature("Ownership", "Clear ownership tracking per token ID", True),
            StandardFeature("Divisibility", "Can be divided into smaller units", False),
        ],
        pros=[
            "Perfect for representing unique digital assets",
            "Rich metadata support for detailed asset information",
            "Growing ecosystem support in marketplaces",
        ],
        cons=[
            "Higher gas costs than ERC20",
            "Not suitable for fungible assets",
            "Limited batch operation support in the base standard",
        ],
    ),
    TokenStandard.ERC1155: StandardInfo(
        standard=TokenStandard.ERC1155,
        name="ERC1155 - Multi Token",
        description=(
            "A versatile standard that supports both fungible and non-fungible "
            "tokens in a single contract, with batch operations."
        ),
        use_cases=[
            "Gaming (items, currencies, characters)",
            "Mixed asset marketplaces",
            "Complex token ecosystems",
            "Efficient NFT collections",
            "Token bundles",
        ],
        features=[
            StandardFeature("Multi-token Support", "Can represent both fungible and non-fungible tokens", True),
            StandardFeature("Batch Operations", "Transfer multiple tokens in a single transaction", True),
            StandardFeature("Gas Efficiency", "More efficient than separate ERC20/ERC721 contracts", True),
            StandardFeature("Metadata", "Support for rich metadata and attributes", True),
        ],
        pros=[
            "Highly versatile for complex token ecosystems",
            "Gas efficient with batch operations",
            "Simplifies management of multiple token types",
        ],
        cons=[
            "More complex implementation than ERC20 or ERC721",
            "Less specialized than dedicated standards",
            "Newer standard with evolving ecosystem support",
        ],
    ),
    TokenStandard.ERC1400: StandardInfo(
        standard=TokenStandard.ERC1400,
        name="ERC1400 - Security Token",
        description=(
            "A comprehensive standard for security tokens with built-in "
            "compliance and regulatory features."
        ),
        use_cases=[
            "Security tokens",
            "Regulated financial instruments",
            "Equity tokens",
            "Debt tokens",
            "Real estate tokens",
        ],
        features=[
            StandardFeature("Compliance Controls", "Built-in KYC/AML and regulatory compliance", True),
            StandardFeature("Transfer Restrictions", "Ability to restrict transfers based on rules", True),
            StandardFeature("Partitioned Balances", "Support for different classes of tokens", True),
            StandardFeature("Document Management", "Link legal documents to token issuance", True),
        ],
        pros=[
            "Comprehensive compliance features for regulated assets",
            "Supports complex financial instruments",
            "Built-in regulatory controls",
        ],
        cons=[
            "Complex implementation with higher gas costs",
            "Specialized use cases with less general adoption",
            "Requires ongoing compliance management",
        ],
    ),
    TokenStandard.ERC3525: StandardInfo(
        standard=TokenStandard.ERC3525,
        name="ERC3525 - Semi-Fungible Token",
        description=(
            "A hybrid standard for semi-fungible tokens that combines aspects of "
            "both ERC20 and ERC721, with value and slot concepts."
        ),
        use_cases=[
            "Time-bound assets (tickets, reservations)",
            "Partially fungible collectibles",
            "Tokenized credit and loans",
            "Fractionalized real assets",
            "Graduated ownership rights",
        ],
        features=[
            StandardFeature("Slot Categorization", "Group tokens by shared attributes (slots)", True),
            StandardFeature("Value Quantification", "Assign numerical values to tokens", True),
            StandardFeature("Value Transfer", "Transfer value between tokens in the same slot", True),
            StandardFeature("Approval Delegation", "Delegate approval for specific values", True),
        ],
        pros=[
            "Flexible for assets with both unique and fungible properties",
            "Efficient value transfers within categories",
            "Good for representing complex real-world assets",
        ],
        cons=[
            "Newer standard with limited ecosystem support",
            "More complex than pure ERC20 or ERC721",
            "Specialized use cases",
        ],
    ),
    TokenStandard.ERC4626: StandardInfo(
        standard=TokenStandard.ERC4626,
        name="ERC4626 - Tokenized Vault Standard",
        description=(
            "A standard for yield-bearing vaults that tokenize strategies for "
            "lending, staking, and other DeFi applications."
        ),
        use_cases=[
            "Yield-bearing tokens",
            "Automated investment strategies",
            "Lending protocols",
            "Staking pools",
            "Treasury management",
        ],
        features=[
            StandardFeature("Standardized Vault API", "Consistent interface for deposit/withdrawal", True),
            StandardFeature("Asset/Share Accounting", "Automatic conversion between assets and shares", True),
            StandardFeature("Yield Distribution", "Built-in mechanism for yield accrual", True),
            StandardFeature("Composability", "Easy integration with other DeFi protocols", True),
        ],
        pros=[
            "Standardized interface for yield-bearing tokens",
            "Improves interoperability between DeFi protocols",
            "Simplifies integration of yield strategies",
        ],
        cons=[
            "Specialized for yield-bearing applications",
            "Newer standard with growing ecosystem support",
            "More complex than basic token standards",
        ],
    ),
}


def standard_info(standard: Any) -> Optional[StandardInfo]:
    resolved = _as_standard(standard)
    if resolved is None:
        return None
    return _STANDARDS[resolved]


def list_standards() -> List[StandardInfo]:
    return [_STANDARDS[s] for s in TokenStandard]
