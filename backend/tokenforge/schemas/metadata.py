"""Typed views over the standard-dependent block metadata

Block metadata is stored as an open mapping. These models give each standard
its known fields while keeping every unknown key, so files written by newer
clients survive a load/save cycle.
"""
from typing import Any, Dict, List, Mapping, Optional, Type, Union

import structlog
from pydantic import Field, ValidationError

from tokenforge.schemas.token import CamelModel, ERC1155TokenType, TokenStandard

logger = structlog.get_logger()


class StandardMetadata(CamelModel):
    """Fields shared by every standard"""
    description: str = ""
    mintable: bool = False
    burnable: bool = False
    pausable: bool = False
    transfer_restrictions: bool = False

    class Config:
        extra = "allow"

    @property
    def extensions(self) -> Dict[str, Any]:
        """Keys this standard does not know about"""
        return dict(self.model_extra or {})


class ERC20Metadata(StandardMetadata):
    external_url: str = ""
    max_supply: Optional[float] = None
    is_transferable: bool = True


class ERC721Metadata(StandardMetadata):
    collection_name: str = ""
    image_url: str = ""
    base_uri: str = ""
    custom_uri: str = ""
    royalties: float = 0
    transferable: bool = True
    attributes: Dict[str, Any] = Field(default_factory=dict)


class ERC1155SubToken(CamelModel):
    """One token type inside an ERC1155 collection"""
    id: Optional[str] = None
    type: ERC1155TokenType = ERC1155TokenType.FUNGIBLE
    name: str = ""
    amount: int = 0
    max_supply: int = 0
    uri: str = ""
    burnable: bool = False
    transferable: bool = True

    class Config:
        extra = "allow"


class ERC1155Metadata(StandardMetadata):
    collection_name: str = ""
    base_uri: str = ""
    supports_batch_transfers: bool = True
    tokens: List[ERC1155SubToken] = Field(default_factory=list)


class ERC1400Metadata(StandardMetadata):
    transfer_restrictions: bool = True
    security_type: str = ""
    issuer_name: str = ""
    compliance_requirements: str = ""
    kyc_required: bool = True
    restricted_jurisdictions: List[str] = Field(default_factory=list)
    whitelist_requirements: str = ""
    issuance_date: Optional[str] = None
    maturity_date: Optional[str] = None
    lockup_periods: bool = False
    compliance_modules: bool = False


class ERC3525Metadata(StandardMetadata):
    slot_description: str = ""
    value_unit: str = ""
    allows_value_transfer: bool = True
    token_id: Optional[int] = None
    slot: Optional[int] = None
    value: Optional[float] = None
    interest_rate: Optional[float] = None
    split_merge_enabled: bool = False
    redeemable_value: bool = False
    expiration: bool = False


class ERC4626Metadata(StandardMetadata):
    asset: str = ""
    underlying_asset: str = ""
    yield_strategy: str = ""
    management_fee: float = 0
    performance_fee: float = 0
    total_assets: float = 0
    deposit_enabled: bool = False
    withdraw_enabled: bool = False
    convert_to_shares_enabled: bool = False
    convert_to_assets_enabled: bool = False
    max_withdraw_enabled: bool = False


AnyMetadata = Union[
    ERC20Metadata,
    ERC721Metadata,
    ERC1155Metadata,
    ERC1400Metadata,
    ERC3525Metadata,
    ERC4626Metadata,
]

METADATA_MODELS: Dict[TokenStandard, Type[StandardMetadata]] = {
    TokenStandard.ERC20: ERC20Metadata,
    TokenStandard.ERC721: ERC721Metadata,
    TokenStandard.ERC1155: ERC1155Metadata,
    TokenStandard.ERC1400: ERC1400Metadata,
    TokenStandard.ERC3525: ERC3525Metadata,
    TokenStandard.ERC4626: ERC4626Metadata,
}


def parse_metadata(standard: TokenStandard, metadata: Optional[Mapping[str, Any]]) -> AnyMetadata:
    """Read a block's metadata mapping as the variant for its standard.

    Metadata is not schema-validated: a known key holding a value of the
    wrong shape is dropped and its default used instead, and the rest of
    the mapping is kept.
    """
    standard = TokenStandard(standard)
    model = METADATA_MODELS[standard]
    # partial blocks may carry anything here; only a mapping is read
    data = dict(metadata) if isinstance(metadata, Mapping) else {}
    try:
        return model.model_validate(data)
    except ValidationError as e:
        bad_keys = {err["loc"][0] for err in e.errors() if err["loc"]}
        # errors are reported by alias; drop the snake_case spelling too
        bad_keys |= {
            name for name, field in model.model_fields.items() if field.alias in bad_keys
        }
        logger.warning(
            "Ignoring malformed metadata fields",
            standard=standard.value,
            fields=sorted(str(k) for k in bad_keys),
        )
        cleaned = {k: v for k, v in data.items() if k not in bad_keys}
        return model.model_validate(cleaned)
