"""Token configuration schemas

Wire format is the camelCase JSON exchanged with the UI and the
import/export files; attributes are snake_case.
"""
import math
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class TokenStandard(str, Enum):
    """Supported token standards"""
    ERC20 = "ERC20"
    ERC721 = "ERC721"
    ERC1155 = "ERC1155"
    ERC1400 = "ERC1400"
    ERC3525 = "ERC3525"
    ERC4626 = "ERC4626"


class TokenStatus(str, Enum):
    """Lifecycle status of a token configuration"""
    DRAFT = "DRAFT"
    PENDING_REVIEW = "PENDING_REVIEW"
    APPROVED = "APPROVED"
    PAUSED = "PAUSED"


class ERC1155TokenType(str, Enum):
    """Kinds of sub-token inside an ERC1155 collection"""
    FUNGIBLE = "Fungible"
    SEMI_FUNGIBLE = "Semi-Fungible"
    NON_FUNGIBLE = "Non-Fungible"


def _require_number(value: Any) -> Any:
    # bool is an int subclass but never a valid amount; NaN and infinities are not numbers either
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise PydanticCustomError("not_a_number", "Value must be a number")
    return value


def _non_negative(value: Union[int, float]) -> Union[int, float]:
    if value < 0:
        raise PydanticCustomError("negative_amount", "Value must not be negative")
    return value


def _positive(value: Union[int, float]) -> Union[int, float]:
    if value <= 0:
        raise PydanticCustomError("non_positive_amount", "Value must be greater than zero")
    return value


# Ints stay ints and floats stay floats so an exported file reads back unchanged
Amount = Annotated[Union[int, float], BeforeValidator(_require_number), AfterValidator(_non_negative)]
Ratio = Annotated[Union[int, float], BeforeValidator(_require_number), AfterValidator(_positive)]


class CamelModel(BaseModel):
    """Base for models serialized with camelCase keys"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TokenBlock(CamelModel):
    """One configured token definition"""
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    symbol: str = Field(min_length=1, max_length=10)
    standard: TokenStandard
    decimals: int = Field(ge=0, le=18, strict=True)
    total_supply: Amount
    owner_address: Optional[str] = None
    ratio_to_first_block: Optional[Ratio] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    contract_preview: Optional[str] = None  # derived, see contract_templates


class TokenFormData(CamelModel):
    """A complete token configuration: one or more blocks plus review state"""
    name: str = Field(min_length=1)
    symbol: str = Field(min_length=1, max_length=10)
    decimals: int = Field(ge=0, le=18, strict=True)
    standard: TokenStandard
    blocks: List[TokenBlock] = Field(min_length=1)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    status: TokenStatus = TokenStatus.DRAFT
    reviewers: Optional[List[str]] = None
    approvals: Optional[List[str]] = None
    contract_preview: Optional[str] = None

    @property
    def primary_block(self) -> TokenBlock:
        return self.blocks[0]

    def block_index(self, block_id: str) -> int:
        for index, block in enumerate(self.blocks):
            if block.id == block_id:
                return index
        raise KeyError(block_id)


class ContractPreviewResponse(BaseModel):
    contract_name: str
    standard: TokenStandard
    source: str


class ValidationResponse(BaseModel):
    valid: bool
    errors: Dict[str, str] = Field(default_factory=dict)


class StatusChangeRequest(BaseModel):
    status: TokenStatus


class ApprovalRequest(BaseModel):
    approver: str = Field(min_length=1)


class StatusAction(BaseModel):
    status: TokenStatus
    label: str
    description: str


class TokenStatusResponse(BaseModel):
    token_id: int
    status: TokenStatus
    next_statuses: List[StatusAction]
    approvals: List[str]
    approval_count: int
    required_approvals: int
    approval_progress: str  # "count/required"
    quorum_met: bool
