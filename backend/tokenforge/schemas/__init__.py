"""Request, response and domain schemas"""
from tokenforge.schemas.token import (
    ERC1155TokenType,
    TokenBlock,
    TokenFormData,
    TokenStandard,
    TokenStatus,
)
from tokenforge.schemas.metadata import parse_metadata

__all__ = [
    "ERC1155TokenType",
    "TokenBlock",
    "TokenFormData",
    "TokenStandard",
    "TokenStatus",
    "parse_metadata",
]
