"""
Validation Schema

Structural checks for token blocks and full token configurations. Results
are reported per field and never raised, so the caller can show every
problem inline and keep submission disabled until the mapping is empty.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, ValidationError

from tokenforge.schemas.token import TokenBlock, TokenFormData

# (field name, pydantic error type) -> message shown next to the field
FIELD_MESSAGES: Dict[Tuple[str, str], str] = {
    ("id", "missing"): "ID is required",
    ("id", "string_too_short"): "ID is required",
    ("name", "missing"): "Token name is required",
    ("name", "string_too_short"): "Token name is required",
    ("symbol", "missing"): "Token symbol is required",
    ("symbol", "string_too_short"): "Token symbol is required",
    ("symbol", "string_too_long"): "Symbol should be 10 characters or less",
    ("standard", "missing"): "Token standard is required",
    ("standard", "enum"): "Token standard must be one of ERC20, ERC721, ERC1155, ERC1400, ERC3525, ERC4626",
    ("decimals", "missing"): "Decimals are required",
    ("decimals", "int_type"): "Decimals must be a whole number",
    ("decimals", "greater_than_equal"): "Decimals must be between 0 and 18",
    ("decimals", "less_than_equal"): "Decimals must be between 0 and 18",
    ("totalSupply", "missing"): "Total supply is required",
    ("totalSupply", "not_a_number"): "Total supply must be a number",
    ("totalSupply", "negative_amount"): "Total supply must be a positive number",
    ("ratioToFirstBlock", "not_a_number"): "Ratio must be a number",
    ("ratioToFirstBlock", "non_positive_amount"): "Ratio must be greater than zero",
    ("blocks", "missing"): "At least one token block is required",
    ("blocks", "too_short"): "At least one token block is required",
    ("status", "enum"): "Status must be one of DRAFT, PENDING_REVIEW, APPROVED, PAUSED",
}

RATIO_REQUIRED_MESSAGE = "Ratio to the first block is required for additional blocks"
FIRST_BLOCK_RATIO_MESSAGE = "The first block's ratio is fixed at 1"


@dataclass
class ValidationResult:
    """Outcome of a validation pass.

    ``errors`` maps a dotted field path (``symbol``, ``blocks.1.decimals``)
    to a message. ``value`` holds the parsed model when there are no errors.
    """
    errors: Dict[str, str] = field(default_factory=dict)
    value: Optional[BaseModel] = None

    @property
    def valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.valid


def _path(loc: Tuple[Union[str, int], ...]) -> str:
    return ".".join(str(part) for part in loc)


def _message(loc: Tuple[Union[str, int], ...], error_type: str, default: str) -> str:
    # last named segment is the field the message is about
    name = next((part for part in reversed(loc) if isinstance(part, str)), "")
    return FIELD_MESSAGES.get((name, error_type), default)


def _collect(exc: ValidationError) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for err in exc.errors():
        loc = tuple(err["loc"])
        if not loc:
            errors.setdefault("__root__", "Configuration must be an object")
            continue
        # first error per field wins
        errors.setdefault(_path(loc), _message(loc, err["type"], err["msg"]))
    return errors


def _as_data(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    return value


def _run(model: Type[BaseModel], data: Any) -> ValidationResult:
    try:
        parsed = model.model_validate(_as_data(data))
    except ValidationError as e:
        return ValidationResult(errors=_collect(e))
    return ValidationResult(value=parsed)


def _block_ratio_errors(blocks: Any) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if not isinstance(blocks, list):
        return errors
    for index, block in enumerate(blocks):
        if not isinstance(block, Mapping):
            continue
        ratio = block.get("ratioToFirstBlock", block.get("ratio_to_first_block"))
        path = f"blocks.{index}.ratioToFirstBlock"
        if index == 0:
            if ratio is not None and ratio != 1:
                errors[path] = FIRST_BLOCK_RATIO_MESSAGE
        elif ratio is None:
            errors[path] = RATIO_REQUIRED_MESSAGE
    return errors


def validate_block(block: Any) -> ValidationResult:
    """Check a single token block"""
    return _run(TokenBlock, block)


def validate_form(form: Any) -> ValidationResult:
    """Check a full token configuration, including the multi-block ratio rule"""
    data = _as_data(form)
    result = _run(TokenFormData, data)
    if isinstance(data, Mapping):
        for path, message in _block_ratio_errors(data.get("blocks")).items():
            result.errors.setdefault(path, message)
    if result.errors:
        result.value = None
    return result


def validate(block_or_form: Any) -> ValidationResult:
    """Validate a block or a configuration; anything with ``blocks`` is a configuration"""
    if isinstance(block_or_form, TokenFormData):
        return validate_form(block_or_form)
    if isinstance(block_or_form, Mapping) and "blocks" in block_or_form:
        return validate_form(block_or_form)
    return validate_block(block_or_form)
