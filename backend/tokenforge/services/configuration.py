"""
Configuration editing

Block lifecycle for a token configuration: creating blocks with per-standard
defaults, editing them, removing any block but the first, and keeping the
derived fields (contract previews and the aggregate's copy of the first
block's identity) in step. Every function returns a new form.
"""
import uuid
from typing import Any, List, Optional

import structlog

from tokenforge.schemas.token import TokenBlock, TokenFormData, TokenStandard, TokenStatus
from tokenforge.services.catalog import default_block_metadata
from tokenforge.services.contract_templates import UnsupportedStandardError, generate_contract

logger = structlog.get_logger()

DEFAULT_BLOCK_NAME = "My Token"
DEFAULT_BLOCK_SYMBOL = "MTK"
DEFAULT_DECIMALS = 18
DEFAULT_TOTAL_SUPPLY = 1000000


class BlockLifecycleError(ValueError):
    """Raised for edits the block lifecycle does not allow"""


def new_block(standard: TokenStandard = TokenStandard.ERC20, **overrides: Any) -> TokenBlock:
    """A fresh block with the defaults for its standard"""
    standard = TokenStandard(standard)
    fields = {
        "id": str(uuid.uuid4()),
        "name": DEFAULT_BLOCK_NAME,
        "symbol": DEFAULT_BLOCK_SYMBOL,
        "standard": standard,
        "decimals": DEFAULT_DECIMALS,
        "total_supply": DEFAULT_TOTAL_SUPPLY,
        "metadata": default_block_metadata(standard),
    }
    fields.update(overrides)
    block = TokenBlock(**fields)
    return block.model_copy(update={"contract_preview": generate_contract(block)})


def new_form(standard: TokenStandard = TokenStandard.ERC20) -> TokenFormData:
    """An empty DRAFT configuration holding one default block"""
    block = new_block(standard)
    form = TokenFormData(
        name=block.name,
        symbol=block.symbol,
        decimals=block.decimals,
        standard=block.standard,
        blocks=[block],
        status=TokenStatus.DRAFT,
    )
    return sync_shadow_fields(form)


def _preview(block: TokenBlock) -> Optional[str]:
    try:
        return generate_contract(block)
    except UnsupportedStandardError:
        # keep the last good preview
        logger.error("Contract preview not regenerated", block_id=block.id)
        return block.contract_preview


def sync_shadow_fields(form: TokenFormData) -> TokenFormData:
    """Copy the first block's identity and preview onto the aggregate"""
    primary = form.primary_block
    return form.model_copy(update={
        "name": primary.name,
        "symbol": primary.symbol,
        "decimals": primary.decimals,
        "standard": primary.standard,
        "contract_preview": primary.contract_preview,
    })


def refresh_previews(form: TokenFormData) -> TokenFormData:
    """Regenerate every block's contract preview and the aggregate's"""
    blocks = [
        block.model_copy(update={"contract_preview": _preview(block)})
        for block in form.blocks
    ]
    return sync_shadow_fields(form.model_copy(update={"blocks": blocks}))


def add_block(form: TokenFormData, standard: TokenStandard = TokenStandard.ERC20, **overrides: Any) -> TokenFormData:
    """Append a block; additional blocks start pegged 1:1 to the first"""
    overrides.setdefault("ratio_to_first_block", 1.0)
    block = new_block(standard, **overrides)
    logger.info("Token block added", block_id=block.id, standard=block.standard.value)
    return form.model_copy(update={"blocks": [*form.blocks, block]})


def update_block(form: TokenFormData, block_id: str, **changes: Any) -> TokenFormData:
    """Apply field changes to one block and regenerate the derived fields"""
    index = _index_of(form, block_id)
    if "id" in changes and changes["id"] != block_id:
        raise BlockLifecycleError("A block's id cannot be reassigned")
    if index == 0 and changes.get("ratio_to_first_block") not in (None, 1):
        raise BlockLifecycleError("The first block's ratio is fixed at 1")

    current = form.blocks[index]
    # re-validate so edits obey the same constraints as a fresh block
    updated = TokenBlock(**{**current.model_dump(), **changes})
    updated = updated.model_copy(update={"contract_preview": _preview(updated)})

    blocks: List[TokenBlock] = list(form.blocks)
    blocks[index] = updated
    result = form.model_copy(update={"blocks": blocks})
    return sync_shadow_fields(result) if index == 0 else result


def remove_block(form: TokenFormData, block_id: str) -> TokenFormData:
    """Delete a block; the first block can never be removed"""
    index = _index_of(form, block_id)
    if index == 0:
        raise BlockLifecycleError("The first token block cannot be removed")
    blocks = [block for i, block in enumerate(form.blocks) if i != index]
    logger.info("Token block removed", block_id=block_id)
    return form.model_copy(update={"blocks": blocks})


def replace_blocks(form: TokenFormData, blocks: List[TokenBlock]) -> TokenFormData:
    """Swap in an edited block list.

    The first block keeps its id and position, and ids stay unique. Any other
    stored block missing from ``blocks`` counts as removed, and any unknown
    id counts as added.
    """
    if not blocks or blocks[0].id != form.primary_block.id:
        raise BlockLifecycleError("The first token block cannot be removed or replaced")
    ids = [block.id for block in blocks]
    if len(set(ids)) != len(ids):
        raise BlockLifecycleError("Token block ids must be unique")

    kept = set(ids)
    for block in form.blocks[1:]:
        if block.id not in kept:
            logger.info("Token block removed", block_id=block.id)
    return refresh_previews(form.model_copy(update={"blocks": list(blocks)}))


def _index_of(form: TokenFormData, block_id: str) -> int:
    try:
        return form.block_index(block_id)
    except KeyError:
        raise BlockLifecycleError(f"No block with id {block_id!r}") from None
