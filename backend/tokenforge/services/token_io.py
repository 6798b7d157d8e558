"""
Import / export of token configurations as JSON documents
"""
import json
from typing import Any, Dict, Optional, Union

import structlog

from tokenforge.schemas.token import TokenFormData
from tokenforge.services.configuration import refresh_previews
from tokenforge.services.validation import validate_form

logger = structlog.get_logger()


class MalformedImportError(ValueError):
    """Raised when an imported document cannot be read as a token configuration.

    ``errors`` carries the per-field problems when the document parsed as
    JSON but did not have the expected shape.
    """

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        self.errors = errors or {}
        super().__init__(message)


_OPTIONAL_FORM_KEYS = ("reviewers", "approvals", "contractPreview")
_OPTIONAL_BLOCK_KEYS = ("ownerAddress", "ratioToFirstBlock", "contractPreview")


def _drop_unset(document: Dict[str, Any], keys) -> Dict[str, Any]:
    for key in keys:
        if document.get(key) is None:
            document.pop(key, None)
    return document


def to_document(form: TokenFormData) -> Dict[str, Any]:
    """The export shape of a configuration; absent optional fields are omitted"""
    # metadata is copied as-is, including any null values it holds
    document = form.model_dump(mode="json", by_alias=True)
    document["blocks"] = [_drop_unset(block, _OPTIONAL_BLOCK_KEYS) for block in document["blocks"]]
    return _drop_unset(document, _OPTIONAL_FORM_KEYS)


def export_configuration(form: TokenFormData) -> str:
    return json.dumps(to_document(form), indent=2)


def export_filename(form: TokenFormData) -> str:
    return f"{form.name or 'token'}-configuration.json"


def import_configuration(
    content: Union[str, bytes],
    *,
    regenerate_previews: bool = True,
) -> TokenFormData:
    """Read an exported document back into a configuration.

    Either the whole document is accepted or MalformedImportError is raised;
    nothing is partially applied. Contract previews are derived data and are
    regenerated unless ``regenerate_previews`` is False.
    """
    try:
        data = json.loads(content)
    except (TypeError, ValueError) as e:
        logger.warning("Import rejected: not JSON", error=str(e))
        raise MalformedImportError("Invalid configuration file. Please upload a valid JSON file.") from e

    if not isinstance(data, dict):
        logger.warning("Import rejected: not an object", kind=type(data).__name__)
        raise MalformedImportError("Invalid configuration file. Expected a JSON object.")

    result = validate_form(data)
    if not result.valid:
        logger.warning("Import rejected: invalid configuration", fields=sorted(result.errors))
        raise MalformedImportError(
            "Invalid configuration file. The token configuration is incomplete or malformed.",
            errors=result.errors,
        )

    form: TokenFormData = result.value
    if regenerate_previews:
        form = refresh_previews(form)
    return form
