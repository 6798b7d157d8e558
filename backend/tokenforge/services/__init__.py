"""TokenForge Backend Services"""
from .catalog import default_block_metadata, default_metadata_fields, list_standards, standard_info
from .contract_templates import UnsupportedStandardError, generate_contract
from .status_transitions import IllegalStatusTransitionError, next_states, record_approval, transition
from .token_io import MalformedImportError, export_configuration, import_configuration
from .validation import ValidationResult, validate

__all__ = [
    # Catalog
    "default_block_metadata",
    "default_metadata_fields",
    "list_standards",
    "standard_info",
    # Contract templates
    "generate_contract",
    "UnsupportedStandardError",
    # Validation
    "validate",
    "ValidationResult",
    # Status workflow
    "next_states",
    "record_approval",
    "transition",
    "IllegalStatusTransitionError",
    # Import / export
    "export_configuration",
    "import_configuration",
    "MalformedImportError",
]
