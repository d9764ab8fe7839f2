# ==============================================================================
# UTILITIES PACKAGE
# ==============================================================================

from crud_template.utils.helpers import (
    build_identifier_filter,
    build_set_document,
    generate_request_id,
    identifier_key,
    serialize_document,
)

__all__ = [
    "build_identifier_filter",
    "build_set_document",
    "generate_request_id",
    "identifier_key",
    "serialize_document",
]
