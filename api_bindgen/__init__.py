"""API Bindgen - typed host-object bindings from API schema documents.

Reads JSON schema descriptions of a host API (modules, classes, structures,
their events, properties and methods) and generates statically typed
bindings for them, one declaration set per schema file.
"""

__version__ = "0.1.0"

from .logging_config import get_logger, setup_logging
from .utils import discover_schema_files, load_json, load_schema

__all__ = [
    "__version__",
    "discover_schema_files",
    "get_logger",
    "load_json",
    "load_schema",
    "setup_logging",
]
