"""Microdata to JSON-LD converter and schema.org best-practice validator."""

__version__ = "1.7.1"

from microdata_jsonld.extractor import MicrodataExtractor, strip_schema_prefix
from microdata_jsonld.validator import SchemaValidator, effective_type
from microdata_jsonld.converter import (
    MicrodataConverter,
    render_script_tag,
    sanitize_json,
)
from microdata_jsonld.models import (
    ConversionResult,
    Finding,
    FindingLevel,
)
from microdata_jsonld.rules import SCHEMA_RULES, SchemaRule, get_rule
from microdata_jsonld.config import Config
from microdata_jsonld.exceptions import InvalidJSONError, MicrodataError

__all__ = [
    # Core
    "MicrodataExtractor",
    "SchemaValidator",
    "MicrodataConverter",
    "strip_schema_prefix",
    "effective_type",
    "render_script_tag",
    "sanitize_json",
    # Models
    "ConversionResult",
    "Finding",
    "FindingLevel",
    # Rules
    "SCHEMA_RULES",
    "SchemaRule",
    "get_rule",
    # Configuration
    "Config",
    # Errors
    "MicrodataError",
    "InvalidJSONError",
]
