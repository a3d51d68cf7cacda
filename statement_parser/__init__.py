"""
Credit Card Statement Parser

Extracts issuer, card last digits, due date, statement period and amounts
from credit card statement PDFs using keyword-anchored patterns configured
in YAML.
"""

__version__ = "1.0.0"

from .core.runner import StatementParser, parse_statement, parse_text
from .core.detectors import identify_issuer
from .core.anchors import extract_field
from .core.normalize import finalize
from .core.templates import load_config, load_field_spec, load_registry
from .core.exceptions import StatementParserError, DocumentUnreadableError, ConfigurationError
from .models.schema import ExtractionResult, FieldRule, FieldSpec, IssuerEntry, IssuerMatch, IssuerRegistry

__all__ = [
    "StatementParser",
    "parse_statement",
    "parse_text",
    "identify_issuer",
    "extract_field",
    "finalize",
    "load_config",
    "load_field_spec",
    "load_registry",
    "StatementParserError",
    "DocumentUnreadableError",
    "ConfigurationError",
    "ExtractionResult",
    "FieldRule",
    "FieldSpec",
    "IssuerEntry",
    "IssuerMatch",
    "IssuerRegistry"
]
