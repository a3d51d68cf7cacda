"""
End-to-end parsing orchestration.
"""
from typing import Optional
import logging

from .anchors import extract_fields, split_lines
from .detectors import IssuerDetector
from .loader import DocumentSource, load_document_text
from .normalize import finalize
from .templates import default_config
from ..models.schema import ExtractionResult, FieldSpec, IssuerRegistry

logger = logging.getLogger(__name__)


class StatementParser:
    """
    Extracts statement fields from decoded document text.

    Holds only read-only configuration, so one instance can serve concurrent
    callers.
    """

    def __init__(self, registry: Optional[IssuerRegistry] = None,
                 field_spec: Optional[FieldSpec] = None, verbose: bool = False):
        config = default_config() if registry is None or field_spec is None else None
        self.registry = registry if registry is not None else config.registry
        self.field_spec = field_spec if field_spec is not None else config.field_spec
        self.detector = IssuerDetector(self.registry)

        if verbose:
            logging.basicConfig(level=logging.DEBUG)

    def parse_text(self, text: str) -> ExtractionResult:
        """
        Extract all configured fields from statement text.

        Args:
            text: Decoded document text

        Returns:
            ExtractionResult; fields that are not found hold "N/A"
        """
        issuer_match = self.detector.detect(text)
        lines = split_lines(text)
        logger.debug(f"Scanning {len(lines)} lines for {len(self.field_spec)} fields")

        raw_fields = extract_fields(lines, self.field_spec)
        return finalize(raw_fields, issuer_match, self.field_spec)

    def parse(self, source: DocumentSource, password: str = "") -> ExtractionResult:
        """
        Decode a PDF document and extract its fields.

        Args:
            source: Path to a PDF file or its raw bytes
            password: Password for encrypted documents

        Returns:
            ExtractionResult

        Raises:
            DocumentUnreadableError: if the document cannot be decoded
        """
        text = load_document_text(source, password=password)
        return self.parse_text(text)


def parse_text(text: str, verbose: bool = False) -> ExtractionResult:
    """Extract fields from statement text using the bundled configuration."""
    return StatementParser(verbose=verbose).parse_text(text)


def parse_statement(source: DocumentSource, verbose: bool = False) -> ExtractionResult:
    """
    Parse a credit card statement PDF.

    Args:
        source: Path to PDF file or its raw bytes
        verbose: Enable verbose logging

    Returns:
        ExtractionResult object
    """
    parser = StatementParser(verbose=verbose)
    return parser.parse(source)
