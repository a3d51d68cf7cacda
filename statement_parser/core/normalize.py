"""
Value normalization and result assembly.
"""
import re
from typing import Mapping, Optional
import logging

from ..models.schema import (
    AMOUNT_FIELDS, NOT_FOUND, OUTPUT_FIELDS, ExtractionResult, FieldSpec, IssuerMatch
)

logger = logging.getLogger(__name__)


def normalize_amount(value: str) -> str:
    """
    Strip thousands separators from an amount.

    No rounding or reformatting: "12,345.67" becomes "12345.67".
    """
    return value.strip().replace(',', '')


def normalize_fields(raw_fields: Mapping[str, Optional[str]]) -> dict:
    """Apply per-field normalization, leaving absent fields as None."""
    normalized = {}
    for name, value in raw_fields.items():
        if value is not None and name in AMOUNT_FIELDS:
            value = normalize_amount(value)
        elif value is not None and name == "last4Digits" and not re.fullmatch(r'\d{4}', value):
            logger.warning(f"Discarding last4Digits value '{value}', expected exactly 4 digits")
            value = None
        normalized[name] = value
    return normalized


def confidence_score(fields: Mapping[str, Optional[str]], field_spec: FieldSpec) -> str:
    """
    Summarize extraction completeness as "k/n fields found".

    n is the number of configured fields; the issuer is not counted.
    """
    found = sum(1 for name in field_spec.names if fields.get(name) is not None)
    return f"{found}/{len(field_spec)} fields found"


def finalize(raw_fields: Mapping[str, Optional[str]], issuer_match: IssuerMatch,
             field_spec: FieldSpec) -> ExtractionResult:
    """
    Normalize extracted values and build the result.

    Args:
        raw_fields: Field name to raw value, None when not found
        issuer_match: Outcome of issuer detection
        field_spec: Configured fields, the confidence denominator

    Returns:
        ExtractionResult, with "N/A" for every field not found
    """
    fields = normalize_fields(raw_fields)
    confidence = confidence_score(fields, field_spec)

    values = {
        name: fields[name] if fields.get(name) is not None else NOT_FOUND
        for name in OUTPUT_FIELDS
    }
    logger.info(f"Extraction complete: {confidence}")

    return ExtractionResult(
        issuer=issuer_match.issuer,
        assetRef=issuer_match.asset_ref,
        confidence=confidence,
        **values
    )
