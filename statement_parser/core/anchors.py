"""
Keyword-anchored field extraction.

A field is found in two steps: locate lines carrying one of the field's
anchor keywords, then match the field's value pattern on that line. The first
line (in document order) that yields a value wins.
"""
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple
import logging

from ..models.schema import FieldRule, FieldSpec

logger = logging.getLogger(__name__)


class AnchorMatch:
    """A line carrying one of a field's anchor keywords."""
    def __init__(self, line_no: int, line: str, keyword: str):
        self.line_no = line_no
        self.line = line
        self.keyword = keyword

    def __repr__(self):
        return f"AnchorMatch('{self.keyword}', line_no={self.line_no}, line='{self.line}')"


def split_lines(text: str) -> List[str]:
    """Split document text into stripped, non-empty lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def find_anchor_lines(lines: Sequence[str], keywords: Iterable[str]) -> Iterator[AnchorMatch]:
    """
    Yield every (line, keyword) pair where the keyword occurs in the line.

    Lines are visited in document order and, within a line, keywords in
    their configured order. Matching is case-insensitive.

    Args:
        lines: Document lines
        keywords: Lower-case anchor phrases

    Yields:
        AnchorMatch objects
    """
    keywords = tuple(keywords)
    for line_no, line in enumerate(lines):
        lowered = line.lower()
        for keyword in keywords:
            if keyword in lowered:
                yield AnchorMatch(line_no, line, keyword)


def match_value(line: str, rule: FieldRule) -> Optional[str]:
    """
    Apply a field's value pattern to a single line.

    Args:
        line: Line text, in its original casing
        rule: Field rule providing the pattern and occurrence

    Returns:
        The trimmed value, or None if the pattern does not match
    """
    pattern = rule.pattern
    group = 'value' if 'value' in pattern.groupindex else 0

    if rule.occurrence == 'last':
        matches = list(pattern.finditer(line))
        match = matches[-1] if matches else None
    else:
        match = pattern.search(line)

    if not match or match.group(group) is None:
        return None

    value = match.group(group).strip()
    return value or None


def extract_field(lines: Sequence[str], rule: FieldRule) -> Optional[str]:
    """
    Extract one field from the document lines.

    Args:
        lines: Document lines
        rule: Rule for the field

    Returns:
        Extracted value, or None if no anchored line yields a value
    """
    for anchor in find_anchor_lines(lines, rule.keywords):
        value = match_value(anchor.line, rule)
        if value is not None:
            logger.debug(f"Field '{rule.name}' = '{value}' via '{anchor.keyword}' on line {anchor.line_no}")
            return value
        logger.debug(f"Anchor '{anchor.keyword}' for '{rule.name}' on line {anchor.line_no} has no value")

    logger.debug(f"Field '{rule.name}' not found")
    return None


def extract_fields(lines: Sequence[str], field_spec: FieldSpec) -> Dict[str, Optional[str]]:
    """
    Extract every configured field, independently and in configured order.

    Returns:
        Mapping of field name to value, None for fields not found
    """
    return {rule.name: extract_field(lines, rule) for rule in field_spec}


def anchor_report(lines: Sequence[str], field_spec: FieldSpec) -> List[Tuple[str, AnchorMatch, Optional[str]]]:
    """
    List every anchored line per field with the value it would yield.

    Used by the CLI to explain why a field was or was not found.
    """
    report = []
    for rule in field_spec:
        for anchor in find_anchor_lines(lines, rule.keywords):
            report.append((rule.name, anchor, match_value(anchor.line, rule)))
    return report
