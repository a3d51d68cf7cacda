"""
Pydantic models for issuer/field configuration and extraction results.
"""
import re
from typing import Iterator, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

NOT_FOUND = "N/A"
UNKNOWN_ISSUER = "Unknown"
DEFAULT_ASSET_REF = "https://via.placeholder.com/150?text=Bank"

# Output fields, keyed by their external (camelCase) names.
OUTPUT_FIELDS = ("totalDue", "minimumDue", "dueDate", "last4Digits", "statementPeriod")
AMOUNT_FIELDS = ("totalDue", "minimumDue")


class IssuerEntry(BaseModel):
    """A known card issuer and the token that identifies it in statement text."""
    model_config = ConfigDict(frozen=True)

    key: str
    display_name: str
    asset_ref: str = DEFAULT_ASSET_REF

    @field_validator('key')
    def normalize_key(cls, v):
        v = v.strip().lower()
        if not v:
            raise ValueError("Issuer key cannot be empty")
        return v


class IssuerRegistry(BaseModel):
    """Ordered issuer entries; earlier entries win when several tokens appear."""
    model_config = ConfigDict(frozen=True)

    entries: Tuple[IssuerEntry, ...]
    unknown: IssuerEntry = IssuerEntry(key="unknown", display_name=UNKNOWN_ISSUER)

    @field_validator('entries')
    def validate_unique_keys(cls, v):
        seen = set()
        for entry in v:
            if entry.key in seen:
                raise ValueError(f"Duplicate issuer key: {entry.key}")
            seen.add(entry.key)
        return v

    def __iter__(self) -> Iterator[IssuerEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: str) -> Optional[IssuerEntry]:
        key = key.lower()
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None


class IssuerMatch(BaseModel):
    """Outcome of issuer identification."""
    model_config = ConfigDict(frozen=True)

    issuer: str = UNKNOWN_ISSUER
    asset_ref: str = DEFAULT_ASSET_REF
    key: Optional[str] = None

    @property
    def is_known(self) -> bool:
        return self.key is not None


class FieldRule(BaseModel):
    """
    Extraction rule for one output field.

    keywords are lower-case anchor phrases tried in order. value_pattern is a
    regular expression applied case-insensitively to an anchored line; if it
    defines a group named ``value`` only that group is captured. occurrence
    selects the first or the last match of the pattern on the line.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    keywords: Tuple[str, ...]
    value_pattern: str
    occurrence: Literal["first", "last"] = "first"

    @field_validator('name')
    def validate_name(cls, v):
        if v not in OUTPUT_FIELDS:
            raise ValueError(f"Unknown field '{v}', expected one of {', '.join(OUTPUT_FIELDS)}")
        return v

    @field_validator('keywords')
    def normalize_keywords(cls, v):
        keywords = tuple(k.strip().lower() for k in v if k and k.strip())
        if not keywords:
            raise ValueError("At least one keyword is required")
        return keywords

    @field_validator('value_pattern')
    def validate_pattern(cls, v):
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid value pattern {v!r}: {e}")
        return v

    @property
    def pattern(self) -> re.Pattern:
        return re.compile(self.value_pattern, re.IGNORECASE)


class FieldSpec(BaseModel):
    """Ordered field rules. Fields are extracted independently of each other."""
    model_config = ConfigDict(frozen=True)

    rules: Tuple[FieldRule, ...]

    @field_validator('rules')
    def validate_unique_names(cls, v):
        names = [rule.name for rule in v]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ValueError(f"Duplicate field rules: {', '.join(sorted(duplicates))}")
        return v

    def __iter__(self) -> Iterator[FieldRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(rule.name for rule in self.rules)


class ExtractionResult(BaseModel):
    """Structured fields extracted from one statement."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    issuer: str = UNKNOWN_ISSUER
    asset_ref: str = Field(DEFAULT_ASSET_REF, alias="assetRef")
    total_due: str = Field(NOT_FOUND, alias="totalDue")
    minimum_due: str = Field(NOT_FOUND, alias="minimumDue")
    due_date: str = Field(NOT_FOUND, alias="dueDate")
    last4_digits: str = Field(NOT_FOUND, alias="last4Digits")
    statement_period: str = Field(NOT_FOUND, alias="statementPeriod")
    confidence: str

    @field_validator('confidence')
    def validate_confidence(cls, v):
        if not re.fullmatch(r"\d+/\d+ fields found", v):
            raise ValueError(f"Malformed confidence: {v!r}")
        return v

    @model_validator(mode='after')
    def validate_last4(self):
        if self.last4_digits != NOT_FOUND and not re.fullmatch(r"\d{4}", self.last4_digits):
            raise ValueError(f"last4Digits must be exactly 4 digits: {self.last4_digits!r}")
        return self

    def to_dict(self) -> dict:
        """Serialize with the external camelCase field names."""
        return self.model_dump(by_alias=True)
