"""Classify, backfill and upgrade Character Card V1/V2 JSON documents."""

from .classify import (
    AlreadyMigrated,
    AlreadyMigratedWithLegacy,
    Canonical,
    CanonicalWithLegacy,
    InvalidStructure,
    InvalidSyntax,
    Legacy,
    classify_as_canonical,
    classify_as_legacy,
    legacy_fields_in_sync,
)
from .errors import CardError, CardSyntaxError, CardValidationError, ConfigError
from .schemas import (
    CanonicalCard,
    CanonicalData,
    CanonicalWithLegacyCard,
    CharacterBook,
    CharacterBookEntry,
    LegacyCard,
)
from .transforms import (
    OBSOLESCENCE_NOTICE,
    backfill,
    backfill_with_notice,
    legacy_to_canonical,
    parse_to_canonical,
    safe_parse_to_canonical,
)
from .validation import ValidationOutcome, safe_validate, validate

__version__ = "1.0.0"

__all__ = [
    "AlreadyMigrated",
    "AlreadyMigratedWithLegacy",
    "Canonical",
    "CanonicalWithLegacy",
    "InvalidStructure",
    "InvalidSyntax",
    "Legacy",
    "classify_as_canonical",
    "classify_as_legacy",
    "legacy_fields_in_sync",
    "CardError",
    "CardSyntaxError",
    "CardValidationError",
    "ConfigError",
    "CanonicalCard",
    "CanonicalData",
    "CanonicalWithLegacyCard",
    "CharacterBook",
    "CharacterBookEntry",
    "LegacyCard",
    "OBSOLESCENCE_NOTICE",
    "backfill",
    "backfill_with_notice",
    "legacy_to_canonical",
    "parse_to_canonical",
    "safe_parse_to_canonical",
    "ValidationOutcome",
    "safe_validate",
    "validate",
]
