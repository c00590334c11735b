"""Pure conversions between V1 and V2 cards.

None of these functions mutate their input; models are frozen and every call
builds a new card.
"""

from __future__ import annotations

from typing import Any, Union

from .errors import CardValidationError
from .schemas import (
    CANONICAL_SPEC,
    CANONICAL_SPEC_VERSION,
    LEGACY_FIELDS,
    CanonicalCard,
    CanonicalData,
    CanonicalWithLegacyCard,
    LegacyCard,
)
from .validation import ValidationOutcome, safe_validate

OBSOLESCENCE_NOTICE = (
    "This is a V2 character card. This field is obsolete; "
    "please use a frontend that supports Character Card V2."
)

AnyCanonical = Union[CanonicalCard, CanonicalWithLegacyCard]


def legacy_to_canonical(legacy: LegacyCard) -> CanonicalCard:
    """Upgrade a V1 card, filling every V2-only field with an empty default."""

    data = CanonicalData(
        name=legacy.name,
        description=legacy.description,
        personality=legacy.personality,
        scenario=legacy.scenario,
        first_mes=legacy.first_mes,
        mes_example=legacy.mes_example,
        creator_notes="",
        system_prompt="",
        post_history_instructions="",
        alternate_greetings=[],
        tags=[],
        creator="",
        character_version="",
        extensions={},
    )
    return CanonicalCard(spec=CANONICAL_SPEC, spec_version=CANONICAL_SPEC_VERSION, data=data)


def _with_legacy_fields(card: AnyCanonical, values: dict[str, str]) -> CanonicalWithLegacyCard:
    return CanonicalWithLegacyCard(
        spec=card.spec,
        spec_version=card.spec_version,
        data=card.data,
        **values,
    )


def backfill(card: AnyCanonical) -> CanonicalWithLegacyCard:
    """Copy the V1-equivalent ``data`` fields to the top level."""

    return _with_legacy_fields(card, {name: getattr(card.data, name) for name in LEGACY_FIELDS})


def backfill_with_notice(
    card: AnyCanonical,
    notice: str = OBSOLESCENCE_NOTICE,
) -> CanonicalWithLegacyCard:
    """Fill every top-level V1 field with ``notice`` instead of real values."""

    return _with_legacy_fields(card, {name: notice for name in LEGACY_FIELDS})


def safe_parse_to_canonical(candidate: Any) -> ValidationOutcome[CanonicalCard]:
    """Accept a V2 card as-is or upgrade a V1 card; report the V2 errors otherwise."""

    canonical = safe_validate(CanonicalCard, candidate)
    if canonical.is_valid:
        return canonical
    legacy = safe_validate(LegacyCard, candidate)
    if legacy.value is not None:
        return ValidationOutcome(value=legacy_to_canonical(legacy.value))
    return canonical


def parse_to_canonical(candidate: Any) -> CanonicalCard:
    outcome = safe_parse_to_canonical(candidate)
    if outcome.value is None:
        raise CardValidationError(outcome.errors, schema_name=CanonicalCard.__name__)
    return outcome.value


__all__ = [
    "OBSOLESCENCE_NOTICE",
    "legacy_to_canonical",
    "backfill",
    "backfill_with_notice",
    "safe_parse_to_canonical",
    "parse_to_canonical",
]
