"""Classify raw card text as V1, V2 or V2 with V1 fields backfilled.

The pipeline is:

1. ``parse_json`` turns text into a JSON object or raises ``CardSyntaxError``.
2. ``probe`` tries an ordered tuple of schemas and stops at the first match.
   The backfilled V2 schema always comes before plain V2 because every
   backfilled card is also a valid plain V2 card.
3. ``legacy_fields_in_sync`` compares the top-level V1 fields with ``data``
   on the JSON exactly as it was typed, before any schema normalisation.
4. ``classify_as_canonical`` / ``classify_as_legacy`` wrap the outcome in one
   of a closed set of result types. They never raise.

When nothing matches, the errors reported are always those of the plain V2
attempt, even for the legacy-targeting classifier.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from pydantic import BaseModel

from .errors import CardSyntaxError
from .schemas import (
    LEGACY_FIELDS,
    CanonicalCard,
    CanonicalWithLegacyCard,
    LegacyCard,
)
from .validation import safe_validate

LOGGER = logging.getLogger(__name__)

ErrorList = List[Dict[str, Any]]


# ----------------------------------------------------------------------
# JSON boundary
# ----------------------------------------------------------------------
_JSON_TYPE_NAMES = {
    list: "array",
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
    type(None): "null",
}


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def parse_json(text: str) -> Dict[str, Any]:
    """Parse ``text`` into a JSON object or raise ``CardSyntaxError``."""

    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:  # JSONDecodeError and the rejected constants.
        raise CardSyntaxError(str(exc)) from exc
    except RecursionError as exc:
        raise CardSyntaxError("document is nested too deeply") from exc
    if not isinstance(value, dict):
        raise CardSyntaxError(
            f"expected a JSON object at top level, got {_JSON_TYPE_NAMES.get(type(value), 'value')}"
        )
    _check_encodable(value)
    return value


def _check_encodable(value: Any) -> None:
    """Reject strings holding an unpaired surrogate such as ``"\\ud800"``."""

    pending = [value]
    while pending:
        item = pending.pop()
        if isinstance(item, dict):
            pending.extend(item.keys())
            pending.extend(item.values())
        elif isinstance(item, list):
            pending.extend(item)
        elif isinstance(item, str):
            try:
                item.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise CardSyntaxError(
                    f"unpaired surrogate {item[exc.start]!r} is not valid Unicode text"
                ) from exc


# ----------------------------------------------------------------------
# Schema prober
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class ProbeAttempt:
    tag: str
    schema: Type[BaseModel]


@dataclass(frozen=True)
class ProbeOutcome:
    """First successful attempt, or the errors of every failed one."""

    tag: Optional[str] = None
    value: Optional[BaseModel] = None
    failures: Dict[str, ErrorList] = field(default_factory=dict)

    @property
    def matched(self) -> bool:
        return self.tag is not None


CANONICAL_TARGET: Tuple[ProbeAttempt, ...] = (
    ProbeAttempt("CanonicalWithLegacy", CanonicalWithLegacyCard),
    ProbeAttempt("Canonical", CanonicalCard),
)

LEGACY_TARGET: Tuple[ProbeAttempt, ...] = (
    ProbeAttempt("AlreadyMigratedWithLegacy", CanonicalWithLegacyCard),
    ProbeAttempt("AlreadyMigrated", CanonicalCard),
    ProbeAttempt("Legacy", LegacyCard),
)


def probe(candidate: Any, attempts: Tuple[ProbeAttempt, ...]) -> ProbeOutcome:
    failures: Dict[str, ErrorList] = {}
    for attempt in attempts:
        outcome = safe_validate(attempt.schema, candidate)
        if outcome.value is not None:
            LOGGER.debug("Probe matched %s", attempt.tag)
            return ProbeOutcome(tag=attempt.tag, value=outcome.value, failures=failures)
        failures[attempt.tag] = outcome.errors
    return ProbeOutcome(failures=failures)


# ----------------------------------------------------------------------
# Consistency checker
# ----------------------------------------------------------------------
def legacy_fields_in_sync(raw: Dict[str, Any]) -> bool:
    """True when every top-level V1 field equals its namesake inside ``data``."""

    data = raw.get("data") or {}
    return all(raw.get(name) == data.get(name) for name in LEGACY_FIELDS)


# ----------------------------------------------------------------------
# Result types
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class InvalidSyntax:
    error: str
    kind: str = field(default="InvalidSyntax", init=False)


@dataclass(frozen=True)
class InvalidStructure:
    errors: ErrorList
    kind: str = field(default="InvalidStructure", init=False)


@dataclass(frozen=True)
class Canonical:
    card: CanonicalCard
    kind: str = field(default="Canonical", init=False)


@dataclass(frozen=True)
class CanonicalWithLegacy:
    card: CanonicalWithLegacyCard
    in_sync: bool
    kind: str = field(default="CanonicalWithLegacy", init=False)


@dataclass(frozen=True)
class Legacy:
    card: LegacyCard
    kind: str = field(default="Legacy", init=False)


@dataclass(frozen=True)
class AlreadyMigrated:
    kind: str = field(default="AlreadyMigrated", init=False)


@dataclass(frozen=True)
class AlreadyMigratedWithLegacy:
    kind: str = field(default="AlreadyMigratedWithLegacy", init=False)


CanonicalClassification = Union[Canonical, CanonicalWithLegacy, InvalidStructure, InvalidSyntax]
LegacyClassification = Union[
    Legacy, AlreadyMigrated, AlreadyMigratedWithLegacy, InvalidStructure, InvalidSyntax
]


# ----------------------------------------------------------------------
# Classifiers
# ----------------------------------------------------------------------
def classify_as_canonical(text: str) -> CanonicalClassification:
    """Is ``text`` a usable V2 card, and are any backfilled V1 fields in sync?"""

    try:
        raw = parse_json(text)
    except CardSyntaxError as exc:
        LOGGER.debug("Canonical classification: invalid syntax (%s)", exc.diagnostic)
        return InvalidSyntax(exc.diagnostic)

    outcome = probe(raw, CANONICAL_TARGET)
    result: CanonicalClassification
    if outcome.tag == "CanonicalWithLegacy":
        result = CanonicalWithLegacy(card=outcome.value, in_sync=legacy_fields_in_sync(raw))
    elif outcome.tag == "Canonical":
        result = Canonical(card=outcome.value)
    else:
        result = InvalidStructure(outcome.failures["Canonical"])
    LOGGER.debug("Canonical classification: %s", result.kind)
    return result


def classify_as_legacy(text: str) -> LegacyClassification:
    """What kind of card is ``text``, counting already-migrated V2 cards?"""

    try:
        raw = parse_json(text)
    except CardSyntaxError as exc:
        LOGGER.debug("Legacy classification: invalid syntax (%s)", exc.diagnostic)
        return InvalidSyntax(exc.diagnostic)

    outcome = probe(raw, LEGACY_TARGET)
    result: LegacyClassification
    if outcome.tag == "AlreadyMigratedWithLegacy":
        result = AlreadyMigratedWithLegacy()
    elif outcome.tag == "AlreadyMigrated":
        result = AlreadyMigrated()
    elif outcome.tag == "Legacy":
        result = Legacy(card=outcome.value)
    else:
        result = InvalidStructure(outcome.failures["AlreadyMigrated"])
    LOGGER.debug("Legacy classification: %s", result.kind)
    return result


__all__ = [
    "parse_json",
    "ProbeAttempt",
    "ProbeOutcome",
    "CANONICAL_TARGET",
    "LEGACY_TARGET",
    "probe",
    "legacy_fields_in_sync",
    "InvalidSyntax",
    "InvalidStructure",
    "Canonical",
    "CanonicalWithLegacy",
    "Legacy",
    "AlreadyMigrated",
    "AlreadyMigratedWithLegacy",
    "CanonicalClassification",
    "LegacyClassification",
    "classify_as_canonical",
    "classify_as_legacy",
]
