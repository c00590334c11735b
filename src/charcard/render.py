"""Human-readable reports for the four card modes.

``report`` is what the CLI and the HTTP service show to users: a short
message, the transformed card when there is one, and the error payload for
invalid input. Cards are serialised with ``stringify`` (2-space JSON, keys in
model field order, absent optional fields omitted).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from .classify import (
    CanonicalWithLegacy,
    InvalidStructure,
    InvalidSyntax,
    classify_as_canonical,
    classify_as_legacy,
)
from .config import Settings
from .schemas import CanonicalWithLegacyCard
from .transforms import AnyCanonical, backfill, backfill_with_notice, legacy_to_canonical

LOGGER = logging.getLogger(__name__)

MODES = ("validate", "backfill", "backfill-notice", "upgrade")
ERROR_KINDS = frozenset({"InvalidSyntax", "InvalidStructure"})

IN_SYNC_NOTE = "The V1 fields are properly backfilled in a backward-compatible way."
OUT_OF_SYNC_NOTE = "CAREFUL: The backfilled V1 fields differ from the equivalent V2 fields!!!"


def to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_unset=True)
    return to_jsonable_python(value, inf_nan_mode="null")


def stringify(value: Any, *, indent: int = 2, ensure_ascii: bool = False) -> str:
    return json.dumps(to_jsonable(value), indent=indent, ensure_ascii=ensure_ascii)


@dataclass(frozen=True)
class Report:
    kind: str
    message: str
    card: Optional[BaseModel] = None
    in_sync: Optional[bool] = None
    errors: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind not in ERROR_KINDS

    def render(self, settings: Optional[Settings] = None) -> str:
        settings = settings or Settings()
        parts = [self.message]
        if self.error is not None:
            parts.append(self.error)
        if self.kind == "InvalidStructure":
            parts.append(
                stringify(self.errors, indent=settings.indent, ensure_ascii=settings.ensure_ascii)
            )
        if self.card is not None:
            parts.append(
                stringify(self.card, indent=settings.indent, ensure_ascii=settings.ensure_ascii)
            )
        return "\n".join(parts)


def _error_report(result: InvalidSyntax | InvalidStructure) -> Report:
    if isinstance(result, InvalidSyntax):
        return Report(kind=result.kind, message="Invalid JSON provided:", error=result.error)
    return Report(
        kind=result.kind,
        message="Valid JSON, but invalid card with the following error:",
        errors=result.errors,
    )


def validate_report(text: str) -> Report:
    result = classify_as_canonical(text)
    if isinstance(result, (InvalidSyntax, InvalidStructure)):
        return _error_report(result)
    if isinstance(result, CanonicalWithLegacy):
        note = IN_SYNC_NOTE if result.in_sync else OUT_OF_SYNC_NOTE
        return Report(
            kind=result.kind,
            message=f"Valid V2 card, which also contains V1 fields backfilled. {note}",
            in_sync=result.in_sync,
        )
    return Report(kind=result.kind, message="Valid V2 card.")


def backfill_report(text: str, *, notice: bool = False, settings: Optional[Settings] = None) -> Report:
    settings = settings or Settings()
    result = classify_as_canonical(text)
    if isinstance(result, (InvalidSyntax, InvalidStructure)):
        return _error_report(result)

    def transform(card: AnyCanonical) -> CanonicalWithLegacyCard:
        if notice:
            return backfill_with_notice(card, settings.obsolescence_notice)
        return backfill(card)

    if isinstance(result, CanonicalWithLegacy):
        if result.in_sync and not notice:
            return Report(
                kind=result.kind,
                message="This V2 card already has V1 fields backfilled in a backward-compatible way.",
                in_sync=True,
            )
        if result.in_sync:
            message = (
                "This V2 card had V1 fields properly backfilled already, but here is the version "
                "where the fields are instead replaced with an obsolescence notice:"
            )
        elif notice:
            message = (
                "Here is the V2 card you've supplied, with V1 fields backfilled with an "
                "obsolescence notice:"
            )
        else:
            message = (
                "Here is the V2 card you've supplied, with V1 fields backfilled with their V2 "
                "equivalent:"
            )
        return Report(
            kind=result.kind,
            message=message,
            card=transform(result.card),
            in_sync=result.in_sync,
        )

    suffix = "with an obsolescence notice" if notice else "with their equivalent V2 field"
    return Report(
        kind=result.kind,
        message=f"Here is the card you provided with V1 fields backfilled {suffix}:",
        card=transform(result.card),
    )


def upgrade_report(text: str) -> Report:
    result = classify_as_legacy(text)
    if isinstance(result, (InvalidSyntax, InvalidStructure)):
        return _error_report(result)
    if result.kind == "AlreadyMigratedWithLegacy":
        return Report(
            kind=result.kind,
            message="The card you've provided is already a V2 card (with V1 fields backfilled).",
        )
    if result.kind == "AlreadyMigrated":
        return Report(kind=result.kind, message="The card you've provided is already a V2 card.")
    return Report(
        kind=result.kind,
        message="Here's the card you've provided, upgraded to V2 format with sensible defaults:",
        card=legacy_to_canonical(result.card),
    )


def report(mode: str, text: str, settings: Optional[Settings] = None) -> Report:
    """Dispatch ``text`` to the report builder for ``mode``."""

    if mode == "validate":
        built = validate_report(text)
    elif mode == "backfill":
        built = backfill_report(text, notice=False, settings=settings)
    elif mode == "backfill-notice":
        built = backfill_report(text, notice=True, settings=settings)
    elif mode == "upgrade":
        built = upgrade_report(text)
    else:
        raise ValueError(f"Unknown mode {mode!r}; expected one of {', '.join(MODES)}")
    LOGGER.debug("Report for mode=%s: %s", mode, built.kind)
    return built


__all__ = [
    "MODES",
    "Report",
    "stringify",
    "to_jsonable",
    "validate_report",
    "backfill_report",
    "upgrade_report",
    "report",
]
