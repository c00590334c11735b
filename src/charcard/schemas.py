"""Pydantic models for Character Card V1 (legacy) and V2 (canonical) documents.

Validation mirrors the published card contract:

* types are strict, so ``"1"`` is not a number and ``1`` is not a string;
* unknown keys are dropped rather than rejected;
* ``spec`` and ``spec_version`` are literal discriminators;
* ``extensions`` maps accept any JSON value per key.

Optional fields may be absent but never ``null``: their ``None`` default is not
validated, while an explicit ``null`` in the input fails the field type. Absent
fields remain unset on the model, so dumping with ``exclude_unset=True``
reproduces the original key set.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt

Number = Union[StrictInt, StrictFloat]

CANONICAL_SPEC = "chara_card_v2"
CANONICAL_SPEC_VERSION = "2.0"

LEGACY_FIELDS: Tuple[str, ...] = (
    "name",
    "description",
    "personality",
    "scenario",
    "first_mes",
    "mes_example",
)


class _CardModel(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


class LegacyCard(_CardModel):
    """Flat V1 card: six required text fields."""

    name: str
    description: str
    personality: str
    scenario: str
    first_mes: str
    mes_example: str


class CharacterBookEntry(_CardModel):
    keys: List[str]
    content: str
    extensions: Dict[str, Any]
    enabled: StrictBool
    insertion_order: Number
    case_sensitive: StrictBool = None
    name: str = None
    priority: Number = None
    id: Number = None
    comment: str = None
    selective: StrictBool = None
    secondary_keys: List[str] = None
    constant: StrictBool = None
    position: Literal["before_char", "after_char"] = None


class CharacterBook(_CardModel):
    """Embedded lorebook carried by some V2 cards."""

    name: str = None
    description: str = None
    scan_depth: Number = None
    token_budget: Number = None
    recursive_scanning: StrictBool = None
    extensions: Dict[str, Any]
    entries: List[CharacterBookEntry]


class CanonicalData(_CardModel):
    name: str
    description: str
    personality: str
    scenario: str
    first_mes: str
    mes_example: str
    creator_notes: str
    system_prompt: str
    post_history_instructions: str
    alternate_greetings: List[str]
    character_book: CharacterBook = None
    tags: List[str]
    creator: str
    character_version: str
    extensions: Dict[str, Any] = Field(
        description="Free-form third party data, never inspected.",
    )


class CanonicalCard(_CardModel):
    """Versioned V2 envelope around :class:`CanonicalData`."""

    spec: Literal["chara_card_v2"]
    spec_version: Literal["2.0"]
    data: CanonicalData


class CanonicalWithLegacyCard(CanonicalCard):
    """V2 card that also carries the six V1 fields at its top level."""

    name: str
    description: str
    personality: str
    scenario: str
    first_mes: str
    mes_example: str

    def to_canonical(self) -> CanonicalCard:
        return CanonicalCard(spec=self.spec, spec_version=self.spec_version, data=self.data)


__all__ = [
    "CANONICAL_SPEC",
    "CANONICAL_SPEC_VERSION",
    "LEGACY_FIELDS",
    "LegacyCard",
    "CharacterBookEntry",
    "CharacterBook",
    "CanonicalData",
    "CanonicalCard",
    "CanonicalWithLegacyCard",
]
