"""Known-good example cards, one per supported shape."""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel

from .schemas import CanonicalCard, CanonicalData, CharacterBook, CharacterBookEntry, LegacyCard
from .transforms import backfill, backfill_with_notice

EXAMPLE_LEGACY = LegacyCard(
    name="Sui the card test",
    description="{{char}} is very happy.",
    personality="",
    scenario="Sui tells a nice story",
    first_mes="Hi! I'm Sui.",
    mes_example="{{user}}: You're cool.\n{{char}}: Thanks!",
)


def _example_data(**overrides) -> CanonicalData:
    values = dict(
        EXAMPLE_LEGACY.model_dump(),
        creator_notes="Sui is nice",
        system_prompt="Enter roleplay mode. Write {{char}}'s next reply.",
        post_history_instructions='Your reply must end with "desu".',
        alternate_greetings=["Hey, what's up?", "Hey there."],
        tags=["female", "nice"],
        creator="malfoy",
        character_version="1",
        extensions={},
    )
    values.update(overrides)
    return CanonicalData(**values)


def _canonical(data: CanonicalData) -> CanonicalCard:
    return CanonicalCard(spec="chara_card_v2", spec_version="2.0", data=data)


EXAMPLE_CANONICAL_NO_BOOK = _canonical(_example_data())

EXAMPLE_CANONICAL = _canonical(
    _example_data(
        character_book=CharacterBook(
            name="the dummy book",
            description="dummy book",
            entries=[
                CharacterBookEntry(
                    keys=["dummy"],
                    content="this is a dummy entry",
                    extensions={},
                    enabled=False,
                    insertion_order=0,
                    name="dummy",
                    priority=0,
                )
            ],
            extensions={},
        )
    )
)

EXAMPLE_CANONICAL_WITH_EXTENSIONS = _canonical(
    _example_data(extensions={"agnai": {"authorNote": "Your message must have a happy tone."}})
)


def example_cards() -> Dict[str, BaseModel]:
    """Titled example cards in display order."""

    return {
        "Valid V1 card": EXAMPLE_LEGACY,
        "Valid V2 card": EXAMPLE_CANONICAL,
        "Valid V2 card without character book": EXAMPLE_CANONICAL_NO_BOOK,
        "Valid V2 card with V1 fields backfilled": backfill(EXAMPLE_CANONICAL_NO_BOOK),
        "Valid V2 card with V1 fields backfilled with obsolescence notice": backfill_with_notice(
            EXAMPLE_CANONICAL_NO_BOOK
        ),
        "Valid V2 card with arbitrary data inside the extensions field": (
            EXAMPLE_CANONICAL_WITH_EXTENSIONS
        ),
    }


__all__ = [
    "EXAMPLE_LEGACY",
    "EXAMPLE_CANONICAL",
    "EXAMPLE_CANONICAL_NO_BOOK",
    "EXAMPLE_CANONICAL_WITH_EXTENSIONS",
    "example_cards",
]
