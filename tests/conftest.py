from __future__ import annotations

import copy

import pytest

from charcard.config import SettingsLoader

LEGACY_CARD = {
    "name": "Sui",
    "first_mes": "Hi",
    "scenario": "s",
    "description": "d",
    "personality": "p",
    "mes_example": "m",
}

LEGACY_FIELDS = ("name", "description", "personality", "scenario", "first_mes", "mes_example")

CANONICAL_CARD = {
    "spec": "chara_card_v2",
    "spec_version": "2.0",
    "data": {
        **LEGACY_CARD,
        "creator_notes": "Sui is nice",
        "system_prompt": "Enter roleplay mode.",
        "post_history_instructions": "",
        "alternate_greetings": ["Hey there."],
        "tags": ["female"],
        "creator": "malfoy",
        "character_version": "1",
        "extensions": {},
    },
}


@pytest.fixture
def legacy_card() -> dict:
    return copy.deepcopy(LEGACY_CARD)


@pytest.fixture
def canonical_card() -> dict:
    return copy.deepcopy(CANONICAL_CARD)


@pytest.fixture
def backfilled_card() -> dict:
    card = copy.deepcopy(CANONICAL_CARD)
    for name in LEGACY_FIELDS:
        card[name] = card["data"][name]
    return card


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    SettingsLoader.clear()
    yield
    SettingsLoader.clear()
