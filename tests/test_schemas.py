from __future__ import annotations

import copy

import pytest
from pydantic import ValidationError

from charcard.errors import CardValidationError
from charcard.schemas import CanonicalCard, LegacyCard
from charcard.validation import safe_validate, validate

BOOK = {
    "name": "the dummy book",
    "entries": [
        {
            "keys": ["dummy"],
            "content": "this is a dummy entry",
            "extensions": {},
            "enabled": False,
            "insertion_order": 0,
            "position": "before_char",
        }
    ],
    "extensions": {},
}


def test_legacy_requires_all_six_fields(legacy_card: dict) -> None:
    del legacy_card["personality"]
    outcome = safe_validate(LegacyCard, legacy_card)
    assert not outcome.is_valid
    assert outcome.errors[0]["loc"] == ["personality"]
    assert outcome.errors[0]["type"] == "missing"


def test_strings_are_not_coerced(legacy_card: dict) -> None:
    legacy_card["name"] = 42
    outcome = safe_validate(LegacyCard, legacy_card)
    assert [err["loc"] for err in outcome.errors] == [["name"]]


@pytest.mark.parametrize(
    "field_name,value",
    [("spec", "chara_card_v3"), ("spec_version", "2"), ("spec_version", 2.0)],
)
def test_discriminators_must_match(canonical_card: dict, field_name: str, value) -> None:
    canonical_card[field_name] = value
    outcome = safe_validate(CanonicalCard, canonical_card)
    assert [err["loc"] for err in outcome.errors] == [[field_name]]


def test_extensions_accept_arbitrary_json(canonical_card: dict) -> None:
    canonical_card["data"]["extensions"] = {
        "agnai": {"authorNote": "Be happy.", "depth": [1, None, {"deep": True}]},
        "flag": False,
    }
    card = validate(CanonicalCard, canonical_card)
    assert card.data.extensions["agnai"]["depth"][2] == {"deep": True}


def test_character_book_is_validated(canonical_card: dict) -> None:
    canonical_card["data"]["character_book"] = copy.deepcopy(BOOK)
    card = validate(CanonicalCard, canonical_card)
    assert card.data.character_book.entries[0].position == "before_char"

    canonical_card["data"]["character_book"]["entries"][0]["insertion_order"] = "0"
    outcome = safe_validate(CanonicalCard, canonical_card)
    assert outcome.errors
    assert outcome.errors[0]["loc"][:4] == ["data", "character_book", "entries", 0]


def test_entry_numbers_accept_floats(canonical_card: dict) -> None:
    canonical_card["data"]["character_book"] = copy.deepcopy(BOOK)
    canonical_card["data"]["character_book"]["entries"][0]["priority"] = 1.5
    assert safe_validate(CanonicalCard, canonical_card).is_valid


def test_entry_position_is_restricted(canonical_card: dict) -> None:
    canonical_card["data"]["character_book"] = copy.deepcopy(BOOK)
    canonical_card["data"]["character_book"]["entries"][0]["position"] = "middle"
    assert not safe_validate(CanonicalCard, canonical_card).is_valid


def test_absent_optionals_stay_unset(canonical_card: dict) -> None:
    card = validate(CanonicalCard, canonical_card)
    assert "character_book" not in card.data.model_dump(exclude_unset=True)


def test_models_are_frozen(legacy_card: dict) -> None:
    card = validate(LegacyCard, legacy_card)
    with pytest.raises(ValidationError):
        card.name = "changed"


def test_validate_raises_with_error_list() -> None:
    with pytest.raises(CardValidationError) as excinfo:
        validate(LegacyCard, {})
    assert len(excinfo.value.errors) == 6
    assert str(excinfo.value) == "6 validation errors for LegacyCard"
    assert all("url" not in err for err in excinfo.value.errors)


@pytest.mark.parametrize("field_name", ["case_sensitive", "name", "priority", "id", "position"])
def test_entry_optionals_reject_null(canonical_card: dict, field_name: str) -> None:
    canonical_card["data"]["character_book"] = copy.deepcopy(BOOK)
    canonical_card["data"]["character_book"]["entries"][0][field_name] = None
    outcome = safe_validate(CanonicalCard, canonical_card)
    assert outcome.errors
    assert outcome.errors[0]["loc"][:5] == ["data", "character_book", "entries", 0, field_name]
