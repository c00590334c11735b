"""FastAPI service exposing card validation, backfill and upgrade endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI
from pydantic import BaseModel, Field

from charcard.config import Settings, load_settings
from charcard.examples import example_cards
from charcard.render import Report, backfill_report, to_jsonable, upgrade_report, validate_report

LOGGER = logging.getLogger(__name__)


class CardRequest(BaseModel):
    """Incoming payload carrying raw card text."""

    text: str = Field(..., description="Card JSON exactly as typed by the user.")


class BackfillRequest(CardRequest):
    notice: bool = Field(
        False,
        description="Replace V1 fields with an obsolescence notice instead of mirroring V2.",
    )


class ValidateResponse(BaseModel):
    kind: str
    message: str
    in_sync: Optional[bool] = None
    errors: Optional[List[Dict[str, Any]]] = None
    error: Optional[str] = None


class CardResponse(ValidateResponse):
    """Response payload for endpoints that may return a transformed card."""

    card: Optional[Dict[str, Any]] = None


def get_settings() -> Settings:
    return load_settings()


def _serialize_report(report: Report, response_class=CardResponse):
    fields = dict(
        kind=report.kind,
        message=report.message,
        in_sync=report.in_sync,
        errors=report.errors if report.kind == "InvalidStructure" else None,
        error=report.error,
    )
    if response_class is CardResponse and report.card is not None:
        fields["card"] = to_jsonable(report.card)
    return response_class(**fields)


app = FastAPI(title="Character Card Utils Service", version="1.0.0")


@app.post("/validate", response_model=ValidateResponse)
def validate_card(payload: CardRequest) -> ValidateResponse:
    report = validate_report(payload.text)
    LOGGER.debug("validate -> %s", report.kind)
    return _serialize_report(report, ValidateResponse)


@app.post("/backfill", response_model=CardResponse)
def backfill_card(
    payload: BackfillRequest,
    settings: Settings = Depends(get_settings),
) -> CardResponse:
    report = backfill_report(payload.text, notice=payload.notice, settings=settings)
    LOGGER.debug("backfill(notice=%s) -> %s", payload.notice, report.kind)
    return _serialize_report(report)


@app.post("/upgrade", response_model=CardResponse)
def upgrade_card(payload: CardRequest) -> CardResponse:
    report = upgrade_report(payload.text)
    LOGGER.debug("upgrade -> %s", report.kind)
    return _serialize_report(report)


@app.get("/examples")
def list_examples() -> Dict[str, Any]:
    return {title: to_jsonable(card) for title, card in example_cards().items()}


__all__ = [
    "app",
    "CardRequest",
    "BackfillRequest",
    "ValidateResponse",
    "CardResponse",
    "get_settings",
]
