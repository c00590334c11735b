"""Schema validation boundary.

``safe_validate`` never raises for card problems and is what the classifiers
use internally. ``validate`` is the throwing convenience variant for callers
that prefer exceptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import to_jsonable_python

from .errors import CardValidationError

LOGGER = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class ValidationOutcome(Generic[ModelT]):
    """Result of validating one candidate against one schema."""

    value: Optional[ModelT] = None
    errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.value is not None


def _error_list(exc: ValidationError) -> List[Dict[str, Any]]:
    # JSON-ready: ``loc`` becomes a list, overflowed floats in ``input`` become null.
    raw = exc.errors(include_url=False, include_context=False)
    return to_jsonable_python(raw, inf_nan_mode="null")


def safe_validate(schema: Type[ModelT], candidate: Any) -> ValidationOutcome[ModelT]:
    """Validate ``candidate`` against ``schema`` without raising."""

    try:
        value = schema.model_validate(candidate)
    except ValidationError as exc:
        errors = _error_list(exc)
        LOGGER.debug("%s rejected candidate with %d error(s)", schema.__name__, len(errors))
        return ValidationOutcome(errors=errors)
    return ValidationOutcome(value=value)


def validate(schema: Type[ModelT], candidate: Any) -> ModelT:
    """Validate ``candidate`` against ``schema``; raise ``CardValidationError`` on failure."""

    outcome = safe_validate(schema, candidate)
    if outcome.value is None:
        raise CardValidationError(outcome.errors, schema_name=schema.__name__)
    return outcome.value


__all__ = ["ValidationOutcome", "safe_validate", "validate"]
