# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Per-field fault isolation.

Every field extractor runs through ``attempt()``, which captures failure as a
value instead of letting it propagate. ``FieldResult.or_default()`` is the one
recovery path: it logs the failure and yields the field's typed empty value,
so a broken extractor never affects its siblings.

Usage:
    headings = attempt("headings", extract_headings, doc, limits).or_default([])
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from contentprofile.errors import FieldExtractionError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class FieldResult(Generic[T]):
    """Outcome of one field extraction: a value or the error that replaced it."""

    field: str
    value: T | None = None
    error: FieldExtractionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def or_default(self, default: T) -> T:
        """Return the extracted value, or log the failure and return ``default``."""
        if self.ok:
            return self.value  # type: ignore[return-value]
        logger.warning("%s", self.error, exc_info=self.error.cause)
        return default


def attempt(field: str, fn: Callable[..., T], *args: object, **kwargs: object) -> FieldResult[T]:
    """Run ``fn`` and wrap its return value or exception in a FieldResult."""
    try:
        return FieldResult(field=field, value=fn(*args, **kwargs))
    except Exception as e:  # noqa: BLE001
        return FieldResult(field=field, error=FieldExtractionError(field, e))
