# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Content Profile exception hierarchy.

All errors inherit from ContentProfileError. None of them escape
``extract()``: they are raised inside the engine and converted to typed
default values at the nearest field boundary.
"""

from __future__ import annotations


class ContentProfileError(Exception):
    """Base exception for all Content Profile errors."""


class DocumentParseError(ContentProfileError):
    """Raw HTML could not be parsed into a document tree."""


class FieldExtractionError(ContentProfileError):
    """A single field extractor failed; siblings are unaffected."""

    def __init__(self, field: str, cause: BaseException | None = None) -> None:
        detail = f"{type(cause).__name__}: {cause}" if cause is not None else "unknown failure"
        super().__init__(f"{field} extraction failed ({detail})")
        self.field = field
        self.cause = cause


class ConfigError(ContentProfileError):
    """Invalid extraction limit configuration (environment override)."""

    def __init__(self, message: str, *, variable: str = "") -> None:
        super().__init__(message)
        self.variable = variable
