# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""structlog + stdlib bridge for applications embedding the extractor.

Library modules only call ``logging.getLogger(__name__)``; records flow
through the processors below once ``configure()`` has run. ``extract()``
binds ``page_url`` via structlog contextvars, so every warning emitted
during one extraction carries the page it came from.

Leaf module, no contentprofile imports.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

LOG_LEVEL_ENV = "CONTENTPROFILE_LOG_LEVEL"
_DEFAULT_LEVEL = "INFO"


def _resolve_level(level: str | None) -> int:
    name = level or os.environ.get(LOG_LEVEL_ENV, "") or _DEFAULT_LEVEL
    resolved = logging.getLevelName(name.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure(*, json_output: bool = False, level: str | None = None) -> None:
    """Configure structlog with a single stderr handler on the root logger.

    Args:
        json_output: True for JSON lines, False for human-readable console output.
        level: Root logger level. Defaults to $CONTENTPROFILE_LOG_LEVEL, then INFO.
            Unknown names fall back to INFO.
    """
    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))
