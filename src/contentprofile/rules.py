# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Ordered first-match rule tables.

Classifiers declare their precedence as a tuple of ``Rule`` entries instead
of an if/elif chain, so each rule can be audited and tested on its own. The
first rule whose predicate holds decides the label; a predicate that raises
counts as not matching.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Rule:
    """A single (predicate, label) pair."""

    name: str
    label: str
    check: Callable[[Any], bool]


@dataclass(frozen=True, slots=True)
class RuleMatch:
    label: str
    rule: str | None  # None when the default applied


def evaluate(rule: Rule, subject: Any) -> bool:
    try:
        return bool(rule.check(subject))
    except Exception:  # noqa: BLE001
        logger.warning("Rule %s failed, treating as no match", rule.name, exc_info=True)
        return False


def first_match(rules: Sequence[Rule], subject: Any, default: str) -> RuleMatch:
    """Return the label of the first matching rule, else ``default``."""
    for rule in rules:
        if evaluate(rule, subject):
            return RuleMatch(label=rule.label, rule=rule.name)
    return RuleMatch(label=default, rule=None)
