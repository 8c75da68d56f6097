"""Ordered, short-circuiting query intent classification."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from clauncher.config import IntentConfig
from clauncher.intent.calculator import (
    ArithmeticEvaluator,
    CalculatorError,
    format_number,
    looks_like_math,
)
from clauncher.intent.shortcuts import DEFAULT_WEB_SHORTCUTS, WebShortcutSpec

logger = logging.getLogger(__name__)

_CALC_PREFIXES = ("calc:", "=")
_TERMINAL_PREFIX = ">"
_CLIPBOARD_PREFIX = "clip:"
_CONVERSION_SEPARATORS = tuple(
    re.compile(re.escape(separator), re.IGNORECASE) for separator in (" para ", " to ")
)


@dataclass(frozen=True, slots=True)
class WebShortcut:
    engine_label: str
    url_template: str
    term: str
    url: str


@dataclass(frozen=True, slots=True)
class Calculator:
    expression: str
    value: str


@dataclass(frozen=True, slots=True)
class TerminalCommand:
    command_text: str


@dataclass(frozen=True, slots=True)
class ClipboardLookup:
    search_term: str


@dataclass(frozen=True, slots=True)
class Conversion:
    from_expr: str
    to_expr: str


Intent = Union[WebShortcut, Calculator, TerminalCommand, ClipboardLookup, Conversion]


class IntentClassifier:
    """Maps a raw query onto at most one intent.

    Rules run in a fixed order (web shortcuts, calculator, terminal command,
    clipboard lookup, conversion) and the first match wins. Reordering the
    rules changes which intent overlapping queries resolve to, so the order is
    part of the public behavior.
    """

    def __init__(
        self,
        config: IntentConfig | None = None,
        *,
        shortcuts: tuple[WebShortcutSpec, ...] = DEFAULT_WEB_SHORTCUTS,
        evaluator: ArithmeticEvaluator | None = None,
    ) -> None:
        self.config = config or IntentConfig()
        self.shortcuts = shortcuts
        self.evaluator = evaluator or ArithmeticEvaluator(
            self.config.max_exponent, self.config.max_expression_length
        )
        self._rules: tuple[Callable[[str, str], Intent | None], ...] = (
            self._match_web_shortcut,
            self._match_calculator,
            self._match_terminal,
            self._match_clipboard,
            self._match_conversion,
        )

    def classify(self, query: str) -> Intent | None:
        text = query.strip()
        if not text:
            return None
        lowered = text.lower()
        for rule in self._rules:
            intent = rule(text, lowered)
            if intent is not None:
                logger.debug("query %r classified as %s", text, type(intent).__name__)
                return intent
        return None

    def _match_web_shortcut(self, text: str, lowered: str) -> WebShortcut | None:
        for shortcut in self.shortcuts:
            if shortcut.matches(lowered):
                term = text.partition(":")[2].strip()
                return WebShortcut(
                    engine_label=shortcut.label,
                    url_template=shortcut.url_template,
                    term=term,
                    url=shortcut.build_url(term),
                )
        return None

    def _match_calculator(self, text: str, lowered: str) -> Calculator | None:
        expression: str | None = None
        for prefix in _CALC_PREFIXES:
            if lowered.startswith(prefix):
                expression = text[len(prefix) :].strip()
                break
        if expression is None:
            if not self.config.auto_detect_math or not looks_like_math(text):
                return None
            expression = text
        if not expression:
            return None

        try:
            value = self.evaluator.evaluate(expression)
        except CalculatorError as exc:
            logger.debug("calculator rejected %r: %s", expression, exc)
            return None
        return Calculator(expression=expression, value=format_number(value))

    @staticmethod
    def _match_terminal(text: str, lowered: str) -> TerminalCommand | None:
        if not text.startswith(_TERMINAL_PREFIX):
            return None
        command = text[len(_TERMINAL_PREFIX) :].strip()
        if not command:
            return None
        return TerminalCommand(command_text=command)

    @staticmethod
    def _match_clipboard(text: str, lowered: str) -> ClipboardLookup | None:
        if not lowered.startswith(_CLIPBOARD_PREFIX):
            return None
        return ClipboardLookup(search_term=text[len(_CLIPBOARD_PREFIX) :].strip())

    @staticmethod
    def _match_conversion(text: str, lowered: str) -> Conversion | None:
        for separator in _CONVERSION_SEPARATORS:
            if separator.search(text) is None:
                continue
            parts = [part.strip() for part in separator.split(text)]
            if len(parts) != 2 or not all(parts):
                return None
            return Conversion(from_expr=parts[0], to_expr=parts[1])
        return None
