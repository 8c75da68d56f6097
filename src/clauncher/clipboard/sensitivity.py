"""Heuristic detection of secrets captured from the clipboard.

This is a best-effort filter for what gets *displayed*, not a guarantee.
Long secrets without a known prefix slip through, and short strings such as
`2+2=4` or `a-1` are masked even though they are harmless. Both kinds of error
are accepted; tighten the prefix list rather than the length rule when a
specific token format matters.
"""

from __future__ import annotations

SECRET_PREFIXES: tuple[str, ...] = (
    "sk-",
    "sk_live_",
    "sk_test_",
    "rk_live_",
    "pk_live_",
    "ghp_",
    "gho_",
    "ghu_",
    "ghs_",
    "github_pat_",
    "glpat-",
    "xoxb-",
    "xoxp-",
    "xoxa-",
    "AKIA",
    "AIza",
    "ya29.",
    "eyJ",
    "-----BEGIN",
)


def is_sensitive(content: str, *, length_threshold: int = 24) -> bool:
    text = content.strip()
    if not text:
        return False
    if text.startswith(SECRET_PREFIXES):
        return True
    if len(text) >= length_threshold:
        return False
    has_digit = any(ch.isdigit() for ch in text)
    has_symbol = any(not ch.isalnum() for ch in text)
    return has_digit and has_symbol
