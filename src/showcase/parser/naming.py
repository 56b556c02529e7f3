"""Identifier and display-name derivation from component filenames."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")
_INTERNAL_UPPER_RE = re.compile(r"(?<=.)([A-Z])")
_SEPARATOR_RE = re.compile(r"[-_]")


def derive_id(stem: str) -> str:
    """``"Bar Chart"`` -> ``"bar-chart"``; ``"BarChart"`` -> ``"barchart"``."""
    return _WHITESPACE_RE.sub("-", stem.strip().lower())


def derive_name(stem: str) -> str:
    """Turn a camel-case or kebab/snake-case stem into a display title.

    >>> derive_name("bar-chart")
    'Bar Chart'
    >>> derive_name("MyComponent")
    'My Component'
    """
    spaced = _INTERNAL_UPPER_RE.sub(r" \1", stem)
    spaced = _SEPARATOR_RE.sub(" ", spaced)
    words = _WHITESPACE_RE.split(spaced.strip())
    return " ".join(word[:1].upper() + word[1:] for word in words if word)
