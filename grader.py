# Free-text answer grading.
from __future__ import annotations

import re
import unicodedata

_NON_WORD_RE = re.compile(r"[^\w\s]")
_WS_RE = re.compile(r"\s+")
_LEADING_ARTICLE_RE = re.compile(r"^(?:the|a|an)\s+")


def _strip_diacritics(s: str) -> str:
    decomposed = unicodedata.normalize("NFD", s)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _collapse_ws(s: str) -> str:
    return _WS_RE.sub(" ", s).strip()


def normalize(text: str | None) -> str:
    """
    Canonical form used for answer comparison:
      trim, lowercase, drop accents, drop punctuation/symbols,
      drop one leading article (the/a/an), drop one trailing "s",
      collapse whitespace.

    The plural fold is naive: "gas" -> "ga".
    """
    if not text:
        return ""
    s = text.strip().lower()
    s = _strip_diacritics(s)
    s = _NON_WORD_RE.sub("", s)
    s = _collapse_ws(s)
    s = _LEADING_ARTICLE_RE.sub("", s, count=1)
    if s.endswith("s"):
        s = s[:-1]
    return _collapse_ws(s)


def grade(submitted: str | None, correct: str | None) -> bool:
    # literal comparison of the normalized forms; word order matters
    return normalize(submitted) == normalize(correct)
