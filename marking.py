from __future__ import annotations

import re
from typing import Optional

_WS_RE = re.compile(r"\s+")

# Quadratic answers may be written with a leading "x="
ALIAS_PREFIX = "x="


def normalize_answer(s: Optional[str]) -> str:
    """Drop every whitespace character and lower-case: ' 2X + 6 ' -> '2x+6'."""
    if s is None:
        return ""
    return _WS_RE.sub("", s).lower()


def validate_answer_text(s: Optional[str]) -> Optional[str]:
    if s is None or not isinstance(s, str) or not s.strip():
        return "Answer required."
    return None


def check_answer(submitted: str, canonical: str) -> bool:
    got = normalize_answer(submitted)
    want = normalize_answer(canonical)
    return got == want or got == f"{ALIAS_PREFIX}{want}"


def check_bookwork(submitted: str, recorded: str) -> bool:
    # Compared against the learner's own raw entry, not the canonical answer
    return normalize_answer(submitted) == normalize_answer(recorded)
