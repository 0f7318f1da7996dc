# mbti_core/traits.py
from __future__ import annotations
from typing import Dict, List

from .types import DICHOTOMIES, Trait

ADJECTIVES: Dict[Trait, str] = {
    Trait.E: "Extroverted",
    Trait.I: "Introverted",
    Trait.S: "Sensing",
    Trait.N: "Intuitive",
    Trait.T: "Thinking",
    Trait.F: "Feeling",
    Trait.J: "Judging",
    Trait.P: "Perceiving",
}

TRAITS: Dict[Trait, Dict[str, str]] = {
    Trait.E: {"name": "Extroversion", "desc": "Draw energy from social interactions"},
    Trait.I: {"name": "Introversion", "desc": "Draw energy from quiet reflection"},
    Trait.S: {"name": "Sensing", "desc": "Focus on concrete facts and details"},
    Trait.N: {"name": "Intuition", "desc": "Focus on patterns and possibilities"},
    Trait.T: {"name": "Thinking", "desc": "Make decisions based on logic"},
    Trait.F: {"name": "Feeling", "desc": "Make decisions based on emotions"},
    Trait.J: {"name": "Judging", "desc": "Prefer structure and planning"},
    Trait.P: {"name": "Perceiving", "desc": "Prefer flexibility and spontaneity"},
}


def is_result_code(code: str) -> bool:
    if not isinstance(code, str) or len(code) != len(DICHOTOMIES):
        return False
    return all(ch in (a.value, b.value) for ch, (a, b) in zip(code, DICHOTOMIES))


def _letters(code: str) -> List[Trait]:
    if not is_result_code(code):
        raise ValueError(f"not a result code: {code!r}")
    return [Trait(ch) for ch in code]


def full_form(code: str) -> str:
    return " ".join(ADJECTIVES[t] for t in _letters(code))


def describe(code: str) -> List[Dict[str, str]]:
    return [{"letter": t.value, **TRAITS[t]} for t in _letters(code)]
