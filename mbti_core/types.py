from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple


class Trait(str, Enum):
    E = "E"; I = "I"
    S = "S"; N = "N"
    T = "T"; F = "F"
    J = "J"; P = "P"


# fixed order; first letter of each pair wins ties
DICHOTOMIES: Tuple[Tuple[Trait, Trait], ...] = (
    (Trait.E, Trait.I),
    (Trait.S, Trait.N),
    (Trait.T, Trait.F),
    (Trait.J, Trait.P),
)

LIKERT_VALUES: Tuple[int, ...] = (-2, -1, 0, 1, 2)
LIKERT_LABELS: Dict[int, str] = {
    2: "Strongly Agree",
    1: "Agree",
    0: "Neutral",
    -1: "Disagree",
    -2: "Strongly Disagree",
}


def dichotomy_of(trait: Trait) -> Tuple[Trait, Trait]:
    for pair in DICHOTOMIES:
        if trait in pair:
            return pair
    raise ValueError(f"unknown trait {trait!r}")


@dataclass(frozen=True)
class Question:
    id: int; age_from: int; age_to: int; question: str
    trait_alpha: Trait
    trait_beta: Trait

    def eligible_for(self, age: int) -> bool:
        return self.age_from <= age <= self.age_to


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session handed to the scorer."""

    questions: Tuple[Question, ...]
    answers: Mapping[int, int]

    @staticmethod
    def of(questions, answers: Mapping[int, int]) -> "SessionSnapshot":
        return SessionSnapshot(tuple(questions), MappingProxyType(dict(answers)))

    def is_complete(self) -> bool:
        return all(q.id in self.answers for q in self.questions)


@dataclass(frozen=True)
class ContentRecord:
    trait: str
    age_from: int
    age_to: int
    info: str = ""
    strengths: str = ""
    challenges: str = ""
    future_pathways: str = ""
    mini_scenario: str = ""
    trait_: str = ""


@dataclass(frozen=True)
class MediaRecord:
    trait: str; title: str; url: str
    thumbnail_url: Optional[str] = None


@dataclass(frozen=True)
class BookRecord:
    trait: str; title: str; url: str
    cover_url: Optional[str] = None
    author: Optional[str] = None


@dataclass
class CorrelatedContent:
    code: str
    age: int
    description: ContentRecord
    videos: List[MediaRecord] = field(default_factory=list)
    books: List[BookRecord] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class AssessmentOutcome:
    subject_id: Optional[str]
    code: str
    age: int
    full_form: str
    tally: Dict[str, int]
    persisted: bool = False
    content: Optional[CorrelatedContent] = None
    careers: Optional[Dict[str, object]] = None
    warnings: List[str] = field(default_factory=list)
