from __future__ import annotations
import json, logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .errors import DataUnavailable
from .types import Question, Trait, dichotomy_of

log = logging.getLogger(__name__)

BANK_PATH = Path(__file__).with_name("data") / "questions.json"


def parse_question(raw: Dict[str, Any]) -> Question:
    """Build a Question from a ``mbti_questions`` row, rejecting malformed ones."""

    alpha = Trait(str(raw["trait_alpha"]).strip().upper())
    beta = Trait(str(raw["trait_beta"]).strip().upper())
    if alpha == beta or dichotomy_of(alpha) != dichotomy_of(beta):
        raise ValueError(f"question {raw.get('id')}: {alpha.value}/{beta.value} is not a dichotomy")
    age_from, age_to = int(raw["age_from"]), int(raw["age_to"])
    if age_from > age_to:
        raise ValueError(f"question {raw.get('id')}: age_from {age_from} > age_to {age_to}")
    return Question(
        id=int(raw["id"]),
        age_from=age_from,
        age_to=age_to,
        question=str(raw["question"]),
        trait_alpha=alpha,
        trait_beta=beta,
    )


def parse_bank(rows: Iterable[Dict[str, Any]]) -> List[Question]:
    bank = [parse_question(r) for r in rows]
    seen: set[int] = set()
    for q in bank:
        if q.id in seen:
            raise ValueError(f"duplicate question id {q.id}")
        seen.add(q.id)
    return bank


def load_bank(path: Optional[Path] = None) -> List[Question]:
    p = Path(path) if path is not None else BANK_PATH
    raw = json.loads(p.read_text(encoding="utf-8"))
    return parse_bank(raw)


class QuestionRepository:
    """Read-only access to an age-bucketed question bank."""

    def eligible(self, age: int) -> List[Question]:
        raise NotImplementedError


class BankQuestionRepository(QuestionRepository):
    def __init__(self, questions: Iterable[Question]):
        self._questions = list(questions)

    def eligible(self, age: int) -> List[Question]:
        return [q for q in self._questions if q.eligible_for(age)]


class FileQuestionRepository(QuestionRepository):
    """Reads the bank from disk on every query so edits show up without a restart."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else BANK_PATH

    def eligible(self, age: int) -> List[Question]:
        try:
            bank = load_bank(self.path)
        except (OSError, ValueError, KeyError, TypeError) as e:
            log.error("question bank %s unavailable: %s", self.path, e)
            raise DataUnavailable(f"question bank unavailable: {e}") from e
        return [q for q in bank if q.eligible_for(age)]


def default_repository() -> FileQuestionRepository:
    """An operator-supplied ``DATA_DIR/mbti_questions.json`` wins over the packaged bank."""

    from .storage import data_root

    override = data_root() / "mbti_questions.json"
    return FileQuestionRepository(override if override.exists() else None)
