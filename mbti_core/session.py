"""In-progress answers for one subject's assessment."""
from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import InvalidQuestion, InvalidValue
from .types import LIKERT_VALUES, Question, SessionSnapshot


def age_on(date_of_birth: date, today: Optional[date] = None) -> int:
    """Calendar-year difference; the birthday itself is not consulted."""

    today = today or date.today()
    return today.year - date_of_birth.year


class AssessmentSession:
    def __init__(self, subject_id: Optional[str], age: int, questions: Iterable[Question]):
        self.subject_id = subject_id
        self.age = int(age)
        self.questions: Tuple[Question, ...] = tuple(questions)
        self._ids = {q.id for q in self.questions}
        self._answers: Dict[int, int] = {}

    def record(self, question_id: int, value: int) -> None:
        if question_id not in self._ids:
            raise InvalidQuestion(question_id)
        # bool is an int subclass; True must not read as "Agree"
        if isinstance(value, bool) or not isinstance(value, int) or value not in LIKERT_VALUES:
            raise InvalidValue(value)
        self._answers[question_id] = value

    def is_complete(self) -> bool:
        return len(self._answers) == len(self._ids)

    def unanswered(self) -> List[int]:
        return [q.id for q in self.questions if q.id not in self._answers]

    def progress(self) -> Tuple[int, int]:
        return len(self._answers), len(self.questions)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot.of(self.questions, self._answers)
