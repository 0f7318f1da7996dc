# mbti_core/engine.py
from __future__ import annotations
from datetime import date
from typing import Optional
import logging, random

from .careers import CareerAdvisor
from .config import load_config, make_rng, sample_size, careers_enabled
from .content import ContentCorrelator
from .errors import (
    CareerServiceError,
    ContentNotFound,
    DataUnavailable,
    PersistenceFailed,
    SessionIncomplete,
)
from .question_bank import QuestionRepository
from .sampler import sample_questions
from .scoring import resolve, tally
from .session import AssessmentSession, age_on
from .storage import ResultStore
from .traits import full_form
from .types import AssessmentOutcome


log = logging.getLogger(__name__)


class AssessmentEngine:
    """
    Runs one assessment end to end:
    repository -> sampler -> session -> scorer -> result store -> correlator.

    Scoring is the only step that must succeed once a session is submitted;
    persistence, content and career suggestions fail soft into
    ``AssessmentOutcome.warnings``.
    """

    def __init__(
        self,
        questions: QuestionRepository,
        results: Optional[ResultStore] = None,
        content: Optional[ContentCorrelator] = None,
        careers: Optional[CareerAdvisor] = None,
        cfg: Optional[dict] = None,
        rng: Optional[random.Random] = None,
    ):
        self.cfg = load_config() if cfg is None else cfg
        self.rng = rng or make_rng(self.cfg)
        self.questions = questions
        self.results = results
        self.content = content
        self.careers = careers if careers is not None else (
            CareerAdvisor(self.cfg) if careers_enabled(self.cfg) else None
        )

    def start(
        self,
        subject_id: Optional[str],
        date_of_birth: date,
        today: Optional[date] = None,
    ) -> AssessmentSession:
        """Raises DataUnavailable if the bank can't be read, NoEligibleQuestions if empty."""
        age = age_on(date_of_birth, today)
        eligible = self.questions.eligible(age)
        picked = sample_questions(eligible, age, size=sample_size(self.cfg), rng=self.rng)
        log.info("session for %s: age %d, %d/%d questions", subject_id or "anonymous", age, len(picked), len(eligible))
        return AssessmentSession(subject_id, age, picked)

    def submit(self, session: AssessmentSession) -> AssessmentOutcome:
        if not session.is_complete():
            raise SessionIncomplete(len(session.unanswered()))
        counts = tally(session.snapshot())
        code = resolve(counts)
        outcome = AssessmentOutcome(
            subject_id=session.subject_id,
            code=code,
            age=session.age,
            full_form=full_form(code),
            tally={t.value: n for t, n in counts.items()},
        )

        if self.results is not None and session.subject_id:
            try:
                self.results.persist(session.subject_id, code)
                outcome.persisted = True
            except PersistenceFailed as e:
                log.warning("result %s not saved for %s: %s", code, session.subject_id, e)
                outcome.warnings.append(f"result not saved: {e}")

        if self.content is not None:
            try:
                outcome.content = self.content.lookup(code, session.age)
                outcome.warnings.extend(outcome.content.warnings)
            except ContentNotFound as e:
                outcome.warnings.append(str(e))
            except DataUnavailable as e:
                log.error("content lookup failed for %s: %s", code, e)
                outcome.warnings.append(f"content unavailable: {e}")

        if self.careers is not None:
            try:
                outcome.careers = self.careers.suggest_careers(code, session.age)
            except CareerServiceError as e:
                outcome.warnings.append(f"career suggestions unavailable: {e}")

        return outcome
