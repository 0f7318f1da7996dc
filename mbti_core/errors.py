"""Failure conditions raised by the assessment core.

Gateway errors (``DataUnavailable``, ``PersistenceFailed``, ``ContentNotFound``)
are reported to the orchestrating layer; precondition errors
(``InvalidQuestion``, ``InvalidValue``, ``SessionIncomplete``,
``NoEligibleQuestions``) mean the caller did something it must not do.
"""
from __future__ import annotations


class AssessmentError(Exception):
    pass


class DataUnavailable(AssessmentError):
    """Backing store unreachable or a query failed. Safe to retry."""


class NoEligibleQuestions(AssessmentError):
    def __init__(self, age: int):
        super().__init__(f"no questions available for age {age}")
        self.age = age


class InvalidQuestion(AssessmentError):
    def __init__(self, question_id: object):
        super().__init__(f"question {question_id!r} is not part of this session")
        self.question_id = question_id


class InvalidValue(AssessmentError):
    def __init__(self, value: object):
        super().__init__(f"answer value {value!r} is outside -2..2")
        self.value = value


class SessionIncomplete(AssessmentError):
    def __init__(self, missing: int):
        super().__init__(f"{missing} sampled question(s) still unanswered")
        self.missing = missing


class PersistenceFailed(AssessmentError):
    pass


class ContentNotFound(AssessmentError):
    def __init__(self, code: str, age: int):
        super().__init__(f"no descriptive content for {code} at age {age}")
        self.code = code
        self.age = age


class CareerServiceError(AssessmentError):
    pass
