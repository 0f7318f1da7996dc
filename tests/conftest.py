from __future__ import annotations

import random

import pytest

from mbti_core.errors import DataUnavailable, PersistenceFailed
from mbti_core.storage import ContentRepository, ResultStore
from mbti_core.types import DICHOTOMIES, BookRecord, ContentRecord, MediaRecord, Question


def build_synthetic_bank(
    *,
    bands: list[tuple[int, int]] | None = None,
    per_pair: int = 6,
    start_id: int = 1,
) -> list[Question]:
    """Create a deterministic synthetic bank for tests and smoke runs."""

    items: list[Question] = []
    qid = start_id
    for age_from, age_to in bands or [(10, 17), (18, 99)]:
        for alpha, beta in DICHOTOMIES:
            for idx in range(per_pair):
                # alternate keying so both poles appear as trait_alpha
                a, b = (alpha, beta) if idx % 2 == 0 else (beta, alpha)
                items.append(
                    Question(
                        id=qid,
                        age_from=age_from,
                        age_to=age_to,
                        question=f"{a.value}/{b.value} statement #{idx} for {age_from}-{age_to}",
                        trait_alpha=a,
                        trait_beta=b,
                    )
                )
                qid += 1
    return items


class MemoryResultStore(ResultStore):
    def __init__(self, fail: bool = False):
        self.rows: dict[str, dict] = {}
        self.fail = fail
        self.calls = 0

    def persist(self, subject_id: str, code: str) -> None:
        self.calls += 1
        if self.fail:
            raise PersistenceFailed("disk full")
        self.rows.setdefault(subject_id, {"id": subject_id})["mbti_personality"] = code

    def profile(self, subject_id: str):
        return self.rows.get(subject_id)


class MemoryContentRepository(ContentRepository):
    def __init__(
        self,
        records: list[ContentRecord] | None = None,
        videos: list[MediaRecord] | None = None,
        books: list[BookRecord] | None = None,
        broken: set[str] | None = None,
    ):
        self.records = records or []
        self._videos = videos or []
        self._books = books or []
        self.broken = broken or set()

    def _check(self, table: str) -> None:
        if table in self.broken:
            raise DataUnavailable(f"{table} offline")

    def descriptive(self, code, age):
        self._check("info")
        for r in self.records:
            if r.trait == code and r.age_from <= age <= r.age_to:
                return r
        return None

    def videos(self, code):
        self._check("videos")
        return [v for v in self._videos if v.trait == code]

    def books(self, code):
        self._check("books")
        return [b for b in self._books if b.trait == code]


def sample_content() -> MemoryContentRepository:
    return MemoryContentRepository(
        records=[
            ContentRecord(trait="ESTJ", age_from=10, age_to=17, info="young organiser",
                          trait_="Extroverted Sensing Thinking Judging"),
            ContentRecord(trait="ESTJ", age_from=18, age_to=99, info="adult organiser",
                          strengths="reliable", challenges="rigid", future_pathways="management",
                          mini_scenario="You run the meeting.",
                          trait_="Extroverted Sensing Thinking Judging"),
        ],
        videos=[MediaRecord(trait="ESTJ", title="ESTJ explained", url="https://example.org/v/1")],
        books=[
            BookRecord(trait="ESTJ", title="Getting Things Done", url="https://example.org/b/1"),
            BookRecord(trait="INFP", title="Quiet", url="https://example.org/b/2"),
        ],
    )


@pytest.fixture
def synthetic_bank() -> list[Question]:
    return build_synthetic_bank()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
