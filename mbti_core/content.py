from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, TypeVar

from . import config
from .errors import ContentNotFound, DataUnavailable
from .storage import ContentRepository
from .types import CorrelatedContent

log = logging.getLogger(__name__)

_T = TypeVar("_T")


def _supplementary(kind: str, code: str, fetch: Callable[[], List[_T]], warnings: List[str]) -> List[_T]:
    try:
        return list(fetch())
    except DataUnavailable as e:
        log.warning("%s for %s unavailable: %s", kind, code, e)
        warnings.append(f"{kind} unavailable: {e}")
        return []


class ContentCorrelator:
    """Resolves display content for a result code and the subject's age."""

    def __init__(self, repo: ContentRepository, workers: int = config.CONTENT_FETCH_WORKERS):
        self.repo = repo
        self.workers = max(1, int(workers))

    def lookup(self, code: str, age: int) -> CorrelatedContent:
        """
        Descriptive record must match trait and age band; videos and books
        match on trait only. Raises ContentNotFound on a catalog gap and
        DataUnavailable when the descriptive table cannot be read. A failing
        supplementary catalog degrades to an empty list plus a warning.
        """
        warnings: List[str] = []
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            f_desc = pool.submit(self.repo.descriptive, code, age)
            f_videos = pool.submit(_supplementary, "videos", code, lambda: self.repo.videos(code), warnings)
            f_books = pool.submit(_supplementary, "books", code, lambda: self.repo.books(code), warnings)
            videos, books = f_videos.result(), f_books.result()
            description = f_desc.result()
        if description is None:
            log.warning("content catalog gap: %s age %d", code, age)
            raise ContentNotFound(code, age)
        return CorrelatedContent(
            code=code, age=age, description=description,
            videos=videos, books=books, warnings=warnings,
        )
