"""
Fan-out and merge helpers shared by every search mode.

Adapters run concurrently and are joined only once every one has settled,
so a merged list depends on nothing but adapter order and adapter output.
"""

import asyncio
import logging
import re
from datetime import datetime
from itertools import zip_longest
from typing import Any, Awaitable, Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, TypeVar

from ..models.academic import AcademicPaper
from ..models.results import SearchResult, Source
from ..utils.text import display_domain

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()
_PARTIAL_DATE_RE = re.compile(r"^(\d{4})(?:[\s-]+([A-Za-z]{3}|\d{1,2}))?")
_DATE_FORMATS = ("%Y-%m-%d", "%Y %b %d", "%Y %b", "%Y")


async def gather_settled(
    tasks: Mapping[str, Awaitable[Any]],
    fallbacks: Optional[Mapping[str, Callable[[], Any]]] = None,
) -> Dict[str, Any]:
    """
    Await every task concurrently and return results keyed by name.

    A task that raises is logged and replaced by its fallback (an empty
    list unless ``fallbacks`` names another factory); the others are
    unaffected.
    """
    fallbacks = fallbacks or {}
    names = list(tasks)
    outcomes = await asyncio.gather(*tasks.values(), return_exceptions=True)

    settled: Dict[str, Any] = {}
    for name, outcome in zip(names, outcomes):
        if isinstance(outcome, BaseException):
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            logger.warning(f"Source {name} failed: {outcome!r}")
            outcome = fallbacks.get(name, list)()
        settled[name] = outcome
    return settled


def interleave(*lists: Sequence[T]) -> List[T]:
    """Round-robin merge: one item from each list in turn until all are exhausted."""
    merged: List[T] = []
    for row in zip_longest(*lists, fillvalue=_MISSING):
        merged.extend(item for item in row if item is not _MISSING)
    return merged


def dedupe(items: Iterable[T], key: Callable[[T], Hashable] = lambda item: item.url) -> List[T]:
    """Drop items whose key was already seen; the first occurrence wins."""
    seen = set()
    unique: List[T] = []
    for item in items:
        k = key(item)
        if not k or k in seen:
            continue
        seen.add(k)
        unique.append(item)
    return unique


def merge_results(
    lead: Sequence[SearchResult],
    adapter_lists: Sequence[Sequence[SearchResult]],
    tail: Sequence[SearchResult],
    limit: int,
) -> List[SearchResult]:
    """Lead block, then interleaved adapter output, then the tail; deduped by URL and truncated."""
    stream = [*lead, *interleave(*adapter_lists), *tail]
    return dedupe(stream)[:limit]


def to_sources(results: Sequence[SearchResult], count: int) -> List[Source]:
    return [Source(title=r.title, url=r.url, domain=display_domain(r.url)) for r in results[:count]]


def parse_published(value: Optional[str]) -> Optional[datetime]:
    """
    Parse the date shapes arXiv and PubMed report.

    Handles ISO timestamps (``2023-06-01T12:00:00Z``), ``2023-06-01``,
    PubMed's ``2023 Jun 1`` / ``2023 Jun`` / ``2023`` and season or range
    forms such as ``2023 Jun-Jul`` by their leading year and month.
    """
    if not value:
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    match = _PARTIAL_DATE_RE.match(text)
    if not match:
        return None
    year, month = match.groups()
    if month:
        for fmt in ("%Y %b", "%Y %m"):
            try:
                return datetime.strptime(f"{year} {month}", fmt)
            except ValueError:
                continue
    try:
        return datetime(int(year), 1, 1)
    except ValueError:
        return None


def sort_papers(papers: Sequence[AcademicPaper], sort_by: Optional[str]) -> List[AcademicPaper]:
    """
    Order papers for the academic view.

    ``date``: newest first, undated papers last. ``citations``: most cited
    first, missing counts treated as zero. Anything else keeps the merged
    order. Sorting is stable, so ties keep their interleaved position.
    """
    papers = list(papers)
    if sort_by == "date":
        dated = [(parse_published(p.published_date), p) for p in papers]
        with_date = [pair for pair in dated if pair[0] is not None]
        without_date = [p for d, p in dated if d is None]
        with_date.sort(key=lambda pair: pair[0], reverse=True)
        return [p for _, p in with_date] + without_date
    if sort_by == "citations":
        return sorted(papers, key=lambda p: p.citations or 0, reverse=True)
    return papers
