"""Aggregation, exclusion, ranking and bucketing of language byte counts."""

import logging
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Mapping

from lang_rank.domain.errors import FetchError, NoRepositoriesError
from lang_rank.domain.repository import LanguageStat, Repository

logger = logging.getLogger(__name__)

OTHER_LABEL = "Other"

LanguageLookup = Callable[[Repository], Mapping[str, int]]


def aggregate_languages(repositories: List[Repository], lookup: LanguageLookup) -> Dict[str, int]:
    """
    Sum per-repository language byte counts into a single mapping.

    Args:
        repositories: Repositories that survived the fork/archive filters
        lookup: Callable returning the language -> bytes mapping of one repository

    Returns:
        Mapping of language name to total bytes across all repositories

    Raises:
        NoRepositoriesError: If there are no repositories to aggregate
        FetchError: If the lookup fails for any repository; nothing is returned
            for the repositories that succeeded before it
    """
    if not repositories:
        raise NoRepositoriesError()

    totals: Dict[str, int] = defaultdict(int)
    for repo in repositories:
        try:
            languages = lookup(repo)
        except FetchError as e:
            raise FetchError(
                f"languages for {repo.full_name}: {e}",
                url=e.url,
                status_code=e.status_code,
            ) from e

        logger.debug(f"{repo.full_name}: {len(languages)} languages")
        for language, count in languages.items():
            totals[language] += int(count)

    return dict(totals)


def apply_excludes(totals: Dict[str, int], excludes: Iterable[str]) -> List[str]:
    """
    Remove excluded languages from ``totals`` in place.

    Matching is case-insensitive and exact. Terms that match nothing are ignored.
    When terms differ only in case, the last one given is reported.

    Returns:
        The exclude terms, as the caller wrote them, that removed a language,
        sorted lexically
    """
    normalized = {term.lower(): term for term in excludes}
    if not normalized:
        return []

    matched = [language for language in totals if language.lower() in normalized]
    removed = []
    for language in matched:
        del totals[language]
        removed.append(normalized[language.lower()])

    return sorted(removed)


def rank_languages(totals: Mapping[str, int]) -> List[LanguageStat]:
    """Order languages by descending bytes, breaking ties by ascending name."""
    return [
        LanguageStat(language=language, bytes=count)
        for language, count in sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    ]


def collapse_others(ranked: List[LanguageStat], top: int, show_other: bool) -> List[LanguageStat]:
    """
    Keep the first ``top`` entries and optionally fold the rest into "Other".

    The "Other" entry is always appended last and only when its total is positive.
    A ``top`` of zero or one not smaller than the sequence leaves it unchanged.
    """
    if top <= 0 or len(ranked) <= top:
        return list(ranked)

    kept = list(ranked[:top])
    if not show_other:
        return kept

    other_bytes = sum(item.bytes for item in ranked[top:])
    if other_bytes > 0:
        kept.append(LanguageStat(language=OTHER_LABEL, bytes=other_bytes))
    return kept
