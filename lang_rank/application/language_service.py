"""Application service that turns an owner's repositories into a language ranking."""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from lang_rank.domain.ranking import aggregate_languages, apply_excludes, collapse_others, rank_languages
from lang_rank.domain.repository import LanguageStat, Repository
from lang_rank.infrastructure.github_client import GitHubRestClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageRanking:
    """Result of one pipeline run."""

    owner: str
    ranked: List[LanguageStat]
    excluded: List[str]
    repository_count: int


class LanguageRankService:
    """Service for fetching, aggregating and ranking an owner's languages."""

    def __init__(self, github_client: GitHubRestClient):
        """
        Initialize language ranking service.

        Args:
            github_client: GitHub API client
        """
        self.github_client = github_client

    @staticmethod
    def filter_repositories(
        repositories: Sequence[Repository],
        include_forks: bool = False,
        include_archived: bool = False,
    ) -> List[Repository]:
        """Drop forks and archived repositories unless explicitly included."""
        filtered = []
        for repo in repositories:
            if repo.fork and not include_forks:
                logger.debug(f"Skipping fork {repo.full_name}")
                continue
            if repo.archived and not include_archived:
                logger.debug(f"Skipping archived {repo.full_name}")
                continue
            filtered.append(repo)
        return filtered

    def rank(
        self,
        owner: str,
        org: bool = False,
        include_forks: bool = False,
        include_archived: bool = False,
        exclude: Sequence[str] = (),
        top: int = 0,
        show_other: bool = True,
    ) -> LanguageRanking:
        """
        Build the language ranking for an owner.

        Args:
            owner: GitHub username or organization
            org: Treat ``owner`` as an organization
            include_forks: Keep forked repositories
            include_archived: Keep archived repositories
            exclude: Language names to drop before ranking (case-insensitive)
            top: Keep only this many languages (0 keeps all)
            show_other: Fold the languages beyond ``top`` into "Other"

        Returns:
            The ranking together with the languages that were excluded

        Raises:
            NoRepositoriesError: If no repositories remain after filtering
            FetchError: If any API request fails
        """
        logger.info(f"Fetching repositories for {owner}")
        repositories = self.github_client.get_repositories(owner, org=org)
        filtered = self.filter_repositories(repositories, include_forks, include_archived)
        logger.info(
            f"Kept {len(filtered)}/{len(repositories)} repositories "
            f"(forks {'in' if include_forks else 'ex'}cluded, "
            f"archived {'in' if include_archived else 'ex'}cluded)"
        )

        totals = aggregate_languages(filtered, lambda repo: self.github_client.get_languages(repo.full_name))
        excluded = apply_excludes(totals, exclude)
        if excluded:
            logger.info(f"Excluded languages: {', '.join(excluded)}")

        ranked = collapse_others(rank_languages(totals), top, show_other)
        logger.info(f"Ranked {len(totals)} languages, charting {len(ranked)}")

        return LanguageRanking(
            owner=owner,
            ranked=ranked,
            excluded=excluded,
            repository_count=len(filtered),
        )
