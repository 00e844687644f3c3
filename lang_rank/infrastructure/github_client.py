"""GitHub REST API client for repository listings and language breakdowns."""

import logging
import os
from typing import Any, Dict, List, Optional

import requests

from lang_rank.domain.errors import FetchError
from lang_rank.domain.repository import Repository

logger = logging.getLogger(__name__)


class GitHubRestClient:
    """Blocking client for the GitHub REST API. Every failure aborts the caller."""

    # Unauthenticated requests are limited to 60 per hour, so a token is
    # strongly recommended for owners with many repositories.

    API_BASE_URL = "https://api.github.com"
    PAGE_SIZE = 100
    TIMEOUT_SECONDS = 20
    USER_AGENT = "github-lang-rank"

    def __init__(self, token: Optional[str] = None, base_url: Optional[str] = None):
        """
        Initialize GitHub REST client.

        Args:
            token: GitHub personal access token. If None, uses GITHUB_TOKEN env var.
            base_url: API root, defaults to the public GitHub API
        """
        if token is None:
            token = os.getenv("GITHUB_TOKEN")

        self.token = token
        self.base_url = (base_url or self.API_BASE_URL).rstrip("/")
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.USER_AGENT,
        }

        # Add authorization header if token is available
        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"

        self.session = requests.Session()
        self.session.headers.update(self.headers)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        """Close the underlying HTTP session."""
        self.session.close()

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Issue a GET request and decode the JSON body.

        Args:
            path: API path relative to the base URL
            params: Query string parameters

        Returns:
            Decoded JSON document

        Raises:
            FetchError: On network failure, timeout, non-2xx status or invalid JSON
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url} params={params}")

        try:
            response = self.session.get(url, params=params, timeout=self.TIMEOUT_SECONDS)
        except requests.exceptions.RequestException as e:
            raise FetchError(f"request to {url} failed: {e}", url=url) from e

        if not 200 <= response.status_code < 300:
            body = response.text.strip()
            raise FetchError(
                f"request failed: {response.status_code} {response.reason}: {body}",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f"invalid JSON from {url}: {e}", url=url, status_code=response.status_code) from e

    def get_repositories(self, owner: str, org: bool = False) -> List[Repository]:
        """
        Fetch every repository of a user or organization.

        Pages are requested until the API returns an empty page.

        Args:
            owner: GitHub username or organization login
            org: Use the organization listing instead of the user listing

        Returns:
            List of repositories in the order the API returned them
        """
        path = f"/orgs/{owner}/repos" if org else f"/users/{owner}/repos"

        repositories: List[Repository] = []
        page = 1
        while True:
            batch = self._get_json(path, params={"per_page": self.PAGE_SIZE, "page": page})
            if not batch:
                break

            try:
                for item in batch:
                    full_name = item.get("full_name") or f"{owner}/{item['name']}"
                    repositories.append(
                        Repository(
                            name=item["name"],
                            full_name=full_name,
                            fork=bool(item.get("fork", False)),
                            archived=bool(item.get("archived", False)),
                        )
                    )
            except (KeyError, TypeError, AttributeError) as e:
                url = f"{self.base_url}{path}"
                raise FetchError(f"unexpected response from {url}: {e!r}", url=url) from e

            logger.info(f"Fetched page {page} of {owner} ({len(batch)} repositories)")
            page += 1

        return repositories

    def get_languages(self, full_name: str) -> Dict[str, int]:
        """Fetch the language -> bytes breakdown of one repository."""
        path = f"/repos/{full_name}/languages"
        data = self._get_json(path)
        try:
            return {language: int(count) for language, count in (data or {}).items()}
        except (TypeError, ValueError, AttributeError) as e:
            url = f"{self.base_url}{path}"
            raise FetchError(f"unexpected response from {url}: {e!r}", url=url) from e
