#!/usr/bin/env python3
"""GitHub REST and raw-content client used by the documentation sync jobs.

Every call is a single buffered GET: there is no retry adapter, failures are
surfaced as typed errors so the CLI can map them to an exit code and hint.
"""

import logging
from typing import Dict, List, Any, Optional

import requests
from pydantic import ValidationError

from configs.config import Config
from utils.release_models import Release

# Set up logging
logger = logging.getLogger(__name__)

BODY_SNIPPET_CHARS = 200


class GithubClientError(Exception):
    """Base error for fetch failures, with a typed code for friendly handling."""
    def __init__(self, message: str, code: str = "UNKNOWN") -> None:
        super().__init__(message)
        self.code = code


class MissingCredentialError(GithubClientError):
    """Raised before any request when an authenticated call has no token."""
    def __init__(self, message: str) -> None:
        super().__init__(message, code="UNAUTHORIZED")


class NetworkError(GithubClientError):
    """Raised on connection-level failures (DNS, refused, reset, timeout)."""
    def __init__(self, message: str, code: str = "NETWORK") -> None:
        super().__init__(message, code=code)


class HttpStatusError(GithubClientError):
    """Raised when the server answers with a non-success status."""
    def __init__(self, status_code: int, body: str = "", url: str = "", code: str = "HTTP") -> None:
        self.status_code = status_code
        self.body = (body or "")[:BODY_SNIPPET_CHARS]
        self.url = url
        message = f"HTTP {status_code} from {url or 'GitHub'}"
        if self.body:
            message += f" - {self.body}"
        super().__init__(message, code=code)


class GithubAuthError(HttpStatusError):
    """Raised on HTTP 401: the token is invalid or lacks permissions."""
    def __init__(self, body: str = "", url: str = "") -> None:
        super().__init__(401, body=body, url=url, code="UNAUTHORIZED")


class ParseError(GithubClientError):
    """Raised when the release listing is not the expected JSON."""
    def __init__(self, message: str) -> None:
        super().__init__(message, code="PARSE")


class GithubClient:
    """Thin requests-based client for release listings and raw files."""

    def __init__(self, token: Optional[str] = None, timeout_s: Optional[int] = None,
                 session: Optional[requests.Session] = None):
        """Initialize the client.

        Args:
            token: GitHub token (defaults to Config.GITHUB_TOKEN). Only the
                release listing requires one.
            timeout_s: Request timeout in seconds (defaults to Config.HTTP_TIMEOUT_S)
            session: Optional pre-built session, mainly for tests
        """
        github_config = Config.get_github_config()
        self.token = token or github_config["token"]
        self.timeout_s = timeout_s or github_config["timeout_s"]
        self.base_url = github_config["base_url"]

        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': github_config["user_agent"]})

        logger.debug("GitHub client initialized")

    def _get(self, url: str, *, headers: Optional[Dict[str, str]] = None,
             params: Optional[Dict[str, Any]] = None) -> requests.Response:
        try:
            response = self.session.get(url, headers=headers, params=params, timeout=self.timeout_s)
        except requests.Timeout as e:
            raise NetworkError(f"Timeout while fetching {url}: {e}", code="TIMEOUT") from e
        except requests.RequestException as e:
            raise NetworkError(f"Failed to fetch {url}: {e}") from e

        if response.status_code == 401:
            raise GithubAuthError(body=response.text, url=url)
        if response.status_code != 200:
            raise HttpStatusError(response.status_code, body=response.text, url=url)
        return response

    def fetch_text(self, url: str) -> str:
        """Fetch a URL and return its full body as text.

        Raises:
            NetworkError: On connection failure
            HttpStatusError: On any status other than 200
        """
        logger.info(f"Fetching {url}")
        response = self._get(url)
        logger.debug(f"✓ Fetched {len(response.text)} characters")
        return response.text

    def list_releases(self, owner: str, repo: str) -> List[Dict[str, Any]]:
        """Fetch raw release objects via the paginated REST listing.

        Raises:
            MissingCredentialError: If no token is configured
            GithubClientError: If any page fails to fetch or parse
        """
        if not self.token:
            raise MissingCredentialError("GitHub token is required (GITHUB_TOKEN or GITHUB_PAT env var)")

        url = f"{self.base_url}/repos/{owner}/{repo}/releases"
        headers = {
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
        }
        per_page = Config.RELEASES_PER_PAGE
        max_pages = Config.RELEASES_MAX_PAGES

        logger.info(f"Fetching releases: {owner}/{repo}")
        all_releases: List[Dict[str, Any]] = []
        page = 1
        while page <= max_pages:
            response = self._get(url, headers=headers, params={'page': page, 'per_page': per_page})
            try:
                page_releases = response.json()
            except ValueError as e:
                raise ParseError(f"Failed to parse JSON from {url}: {e}") from e
            if not isinstance(page_releases, list):
                raise ParseError(f"Expected a JSON array of releases from {url}")

            all_releases.extend(page_releases)
            # A short page is the last one
            if len(page_releases) < per_page:
                break
            page += 1
        else:
            logger.warning(f"{owner}/{repo} has more than {max_pages} pages of releases, truncating")

        logger.debug(f"✓ Retrieved {len(all_releases)} releases for {owner}/{repo}")
        return all_releases

    def fetch_releases(self, owner: str, repo: str) -> List[Release]:
        """Fetch releases and validate them into Release models.

        Entries without a publish timestamp (drafts) are dropped.
        """
        releases: List[Release] = []
        for raw in self.list_releases(owner, repo):
            if not isinstance(raw, dict):
                raise ParseError("Release entry is not a JSON object")
            if not raw.get("published_at"):
                logger.debug(f"Skipping unpublished release {raw.get('tag_name')!r}")
                continue
            try:
                releases.append(Release.model_validate(raw))
            except ValidationError as e:
                raise ParseError(f"Malformed release {raw.get('tag_name')!r}: {e}") from e
        return releases

    def close(self) -> None:
        """Close the underlying HTTP session."""
        if self.session:
            self.session.close()
            logger.debug("GitHub client session closed")
