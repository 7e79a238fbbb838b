import os
import requests
from typing import Dict, List, NamedTuple, Optional
from urllib.parse import quote

from core.errors import NotFound, UpstreamError

API = "https://api.github.com"
TIMEOUT = 10
MAX_PER_PAGE = 100

# Stargazer listing with starred_at timestamps instead of bare user objects
STAR_ACCEPT = "application/vnd.github.v3.star+json"


class RepositorySummary(NamedTuple):
    star_count: int
    owner_avatar_url: str


def _repo_path(owner: str, repo: str) -> str:
    # Encode each segment so "/" or "?" cannot switch endpoints
    return f"{quote(owner, safe='')}/{quote(repo, safe='')}"


def build_headers(secrets: Dict[str, str]) -> Dict[str, str]:
    headers = {"User-Agent": "star-milestone/1.0", "Accept": "application/vnd.github+json"}
    # Check secrets.json first, then fall back to env var (Vercel / Actions)
    token = secrets.get("GITHUB_TOKEN") or os.environ.get("GITHUB_TOKEN")
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


class GitHubClient:
    """
    Read-only wrapper around the two REST endpoints the badge needs.

    Built once per process and handed to the request handler, so tests can
    swap in a fake with the same two methods.
    """

    def __init__(self, headers: Dict[str, str], api: str = API, timeout: float = TIMEOUT):
        self.headers = dict(headers)
        self.api = api.rstrip("/")
        self.timeout = timeout

    def _get_json(self, path: str, params: Optional[Dict[str, str]] = None,
                  accept: Optional[str] = None):
        url = f"{self.api}{path}"
        req_headers = self.headers.copy()
        if accept:
            req_headers["Accept"] = accept

        try:
            r = requests.get(url, headers=req_headers, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(f"GET {path} failed: {e}") from e

        if r.status_code == 404:
            raise NotFound(f"GET {path} returned 404")
        try:
            r.raise_for_status()
        except requests.HTTPError as e:
            raise UpstreamError(f"GET {path} returned {r.status_code}") from e

        try:
            return r.json()
        except ValueError as e:
            raise UpstreamError(f"GET {path} returned a non-JSON body") from e

    def get_repository(self, owner: str, repo: str) -> RepositorySummary:
        data = self._get_json(f"/repos/{_repo_path(owner, repo)}")
        if not isinstance(data, dict) or "stargazers_count" not in data:
            raise UpstreamError(f"unexpected repository payload for {owner}/{repo}")

        try:
            stars = int(data.get("stargazers_count") or 0)
        except (TypeError, ValueError) as e:
            raise UpstreamError(f"bad stargazers_count for {owner}/{repo}") from e

        avatar = ((data.get("owner") or {}).get("avatar_url")) or ""
        return RepositorySummary(stars, avatar)

    def list_stargazers(self, owner: str, repo: str, page: int,
                        per_page: int = MAX_PER_PAGE) -> List[dict]:
        """
        One page of stargazers, oldest star first.

        Each record looks like {"starred_at": "2023-06-15T10:30:00Z", "user": {...}}.
        GitHub caps per_page at 100; page numbers start at 1.
        """
        per_page = max(1, min(per_page, MAX_PER_PAGE))
        params = {"per_page": str(per_page), "page": str(page)}
        data = self._get_json(f"/repos/{_repo_path(owner, repo)}/stargazers", params=params, accept=STAR_ACCEPT)
        if not isinstance(data, list):
            raise UpstreamError(f"unexpected stargazer payload for {owner}/{repo}")
        return data
