"""
Locate the star that reached a milestone.

Stargazers come back oldest-first in pages of 100, so the Nth star lives on
page ceil(N / 100) at offset (N - 1) % 100.
"""
from datetime import datetime, timezone
from typing import List, NamedTuple, Tuple, Union

from core.errors import MalformedRecord, UpstreamError, UpstreamInconsistency
from core.github_client import MAX_PER_PAGE


class Achieved(NamedTuple):
    date: str  # YYYY-MM-DD, UTC


class Pending(NamedTuple):
    current_stars: int


class NeedsPage(NamedTuple):
    page: int
    index_in_page: int


MilestoneResult = Union[Achieved, Pending]


def page_position(milestone: int, per_page: int = MAX_PER_PAGE) -> Tuple[int, int]:
    """1-based page number and 0-based offset of the given star ordinal."""
    page = (milestone + per_page - 1) // per_page
    return page, (milestone - 1) % per_page


def locate(milestone: int, total_stars: int) -> Union[Pending, NeedsPage]:
    if milestone > total_stars:
        return Pending(total_stars)
    page, index = page_position(milestone)
    return NeedsPage(page, index)


def normalize_date(timestamp: str) -> str:
    # fromisoformat only learned the trailing Z in 3.11
    ts = timestamp.strip()
    if ts.endswith(("Z", "z")):
        ts = ts[:-1] + "+00:00"
    dt = datetime.fromisoformat(ts)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d")


def extract_star_date(records: List[dict], index_in_page: int) -> Achieved:
    if len(records) <= index_in_page:
        raise UpstreamInconsistency(
            f"stargazer page has {len(records)} records, needed index {index_in_page}"
        )

    record = records[index_in_page]
    starred_at = record.get("starred_at") if isinstance(record, dict) else None
    if not starred_at:
        raise MalformedRecord(f"stargazer record {index_in_page} has no starred_at")

    try:
        return Achieved(normalize_date(str(starred_at)))
    except ValueError as e:
        raise UpstreamError(f"unparseable starred_at {starred_at!r}") from e


def find_milestone(client, owner: str, repo: str, milestone: int, total_stars: int) -> MilestoneResult:
    """Resolve the milestone, fetching one stargazer page only when it was reached."""
    where = locate(milestone, total_stars)
    if isinstance(where, Pending):
        return where
    records = client.list_stargazers(owner, repo, where.page, MAX_PER_PAGE)
    return extract_star_date(records, where.index_in_page)
