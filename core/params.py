import re
from typing import Mapping, NamedTuple, Optional, Sequence, Union

from core.errors import InvalidInput

# ASCII only; \d would also take other scripts' digits
_MILESTONE_RE = re.compile(r"[0-9]+")
# Far beyond any real star count, and well inside int() parsing limits
MAX_MILESTONE_DIGITS = 18

QueryValue = Union[str, Sequence[str]]


class MilestoneRequest(NamedTuple):
    owner: str
    repo: str
    milestone: int
    logo_url: Optional[str] = None


def _first(query: Mapping[str, QueryValue], key: str) -> str:
    # parse_qs gives lists, plain dicts give strings
    value = query.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        value = value[0] if value else ""
    return value.strip()


def parse_milestone(raw: str) -> int:
    """Accept only plain decimal integers >= 1."""
    raw = raw.strip()
    if not _MILESTONE_RE.fullmatch(raw):
        raise InvalidInput("Invalid milestone")
    if len(raw) > MAX_MILESTONE_DIGITS:
        raise InvalidInput("Invalid milestone")
    value = int(raw)
    if value <= 0:
        raise InvalidInput("Invalid milestone")
    return value


def parse_milestone_request(query: Mapping[str, QueryValue]) -> MilestoneRequest:
    owner = _first(query, "owner")
    repo = _first(query, "repo")
    milestone = _first(query, "milestone")
    if not owner or not repo or not milestone:
        raise InvalidInput("Missing parameters")

    logo = _first(query, "logo") or None
    return MilestoneRequest(owner, repo, parse_milestone(milestone), logo)
