from unittest.mock import Mock

import pytest

from core.errors import MalformedRecord, UpstreamError, UpstreamInconsistency
from core.milestone import (
    Achieved,
    NeedsPage,
    Pending,
    extract_star_date,
    find_milestone,
    locate,
    normalize_date,
    page_position,
)


@pytest.mark.parametrize(
    "milestone,expected",
    [(1, (1, 0)), (100, (1, 99)), (101, (2, 0)), (250, (3, 49)), (1000, (10, 99))],
)
def test_page_position(milestone, expected):
    assert page_position(milestone) == expected


@pytest.mark.parametrize("milestone,total", [(1, 0), (101, 100), (5000, 4999)])
def test_locate_unreached_is_pending(milestone, total):
    assert locate(milestone, total) == Pending(total)


def test_locate_reached_needs_page():
    assert locate(250, 250) == NeedsPage(3, 49)


def test_normalize_date_utc():
    assert normalize_date("2023-06-15T10:30:00Z") == "2023-06-15"


def test_normalize_date_converts_offsets_to_utc():
    assert normalize_date("2023-06-15T23:30:00-05:00") == "2023-06-16"


def test_extract_star_date_picks_offset():
    records = [{"starred_at": "2020-01-01T00:00:00Z"}, {"starred_at": "2023-06-15T10:30:00Z"}]
    assert extract_star_date(records, 1) == Achieved("2023-06-15")


def test_extract_star_date_short_page_is_inconsistency():
    with pytest.raises(UpstreamInconsistency):
        extract_star_date([{"starred_at": "2023-06-15T10:30:00Z"}], 1)


@pytest.mark.parametrize("record", [{"user": {"login": "a"}}, {"starred_at": None}, {"starred_at": ""}])
def test_extract_star_date_without_timestamp(record):
    with pytest.raises(MalformedRecord):
        extract_star_date([record], 0)


def test_extract_star_date_garbage_timestamp():
    with pytest.raises(UpstreamError):
        extract_star_date([{"starred_at": "yesterday"}], 0)


def test_find_milestone_pending_never_fetches_page():
    client = Mock()
    assert find_milestone(client, "o", "r", 500, 42) == Pending(42)
    client.list_stargazers.assert_not_called()


def test_find_milestone_fetches_computed_page():
    client = Mock()
    page = [{"starred_at": "2021-01-01T00:00:00Z"}] * 49 + [{"starred_at": "2023-06-15T10:30:00Z"}]
    client.list_stargazers.return_value = page

    assert find_milestone(client, "o", "r", 250, 300) == Achieved("2023-06-15")
    client.list_stargazers.assert_called_once_with("o", "r", 3, 100)
