"""Tests for Page parsing and FilterSet construction."""

from datetime import datetime, timezone

import pytest

from conftest import make_post, make_post_list
from core.errors import InvalidFilterError, ShapeError
from core.models import FilterSet, Page, parse_since_date, validate_paging


class TestPage:

    def test_from_payload(self):
        page = Page.from_payload(make_post_list(["b", "a"], next_post_id="z", prev_post_id=""))
        assert page.order == ["b", "a"]
        assert set(page.items) == {"a", "b"}
        assert page.next == "z"
        assert page.prev is None

    def test_null_posts_with_empty_order(self):
        page = Page.from_payload({"order": [], "posts": None})
        assert page.order == []
        assert page.items == {}

    def test_not_an_object(self):
        with pytest.raises(ShapeError):
            Page.from_payload([make_post("a")])

    def test_missing_order(self):
        with pytest.raises(ShapeError, match="order"):
            Page.from_payload({"posts": {}})

    def test_order_references_missing_post(self):
        with pytest.raises(ShapeError, match="unknown post ids"):
            Page.from_payload({"order": ["a", "b"], "posts": {"a": make_post("a")}})

    def test_duplicate_ids_in_order(self):
        with pytest.raises(ShapeError, match="duplicate"):
            Page.from_payload({"order": ["a", "a"], "posts": {"a": make_post("a")}})


class TestFilterSet:

    def test_empty_filters_send_nothing(self):
        assert FilterSet().to_params() == {}

    def test_all_filters(self):
        filters = FilterSet(since=1734480000000, before="p9", after="p1")
        assert filters.to_params() == {"since": "1734480000000", "before": "p9", "after": "p1"}

    def test_since_zero_is_still_sent(self):
        assert FilterSet(since=0).to_params() == {"since": "0"}

    def test_from_tool_args_blank_ids_are_absent(self):
        filters = FilterSet.from_tool_args(None, "", None)
        assert filters == FilterSet()

    def test_from_tool_args_parses_date(self):
        filters = FilterSet.from_tool_args("2025-12-18", before_post_id="p2")
        assert filters.since == 1766016000000
        assert filters.before == "p2"

    def test_from_tool_args_rejects_bad_date(self):
        with pytest.raises(InvalidFilterError, match="Invalid date format: yesterday"):
            FilterSet.from_tool_args("yesterday")


class TestParseSinceDate:

    def test_date_only_is_midnight_utc(self):
        expected = int(datetime(2025, 12, 18, tzinfo=timezone.utc).timestamp() * 1000)
        assert parse_since_date("2025-12-18") == expected

    def test_zulu_suffix(self):
        assert parse_since_date("2025-12-18T10:00:00Z") == 1766052000000

    def test_explicit_offset(self):
        assert parse_since_date("2025-12-18T12:00:00+02:00") == 1766052000000

    def test_naive_datetime_is_utc(self):
        assert parse_since_date("2025-12-18T10:00:00") == 1766052000000

    @pytest.mark.parametrize("value", ["", "18/12/2025", "2025-13-01", "not a date"])
    def test_rejects_garbage(self, value):
        with pytest.raises(InvalidFilterError):
            parse_since_date(value)


class TestValidatePaging:

    def test_accepts_zero_and_positive(self):
        validate_paging(0, 0)
        validate_paging(3, 200)

    @pytest.mark.parametrize("page, per_page, word", [(-1, 30, "page"), (0, -30, "limit")])
    def test_rejects_negative(self, page, per_page, word):
        with pytest.raises(InvalidFilterError, match=word):
            validate_paging(page, per_page)
