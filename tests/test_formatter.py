"""Tests for result projections."""

from conftest import make_post, make_post_list
from core.formatter import (
    format_channels,
    format_post,
    format_post_history,
    format_thread,
    format_timestamp,
    format_user,
    format_users,
)
from core.models import AggregateResult, Page


def test_format_timestamp():
    assert format_timestamp(1766052000000) == "2025-12-18T10:00:00.000Z"
    assert format_timestamp(1766052000123) == "2025-12-18T10:00:00.123Z"
    assert format_timestamp(None) is None


def test_format_post_drops_internal_fields():
    post = make_post("p1", create_at=1766052000000, root_id="", reply_count=2)
    assert format_post(post) == {
        "id": "p1",
        "user_id": "user-1",
        "message": "message p1",
        "create_at": "2025-12-18T10:00:00.000Z",
        "reply_count": 2,
        "root_id": None,
    }


def test_format_post_keeps_root_id():
    assert format_post(make_post("p2", root_id="p1"))["root_id"] == "p1"


def test_history_for_single_page_reports_cursors():
    page = Page.from_payload(make_post_list(["b", "a"], next_post_id="c", prev_post_id=""))
    out = format_post_history(page, get_all=False, page=2, per_page=30, since_date="2025-12-18")
    assert [p["id"] for p in out["posts"]] == ["b", "a"]
    assert out["total_posts"] == 2
    assert out["has_next"] is True
    assert out["has_prev"] is False
    assert out["page"] == 2
    assert out["per_page"] == 30
    assert out["filters"] == {
        "since_date": "2025-12-18",
        "before_post_id": None,
        "after_post_id": None,
        "get_all": False,
    }


def test_history_for_aggregate_has_no_cursors_or_paging():
    result = AggregateResult(order=["a"], items={"a": make_post("a")})
    out = format_post_history(result, get_all=True, page=4, per_page=30, after_post_id="z")
    assert out["has_next"] is False
    assert out["has_prev"] is False
    assert out["page"] is None
    assert out["per_page"] is None
    assert out["filters"]["after_post_id"] == "z"
    assert out["filters"]["get_all"] is True


def test_thread_is_oldest_first():
    page = Page(
        order=["new", "old"],
        items={"new": make_post("new", create_at=2000), "old": make_post("old", create_at=1000)},
    )
    out = format_thread(page)
    assert [p["id"] for p in out["posts"]] == ["old", "new"]
    assert out["total_posts"] == 2


def test_format_channels():
    envelope = {
        "channels": [{"id": "c1", "name": "town-square", "display_name": "Town Square", "type": "O",
                      "purpose": "", "header": "", "total_msg_count": 7, "team_id": "t1"}],
        "total_count": 1,
    }
    out = format_channels(envelope, page=0, per_page=100)
    assert out["channels"][0] == {
        "id": "c1",
        "name": "town-square",
        "display_name": "Town Square",
        "type": "O",
        "purpose": "",
        "header": "",
        "total_msg_count": 7,
    }
    assert out["total_count"] == 1
    assert out["page"] == 0
    assert out["per_page"] == 100


def test_format_users_hides_unlisted_fields():
    user = {"id": "u1", "username": "alex", "email": "alex@example.com", "auth_data": "secret"}
    out = format_users({"users": [user], "total_count": 1}, page=1, per_page=50)
    assert out["users"][0]["username"] == "alex"
    assert "auth_data" not in out["users"][0]
    assert format_user(user)["first_name"] is None
