"""Pytest configuration and shared fixtures."""

from core.http import HttpResponse


def make_post(post_id, create_at=1734516000000, **extra):
    post = {
        "id": post_id,
        "user_id": "user-1",
        "channel_id": "chan-1",
        "message": f"message {post_id}",
        "create_at": create_at,
        "update_at": create_at,
        "reply_count": 0,
        "root_id": "",
        "props": {},
    }
    post.update(extra)
    return post


def make_post_list(ids, next_post_id="", prev_post_id=""):
    return {
        "order": list(ids),
        "posts": {pid: make_post(pid) for pid in ids},
        "next_post_id": next_post_id,
        "prev_post_id": prev_post_id,
    }


class FakeRequester:
    """Stands in for MattermostClient.request; serves queued responses in order."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    async def __call__(self, path, params=None, method="GET", body=None):
        self.calls.append({"path": path, "params": dict(params or {}), "method": method, "body": body})
        if not self.responses:
            raise AssertionError(f"Unexpected request #{len(self.calls)} to {path}")
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


def ok(body):
    return HttpResponse(200, "OK", body)


def pages_of(*sizes, prefix="p"):
    """Successful post-list responses with the given id counts; ids are unique across pages."""
    responses = []
    start = 0
    for size in sizes:
        ids = [f"{prefix}{n}" for n in range(start, start + size)]
        responses.append(ok(make_post_list(ids)))
        start += size
    return responses
