#!/usr/bin/env python3
import copy

from typing import Any
from unittest.mock import AsyncMock
from unittest.mock import MagicMock

import pytest

ZERO = "0" * 40

PROJECT = {
    "id": 100,
    "name": "Project",
    "web_url": "https://gitlab.example.com/test/project",
    "path_with_namespace": "test/project",
}


def make_commit(
    message: str = "Fix the thing",
    author: str = "Alice",
    added: list[str] | None = None,
    modified: list[str] | None = None,
    removed: list[str] | None = None,
    sha: str = "abc123",
) -> dict[str, Any]:
    return {
        "id": sha,
        "message": message,
        "url": f"https://gitlab.example.com/test/project/-/commit/{sha}",
        "author": {"name": author, "email": f"{author.lower()}@example.com"},
        "added": added or [],
        "modified": modified or [],
        "removed": removed or [],
    }


def make_build(
    build_id: int,
    name: str,
    stage: str,
    status: str = "success",
    username: str = "alice",
    user_name: str = "Alice",
) -> dict[str, Any]:
    return {
        "id": build_id,
        "name": name,
        "stage": stage,
        "status": status,
        "user": {"id": 1, "name": user_name, "username": username},
    }


@pytest.fixture
def push_payload() -> dict[str, Any]:
    return {
        "object_kind": "push",
        "event_name": "push",
        "before": "95790bf891e76fee5e1747ab589903a6a1f80f22",
        "after": "da1560886d4f094c3e6c9ef40349f7d38b5d27d7",
        "ref": "refs/heads/main",
        "user_name": "Alice",
        "user_username": "alice",
        "project": copy.deepcopy(PROJECT),
        "commits": [make_commit()],
        "total_commits_count": 1,
    }


@pytest.fixture
def tag_push_payload() -> dict[str, Any]:
    return {
        "object_kind": "tag_push",
        "event_name": "tag_push",
        "before": ZERO,
        "after": "82b3d5ae55f7080f1e6022629cdb57bfae7cccc7",
        "ref": "refs/tags/v1.0.0",
        "user_name": "Alice",
        "message": "First release",
        "project": copy.deepcopy(PROJECT),
        "commits": [],
        "total_commits_count": 0,
    }


@pytest.fixture
def merge_request_payload() -> dict[str, Any]:
    return {
        "object_kind": "merge_request",
        "event_type": "merge_request",
        "user": {"id": 1, "name": "Alice", "username": "alice"},
        "project": copy.deepcopy(PROJECT),
        "object_attributes": {
            "id": 9001,
            "iid": 7,
            "title": "Add feature",
            "description": "Implements the feature",
            "state": "opened",
            "action": "open",
            "url": "https://gitlab.example.com/test/project/-/merge_requests/7",
            "source_branch": "feature",
            "target_branch": "main",
            "updated_at": "2025-03-04 05:06:07 UTC",
            "last_commit": make_commit(message="Add   feature\n\nwith details"),
        },
    }


@pytest.fixture
def pipeline_payload() -> dict[str, Any]:
    return {
        "object_kind": "pipeline",
        "user": {"id": 1, "name": "Alice", "username": "alice"},
        "project": copy.deepcopy(PROJECT),
        "object_attributes": {
            "id": 31,
            "ref": "main",
            "status": "success",
            "source": "push",
            "duration": 125,
            "stages": ["build", "test"],
        },
        "merge_request": None,
        "commit": make_commit(),
        "builds": [
            make_build(380, "compile", "build"),
            make_build(381, "unit", "test"),
        ],
    }


class MockAsyncHttpxClient:
    """Mock httpx.AsyncClient that properly handles async context manager."""

    def __init__(self, *args, **kwargs):
        self.response = MagicMock()
        self.response.status_code = 200
        self.response.json.return_value = {"errcode": 0, "errmsg": "ok"}
        self.response.raise_for_status = MagicMock()
        self.request = AsyncMock(return_value=self.response)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass


@pytest.fixture
def mock_httpx_async_client_class():
    """Returns MockAsyncHttpxClient class for patching httpx.AsyncClient."""
    return MockAsyncHttpxClient
