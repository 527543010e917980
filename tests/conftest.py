"""Pytest configuration and fixtures."""

import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

# =============================================================================
# Environment Setup (must happen before package imports)
# =============================================================================

os.environ.setdefault("GITHUB_TOKEN", "test-token-for-testing")
os.environ.setdefault("OPENAI_API_KEY", "test-key-for-testing")
os.environ.setdefault("OPENAI_API_MODEL", "gpt-test")

from pr_reviewer.core.config import get_settings  # noqa: E402
from pr_reviewer.services.github.models import PullRequestContext, PullRequestEvent  # noqa: E402
from tests.fixtures.fakes import FakeLLMProvider  # noqa: E402


@pytest.fixture(autouse=True)
def clear_settings_cache() -> None:
    get_settings.cache_clear()


@pytest.fixture
def fake_llm() -> FakeLLMProvider:
    return FakeLLMProvider()


@pytest.fixture
def mock_github_client() -> MagicMock:
    client = MagicMock()
    client.get_pull_request = AsyncMock()
    client.get_pull_request_diff = AsyncMock()
    client.compare_commits = AsyncMock()
    client.create_review = AsyncMock(return_value={"id": 123})
    client.close = AsyncMock()
    return client


@pytest.fixture
def pr_context() -> PullRequestContext:
    return PullRequestContext(
        owner="owner",
        repo="repo",
        number=42,
        title="Add compute helper",
        description="Adds a helper used by the report job.",
    )


@pytest.fixture
def event_payload() -> Callable[..., dict[str, Any]]:
    def _build(action: str = "opened", **extra: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "action": action,
            "number": 42,
            "repository": {
                "name": "repo",
                "full_name": "owner/repo",
                "owner": {"login": "owner", "id": 1},
            },
            "pull_request": {"number": 42, "title": "Add compute helper"},
        }
        payload.update(extra)
        return payload

    return _build


@pytest.fixture
def make_event(event_payload: Callable[..., dict[str, Any]]) -> Callable[..., PullRequestEvent]:
    def _build(action: str = "opened", **extra: Any) -> PullRequestEvent:
        return PullRequestEvent.model_validate(event_payload(action, **extra))

    return _build


@pytest.fixture
def event_file(tmp_path: Path, event_payload: Callable[..., dict[str, Any]]) -> Callable[..., Path]:
    def _write(action: str = "opened", **extra: Any) -> Path:
        path = tmp_path / "event.json"
        path.write_text(json.dumps(event_payload(action, **extra)), encoding="utf-8")
        return path

    return _write
