"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime

import pytest

from issue_analyzer.models.domain import Issue
from issue_analyzer.providers.mock import MockLLMClient
from issue_analyzer.store import IssueStore

SHORT_NAME_ENV_VARS = ["API_PORT", "LOG_LEVEL", "LLM_PROVIDER", "ANTHROPIC_API_KEY", "ANTHROPIC_MODEL"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment variables out of configuration tests."""
    for name in SHORT_NAME_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_issue() -> Issue:
    """Sample issue for testing."""
    return Issue(
        id="test-id",
        title="Test Issue",
        description="This is a test issue description",
        author="test@example.com",
        created_at=datetime(2024, 5, 1, 10, 0, tzinfo=UTC),
    )


@pytest.fixture
def issue_payload() -> dict:
    """Sample issue as it arrives in a request body."""
    return {
        "id": "ISSUE-42",
        "title": "Login page crashes",
        "description": "Submitting an empty form returns a 500 error",
        "author": "jdoe@example.com",
        "createdAt": "2024-05-01T10:00:00Z",
    }


@pytest.fixture
def mock_client() -> MockLLMClient:
    """Mock LLM client without simulated latency."""
    return MockLLMClient(delay=0)


@pytest.fixture
def store() -> IssueStore:
    """Empty in-memory issue store."""
    return IssueStore()
