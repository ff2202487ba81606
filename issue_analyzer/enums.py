"""Enumerations for issue-analyzer priorities and LLM providers."""

from enum import Enum


class Priority(str, Enum):
    """Priority levels an analysis can assign to an issue."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def values(cls) -> list[str]:
        return [p.value for p in cls]


class LLMProviderType(str, Enum):
    """Types of LLM clients supported by issue-analyzer.

    Supported configurations:
    - anthropic: Anthropic Messages API over HTTPS
    - mock: Deterministic offline client (tests and local development)
    """

    ANTHROPIC = "anthropic"
    MOCK = "mock"

    def __str__(self) -> str:
        return self.value
