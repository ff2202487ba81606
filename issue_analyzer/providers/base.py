"""
Abstract base class for LLM clients.

This module defines the interface that lets the HTTP layer and the CLI ask a
language model about an issue without knowing which backend answers.
"""

from abc import ABC, abstractmethod

from issue_analyzer.models.domain import AnalysisResult, Issue, PlanResult


class LLMClient(ABC):
    """Abstract base class for LLM client implementations.

    Implementations (MockLLMClient, AnthropicLLMClient) read the issue they
    are given but never modify it; callers merge the returned result into
    their own records.

    All methods are async. Suspension happens at the network boundary for
    real backends and at a simulated delay for the mock.
    """

    @abstractmethod
    async def analyze_issue(self, issue: Issue) -> AnalysisResult:
        """Infer labels, assignee, confidence and priority for an issue.

        Args:
            issue: Issue to analyze

        Returns:
            A fully populated AnalysisResult

        Raises:
            Exception: Any transport error from the backend is propagated.
                A partially populated result is never returned.
        """
        pass

    @abstractmethod
    async def plan_issue(self, issue: Issue) -> PlanResult:
        """Draft a step-by-step plan for an issue.

        Args:
            issue: Issue to plan for

        Returns:
            PlanResult holding the plan text

        Raises:
            Exception: Any transport error from the backend is propagated.
        """
        pass

    async def close(self) -> None:
        """Release resources held by the client (no-op by default)."""
        return None
