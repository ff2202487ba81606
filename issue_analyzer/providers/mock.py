"""Deterministic offline LLM client for tests and local development."""

import asyncio

import structlog

from issue_analyzer.enums import Priority
from issue_analyzer.models.domain import AnalysisResult, Issue, PlanResult
from issue_analyzer.providers.base import LLMClient

log = structlog.get_logger(__name__)

ASSIGNEES = ["alice@example.com", "bob@example.com", "charlie@example.com"]

LABELS = [
    "bug",
    "feature",
    "enhancement",
    "documentation",
    "refactoring",
    "testing",
]

PLAN_TEMPLATES = [
    "1. Review the requirements\n2. Create test cases\n3. Implement the solution\n4. Update documentation",
    "1. Analyze impact\n2. Design solution\n3. Implement changes\n4. Test thoroughly\n5. Deploy",
    "1. Investigate root cause\n2. Develop fix\n3. Add regression tests\n4. Submit PR",
]


def hash_string(value: str) -> int:
    """Hash a string with the 31-multiplier rolling hash over UTF-16 code units.

    The accumulator wraps to a signed 32-bit integer after every step and the
    absolute value is returned, so results match the same hash computed in
    32-bit integer arithmetic. ``abs(-2**31)`` stays ``2**31``.
    """
    data = value.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + code_unit) & 0xFFFFFFFF
        if h >= 0x80000000:
            h -= 0x100000000
    return abs(h)


def select_items(items: list[str], count: int, seed: int) -> list[str]:
    """Pick ``count`` items without replacement, indexing with the same seed each draw."""
    available = list(items)
    selected = []
    for _ in range(count):
        if not available:
            break
        selected.append(available.pop(seed % len(available)))
    return selected


def priority_for(confidence: float) -> str:
    if confidence > 0.8:
        return Priority.HIGH.value
    if confidence > 0.6:
        return Priority.MEDIUM.value
    return Priority.LOW.value


class MockLLMClient(LLMClient):
    """LLM client that derives its answers from a hash of the issue.

    The same issue always produces the same analysis and plan. No network
    calls are made; each call sleeps ``delay`` seconds to imitate latency.
    """

    def __init__(self, delay: float = 0.5):
        """Initialize mock client.

        Args:
            delay: Simulated latency in seconds before each answer
        """
        self.delay = delay

    async def analyze_issue(self, issue: Issue) -> AnalysisResult:
        await asyncio.sleep(self.delay)

        seed = hash_string(issue.id + issue.title + issue.description)

        labels = select_items(LABELS, seed % 3 + 1, seed)
        assigned_to = ASSIGNEES[seed % len(ASSIGNEES)]
        confidence = 0.5 + (seed % 50) / 100

        result = AnalysisResult(
            labels=labels,
            assigned_to=assigned_to,
            confidence=confidence,
            priority=priority_for(confidence),
        )
        log.debug("mock_analysis_generated", issue_id=issue.id, seed=seed)
        return result

    async def plan_issue(self, issue: Issue) -> PlanResult:
        await asyncio.sleep(self.delay)

        seed = hash_string(issue.id + issue.title)
        log.debug("mock_plan_generated", issue_id=issue.id, seed=seed)
        return PlanResult(plan=PLAN_TEMPLATES[seed % len(PLAN_TEMPLATES)])
