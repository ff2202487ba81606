"""In-memory issue store.

Issues live in an insertion-ordered dict keyed by id for the lifetime of the
process. Nothing is persisted.
"""

from dataclasses import replace
from typing import Any

import structlog

from issue_analyzer.exceptions import IssueNotFoundError
from issue_analyzer.models.domain import AnalysisResult, Issue, PlanResult

log = structlog.get_logger(__name__)

# Issue.to_dict() emits these keys in camelCase
CAMEL_CASE_KEYS = {"created_at": "createdAt", "assigned_to": "assignedTo"}


class IssueStore:
    """Flat collection of issues keyed by identifier."""

    def __init__(self) -> None:
        self._issues: dict[str, Issue] = {}

    def __len__(self) -> int:
        return len(self._issues)

    def add(self, issue: Issue) -> Issue:
        """Store an issue, replacing any existing issue with the same id."""
        self._issues[issue.id] = issue
        log.info("issue_stored", issue_id=issue.id)
        return issue

    def list_issues(self) -> list[Issue]:
        return list(self._issues.values())

    def get(self, issue_id: str) -> Issue:
        """Look up an issue.

        Raises:
            IssueNotFoundError: If no issue has this id
        """
        try:
            return self._issues[issue_id]
        except KeyError:
            raise IssueNotFoundError(issue_id) from None

    def update(self, issue_id: str, changes: dict[str, Any]) -> Issue:
        """Merge ``changes`` over an existing issue and re-validate it.

        The id cannot be changed. Keys may be camelCase or snake_case.

        Raises:
            IssueNotFoundError: If no issue has this id
            IssueValidationError: If the merged record is invalid
        """
        current = self.get(issue_id)
        changes = {CAMEL_CASE_KEYS.get(key, key): value for key, value in changes.items()}
        merged = {**current.to_dict(), **changes, "id": issue_id}
        updated = Issue.from_dict(merged)
        self._issues[issue_id] = updated
        log.info("issue_updated", issue_id=issue_id, fields=sorted(changes))
        return updated

    def delete(self, issue_id: str) -> None:
        """Remove an issue.

        Raises:
            IssueNotFoundError: If no issue has this id
        """
        if issue_id not in self._issues:
            raise IssueNotFoundError(issue_id)
        del self._issues[issue_id]
        log.info("issue_deleted", issue_id=issue_id)

    def clear(self) -> None:
        self._issues.clear()

    def apply_analysis(self, issue_id: str, result: AnalysisResult) -> Issue:
        """Write an analysis back onto the stored issue."""
        updated = replace(
            self.get(issue_id),
            labels=",".join(map(str, result.labels)),
            assigned_to=result.assigned_to,
            confidence=result.confidence,
            priority=result.priority,
        )
        self._issues[issue_id] = updated
        return updated

    def apply_plan(self, issue_id: str, result: PlanResult) -> Issue:
        """Write a plan back onto the stored issue."""
        updated = replace(self.get(issue_id), plan=result.plan)
        self._issues[issue_id] = updated
        return updated
