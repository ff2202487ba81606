"""
Domain models for the issue-analyzer service.

This module contains the data classes that flow between the HTTP layer, the
in-memory store and the LLM clients: the issue record itself and the two
result types an LLM client produces for it.

Example:
    Building an issue from a request body::

        issue = Issue.from_dict(
            {
                "id": "ISSUE-1",
                "title": "Login page crashes",
                "description": "Submitting an empty form throws a 500",
                "author": "jdoe@example.com",
                "createdAt": "2024-05-01T10:00:00Z",
            }
        )
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from issue_analyzer.exceptions import IssueValidationError


def parse_datetime(value: datetime | str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z``.

    Raises:
        IssueValidationError: If the value is not a datetime or ISO string
    """
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as e:
        raise IssueValidationError(f"Invalid timestamp: {value}") from e


@dataclass
class IssueComment:
    """A comment left on an issue."""

    author: str
    created_at: datetime
    text: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "IssueComment":
        return cls(
            author=data.get("author", ""),
            created_at=parse_datetime(data.get("createdAt", data.get("created_at", ""))),
            text=data.get("text", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "author": self.author,
            "createdAt": self.created_at.isoformat(),
            "text": self.text,
        }

    def __str__(self) -> str:
        return f"[{self.created_at.isoformat()}] {self.author}: {self.text}"


@dataclass
class Issue:
    """A unit of work tracked by the service.

    The first five fields are required. The remaining ones are written back by
    the analysis and planning collaborators; LLM clients only read issues and
    never modify them.
    """

    id: str
    title: str
    description: str
    author: str
    created_at: datetime
    comments: list[IssueComment] = field(default_factory=list)
    labels: str | None = None
    """Comma-joined labels from the most recent analysis."""

    assigned_to: str | None = None
    confidence: float | None = None
    priority: str | None = None
    plan: str | None = None

    REQUIRED_FIELDS = ("id", "title", "description", "author", "created_at")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Issue":
        """Build an issue from a JSON-like mapping.

        Both camelCase (``createdAt``, ``assignedTo``) and snake_case keys are
        accepted.

        Raises:
            IssueValidationError: If a required field is missing
        """
        values = {
            "id": data.get("id"),
            "title": data.get("title"),
            "description": data.get("description"),
            "author": data.get("author"),
            "created_at": data.get("createdAt", data.get("created_at")),
        }
        missing = [name for name in cls.REQUIRED_FIELDS if values[name] is None]
        if missing:
            raise IssueValidationError(
                "Please ensure issue has all required fields - "
                "id, title, description, author, createdAt "
                f"(missing: {', '.join(missing)})"
            )

        return cls(
            id=str(values["id"]),
            title=values["title"],
            description=values["description"],
            author=values["author"],
            created_at=parse_datetime(values["created_at"]),
            comments=[IssueComment.from_dict(c) for c in data.get("comments") or []],
            labels=data.get("labels"),
            assigned_to=data.get("assignedTo", data.get("assigned_to")),
            confidence=data.get("confidence"),
            priority=data.get("priority"),
            plan=data.get("plan"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "author": self.author,
            "createdAt": self.created_at.isoformat(),
            "comments": [c.to_dict() for c in self.comments],
            "labels": self.labels,
            "assignedTo": self.assigned_to,
            "confidence": self.confidence,
            "priority": self.priority,
            "plan": self.plan,
        }

    def __str__(self) -> str:
        return (
            f"{self.title} (Priority: {self.priority or 'not set'}) "
            f"assigned to {self.assigned_to or 'unassigned'}"
        )


@dataclass
class AnalysisResult:
    """Labels, assignee, confidence and priority inferred for an issue.

    ``priority`` may be None when a remote model omits it; see
    ``AnthropicLLMClient`` for why that reply is still accepted.
    """

    labels: list[str]
    assigned_to: str
    confidence: float
    priority: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "labels": list(self.labels),
            "assignedTo": self.assigned_to,
            "confidence": self.confidence,
            "priority": self.priority,
        }


@dataclass
class PlanResult:
    """A free-text plan, by convention a numbered list starting at ``1.``."""

    plan: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
