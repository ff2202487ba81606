"""Core domain models for the issue-analyzer service.

Key Models:
    - Issue: Tracked unit of work
    - IssueComment: Comment attached to an issue
    - AnalysisResult: Labels, assignee, confidence and priority for an issue
    - PlanResult: Step-by-step plan for an issue
"""

from issue_analyzer.models.domain import AnalysisResult, Issue, IssueComment, PlanResult

__all__ = [
    "AnalysisResult",
    "Issue",
    "IssueComment",
    "PlanResult",
]
