"""issue-analyzer: issue tracking service with pluggable LLM analysis and planning.

Issues are kept in an in-memory store and handed to an LLM client (a
deterministic mock or the Anthropic Messages API) that infers labels,
assignee, confidence and priority, or drafts a step-by-step plan.
"""

__version__ = "0.1.0"
