"""LLM client implementations.

Key Components:
    - LLMClient: Abstract base for all LLM clients
    - MockLLMClient: Deterministic, hash-based client with no network access
    - AnthropicLLMClient: Anthropic Messages API client with retry/backoff
    - create_llm_client: Picks an implementation from configuration

Example:
    >>> from issue_analyzer.providers import create_llm_client
    >>> client = create_llm_client(settings.llm)
    >>> plan = await client.plan_issue(issue)
"""

from issue_analyzer.providers.anthropic import AnthropicLLMClient
from issue_analyzer.providers.base import LLMClient
from issue_analyzer.providers.factory import create_llm_client
from issue_analyzer.providers.mock import MockLLMClient

__all__ = [
    "AnthropicLLMClient",
    "LLMClient",
    "MockLLMClient",
    "create_llm_client",
]
