"""Anthropic Messages API client for issue analysis and planning."""

import json
import re
from typing import Any

import httpx
import structlog

from issue_analyzer.config.settings import DEFAULT_ANTHROPIC_MODEL, DEFAULT_ANTHROPIC_URL, AnthropicConfig
from issue_analyzer.enums import Priority
from issue_analyzer.exceptions import ConfigurationError, LLMServiceError
from issue_analyzer.models.domain import AnalysisResult, Issue, PlanResult
from issue_analyzer.providers.base import LLMClient
from issue_analyzer.providers.mock import ASSIGNEES, LABELS
from issue_analyzer.utils.retry import retry_async

log = structlog.get_logger(__name__)

ANTHROPIC_VERSION = "2023-06-01"
MAX_TOKENS = 1024

FALLBACK_ANALYSIS = {
    "labels": ["bug"],
    "assignedTo": "alice@example.com",
    "confidence": 0.5,
    "priority": Priority.MEDIUM.value,
}

# Greedy: spans from the first "{" to the last "}" in the reply.
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def _reject_constant(name: str) -> float:
    # NaN, Infinity and -Infinity are not valid JSON
    raise ValueError(f"Invalid JSON constant: {name}")


class AnthropicLLMClient(LLMClient):
    """LLM client backed by Anthropic's Messages API.

    Each operation renders a prompt, POSTs it with bounded exponential
    backoff, and coerces the free-text reply into a typed result.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_ANTHROPIC_MODEL,
        max_retries: int = 3,
        base_url: str = DEFAULT_ANTHROPIC_URL,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize Anthropic client.

        Args:
            api_key: Anthropic API key (required)
            model: Model identifier
            max_retries: Maximum attempts per request, including the first
            base_url: Messages endpoint URL
            timeout: Request timeout in seconds
            client: Pre-built HTTP client (mainly for tests)

        Raises:
            ConfigurationError: If api_key is empty
        """
        if not api_key:
            raise ConfigurationError("Anthropic API key is not configured")

        self.api_key = api_key
        self.model = model
        self.max_retries = max_retries
        self.base_url = base_url
        self.client = client or httpx.AsyncClient(timeout=timeout)

        log.info("anthropic_client_initialized", model=model, max_retries=max_retries)

    @classmethod
    def from_config(cls, config: AnthropicConfig) -> "AnthropicLLMClient":
        return cls(
            api_key=config.api_key.get_secret_value(),
            model=config.model,
            max_retries=config.max_retries,
            base_url=config.base_url,
            timeout=config.timeout,
        )

    async def analyze_issue(self, issue: Issue) -> AnalysisResult:
        """Analyze an issue with Claude.

        Transport errors propagate once retries are exhausted. A reply that
        cannot be parsed falls back to a fixed default analysis.
        """
        log.info("analysis_started", issue_id=issue.id, model=self.model)

        prompt = self.create_analysis_prompt(issue)

        try:
            text = await self._call_api(prompt)
        except Exception as e:
            log.error("analysis_failed", issue_id=issue.id, error=str(e))
            raise

        log.debug("analysis_response_received", issue_id=issue.id, length=len(text))
        result = self.parse_analysis_response(text)
        log.info("analysis_completed", issue_id=issue.id)
        return result

    async def plan_issue(self, issue: Issue) -> PlanResult:
        """Generate a plan for an issue with Claude."""
        log.info("plan_started", issue_id=issue.id, model=self.model)

        prompt = self.create_planning_prompt(issue)

        try:
            text = await self._call_api(prompt)
        except Exception as e:
            log.error("plan_failed", issue_id=issue.id, error=str(e))
            raise

        log.debug("plan_response_received", issue_id=issue.id, length=len(text))
        plan = self.parse_planning_response(text)
        log.info("plan_completed", issue_id=issue.id)
        return PlanResult(plan=plan)

    async def close(self) -> None:
        await self.client.aclose()

    def create_analysis_prompt(self, issue: Issue) -> str:
        return f"""You are an AI assistant that helps analyze software development issues.
Please analyze the following issue and provide:
1. Appropriate labels (from: {", ".join(LABELS)})
2. A suggested assignee (choose from: {", ".join(ASSIGNEES)})
3. A confidence score (between 0.5 and 1.0)
4. Priority level (low, medium, or high)

Issue ID: {issue.id}
Title: {issue.title}
Description: {issue.description}
Author: {issue.author}
Created At: {issue.created_at.isoformat()}

Format your response as JSON with the following structure:
{{
  "labels": ["label1", "label2"],
  "assignedTo": "email@example.com",
  "confidence": 0.X,
  "priority": "low|medium|high"
}}
"""

    def create_planning_prompt(self, issue: Issue) -> str:
        return f"""You are an AI assistant that helps plan software development tasks.
Please generate a detailed plan for the following issue:

Issue ID: {issue.id}
Title: {issue.title}
Description: {issue.description}
Author: {issue.author}
Created At: {issue.created_at.isoformat()}

Provide a step-by-step plan to implement this issue.
Format your response as a numbered list with clear, actionable steps.
"""

    async def _call_api(self, prompt: str) -> str:
        """POST the prompt, retrying failed attempts with exponential backoff.

        Attempt N that fails waits 2^N seconds before attempt N+1; the error
        from the final attempt propagates.
        """
        return await retry_async(
            lambda: self._send(prompt),
            max_attempts=self.max_retries,
            backoff_factor=2.0,
            name="anthropic_messages",
        )

    async def _send(self, prompt: str) -> str:
        log.debug("anthropic_request", model=self.model)

        response = await self.client.post(
            self.base_url,
            headers={
                "Content-Type": "application/json",
                "x-api-key": self.api_key,
                "anthropic-version": ANTHROPIC_VERSION,
            },
            json={
                "model": self.model,
                "messages": [{"role": "user", "content": prompt}],
                "max_tokens": MAX_TOKENS,
            },
        )

        if not response.is_success:
            raise LLMServiceError(
                "Anthropic API error",
                provider="anthropic",
                status_code=response.status_code,
                response_text=response.text,
            )

        data = response.json()
        return data["content"][0]["text"]

    def parse_analysis_response(self, text: str) -> AnalysisResult:
        """Extract the analysis JSON object from a free-text reply.

        Any extraction or validation failure is logged and answered with the
        fallback analysis. A missing ``priority`` passes validation and is
        returned as None.
        """
        try:
            parsed = self._extract_analysis(text)
        except ValueError as e:
            log.error("analysis_parse_failed", error=str(e))
            log.debug("analysis_raw_response", response=text)
            parsed = FALLBACK_ANALYSIS

        return AnalysisResult(
            labels=list(parsed["labels"]),
            assigned_to=parsed["assignedTo"],
            confidence=parsed["confidence"],
            priority=parsed.get("priority"),
        )

    @staticmethod
    def _extract_analysis(text: str) -> dict[str, Any]:
        match = JSON_OBJECT_PATTERN.search(text)
        if not match:
            raise ValueError("Could not extract JSON from response")

        # json.JSONDecodeError is a ValueError
        parsed = json.loads(match.group(0), parse_constant=_reject_constant)
        if not isinstance(parsed, dict):
            raise ValueError("Invalid response structure")

        confidence = parsed.get("confidence")
        priority = parsed.get("priority")
        if priority is None:
            priority = Priority.LOW.value

        if (
            not isinstance(parsed.get("labels"), list)
            or not isinstance(parsed.get("assignedTo"), str)
            or not isinstance(confidence, int | float)
            or isinstance(confidence, bool)
            or priority not in Priority.values()
        ):
            raise ValueError("Invalid response structure")

        return parsed

    @staticmethod
    def parse_planning_response(text: str) -> str:
        """Drop any preamble before the first "1." step."""
        plan = text.strip()

        if not plan.startswith("1."):
            start = plan.find("1.")
            if start >= 0:
                plan = plan[start:]

        return plan
