"""Custom exception hierarchy for the issue-analyzer service.

This module defines a structured exception hierarchy that lets the HTTP
layer and CLI map failures to the right response without inspecting
third-party exception types.

Exception Hierarchy:
    IssueAnalyzerError (base)
    ├── ConfigurationError
    ├── IssueValidationError
    ├── IssueNotFoundError
    └── ExternalServiceError
        └── LLMServiceError

Example Usage:
    >>> from issue_analyzer.exceptions import ConfigurationError
    >>> try:
    ...     settings = AppSettings.from_yaml(path)
    ... except FileNotFoundError as e:
    ...     raise ConfigurationError(f"Config file not found: {path}") from e
"""


class IssueAnalyzerError(Exception):
    """Base exception for all issue-analyzer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(IssueAnalyzerError):
    """Configuration-related errors.

    Raised when configuration files are invalid, missing, or contain
    incompatible settings, and when an LLM client is constructed without
    the credentials it needs. Never retried.

    Examples:
        - Configuration file not found
        - Invalid YAML syntax
        - Anthropic provider selected without an API key
    """

    pass


class IssueValidationError(IssueAnalyzerError):
    """An issue record is missing required fields."""

    pass


class IssueNotFoundError(IssueAnalyzerError):
    """No issue with the requested identifier exists in the store.

    Attributes:
        issue_id: The identifier that was looked up
    """

    def __init__(self, issue_id: str) -> None:
        self.issue_id = issue_id
        super().__init__(f"Issue {issue_id} not found")


class ExternalServiceError(IssueAnalyzerError):
    """External service communication errors.

    Raised when communication with external services fails
    (HTTP errors, API failures, timeouts, etc.).

    Examples:
        - HTTP request failed
        - API returned error
        - Rate limiting
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            status_code: HTTP status code (if applicable)
            response_text: Response body text (if applicable)
        """
        self.status_code = status_code
        self.response_text = response_text

        full_message = message
        if status_code:
            full_message = f"{message} (HTTP {status_code})"

        super().__init__(full_message)
        # Preserve original message
        self.message = message


class LLMServiceError(ExternalServiceError):
    """The language-model backend returned an error response.

    Attributes:
        provider: Name of the backend (e.g. "anthropic")
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
        response_text: str | None = None,
    ) -> None:
        self.provider = provider
        super().__init__(message, status_code=status_code, response_text=response_text)
