"""HTTP API for issue management, analysis and planning."""

from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI, HTTPException, Request, Response

from issue_analyzer import __version__
from issue_analyzer.config.settings import AppSettings
from issue_analyzer.exceptions import (
    ExternalServiceError,
    IssueAnalyzerError,
    IssueNotFoundError,
    IssueValidationError,
)
from issue_analyzer.models.domain import Issue
from issue_analyzer.providers.base import LLMClient
from issue_analyzer.providers.factory import create_llm_client
from issue_analyzer.store import IssueStore

log = structlog.get_logger(__name__)


def to_http_error(error: Exception, operation: str) -> HTTPException:
    """Map a failure to the HTTP status the caller should see."""
    if isinstance(error, IssueNotFoundError):
        log.warning(f"{operation}_issue_not_found", issue_id=error.issue_id)
        return HTTPException(status_code=404, detail=error.message)
    if isinstance(error, IssueValidationError):
        log.warning(f"{operation}_invalid_issue", error=error.message)
        return HTTPException(status_code=400, detail=error.message)
    if isinstance(error, ExternalServiceError):
        log.error(f"{operation}_upstream_failed", error=str(error), status_code=error.status_code)
        return HTTPException(status_code=502, detail="LLM service unavailable")
    if isinstance(error, IssueAnalyzerError):
        log.error(f"{operation}_failed", error=error.message, exc_info=True)
        return HTTPException(status_code=500, detail=error.message)
    log.error(f"{operation}_unexpected", error=str(error), exc_info=True)
    return HTTPException(status_code=500, detail="Internal server error")


async def read_issue_payload(request: Request) -> dict[str, Any]:
    try:
        payload = await request.json()
    except ValueError as e:
        raise IssueValidationError("Request body must be valid JSON") from e
    if not isinstance(payload, dict):
        raise IssueValidationError("Request body must be a JSON object")
    return payload


def create_app(
    settings: AppSettings | None = None,
    llm_client: LLMClient | None = None,
    store: IssueStore | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Service settings (defaults when None)
        llm_client: LLM client to use instead of the configured one
        store: Issue store to serve from (a fresh one when None)

    Returns:
        Configured FastAPI app. ``app.state.store`` and
        ``app.state.llm_client`` expose the collaborators.
    """
    settings = settings or AppSettings()
    client = llm_client or create_llm_client(settings.llm)
    issues = store if store is not None else IssueStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("server_started", provider=str(settings.llm.provider))
        yield
        await client.close()
        log.info("server_stopped")

    app = FastAPI(title="Issue Analyzer", version=__version__, lifespan=lifespan)
    app.state.store = issues
    app.state.llm_client = client

    async def create_issue(request: Request) -> str:
        try:
            issue = Issue.from_dict(await read_issue_payload(request))
        except IssueAnalyzerError as e:
            raise to_http_error(e, "create_issue") from e
        issues.add(issue)
        return "OK"

    app.add_api_route("/events", create_issue, methods=["POST"])
    app.add_api_route("/issues", create_issue, methods=["POST"])

    @app.get("/issues")
    async def list_issues() -> list[dict[str, Any]]:
        return [issue.to_dict() for issue in issues.list_issues()]

    @app.get("/issues/{issue_id}")
    async def get_issue(issue_id: str) -> dict[str, Any]:
        try:
            return issues.get(issue_id).to_dict()
        except IssueAnalyzerError as e:
            raise to_http_error(e, "get_issue") from e

    @app.put("/issues/{issue_id}")
    async def update_issue(issue_id: str, request: Request) -> dict[str, Any]:
        try:
            changes = await read_issue_payload(request)
            return issues.update(issue_id, changes).to_dict()
        except IssueAnalyzerError as e:
            raise to_http_error(e, "update_issue") from e

    @app.delete("/issues/{issue_id}", status_code=204)
    async def delete_issue(issue_id: str) -> Response:
        try:
            issues.delete(issue_id)
        except IssueAnalyzerError as e:
            raise to_http_error(e, "delete_issue") from e
        return Response(status_code=204)

    @app.post("/analyze/{issue_id}")
    async def analyze_issue(issue_id: str) -> dict[str, Any]:
        log.info("analyze_requested", issue_id=issue_id)
        try:
            issue = issues.get(issue_id)
            analysis = await client.analyze_issue(issue)
        except Exception as e:
            raise to_http_error(e, "analyze") from e

        issues.apply_analysis(issue_id, analysis)
        log.info("analyze_completed", issue_id=issue_id, priority=analysis.priority)
        return analysis.to_dict()

    @app.post("/plan/{issue_id}")
    async def plan_issue(issue_id: str) -> dict[str, Any]:
        log.info("plan_requested", issue_id=issue_id)
        try:
            issue = issues.get(issue_id)
            plan = await client.plan_issue(issue)
        except Exception as e:
            raise to_http_error(e, "plan") from e

        issues.apply_plan(issue_id, plan)
        log.info("plan_completed", issue_id=issue_id)
        return plan.to_dict()

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "service": "issue-analyzer"}

    return app
