"""CLI entry point for issue-analyzer."""

import asyncio
import json
import sys
from pathlib import Path

import click
import structlog

from issue_analyzer.config.settings import AppSettings, load_settings
from issue_analyzer.exceptions import ConfigurationError, IssueAnalyzerError
from issue_analyzer.models.domain import Issue
from issue_analyzer.providers.base import LLMClient
from issue_analyzer.providers.factory import create_llm_client
from issue_analyzer.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)


@click.group()
@click.option(
    "--config",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path to YAML configuration file",
)
@click.option("--log-level", default=None, help="Logging level (overrides configuration)")
@click.pass_context
def cli(ctx: click.Context, config: str | None, log_level: str | None) -> None:
    """issue-analyzer: LLM-assisted issue triage and planning."""
    try:
        settings = load_settings(config)
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    configure_logging(log_level or settings.logging.level, settings.logging.json_output)
    ctx.obj = {"settings": settings}


@cli.command()
@click.option("--host", default=None, help="Interface to bind (overrides configuration)")
@click.option("--port", type=int, default=None, help="Port to listen on (overrides configuration)")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    from issue_analyzer.server import create_app

    settings: AppSettings = ctx.obj["settings"]
    try:
        app = create_app(settings)
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    uvicorn.run(app, host=host or settings.server.host, port=port or settings.server.port)


@cli.command()
@click.argument("issue_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def analyze(ctx: click.Context, issue_file: Path) -> None:
    """Analyze the issue stored in ISSUE_FILE (JSON) and print the result."""
    _run_operation(ctx, issue_file, "analyze")


@cli.command()
@click.argument("issue_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def plan(ctx: click.Context, issue_file: Path) -> None:
    """Generate a plan for the issue stored in ISSUE_FILE (JSON) and print it."""
    _run_operation(ctx, issue_file, "plan")


def _run_operation(ctx: click.Context, issue_file: Path, operation: str) -> None:
    try:
        issue = Issue.from_dict(json.loads(issue_file.read_text()))
        client = create_llm_client(ctx.obj["settings"].llm)
        result = asyncio.run(_execute(client, issue, operation))
    except json.JSONDecodeError as e:
        click.echo(f"Error: {issue_file} is not valid JSON: {e}", err=True)
        sys.exit(1)
    except IssueAnalyzerError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug(f"{operation}_error", exc_info=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        log.error(f"{operation}_unexpected", exc_info=True)
        sys.exit(1)

    click.echo(json.dumps(result, indent=2))


async def _execute(client: LLMClient, issue: Issue, operation: str) -> dict:
    try:
        if operation == "analyze":
            return (await client.analyze_issue(issue)).to_dict()
        return (await client.plan_issue(issue)).to_dict()
    finally:
        await client.close()


if __name__ == "__main__":
    cli()
