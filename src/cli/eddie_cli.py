"""Typer-based command line for running Eddie.surf node operations."""

import os

os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")

from pathlib import Path

_project_root = Path(__file__).resolve().parent.parent.parent
from dotenv import load_dotenv

load_dotenv(_project_root / ".env")
load_dotenv(_project_root / ".env.local")

import asyncio
import json
from typing import Any, Optional

import httpx
import typer
from pydantic import ValidationError as PydanticValidationError

from src.config import Settings, get_settings
from src.logging_config import setup_logfire
from src.models.request_models import JobType, Operation
from src.services.client_protocol import get_eddie_client
from src.services.errors import NodeOperationError
from src.services.node_executor import EddieSurfNode

app = typer.Typer(help="Web crawling and smart search with Eddie.surf")

CONTEXT_HELP = "Context object (JSON) to guide AI processing and data extraction"
DRY_RUN_HELP = "Print the request instead of sending it"


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _load_settings() -> Settings:
    """Load settings and configure logging, or exit when the API key is missing."""
    try:
        settings = get_settings()
    except PydanticValidationError as e:
        raise _fail("EDDIE_API_KEY is not set (environment, .env or .env.local)") from e
    setup_logfire(settings)
    return settings


def _advanced_options(**options: Any) -> dict[str, Any]:
    """Collect the advanced options that were given on the command line."""
    return {name: value for name, value in options.items() if value is not None}


def _run_single(operation: Operation, params: dict[str, Any], dry_run: bool) -> None:
    """Run one item through the node and print its response."""
    node = EddieSurfNode()
    try:
        if dry_run:
            _echo_json(node.build_request(operation.value, params).to_dict())
            return
        node = EddieSurfNode(client=get_eddie_client(_load_settings()))
        results = asyncio.run(node.execute([{**params, "operation": operation.value}]))
    except NodeOperationError as e:
        raise _fail(e.message) from e
    except httpx.HTTPError as e:
        raise _fail(str(e)) from e
    _echo_json(results[0].json)


@app.command()
def crawl(
    urls: str = typer.Argument(..., help="Comma-separated list of URLs to crawl"),
    context: str = typer.Option("{}", help=CONTEXT_HELP),
    json_schema: str = typer.Option(
        "{}", "--schema", help="JSON schema defining the structure of data to extract"
    ),
    max_depth: Optional[int] = typer.Option(None, help="Maximum link depth (1-10)"),
    max_pages: Optional[int] = typer.Option(None, help="Maximum number of pages"),
    timeout_per_page: Optional[int] = typer.Option(
        None, help="Timeout per page in seconds (1-180)"
    ),
    callback_url: Optional[str] = typer.Option(None, help="Job completion webhook URL"),
    callback_mode: Optional[str] = typer.Option(None, help="once or multi"),
    rules: Optional[str] = typer.Option(None, help="Comma-separated instructions"),
    include_technical: Optional[bool] = typer.Option(
        None, "--include-technical/--no-include-technical"
    ),
    mock: Optional[bool] = typer.Option(None, "--mock/--no-mock"),
    batch: bool = typer.Option(False, "--batch", help="Use crawl-batch (200+ URLs)"),
    dry_run: bool = typer.Option(False, "--dry-run", help=DRY_RUN_HELP),
):
    """Crawl 1-199 URLs (or 200+ with --batch) and extract data."""
    params = {
        "urls": urls,
        "context": context,
        "jsonSchema": json_schema,
        "advancedOptions": _advanced_options(
            maxDepth=max_depth,
            maxPages=max_pages,
            timeoutPerPage=timeout_per_page,
            callbackUrl=callback_url,
            callbackMode=callback_mode,
            rules=rules,
            includeTechnical=include_technical,
            mock=mock,
        ),
    }
    operation = Operation.CRAWL_BATCH if batch else Operation.CRAWL
    _run_single(operation, params, dry_run)


@app.command()
def search(
    query: str = typer.Argument(..., help="The search query"),
    context: str = typer.Option("{}", help=CONTEXT_HELP),
    max_results: Optional[int] = typer.Option(None, help="Maximum results (1-5000)"),
    website_only: Optional[bool] = typer.Option(
        None, "--website-only/--no-website-only"
    ),
    skip_duplicate_domains: Optional[bool] = typer.Option(
        None, "--skip-duplicate-domains/--no-skip-duplicate-domains"
    ),
    callback_url: Optional[str] = typer.Option(None, help="Job completion webhook URL"),
    rules: Optional[str] = typer.Option(None, help="Comma-separated instructions"),
    mock: Optional[bool] = typer.Option(None, "--mock/--no-mock"),
    dry_run: bool = typer.Option(False, "--dry-run", help=DRY_RUN_HELP),
):
    """AI-powered search across websites."""
    params = {
        "query": query,
        "context": context,
        "advancedOptions": _advanced_options(
            maxResults=max_results,
            websiteOnly=website_only,
            skipDuplicateDomains=skip_duplicate_domains,
            callbackUrl=callback_url,
            rules=rules,
            mock=mock,
        ),
    }
    _run_single(Operation.SMART_SEARCH, params, dry_run)


@app.command()
def status(
    job_id: str = typer.Argument(..., help="The job ID to check status for"),
    job_type: JobType = typer.Option(JobType.CRAWL, help="Type of job"),
    site_id: str = typer.Option("", help="Individual site within a crawl job"),
    dry_run: bool = typer.Option(False, "--dry-run", help=DRY_RUN_HELP),
):
    """Check the status of a crawl or search job."""
    params = {"jobType": job_type.value, "jobId": job_id, "siteId": site_id}
    _run_single(Operation.GET_STATUS, params, dry_run)


@app.command()
def run(
    items_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="JSON file with a list of item parameters"
    ),
    operation: Optional[Operation] = typer.Option(
        None, help="Operation for every item (defaults to the first item's)"
    ),
    continue_on_fail: Optional[bool] = typer.Option(
        None,
        "--continue-on-fail/--fail-fast",
        help="Record per-item errors instead of aborting (default from settings)",
    ),
):
    """Execute every item of a JSON file through the node."""
    try:
        items = json.loads(items_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise _fail(f"{items_file} is not valid JSON: {e.msg}") from e
    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        raise _fail(f"{items_file} must contain a JSON list of objects")

    if operation is not None:
        items = [{**item, "operation": operation.value} for item in items]

    settings = _load_settings()
    node = EddieSurfNode(
        client=get_eddie_client(settings),
        continue_on_fail=(
            settings.continue_on_fail if continue_on_fail is None else continue_on_fail
        ),
    )
    try:
        results = asyncio.run(node.execute(items))
    except NodeOperationError as e:
        raise _fail(f"item {e.item_index}: {e.message}") from e
    except httpx.HTTPError as e:
        raise _fail(str(e)) from e

    _echo_json(
        [{"json": r.json, "pairedItem": {"item": r.paired_item}} for r in results]
    )


@app.command()
def health():
    """Check that the configured API key is accepted."""
    client = get_eddie_client(_load_settings())
    if not asyncio.run(client.test_credentials()):
        raise _fail(f"credential test failed against {client.credentials.base_url}")
    typer.echo(f"OK: {client.credentials.base_url}")


if __name__ == "__main__":
    app()
