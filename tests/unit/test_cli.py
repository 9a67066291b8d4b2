"""Tests for the Eddie.surf CLI."""

import json

import httpx
import respx
from typer.testing import CliRunner

from src.cli.eddie_cli import app

BASE_URL = "https://api.eddie.test"

runner = CliRunner()


class TestDryRun:
    """Commands with --dry-run print the request and never need credentials."""

    def test_crawl_dry_run(self):
        result = runner.invoke(
            app,
            [
                "crawl",
                "https://a.com, https://b.com",
                "--context",
                '{"goal": "pricing"}',
                "--max-depth",
                "4",
                "--rules",
                "a, ,b",
                "--dry-run",
            ],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {
            "method": "POST",
            "path": "/crawl",
            "body": {
                "urls": ["https://a.com", "https://b.com"],
                "context": {"goal": "pricing"},
                "json": {},
                "max_depth": 4,
                "rules": ["a", "b"],
            },
        }

    def test_crawl_batch_flag(self, make_urls):
        result = runner.invoke(
            app, ["crawl", ",".join(make_urls(200)), "--batch", "--dry-run"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["path"] == "/crawl-batch"

    def test_search_dry_run(self):
        result = runner.invoke(
            app,
            ["search", "  find pricing ", "--max-results", "20", "--no-website-only", "--dry-run"],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["body"] == {
            "query": "find pricing",
            "context": {},
            "max_results": 20,
            "website_only": False,
        }

    def test_status_dry_run(self):
        result = runner.invoke(
            app, ["status", "abc", "--job-type", "smart-search", "--site-id", "s1", "--dry-run"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"method": "GET", "path": "/smart-search/abc"}

    def test_validation_error_exits_1(self):
        result = runner.invoke(app, ["crawl", "example.com", "--dry-run"])

        assert result.exit_code == 1
        assert "Invalid URL format: example.com" in result.output


class TestLiveCommands:
    """Commands that talk to the (mocked) API."""

    @respx.mock
    def test_status(self, mock_settings):
        respx.get(f"{BASE_URL}/crawl/job-1").mock(
            return_value=httpx.Response(200, json={"status": "completed"})
        )

        result = runner.invoke(app, ["status", "job-1"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"status": "completed"}

    @respx.mock
    def test_http_error_exits_1(self, mock_settings):
        respx.post(f"{BASE_URL}/smart-search").mock(
            return_value=httpx.Response(402, json={"error": "out of credits"})
        )

        result = runner.invoke(app, ["search", "crm tools"])

        assert result.exit_code == 1
        assert "402" in result.output

    @respx.mock
    def test_health_ok(self, mock_settings):
        respx.get(f"{BASE_URL}/health").mock(return_value=httpx.Response(200))

        result = runner.invoke(app, ["health"])

        assert result.exit_code == 0
        assert "OK" in result.stdout

    @respx.mock
    def test_health_failure(self, mock_settings):
        respx.get(f"{BASE_URL}/health").mock(return_value=httpx.Response(401))

        result = runner.invoke(app, ["health"])

        assert result.exit_code == 1
        assert "credential test failed" in result.output

    @respx.mock
    def test_run_continue_on_fail(self, mock_settings, tmp_path):
        respx.get(f"{BASE_URL}/crawl/a").mock(
            return_value=httpx.Response(200, json={"status": "done"})
        )
        items_file = tmp_path / "items.json"
        items_file.write_text(json.dumps([{"jobId": "a"}, {"jobId": ""}]))

        result = runner.invoke(
            app,
            ["run", str(items_file), "--operation", "getStatus", "--continue-on-fail"],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == [
            {"json": {"status": "done"}, "pairedItem": {"item": 0}},
            {"json": {"error": "Job ID is required"}, "pairedItem": {"item": 1}},
        ]

    @respx.mock
    def test_run_fail_fast(self, mock_settings, tmp_path):
        items_file = tmp_path / "items.json"
        items_file.write_text(json.dumps([{"operation": "getStatus", "jobId": " "}]))

        result = runner.invoke(app, ["run", str(items_file)])

        assert result.exit_code == 1
        assert "item 0: Job ID is required" in result.output

    def test_run_rejects_non_list(self, mock_settings, tmp_path):
        items_file = tmp_path / "items.json"
        items_file.write_text(json.dumps({"jobId": "a"}))

        result = runner.invoke(app, ["run", str(items_file)])

        assert result.exit_code == 1
        assert "must contain a JSON list" in result.output
