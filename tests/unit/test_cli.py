"""Tests for the pkgrecipe CLI.

Registry commands run against a mocked HTTP transport.
"""

import json

import httpx
import pytest
from click.testing import CliRunner

from pkgrecipe import cli
from pkgrecipe.registry import RegistryClient

METADATA = {
    "name": "vibe-d",
    "versions": [
        {"version": "0.9.0", "description": "Event driven web framework", "license": "MIT"},
        {
            "version": "0.9.5",
            "description": "Event driven web framework",
            "dependencies": {"eventcore": "~>0.9"},
        },
        {"version": "0.10.0-beta.1"},
    ],
}

SEARCH_HITS = [
    {"name": "vibe-d", "description": "Event driven web framework", "version": "0.9.5"},
    {"name": "vibe-core", "description": "Core module", "version": "2.0.0"},
]


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/packages/vibe-d.json":
        return httpx.Response(200, json=METADATA)
    if path == "/packages/vibe-d/0.9.5.zip":
        return httpx.Response(200, content=b"archive")
    if path == "/packages/broken.json":
        return httpx.Response(500)
    if path == "/api/packages/search":
        hits = SEARCH_HITS if request.url.params["q"] == "vibe" else []
        return httpx.Response(200, json=hits)
    return httpx.Response(404)


@pytest.fixture
def runner(monkeypatch):
    """CliRunner whose registry commands talk to the mock registry."""
    monkeypatch.setenv("PKGRECIPE_REGISTRY_URL", "https://registry.test")
    monkeypatch.setenv("PKGRECIPE_MAX_ATTEMPTS", "1")

    def make_client(config):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(_handler))
        return RegistryClient(config, http_client=http_client)

    monkeypatch.setattr(cli, "RegistryClient", make_client)
    return CliRunner()


class TestRegistryCommands:
    """Test the registry command group."""

    def test_versions(self, runner):
        result = runner.invoke(cli.main, ["registry", "versions", "vibe-d"])

        assert result.exit_code == 0
        assert result.output.split() == ["0.9.0", "0.9.5", "0.10.0-beta.1"]

    def test_versions_unknown_package(self, runner):
        result = runner.invoke(cli.main, ["registry", "versions", "nope"])

        assert result.exit_code == 1
        assert "Package not found: nope" in result.output

    def test_recipe_table(self, runner):
        result = runner.invoke(cli.main, ["registry", "recipe", "vibe-d"])

        assert result.exit_code == 0
        assert "Package:     vibe-d" in result.output
        assert "Version:     0.9.5" in result.output
        assert "eventcore" in result.output

    def test_recipe_json_with_constraint(self, runner):
        result = runner.invoke(
            cli.main, ["registry", "recipe", "vibe-d", "-c", "~>0.9.0", "--format", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["version"] == "0.9.5"

    def test_recipe_prerelease(self, runner):
        result = runner.invoke(cli.main, ["registry", "recipe", "vibe-d", "--pre", "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["version"] == "0.10.0-beta.1"

    def test_recipe_no_match(self, runner):
        result = runner.invoke(cli.main, ["registry", "recipe", "vibe-d", "-c", ">=1.0.0"])

        assert result.exit_code == 1
        assert "Error: No package candidate found for vibe-d >=1.0.0" in result.output

    def test_recipe_invalid_constraint(self, runner):
        result = runner.invoke(cli.main, ["registry", "recipe", "vibe-d", "-c", "~>x"])

        assert result.exit_code == 1
        assert result.output.startswith("Error:")

    def test_fetch(self, runner, tmp_path):
        destination = tmp_path / "vibe-d.zip"

        result = runner.invoke(cli.main, ["registry", "fetch", "vibe-d", "0.9.5", str(destination)])

        assert result.exit_code == 0
        assert destination.read_bytes() == b"archive"
        assert "Downloaded vibe-d 0.9.5" in result.output

    def test_search(self, runner):
        result = runner.invoke(cli.main, ["registry", "search", "vibe"])

        assert result.exit_code == 0
        assert "vibe-core" in result.output
        assert "Total: 2 package(s)" in result.output

    def test_search_no_results(self, runner):
        result = runner.invoke(cli.main, ["registry", "search", "zzz"])

        assert result.exit_code == 0
        assert "No packages found." in result.output

    def test_registry_failure(self, runner):
        """Test server errors are reported once attempts run out."""
        result = runner.invoke(cli.main, ["registry", "versions", "broken"])

        assert result.exit_code == 1
        assert "Error: Failed to download" in result.output


class TestConfigCommand:
    """Test the config command."""

    def test_shows_environment(self, monkeypatch):
        monkeypatch.setenv("PKGRECIPE_REGISTRY_URL", "https://mirror.example")
        monkeypatch.setenv("PKGRECIPE_TIMEOUT", "5")

        result = CliRunner().invoke(cli.main, ["config"])

        assert result.exit_code == 0
        assert "https://mirror.example/" in result.output
        assert "Timeout:      5s" in result.output

    def test_invalid_environment(self, monkeypatch):
        monkeypatch.setenv("PKGRECIPE_CACHE_TTL", "forever")

        result = CliRunner().invoke(cli.main, ["config"])

        assert result.exit_code == 1
        assert "PKGRECIPE_CACHE_TTL" in result.output


def test_truncate():
    assert cli.truncate(None) == ""
    assert cli.truncate("short") == "short"
    assert cli.truncate("x" * 60, 10) == "xxxxxxx..."
