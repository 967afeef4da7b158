"""Tests for the shiprate CLI commands."""

import json

import pytest
from typer.testing import CliRunner

from shiprate.cli import main as cli_main
from shiprate.cli.main import app
from tests.helpers import StubTransport
from tests.helpers.ups_responses import OAUTH_SUCCESS, RATE_400, RATE_SUCCESS

runner = CliRunner()


class _StubHttpxTransport(StubTransport):
    """StubTransport usable as ``async with HttpxTransport(...)``."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return None


@pytest.fixture
def ups_env(monkeypatch):
    monkeypatch.setenv("UPS_CLIENT_ID", "cli_id")
    monkeypatch.setenv("UPS_CLIENT_SECRET", "cli_secret")
    monkeypatch.setenv("UPS_BASE_URL", "https://wwwcie.ups.com")


@pytest.fixture
def http_stub(monkeypatch):
    stub = _StubHttpxTransport()
    stub.token_response = OAUTH_SUCCESS
    stub.rate_response = RATE_SUCCESS
    monkeypatch.setattr(cli_main, "HttpxTransport", lambda timeout_ms: stub)
    return stub


@pytest.fixture
def request_file(tmp_path, rate_request):
    path = tmp_path / "request.json"
    path.write_text(json.dumps(rate_request))
    return path


class TestQuoteCommand:
    """Test shiprate quote."""

    def test_quote_table(self, ups_env, http_stub, request_file):
        """Test quotes are rendered as a table."""
        result = runner.invoke(app, ["quote", str(request_file)])
        assert result.exit_code == 0, result.output
        assert "UPS Ground" in result.output
        assert "12.45 USD" in result.output

    def test_quote_json(self, ups_env, http_stub, request_file):
        """Test --json prints parseable quotes."""
        result = runner.invoke(app, ["quote", str(request_file), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [q["service_code"] for q in data["quotes"]] == ["03", "02", "01"]
        assert data["quotes"][2]["amount"] == "48.00"

    def test_service_option(self, ups_env, http_stub, request_file):
        """Test --service switches to Rate mode."""
        result = runner.invoke(app, ["quote", str(request_file), "-s", "ground"])
        assert result.exit_code == 0, result.output
        call = http_stub.rate_calls[0]
        assert call.url.endswith("/Rate")
        assert call.body["RateRequest"]["Shipment"]["Service"]["Code"] == "03"

    def test_carrier_error_exit_code(self, ups_env, http_stub, request_file):
        """Test carrier errors exit 1 with the structured error."""
        http_stub.rate_response = RATE_400
        result = runner.invoke(app, ["quote", str(request_file), "--json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["error"]["kind"] == "BAD_REQUEST"
        assert data["error"]["carrier_code"] == "111210"

    def test_validation_error(self, ups_env, http_stub, tmp_path):
        """Test invalid requests exit 1 without HTTP calls."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"origin": {}}))
        result = runner.invoke(app, ["quote", str(path)])
        assert result.exit_code == 1
        assert "VALIDATION_ERROR" in result.output
        assert http_stub.calls == []

    def test_missing_credentials(self, http_stub, request_file):
        """Test missing config exits 2."""
        result = runner.invoke(app, ["quote", str(request_file)])
        assert result.exit_code == 2
        assert "UPS_CLIENT_ID" in result.output

    def test_unreadable_request(self, ups_env, http_stub, tmp_path):
        """Test malformed request JSON exits 2."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        result = runner.invoke(app, ["quote", str(path)])
        assert result.exit_code == 2

    def test_non_object_request(self, ups_env, http_stub, tmp_path):
        """Test a JSON array request exits 2."""
        path = tmp_path / "list.json"
        path.write_text("[]")
        result = runner.invoke(app, ["quote", str(path)])
        assert result.exit_code == 2

    def test_config_file_option(self, http_stub, request_file, tmp_path):
        """Test --config supplies credentials."""
        config = tmp_path / "alt.yaml"
        config.write_text(
            "ups:\n  client_id: f\n  client_secret: s\n  base_url: https://wwwcie.ups.com\n"
        )
        result = runner.invoke(app, ["--config", str(config), "quote", str(request_file)])
        assert result.exit_code == 0, result.output
        assert http_stub.token_calls[0].url == "https://wwwcie.ups.com/security/v1/oauth/token"


class TestOtherCommands:
    """Test services and config show."""

    def test_services(self):
        """Test service levels are listed."""
        result = runner.invoke(app, ["services"])
        assert result.exit_code == 0
        assert "next_day_air" in result.output

    def test_config_show_masks(self, ups_env):
        """Test config show hides secrets."""
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "cli_secret" not in result.output
        assert "https://wwwcie.ups.com" in result.output
