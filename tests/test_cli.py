"""Tests for the ptcloud command-line interface."""

import json
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from ptcloud_client.cli import app
from ptcloud_client.cli.client_factory import get_client
from ptcloud_client.cli.config import CLIConfig, OutputFormat
from ptcloud_client.cli.formatters import format_response
from ptcloud_client.cli.runner import _is_token_invalid_error
from ptcloud_client.exceptions import CloudAuthError, CloudTransportError
from ptcloud_client.models.responses import Decoded, Raw

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point XDG directories at a temp dir and clear credentials."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for name in (
        "MEOCLOUD_CONSUMER_KEY",
        "MEOCLOUD_CONSUMER_SECRET",
        "CLOUDPT_CONSUMER_KEY",
        "CLOUDPT_CONSUMER_SECRET",
        "PTCLOUD_SERVICE",
        "PTCLOUD_SANDBOX",
        "PTCLOUD_CLI_CONFIG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def fake_client(monkeypatch: pytest.MonkeyPatch, make_client):
    """Replace the CLI client factory with a client on a mock transport."""

    def _install(module: str, handler):
        client, recorder = make_client(handler)

        @contextmanager
        def _get_client(config) -> Iterator:
            yield client

        monkeypatch.setattr(f"ptcloud_client.cli.commands.{module}.get_client", _get_client)
        return recorder

    return _install


def token_file(tmp_path: Path, name: str = "meocloud-production-token.json") -> Path:
    return tmp_path / "data" / "ptcloud-cli" / name


class TestAuthCommands:
    """Tests for 'ptcloud auth'."""

    def test_status_without_token(self) -> None:
        result = runner.invoke(app, ["auth", "status"])

        assert result.exit_code == 0
        assert "Not authenticated" in result.output

    def test_status_with_token(self, isolated_env: Path) -> None:
        path = token_file(isolated_env)
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"token": "t", "token_secret": "s"}))

        result = runner.invoke(app, ["auth", "status"])

        assert result.exit_code == 0
        assert "Token found" in result.output

    def test_status_is_per_service_and_environment(self, isolated_env: Path) -> None:
        path = token_file(isolated_env)
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"token": "t", "token_secret": "s"}))

        result = runner.invoke(app, ["--service", "cloudpt", "--sandbox", "auth", "status"])

        assert result.exit_code == 0
        assert "Not authenticated" in result.output

    def test_logout_clears_token(self, isolated_env: Path) -> None:
        path = token_file(isolated_env)
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"token": "t", "token_secret": "s"}))

        result = runner.invoke(app, ["auth", "logout"])

        assert result.exit_code == 0
        assert not path.exists()

    def test_configure_saves_credentials(self, isolated_env: Path) -> None:
        config_dir = isolated_env / "cfg"

        result = runner.invoke(
            app,
            ["--config-dir", str(config_dir), "auth", "configure"],
            input="my_key\nmy_secret\n",
        )

        assert result.exit_code == 0, result.output
        saved = json.loads((config_dir / "meocloud.json").read_text())
        assert saved == {"consumer_key": "my_key", "consumer_secret": "my_secret"}

    def test_status_reports_missing_credentials(self) -> None:
        result = runner.invoke(app, ["auth", "status"])

        assert "ptcloud auth configure" in result.output

    def test_logout_without_token(self) -> None:
        result = runner.invoke(app, ["auth", "logout"])

        assert result.exit_code == 0
        assert "No token to clear" in result.output


class TestCredentials:
    """Missing consumer credentials are reported, not raised."""

    def test_missing_credentials(self) -> None:
        result = runner.invoke(app, ["account", "info"])

        assert result.exit_code == 1
        assert "Missing credentials" in result.output

    def test_credentials_from_file(self, isolated_env: Path) -> None:
        config = CLIConfig(config_dir=isolated_env / "cfg")
        config.save_credentials("file_key", "file_secret")

        assert config.load_credentials() == ("file_key", "file_secret")
        assert config.client_config().consumer_key == "file_key"

    def test_env_overrides_file(
        self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config = CLIConfig(config_dir=isolated_env / "cfg")
        config.save_credentials("file_key", "file_secret")
        monkeypatch.setenv("MEOCLOUD_CONSUMER_KEY", "env_key")

        assert config.load_credentials() == ("env_key", "file_secret")


class TestFileCommands:
    """Tests for 'ptcloud files'."""

    def test_list_json(self, fake_client) -> None:
        recorder = fake_client(
            "files",
            lambda request: httpx.Response(
                200, json={"path": "/Photos", "contents": [{"path": "/Photos/a.png"}]}
            ),
        )

        result = runner.invoke(app, ["files", "ls", "/Photos", "-o", "json"])

        assert result.exit_code == 0, result.output
        assert "/Photos/a.png" in result.output
        assert "http_response_code" not in result.output
        assert str(recorder.last.url).startswith(
            "https://publicapi.meocloud.pt/1/List/meocloud/Photos"
        )

    def test_not_found_exits_with_error(self, fake_client) -> None:
        fake_client("files", lambda request: httpx.Response(404))

        result = runner.invoke(app, ["files", "meta", "/missing"])

        assert result.exit_code == 1
        assert "404 Not Found" in result.output

    def test_get_writes_file(self, fake_client, tmp_path: Path) -> None:
        fake_client("files", lambda request: httpx.Response(200, content=b"binary\x00data"))
        dest = tmp_path / "out.bin"

        result = runner.invoke(app, ["files", "get", "/a.bin", "--dest", str(dest)])

        assert result.exit_code == 0, result.output
        assert dest.read_bytes() == b"binary\x00data"

    def test_put_missing_local_file(self, fake_client, tmp_path: Path) -> None:
        recorder = fake_client("files", lambda request: httpx.Response(200, json={}))

        result = runner.invoke(app, ["files", "put", str(tmp_path / "nope.txt")])

        assert result.exit_code == 1
        assert "Unable to open file" in result.output
        assert recorder.requests == []

    def test_rm_with_yes(self, fake_client) -> None:
        recorder = fake_client("files", lambda request: httpx.Response(200, json={}))

        result = runner.invoke(app, ["files", "rm", "/Old", "--yes"])

        assert result.exit_code == 0, result.output
        assert str(recorder.last.url) == "https://publicapi.meocloud.pt/1/Fileops/Delete"

    def test_signed_url(self, fake_client) -> None:
        recorder = fake_client("files", lambda request: httpx.Response(200, json={}))

        result = runner.invoke(app, ["files", "url", "/a.png"])

        assert result.exit_code == 0, result.output
        assert "https://api-content.meocloud.pt/1/Files/meocloud/a.png?" in result.output
        assert "oauth_signature=" in result.output
        assert recorder.requests == []


class TestShareCommands:
    """Tests for 'ptcloud share'."""

    def test_unlink(self, fake_client) -> None:
        recorder = fake_client("share", lambda request: httpx.Response(200, json={}))

        result = runner.invoke(app, ["share", "unlink", "abc123"])

        assert result.exit_code == 0, result.output
        assert recorder.last.content == b"shareid=abc123"


class TestTokenInvalidDetection:
    """Which errors trigger the re-authentication prompt."""

    def test_rejected_access_token(self) -> None:
        error = CloudAuthError("401 Unauthorized", stage="protected_resource", status_code=401)
        assert _is_token_invalid_error(error)

    def test_forbidden_is_not_token_error(self) -> None:
        error = CloudAuthError("403 Forbidden", stage="protected_resource", status_code=403)
        assert not _is_token_invalid_error(error)

    def test_handshake_failure_is_not_token_error(self) -> None:
        error = CloudAuthError("401 Unauthorized", stage="request_token", status_code=401)
        assert not _is_token_invalid_error(error)

    def test_transport_error(self) -> None:
        assert not _is_token_invalid_error(CloudTransportError("500", status_code=500))

    def test_declined_reauth_exits(self, fake_client) -> None:
        fake_client("account", lambda request: httpx.Response(401))

        result = runner.invoke(app, ["account", "info"], input="n\n")

        assert result.exit_code == 1
        assert "ptcloud auth login" in result.output


class TestFormatResponse:
    """Rendering decoded payloads as table, CSV or JSON."""

    def test_table_from_items_key(self, capsys: pytest.CaptureFixture[str]) -> None:
        response = Decoded(
            data={
                "path": "/Photos",
                "contents": [{"path": "/Photos/a.png", "size": "1 KB"}],
                "http_response_code": 200,
            },
            status_code=200,
        )

        format_response(
            response, OutputFormat.TABLE, items_key="contents", columns=["path", "size", "rev"]
        )

        out = capsys.readouterr().out
        assert "/Photos/a.png" in out
        assert "1 KB" in out
        assert "Rev" not in out

    def test_csv_rows(self, capsys: pytest.CaptureFixture[str]) -> None:
        response = Decoded(
            data=[{"path": "/a", "size": 1}, {"path": "/b", "size": 2}], status_code=200
        )

        format_response(response, OutputFormat.CSV)

        lines = capsys.readouterr().out.splitlines()
        assert lines == ["path,size", "/a,1", "/b,2"]

    def test_scalar_list(self, capsys: pytest.CaptureFixture[str]) -> None:
        response = Decoded(data=["first", "second"], status_code=200)

        format_response(response, OutputFormat.CSV)

        assert capsys.readouterr().out.splitlines() == ["value", "first", "second"]

    def test_json_hides_status_field(self, capsys: pytest.CaptureFixture[str]) -> None:
        response = Decoded(data={"quota": 5, "http_response_code": 200}, status_code=200)

        format_response(response, OutputFormat.JSON)

        assert json.loads(capsys.readouterr().out) == {"quota": 5}

    def test_raw_is_summarised(self, capsys: pytest.CaptureFixture[str]) -> None:
        response = Raw(content=b"\x89PNG", status_code=200, content_type="image/png")

        format_response(response, OutputFormat.TABLE)

        assert "4 bytes (image/png)" in capsys.readouterr().out


class TestClientFactory:
    """The CLI client factory."""

    def test_loads_saved_token(
        self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MEOCLOUD_CONSUMER_KEY", "k")
        monkeypatch.setenv("MEOCLOUD_CONSUMER_SECRET", "s")
        config = CLIConfig(data_dir=isolated_env / "tokens")
        config.token_path.parent.mkdir(parents=True)
        config.token_path.write_text(json.dumps({"token": "t", "token_secret": "ts"}))

        with get_client(config) as client:
            assert client.is_authenticated
            assert client.config.consumer_key == "k"
            assert client._http_client is not None

        assert client._http_client is None
