"""Tests for the command-line interface."""

from pathlib import Path

import httpx
import pytest
from fastapi import FastAPI

from cnc_library import cli
from cnc_library.infrastructure.api_client import CatalogAPIClient
from cnc_library.infrastructure.config import Settings
from tests.fake_backend import BASE_URL, create_app, make_product


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch) -> FastAPI:
    """Route every CLI client to a fake backend."""
    app = create_app(
        [
            make_product(1, name="Haas Mill PP"),
            make_product(2, name="Fanuc Lathe PP", machineType="TURNING"),
            make_product(3, contentType="INTERPRETER", name="Sinumerik Interpreter"),
            make_product(4, machineManufacturer="DMG Mori"),
            make_product(5, name="Five Axis PP", numberOfAxes=5),
        ]
    )

    def client_factory(**kwargs) -> CatalogAPIClient:
        return CatalogAPIClient(transport=httpx.ASGITransport(app=app), **kwargs)

    monkeypatch.setattr(cli, "CatalogAPIClient", client_factory)
    return app


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(api_url=BASE_URL, session_file=tmp_path / "session.json", log_level="WARNING")


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])

    def test_search_defaults(self) -> None:
        args = cli.build_parser().parse_args(["search"])

        assert args.query == ""
        assert args.sort == "popular"
        assert args.pages == 1
        assert args.page_size is None

    @pytest.mark.parametrize("option", ["--page-size", "--pages"])
    @pytest.mark.parametrize("value", ["0", "-3", "x"])
    def test_non_positive_counts_rejected(self, option: str, value: str) -> None:
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["search", option, value])

    def test_page_size_parsed(self) -> None:
        args = cli.build_parser().parse_args(["search", "--page-size", "5"])

        assert args.page_size == 5


class TestSearchCommand:
    """Tests for `cnc-library search`."""

    @pytest.mark.asyncio
    async def test_pages_are_appended(
        self, backend: FastAPI, settings: Settings, capsys: pytest.CaptureFixture
    ) -> None:
        code = await cli.main(["search", "--pages", "2", "--page-size", "2"], settings)

        out = capsys.readouterr().out.splitlines()
        assert code == 0
        assert [line.split()[0] for line in out[:-1]] == ["5", "4", "3", "2"]
        assert out[-1] == "-- 4 of 5 shown (more available)"
        assert [s["page"] for s in backend.state.searches] == [0, 1]

    @pytest.mark.asyncio
    async def test_filters_and_query(
        self, backend: FastAPI, settings: Settings, capsys: pytest.CaptureFixture
    ) -> None:
        code = await cli.main(["search", "pp", "--axes", "5", "--sort", "recent"], settings)

        out = capsys.readouterr().out.splitlines()
        assert code == 0
        assert "Five Axis PP" in out[0]
        assert out[-1] == "-- 1 of 1 shown"
        request = backend.state.searches[-1]
        assert request["query"] == "pp"
        assert request["numberOfAxes"] == 5
        assert request["sortBy"] == "createdAt"

    @pytest.mark.asyncio
    async def test_failure_exit_code(
        self, backend: FastAPI, settings: Settings, capsys: pytest.CaptureFixture
    ) -> None:
        backend.state.fail_search = True

        code = await cli.main(["search"], settings)

        captured = capsys.readouterr()
        assert code == 1
        assert "! Failed to search products" in captured.err
        assert captured.out.strip() == "-- 0 of ? shown"


class TestOtherCommands:
    """Tests for filters, login and logout."""

    @pytest.mark.asyncio
    async def test_filters(
        self, backend: FastAPI, settings: Settings, capsys: pytest.CaptureFixture
    ) -> None:
        code = await cli.main(["filters"], settings)

        out = capsys.readouterr().out
        assert code == 0
        assert "Provided by: DMG Mori, Haas" in out
        assert "Category: CNC Machines" in out
        assert "Machine type: Milling, Turning" in out

    @pytest.mark.asyncio
    async def test_login_and_logout(
        self, backend: FastAPI, settings: Settings, capsys: pytest.CaptureFixture
    ) -> None:
        code = await cli.main(["login", "admin1", "--password", "secret"], settings)

        assert code == 0
        assert "Logged in as admin1 (Admin)" in capsys.readouterr().out
        assert settings.session_file.exists()

        code = await cli.main(["logout"], settings)

        assert code == 0
        assert not settings.session_file.exists()

    @pytest.mark.asyncio
    async def test_bad_login(
        self, backend: FastAPI, settings: Settings, capsys: pytest.CaptureFixture
    ) -> None:
        code = await cli.main(["login", "admin1", "--password", "nope"], settings)

        assert code == 1
        assert "Invalid username or password" in capsys.readouterr().err
        assert not settings.session_file.exists()
