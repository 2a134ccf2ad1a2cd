from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from lib_leaky_bucket import cli as cli_module
from lib_leaky_bucket import config as leaky_config


@pytest.fixture(autouse=True)
def _reset_dotenv_state() -> Iterator[None]:
    """Reset shared dotenv state around each test."""

    leaky_config._reset_dotenv_state_for_testing()
    yield
    leaky_config._reset_dotenv_state_for_testing()


def test_enable_dotenv_populates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Loading the nearest .env injects values that were not set before."""

    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text(f"{leaky_config.LIMIT_ENV_VAR}=7:0.5\n")
    monkeypatch.chdir(nested)
    monkeypatch.delenv(leaky_config.LIMIT_ENV_VAR, raising=False)

    loaded = leaky_config.enable_dotenv()

    assert loaded == env_file.resolve()
    assert os.environ[leaky_config.LIMIT_ENV_VAR] == "7:0.5"
    assert leaky_config.resolve_limit() == (7, 0.5)

    os.environ.pop(leaky_config.LIMIT_ENV_VAR, None)


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Existing environment variables keep precedence over .env entries."""

    (tmp_path / ".env").write_text(f"{leaky_config.LIMIT_ENV_VAR}=7:0.5\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(leaky_config.LIMIT_ENV_VAR, "3:1.0")

    result = leaky_config.enable_dotenv()

    assert result is not None
    assert os.environ[leaky_config.LIMIT_ENV_VAR] == "3:1.0"


def test_enable_dotenv_uses_python_dotenv_lookup_from_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Without an explicit start directory the search is python-dotenv's own."""

    env_file = tmp_path / ".env"
    env_file.write_text("LEAKY_BUCKET_TEST_MARKER=found\n")
    calls: list[dict[str, object]] = []

    def record_find_dotenv(**kwargs: object) -> str:
        calls.append(kwargs)
        return str(env_file)

    monkeypatch.setattr(leaky_config, "find_dotenv", record_find_dotenv)
    monkeypatch.delenv("LEAKY_BUCKET_TEST_MARKER", raising=False)

    loaded = leaky_config.enable_dotenv()

    assert calls == [{"usecwd": True}]
    assert loaded == env_file.resolve()
    assert os.environ["LEAKY_BUCKET_TEST_MARKER"] == "found"
    os.environ.pop("LEAKY_BUCKET_TEST_MARKER", None)


def test_enable_dotenv_returns_none_when_python_dotenv_finds_nothing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(leaky_config, "find_dotenv", lambda **_: "")

    assert leaky_config.enable_dotenv() is None


def test_enable_dotenv_ignores_missing_file_in_start_directory(tmp_path: Path) -> None:
    result = leaky_config.enable_dotenv(search_from=tmp_path)

    assert result is None or not result.is_relative_to(tmp_path.resolve())


def test_enable_dotenv_loads_only_once(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    first_dir = tmp_path / "first"
    second_dir = tmp_path / "second"
    first_dir.mkdir()
    second_dir.mkdir()
    (first_dir / ".env").write_text("LEAKY_BUCKET_TEST_MARKER=first\n")
    (second_dir / ".env").write_text("LEAKY_BUCKET_TEST_MARKER=second\n")
    monkeypatch.delenv("LEAKY_BUCKET_TEST_MARKER", raising=False)

    first = leaky_config.enable_dotenv(search_from=first_dir)
    second = leaky_config.enable_dotenv(search_from=second_dir)

    assert first == second == (first_dir / ".env").resolve()
    assert os.environ["LEAKY_BUCKET_TEST_MARKER"] == "first"
    os.environ.pop("LEAKY_BUCKET_TEST_MARKER", None)


@pytest.mark.parametrize(
    "explicit, env_value, expected",
    [
        (True, None, True),
        (False, "1", False),
        (None, "1", True),
        (None, "on", True),
        (None, "0", False),
        (None, "", False),
        (None, "maybe", False),
        (None, None, False),
    ],
)
def test_should_use_dotenv(explicit: bool | None, env_value: str | None, expected: bool) -> None:
    assert leaky_config.should_use_dotenv(explicit=explicit, env_value=env_value) is expected


def test_cli_dotenv_toggle_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    """CLI flag wins over environment toggle when deciding whether to load .env."""

    runner = CliRunner()

    calls: list[tuple[tuple[object, ...], dict[str, object]]] = []

    def record_enable(*args: object, **kwargs: object) -> None:
        calls.append((args, kwargs))

    monkeypatch.setattr(leaky_config, "enable_dotenv", record_enable)
    monkeypatch.delenv(leaky_config.DOTENV_ENV_VAR, raising=False)

    result = runner.invoke(cli_module.cli, ["--use-dotenv", "info"])
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    env = {leaky_config.DOTENV_ENV_VAR: "1"}
    result = runner.invoke(cli_module.cli, ["info"], env=env)
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["--no-use-dotenv", "info"], env=env)
    assert result.exit_code == 0
    assert calls == []


@pytest.mark.parametrize(
    "text, expected",
    [
        ("5:1.0", (5, 1.0)),
        (" 12 : 0.25 ", (12, 0.25)),
        ("1:3", (1, 3.0)),
    ],
)
def test_parse_limit_accepts_well_formed_values(text: str, expected: tuple[int, float]) -> None:
    assert leaky_config.parse_limit(text) == expected


def test_resolve_limit_prefers_arguments_over_defaults() -> None:
    assert leaky_config.resolve_limit(4, None, environ={}) == (4, leaky_config.DEFAULT_LEAK_RATE)
    assert leaky_config.resolve_limit(None, 2.5, environ={}) == (leaky_config.DEFAULT_CAPACITY, 2.5)
    assert leaky_config.resolve_limit(4, 2.5, environ={leaky_config.LIMIT_ENV_VAR: "9:9"}) == (9, 9.0)
