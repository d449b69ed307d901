from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from scripture_reader.app import ReaderApp
from scripture_reader.cli import cli
from scripture_reader.fetcher import BibleApiFetcher
from scripture_reader.store import FileStore
from scripture_reader.config import FAVORITES_KEY, FONT_SIZE_KEY, LAST_READ_KEY, PREFERENCES_KEY


@pytest.fixture
def app(store, fetcher, notices) -> ReaderApp:
    return ReaderApp(store, fetcher, notices)


def _invoke(app, *args, **kwargs):
    return CliRunner().invoke(cli, list(args), obj=app, catch_exceptions=False, **kwargs)


def test_read_prints_chapter_and_remembers_it(app, store) -> None:
    result = _invoke(app, "read", "sl", "23")

    assert result.exit_code == 0
    assert "O Senhor é o meu pastor" in result.output
    assert store.get_json(LAST_READ_KEY) == {"book": "Salmos", "chapter": 23}


def test_read_unknown_book(app, store) -> None:
    result = _invoke(app, "read", "Enoque", "1")

    assert "Unknown book: Enoque" in result.output
    assert store.get(LAST_READ_KEY) is None


def test_resume_without_history(app) -> None:
    result = _invoke(app, "resume")
    assert "Nothing to resume" in result.output


def test_resume_reopens_last_chapter(app, store) -> None:
    store.set_json(LAST_READ_KEY, {"book": "Salmos", "chapter": 23})

    result = _invoke(app, "resume")

    assert "Salmos 23" in result.output
    assert "Certamente que a bondade" in result.output


def test_favorite_twice_then_list(app, store, notices) -> None:
    _invoke(app, "favorite", "Salmos", "23", "1")
    _invoke(app, "favorite", "Salmos", "23", "1")

    assert store.get_json(FAVORITES_KEY) == ["Salmos 23:1 - O Senhor é o meu pastor, nada me faltará."]
    assert "Este versículo já está nos favoritos." in notices.messages()

    result = _invoke(app, "favorites")
    assert "Salmos 23:1" in result.output


def test_favorite_missing_verse(app, store) -> None:
    result = _invoke(app, "favorite", "Salmos", "23", "40")
    assert "Verse 40 is not loaded" in result.output
    assert store.get(FAVORITES_KEY) is None


def test_preference_commands(app, store) -> None:
    assert _invoke(app, "dark-mode", "on").exit_code == 0
    assert _invoke(app, "tab", "settings").exit_code == 0
    assert _invoke(app, "font-size", "pequena").exit_code == 0

    assert store.get_json(PREFERENCES_KEY) == {"darkMode": True, "lastTab": "settings"}
    assert store.get(FONT_SIZE_KEY) == "pequena"

    result = _invoke(app, "settings")
    assert "Escuro" in result.output
    assert "15pt" in result.output


def test_font_size_rejects_unknown_choice(app) -> None:
    result = CliRunner().invoke(cli, ["font-size", "enorme"], obj=app)
    assert result.exit_code != 0


def test_wipe_asks_for_confirmation(app, store) -> None:
    store.set_json(FAVORITES_KEY, ["x"])

    result = _invoke(app, "wipe", input="n\n")
    assert result.exit_code != 0
    assert store.get(FAVORITES_KEY) is not None

    result = _invoke(app, "wipe", input="y\n")
    assert result.exit_code == 0
    assert store.keys() == []


def test_wipe_yes_skips_prompt(app, store) -> None:
    store.set(FONT_SIZE_KEY, "grande")
    assert _invoke(app, "wipe", "--yes").exit_code == 0
    assert store.keys() == []


def test_export(app, store, tmp_path) -> None:
    store.set_json(FAVORITES_KEY, ["x"])
    target = tmp_path / "export.json"

    result = _invoke(app, "export", str(target))

    assert result.exit_code == 0
    assert json.loads(target.read_text(encoding="utf-8"))["favorites"] == ["x"]


def test_books_and_chapters(app) -> None:
    result = _invoke(app, "books")
    assert "Apocalipse" in result.output

    result = _invoke(app, "chapters", "Judas")
    assert "1 chapters" in result.output


def test_read_only_commands_leave_data_dir_alone(tmp_path) -> None:
    data_dir = tmp_path / "data"
    runner = CliRunner()

    for args in (["books"], ["chapters", "Judas"], ["about"], ["favorites"]):
        result = runner.invoke(cli, ["--data-dir", str(data_dir), *args], catch_exceptions=False)
        assert result.exit_code == 0

    assert not data_dir.exists()


def test_cli_built_app_closes_fetcher(tmp_path, monkeypatch) -> None:
    closed = []
    monkeypatch.setattr(BibleApiFetcher, "close", lambda self: closed.append(self))

    result = CliRunner().invoke(
        cli, ["--data-dir", str(tmp_path), "dark-mode", "on"], catch_exceptions=False
    )

    assert result.exit_code == 0
    assert len(closed) == 1
    assert FileStore(tmp_path).get_json(PREFERENCES_KEY) == {"darkMode": True, "lastTab": "bible"}
