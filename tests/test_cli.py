"""Command line entry point."""

import sys

import pytest

from conftest import FOREIGN_HTML, SITE_HTML
from sitestage import cli
from sitestage.models import FileInfo
from sitestage.registry import RecentFiles
from sitestage.storage import StateStore


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["sitestage", *args])
    cli.main()


def test_open_and_save_copy(monkeypatch, tmp_path):
    source = tmp_path / "index.html"
    source.write_text(SITE_HTML, encoding="utf-8")
    output = tmp_path / "out" / "index.html"
    state = tmp_path / "state.db"

    run_cli(monkeypatch, "--state", str(state), "open", str(source), "-o", str(output))

    saved = output.read_text(encoding="utf-8")
    assert saved.startswith("<!DOCTYPE html>")
    assert "silex-runtime" in saved
    assert "silex-temp-tag" not in saved

    urls = [f.url for f in RecentFiles(StateStore(state)).list()]
    assert urls == [FileInfo.from_path(output).url, FileInfo.from_path(source).url]


def test_open_rejected_document_exits(monkeypatch, tmp_path):
    source = tmp_path / "foreign.html"
    source.write_text(FOREIGN_HTML, encoding="utf-8")

    with pytest.raises(SystemExit) as info:
        run_cli(monkeypatch, "--state", str(tmp_path / "state.db"), "open", str(source))
    assert info.value.code == 1


def test_recent(monkeypatch, tmp_path, capsys):
    state = tmp_path / "state.db"
    run_cli(monkeypatch, "--state", str(state), "recent")
    assert "No recent files" in capsys.readouterr().out

    RecentFiles(StateStore(state)).remember(FileInfo(url="file:///sites/a.html", name="a.html"))
    run_cli(monkeypatch, "--state", str(state), "recent")
    out = capsys.readouterr().out
    assert "1. a.html" in out
    assert "file:///sites/a.html" in out

    run_cli(monkeypatch, "--state", str(state), "recent", "--clear")
    assert RecentFiles(StateStore(state)).list() == []
