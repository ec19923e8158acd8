"""End-to-end sessions on a real event loop."""

import asyncio

import pytest
from bs4 import BeautifulSoup

from conftest import FOREIGN_HTML, OTHER_HTML, PUBLISHED_HTML, SITE_HTML
from sitestage.config import LoadSettings
from sitestage.errors import NotEditableError, ProgrammingError, PublishedDocumentError
from sitestage.models import FileInfo, LoadState
from sitestage.storage import MemoryKeyValueStore
from sitestage.workspace import Workspace

OLD_HTML = """<!DOCTYPE html>
<html>
<head><meta name="generator" content="Silex v2.2.0"><title>Old</title></head>
<body class="silex-runtime"><div class="editable-style element-1">old</div></body>
</html>
"""


@pytest.fixture
def site_dir(tmp_path):
    for name, markup in {
        "index.html": SITE_HTML,
        "other.html": OTHER_HTML,
        "published.html": PUBLISHED_HTML,
        "foreign.html": FOREIGN_HTML,
        "old.html": OLD_HTML,
    }.items():
        (tmp_path / name).write_text(markup, encoding="utf-8")
    return tmp_path


def make_workspace(**kwargs):
    return Workspace(
        state=MemoryKeyValueStore(),
        settings=LoadSettings(yield_delay=0),
        **kwargs,
    )


def test_open_and_save_as(site_dir):
    async def run():
        workspace = make_workspace()
        await workspace.open_async(FileInfo.from_path(site_dir / "index.html"))
        assert workspace.loader.state == LoadState.READY

        target = FileInfo.from_path(site_dir / "copy" / "index.html")
        await workspace.save_as_async(target)
        return workspace, target

    workspace, target = asyncio.run(run())

    assert workspace.session.file_info == target
    assert [f.url for f in workspace.recent_files.list()] == [
        target.url,
        FileInfo.from_path(site_dir / "index.html").url,
    ]
    saved = (site_dir / "copy" / "index.html").read_text(encoding="utf-8")
    assert saved == workspace.get_html()
    assert "silex-runtime" in saved


def test_rejected_open_keeps_current_document(site_dir):
    index = FileInfo.from_path(site_dir / "index.html")

    async def run():
        workspace = make_workspace()
        await workspace.open_async(index)
        with pytest.raises(PublishedDocumentError):
            await workspace.open_async(FileInfo.from_path(site_dir / "published.html"))
        with pytest.raises(NotEditableError):
            await workspace.open_async(FileInfo.from_path(site_dir / "foreign.html"))
        return workspace

    workspace = asyncio.run(run())

    assert workspace.session.file_info == index
    assert workspace.status()["title"] == "My site"
    assert len(workspace.notifier.alerts) == 2


def test_missing_file_raises(site_dir):
    async def run():
        workspace = make_workspace()
        await workspace.open_async(FileInfo.from_path(site_dir / "nope.html"))

    with pytest.raises(FileNotFoundError):
        asyncio.run(run())


def test_template_must_be_saved_as(site_dir):
    async def run():
        workspace = make_workspace(templates_dir=site_dir)
        await workspace.open_template_async("index.html")
        assert workspace.session.is_template
        assert workspace.session.file_info is None

        with pytest.raises(ProgrammingError):
            await workspace.save_async()

        await workspace.save_as_async(FileInfo.from_path(site_dir / "mine.html"))
        await workspace.save_async()
        return workspace

    workspace = asyncio.run(run())

    assert not workspace.session.is_template
    assert (site_dir / "mine.html").exists()


def test_old_document_is_upgraded(site_dir):
    async def run():
        workspace = make_workspace()
        await workspace.open_async(FileInfo.from_path(site_dir / "old.html"))
        return workspace

    workspace = asyncio.run(run())

    assert workspace.loader.reloads == 1
    soup = BeautifulSoup(workspace.get_html(), "html.parser")
    assert soup.find("meta", attrs={"name": "generator"})["content"] == "Silex v2.2.7"
    assert soup.find("script", class_="silex-json-styles") is not None
    assert soup.find("div", class_="element-1") is not None


def test_callback_api_reports_rejection(workspace, scheduler, site_dir):
    errors = []
    done = []

    workspace.open(FileInfo.from_path(site_dir / "published.html"), lambda: done.append(True), errors.append)
    scheduler.run_until_idle()

    assert done == []
    assert isinstance(errors[0], PublishedDocumentError)
    assert workspace.session.file_info is None


def test_status(workspace, scheduler):
    assert workspace.status()["state"] == "closed"

    workspace.load(SITE_HTML)
    scheduler.run_until_idle()

    status = workspace.status()
    assert status["state"] == "ready"
    assert status["has_content"] is True
    assert status["loading"] is False
    assert status["pages"] == ["page-home", "page-about"]
    assert status["current_page"] == "page-home"
    assert status["file"] is None
