"""Session adoption, save targets and templates."""

import pytest

from sitestage.errors import ProgrammingError
from sitestage.models import FileInfo
from sitestage.registry import RecentFiles
from sitestage.session import Session
from sitestage.storage import MemoryKeyValueStore


class FakeStorage:
    """Synchronous in-memory storage recording every call."""

    def __init__(self, files=None, fail=None):
        self.files = dict(files or {})
        self.fail = fail
        self.writes = []

    def read(self, file_info, on_success, on_error=None):
        if self.fail:
            on_error(self.fail)
            return
        on_success(self.files[file_info.url])

    def write(self, file_info, markup, on_success=None, on_error=None):
        if self.fail:
            on_error(self.fail)
            return
        self.writes.append((file_info.url, markup))
        self.files[file_info.url] = markup
        if on_success:
            on_success()

    def load_local(self, url, on_success, on_error=None):
        if self.fail:
            on_error(self.fail)
            return
        on_success(self.files[url])


SITE = FileInfo(url="file:///sites/index.html", name="index.html")


def make_session(storage):
    return Session(storage, RecentFiles(MemoryKeyValueStore()))


def test_save_without_target_is_a_programming_error():
    storage = FakeStorage()
    session = make_session(storage)

    with pytest.raises(ProgrammingError):
        session.save("<html></html>")
    assert storage.writes == []


def test_open_adopts_and_remembers():
    storage = FakeStorage({SITE.url: "<html></html>"})
    session = make_session(storage)
    received = []

    session.open_from(SITE, received.append)

    assert received == ["<html></html>"]
    assert session.file_info == SITE
    assert not session.is_template
    assert session.recent_files.list() == [SITE]
    assert session.base_url == SITE.url


def test_storage_error_is_forwarded_verbatim():
    error = OSError("disk on fire")
    session = make_session(FakeStorage(fail=error))
    errors = []

    session.open_from(SITE, lambda markup: None, errors.append)

    assert errors == [error]
    assert session.file_info is None


def test_template_has_no_save_target():
    storage = FakeStorage({"templates/blank.html": "<html></html>"})
    session = make_session(storage)

    session.open_from_transient_source("templates/blank.html", lambda markup: None)

    assert session.is_template
    assert session.file_info is None
    assert session.base_url == "templates/blank.html"
    with pytest.raises(ProgrammingError):
        session.save("<html></html>")


def test_save_as_adopts_target_and_clears_template():
    storage = FakeStorage({"templates/blank.html": "<html></html>"})
    session = make_session(storage)
    session.open_from_transient_source("templates/blank.html", lambda markup: None)
    saved = []

    session.save_as(SITE, "<html>new</html>", lambda: saved.append(True))

    assert saved == [True]
    assert storage.writes == [(SITE.url, "<html>new</html>")]
    assert session.file_info == SITE
    assert not session.is_template
    assert session.recent_files.list() == [SITE]

    session.save("<html>again</html>")
    assert storage.writes[-1] == (SITE.url, "<html>again</html>")


def test_failed_write_keeps_template_flag():
    error = OSError("read only")
    storage = FakeStorage(fail=error)
    session = make_session(storage)
    session.is_template = True
    errors = []

    session.save_as(SITE, "<html></html>", None, errors.append)

    assert errors == [error]
    assert session.is_template


def test_close_forgets_target():
    storage = FakeStorage({SITE.url: "<html></html>"})
    session = make_session(storage)
    session.open_from(SITE, lambda markup: None)

    session.close()

    assert session.file_info is None
    assert session.base_url is None
