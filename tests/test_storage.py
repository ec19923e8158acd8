"""Filesystem storage and FileInfo."""

from sitestage.models import FileInfo
from sitestage.storage import FileSystemStorage
from sitestage.utils import is_binary_content


def test_read_is_delivered_through_scheduler(scheduler, tmp_path):
    path = tmp_path / "index.html"
    path.write_text("<html>ok</html>", encoding="utf-8")
    storage = FileSystemStorage(scheduler)
    received = []

    storage.read(FileInfo.from_path(path), received.append)
    assert received == []

    scheduler.run_until_idle()
    assert received == ["<html>ok</html>"]


def test_missing_file_reports_error(scheduler, tmp_path):
    storage = FileSystemStorage(scheduler)
    errors = []

    storage.read(FileInfo.from_path(tmp_path / "missing.html"), lambda markup: None, errors.append)
    scheduler.run_until_idle()

    assert isinstance(errors[0], FileNotFoundError)


def test_binary_file_is_refused(scheduler, tmp_path):
    path = tmp_path / "image.png"
    path.write_bytes(b"\x89PNG\x00\x00")
    storage = FileSystemStorage(scheduler)
    errors = []

    storage.read(FileInfo.from_path(path), lambda markup: None, errors.append)
    scheduler.run_until_idle()

    assert isinstance(errors[0], ValueError)


def test_write_creates_parent_directories(scheduler, tmp_path):
    path = tmp_path / "out" / "site.html"
    storage = FileSystemStorage(scheduler)
    done = []

    storage.write(FileInfo.from_path(path), "<html></html>", lambda: done.append(True))
    scheduler.run_until_idle()

    assert done == [True]
    assert path.read_text(encoding="utf-8") == "<html></html>"


def test_load_local_resolves_in_templates_dir(scheduler, tmp_path):
    (tmp_path / "blank.html").write_text("<html>blank</html>", encoding="utf-8")
    storage = FileSystemStorage(scheduler, templates_dir=tmp_path)
    received = []

    storage.load_local("blank.html", received.append)
    scheduler.run_until_idle()

    assert received == ["<html>blank</html>"]


class TestFileInfo:
    def test_from_path(self, tmp_path):
        path = tmp_path / "my site.html"
        file_info = FileInfo.from_path(path)

        assert file_info.url.startswith("file://")
        assert "%20" in file_info.url
        assert file_info.name == "my site.html"
        assert file_info.mime == "text/html"
        assert file_info.path == path.resolve()

    def test_dict_round_trip_uses_is_dir_key(self):
        file_info = FileInfo(url="file:///a", name="a", is_dir=True)
        data = file_info.to_dict()
        assert data["isDir"] is True
        assert "is_dir" not in data
        assert FileInfo.from_dict(data) == file_info


def test_binary_content_detection():
    assert is_binary_content(b"") is False
    assert is_binary_content("<p>café</p>\r\n\t".encode("utf-8")) is False
    assert is_binary_content(b"<p>\x00</p>") is True
    assert is_binary_content(b"\x01\x02\x03<p>") is True
    # NUL bytes past the sampled prefix are not looked at
    assert is_binary_content(b"<p>" * 10 + b"\x00", sample_size=30) is False


def test_file_info_name_defaults_to_last_url_segment():
    assert FileInfo(url="file:///sites/my%20site.html").name == "my site.html"
    assert FileInfo(url="https://example.com/sites/blog/").name == "blog"
    assert FileInfo(url="file:///").name == "file:///"
    assert FileInfo(url="file:///a.html", name="Home").name == "Home"
