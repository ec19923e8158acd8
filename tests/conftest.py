"""Shared fixtures: a deterministic scheduler and sample site documents."""

import heapq
import itertools
from typing import Callable

import pytest
from bs4 import BeautifulSoup

from sitestage.config import LoadSettings
from sitestage.migrations import NoopMigrator
from sitestage.notify import LoggingNotifier
from sitestage.storage import MemoryKeyValueStore
from sitestage.workspace import Workspace

SITE_HTML = """<!DOCTYPE html>
<html>
<head>
<meta name="generator" content="Silex v2.2.7">
<title>My site</title>
<style type="text/css" class="silex-inline-styles">.element-1 { color: red; }</style>
<script type="application/json" class="silex-json-styles">{"element-1": {"color": "red"}}</script>
<script type="text/javascript" class="silex-script">console.log("hi");</script>
<!-- HEAD_TAG_START --><meta name="viewport" content="width=device-width"><!-- HEAD_TAG_STOP -->
</head>
<body class="silex-runtime">
<a id="page-home" data-silex-type="page">Home</a>
<a id="page-about" data-silex-type="page">About</a>
<div class="editable-style element-1 paged-element page-home"><div class="silex-element-content">Hello <a href="//example.com/x">link</a></div></div>
<div class="editable-style container-element element-2"><img src="//example.com/img.png"></div>
</body>
</html>
"""

OTHER_HTML = """<!DOCTYPE html>
<html>
<head><title>Other</title></head>
<body class="silex-runtime">
<div class="editable-style element-9">Second document</div>
</body>
</html>
"""

PUBLISHED_HTML = SITE_HTML.replace('class="silex-runtime"', 'class="silex-runtime silex-published"')

FOREIGN_HTML = "<html><head><title>Not ours</title></head><body><p>Hi</p></body></html>"


class FakeScheduler:
    """Virtual-time scheduler standing in for the event loop."""

    def __init__(self) -> None:
        self.now = 0.0
        self.calls = 0
        self._queue: list = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        heapq.heappush(self._queue, (self.now + max(delay, 0), next(self._seq), callback))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def run_one(self) -> None:
        when, _, callback = heapq.heappop(self._queue)
        self.now = when
        self.calls += 1
        callback()

    def run_until_idle(self, limit: int = 10_000) -> None:
        steps = 0
        while self._queue:
            self.run_one()
            steps += 1
            if steps > limit:
                raise AssertionError("scheduler did not settle")


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def settings():
    return LoadSettings(yield_delay=0.1, poll_interval=0.01, max_poll_attempts=10)


@pytest.fixture
def notifier():
    return LoggingNotifier()


@pytest.fixture
def workspace(scheduler, settings, notifier):
    return Workspace(
        scheduler=scheduler,
        state=MemoryKeyValueStore(),
        migrator=NoopMigrator(),
        notifier=notifier,
        settings=settings,
    )


def structure(markup: str) -> tuple:
    """Tags (name, classes, other attributes) and normalized text of a document."""
    soup = BeautifulSoup(markup, "html.parser")
    tags = []
    for tag in soup.find_all(True):
        classes = tag.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        attrs = tuple(sorted((k, str(v)) for k, v in tag.attrs.items() if k != "class"))
        tags.append((tag.name, tuple(sorted(classes)), attrs))
    return tuple(tags), " ".join(soup.get_text().split())
