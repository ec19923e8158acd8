"""Content surface and stage view."""

from bs4 import Doctype

from sitestage.config import LOADING_CLASS, LOADING_LIGHT_CLASS
from sitestage.stage import ContentSurface, StageView, SurfaceContext


class CountingRenderer:
    def __init__(self, ready=True):
        self.ready = ready
        self.boots = 0

    def boot(self, document):
        self.boots += 1
        return SurfaceContext(globals={"$": document.select}, initialized=self.ready)


def test_install_replaces_content():
    surface = ContentSurface()
    surface.install("<html><body><p>one</p></body></html>")
    surface.install("<html><body><p>two</p></body></html>")

    assert [p.get_text() for p in surface.document.find_all("p")] == ["two"]
    assert surface.has_content()
    assert surface.is_ready()


def test_reset_always_writes_an_empty_document():
    renderer = CountingRenderer()
    surface = ContentSurface(renderer)

    surface.reset()
    assert renderer.boots == 1
    assert str(surface.document) == ""
    assert not surface.has_content()


def test_readiness_requires_context_and_capability():
    surface = ContentSurface(CountingRenderer(ready=False))
    assert not surface.is_ready()

    surface.install("<html><body></body></html>")
    assert not surface.is_ready()

    surface.context.initialized = True
    assert surface.is_ready()
    assert not surface.is_ready("jQuery")


def test_open_detaches_context():
    surface = ContentSurface()
    surface.install("<html><body>x</body></html>")
    surface.open()
    assert surface.context is None
    surface.write("<html><body>")
    surface.write("y</body></html>")
    surface.close()
    assert surface.body.get_text() == "y"


def test_loader_classes():
    view = StageView()
    changes = []
    view.subscribe(changes.append)

    view.show_loader(blocking=True)
    assert LOADING_CLASS in view.classes
    assert view.is_loading

    view.hide_loader()
    assert not view.is_loading

    view.show_loader(blocking=False)
    assert view.classes == {LOADING_LIGHT_CLASS}
    assert len(changes) == 3


def test_events_lifecycle():
    view = StageView()
    view.init_events(None)
    assert not view.events_bound
    view.init_events(SurfaceContext())
    assert view.events_bound
    view.remove_events(None)
    assert not view.events_bound


def test_missing_html_and_head_are_added():
    surface = ContentSurface()
    surface.install('<!DOCTYPE html><body class="x"><p>loose</p></body>')

    document = surface.document
    assert isinstance(document.contents[0], Doctype)
    assert document.html.head is not None
    assert document.html.contents[0] is document.html.head
    assert document.body.p.get_text() == "loose"


def test_fragment_is_wrapped():
    surface = ContentSurface()
    surface.install("<p>a</p><p>b</p>")

    assert [p.get_text() for p in surface.document.html.find_all("p")] == ["a", "b"]
    assert surface.document.head is not None


def test_switching_loader_kind_replaces_the_indicator():
    view = StageView()
    snapshots = []
    view.subscribe(lambda v: snapshots.append(set(v.classes)))

    view.show_loader(blocking=True)
    view.show_loader(blocking=False)
    view.show_loader(blocking=True)

    assert snapshots == [{LOADING_CLASS}, {LOADING_LIGHT_CLASS}, {LOADING_CLASS}]
