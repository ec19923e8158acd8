"""Builds a clean, persistable HTML string from the live surface."""

import copy
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from bs4 import BeautifulSoup, Doctype

from sitestage.config import RUNTIME_CLASS, LoadSettings
from sitestage.scheduler import Scheduler
from sitestage.site import SiteModel
from sitestage.site.cleanup import cleanup_inlines, clear_stage_sizing, remove_internal_classes
from sitestage.stage.surface import PARSER, ContentSurface
from sitestage.utils.dom import add_class

logger = logging.getLogger(__name__)

DOCTYPE = "<!DOCTYPE html>"


@dataclass
class SerializationJob:
    """Ordered named steps sharing one accumulator.

    Every step runs exactly once, in order; ``result`` is only available
    once the last one has run.
    """

    steps: list[tuple[str, Callable[[], None]]]
    clone: Optional[BeautifulSoup] = None
    markup: str = ""
    styles: str = ""
    properties: str = ""
    completed: list[str] = field(default_factory=list)

    @property
    def done(self) -> bool:
        return len(self.completed) == len(self.steps)

    def advance(self) -> bool:
        """Run the next step; return True when the job is finished."""
        if self.done:
            raise RuntimeError("Serialization job already finished")
        name, step = self.steps[len(self.completed)]
        step()
        self.completed.append(name)
        return self.done

    def run(self) -> str:
        while not self.done:
            self.advance()
        return self.result

    @property
    def result(self) -> str:
        if not self.done:
            raise RuntimeError("Serialization job has not finished")
        return self.markup


class Serializer:
    """Derives the persisted form of the document being edited.

    The clone is the only tree that is modified; the live surface is read,
    never written.
    """

    def __init__(
        self,
        surface: ContentSurface,
        model: SiteModel,
        scheduler: Scheduler,
        settings: Optional[LoadSettings] = None,
    ):
        self.surface = surface
        self.model = model
        self.scheduler = scheduler
        self.settings = settings or LoadSettings()

    def create_job(self) -> SerializationJob:
        job = SerializationJob(steps=[])
        model = self.model

        def capture_styles() -> None:
            job.styles = model.properties.get_all_styles()
            job.properties = model.properties.dumps()

        def clone_document() -> None:
            job.clone = copy.copy(self.surface.document)
            model.properties.update_styles_in_dom(job.clone, job.styles)
            model.properties.save_properties(job.clone, job.properties)

        def remove_temp_tags() -> None:
            model.head.remove_current_page_style_tag(job.clone.head)
            model.head.remove_temp_tags(job.clone.head)

        def remove_editable_classes() -> None:
            model.body.remove_editable_classes(job.clone)

        def remove_internal() -> None:
            remove_internal_classes(job.clone)

        def cleanup() -> None:
            cleanup_inlines(job.clone)

        def clear_sizing() -> None:
            clear_stage_sizing(job.clone.body)

        def restore_runtime_class() -> None:
            if job.clone.body is not None:
                add_class(job.clone.body, RUNTIME_CLASS)

        def stringify() -> None:
            job.markup = DOCTYPE + serialize_root(job.clone)

        def unprepare() -> None:
            job.markup = model.element.unprepare_html_for_edit(job.markup)

        def insert_user_head() -> None:
            job.markup = model.head.insert_user_head(job.markup)

        def beautify() -> None:
            protected = model.head.protect_user_head(job.markup)
            job.markup = model.head.restore_user_head(BeautifulSoup(protected, PARSER).prettify())

        job.steps = [
            ("capture_styles", capture_styles),
            ("clone", clone_document),
            ("remove_temp_tags", remove_temp_tags),
            ("remove_editable_classes", remove_editable_classes),
            ("remove_internal_classes", remove_internal),
            ("cleanup_inlines", cleanup),
            ("clear_stage_sizing", clear_sizing),
            ("restore_runtime_class", restore_runtime_class),
            ("stringify", stringify),
            ("unprepare", unprepare),
            ("insert_user_head", insert_user_head),
            ("beautify", beautify),
        ]
        return job

    def get_html(self) -> str:
        """Serialize the surface in one go."""
        return self.create_job().run()

    def get_html_async(self, callback: Callable[[str], None]) -> SerializationJob:
        """Serialize one step per scheduler turn, then hand the result to ``callback``."""
        job = self.create_job()
        self.scheduler.call_later(self.settings.yield_delay, lambda: self._next_step(job, callback))
        return job

    def _next_step(self, job: SerializationJob, callback: Callable[[str], None]) -> None:
        if job.advance():
            logger.debug("Serialization finished")
            self.scheduler.call_later(self.settings.yield_delay, lambda: callback(job.result))
        else:
            self.scheduler.call_later(self.settings.yield_delay, lambda: self._next_step(job, callback))


def serialize_root(document: BeautifulSoup) -> str:
    """Markup of the <html> element, wrapping loose content in one if needed."""
    if document.html is not None:
        return str(document.html)
    inner = "".join(str(node) for node in document.contents if not isinstance(node, Doctype))
    return f"<html>{inner}</html>"
