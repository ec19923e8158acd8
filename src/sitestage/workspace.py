"""Composition root for an editing session."""

import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional

from sitestage.config import LoadSettings
from sitestage.errors import ProgrammingError, ValidationError
from sitestage.migrations import GeneratorMigrator
from sitestage.models import FileInfo
from sitestage.notify import LoggingNotifier
from sitestage.pipeline import Loader, Serializer
from sitestage.protocols import ErrorCallback, KeyValueStore, Migrator, Notifier, Renderer, StorageProvider
from sitestage.registry import RecentFiles
from sitestage.scheduler import AsyncioScheduler, Scheduler
from sitestage.session import Session
from sitestage.site import SiteModel
from sitestage.stage import ContentSurface, StageView
from sitestage.storage import FileSystemStorage, MemoryKeyValueStore

logger = logging.getLogger(__name__)


class Workspace:
    """Wires the surface, pipelines, session and collaborators together.

    The callback API mirrors the session operations and also installs what
    was read. The ``*_async`` methods wrap it for asyncio callers.
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        storage: Optional[StorageProvider] = None,
        state: Optional[KeyValueStore] = None,
        migrator: Optional[Migrator] = None,
        notifier: Optional[Notifier] = None,
        renderer: Optional[Renderer] = None,
        settings: Optional[LoadSettings] = None,
        templates_dir: Optional[Path | str] = None,
    ):
        self.scheduler = scheduler or AsyncioScheduler()
        self.settings = settings or LoadSettings()
        self.storage = storage or FileSystemStorage(self.scheduler, templates_dir)
        self.notifier = notifier or LoggingNotifier()
        self.surface = ContentSurface(renderer)
        self.view = StageView()
        self.model = SiteModel()
        self.recent_files = RecentFiles(state if state is not None else MemoryKeyValueStore())
        self.session = Session(self.storage, self.recent_files)
        self.serializer = Serializer(self.surface, self.model, self.scheduler, self.settings)
        self.loader = Loader(
            self.surface,
            self.view,
            self.model,
            migrator or GeneratorMigrator(),
            self.notifier,
            self.serializer,
            self.scheduler,
            self.settings,
        )

    # Callback API

    def load(
        self,
        markup: str,
        on_done: Optional[Callable[[], None]] = None,
        on_error: ErrorCallback | None = None,
        show_loader: bool = True,
    ) -> bool:
        """Install ``markup`` in the context of the current session."""
        return self.loader.load(
            markup,
            on_done,
            on_error,
            show_loader=show_loader,
            base_url=self.session.base_url,
            is_template=self.session.is_template,
        )

    def _install(
        self,
        previous: tuple,
        on_done: Optional[Callable[[], None]],
        on_error: ErrorCallback | None,
    ) -> Callable[[str], None]:
        def install(markup: str) -> None:
            if not self.load(markup, on_done, on_error):
                # the previous document is still on the surface
                self.session.restore(*previous)
                if on_error:
                    on_error(self.loader.rejection)

        return install

    def _snapshot(self) -> tuple:
        return (self.session.file_info, self.session.is_template, self.session.source_url)

    def open(
        self,
        file_info: FileInfo,
        on_done: Optional[Callable[[], None]] = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        previous = self._snapshot()
        self.session.open_from(file_info, self._install(previous, on_done, on_error), on_error)

    def open_template(
        self,
        url: str,
        on_done: Optional[Callable[[], None]] = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        previous = self._snapshot()
        self.session.open_from_transient_source(url, self._install(previous, on_done, on_error), on_error)

    def get_html(self) -> str:
        return self.serializer.get_html()

    def save(
        self,
        on_done: Optional[Callable[[], None]] = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        def write(markup: str) -> None:
            try:
                self.session.save(markup, on_done, on_error)
            except ProgrammingError as e:
                if on_error is None:
                    raise
                on_error(e)

        self.serializer.get_html_async(write)

    def save_as(
        self,
        file_info: FileInfo,
        on_done: Optional[Callable[[], None]] = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self.serializer.get_html_async(
            lambda markup: self.session.save_as(file_info, markup, on_done, on_error)
        )

    def close(self) -> None:
        self.session.close()

    # asyncio API

    async def _await(self, start: Callable[[Callable, ErrorCallback], None]):
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def resolve(*args) -> None:
            if not future.done():
                future.set_result(args[0] if args else None)

        def reject(error: BaseException) -> None:
            if not future.done():
                future.set_exception(error)

        start(resolve, reject)
        return await future

    async def load_async(self, markup: str, show_loader: bool = True) -> None:
        def start(resolve: Callable, reject: ErrorCallback) -> None:
            if not self.load(markup, resolve, reject, show_loader):
                reject(self.loader.rejection or ValidationError("Document rejected"))

        await self._await(start)

    async def open_async(self, file_info: FileInfo) -> None:
        await self._await(lambda resolve, reject: self.open(file_info, resolve, reject))

    async def open_template_async(self, url: str) -> None:
        await self._await(lambda resolve, reject: self.open_template(url, resolve, reject))

    async def get_html_async(self) -> str:
        return await self._await(lambda resolve, reject: self.serializer.get_html_async(resolve))

    async def save_async(self) -> None:
        await self._await(lambda resolve, reject: self.save(resolve, reject))

    async def save_as_async(self, file_info: FileInfo) -> None:
        await self._await(lambda resolve, reject: self.save_as(file_info, resolve, reject))

    def status(self) -> dict:
        """Summary of the session, for display."""
        file_info = self.session.file_info
        document = self.surface.document
        return {
            "state": self.loader.state.value,
            "file": file_info.url if file_info else None,
            "template": self.session.is_template,
            "has_content": self.surface.has_content(),
            "loading": self.view.is_loading,
            "title": self.model.head.settings.get("title"),
            "pages": self.model.page.get_pages(document),
            "current_page": self.model.page.current,
        }
