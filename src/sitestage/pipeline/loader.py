"""Installs raw site markup into the live surface."""

import logging
from typing import Callable, Optional
from urllib.parse import urljoin

from bs4 import Tag

from sitestage.config import EDITION_STYLESHEETS, LoadSettings
from sitestage.errors import (
    EditionTagsError,
    MigrationConvergenceError,
    SurfaceNotReadyError,
    ValidationError,
)
from sitestage.models import LoadState
from sitestage.pipeline.markup import (
    check_signatures,
    inject_base_tag,
    make_protocol_relative,
    strip_runtime_class,
)
from sitestage.pipeline.serializer import Serializer
from sitestage.protocols import ErrorCallback, Migrator, Notifier
from sitestage.scheduler import Scheduler
from sitestage.site import SiteModel
from sitestage.stage import ContentSurface, StageView

logger = logging.getLogger(__name__)


class Loader:
    """Validates, transforms and installs documents, then restores the model.

    The raw markup is transformed and validated before the surface is
    touched, so a rejected document leaves the current one in place.
    """

    def __init__(
        self,
        surface: ContentSurface,
        view: StageView,
        model: SiteModel,
        migrator: Migrator,
        notifier: Notifier,
        serializer: Serializer,
        scheduler: Scheduler,
        settings: Optional[LoadSettings] = None,
    ):
        self.surface = surface
        self.view = view
        self.model = model
        self.migrator = migrator
        self.notifier = notifier
        self.serializer = serializer
        self.scheduler = scheduler
        self.settings = settings or LoadSettings()
        self.state = LoadState.CLOSED
        self.rejection: Optional[ValidationError] = None
        self.reloads = 0

    def _set_state(self, state: LoadState) -> None:
        logger.debug(f"Load state: {self.state.value} -> {state.value}")
        self.state = state

    def load(
        self,
        markup: str,
        on_done: Optional[Callable[[], None]] = None,
        on_error: ErrorCallback | None = None,
        *,
        show_loader: bool = True,
        base_url: Optional[str] = None,
        is_template: bool = False,
        run_migration: bool = True,
    ) -> bool:
        """Install ``markup``; return False if the document was rejected.

        ``on_done`` runs once the document is ready for edition. A rejected
        document only triggers a user notification. Readiness timeouts,
        edition tag failures and runaway migrations go to ``on_error``, or
        are raised when there is none.
        """
        self.reloads = 0
        return self._load(
            markup,
            on_done,
            on_error,
            show_loader=show_loader,
            base_url=base_url,
            is_template=is_template,
            run_migration=run_migration,
        )

    def _load(
        self,
        markup: str,
        on_done: Optional[Callable[[], None]],
        on_error: ErrorCallback | None,
        *,
        show_loader: bool,
        base_url: Optional[str],
        is_template: bool,
        run_migration: bool,
    ) -> bool:
        previous_state = self.state
        self.view.show_loader(blocking=show_loader)

        self._set_state(LoadState.TRANSFORMING)
        if base_url:
            markup = inject_base_tag(markup, base_url)
        # user head content may be malformed, keep it away from the parser
        markup, user_head = self.model.head.split_user_head(markup)
        markup = self.model.element.prepare_html_for_edit(markup)
        markup = make_protocol_relative(markup)

        self._set_state(LoadState.VALIDATING)
        try:
            check_signatures(markup)
        except ValidationError as e:
            logger.error(f"Rejected document: {e}")
            self.rejection = e
            self.view.hide_loader()
            self._set_state(previous_state)
            self.notifier.alert(str(e), e.link)
            return False
        self.rejection = None
        markup = strip_runtime_class(markup)

        self._set_state(LoadState.RESETTING)
        self.model.body.set_editable(self.surface.body, False)
        self.view.remove_events(self.surface.body)
        self.surface.reset()

        self.model.head.user_head = user_head
        self.surface.install(markup)
        self._set_state(LoadState.INSTALLED)

        def on_ready() -> None:
            self._include_edition_tags(
                on_done,
                on_error,
                base_url=base_url,
                is_template=is_template,
                run_migration=run_migration,
            )

        self._set_state(LoadState.AWAITING_READY)
        self._wait_for_ready(0, on_ready, on_error)
        return True

    def _wait_for_ready(
        self,
        attempt: int,
        on_ready: Callable[[], None],
        on_error: ErrorCallback | None,
    ) -> None:
        # there is no reliable load event, referenced assets may be missing
        if self.surface.is_ready():
            on_ready()
            return
        if attempt >= self.settings.max_poll_attempts:
            self._fail(
                SurfaceNotReadyError(f"Surface not ready after {attempt} checks"),
                on_error,
            )
            return
        delay = self.settings.poll_delay(attempt)
        self.scheduler.call_later(delay, lambda: self._wait_for_ready(attempt + 1, on_ready, on_error))

    def edition_tags(self) -> list[Tag]:
        document = self.surface.document
        return [
            document.new_tag(
                "link",
                attrs={"rel": "stylesheet", "href": urljoin(self.settings.editor_base_url, url)},
            )
            for url in EDITION_STYLESHEETS
        ]

    def _include_edition_tags(
        self,
        on_done: Optional[Callable[[], None]],
        on_error: ErrorCallback | None,
        *,
        base_url: Optional[str],
        is_template: bool,
        run_migration: bool,
    ) -> None:
        def on_tags_error(err: BaseException) -> None:
            logger.error(f"Error loading edition tags: {err}")
            self._fail(EditionTagsError(f"error loading editable script: {err}"), on_error)

        def on_tags_loaded() -> None:
            if not run_migration:
                self._on_content_loaded(False, on_done, on_error, base_url, is_template, run_migration)
                return
            self._set_state(LoadState.MIGRATING)
            self.migrator.process(
                self.surface.document,
                self.model,
                lambda needs_reload: self._on_content_loaded(
                    needs_reload, on_done, on_error, base_url, is_template, run_migration
                ),
            )

        self.model.head.add_temp_tags(
            self.surface.document, self.edition_tags(), on_tags_loaded, on_tags_error
        )

    def _restore_model(self) -> None:
        document = self.surface.document
        model = self.model
        model.properties.init_styles(document)
        model.properties.load_properties(document)
        model.body.set_selection([document.body])
        model.body.set_editable(document.body, True)
        model.head.set_head_style(document, model.head.get_head_style(document))
        model.head.set_head_script(document, model.head.get_head_script(document))
        model.head.update_from_dom(document)
        self.view.init_events(self.surface.context)

    def _on_content_loaded(
        self,
        needs_reload: bool,
        on_done: Optional[Callable[[], None]],
        on_error: ErrorCallback | None,
        base_url: Optional[str],
        is_template: bool,
        run_migration: bool,
    ) -> None:
        self._restore_model()

        if needs_reload:
            if self.reloads >= self.settings.max_reloads:
                self._fail(
                    MigrationConvergenceError(
                        f"Document still needs a reload after {self.reloads} reloads"
                    ),
                    on_error,
                )
                return
            self.reloads += 1
            logger.warning(f"Migration needs reload ({self.reloads}/{self.settings.max_reloads})")
            self._load(
                self.serializer.get_html(),
                on_done,
                on_error,
                show_loader=False,
                base_url=base_url,
                is_template=is_template,
                run_migration=run_migration,
            )
            return

        document = self.surface.document
        self.view.hide_loader()
        page = self.model.page
        page.set_current_page(document, page.get_current_page(document))
        if is_template:
            self.model.head.set_publication_path(document, None)
        self._set_state(LoadState.READY)
        if on_done:
            on_done()

    def _fail(self, error: Exception, on_error: ErrorCallback | None) -> None:
        self.view.hide_loader()
        if on_error is None:
            raise error
        on_error(error)
