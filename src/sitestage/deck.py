"""Stage Deck - a TUI for opening, checking and saving site documents."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.css.query import NoMatches
from textual.widgets import (
    Button,
    DataTable,
    DirectoryTree,
    Footer,
    Header,
    Input,
    Label,
    Log,
    Rule,
    Static,
)

from sitestage.config import DEFAULT_STATE_DB
from sitestage.errors import SiteStageError
from sitestage.models import FileInfo
from sitestage.stage import StageView
from sitestage.storage import StateStore
from sitestage.workspace import Workspace

PREVIEW_LINES = 200


class DeckNotifier:
    """Shows pipeline alerts as Textual notifications."""

    def __init__(self, app: App):
        self.app = app

    def alert(self, message: str, link: Optional[str] = None) -> None:
        text = f"{message}\n{link}" if link else message
        self.app.notify(text, title="Can not open", severity="error", timeout=8)


class DeckLogHandler(logging.Handler):
    """Mirrors sitestage log records into the system log panel."""

    def __init__(self, app: "StageDeck"):
        super().__init__(level=logging.INFO)
        self.app = app

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.app._log(self.format(record))
        except NoMatches:
            pass


class StatusPanel(Static):
    """Session status display."""

    def compose(self) -> ComposeResult:
        yield Static(id="status-content")

    def on_mount(self) -> None:
        self.update_display(self.app.workspace.status())

    def update_display(self, status: dict) -> None:
        content = self.query_one("#status-content", Static)
        state_color = {
            "closed": "dim",
            "ready": "green",
            "awaiting_ready": "yellow",
            "migrating": "magenta",
        }.get(status["state"], "cyan")
        file = status["file"] or "[dim]none[/]"
        if len(file) > 40:
            file = "..." + file[-37:]
        loading = "[yellow]loading[/]" if status["loading"] else "[dim]idle[/]"

        content.update(f"""[b]STATE[/b]    [{state_color}]{status['state'].upper()}[/]  {loading}

[b]FILE[/b]
  {file}
  Template    [cyan]{status['template']}[/]

[b]SITE[/b]
  Title       [blue]{status['title'] or '-'}[/]
  Pages       [magenta]{len(status['pages'])}[/]
  Current     [green]{status['current_page'] or '-'}[/]""")


class RecentFilesTable(DataTable):
    """Recently opened documents."""

    def on_mount(self) -> None:
        self.add_columns("Name", "Location")
        self.cursor_type = "row"

    def show(self, files: list[FileInfo]) -> None:
        self.clear()
        for file_info in files:
            self.add_row(file_info.name or "-", file_info.url, key=file_info.url)


class StageDeck(App):
    """The sitestage Deck - open, inspect and save site documents."""

    CSS = """
    #main-container {
        layout: horizontal;
    }

    #session-panel {
        width: 44;
        padding: 0 1;
        border-right: tall $primary-darken-2;
    }

    #document-panel {
        width: 1fr;
        padding: 0 1;
    }

    #browser-panel {
        width: 32;
        border-left: tall $primary-darken-2;
    }

    StatusPanel {
        height: auto;
        border: round $primary;
        margin-bottom: 1;
    }

    .action-buttons {
        height: 3;
    }

    .action-buttons Button {
        width: 1fr;
    }

    RecentFilesTable {
        height: 9;
    }

    #html-preview {
        height: 2fr;
        border: round $accent;
    }

    #log-panel {
        height: 1fr;
        border: round $primary-darken-2;
    }

    .section-title {
        text-style: bold reverse;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("o", "open", "Open", show=True),
        Binding("s", "save", "Save", show=True),
        Binding("a", "save_as", "Save As", show=True),
        Binding("p", "preview", "Preview", show=True),
        Binding("q", "quit", "Quit", show=True),
    ]

    TITLE = "sitestage Deck"
    SUB_TITLE = "Site Document Console"

    def __init__(self, state_path: Optional[Path] = None):
        super().__init__()
        self.workspace = Workspace(
            state=StateStore(state_path or DEFAULT_STATE_DB),
            notifier=DeckNotifier(self),
        )
        self.workspace.view.subscribe(self._on_view_changed)
        self._log_handler = DeckLogHandler(self)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Container(id="main-container"):
            with Vertical(id="session-panel"):
                yield Label("SESSION", classes="section-title")
                yield StatusPanel()
                yield Rule()
                yield Label("Document Path")
                yield Input(placeholder="Enter an .html path...", id="path-input")
                with Horizontal(classes="action-buttons"):
                    yield Button("Open", id="open-btn", variant="success")
                    yield Button("Template", id="template-btn")
                with Horizontal(classes="action-buttons"):
                    yield Button("Save", id="save-btn", variant="primary")
                    yield Button("Save As", id="save-as-btn", variant="warning")
                yield Rule()
                yield Label("RECENT FILES", classes="section-title")
                yield RecentFilesTable(id="recent-files")

            with Vertical(id="document-panel"):
                yield Label("DOCUMENT", classes="section-title")
                yield Log(id="html-preview", auto_scroll=False)
                yield Rule()
                yield Label("SYSTEM LOG", classes="section-title")
                yield Log(id="log-panel", highlight=True, auto_scroll=True)

            with Vertical(id="browser-panel"):
                yield Label("FILE BROWSER", classes="section-title")
                yield DirectoryTree(Path.cwd(), id="dir-tree")

        yield Footer()

    def on_mount(self) -> None:
        self._refresh()
        logging.getLogger("sitestage").addHandler(self._log_handler)
        self._log("Deck initialized")
        self._log("Enter a document path and press Open")

    def on_unmount(self) -> None:
        logging.getLogger("sitestage").removeHandler(self._log_handler)

    def _log(self, message: str) -> None:
        """Add a message to the system log."""
        timestamp = datetime.now().strftime("%H:%M:%S")
        self.query_one("#log-panel", Log).write_line(f"[{timestamp}] {message}")

    def _refresh(self) -> None:
        self.query_one(StatusPanel).update_display(self.workspace.status())
        self.query_one("#recent-files", RecentFilesTable).show(
            self.workspace.recent_files.list()
        )

    def _on_view_changed(self, view: StageView) -> None:
        try:
            self.query_one(StatusPanel).update_display(self.workspace.status())
        except NoMatches:
            pass

    def _path(self) -> Optional[str]:
        path = self.query_one("#path-input", Input).value.strip()
        if not path:
            self._log("ERROR: No document path specified")
            return None
        return path

    def on_directory_tree_file_selected(self, event: DirectoryTree.FileSelected) -> None:
        """Handle file selection from directory tree."""
        self.query_one("#path-input", Input).value = str(event.path)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Handle selection in the recent files table."""
        url = event.row_key.value
        if url:
            self.query_one("#path-input", Input).value = str(FileInfo(url=url).path)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        actions = {
            "open-btn": self.action_open,
            "template-btn": self.action_open_template,
            "save-btn": self.action_save,
            "save-as-btn": self.action_save_as,
        }
        action = actions.get(event.button.id or "")
        if action:
            action()

    def action_open(self) -> None:
        path = self._path()
        if path:
            self.run_open(path, template=False)

    def action_open_template(self) -> None:
        path = self._path()
        if path:
            self.run_open(path, template=True)

    def action_save(self) -> None:
        self.run_save(None)

    def action_save_as(self) -> None:
        path = self._path()
        if path:
            self.run_save(path)

    def action_preview(self) -> None:
        self.run_preview()

    @work(exclusive=True)
    async def run_open(self, path: str, template: bool) -> None:
        """Open a document on the app loop."""
        self._log(f"Opening {path}")
        try:
            if template:
                await self.workspace.open_template_async(path)
            else:
                await self.workspace.open_async(FileInfo.from_path(path))
        except (SiteStageError, OSError, ValueError) as e:
            self._log(f"ERROR: {e}")
            self._refresh()
            return
        self._log(f"Loaded {path}")
        self._refresh()
        await self._show_preview()

    @work(exclusive=True)
    async def run_save(self, path: Optional[str]) -> None:
        """Save on the app loop; the HTML is built incrementally."""
        if not self.workspace.surface.has_content():
            self._log("ERROR: No document is open")
            return
        try:
            if path is None:
                await self.workspace.save_async()
            else:
                await self.workspace.save_as_async(FileInfo.from_path(path))
        except (SiteStageError, OSError) as e:
            self._log(f"ERROR: {e}")
            return
        self._log(f"Saved {self.workspace.session.file_info.url}")
        self._refresh()

    @work(exclusive=True)
    async def run_preview(self) -> None:
        await self._show_preview()

    async def _show_preview(self) -> None:
        preview = self.query_one("#html-preview", Log)
        preview.clear()
        if not self.workspace.surface.has_content():
            return
        markup = await self.workspace.get_html_async()
        lines = markup.splitlines()
        preview.write_lines(lines[:PREVIEW_LINES])
        if len(lines) > PREVIEW_LINES:
            preview.write_line(f"... {len(lines) - PREVIEW_LINES} more lines")


def main(state_path: Optional[Path] = None) -> None:
    """Run the Stage Deck TUI."""
    app = StageDeck(state_path)
    app.run()


if __name__ == "__main__":
    main()
