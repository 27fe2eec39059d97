"""procexplorer - Main Textual application."""

import logging
import sys

import psutil
from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.containers import VerticalScroll
from textual.message import Message
from textual.widgets import Button, Collapsible, Footer, Input, Label, Static

from procexplorer.config import Settings
from procexplorer.errors import ProcRootError
from procexplorer.logging_config import setup_logging
from procexplorer.snapshot import Snapshot, build_snapshot
from procexplorer.view import ProcessView, RowView

logger = logging.getLogger(__name__)


def format_bytes(size: float) -> str:
    """Format bytes as human-readable string."""
    for unit in ["B", "K", "M", "G", "T"]:
        if size < 1024:
            return f"{size:.1f}{unit}" if unit != "B" else f"{int(size)}{unit}"
        size = size / 1024
    return f"{size:.1f}P"


class ProcessRow(Collapsible):
    """One process: collapsed to its header, expanding to its details."""

    DEFAULT_CSS = """
    ProcessRow {
        background: black;
        border-top: none;
        padding-bottom: 0;
    }
    """

    def __init__(self, row: RowView) -> None:
        # Text titles are never parsed as markup, command lines often contain brackets
        super().__init__(
            *(Label(Text(f"{label}: {value}")) for label, value in row.details),
            title=Text(row.header),
            collapsed=True,
        )
        self.row_view = row


class ProcessList(VerticalScroll):
    """Scrollable list that renders the visible rows a page at a time."""

    class RowsChanged(Message):
        """Posted when more rows were appended to the list."""

    DEFAULT_CSS = """
    ProcessList {
        height: 1fr;
        background: black;
    }

    #show-more {
        width: 100%;
    }
    """

    def __init__(self, view: ProcessView, page_size: int = 200, **kwargs) -> None:
        """
        Initialize ProcessList.

        Args:
            view: Filtered view to draw rows from.
            page_size: How many rows to add per page.
        """
        super().__init__(**kwargs)
        self._view = view
        self._page_size = max(1, page_size)
        self._shown = 0

    @property
    def shown(self) -> int:
        """Number of rows currently mounted."""
        return self._shown

    async def reload(self) -> None:
        """Drop all rows and render the first page of the current view."""
        await self.remove_children()
        self._shown = 0
        self.scroll_home(animate=False)
        await self.show_more()

    async def show_more(self) -> None:
        """Append the next page of rows."""
        stop = min(len(self._view), self._shown + self._page_size)
        rows = [ProcessRow(self._view.row(i)) for i in range(self._shown, stop)]

        existing = self.query("#show-more")
        await existing.remove()

        if rows:
            await self.mount_all(rows)
        self._shown = stop
        if self._shown < len(self._view):
            await self.mount(Button("Show more", id="show-more"))

    @on(Button.Pressed, "#show-more")
    async def _on_show_more(self, event: Button.Pressed) -> None:
        event.stop()
        await self.show_more()
        self.post_message(self.RowsChanged())


class ProfilingOverlay(Static):
    """Timing and memory figures, shown when PROFILING is set."""

    DEFAULT_CSS = """
    ProfilingOverlay {
        dock: bottom;
        height: auto;
        padding: 0 1;
        background: $surface;
        color: $warning;
    }
    """

    def update_stats(self, view: ProcessView, shown: int) -> None:
        """Refresh the overlay from the current view."""
        rss = psutil.Process().memory_info().rss
        self.update(
            Text(
                f"snapshot {view.snapshot.build_seconds * 1000:.1f}ms"
                f" | filter {view.filter_seconds * 1000:.2f}ms"
                f" | rows {shown}/{len(view)}"
                f" | skipped {len(view.snapshot.skipped)}"
                f" | rss {format_bytes(rss)}"
            )
        )


class ExplorerApp(App):
    """Main procexplorer application."""

    TITLE = "Linux Explorer"

    CSS = """
    Screen {
        layout: vertical;
        background: black;
    }

    #heading {
        color: white;
        text-style: bold;
        padding: 0 1;
    }

    #status {
        color: grey;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("slash", "focus_search", "Search"),
        ("escape", "clear_search", "Clear"),
    ]

    def __init__(self, snapshot: Snapshot, settings: Settings | None = None) -> None:
        """Initialize the ExplorerApp with a prebuilt snapshot."""
        super().__init__()
        self._settings = settings or Settings()
        self._view = ProcessView(snapshot)

    @property
    def view(self) -> ProcessView:
        """The filtered view shown by the list."""
        return self._view

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Static("Processes", id="heading")
        yield Input(placeholder="Search pid, command line or name", id="search")
        yield Static(id="status")
        yield ProcessList(self._view, page_size=self._settings.page_size, id="process-list")
        if self._settings.profiling:
            yield ProfilingOverlay(id="profiling")
        yield Footer()

    async def on_mount(self) -> None:
        """Render the first page of rows."""
        await self.query_one(ProcessList).reload()
        self._update_status()

    @on(Input.Changed, "#search")
    async def _on_search_changed(self, event: Input.Changed) -> None:
        self._view.set_search(event.value)
        await self.query_one(ProcessList).reload()
        self._update_status()

    @on(ProcessList.RowsChanged)
    def _on_rows_changed(self) -> None:
        self._update_status()

    def action_focus_search(self) -> None:
        """Move focus to the search box."""
        self.query_one("#search", Input).focus()

    def action_clear_search(self) -> None:
        """Empty the search box, which shows every process again."""
        self.query_one("#search", Input).value = ""

    def _update_status(self) -> None:
        process_list = self.query_one(ProcessList)
        status = f"{len(self._view)} of {len(self._view.snapshot)} processes"
        if process_list.shown < len(self._view):
            status += f" (showing {process_list.shown})"
        self.query_one("#status", Static).update(Text(status))
        if self._settings.profiling:
            self.query_one(ProfilingOverlay).update_stats(self._view, process_list.shown)


def main() -> None:
    """Entry point for procexplorer application."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    try:
        snapshot = build_snapshot(settings.proc_root)
    except ProcRootError as exc:
        logger.error("%s", exc)
        print(f"procexplorer: {exc}", file=sys.stderr)
        sys.exit(1)

    app = ExplorerApp(snapshot, settings)
    app.run()


if __name__ == "__main__":
    main()
