from __future__ import annotations

from collections.abc import Sequence
from functools import partial

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Input, OptionList, Static
from textual.worker import get_current_worker

from filesift.models import FileEntry, FilterCancelled
from filesift.rendering import format_result_row, format_status
from filesift.search import filter_and_rank


class FuzzyFindTui(App[str | None]):
    CSS = """
    #body {
        border: round $primary;
    }

    #query {
        border: none;
        height: 1;
    }

    #results {
        border: none;
        height: 1fr;
    }

    #status {
        color: $text-muted;
        height: 1;
    }
    """
    ENABLE_COMMAND_PALETTE = False
    MAX_VISIBLE_RESULTS = 200
    BINDINGS = [
        Binding("down", "cursor_down", show=False),
        Binding("up", "cursor_up", show=False),
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+c", "quit", show=False),
    ]

    def __init__(
        self,
        entries: Sequence[FileEntry],
        *,
        initial_query: str = "",
        show_scores: bool = False,
    ) -> None:
        super().__init__()
        self._entries: list[FileEntry] = list(entries)
        self._search_query = initial_query
        self._show_scores = show_scores
        self._visible_entries: list[FileEntry] = []
        self._match_count = 0

    def compose(self) -> ComposeResult:
        with Vertical(id="body"):
            yield Input(
                value=self._search_query,
                placeholder="Type to filter files",
                id="query",
            )
            yield OptionList(id="results")
            yield Static("Filtering...", id="status")

    def on_mount(self) -> None:
        self.query_one("#body", Vertical).border_title = "filesift"
        self.query_one("#query", Input).focus()
        self._request_filter(self._search_query)

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "query":
            return
        self._request_filter(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "query":
            return
        self._exit_with_highlighted()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list.id != "results":
            return
        if 0 <= event.option_index < len(self._visible_entries):
            self.exit(self._visible_entries[event.option_index].path)

    def action_cursor_down(self) -> None:
        self.query_one("#results", OptionList).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one("#results", OptionList).action_cursor_up()

    def action_cancel(self) -> None:
        self.exit(None)

    def _request_filter(self, query: str) -> None:
        self._search_query = query
        self.run_worker(
            partial(self._filter_entries, query),
            name="filter",
            group="filter",
            exclusive=True,
            thread=True,
            exit_on_error=False,
        )

    def _filter_entries(self, query: str) -> None:
        worker = get_current_worker()
        outcome = filter_and_rank(
            query,
            self._entries,
            cancel=lambda: worker.is_cancelled,
        )
        if isinstance(outcome, FilterCancelled):
            return
        self.call_from_thread(self._show_results, query, list(outcome))

    def _show_results(self, query: str, entries: list[FileEntry]) -> None:
        if query != self._search_query:
            return
        self._match_count = len(entries)
        self._visible_entries = entries[: self.MAX_VISIBLE_RESULTS]
        self._render_result_options()
        self._update_status()

    def _render_result_options(self) -> None:
        results = self.query_one("#results", OptionList)
        results.clear_options()
        if not self._visible_entries:
            results.add_option("No files found")
            return
        results.add_options(
            [
                format_result_row(entry, show_score=self._show_scores)
                for entry in self._visible_entries
            ]
        )
        results.highlighted = 0

    def _update_status(self) -> None:
        message = format_status(
            self._match_count,
            len(self._entries),
            "".join(self._search_query.split()),
        )
        if self._match_count > len(self._visible_entries):
            message += f" (showing first {len(self._visible_entries):,})"
        self.query_one("#status", Static).update(message)

    def _highlighted_entry(self) -> FileEntry | None:
        if not self._visible_entries:
            return None
        highlighted = self.query_one("#results", OptionList).highlighted
        if highlighted is None or not 0 <= highlighted < len(self._visible_entries):
            return self._visible_entries[0]
        return self._visible_entries[highlighted]

    def _exit_with_highlighted(self) -> None:
        entry = self._highlighted_entry()
        if entry is None:
            self.notify("No file to open.", title="filesift", severity="warning")
            return
        self.exit(entry.path)
