from __future__ import annotations

from rich.text import Text

from filesift.models import FileEntry

SCORE_COLUMN_WIDTH = 6


def highlight_match(entry: FileEntry, *, style: str = "bold red") -> Text:
    text = Text(entry.path)
    directory_length = entry.filename_start_index
    if directory_length:
        text.stylize("dim", 0, directory_length)
    for index in entry.matched_indices:
        text.stylize(style, index, index + 1)
    return text


def format_score(value: int | None) -> str:
    if value is None:
        return "-".rjust(SCORE_COLUMN_WIDTH)
    return f"{value:,}".rjust(SCORE_COLUMN_WIDTH)


def format_result_row(entry: FileEntry, *, show_score: bool = False) -> Text:
    row = highlight_match(entry)
    if not show_score:
        return row
    return Text.assemble((format_score(entry.match_score), "cyan"), " ", row)


def format_status(visible: int, total: int, query: str) -> str:
    if not query:
        return f"{total:,} files"
    if not visible:
        return f"No files match {query!r} ({total:,} scanned)."
    return f"{visible:,} of {total:,} files match {query!r}"
