from rich.text import Text

from filesift.models import FileEntry
from filesift.rendering import (
    format_result_row,
    format_score,
    format_status,
    highlight_match,
)


def _styled_characters(text: Text, style: str) -> str:
    return "".join(
        text.plain[span.start : span.end]
        for span in text.spans
        if str(span.style) == style
    )


def test_highlight_match_marks_matched_characters() -> None:
    entry = FileEntry(
        path="src/FuzzyMatch.cs",
        name="FuzzyMatch.cs",
        match_score=117,
        matched_indices=(4, 6, 9, 11, 12),
    )

    text = highlight_match(entry)

    assert text.plain == "src/FuzzyMatch.cs"
    assert _styled_characters(text, "bold red") == "FzMtc"
    assert _styled_characters(text, "dim") == "src/"


def test_highlight_match_without_directory_or_matches() -> None:
    text = highlight_match(FileEntry(path="setup.py", name="setup.py"))

    assert text.plain == "setup.py"
    assert text.spans == []


def test_format_result_row_with_score_column() -> None:
    entry = FileEntry(
        path="src/main.py",
        name="main.py",
        match_score=1162,
        matched_indices=(4,),
    )

    assert format_result_row(entry).plain == "src/main.py"
    assert format_result_row(entry, show_score=True).plain == " 1,162 src/main.py"


def test_format_score_for_unscored_entry() -> None:
    assert format_score(None) == "     -"


def test_format_status() -> None:
    assert format_status(0, 1200, "") == "1,200 files"
    assert format_status(0, 3, "xyz") == "No files match 'xyz' (3 scanned)."
    assert format_status(2, 3, "ab") == "2 of 3 files match 'ab'"
