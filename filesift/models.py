from __future__ import annotations

from dataclasses import dataclass

MatchIndices = tuple[int, ...]


@dataclass(frozen=True)
class MatchResult:
    matched: bool
    score: int
    matched_indices: MatchIndices = ()


@dataclass(frozen=True)
class FileEntry:
    path: str
    name: str
    match_score: int | None = None
    matched_indices: MatchIndices = ()

    @property
    def filename_start_index(self) -> int:
        return len(self.path) - len(self.name)


@dataclass(frozen=True)
class FilterCancelled:
    """Outcome of a filter run that stopped because cancellation was requested."""

    processed: int
