from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import replace

from filesift.models import FileEntry, FilterCancelled, MatchResult

logger = logging.getLogger(__name__)

SEQUENTIAL_BONUS = 20  # adjacent matches
SEPARATOR_BONUS = 20  # match right after a separator
CAMEL_BONUS = 25  # uppercase match right after a lowercase letter or a slash
FIRST_LETTER_BONUS = 25  # match on the first letter of the filename
FILENAME_BONUS = 15  # match inside the filename instead of the directory part
LEADING_LETTER_PENALTY = -2  # per filename letter before the first filename match
UNMATCHED_LETTER_PENALTY = -1  # per filename letter the run leaves unmatched

PREFERRED_SUFFIX = "cpp"
PREFERRED_SUFFIX_BONUS = 3

PATH_SEPARATORS = frozenset("\\/")
WORD_SEPARATORS = frozenset("_ \\/")

NO_MATCH = MatchResult(matched=False, score=0)

CancelCheck = Callable[[], bool]


def segment_score(candidate: str, run: Sequence[int], filename_start_index: int) -> int:
    """Score one run of matched candidate indices; higher scores are better."""
    score = 0
    matches_in_filename = 0
    first_match_in_filename: int | None = None

    for position, index in enumerate(run):
        if position > 0 and index == run[position - 1] + 1:
            score += SEQUENTIAL_BONUS

        if index > 0:
            neighbor = candidate[index - 1]
            current = candidate[index]
            if (
                neighbor.islower() or neighbor in PATH_SEPARATORS
            ) and current.isupper():
                score += CAMEL_BONUS
            if neighbor in WORD_SEPARATORS:
                score += SEPARATOR_BONUS

        if index >= filename_start_index:
            if first_match_in_filename is None:
                first_match_in_filename = index
            score += FILENAME_BONUS
            if index == filename_start_index:
                score += FIRST_LETTER_BONUS
            matches_in_filename += 1

    if first_match_in_filename is not None:
        score += min(
            LEADING_LETTER_PENALTY * (first_match_in_filename - filename_start_index),
            0,
        )

    unmatched = len(candidate) - filename_start_index - matches_in_filename
    score += min(UNMATCHED_LETTER_PENALTY * unmatched, 0)
    return score


def _latest_positions(
    pattern: Sequence[str], candidate: Sequence[str]
) -> list[int] | None:
    # latest[p] is the last candidate index where pattern[p] can sit while
    # pattern[p + 1:] still fits after it.
    latest = [0] * len(pattern)
    cursor = len(candidate)
    for pattern_index in range(len(pattern) - 1, -1, -1):
        cursor -= 1
        while cursor >= 0 and candidate[cursor] != pattern[pattern_index]:
            cursor -= 1
        if cursor < 0:
            return None
        latest[pattern_index] = cursor
    return latest


def _extend_run(
    pattern: Sequence[str],
    candidate: Sequence[str],
    pattern_index: int,
    candidate_index: int,
) -> list[int]:
    run: list[int] = []
    while (
        pattern_index < len(pattern)
        and candidate_index < len(candidate)
        and pattern[pattern_index] == candidate[candidate_index]
    ):
        run.append(candidate_index)
        pattern_index += 1
        candidate_index += 1
    return run


def score_match(pattern: str, candidate: str, filename_start_index: int) -> MatchResult:
    """Align ``pattern`` as a case-insensitive subsequence of ``candidate``.

    The pattern is consumed one run at a time. For the current pattern position
    every start between the end of the previous run and the last start that
    still leaves room for the rest of the pattern is tried, and the run is
    extended for as long as the characters keep matching. Runs longer than one
    character win over single characters; within each group the highest
    :func:`segment_score` wins and ties keep the leftmost run. Every accepted
    run adds at least one point, so any alignable pattern scores above zero.

    Candidates ending in ``cpp`` get a small constant bonus.
    """
    if not 0 <= filename_start_index <= len(candidate):
        raise ValueError(
            f"filename_start_index {filename_start_index} is outside "
            f"of a candidate of length {len(candidate)}"
        )
    if not pattern or not candidate:
        return NO_MATCH

    # Fold per character so indices keep lining up with the original string.
    folded_pattern = [char.lower() for char in pattern]
    folded_candidate = [char.lower() for char in candidate]
    latest = _latest_positions(folded_pattern, folded_candidate)
    if latest is None:
        return NO_MATCH

    score = 0
    matched_indices: list[int] = []
    pattern_index = 0
    floor = 0
    while pattern_index < len(pattern):
        best_run: list[int] = []
        best_score = 0
        single_run: list[int] = []
        single_score = 0
        for start in range(floor, latest[pattern_index] + 1):
            run = _extend_run(folded_pattern, folded_candidate, pattern_index, start)
            if not run:
                continue
            run_score = segment_score(candidate, run, filename_start_index)
            if len(run) > 1:
                if not best_run or run_score > best_score:
                    best_run, best_score = run, run_score
            elif not single_run or run_score > single_score:
                single_run, single_score = run, run_score

        if not best_run:
            best_run, best_score = single_run, single_score

        score += max(best_score, 1)
        matched_indices.extend(best_run)
        pattern_index += len(best_run)
        floor = best_run[-1] + 1

    if candidate.endswith(PREFERRED_SUFFIX):
        score += PREFERRED_SUFFIX_BONUS

    return MatchResult(
        matched=score > 0,
        score=score,
        matched_indices=tuple(matched_indices),
    )


def match_score_sort_key(entry: FileEntry) -> int:
    return -(entry.match_score or 0)


def filter_and_rank(
    expression: str,
    candidates: Sequence[FileEntry],
    cancel: CancelCheck | None = None,
) -> Sequence[FileEntry] | FilterCancelled:
    """Keep the candidates matching ``expression``, best match first.

    Whitespace in the expression is ignored. An empty expression returns
    ``candidates`` as is. ``cancel`` is polled before each candidate; once it
    returns ``True`` the run stops and :class:`FilterCancelled` is returned
    instead of a partial list.
    """
    pattern = "".join(expression.split())
    if not pattern:
        return candidates

    ranked: list[FileEntry] = []
    for processed, entry in enumerate(candidates):
        if cancel is not None and cancel():
            logger.debug(
                "Filter for %r cancelled after %d of %d candidates",
                pattern,
                processed,
                len(candidates),
            )
            return FilterCancelled(processed=processed)

        result = score_match(pattern, entry.path, entry.filename_start_index)
        if result.score > 0:
            ranked.append(
                replace(
                    entry,
                    match_score=result.score,
                    matched_indices=result.matched_indices,
                )
            )

    logger.debug(
        "Filter for %r kept %d of %d candidates", pattern, len(ranked), len(candidates)
    )
    return sorted(ranked, key=match_score_sort_key)
