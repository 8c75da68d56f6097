"""Subsequence fuzzy scorer in the fzf/skim family."""

from __future__ import annotations

SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1

BONUS_BOUNDARY = 8
BONUS_BOUNDARY_WHITE = 10
BONUS_BOUNDARY_DELIMITER = 9
BONUS_NONWORD = 8
BONUS_CAMEL123 = 7
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2
BONUS_CASE_MATCH = 1

_WHITE, _NONWORD, _DELIMITER, _LOWER, _UPPER, _NUMBER = range(6)
_DELIMITERS = frozenset("/\\,:;|_-.")


def _char_class(ch: str) -> int:
    if ch.isspace():
        return _WHITE
    if ch in _DELIMITERS:
        return _DELIMITER
    if ch.isdigit():
        return _NUMBER
    if ch.isupper():
        return _UPPER
    if ch.isalpha():
        return _LOWER
    return _NONWORD


def _bonus_for(prev_class: int, char_class: int) -> int:
    if char_class > _NONWORD:
        if prev_class == _WHITE:
            return BONUS_BOUNDARY_WHITE
        if prev_class == _DELIMITER:
            return BONUS_BOUNDARY_DELIMITER
        if prev_class == _NONWORD:
            return BONUS_BOUNDARY
    if (prev_class == _LOWER and char_class == _UPPER) or (
        prev_class != _NUMBER and char_class == _NUMBER
    ):
        return BONUS_CAMEL123
    if char_class in (_NONWORD, _DELIMITER):
        return BONUS_NONWORD
    if char_class == _WHITE:
        return BONUS_BOUNDARY_WHITE
    return 0


def _fold(text: str) -> list[str]:
    # Per-character folding keeps indices aligned with the original text.
    return [ch.lower()[:1] or ch for ch in text]


class FuzzyScorer:
    """Scores a candidate label against a query by ordered subsequence match.

    The query characters must appear in order (case-insensitively) in the
    candidate. Among all such alignments the best one is chosen by dynamic
    programming over (query index, candidate index):

    - every matched character earns `SCORE_MATCH`, plus `BONUS_CASE_MATCH` when
      the case is identical;
    - a character at a word boundary, after a delimiter, or at a camel-case or
      digit transition earns a position bonus, doubled for the first query
      character;
    - a character directly following the previous match continues a run and
      earns at least `BONUS_CONSECUTIVE`, inheriting the boundary bonus of the
      run's first character;
    - a gap between matches costs `SCORE_GAP_START` plus `SCORE_GAP_EXTENSION`
      for each additional skipped character.

    `score` returns `None` when no alignment exists. An empty query scores 0.
    """

    def score(self, candidate: str, query: str) -> int | None:
        if not query:
            return 0
        if len(query) > len(candidate):
            return None

        cand_fold = _fold(candidate)
        query_fold = _fold(query)

        window = self._match_window(cand_fold, query_fold)
        if window is None:
            return None
        start, end = window

        bonuses: list[int] = []
        prev_class = _WHITE
        for ch in candidate:
            char_class = _char_class(ch)
            bonuses.append(_bonus_for(prev_class, char_class))
            prev_class = char_class

        width = len(candidate)
        prev_scores: list[int | None] = [None] * width
        prev_runs: list[int] = [0] * width

        for i, query_char in enumerate(query_fold):
            scores: list[int | None] = [None] * width
            runs: list[int] = [0] * width
            gap_best: int | None = None

            for j in range(start, end):
                if i > 0 and j - 2 >= start:
                    opened = prev_scores[j - 2]
                    candidates = []
                    if gap_best is not None:
                        candidates.append(gap_best + SCORE_GAP_EXTENSION)
                    if opened is not None:
                        candidates.append(opened + SCORE_GAP_START)
                    gap_best = max(candidates) if candidates else None

                if cand_fold[j] != query_char:
                    continue

                base = SCORE_MATCH
                if candidate[j] == query[i]:
                    base += BONUS_CASE_MATCH
                bonus = bonuses[j]

                if i == 0:
                    scores[j] = base + bonus * BONUS_FIRST_CHAR_MULTIPLIER
                    runs[j] = bonus
                    continue

                best: int | None = None
                best_run = 0
                diagonal = prev_scores[j - 1] if j > start else None
                if diagonal is not None:
                    first_bonus = prev_runs[j - 1]
                    if bonus >= BONUS_BOUNDARY and bonus > first_bonus:
                        first_bonus = bonus
                    best = diagonal + base + max(bonus, first_bonus, BONUS_CONSECUTIVE)
                    best_run = first_bonus
                if gap_best is not None:
                    gapped = gap_best + base + bonus
                    if best is None or gapped > best:
                        best = gapped
                        best_run = bonus

                scores[j] = best
                runs[j] = best_run

            prev_scores = scores
            prev_runs = runs

        matched = [value for value in prev_scores if value is not None]
        if not matched:
            return None
        return max(matched)

    def matches(self, candidate: str, query: str) -> bool:
        return self.score(candidate, query) is not None

    @staticmethod
    def _match_window(cand_fold: list[str], query_fold: list[str]) -> tuple[int, int] | None:
        """Return the candidate slice that can hold an alignment, or `None`.

        The slice starts at the first occurrence of the first query character
        and ends after the last occurrence of the last query character.
        """

        pos = 0
        first = -1
        for query_char in query_fold:
            while pos < len(cand_fold) and cand_fold[pos] != query_char:
                pos += 1
            if pos == len(cand_fold):
                return None
            if first < 0:
                first = pos
            pos += 1

        last_char = query_fold[-1]
        end = len(cand_fold)
        while cand_fold[end - 1] != last_char:
            end -= 1
        return first, end
