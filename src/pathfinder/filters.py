from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

DEFAULT_MATCH_CODES = (200, 204, 301, 302, 307, 401, 403)


class Verdict(str, Enum):
    FOUND = "found"
    NO_MATCH = "no_match"
    FILTERED_CODE = "filtered_code"
    FILTERED_SIZE = "filtered_size"


@dataclass(frozen=True)
class FilterRules:
    """Match/filter predicates for HTTP responses (directory mode)."""

    match_codes: frozenset[int] = frozenset(DEFAULT_MATCH_CODES)
    filter_codes: frozenset[int] = frozenset()
    filter_sizes: frozenset[int] = frozenset()
    extensions: tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        match_codes: Iterable[int] | None = None,
        filter_codes: Iterable[int] = (),
        filter_sizes: Iterable[int] = (),
        extensions: Iterable[str] = (),
    ) -> "FilterRules":
        return cls(
            match_codes=frozenset(DEFAULT_MATCH_CODES if match_codes is None else match_codes),
            filter_codes=frozenset(filter_codes),
            filter_sizes=frozenset(filter_sizes),
            extensions=tuple(extensions),
        )

    def classify(self, status: int, size: int) -> Verdict:
        return classify(status, size, self)

    def accepts(self, status: int, size: int) -> bool:
        return classify(status, size, self) is Verdict.FOUND


def classify(status: int, size: int, rules: FilterRules) -> Verdict:
    """
    Order matters: match codes first, then filtered codes, then filtered sizes.
    Empty filter sets mean "no constraint".
    """
    if status not in rules.match_codes:
        return Verdict.NO_MATCH
    if rules.filter_codes and status in rules.filter_codes:
        return Verdict.FILTERED_CODE
    if rules.filter_sizes and size in rules.filter_sizes:
        return Verdict.FILTERED_SIZE
    return Verdict.FOUND
