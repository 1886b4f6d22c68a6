from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping

from .errors import WordlistError

logger = logging.getLogger("pathfinder")

DEFAULT_MARKER = "WL1"

_MARKER_RE = re.compile(r"[A-Za-z0-9_]+")


def validate_marker(name: str) -> str:
    """Un marqueur = lettres, chiffres ou underscore (rien qui touche à la syntaxe d'URL)."""
    if not isinstance(name, str) or not _MARKER_RE.fullmatch(name):
        raise WordlistError(f"invalid marker name: {name!r}", error_code="bad_marker")
    return name


def parse_wordlist_option(value: str) -> tuple[str, str]:
    """
    Découpe une option -w en (marker, path).

    "/lists/subs.txt:SUB" -> ("SUB", "/lists/subs.txt")
    "/lists/subs.txt"     -> ("WL1", "/lists/subs.txt")

    Seul ce qui suit le dernier ':' est considéré, et seulement si c'est un nom
    de marqueur valide ("C:\\lists\\a.txt" reste un chemin).
    """
    path, sep, marker = value.rpartition(":")
    if sep and path and _MARKER_RE.fullmatch(marker):
        return marker, path
    return DEFAULT_MARKER, value


def load_wordlist(path: str) -> list[str]:
    """Charge une wordlist (une entrée par ligne, lignes vides ignorées)."""
    words: list[str] = []
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        for line in f:
            w = line.strip()
            if not w:
                continue
            words.append(w)
    return words


class WordlistStore(Mapping):
    """Read-only marker -> words mapping, built once before the scan starts."""

    def __init__(self, data: Mapping[str, list[str]] | None = None):
        self._data: dict[str, tuple[str, ...]] = {}
        for marker, words in (data or {}).items():
            self._data[validate_marker(marker)] = tuple(words)

    @classmethod
    def load(cls, paths: Mapping[str, str]) -> "WordlistStore":
        data: dict[str, list[str]] = {}
        for marker, path in paths.items():
            validate_marker(marker)
            try:
                data[marker] = load_wordlist(path)
            except OSError as e:
                raise WordlistError(
                    f"failed to read wordlist for marker {marker} at {path}: {e}",
                    error_code="unreadable",
                ) from e
            logger.debug("Loaded %s words for %s from %s", len(data[marker]), marker, path)
        return cls(data)

    @property
    def markers(self) -> tuple[str, ...]:
        return tuple(self._data)

    def words(self, marker: str) -> tuple[str, ...]:
        return self._data[marker]

    def as_mapping(self) -> dict[str, tuple[str, ...]]:
        return dict(self._data)

    def __getitem__(self, marker: str) -> tuple[str, ...]:
        return self._data[marker]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)
