from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping, Sequence

from .errors import TargetError
from .wordlists import DEFAULT_MARKER

Wordlists = Mapping[str, Sequence[str]]


def _marker_pattern(markers: Iterable[str]) -> re.Pattern[str] | None:
    # longest names first: at a given position WL10 is read before WL1
    names = sorted({m for m in markers if m}, key=len, reverse=True)
    if not names:
        return None
    return re.compile("|".join(re.escape(n) for n in names))


def find_markers(template: str, markers: Iterable[str]) -> list[str]:
    """
    Markers present in the template, ordered by first occurrence.

    The template is read left to right, taking the longest marker name at each
    position, so WL1 is not "present" in a template that only holds WL10.
    """
    pattern = _marker_pattern(markers)
    if pattern is None:
        return []
    return list(dict.fromkeys(m.group(0) for m in pattern.finditer(template)))


def has_markers(template: str, markers: Iterable[str]) -> bool:
    return bool(find_markers(template, markers))


def _substitute(pattern: re.Pattern[str], template: str, marker: str, word: str) -> str:
    # every occurrence gets the same word (lockstep), other markers stay intact
    return pattern.sub(lambda m: word if m.group(0) == marker else m.group(0), template)


def _expand(template: str, wordlists: Wordlists, done: frozenset[str]) -> Iterator[str]:
    pattern = _marker_pattern(m for m in wordlists if m not in done)
    first = pattern.search(template) if pattern is not None else None
    if first is None:
        yield template
        return

    marker = first.group(0)
    for word in wordlists[marker]:
        yield from _expand(_substitute(pattern, template, marker, word), wordlists, done | {marker})


def expand_template(template: str, wordlists: Wordlists) -> Iterator[str]:
    """
    Cartesian expansion of a template against named wordlists.

    The leftmost marker is substituted first, words in list order, so the
    output order is reproducible. A template with no marker yields itself.
    """
    return _expand(template, wordlists, frozenset())


def strip_scheme(target: str) -> str:
    for prefix in ("http://", "https://"):
        if target.startswith(prefix):
            return target[len(prefix):]
    return target


def subdomain_fallback_targets(target: str, words: Iterable[str]) -> list[str]:
    """<word>.<host> for each word (host without scheme nor leading www.)."""
    host = strip_scheme(target)
    if host.startswith("www."):
        host = host[len("www."):]
    return [f"{w}.{host}" for w in words]


def normalize_base_url(url: str) -> str:
    if not url.startswith("http"):
        url = "http://" + url
    if url.endswith("/"):
        url = url[:-1]
    return url


def directory_fallback_targets(base_url: str, words: Iterable[str]) -> list[str]:
    base = normalize_base_url(base_url)
    return [f"{base}/{w}" for w in words]


def apply_extensions(targets: Iterable[str], extensions: Sequence[str]) -> list[str]:
    """One candidate per (target, extension), `base.ext`; no extensions -> targets unchanged."""
    # ".php", "./php" and "php" are the same extension
    exts = [e.strip().lstrip("./") for e in extensions]
    exts = [e for e in exts if e]
    if not exts:
        return list(targets)
    return [f"{t}.{e}" for t in targets for e in exts]


def _no_strategy(target: str) -> TargetError:
    return TargetError(
        f"No markers found in {target!r} and no '{DEFAULT_MARKER}' wordlist provided.",
        error_code="no_strategy",
    )


def build_subdomain_targets(target: str, wordlists: Wordlists) -> list[str]:
    if has_markers(target, wordlists):
        return list(expand_template(target, wordlists))
    if DEFAULT_MARKER in wordlists:
        return subdomain_fallback_targets(target, wordlists[DEFAULT_MARKER])
    raise _no_strategy(target)


def build_directory_targets(
    target: str, wordlists: Wordlists, extensions: Sequence[str] = ()
) -> list[str]:
    if has_markers(target, wordlists):
        base = list(expand_template(target, wordlists))
    elif DEFAULT_MARKER in wordlists:
        base = directory_fallback_targets(target, wordlists[DEFAULT_MARKER])
    else:
        raise _no_strategy(target)
    return apply_extensions(base, extensions)
