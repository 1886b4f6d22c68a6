"""Scan configuration: built once per invocation (CLI + optional YAML file) and never mutated."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

import yaml

from .errors import ConfigError
from .filters import FilterRules

logger = logging.getLogger("pathfinder")

DEFAULT_THREADS = 50
DEFAULT_RATE_LIMIT = 10
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "pathfinder/0.1"

# keys accepted in a --config YAML file
FILE_KEYS = {
    "threads",
    "rate_limit",
    "verbose",
    "output",
    "timeout",
    "resolver",
    "user_agent",
    "follow_redirects",
    "extensions",
    "match_codes",
    "filter_codes",
    "filter_sizes",
}


def parse_str_list(value: str | None) -> list[str]:
    """'php, html,,js' -> ['php', 'html', 'js']"""
    if not value:
        return []
    return [p.strip() for p in value.split(",") if p.strip()]


def parse_int_list(value: str | None) -> list[int]:
    """'200, 301,abc' -> [200, 301]; les entrées non numériques sont ignorées."""
    out: list[int] = []
    for p in parse_str_list(value):
        try:
            out.append(int(p))
        except ValueError:
            logger.warning("Ignoring non-integer value in list: %r", p)
    return out


def _as_int_list(value: Any, key: str) -> list[int]:
    if isinstance(value, str):
        return parse_int_list(value)
    if isinstance(value, int):
        return [value]
    if isinstance(value, (list, tuple)):
        try:
            return [int(v) for v in value]
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{key}: expected a list of integers ({e})") from e
    raise ConfigError(f"{key}: expected a list of integers, got {type(value).__name__}")


def _as_str_list(value: Any, key: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return parse_str_list(value)
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    raise ConfigError(f"{key}: expected a list of strings, got {type(value).__name__}")


@dataclass(frozen=True)
class ScanConfig:
    target: str
    wordlists: Mapping[str, str]
    threads: int = DEFAULT_THREADS
    rate_limit: int = DEFAULT_RATE_LIMIT
    verbose: bool = False
    output: str | None = None
    timeout: float = DEFAULT_HTTP_TIMEOUT
    resolver: tuple[str, ...] = ()
    follow_redirects: bool = False
    user_agent: str = DEFAULT_USER_AGENT
    rules: FilterRules = field(default_factory=FilterRules)

    def validate(self) -> "ScanConfig":
        if not self.target or not self.target.strip():
            raise ConfigError("a target is required", error_code="no_target")
        if not self.wordlists:
            raise ConfigError("at least one wordlist is required", error_code="no_wordlist")
        if self.threads < 1:
            raise ConfigError(f"threads must be >= 1 (got {self.threads})")
        if self.rate_limit < 1:
            raise ConfigError(f"rate limit must be >= 1 req/s (got {self.rate_limit})")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be > 0 (got {self.timeout})")
        # an empty match list would silently drop every response
        if not self.rules.match_codes:
            raise ConfigError("match codes cannot be empty", error_code="empty_match_codes")
        return self


def load_config_file(path: str) -> dict[str, Any]:
    """Charge un fichier YAML de configuration (clés de FILE_KEYS uniquement)."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}", error_code="config_io") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}", error_code="config_yaml") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")

    unknown = set(data) - FILE_KEYS
    if unknown:
        logger.warning("Unknown keys in %s ignored: %s", path, ", ".join(sorted(unknown)))
    return {k: v for k, v in data.items() if k in FILE_KEYS}


def build_config(
    target: str,
    wordlists: Mapping[str, str],
    options: Mapping[str, Any] | None = None,
    file_values: Mapping[str, Any] | None = None,
) -> ScanConfig:
    """
    Merge defaults < config file < explicit options, then validate.

    `options` only holds values the operator actually gave (None means unset).
    List options may be comma strings or sequences.
    """
    merged: dict[str, Any] = dict(file_values or {})
    for k, v in (options or {}).items():
        if v is not None:
            merged[k] = v

    rules = FilterRules.build(
        match_codes=_as_int_list(merged["match_codes"], "match_codes")
        if "match_codes" in merged
        else None,
        filter_codes=_as_int_list(merged.get("filter_codes") or [], "filter_codes"),
        filter_sizes=_as_int_list(merged.get("filter_sizes") or [], "filter_sizes"),
        extensions=_as_str_list(merged.get("extensions"), "extensions"),
    )

    resolver = _as_str_list(merged.get("resolver"), "resolver")

    try:
        cfg = ScanConfig(
            target=target.strip() if target else "",
            wordlists=dict(wordlists),
            threads=int(merged.get("threads", DEFAULT_THREADS)),
            rate_limit=int(merged.get("rate_limit", DEFAULT_RATE_LIMIT)),
            verbose=bool(merged.get("verbose", False)),
            output=merged.get("output") or None,
            timeout=float(merged.get("timeout", DEFAULT_HTTP_TIMEOUT)),
            resolver=tuple(resolver),
            follow_redirects=bool(merged.get("follow_redirects", False)),
            user_agent=str(merged.get("user_agent") or DEFAULT_USER_AGENT),
            rules=rules,
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid configuration value: {e}") from e
    return cfg.validate()

