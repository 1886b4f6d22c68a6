import logging
from typing import Callable, List, Optional

import click

from .config import ScanConfig
from .expander import build_directory_targets, build_subdomain_targets
from .models import PathHit, SubdomainHit
from .pool import ScanStats, WorkerPool
from .probes import DnsProbe, HttpProbe
from .sink import ResultSink
from .wordlists import WordlistStore

# Logging basic
logger = logging.getLogger("pathfinder")
if not logger.handlers:
    h = logging.StreamHandler()
    formatter = logging.Formatter("[%(levelname)s] %(message)s")
    h.setFormatter(formatter)
    logger.addHandler(h)
logger.setLevel(logging.INFO)

SEPARATOR = "-" * 60

Echo = Callable[..., None]


def set_verbose(verbose: bool) -> None:
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def print_config(config: ScanConfig, echo: Echo = click.echo, directory: bool = False) -> None:
    echo(f"[*] Target URL:      {config.target}")
    echo(f"[*] Threads:         {config.threads}")
    echo(f"[*] Rate Limit:      {config.rate_limit} req/s")
    echo("[*] Wordlists:")
    for marker, path in config.wordlists.items():
        echo(f"    - {marker}: {path}")

    if directory:
        rules = config.rules
        if rules.extensions:
            echo(f"[*] Extensions:      {', '.join(rules.extensions)}")
        if rules.match_codes:
            echo(f"[*] Match Codes:     {', '.join(str(c) for c in sorted(rules.match_codes))}")
        if rules.filter_codes:
            echo(f"[*] Filter Codes:    {', '.join(str(c) for c in sorted(rules.filter_codes))}")
        if rules.filter_sizes:
            echo(f"[*] Filter Sizes:    {', '.join(str(s) for s in sorted(rules.filter_sizes))}")
    if config.output:
        echo(f"[*] Output:          {config.output}")
    echo(SEPARATOR)


def _run(config: ScanConfig, targets: List[str], probe, echo: Echo, noun: str) -> list:
    hits: list = []
    stats = ScanStats()

    echo(f"[*] Generated {len(targets)} {noun}. Starting scan...\n")
    with ResultSink(config.output, echo=echo) as sink:

        def on_found(hit) -> None:
            hits.append(hit)
            sink.emit(hit)

        pool = WorkerPool(probe, config.threads, config.rate_limit, on_found, stats=stats)
        pool.run(targets)

    stats.incr("errors", getattr(probe, "errors", 0))
    echo("\n[*] Scan Complete.")
    echo(f"[*] {stats.summary()}")
    if stats.errors:
        logger.debug("%s probes failed (timeouts / transport errors count as not found)",
                     stats.errors)
    return hits


def run_subdomain_scan(config: ScanConfig, echo: Echo = click.echo,
                       probe: Optional[DnsProbe] = None) -> List[SubdomainHit]:
    """
    Enumération de sous-domaines par résolution DNS.

    Les erreurs de setup (wordlist illisible, aucune stratégie de génération)
    sont levées avant le démarrage des workers.
    """
    set_verbose(config.verbose)
    print_config(config, echo)

    store = WordlistStore.load(config.wordlists)
    targets = build_subdomain_targets(config.target, store)

    probe = probe or DnsProbe(nameservers=config.resolver or None)
    return _run(config, targets, probe, echo, "targets")


def run_directory_scan(config: ScanConfig, echo: Echo = click.echo,
                       probe: Optional[HttpProbe] = None) -> List[PathHit]:
    """Enumération de chemins HTTP, filtrés par code et taille."""
    set_verbose(config.verbose)
    print_config(config, echo, directory=True)

    store = WordlistStore.load(config.wordlists)
    targets = build_directory_targets(config.target, store, config.rules.extensions)

    own_probe = probe is None
    if own_probe:
        probe = HttpProbe(
            config.threads,
            config.rules,
            timeout=config.timeout,
            follow_redirects=config.follow_redirects,
            user_agent=config.user_agent,
        )
    try:
        return _run(config, targets, probe, echo, "requests")
    finally:
        if own_probe:
            probe.close()
