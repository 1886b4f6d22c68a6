# src/pathfinder/probes.py

from __future__ import annotations

import logging
import threading
from typing import Optional, Sequence

import dns.exception
import requests
import urllib3
from requests.adapters import HTTPAdapter

from .config import DEFAULT_HTTP_TIMEOUT, DEFAULT_USER_AGENT
from .dns.resolver import DEFAULT_TIMEOUT as DNS_TIMEOUT
from .dns.resolver import CachedResolver, make_resolver
from .expander import strip_scheme
from .filters import FilterRules, Verdict
from .models import PathHit, SubdomainHit

logger = logging.getLogger("pathfinder.probes")

# sessions run with verify=False
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)


class _ErrorCounter:
    def __init__(self):
        self._lock = threading.Lock()
        self._errors = 0

    def _record_error(self) -> None:
        with self._lock:
            self._errors += 1

    @property
    def errors(self) -> int:
        with self._lock:
            return self._errors


class DnsProbe(_ErrorCounter):
    """Résolution d'un nom d'hôte ; Found = au moins une adresse."""

    def __init__(self, nameservers: Optional[Sequence[str]] = None,
                 timeout: float = DNS_TIMEOUT, resolver: Optional[CachedResolver] = None):
        super().__init__()
        self.resolver = resolver or CachedResolver(make_resolver(nameservers, timeout=timeout))

    def __call__(self, target: str) -> Optional[SubdomainHit]:
        host = strip_scheme(target)
        try:
            addresses = self.resolver.lookup_host(host)
        except dns.exception.DNSException as e:
            self._record_error()
            logger.debug("DNS lookup failed for %s: %s", host, e)
            return None
        if not addresses:
            return None
        return SubdomainHit(target=target, addresses=tuple(addresses))


def make_session(threads: int, user_agent: str = DEFAULT_USER_AGENT) -> requests.Session:
    """Session partagée ; le pool de connexions suit le nombre de workers."""
    session = requests.Session()
    session.verify = False
    adapter = HTTPAdapter(pool_connections=threads, pool_maxsize=threads, max_retries=0)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers["User-Agent"] = user_agent
    # Content-Length doit être la taille réelle du corps, pas celle compressée
    session.headers["Accept-Encoding"] = "identity"
    return session


def _content_length(resp: requests.Response) -> int:
    value = resp.headers.get("Content-Length")
    try:
        return int(value) if value is not None else -1
    except ValueError:
        return -1


class HttpProbe(_ErrorCounter):
    """GET sans lecture du corps, puis application des FilterRules."""

    def __init__(self, threads: int, rules: FilterRules, timeout: float = DEFAULT_HTTP_TIMEOUT,
                 follow_redirects: bool = False, user_agent: str = DEFAULT_USER_AGENT,
                 session: Optional[requests.Session] = None):
        super().__init__()
        self.rules = rules
        self.timeout = timeout
        self.follow_redirects = follow_redirects
        self.session = session or make_session(threads, user_agent)

    def __call__(self, target: str) -> Optional[PathHit]:
        url = target if target.startswith("http") else "http://" + target
        try:
            resp = self.session.get(
                url,
                timeout=self.timeout,
                allow_redirects=self.follow_redirects,
                stream=True,
            )
        except requests.RequestException as e:
            self._record_error()
            logger.debug("HTTP GET failed for %s: %s", url, e)
            return None

        try:
            status = resp.status_code
            size = _content_length(resp)
        finally:
            resp.close()

        verdict = self.rules.classify(status, size)
        if verdict is not Verdict.FOUND:
            logger.debug("%s -> %s (code=%s size=%s)", url, verdict.value, status, size)
            return None
        return PathHit(url=url, status=status, size=size)

    def close(self) -> None:
        self.session.close()
