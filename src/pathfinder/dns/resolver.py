import threading

import dns.resolver
from cachetools import TTLCache

# --- Defaults
DEFAULT_TIMEOUT = 3.0
DEFAULT_CACHE_TTL = 300
DEFAULT_CACHE_SIZE = 10000

ADDRESS_TYPES = ("A", "AAAA")


def normalize_nameservers(nameservers) -> list[str]:
    """Accepte "1.1.1.1,8.8.8.8" ou une liste ; renvoie des chaînes non vides."""
    if isinstance(nameservers, str):
        return [s.strip() for s in nameservers.split(",") if s.strip()]
    if isinstance(nameservers, list | tuple):
        return [str(s).strip() for s in nameservers if str(s).strip()]
    return []


def make_resolver(nameservers=None, timeout: float = DEFAULT_TIMEOUT) -> dns.resolver.Resolver:
    try:
        r = dns.resolver.Resolver(configure=True)
    except dns.resolver.NoResolverConfiguration:
        # pas de /etc/resolv.conf utilisable
        r = dns.resolver.Resolver(configure=False)

    ns_list = normalize_nameservers(nameservers)

    # Si rien fourni, on garde ceux du système, sinon fallback sur un DNS public
    if ns_list:
        r.nameservers = ns_list
    elif not list(getattr(r, "nameservers", []) or []):
        r.nameservers = ["8.8.8.8"]
    r.timeout = timeout
    r.lifetime = timeout
    return r


class CachedResolver:
    """
    Host -> addresses (A puis AAAA), avec cache TTL partagé entre threads.

    Seules les réponses définitives sont mises en cache (adresses ou NXDOMAIN /
    pas de réponse). Un timeout ou une panne réseau remonte en DNSException.
    """

    def __init__(self, resolver: dns.resolver.Resolver, ttl: int = DEFAULT_CACHE_TTL,
                 maxsize: int = DEFAULT_CACHE_SIZE):
        self.resolver = resolver
        self._cache = TTLCache(maxsize=maxsize, ttl=ttl)
        self._lock = threading.Lock()

    def lookup_host(self, hostname: str) -> list[str]:
        key = hostname.rstrip(".").lower()
        with self._lock:
            if key in self._cache:
                return self._cache[key]

        out: list[str] = []
        for qtype in ADDRESS_TYPES:
            try:
                ans = self.resolver.resolve(key, qtype)
            except dns.resolver.NXDOMAIN:
                # le nom n'existe pas : inutile de demander AAAA
                break
            except dns.resolver.NoAnswer:
                continue
            for rr in ans:
                addr = rr.to_text()
                if addr not in out:
                    out.append(addr)

        with self._lock:
            self._cache[key] = out
        return out
