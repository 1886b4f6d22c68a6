from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class SubdomainHit:
    """Cible résolue en mode sous-domaines."""

    target: str
    addresses: Tuple[str, ...]

    def format_line(self) -> str:
        return f"[+] Found: {self.target} -> {', '.join(self.addresses)}"

    def to_dict(self) -> Dict[str, Any]:
        return {"target": self.target, "addresses": list(self.addresses)}


@dataclass(frozen=True)
class PathHit:
    """Réponse HTTP retenue par les filtres en mode répertoires."""

    url: str
    status: int
    size: int

    def format_line(self) -> str:
        return f"[+] Found: {self.url} [Code: {self.status}, Size: {self.size}]"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
