from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, TextIO

import click

logger = logging.getLogger("pathfinder")


class ResultSink:
    """
    stdout + fichier optionnel (ajout). Une ligne par résultat, écrite sous verrou.

    Si le fichier ne peut pas être ouvert, on le signale une fois et on continue
    en stdout seulement.
    """

    def __init__(self, output_path: Optional[str] = None,
                 echo: Callable[..., None] = click.echo, color: bool = True):
        self.output_path = output_path
        self.echo = echo
        self.color = color
        self.lines = 0
        self._lock = threading.Lock()
        self._fh: Optional[TextIO] = None

        if output_path:
            try:
                self._fh = open(output_path, "a", encoding="utf-8")
            except OSError as e:
                logger.error("Error opening output file %s: %s (stdout only)", output_path, e)

    @property
    def persisting(self) -> bool:
        return self._fh is not None

    def emit(self, hit) -> None:
        line = hit.format_line()
        with self._lock:
            self.echo(click.style(line, fg="green") if self.color else line)
            if self._fh is not None:
                self._fh.write(line + "\n")
                self._fh.flush()
            self.lines += 1

    def close(self) -> None:
        with self._lock:
            if self._fh is not None:
                self._fh.close()
                self._fh = None

    def __enter__(self) -> "ResultSink":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
