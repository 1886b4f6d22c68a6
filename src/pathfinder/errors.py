"""
pathfinder - exception classes

Setup errors raised before any probe runs. Per-probe failures never use these.
"""


class PathfinderError(Exception):
    """Base exception for all pathfinder errors"""

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(PathfinderError):
    """Raised when the scan configuration is invalid"""
    pass


class WordlistError(PathfinderError):
    """Raised when a wordlist cannot be read or its marker is invalid"""
    pass


class TargetError(PathfinderError):
    """Raised when no target-generation strategy applies"""
    pass
