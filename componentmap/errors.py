"""Error taxonomy shared across componentmap components."""

from __future__ import annotations


class ComponentMapError(RuntimeError):
    """Base class for componentmap failures."""


class ParseError(ComponentMapError):
    """Raised when a source file is not valid TypeScript/JSX."""

    def __init__(self, path: str, line: int, column: int, detail: str = "syntax error") -> None:
        super().__init__(f"{path}:{line}:{column}: {detail}")
        self.path = path
        self.line = line
        self.column = column


class FileSystemError(ComponentMapError):
    """Raised when a directory cannot be listed or a file cannot be read."""


class MalformedRequestError(ComponentMapError):
    """Raised when an inbound manifest request is not a JSON object."""


class RouteConfigError(ComponentMapError):
    """Raised when the host framework's route table cannot be loaded."""


class ConfigError(ComponentMapError):
    """Raised when the configuration file cannot be parsed."""


__all__ = [
    "ComponentMapError",
    "ConfigError",
    "FileSystemError",
    "MalformedRequestError",
    "ParseError",
    "RouteConfigError",
]
