"""Access to the host framework's route table.

The table is only consulted to cross-reference inbound route ids; nothing in
the manifest depends on it.
"""

from __future__ import annotations

import json
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence

from .config import DEFAULT_ROUTES_COMMAND
from .errors import RouteConfigError
from .logging import get_logger

Runner = Callable[..., str]


@dataclass(frozen=True)
class RouteEntry:
    """One route known to the host framework."""

    id: str
    path: Optional[str] = None
    file: Optional[str] = None
    parent_id: Optional[str] = None
    index: bool = False


RouteTable = Mapping[str, RouteEntry]


def parse_route_table(payload: Any) -> Dict[str, RouteEntry]:
    """Accept either an ``id -> route`` mapping or the nested ``routes --json`` list."""
    table: Dict[str, RouteEntry] = {}
    if isinstance(payload, dict):
        for key, value in payload.items():
            if not isinstance(value, dict):
                raise RouteConfigError(f"Route {key!r} must be an object")
            table[str(key)] = _route_entry(value, default_id=str(key))
        return table
    if isinstance(payload, list):
        _flatten(payload, None, table)
        return table
    raise RouteConfigError("Route table must be a JSON object or array")


def _flatten(routes: Sequence[Any], parent_id: Optional[str], table: Dict[str, RouteEntry]) -> None:
    for route in routes:
        if not isinstance(route, dict) or not isinstance(route.get("id"), str):
            raise RouteConfigError("Route entries must be objects with a string id")
        entry = _route_entry(route, parent_id=parent_id)
        table[entry.id] = entry
        children = route.get("children")
        if isinstance(children, list):
            _flatten(children, entry.id, table)


def _route_entry(
    data: Mapping[str, Any],
    *,
    default_id: str = "",
    parent_id: Optional[str] = None,
) -> RouteEntry:
    path = data.get("path")
    file = data.get("file")
    parent = data.get("parentId", parent_id)
    return RouteEntry(
        id=str(data.get("id", default_id)),
        path=path if isinstance(path, str) else None,
        file=file if isinstance(file, str) else None,
        parent_id=parent if isinstance(parent, str) else None,
        index=bool(data.get("index", False)),
    )


class RouteConfigLoader:
    """Loads the route table from a JSON file or the framework CLI."""

    def __init__(self, runner: Runner | None = None) -> None:
        self._runner = runner or self._default_runner
        self.logger = get_logger("routes")

    def load(
        self,
        app_root: Path,
        mode: str = "development",
        *,
        routes_file: Optional[Path] = None,
        command: Optional[Sequence[str]] = None,
    ) -> Dict[str, RouteEntry]:
        if routes_file is not None:
            return self.load_file(routes_file)
        return self.load_from_command(app_root, mode, command or DEFAULT_ROUTES_COMMAND)

    def load_file(self, routes_file: Path) -> Dict[str, RouteEntry]:
        try:
            text = routes_file.read_text(encoding="utf-8")
        except OSError as exc:
            raise RouteConfigError(f"Cannot read route table {routes_file}: {exc}") from exc
        return self._parse(text, str(routes_file))

    def load_from_command(
        self, app_root: Path, mode: str, command: Iterable[str]
    ) -> Dict[str, RouteEntry]:
        args = list(command)
        env = dict(os.environ)
        env["NODE_ENV"] = mode
        self.logger.debug("Loading routes via %s", " ".join(args))
        try:
            output = self._runner(args, cwd=app_root, env=env)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise RouteConfigError(f"Route command failed: {exc}") from exc
        return self._parse(output, " ".join(args))

    @staticmethod
    def _parse(text: str, origin: str) -> Dict[str, RouteEntry]:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RouteConfigError(f"Route table from {origin} is not valid JSON: {exc}") from exc
        return parse_route_table(payload)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        env: dict[str, str] | None = None,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            env=env,
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


def find_route(routes: RouteTable, route_id: Optional[str]) -> Optional[RouteEntry]:
    if route_id is None:
        return None
    return routes.get(route_id)


__all__ = [
    "RouteConfigLoader",
    "RouteEntry",
    "RouteTable",
    "find_route",
    "parse_route_table",
]
