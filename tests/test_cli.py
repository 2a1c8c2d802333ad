"""CLI behaviour tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from componentmap.cli import _build_parser, _load_routes, main
from componentmap.config import ComponentMapConfig
from componentmap.errors import RouteConfigError
from componentmap.routes import RouteConfigLoader
from tests._fixtures.app_builder import AppBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "build"])
    assert args.verbose is True
    assert args.command == "build"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["serve", "--verbose", "--port", "9001"])
    assert args.verbose is True
    assert args.command == "serve"
    assert args.port == 9001


def test_build_prints_manifest(app_builder: AppBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    app_builder.write(
        {
            "app/routes/foo.tsx": """
            export default function Foo() {
              return <div />;
            }
            """,
        }
    )

    main(["build", str(app_builder.path())])

    payload = json.loads(capsys.readouterr().out)
    assert list(payload["__appManifest"]) == ["routes/foo"]


def test_build_writes_output_file(app_builder: AppBuilder, tmp_path: Path) -> None:
    app_builder.write({"src/Card.jsx": "export default function Card() { return <div />; }\n"})
    output = tmp_path / "manifest.json"

    main(["build", str(app_builder.path()), "--app-dir", "src", "--output", str(output)])

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["__appManifest"]["src/Card"]["componentName"] == "Card"


def test_build_exits_on_parse_error(app_builder: AppBuilder) -> None:
    app_builder.write({"app/routes/bad.tsx": "export default function Bad( {\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(app_builder.path())])

    assert excinfo.value.code == 1


def test_build_exits_on_missing_root(app_builder: AppBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    app_builder.write({"app/routes/foo.tsx": "export default function Foo() { return <div />; }\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(app_builder.path() / "does-not-exist")])

    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "routes/foo" not in captured.out
    assert "Application root not found" in captured.err


def test_build_exits_when_output_cannot_be_written(app_builder: AppBuilder, tmp_path: Path) -> None:
    app_builder.write({"app/routes/foo.tsx": "export default function Foo() { return <div />; }\n"})
    output = tmp_path / "missing-dir" / "manifest.json"

    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(app_builder.path()), "--output", str(output)])

    assert excinfo.value.code == 1


def test_load_routes_downgrades_failures_to_warning(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def _failing_load(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        raise RouteConfigError("npx not found")

    monkeypatch.setattr(RouteConfigLoader, "load", _failing_load)
    monkeypatch.setattr(logging.getLogger("componentmap"), "propagate", True)

    with caplog.at_level(logging.WARNING, logger="componentmap"):
        routes = _load_routes(ComponentMapConfig(root=tmp_path))

    assert routes == {}
    assert "Route table unavailable" in caplog.text
