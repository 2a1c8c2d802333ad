"""Tests for JSX identifier resolution."""

from __future__ import annotations

import textwrap

from componentmap.analyzers.resolver import find_import, resolve_components
from componentmap.analyzers.source_parser import ParsedSource, SourceParser
from componentmap.models import ExternalComponentRef, ImportRecord


def _resolve(source: str) -> list[ExternalComponentRef]:
    parsed = SourceParser().extract(textwrap.dedent(source), "test.tsx")
    return resolve_components(parsed)


def test_local_component_resolves_with_empty_children() -> None:
    refs = _resolve(
        """
        import { Button } from "./Button";

        export default function Page() {
          return <Button/>;
        }
        """
    )

    assert refs == [ExternalComponentRef("Button", "./Button", ())]


def test_packaged_component_has_no_children() -> None:
    refs = _resolve(
        """
        import { Link } from "@remix-run/react";

        export default function Nav() {
          return <Link to="/">Home</Link>;
        }
        """
    )

    assert refs == [ExternalComponentRef("Link", "@remix-run/react", None)]
    assert refs[0].to_dict() == {
        "componentName": "Link",
        "componentPath": "@remix-run/react",
        "children": None,
    }


def test_unimported_capitalized_tags_are_skipped() -> None:
    refs = _resolve(
        """
        import { Card } from "~/components/Card";

        const Local = () => <span />;

        export default function Page() {
          return (
            <Card>
              <Local />
            </Card>
          );
        }
        """
    )

    assert refs == [ExternalComponentRef("Card", "~/components/Card", ())]


def test_repeated_usages_are_deduplicated_in_first_use_order() -> None:
    refs = _resolve(
        """
        import { Outlet, Link } from "@remix-run/react";
        import Header from "./Header";

        export default function Root() {
          return (
            <>
              <Header />
              <Link to="/a">A</Link>
              <Link to="/b">B</Link>
              <Outlet />
            </>
          );
        }
        """
    )

    assert [ref.component_name for ref in refs] == ["Header", "Link", "Outlet"]


def test_find_import_returns_first_binding() -> None:
    imports = [
        ImportRecord("./a", ("Foo",), False),
        ImportRecord("b", ("Foo", "Bar"), True),
    ]

    assert find_import("Foo", imports) is imports[0]
    assert find_import("Bar", imports) is imports[1]
    assert find_import("Baz", imports) is None


def test_resolution_without_parsing() -> None:
    parsed = ParsedSource(
        path="x.tsx",
        imports=[ImportRecord("./Card", ("Card",), False)],
        jsx_identifiers=["Card", "Missing", "Card"],
    )

    assert resolve_components(parsed) == [ExternalComponentRef("Card", "./Card", ())]


def test_capitalized_attribute_name_resolves_when_imported() -> None:
    refs = _resolve(
        """
        import { Slot } from "@radix-ui/react-slot";

        export default function Trigger() {
          return <button Slot={true} />;
        }
        """
    )

    assert refs == [ExternalComponentRef("Slot", "@radix-ui/react-slot", None)]
