"""Scaffold fallback tests."""

from __future__ import annotations

from afritest.failsafe import build_integration_scaffold, build_unit_scaffold
from afritest.models import FunctionSignature, ParsedModule, Route


def test_unit_scaffold_has_block_per_function() -> None:
    module = ParsedModule(
        functions=[
            FunctionSignature(name="add", parameters=["a", "b"]),
            FunctionSignature(name="reset", parameters=[]),
        ]
    )

    scaffold = build_unit_scaffold("math", module)

    assert "describe('add', () => {" in scaffold
    assert "const result = math.add(a, b);" in scaffold
    assert "const result = math.reset();" in scaffold
    assert "expect(result).toEqual(undefined);" in scaffold
    assert not scaffold.startswith("// Scaffold generated")


def test_unit_scaffold_without_functions_is_marked_skipped() -> None:
    scaffold = build_unit_scaffold("types", ParsedModule())

    assert scaffold == "// Skipped: no top-level functions found in types\n"


def test_integration_scaffold_per_route() -> None:
    scaffold = build_integration_scaffold(
        "./routes/users",
        [Route(method="get", path="/users"), Route(method="post", path="/users")],
    )

    assert "describe('Integration Test for /users'" in scaffold
    assert "await request(app).get('/users');" in scaffold
    assert "await request(app).post('/users');" in scaffold
    assert "should respond to POST /users" in scaffold


def test_integration_scaffold_without_routes() -> None:
    scaffold = build_integration_scaffold("express", [])

    assert scaffold == "// Skipped: no routes detected for express\n"


def test_reason_is_collapsed_and_truncated() -> None:
    reason = "line one\n   line two " + "x" * 300

    scaffold = build_unit_scaffold("m", ParsedModule(), reason=reason)
    header = scaffold.splitlines()[0]

    assert header.startswith("// Scaffold generated because generation failed: line one line two")
    assert header.endswith("...")
    assert len(header) < 300
