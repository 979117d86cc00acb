"""Declaration context (type registry) tests."""

from __future__ import annotations

import pytest
from api_bindgen.codegen.core.context import DeclarationContext, PendingKind
from api_bindgen.codegen.core.schema import parse_block, parse_property
from api_bindgen.codegen.core.sinks import (
    DeclarationUnit,
    SinkError,
    unit_sink_factory,
)
from api_bindgen.codegen.languages.go import GoGenerator


def _context(block_data: dict, reserved=()) -> tuple[DeclarationContext, DeclarationUnit]:
    generator = GoGenerator()
    unit = DeclarationUnit("test.json")
    block = parse_block(block_data, "test")
    ctx = DeclarationContext(
        block, generator, unit_sink_factory(unit), generator.normalizer, reserved
    )
    return ctx, unit


def _object(name: str, *members: str) -> dict:
    return {
        "name": name,
        "type": "Object",
        "properties": [{"name": member, "type": "String"} for member in members],
    }


def test_block_symbol_and_stem() -> None:
    ctx, _ = _context({"name": "app", "type": "Module"})

    assert ctx.block_symbol == "AppModule"
    assert ctx.block_stem == "App"
    assert ctx.is_taken("AppModule")


def test_nested_type_is_scoped_by_block_stem() -> None:
    ctx, _ = _context({"name": "app", "type": "Module"})
    prop = parse_property(_object("commandLine", "switch"), "p")

    assert ctx.new_type(prop, ctx.block) == "AppCommandLine"


def test_types_below_a_registered_property_use_its_name_as_scope() -> None:
    ctx, _ = _context({"name": "app", "type": "Module"})
    outer = parse_property(
        {"name": "options", "type": "Object", "properties": [_object("bounds", "x")]},
        "p",
    )

    outer_name = ctx.new_type(outer, ctx.block)
    inner_name = ctx.new_type(outer.properties[0], outer)

    assert outer_name == "AppOptions"
    assert inner_name == "AppOptionsBounds"


def test_types_below_a_method_use_block_stem_and_method_name() -> None:
    ctx, _ = _context(
        {
            "name": "BrowserWindow",
            "type": "Class",
            "instanceMethods": [{"name": "setBounds", "parameters": [_object("bounds", "x")]}],
        }
    )
    method = ctx.block.instance_methods[0]

    assert ctx.new_type(method.parameters[0], method) == "BrowserWindowSetBoundsBounds"


def test_same_name_and_shape_reuses_one_declaration() -> None:
    ctx, _ = _context({"name": "app", "type": "Module"})
    first = parse_property(_object("options", "title"), "a")
    second = parse_property(_object("options", "title"), "b")

    assert ctx.new_type(first, ctx.block) == "AppOptions"
    assert ctx.new_type(second, ctx.block) == "AppOptions"
    assert len(ctx.pending) == 1


def test_same_name_different_shape_gets_an_ordinal() -> None:
    ctx, _ = _context({"name": "app", "type": "Module"})
    first = parse_property(_object("options", "title"), "a")
    second = parse_property(_object("options", "width"), "b")
    third = parse_property(_object("options", "height"), "c")

    names = [ctx.new_type(prop, ctx.block) for prop in (first, second, third)]

    assert names == ["AppOptions", "AppOptions2", "AppOptions3"]
    assert len(set(names)) == 3


def test_reserved_names_are_never_reused() -> None:
    ctx, _ = _context({"name": "app", "type": "Module"}, reserved={"AppRectangle"})
    prop = parse_property(_object("rectangle", "x"), "p")

    assert ctx.new_type(prop, ctx.block) == "AppRectangle2"


def test_reserve_returns_the_claimed_name() -> None:
    ctx, _ = _context({"name": "app", "type": "Module"})

    assert ctx.reserve("EvtAppReady") == "EvtAppReady"
    assert ctx.reserve("EvtAppReady") == "EvtAppReady2"
    assert {"EvtAppReady", "EvtAppReady2"} <= ctx.names


def test_consts_and_types_are_distinct_registrations() -> None:
    ctx, _ = _context({"name": "app", "type": "Module"})
    enum_prop = parse_property(
        {"name": "mode", "type": "String", "possibleValues": [{"value": "a"}]}, "p"
    )

    name = ctx.new_const(enum_prop, ctx.block)

    assert name == "AppMode"
    assert ctx.pending[0].kind is PendingKind.CONST


def test_pending_declarations_drain_in_discovery_order() -> None:
    ctx, unit = _context({"name": "app", "type": "Module"})
    first = parse_property(_object("first", "a"), "a")
    second = parse_property(_object("second", "b"), "b")
    ctx.new_type(first, ctx.block)
    ctx.new_type(second, ctx.block)

    count = ctx.decl_new_types()
    ctx.close()

    assert count == 2
    assert [pending.name for pending in ctx.declared] == ["AppFirst", "AppSecond"]
    body = unit.body
    assert body.index("type AppFirst struct") < body.index("type AppSecond struct")
    assert ctx.pending == []


def test_declarations_queued_while_draining_are_emitted_too() -> None:
    ctx, unit = _context({"name": "app", "type": "Module"})
    outer = parse_property(
        {"name": "options", "type": "Object", "properties": [_object("bounds", "x")]},
        "p",
    )
    ctx.new_type(outer, ctx.block)

    assert ctx.decl_new_types() == 2
    ctx.close()
    assert "type AppOptionsBounds struct" in unit.body


def test_write_section_separates_sections_with_a_blank_line() -> None:
    ctx, unit = _context({"name": "app", "type": "Module"})

    ctx.write_section("const A = 1\n")
    ctx.write_section("")
    ctx.write_section("const B = 2")
    ctx.close()

    assert unit.sections[0].text == "const A = 1\n\nconst B = 2"


def test_abandon_commits_nothing() -> None:
    ctx, unit = _context({"name": "app", "type": "Module"})
    ctx.write_section("type Partial struct {")

    ctx.abandon()

    assert unit.sections == []
    assert ctx.sink.closed


def test_sink_open_failure_propagates() -> None:
    generator = GoGenerator()
    block = parse_block({"name": "app", "type": "Module"}, "app")

    def open_sink(block):
        raise SinkError("cannot open")

    with pytest.raises(SinkError, match="cannot open"):
        DeclarationContext(block, generator, open_sink, generator.normalizer)
