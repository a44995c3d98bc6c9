"""Tests for enum sources: static mappings, record collections and YAML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest

from enumfield.errors import DefinitionError
from enumfield.models.value import EnumValue
from enumfield.sources import (
    RecordSource,
    StaticSource,
    as_source,
    build_members,
    build_registry,
    load_declarations,
)

STATUSES = {
    1: "new",
    2: {"name": "in_progress", "title": "Continuing"},
    3: {"name": "completed", "position": 300},
    4: {"name": "cancelled", "title": "Ended", "position": 5},
}


@dataclass
class Row:
    id: int
    name: str
    title: str | None = None
    position: int | None = None
    default: bool = False


class TestAsSource:
    def test_mapping_is_static(self):
        source = as_source(STATUSES)
        assert isinstance(source, StaticSource)
        assert list(source.entries) == [1, 2, 3, 4]

    def test_sequence_is_records(self):
        rows = [Row(1, "new")]
        source = as_source(rows)
        assert isinstance(source, RecordSource)
        assert source.records == (rows[0],)

    def test_generator_is_records(self):
        source = as_source(Row(i, f"v{i}") for i in range(3))
        assert isinstance(source, RecordSource)
        assert len(source.records) == 3

    def test_explicit_sources_pass_through(self):
        static = StaticSource({1: "a"})
        assert as_source(static) is static

    @pytest.mark.parametrize("declared", [42, "new", None, 3.5])
    def test_unsupported(self, declared):
        with pytest.raises(DefinitionError):
            as_source(declared)


class TestStaticMembers:
    def test_builds_enum_values(self):
        members = build_members(as_source(STATUSES))
        assert all(isinstance(m, EnumValue) for m in members)
        assert [m.name for m in members] == ["new", "in_progress", "completed", "cancelled"]
        assert members[0].title == "New"
        assert members[0].position == 1
        assert members[2].position == 300
        assert members[3].title == "Ended"

    def test_value_must_be_name_or_bag(self):
        with pytest.raises(DefinitionError, match="name or an attribute bag"):
            build_members(as_source({1: 100}))

    def test_bag_needs_a_name(self):
        with pytest.raises(DefinitionError):
            build_members(as_source({1: {"title": "Nameless"}}))

    def test_ids_must_be_integers(self):
        with pytest.raises(DefinitionError):
            build_members(as_source({"1": "new"}))
        with pytest.raises(DefinitionError):
            build_members(as_source({True: "new"}))

    def test_unknown_attribute_is_rejected(self):
        with pytest.raises(DefinitionError):
            build_members(as_source({1: {"name": "new", "colour": "red"}}))

    def test_wrong_attribute_type_is_rejected(self):
        with pytest.raises(DefinitionError):
            build_members(as_source({1: {"name": "new", "position": "first"}}))

    def test_registry_from_mapping(self):
        registry = build_registry(STATUSES, field="status")
        assert registry.field == "status"
        assert registry.names() == ["new", "in_progress", "cancelled", "completed"]


class TestRecordMembers:
    def test_records_are_used_as_is(self):
        rows = [Row(1, "new"), Row(2, "done", "Finished", 0, True)]
        registry = build_registry(rows)
        assert registry.lookup("done") is rows[1]
        assert registry.values() == (rows[1], rows[0])
        assert registry.default() is rows[1]

    def test_missing_position_sorts_by_id(self):
        rows = [Row(3, "c"), Row(1, "a"), Row(2, "b", position=10)]
        assert build_registry(rows).names() == ["a", "c", "b"]

    def test_records_need_every_accessor(self):
        @dataclass
        class Partial:
            id: int
            name: str

        with pytest.raises(DefinitionError, match="title, position, default"):
            build_members(RecordSource((Partial(1, "new"),)))


class TestLoadDeclarations:
    def test_loads_fields(self, tmp_path: Path):
        path = tmp_path / "enums.yaml"
        path.write_text(
            "status:\n"
            "  1: new\n"
            "  2: {name: in_progress, title: Continuing}\n"
            "  3: {name: completed, position: 300, default: true}\n"
            "priority:\n"
            "  1: low\n"
            "  2: high\n",
            encoding="utf-8",
        )
        declarations = load_declarations(path)
        assert list(declarations) == ["status", "priority"]
        registry = build_registry(declarations["status"], field="status")
        assert registry.lookup(2).title == "Continuing"
        assert registry.default().name == "completed"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(DefinitionError, match="not found"):
            load_declarations(tmp_path / "nope.yaml")

    def test_top_level_must_be_mapping(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- new\n- old\n", encoding="utf-8")
        with pytest.raises(DefinitionError):
            load_declarations(path)

    def test_field_must_be_mapping(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("status: [new, old]\n", encoding="utf-8")
        with pytest.raises(DefinitionError, match="status"):
            load_declarations(path)

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("status: {1: new\n", encoding="utf-8")
        with pytest.raises(DefinitionError, match="invalid YAML"):
            load_declarations(path)
