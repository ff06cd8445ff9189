"""Tests for the ResolutionBuilder commit protocol."""

import pytest

from npcforge.core.models import Blueprint, ChoiceSource, FieldDefinition
from npcforge.errors import (
    AlreadyCompleteError,
    InvalidValueError,
    NoRootFieldsError,
    SubmitError,
    WrongCountError,
)
from npcforge.generation import DependencyGraph, FieldInfo, ResolutionBuilder


def _single_field(required_count: int, *values: str) -> Blueprint:
    return Blueprint(
        name="single",
        fields={
            "field": FieldDefinition(
                required_count=required_count,
                sources=[ChoiceSource(options=list(values))],
            )
        },
    )


class TestCurrentFieldInfo:
    def test_starts_with_root_field(self, race_weapon_blueprint):
        builder = ResolutionBuilder(race_weapon_blueprint)
        info = builder.current_field_info()
        assert info == FieldInfo("Race", ["Elf", "Orc"], 1)

    def test_filter_inactive_when_value_does_not_match(self, filter_blueprint):
        builder = ResolutionBuilder(filter_blueprint)
        builder.submit(["b2"])
        info = builder.current_field_info()
        assert info.field == "A"
        assert set(info.options) == {"x", "y"}

    def test_filter_active_when_value_matches(self, filter_blueprint):
        builder = ResolutionBuilder(filter_blueprint)
        builder.submit(["b1"])
        info = builder.current_field_info()
        assert info.field == "A"
        assert set(info.options) == {"x", "y", "z"}

    def test_ties_resolved_in_declaration_order(self, villager_blueprint):
        builder = ResolutionBuilder(villager_blueprint)
        seen = []
        selections = {
            "race": ["Dwarf"],
            "class": ["Wizard"],
            "traits": ["brave", "calm"],
            "gear": ["Pick"],
        }
        while (info := builder.current_field_info()) is not None:
            seen.append(info.field)
            builder.submit(selections[info.field])
        assert seen == ["race", "class", "traits", "gear"]

    def test_options_union_across_active_sources(self, villager_blueprint):
        builder = ResolutionBuilder(villager_blueprint)
        builder.submit(["Dwarf"])
        builder.submit(["Wizard"])
        builder.submit(["shy", "loud"])
        info = builder.current_field_info()
        assert info.field == "gear"
        assert info.options == ["Backpack", "Pick", "Staff"]

    def test_duplicate_options_reported_once(self):
        blueprint = Blueprint(
            name="dupes",
            fields={
                "colour": FieldDefinition(
                    sources=[
                        ChoiceSource(options=["red", "blue", "red"]),
                        ChoiceSource(options=["blue", "green"]),
                    ]
                )
            },
        )
        info = ResolutionBuilder(blueprint).current_field_info()
        assert info.options == ["red", "blue", "green"]

    def test_none_when_complete(self, race_weapon_blueprint):
        builder = ResolutionBuilder(race_weapon_blueprint)
        builder.submit(["Elf"])
        builder.submit(["Bow"])
        assert builder.current_field_info() is None
        assert builder.is_complete()


class TestSubmit:
    def test_end_to_end_race_weapon(self, race_weapon_blueprint):
        builder = ResolutionBuilder(race_weapon_blueprint)

        assert builder.submit(["Orc"]) is None
        assert not builder.is_complete()

        info = builder.current_field_info()
        assert info.field == "Weapon"
        assert set(info.options) == {"Axe"}

        record = builder.submit(["Axe"])
        assert record == {"Race": ["Orc"], "Weapon": ["Axe"]}

    @pytest.mark.parametrize("values", [["a"], ["a", "b", "c"]])
    def test_wrong_count(self, values):
        builder = ResolutionBuilder(_single_field(2, "a", "b", "c"))

        with pytest.raises(WrongCountError) as exc_info:
            builder.submit(values)

        assert exc_info.value.got == len(values)
        assert exc_info.value.expected == 2
        assert builder.state == {}

    def test_invalid_value_reports_allowed_options(self):
        builder = ResolutionBuilder(_single_field(1, "x", "y"))

        with pytest.raises(InvalidValueError) as exc_info:
            builder.submit(["q"])

        assert exc_info.value.value == "q"
        assert set(exc_info.value.allowed) == {"x", "y"}
        assert builder.state == {}

    def test_invalid_value_reports_first_offender(self):
        builder = ResolutionBuilder(_single_field(3, "x", "y", "z"))

        with pytest.raises(InvalidValueError) as exc_info:
            builder.submit(["x", "bad", "worse"])

        assert exc_info.value.value == "bad"

    def test_filtered_out_value_rejected(self, filter_blueprint):
        builder = ResolutionBuilder(filter_blueprint)
        builder.submit(["b2"])

        with pytest.raises(InvalidValueError) as exc_info:
            builder.submit(["z"])

        assert exc_info.value.value == "z"
        assert builder.state == {"B": ["b2"]}

    def test_count_checked_before_values(self):
        builder = ResolutionBuilder(_single_field(1, "x"))
        with pytest.raises(WrongCountError):
            builder.submit(["q", "r"])

    def test_already_complete(self, race_weapon_blueprint):
        builder = ResolutionBuilder(race_weapon_blueprint)
        builder.submit(["Elf"])
        record = builder.submit(["Bow"])

        with pytest.raises(AlreadyCompleteError):
            builder.submit(["Bow"])

        assert builder.state == record

    def test_errors_share_base_class(self):
        builder = ResolutionBuilder(_single_field(1, "x"))
        with pytest.raises(SubmitError):
            builder.submit([])

    def test_zero_count_accepts_empty_submission(self):
        builder = ResolutionBuilder(_single_field(0, "x"))
        assert builder.submit([]) == {"field": []}

    def test_submission_is_copied(self):
        builder = ResolutionBuilder(_single_field(1, "x", "y"))
        values = ["x"]
        record = builder.submit(values)
        values.append("y")
        record["field"].append("y")
        assert builder.state == {"field": ["x"]}

    def test_validation_is_deterministic(self, filter_blueprint):
        outcomes = []
        for _ in range(3):
            builder = ResolutionBuilder(filter_blueprint)
            builder.submit(["b2"])
            try:
                builder.submit(["z"])
            except InvalidValueError as e:
                outcomes.append((e.value, tuple(e.allowed)))
        assert len(outcomes) == 3
        assert len(set(outcomes)) == 1

    def test_progress_is_monotonic(self, villager_blueprint):
        builder = ResolutionBuilder(villager_blueprint)
        sizes = [len(builder.state)]
        for values in (["Human"], ["oops"], ["Fighter"], ["brave"], ["brave", "shy"]):
            try:
                builder.submit(values)
            except SubmitError:
                pass
            sizes.append(len(builder.state))
        assert sizes == [0, 1, 1, 2, 2, 3]

    def test_finished_record_has_exactly_blueprint_fields(self, villager_blueprint):
        builder = ResolutionBuilder(villager_blueprint)
        record = None
        while (info := builder.current_field_info()) is not None:
            record = builder.submit(info.options[: info.required_count])
        assert set(record) == set(villager_blueprint.fields)
        assert builder.remaining_fields == []
        assert builder.resolved_fields == list(record)


class TestConstruction:
    def test_builds_graph_when_not_given(self, race_weapon_blueprint):
        builder = ResolutionBuilder(race_weapon_blueprint)
        assert builder.graph.roots == ("Race",)

    def test_accepts_shared_graph(self, race_weapon_blueprint):
        graph = DependencyGraph.from_blueprints(race_weapon_blueprint.fields)
        first = ResolutionBuilder(race_weapon_blueprint, graph)
        second = ResolutionBuilder(race_weapon_blueprint, graph)

        first.submit(["Orc"])

        assert first.graph is second.graph
        assert second.state == {}
        assert second.current_field_info().field == "Race"

    def test_rejects_blueprint_without_roots(self):
        blueprint = Blueprint(
            name="loop",
            fields={
                "a": FieldDefinition(
                    sources=[
                        ChoiceSource(
                            options=["x"],
                            filter={"type": "field_value", "target_field": "b", "target_value": "y"},
                        )
                    ]
                ),
                "b": FieldDefinition(
                    sources=[
                        ChoiceSource(
                            options=["y"],
                            filter={"type": "field_value", "target_field": "a", "target_value": "x"},
                        )
                    ]
                ),
            },
        )
        with pytest.raises(NoRootFieldsError):
            ResolutionBuilder(blueprint)
