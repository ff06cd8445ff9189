"""Tests for the session registry."""

import pytest

from npcforge.core.models import Blueprint, ChoiceSource, FieldDefinition, FieldValueFilter
from npcforge.errors import (
    InvalidValueError,
    NoRootFieldsError,
    UnknownBlueprintError,
    UnknownSessionError,
)
from npcforge.generation import SessionRegistry


@pytest.fixture
def registry(race_weapon_blueprint, villager_blueprint):
    return SessionRegistry(
        {"fighter": race_weapon_blueprint, "villager": villager_blueprint}
    )


class TestSessionRegistry:
    def test_start_returns_distinct_ids(self, registry):
        first = registry.start("fighter")
        second = registry.start("fighter")
        assert first != second
        assert len(registry) == 2
        assert first in registry and second in registry

    def test_sessions_do_not_share_state(self, registry):
        first = registry.start("fighter")
        second = registry.start("fighter")

        registry.submit(first, ["Orc"])

        assert registry.get(first).state == {"Race": ["Orc"]}
        assert registry.get(second).state == {}
        assert registry.current_field_info(second).field == "Race"

    def test_sessions_share_graph(self, registry):
        first = registry.start("fighter")
        second = registry.start("fighter")
        assert registry.get(first).graph is registry.get(second).graph

    def test_unknown_blueprint(self, registry):
        with pytest.raises(UnknownBlueprintError) as exc_info:
            registry.start("dragon")
        assert exc_info.value.available == ["fighter", "villager"]

    def test_unknown_session(self, registry):
        with pytest.raises(UnknownSessionError):
            registry.get("nope")
        with pytest.raises(UnknownSessionError):
            registry.discard("nope")

    def test_completed_session_is_closed(self, registry):
        session_id = registry.start("fighter")
        assert registry.submit(session_id, ["Elf"]) is None
        record = registry.submit(session_id, ["Bow"])

        assert record == {"Race": ["Elf"], "Weapon": ["Bow"]}
        assert session_id not in registry
        assert registry.active_sessions() == []

    def test_failed_submit_keeps_session(self, registry):
        session_id = registry.start("fighter")
        with pytest.raises(InvalidValueError):
            registry.submit(session_id, ["Gnome"])
        assert session_id in registry
        assert registry.get(session_id).state == {}

    def test_discard_abandons_session(self, registry):
        session_id = registry.start("villager")
        registry.submit(session_id, ["Human"])
        registry.discard(session_id)
        assert session_id not in registry

    def test_bad_blueprint_fails_at_construction(self):
        looped = Blueprint(
            name="looped",
            fields={
                "a": FieldDefinition(
                    sources=[
                        ChoiceSource(
                            options=["x"],
                            filter=FieldValueFilter(target_field="a", target_value="x"),
                        )
                    ]
                )
            },
        )
        with pytest.raises(NoRootFieldsError):
            SessionRegistry({"looped": looped})
