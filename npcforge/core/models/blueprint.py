"""Blueprint models for npcforge.

A Blueprint is the declarative description of a record to generate: an
ordered mapping of field name -> FieldDefinition. Each field draws its
choices from one or more ChoiceSources, and a source may be gated on a value
already chosen for another field.

This module contains:
- Filters: NoFilter, FieldValueFilter (the ChoiceFilter union)
- Sources: ChoiceSource
- Fields: FieldDefinition
- Blueprint
"""

from pathlib import Path
from typing import Literal, Mapping

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# A record under construction: field name -> committed values
ResolutionState = Mapping[str, list[str]]


# =============================================================================
# Filters
# =============================================================================


class NoFilter(BaseModel):
    """The source is always active."""

    model_config = ConfigDict(frozen=True)

    type: Literal["none"] = "none"

    def matches(self, state: ResolutionState) -> bool:
        return True

    def __str__(self) -> str:
        return "always"


class FieldValueFilter(BaseModel):
    """The source is active once target_field has been resolved to a value
    list that contains target_value."""

    model_config = ConfigDict(frozen=True)

    type: Literal["field_value"] = "field_value"
    target_field: str
    target_value: str

    @classmethod
    def parse(cls, text: str) -> "FieldValueFilter":
        """Parse the ``field: value`` shorthand used in blueprint files.

        Raises:
            ValueError: If the text does not contain exactly one colon
        """
        parts = [part.strip() for part in text.split(":")]
        if len(parts) != 2:
            raise ValueError(
                f"A filter must contain exactly one colon ('field: value'), got {text!r}"
            )
        target_field, target_value = parts
        if not target_field or not target_value:
            raise ValueError(
                f"A filter needs both a field and a value ('field: value'), got {text!r}"
            )
        return cls(target_field=target_field, target_value=target_value)

    def matches(self, state: ResolutionState) -> bool:
        # An unresolved target simply leaves the source inactive
        committed = state.get(self.target_field)
        return committed is not None and self.target_value in committed

    def __str__(self) -> str:
        return f"{self.target_field}: {self.target_value}"


ChoiceFilter = NoFilter | FieldValueFilter


# =============================================================================
# Choice sources and fields
# =============================================================================


class ChoiceSource(BaseModel):
    """One pool of candidate options, optionally gated by a filter."""

    model_config = ConfigDict(frozen=True)

    options: list[str]
    filter: ChoiceFilter = Field(default_factory=NoFilter, discriminator="type")

    def is_active(self, state: ResolutionState) -> bool:
        return self.filter.matches(state)

    @property
    def target_field(self) -> str | None:
        if isinstance(self.filter, FieldValueFilter):
            return self.filter.target_field
        return None


class FieldDefinition(BaseModel):
    """How one output field is produced."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    required_count: int = Field(
        default=1,
        ge=0,
        validation_alias=AliasChoices("required_count", "n"),
        description="Number of values that must be selected for this field",
    )
    sources: list[ChoiceSource] = Field(min_length=1)

    def dependency_targets(self) -> list[str]:
        """Distinct fields this field filters on, in source order."""
        targets: list[str] = []
        for source in self.sources:
            target = source.target_field
            if target is not None and target not in targets:
                targets.append(target)
        return targets

    @property
    def is_root(self) -> bool:
        return not self.dependency_targets()

    def active_options(self, state: ResolutionState) -> list[str]:
        """Union of options of every active source, first-seen order."""
        return _unique(
            option
            for source in self.sources
            if source.is_active(state)
            for option in source.options
        )

    def all_options(self) -> list[str]:
        """Union of options across all sources, ignoring filters."""
        return _unique(option for source in self.sources for option in source.options)


def _unique(options) -> list[str]:
    return list(dict.fromkeys(options))


# =============================================================================
# Blueprint
# =============================================================================


class Blueprint(BaseModel):
    """A named set of field definitions.

    Field order is the declaration order from the blueprint file and is used
    as the tie-break whenever several fields could be resolved next.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str | None = None
    fields: dict[str, FieldDefinition]

    @property
    def field_names(self) -> list[str]:
        return list(self.fields)

    def get_field(self, name: str) -> FieldDefinition | None:
        return self.fields.get(name)

    def to_yaml(self, path: Path | str) -> None:
        """Save the blueprint, options inlined, to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(mode="json")

        with open(path, "w") as f:
            yaml.dump(
                data, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Blueprint":
        """Load a blueprint previously written by to_yaml."""
        path = Path(path)

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.model_validate(data)

    def summary(self) -> str:
        """Get a text summary of the blueprint."""
        lines = [f"Blueprint: {self.name}"]
        if self.description:
            lines.append(self.description)
        lines.append(f"Fields: {len(self.fields)}")
        lines.append("")
        for name, definition in self.fields.items():
            deps = definition.dependency_targets()
            dep_text = f" (depends on {', '.join(deps)})" if deps else ""
            lines.append(
                f"  - {name}: choose {definition.required_count} of "
                f"{len(definition.all_options())}{dep_text}"
            )
        return "\n".join(lines)
