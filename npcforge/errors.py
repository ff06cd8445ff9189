"""Exception hierarchy for npcforge.

Blueprint errors are raised while loading a blueprint or building its
dependency graph. Submit errors are raised by ResolutionBuilder.submit and
never leave the builder in a modified state, so callers can simply re-prompt.
Session errors come from the SessionRegistry.
"""


class NpcforgeError(Exception):
    """Base class for all npcforge errors."""


# =============================================================================
# Blueprint errors
# =============================================================================


class BlueprintError(NpcforgeError):
    """A blueprint cannot be used as authored."""


class NoRootFieldsError(BlueprintError):
    """Every field depends on another field, so nothing can be resolved first."""

    def __init__(self, fields: list[str] | None = None):
        self.fields = list(fields or [])
        super().__init__(
            "There are no fields that don't depend on other fields; "
            "at least one field must have only unconditional choice sources"
        )


class UnknownDependencyError(BlueprintError):
    """A filter targets a field that is not part of the blueprint."""

    def __init__(self, field: str, target: str):
        self.field = field
        self.target = target
        super().__init__(
            f"Field '{field}' filters on unknown field '{target}'"
        )


class CircularDependencyError(BlueprintError):
    """Fields filter on each other, so none of them can ever be resolved."""

    def __init__(self, cycle: list[str]):
        self.cycle = list(cycle)
        super().__init__(f"Circular dependency: {' -> '.join(self.cycle)}")


class BlueprintLoadError(BlueprintError):
    """A blueprint file could not be parsed into blueprint models."""


# =============================================================================
# Submit errors
# =============================================================================


class SubmitError(NpcforgeError):
    """A selection was rejected; the builder state is unchanged."""


class WrongCountError(SubmitError):
    def __init__(self, got: int, expected: int):
        self.got = got
        self.expected = expected
        super().__init__(f"got {got} values, expected {expected}")


class InvalidValueError(SubmitError):
    def __init__(self, value: str, allowed: list[str]):
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f"{value!r} is not a valid value. Valid values are: "
            f"{', '.join(self.allowed) if self.allowed else '(none)'}"
        )


class AlreadyCompleteError(SubmitError):
    def __init__(self):
        super().__init__("The record is already complete")


# =============================================================================
# Session errors
# =============================================================================


class SessionError(NpcforgeError):
    """Base class for session registry errors."""


class UnknownBlueprintError(SessionError):
    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = list(available)
        super().__init__(
            f"Unknown blueprint '{name}'. Available: {', '.join(self.available) or '(none)'}"
        )


class UnknownSessionError(SessionError):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Unknown session '{session_id}'")
