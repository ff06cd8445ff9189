"""npcforge: generate NPCs and other records field by field from blueprints.

Fields draw their options from choice sources, and a source can be gated on
a value already chosen for another field. The engine works out which field
can be chosen next and which options are currently valid.

Example:
    from npcforge import load_blueprints, ResolutionBuilder

    blueprints = load_blueprints("blueprints.yaml")
    builder = ResolutionBuilder(blueprints["commoner"])
    while (info := builder.current_field_info()) is not None:
        record = builder.submit(info.options[: info.required_count])
"""

__version__ = "0.3.0"

from .core.models import (
    Blueprint,
    ChoiceSource,
    FieldDefinition,
    FieldValueFilter,
    NoFilter,
)
from .errors import (
    NpcforgeError,
    BlueprintError,
    NoRootFieldsError,
    UnknownDependencyError,
    CircularDependencyError,
    BlueprintLoadError,
    SubmitError,
    WrongCountError,
    InvalidValueError,
    AlreadyCompleteError,
    SessionError,
    UnknownBlueprintError,
    UnknownSessionError,
)
from .generation import DependencyGraph, FieldInfo, ResolutionBuilder, SessionRegistry
from .blueprints import load_blueprints, validate_blueprint

__all__ = [
    "__version__",
    # Models
    "Blueprint",
    "ChoiceSource",
    "FieldDefinition",
    "FieldValueFilter",
    "NoFilter",
    # Engine
    "DependencyGraph",
    "FieldInfo",
    "ResolutionBuilder",
    "SessionRegistry",
    # Blueprints
    "load_blueprints",
    "validate_blueprint",
    # Errors
    "NpcforgeError",
    "BlueprintError",
    "NoRootFieldsError",
    "UnknownDependencyError",
    "CircularDependencyError",
    "BlueprintLoadError",
    "SubmitError",
    "WrongCountError",
    "InvalidValueError",
    "AlreadyCompleteError",
    "SessionError",
    "UnknownBlueprintError",
    "UnknownSessionError",
]
