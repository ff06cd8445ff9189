"""Data models for npcforge.

This package contains all Pydantic models used across the system:
- blueprint.py: Blueprints, field definitions, choice sources and filters
- validation.py: Validation issues and results
"""

from .blueprint import (
    # Filters
    NoFilter,
    FieldValueFilter,
    ChoiceFilter,
    # Sources and fields
    ChoiceSource,
    FieldDefinition,
    # Blueprint
    Blueprint,
    ResolutionState,
)
from .validation import Severity, ValidationIssue, ValidationResult

__all__ = [
    # Filters
    "NoFilter",
    "FieldValueFilter",
    "ChoiceFilter",
    # Sources and fields
    "ChoiceSource",
    "FieldDefinition",
    # Blueprint
    "Blueprint",
    "ResolutionState",
    # Validation
    "Severity",
    "ValidationIssue",
    "ValidationResult",
]
