"""Authoring checks for blueprints.

The generation engine trusts its blueprint: a field asking for more values
than it can ever offer simply cannot be completed, and a filter on a value
that never occurs silently never fires. These checks find such mistakes
before a session is started.

ERROR issues make the blueprint unusable (the dependency graph would refuse
it). WARNING issues leave it usable but suspicious. INFO issues are
cosmetic.
"""

from collections import Counter

from ..core.models import (
    Blueprint,
    FieldDefinition,
    FieldValueFilter,
    Severity,
    ValidationIssue,
    ValidationResult,
)
from ..utils import find_cycle


def validate_blueprint(blueprint: Blueprint) -> ValidationResult:
    """
    Validate a Blueprint before generating records from it.

    Args:
        blueprint: The Blueprint to validate

    Returns:
        ValidationResult with errors, warnings, and info

    Example:
        >>> result = validate_blueprint(blueprint)
        >>> if not result.valid:
        ...     for err in result.errors:
        ...         print(f"ERROR: {err}")
    """
    result = ValidationResult()
    result.issues.extend(_check_structure(blueprint))

    for name, definition in blueprint.fields.items():
        result.issues.extend(_check_options(name, definition))
        result.issues.extend(_check_filters(name, definition, blueprint))
        result.issues.extend(_check_count(name, definition, blueprint))

    return result


# =============================================================================
# Structure (ERROR)
# =============================================================================


def _check_structure(blueprint: Blueprint) -> list[ValidationIssue]:
    issues = []
    fields = blueprint.fields

    if not any(definition.is_root for definition in fields.values()):
        issues.append(
            ValidationIssue(
                severity=Severity.ERROR,
                category="NO_ROOTS",
                location=blueprint.name,
                message="every field depends on another field, nothing can be chosen first",
                suggestion="Give at least one field only unfiltered choice sources",
            )
        )

    for name, definition in fields.items():
        for target in definition.dependency_targets():
            if target not in fields:
                issues.append(
                    ValidationIssue(
                        severity=Severity.ERROR,
                        category="UNKNOWN_DEPENDENCY",
                        location=name,
                        message=f"filters on unknown field '{target}'",
                        suggestion=f"Known fields: {', '.join(fields)}",
                    )
                )

    deps = {
        name: [t for t in definition.dependency_targets() if t in fields]
        for name, definition in fields.items()
    }
    cycle = find_cycle(deps)
    if cycle:
        issues.append(
            ValidationIssue(
                severity=Severity.ERROR,
                category="CIRCULAR_DEPENDENCY",
                location=cycle[0],
                message=f"fields filter on each other: {' -> '.join(cycle)}",
                suggestion="Break the cycle by removing one of the filters",
            )
        )

    return issues


# =============================================================================
# Options
# =============================================================================


def _check_options(name: str, definition: FieldDefinition) -> list[ValidationIssue]:
    issues = []

    if not definition.all_options() and definition.required_count > 0:
        issues.append(
            ValidationIssue(
                severity=Severity.ERROR,
                category="EMPTY_OPTIONS",
                location=name,
                message="no choice source provides any option",
            )
        )

    for i, source in enumerate(definition.sources):
        duplicates = sorted(
            option for option, count in Counter(source.options).items() if count > 1
        )
        if duplicates:
            issues.append(
                ValidationIssue(
                    severity=Severity.INFO,
                    category="DUPLICATE_OPTIONS",
                    location=name,
                    source_index=i,
                    message=f"options listed more than once: {', '.join(duplicates)}",
                )
            )

    return issues


# =============================================================================
# Filters (WARNING)
# =============================================================================


def _filter_reachable(choice_filter: FieldValueFilter, blueprint: Blueprint) -> bool:
    target = blueprint.get_field(choice_filter.target_field)
    return target is not None and choice_filter.target_value in target.all_options()


def _check_filters(
    name: str, definition: FieldDefinition, blueprint: Blueprint
) -> list[ValidationIssue]:
    issues = []

    for i, source in enumerate(definition.sources):
        choice_filter = source.filter
        if not isinstance(choice_filter, FieldValueFilter):
            continue
        target = blueprint.get_field(choice_filter.target_field)
        if target is None:
            # Reported as UNKNOWN_DEPENDENCY
            continue
        if not _filter_reachable(choice_filter, blueprint):
            issues.append(
                ValidationIssue(
                    severity=Severity.WARNING,
                    category="UNREACHABLE_FILTER",
                    location=name,
                    source_index=i,
                    message=(
                        f"filter '{choice_filter}' can never match: "
                        f"'{choice_filter.target_value}' is not an option of "
                        f"'{choice_filter.target_field}'"
                    ),
                    suggestion=f"Options of {choice_filter.target_field}: "
                    f"{', '.join(target.all_options())}",
                )
            )

    return issues


# =============================================================================
# Counts (WARNING)
# =============================================================================


def _check_count(
    name: str, definition: FieldDefinition, blueprint: Blueprint
) -> list[ValidationIssue]:
    issues = []
    count = definition.required_count

    if count == 0:
        issues.append(
            ValidationIssue(
                severity=Severity.WARNING,
                category="ZERO_COUNT",
                location=name,
                message="field requires 0 values and is always resolved empty",
            )
        )
        return issues

    unconditional: set[str] = set()
    reachable: set[str] = set()
    has_filtered = False
    for source in definition.sources:
        if isinstance(source.filter, FieldValueFilter):
            has_filtered = True
            if _filter_reachable(source.filter, blueprint):
                reachable.update(source.options)
        else:
            unconditional.update(source.options)
            reachable.update(source.options)

    if count > len(reachable):
        issues.append(
            ValidationIssue(
                severity=Severity.WARNING,
                category="UNSATISFIABLE_COUNT",
                location=name,
                message=(
                    f"requires {count} values but at most {len(reachable)} "
                    "distinct options can ever be offered"
                ),
                suggestion="Lower 'n' or add options",
            )
        )
    elif has_filtered and count > len(unconditional):
        issues.append(
            ValidationIssue(
                severity=Severity.INFO,
                category="POSSIBLY_UNSATISFIABLE",
                location=name,
                message=(
                    f"requires {count} values but only {len(unconditional)} options "
                    "are offered when no filtered source is active"
                ),
            )
        )

    return issues
