"""Validation result models shared by the blueprint validator and the CLI."""

from enum import Enum

from pydantic import BaseModel, Field


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationIssue(BaseModel):
    """A single problem found in a blueprint."""

    severity: Severity
    category: str = Field(description="Machine-readable check id, e.g. NO_ROOTS")
    location: str = Field(description="Blueprint or field the issue refers to")
    message: str
    source_index: int | None = None
    suggestion: str | None = None

    def __str__(self) -> str:
        where = self.location
        if self.source_index is not None:
            where = f"{where}[{self.source_index}]"
        return f"[{self.category}] {where}: {self.message}"


class ValidationResult(BaseModel):
    """All issues found for one blueprint."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def info(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.INFO]

    @property
    def valid(self) -> bool:
        return not self.errors
