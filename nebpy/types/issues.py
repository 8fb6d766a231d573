"""
Pre-flight validation issues.

Some hardware operations (nPod creation, firmware updates) are preceded by a
query that predicts problems. Errors always block the operation; warnings
block it unless the caller chooses to ignore them.
"""

from __future__ import annotations

from typing import Annotated

from nebpy.errors import ValidationIssues
from nebpy.types.base import FieldPath, UcapiModel


class IssueInstance(UcapiModel):
    """A single validation issue."""

    message: Annotated[str | None, FieldPath("$.message", required=True)] = None
    spu_serials: Annotated[list[str] | None, FieldPath("$.spuSerials")] = None

    def describe(self) -> str:
        text = self.message or ""
        if self.spu_serials:
            text = f"{text} ({', '.join(self.spu_serials)})"
        return text


class Issues(UcapiModel):
    """Errors and warnings reported by a validation query."""

    errors: Annotated[list[IssueInstance | None], FieldPath("$.errors", required=True)] = []
    warnings: Annotated[list[IssueInstance | None], FieldPath("$.warnings", required=True)] = []

    def assert_no_issues(self, ignore_warnings: bool = False) -> None:
        """
        Raise if the validation reported blocking issues.

        Args:
            ignore_warnings: Let the operation proceed when only warnings
                were reported

        Raises:
            ValidationIssues: On any error, or on warnings unless ignored
        """
        errors = [issue for issue in self.errors or [] if issue is not None]
        warnings = [issue for issue in self.warnings or [] if issue is not None]

        if errors:
            details = "; ".join(issue.describe() for issue in errors)
            raise ValidationIssues(
                f"validation failed with {len(errors)} errors: {details}",
                errors=errors,
                warnings=warnings,
            )

        if warnings and not ignore_warnings:
            details = "; ".join(issue.describe() for issue in warnings)
            raise ValidationIssues(
                f"validation failed with {len(warnings)} warnings: {details}",
                errors=errors,
                warnings=warnings,
            )
