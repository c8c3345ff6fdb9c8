from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from jsonschema import Draft7Validator


@dataclass(slots=True)
class ValidationIssue:
    """Represents a single validation problem."""

    severity: str
    path: str
    message: str
    code: str


@dataclass(slots=True)
class ValidationReport:
    """Aggregates validation warnings and errors."""

    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def describe_errors(self) -> List[str]:
        return [f"{issue.path}: {issue.message}" for issue in self.errors]


_SUBDIR_SCHEMA: Dict[str, Any] = {"type": "string", "minLength": 1}

SETTINGS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "root": {"type": "string", "minLength": 1},
        "incoming_subdir": _SUBDIR_SCHEMA,
        "unsorted_subdir": _SUBDIR_SCHEMA,
        "playlist_dir": {"type": ["string", "null"]},
    },
    "required": ["root"],
    "additionalProperties": True,
}

# Used for both the genres and the aliases documents: name -> list of names.
NAME_LISTS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": {
        "type": ["array", "null"],
        "items": {"type": ["string", "number"]},
    },
}


def _format_jsonschema_path(path: Sequence[Any]) -> str:
    if not path:
        return "<root>"
    tokens: List[str] = []
    for part in path:
        if isinstance(part, int):
            if tokens:
                tokens[-1] = f"{tokens[-1]}[{part}]"
            else:
                tokens.append(f"[{part}]")
        else:
            tokens.append(str(part))
    return ".".join(tokens) if tokens else "<root>"


def _collect_schema_errors(
    schema: Dict[str, Any],
    data: Any,
    report: ValidationReport,
    *,
    prefix: Sequence[str] = (),
) -> None:
    validator = Draft7Validator(schema)
    for error in sorted(validator.iter_errors(data), key=lambda exc: list(map(str, exc.path))):
        report.errors.append(
            ValidationIssue(
                severity="error",
                path=_format_jsonschema_path([*prefix, *error.absolute_path]),
                message=error.message,
                code="schema",
            )
        )


def validate_settings_data(data: Dict[str, Any]) -> ValidationReport:
    """Validate the main document (collection root and sub-directories)."""
    report = ValidationReport()
    _collect_schema_errors(SETTINGS_SCHEMA, data, report)

    known = set(SETTINGS_SCHEMA["properties"])
    for key in data:
        if key not in known:
            report.warnings.append(
                ValidationIssue(
                    severity="warning",
                    path=str(key),
                    message="Unknown setting is ignored",
                    code="unknown-key",
                )
            )
    return report


def validate_name_lists(data: Dict[str, Any], *, document: str) -> ValidationReport:
    """Validate a genres or aliases document, reporting paths as ``document.name[index]``."""
    report = ValidationReport()
    _collect_schema_errors(NAME_LISTS_SCHEMA, data, report, prefix=(document,))

    for name, values in data.items():
        if isinstance(values, list) and not values:
            report.warnings.append(
                ValidationIssue(
                    severity="warning",
                    path=f"{document}.{name}",
                    message="Empty list, nothing will match it",
                    code="empty-list",
                )
            )
    return report
