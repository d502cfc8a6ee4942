"""Validation helpers for CalcPad settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple

DEFAULT_SETTINGS: Dict[str, Any] = {
    "significant_digits": 12,
    "font_scale": 100,
    "theme": "Dark",
    "log_retention": 30,
}

THEMES = ("Dark", "Light")


@dataclass(frozen=True)
class ValidationIssue:
    """Represents a configuration validation problem."""

    field: str
    title: str
    message: str


def _coerce_int(value: Any) -> int | None:
    """Best-effort conversion to ``int`` returning ``None`` on failure."""

    if isinstance(value, bool):
        # ``bool`` is a subclass of ``int`` in Python, but we treat it as invalid
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def _check_range(
    issues: List[ValidationIssue],
    settings: Mapping[str, Any],
    field: str,
    label: str,
    low: int,
    high: int,
    unit: str,
) -> None:
    value = _coerce_int(settings.get(field, DEFAULT_SETTINGS[field]))
    if value is None:
        issues.append(
            ValidationIssue(
                field=field,
                title=f"{label} Invalid",
                message=f"{label} must be a whole number between {low} and {high}{unit}.",
            )
        )
    elif not low <= value <= high:
        issues.append(
            ValidationIssue(
                field=field,
                title=f"{label} Out of Range",
                message=f"Choose a value between {low} and {high}{unit}.",
            )
        )


def validate_configuration(settings: Mapping[str, Any]) -> List[ValidationIssue]:
    """Validate a settings payload.

    Parameters
    ----------
    settings:
        Mapping of setting names to values read from ``QSettings`` or the
        command line. Missing keys take their value from ``DEFAULT_SETTINGS``.

    Returns
    -------
    list[ValidationIssue]
        A collection of validation issues. An empty list denotes success.
    """

    issues: List[ValidationIssue] = []

    # Doubles carry 15 to 17 significant digits; beyond 15 rounding is noise
    _check_range(issues, settings, "significant_digits", "Precision", 1, 15, " digits")
    _check_range(issues, settings, "font_scale", "Font Scale", 80, 140, "%")
    _check_range(issues, settings, "log_retention", "Log Retention", 7, 365, " days")

    theme = str(settings.get("theme", DEFAULT_SETTINGS["theme"])).strip()
    if theme not in THEMES:
        issues.append(
            ValidationIssue(
                field="theme",
                title="Unknown Theme",
                message=f"Theme must be one of: {', '.join(THEMES)}.",
            )
        )

    return issues


def resolve_settings(settings: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[ValidationIssue]]:
    """Return effective settings, replacing invalid fields with their defaults."""

    issues = validate_configuration(settings)
    invalid = {issue.field for issue in issues}

    resolved: Dict[str, Any] = {}
    for key, default in DEFAULT_SETTINGS.items():
        if key in invalid or key not in settings:
            resolved[key] = default
        elif isinstance(default, int):
            resolved[key] = _coerce_int(settings[key])
        else:
            resolved[key] = str(settings[key]).strip()
    return resolved, issues
