"""
Arrangement Validator - advisory checks on arrangement content.

Validates:
- Instrument clips have as many durations as note groups
- Durations are positive
- Track clip references resolve to clips
- Clip and track names are unique and usable as sclang variables

Lowering never runs these checks; an arrangement that fails here still
compiles exactly as written.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from chuk_mcp_sclang.models.arrangement import Arrangement
from chuk_mcp_sclang.models.clip import EmptyClip, FileClip, InstrumentClip

# sclang variable names start with a lowercase letter
_IDENTIFIER = re.compile(r"^[a-z][A-Za-z0-9_]*$")


class ValidationSeverity(str, Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Output will not run as intended
    WARNING = "warning"  # Output compiles but may misbehave in sclang
    INFO = "info"  # Informational only


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: ValidationSeverity
    code: str
    message: str
    location: str | None = None

    def __str__(self) -> str:
        prefix = f"[{self.severity.value.upper()}]"
        location = f" at {self.location}" if self.location else ""
        return f"{prefix} {self.code}: {self.message}{location}"


class ValidationResult:
    """Result of validating an arrangement."""

    def __init__(self) -> None:
        self.issues: list[ValidationIssue] = []

    def add_error(self, code: str, message: str, location: str | None = None) -> None:
        self.issues.append(ValidationIssue(ValidationSeverity.ERROR, code, message, location))

    def add_warning(self, code: str, message: str, location: str | None = None) -> None:
        self.issues.append(ValidationIssue(ValidationSeverity.WARNING, code, message, location))

    def add_info(self, code: str, message: str, location: str | None = None) -> None:
        self.issues.append(ValidationIssue(ValidationSeverity.INFO, code, message, location))

    @property
    def is_valid(self) -> bool:
        """Return True if no errors (warnings/info are OK)."""
        return not any(i.severity == ValidationSeverity.ERROR for i in self.issues)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def infos(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.INFO]

    def codes(self) -> set[str]:
        """All issue codes found."""
        return {i.code for i in self.issues}

    def __bool__(self) -> bool:
        return self.is_valid

    def __str__(self) -> str:
        if not self.issues:
            return "Validation passed: no issues found"
        return "\n".join(str(issue) for issue in self.issues)


class ArrangementValidator:
    """Validates arrangement content."""

    def validate(self, arrangement: Arrangement) -> ValidationResult:
        """
        Validate an arrangement.

        Returns:
            ValidationResult with any issues found
        """
        result = ValidationResult()

        self._validate_clips(arrangement, result)
        self._validate_tracks(arrangement, result)
        self._validate_names(arrangement, result)

        return result

    def _validate_clips(self, arrangement: Arrangement, result: ValidationResult) -> None:
        for clip in arrangement.clips:
            location = f"clips/{clip.name}"
            if isinstance(clip, InstrumentClip):
                if len(clip.notes) != len(clip.durations):
                    result.add_error(
                        "LENGTH_MISMATCH",
                        f"Clip '{clip.name}' has {len(clip.notes)} note groups "
                        f"but {len(clip.durations)} durations",
                        location,
                    )
                if any(d <= 0 for d in clip.durations):
                    result.add_error(
                        "NON_POSITIVE_DURATION",
                        f"Clip '{clip.name}' has a zero or negative duration",
                        location,
                    )
            elif isinstance(clip, EmptyClip):
                if clip.duration <= 0:
                    result.add_error(
                        "NON_POSITIVE_DURATION",
                        f"Empty clip '{clip.name}' has a zero or negative duration",
                        location,
                    )
            elif isinstance(clip, FileClip):
                result.add_warning(
                    "FILE_CLIP_STUB",
                    f"File clip '{clip.name}' has no finished lowering "
                    "and compiles only as a placeholder",
                    location,
                )

    def _validate_tracks(self, arrangement: Arrangement, result: ValidationResult) -> None:
        if not arrangement.tracks:
            result.add_info("NO_TRACKS", "Arrangement has no tracks; nothing will play", "tracks")
            return

        clip_names = set(arrangement.clip_names())
        referenced: set[str] = set()

        for track in arrangement.tracks:
            location = f"tracks/{track.name}"
            if not track.clip_names:
                result.add_info("EMPTY_TRACK", f"Track '{track.name}' has no clips", location)
            for clip_name in track.clip_names:
                referenced.add(clip_name)
                if clip_name not in clip_names:
                    result.add_warning(
                        "UNKNOWN_CLIP_REF",
                        f"Track '{track.name}' references unknown clip: {clip_name}",
                        location,
                    )

        for clip_name in arrangement.clip_names():
            if clip_name not in referenced:
                result.add_info(
                    "UNUSED_CLIP",
                    f"Clip '{clip_name}' is not used by any track",
                    f"clips/{clip_name}",
                )

    def _validate_names(self, arrangement: Arrangement, result: ValidationResult) -> None:
        seen: set[str] = set()
        for name in arrangement.names():
            if name in seen:
                result.add_warning(
                    "DUPLICATE_NAME",
                    f"Name '{name}' is declared more than once",
                    "names",
                )
            seen.add(name)
            if not _IDENTIFIER.match(name):
                result.add_warning(
                    "INVALID_IDENTIFIER",
                    f"'{name}' is not a valid sclang variable name",
                    "names",
                )


def validate_arrangement(arrangement: Arrangement) -> ValidationResult:
    """
    Convenience function to validate an arrangement.

    Returns:
        ValidationResult with any issues found
    """
    return ArrangementValidator().validate(arrangement)
