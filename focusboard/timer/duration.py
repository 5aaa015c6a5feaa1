"""Validation and normalisation for the inline HH:MM:SS duration editor.

The editor is three free-text fields.  Committing (Enter or focus-out)
runs :func:`commit_edit`; cancelling (Escape) runs :func:`cancel_edit`.
Both are pure: they take the last-known-valid total and hand back the
text each field should show afterwards.

Rules
-----
- A blank field inherits the previous value for that field.
- Every field must parse as a non-negative integer.
- Minutes and seconds must be within ``0..59``; hours are unbounded.
- Any failure reverts all three fields.  Nothing is partially accepted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

MAX_MINUTES = 59
MAX_SECONDS = 59


class HMS(NamedTuple):
    hours: int
    minutes: int
    seconds: int

    @property
    def total_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds


def split_hms(total_seconds: int) -> HMS:
    """Break *total_seconds* (clamped at 0) into hours/minutes/seconds."""
    clamped = max(0, int(total_seconds))
    hours, rest = divmod(clamped, 3600)
    minutes, seconds = divmod(rest, 60)
    return HMS(hours, minutes, seconds)


def pad2(value: int) -> str:
    return f"{value:02d}"


def format_fields(hms: HMS) -> tuple[str, str, str]:
    return (pad2(hms.hours), pad2(hms.minutes), pad2(hms.seconds))


@dataclass(frozen=True)
class EditResult:
    """Outcome of a commit or cancel.

    ``fields`` is always what the three inputs should display next:
    the normalised new value when accepted, the previous value otherwise.
    ``total_seconds`` is ``None`` unless the edit was accepted.
    """

    accepted: bool
    fields: tuple[str, str, str]
    total_seconds: int | None = None

    @property
    def reverted(self) -> bool:
        return not self.accepted


def _parse_field(raw: str | int | None, previous: int, upper: int | None) -> int | None:
    if raw is None:
        return previous
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if text == "":
            return previous
        # int() accepts "+5" and "1_000"; only plain digits are allowed
        if not text.isascii() or not text.isdigit():
            return None
        value = int(text)
    if value < 0:
        return None
    if upper is not None and value > upper:
        return None
    return value


def commit_edit(
    hours: str | int | None,
    minutes: str | int | None,
    seconds: str | int | None,
    previous_seconds: int,
) -> EditResult:
    """Validate a proposed HH:MM:SS edit against the previous valid total."""
    prev = split_hms(previous_seconds)
    h = _parse_field(hours, prev.hours, None)
    m = _parse_field(minutes, prev.minutes, MAX_MINUTES)
    s = _parse_field(seconds, prev.seconds, MAX_SECONDS)

    if h is None or m is None or s is None:
        return cancel_edit(previous_seconds)

    accepted = HMS(h, m, s)
    return EditResult(
        accepted=True,
        fields=format_fields(accepted),
        total_seconds=accepted.total_seconds,
    )


def cancel_edit(previous_seconds: int) -> EditResult:
    """Revert the fields to *previous_seconds* without validating anything."""
    return EditResult(accepted=False, fields=format_fields(split_hms(previous_seconds)))
