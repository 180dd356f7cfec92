# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

"""The single status message shown after the most recent operation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StatusKind(Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    """A human-readable message tagged with what kind of outcome it reports.

    Attributes:
        kind: success, info or error.
        text: the message itself.

    Instances are immutable: each operation replaces the current
    message with a new one rather than editing it.
    """

    kind: StatusKind
    text: str

    def __post_init__(self) -> None:
        # accept "error" as well as StatusKind.ERROR
        object.__setattr__(self, "kind", StatusKind(self.kind))

    @property
    def is_error(self) -> bool:
        return self.kind is StatusKind.ERROR

    @classmethod
    def success(cls, text: str) -> StatusMessage:
        return cls(StatusKind.SUCCESS, text)

    @classmethod
    def info(cls, text: str) -> StatusMessage:
        return cls(StatusKind.INFO, text)

    @classmethod
    def error(cls, text: str) -> StatusMessage:
        return cls(StatusKind.ERROR, text)

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "text": self.text}

    def __str__(self) -> str:
        return self.text
