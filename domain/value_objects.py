from dataclasses import dataclass
from typing import Literal

Severity = Literal["error", "success", "info"]


@dataclass(frozen=True)
class Role:
    id: str
    name: str


@dataclass(frozen=True)
class NotifyOptions:
    severity: Severity = "info"
    delayed: bool = False
    key: str | None = None  # alerts sharing a key replace each other


@dataclass(frozen=True)
class Notice:
    message: str
    options: NotifyOptions
