from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Protocol

from .utils import quote_literal


class CountMode(str, Enum):
    SUBSTRING = "substring"
    WORD = "word"


class RunStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class RandomSource(Protocol):
    def generate(self, n: int) -> bytes: ...


class Clock(Protocol):
    def now(self) -> datetime: ...


class Sleeper(Protocol):
    def sleep(self, seconds: float) -> None: ...


@dataclass(frozen=True)
class WordCount:
    word: str
    count: int

    def render(self) -> str:
        return f"word {quote_literal(self.word)} appears {self.count}"


@dataclass(frozen=True)
class ErrorInfo:
    exc_type: str
    message: str
    traceback: str


@dataclass(frozen=True)
class ReportSummary:
    count_mode: CountMode
    tokens: int
    distinct_words: int
    started_at_iso: str
    finished_at_iso: str


@dataclass(frozen=True)
class HeartbeatSummary:
    status: RunStatus
    token: Optional[str]
    beats: int
    started_at_iso: str
    finished_at_iso: str
    error: Optional[ErrorInfo] = None

    @property
    def ok(self) -> bool:
        return self.status == RunStatus.SUCCESS
