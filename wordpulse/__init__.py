"""wordpulse: word frequency report and random-token heartbeat."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .heartbeat import HeartbeatConfig, IdentifierHeartbeat
from .reporter import DEFAULT_TEXT, ReportConfig, WordFrequencyReporter, word_frequencies
from .types import CountMode, RunStatus
from .utils import GenerationError

try:
    __version__ = version("wordpulse")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "DEFAULT_TEXT",
    "CountMode",
    "GenerationError",
    "HeartbeatConfig",
    "IdentifierHeartbeat",
    "ReportConfig",
    "RunStatus",
    "WordFrequencyReporter",
    "__version__",
    "word_frequencies",
]
