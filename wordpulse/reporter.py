from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from .types import CountMode, ReportSummary, WordCount
from .utils import log_event, now_ts

DEFAULT_TEXT = (
    "However, under extreme overload, the service might not even be able to compute and "
    "serve degraded responses. At this point it may have no immediate option but to serve "
    "errors. One way to mitigate this scenario is to balance traffic across datacenters such "
    "that no datacenter receives more traffic than it has the capacity to process. For "
    "example, if a datacenter runs 100 backend tasks and each task can process up to 500 "
    "requests per second, the load balancing algorithm will not allow more than 50,000 "
    "queries per second to be sent to that datacenter. However, even this constraint can "
    "prove insufficient to avoid overload when you're operating at scale. At the end of the "
    "day, it's best to build clients and backends to handle resource restrictions "
    "gracefully: redirect when possible, serve degraded results when necessary, and handle "
    "resource errors transparently when all else fails."
)


@dataclass(frozen=True)
class ReportConfig:
    count_mode: CountMode = CountMode.SUBSTRING
    # Set to False to disable JSON-line logs on stderr
    emit_logs: bool = True


def normalize(text: str) -> str:
    """Lowercase and drop every period. Other punctuation is left attached."""
    return text.lower().replace(".", "")


def tokenize(normalized: str) -> list[str]:
    # Single-space split on purpose: consecutive spaces yield empty tokens.
    return normalized.split(" ")


def count_occurrences(
    normalized: str,
    token: str,
    mode: CountMode = CountMode.SUBSTRING,
) -> int:
    """Count ``token`` in the normalized text.

    SUBSTRING counts non-overlapping substring hits over the whole text, so a
    short token inside a longer word ("to" in "store") is counted too.
    WORD counts exact matches in the token list.
    """
    if mode == CountMode.WORD:
        return tokenize(normalized).count(token)
    return normalized.count(token)


def word_frequencies(text: str, mode: CountMode = CountMode.SUBSTRING) -> list[WordCount]:
    normalized = normalize(text)
    return _tally(normalized, tokenize(normalized), mode)


def _tally(normalized: str, tokens: list[str], mode: CountMode) -> list[WordCount]:
    word_counts = Counter(tokens) if mode == CountMode.WORD else None

    out: list[WordCount] = []
    already_printed: set[str] = set()
    for word in sorted(tokens):
        if word in already_printed:
            continue
        if word_counts is not None:
            count = word_counts[word]
        else:
            count = count_occurrences(normalized, word, mode)
        out.append(WordCount(word=word, count=count))
        already_printed.add(word)
    return out


def render_report(counts: list[WordCount]) -> list[str]:
    return [c.render() for c in counts]


class WordFrequencyReporter:
    def __init__(self, config: ReportConfig | None = None) -> None:
        self.config = config or ReportConfig()

    def run(self, text: str = DEFAULT_TEXT, emit: Callable[[str], None] = print) -> ReportSummary:
        started = datetime.now(timezone.utc)
        t0 = now_ts()
        mode = CountMode(self.config.count_mode)

        log_event(self.config.emit_logs, "report_start", count_mode=mode.value, chars=len(text))

        normalized = normalize(text)
        tokens = tokenize(normalized)
        counts = _tally(normalized, tokens, mode)
        for line in render_report(counts):
            emit(line)

        finished = datetime.now(timezone.utc)
        summary = ReportSummary(
            count_mode=mode,
            tokens=len(tokens),
            distinct_words=len(counts),
            started_at_iso=started.isoformat(),
            finished_at_iso=finished.isoformat(),
        )
        log_event(
            self.config.emit_logs,
            "report_finished",
            tokens=summary.tokens,
            distinct_words=summary.distinct_words,
            count_mode=mode.value,
            wall_seconds=max(0.0, now_ts() - t0),
        )
        return summary
