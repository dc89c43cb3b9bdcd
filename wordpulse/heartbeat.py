from __future__ import annotations

import traceback as tb
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from .types import Clock, ErrorInfo, HeartbeatSummary, RandomSource, RunStatus, Sleeper
from .utils import (
    TOKEN_BYTES,
    GenerationError,
    SystemClock,
    SystemRandomSource,
    SystemSleeper,
    format_token,
    log_event,
    now_ts,
)


@dataclass(frozen=True)
class HeartbeatConfig:
    count: int = 10
    interval_seconds: float = 1.0
    # Set to False to disable JSON-line logs on stderr (useful for tests/integration)
    emit_logs: bool = True
    # Include full tracebacks in failure logs
    verbose: bool = False


def new_token(source: RandomSource) -> str:
    """Generate one opaque random token. Raises GenerationError on entropy failure."""
    return format_token(source.generate(TOKEN_BYTES))


def render_beat(ts: datetime, token: str) -> str:
    return f"{ts.isoformat()} {token}"


class IdentifierHeartbeat:
    """Print one random token with a fresh timestamp at a fixed interval.

    The token is generated once per run. Every beat is followed by a sleep,
    including the last one.
    """

    def __init__(
        self,
        config: HeartbeatConfig | None = None,
        random_source: RandomSource | None = None,
        clock: Clock | None = None,
        sleeper: Sleeper | None = None,
    ) -> None:
        self.config = config or HeartbeatConfig()
        self.random_source = random_source or SystemRandomSource()
        self.clock = clock or SystemClock()
        self.sleeper = sleeper or SystemSleeper()

    def _log(self, event: str, **fields: Any) -> None:
        log_event(self.config.emit_logs, event, **fields)

    def run(self, emit: Callable[[str], None] = print) -> HeartbeatSummary:
        if self.config.count < 1:
            raise ValueError("HeartbeatConfig.count must be >= 1.")
        if self.config.interval_seconds < 0:
            raise ValueError("HeartbeatConfig.interval_seconds must be >= 0.")

        started = datetime.now(timezone.utc)
        t0 = now_ts()

        try:
            token = new_token(self.random_source)
        except GenerationError as e:
            err = ErrorInfo(
                exc_type=type(e).__name__,
                message=str(e),
                traceback="".join(tb.format_exception(type(e), e, e.__traceback__)),
            )
            fields: dict[str, Any] = {"error_type": err.exc_type, "error_message": err.message}
            if self.config.verbose:
                fields["error_traceback"] = err.traceback
            self._log("token_generation_failed", **fields)
            return HeartbeatSummary(
                status=RunStatus.FAILED,
                token=None,
                beats=0,
                started_at_iso=started.isoformat(),
                finished_at_iso=datetime.now(timezone.utc).isoformat(),
                error=err,
            )

        self._log(
            "heartbeat_start",
            token=token,
            count=self.config.count,
            interval_seconds=self.config.interval_seconds,
        )

        beats = 0
        for i in range(self.config.count):
            emit(render_beat(self.clock.now(), token))
            beats += 1
            self._log("beat", index=i)
            self.sleeper.sleep(self.config.interval_seconds)

        self._log("heartbeat_finished", beats=beats, wall_seconds=max(0.0, now_ts() - t0))
        return HeartbeatSummary(
            status=RunStatus.SUCCESS,
            token=token,
            beats=beats,
            started_at_iso=started.isoformat(),
            finished_at_iso=datetime.now(timezone.utc).isoformat(),
        )
