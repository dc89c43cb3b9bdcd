from __future__ import annotations

import json
import os
import sys
import time
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

TOKEN_BYTES = 16
# Byte lengths of the hyphen-separated groups of a token.
TOKEN_GROUPS = (4, 2, 2, 2, 6)


class GenerationError(RuntimeError):
    """Raised when random bytes cannot be obtained from the entropy source."""


class SystemRandomSource:
    """Random bytes from the operating system's CSPRNG."""

    def generate(self, n: int) -> bytes:
        try:
            return os.urandom(n)
        except (OSError, NotImplementedError) as e:
            raise GenerationError(f"entropy source unavailable: {e}") from e


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class SystemSleeper:
    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)


def now_ts() -> float:
    return time.time()


def format_token(raw: bytes) -> str:
    """Format 16 bytes as 'XXXXXXXX-XXXX-XXXX-XXXX-XXXXXXXXXXXX' (uppercase hex).

    The result only looks like a UUID: no version or variant bits are set.
    """
    if len(raw) != TOKEN_BYTES:
        raise ValueError(f"Expected {TOKEN_BYTES} bytes, got {len(raw)}.")
    groups: list[str] = []
    offset = 0
    for size in TOKEN_GROUPS:
        groups.append(raw[offset : offset + size].hex().upper())
        offset += size
    return "-".join(groups)


def log_event(enabled: bool, event: str, **fields: Any) -> None:
    """Write one structured JSON-line log record to stderr."""
    if not enabled:
        return
    payload = {"ts": datetime.now(timezone.utc).isoformat(), "event": event, **fields}
    print(json.dumps(to_jsonable(payload), ensure_ascii=False), file=sys.stderr)


def to_jsonable(x: Any) -> Any:
    if is_dataclass(x) and not isinstance(x, type):
        return to_jsonable(asdict(x))
    if isinstance(x, Enum):
        return x.value
    if isinstance(x, (str, int, float, bool)) or x is None:
        return x
    if isinstance(x, (list, tuple)):
        return [to_jsonable(v) for v in x]
    if isinstance(x, dict):
        return {str(k): to_jsonable(v) for k, v in x.items()}
    return repr(x)


def save_json(data: Any, path: str) -> str:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(to_jsonable(data), ensure_ascii=False, indent=2), encoding="utf-8")
    return path


_QUOTE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    '"': '\\"',
    "\\": "\\\\",
}


def quote_literal(s: str) -> str:
    """Double-quote ``s`` as a string literal with backslash escapes.

    Control characters below 0x20 and DEL become \\xNN, other non-printable
    characters \\uNNNN or \\UNNNNNNNN; printable non-ASCII is kept as-is.
    """
    out = ['"']
    for ch in s:
        code = ord(ch)
        if ch in _QUOTE_ESCAPES:
            out.append(_QUOTE_ESCAPES[ch])
        elif code < 0x20 or code == 0x7F:
            out.append(f"\\x{code:02x}")
        elif ch.isprintable():
            out.append(ch)
        elif code < 0x10000:
            out.append(f"\\u{code:04x}")
        else:
            out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)
