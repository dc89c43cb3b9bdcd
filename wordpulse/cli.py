from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from typing import Any

from .heartbeat import IdentifierHeartbeat
from .loader import ConfigValidationError, load_config, load_text
from .reporter import DEFAULT_TEXT, WordFrequencyReporter
from .types import CountMode
from .utils import save_json


def main(argv: Any = None) -> int:
    parser = argparse.ArgumentParser(prog="wordpulse", description="Word frequency report and identifier heartbeat.")
    sub = parser.add_subparsers(dest="cmd", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=None, help="JSON config file with 'words' / 'heartbeat' sections")
    common.add_argument("--summary-json", default=None, help="Write run summary JSON to this path")
    common.add_argument("--quiet", action="store_true", help="Disable JSON-line logs on stderr")

    wordsp = sub.add_parser("words", parents=[common], help="Print each distinct word with its count.")
    wordsp.add_argument("--text-file", default=None, help="Read the text from this UTF-8 file instead of the built-in paragraph")
    wordsp.add_argument(
        "--count-mode",
        choices=[m.value for m in CountMode],
        default=None,
        help="'substring' counts hits anywhere in the text (default); 'word' counts whole tokens",
    )

    beatp = sub.add_parser("heartbeat", parents=[common], help="Print one random token with a timestamp at an interval.")
    beatp.add_argument("--count", type=int, default=None, help="Number of heartbeat lines (default 10)")
    beatp.add_argument("--interval", type=float, default=None, help="Seconds to sleep after each line (default 1.0)")
    beatp.add_argument("--verbose", action="store_true", help="Include full tracebacks in logs")

    args = parser.parse_args(argv)

    try:
        if args.cmd == "words":
            overrides = {"words": {"count_mode": args.count_mode}}
        else:
            overrides = {"heartbeat": {"count": args.count, "interval_seconds": args.interval}}
        report_cfg, heartbeat_cfg = load_config(args.config, overrides)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, ConfigValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.cmd == "words":
        try:
            text = load_text(args.text_file) if args.text_file else DEFAULT_TEXT
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

        report_cfg = replace(report_cfg, emit_logs=not bool(args.quiet))
        summary = WordFrequencyReporter(report_cfg).run(text)

        if args.summary_json:
            save_json(summary, args.summary_json)
        return 0

    if args.cmd == "heartbeat":
        heartbeat_cfg = replace(heartbeat_cfg, emit_logs=not bool(args.quiet), verbose=bool(args.verbose))

        try:
            summary = IdentifierHeartbeat(heartbeat_cfg).run()
        except KeyboardInterrupt:
            print("Interrupted", file=sys.stderr)
            return 130

        if args.summary_json:
            save_json(summary, args.summary_json)

        if not summary.ok:
            # Diagnostic goes to stdout, in place of the heartbeat lines.
            message = summary.error.message if summary.error else "token generation failed"
            print(f"Error: {message}")
            return 1
        return 0

    return 0
