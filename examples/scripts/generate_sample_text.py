from __future__ import annotations

import random
from pathlib import Path

WORDS = [
    "overload", "service", "degraded", "responses", "traffic", "datacenter",
    "capacity", "backend", "tasks", "requests", "queries", "balancing",
    "clients", "resource", "errors", "gracefully", "to", "store", "the",
]


def main() -> None:
    rng = random.Random(42)
    sentences = []
    for _ in range(200):
        words = [rng.choice(WORDS) for _ in range(rng.randint(4, 12))]
        sentences.append(" ".join(words).capitalize() + ".")
    text = " ".join(sentences)
    Path("examples/data").mkdir(parents=True, exist_ok=True)
    Path("examples/data/sample.txt").write_text(text, encoding="utf-8")
    print("Wrote examples/data/sample.txt (try: wordpulse words --text-file examples/data/sample.txt)")


if __name__ == "__main__":
    main()
