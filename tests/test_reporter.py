import unittest

from wordpulse.reporter import (
    DEFAULT_TEXT,
    ReportConfig,
    WordFrequencyReporter,
    count_occurrences,
    normalize,
    render_report,
    tokenize,
    word_frequencies,
)
from wordpulse.types import CountMode, WordCount


class TestNormalize(unittest.TestCase):
    def test_lowercases_and_strips_only_periods(self) -> None:
        self.assertEqual(normalize("Hello, World. Foo: Bar."), "hello, world foo: bar")

    def test_consecutive_spaces_give_empty_tokens(self) -> None:
        self.assertEqual(tokenize("a  b"), ["a", "", "b"])


class TestWordFrequencies(unittest.TestCase):
    def test_no_no(self) -> None:
        lines = render_report(word_frequencies("No. No."))
        self.assertEqual(lines, ['word "no" appears 2'])

    def test_default_text_prints_each_token_once_in_sorted_order(self) -> None:
        counts = word_frequencies(DEFAULT_TEXT)
        words = [c.word for c in counts]
        expected = sorted(set(tokenize(normalize(DEFAULT_TEXT))))
        self.assertEqual(words, expected)
        self.assertEqual(len(words), 100)
        self.assertEqual(words[:3], ["100", "50,000", "500"])
        self.assertEqual(words[-1], "you're")

    def test_default_first_line(self) -> None:
        lines = render_report(word_frequencies(DEFAULT_TEXT))
        self.assertEqual(lines[0], 'word "100" appears 1')

    def test_substring_counting_overcounts(self) -> None:
        counts = {c.word: c.count for c in word_frequencies(DEFAULT_TEXT)}
        normalized = normalize(DEFAULT_TEXT)
        for word, count in counts.items():
            self.assertEqual(count, normalized.count(word))
        # "task" also matches inside "tasks"; "at" inside "that", "datacenter", ...
        self.assertEqual(counts["task"], 2)
        self.assertEqual(counts["datacenter"], 4)
        self.assertEqual(counts["at"], 12)

    def test_word_mode_counts_whole_tokens(self) -> None:
        counts = {c.word: c.count for c in word_frequencies(DEFAULT_TEXT, CountMode.WORD)}
        self.assertEqual(counts["task"], 1)
        self.assertEqual(counts["datacenter"], 3)
        self.assertEqual(counts["at"], 3)
        self.assertEqual(sum(counts.values()), 145)

    def test_word_mode_keeps_same_order(self) -> None:
        a = [c.word for c in word_frequencies(DEFAULT_TEXT, CountMode.SUBSTRING)]
        b = [c.word for c in word_frequencies(DEFAULT_TEXT, CountMode.WORD)]
        self.assertEqual(a, b)

    def test_short_token_inside_longer_one(self) -> None:
        counts = {c.word: c.count for c in word_frequencies("to store")}
        self.assertEqual(counts, {"store": 1, "to": 2})
        self.assertEqual(count_occurrences("to store", "to", CountMode.WORD), 1)

    def test_punctuation_other_than_period_stays_attached(self) -> None:
        words = [c.word for c in word_frequencies("However, done.")]
        self.assertEqual(words, ["done", "however,"])

    def test_render_escapes_quotes(self) -> None:
        self.assertEqual(WordCount('say"hi', 1).render(), 'word "say\\"hi" appears 1')
        self.assertEqual(WordCount("café", 3).render(), 'word "café" appears 3')

    def test_render_control_characters(self) -> None:
        self.assertEqual(WordCount("a\x01b", 1).render(), 'word "a\\x01b" appears 1')
        self.assertEqual(WordCount("a\tb\\", 1).render(), 'word "a\\tb\\\\" appears 1')
        self.assertEqual(WordCount("\x7f", 2).render(), 'word "\\x7f" appears 2')

    def test_empty_token_counts_every_position(self) -> None:
        # "a  b" has one empty token; the empty string matches len + 1 times.
        self.assertEqual(
            render_report(word_frequencies("a  b")),
            ['word "" appears 5', 'word "a" appears 1', 'word "b" appears 1'],
        )


class TestReporter(unittest.TestCase):
    def test_run_emits_lines_and_summary(self) -> None:
        lines: list[str] = []
        summary = WordFrequencyReporter(ReportConfig(emit_logs=False)).run("b a. B", emit=lines.append)
        self.assertEqual(lines, ['word "a" appears 1', 'word "b" appears 2'])
        self.assertEqual(summary.tokens, 3)
        self.assertEqual(summary.distinct_words, 2)
        self.assertEqual(summary.count_mode, CountMode.SUBSTRING)
