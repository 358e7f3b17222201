"""Tokenizers turning line streams into key/count pairs.

Three strategies are available:
- LineTokenizer: every whole line is a key, identical lines are counted
- RegexTokenizer: lines are split into tokens, identical tokens are counted
- PreTalliedTokenizer: every line already carries a key and its count

``build_tokenizer`` picks one from the finalized settings.
"""

import logging
import re
from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Iterable

from .config import PreTallied, Settings
from .pairs import Pair

log = logging.getLogger(__name__)

SPLIT_SHORTHANDS = {
    "white": r"\s+",
    "word": r"\W",
}

MATCH_SHORTHANDS = {
    "word": r"^[A-Za-z]+$",
    "num": r"^\d+$",
}


class MalformedLineError(ValueError):
    """A pre-tallied line does not hold a key and a count."""

    def __init__(self, line_number: int, line: str) -> None:
        self.line_number = line_number
        self.line = line
        super().__init__(f"Line {line_number} is not a key/count pair: {line!r}")


def _read_lines(stream: Iterable[bytes | str]) -> Iterable[str]:
    """Yield decoded lines with their terminator removed."""
    for raw in stream:
        line = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        yield line


def _split(splitter: re.Pattern[str], text: str) -> list[str]:
    """Return the text between separator matches.

    Unlike ``re.split`` this never emits capture group contents.
    """
    pieces = []
    start = 0
    for match in splitter.finditer(text):
        pieces.append(text[start : match.start()])
        start = match.end()
    pieces.append(text[start:])
    return pieces


def _to_pairs(counts: Counter[str]) -> list[Pair]:
    return [Pair(value, key) for key, value in counts.items()]


class Tokenizer(ABC):
    """Base class for the tokenizer strategies."""

    @abstractmethod
    def tokenize(self, stream: Iterable[bytes | str]) -> list[Pair]:
        """Consume every line of the stream and return the resulting pairs.

        Args:
            stream: Iterable of lines, as bytes (decoded as UTF-8) or str.

        Returns:
            Unordered list of pairs. Empty input gives an empty list.

        Raises:
            UnicodeDecodeError: If a line is not valid UTF-8.
        """


class LineTokenizer(Tokenizer):
    """Counts identical lines that match a filter pattern."""

    def __init__(self, matcher: str = ".") -> None:
        self.matcher = re.compile(MATCH_SHORTHANDS.get(matcher, matcher))

    def tokenize(self, stream: Iterable[bytes | str]) -> list[Pair]:
        counts: Counter[str] = Counter()
        total = 0
        for line in _read_lines(stream):
            total += 1
            if self.matcher.search(line):
                counts[line] += 1
        log.debug(f"Counted {len(counts)} distinct keys from {total} lines")
        return _to_pairs(counts)


class RegexTokenizer(Tokenizer):
    """Splits lines into tokens and counts the tokens that match."""

    def __init__(self, splitter: str, matcher: str = ".") -> None:
        self.splitter = re.compile(SPLIT_SHORTHANDS.get(splitter, splitter))
        self.matcher = re.compile(MATCH_SHORTHANDS.get(matcher, matcher))

    def tokenize(self, stream: Iterable[bytes | str]) -> list[Pair]:
        counts: Counter[str] = Counter()
        total = 0
        for line in _read_lines(stream):
            for token in _split(self.splitter, line.rstrip()):
                total += 1
                if self.matcher.search(token):
                    counts[token] += 1
        log.debug(f"Counted {len(counts)} distinct tokens from {total} tokens")
        return _to_pairs(counts)


class PreTalliedTokenizer(Tokenizer):
    """Parses lines that already hold a key and its count.

    Duplicate keys are kept as separate pairs, in input order.
    """

    def __init__(self, pattern: str) -> None:
        self.pattern = re.compile(pattern)

    @classmethod
    def key_value(cls) -> "PreTalliedTokenizer":
        """Tokenizer for lines of the form ``<key> <count>``."""
        return cls(r"^\s*(?P<key>.+)\s+(?P<value>\d+)$")

    @classmethod
    def value_key(cls) -> "PreTalliedTokenizer":
        """Tokenizer for lines of the form ``<count> <key>``, as ``uniq -c`` prints."""
        return cls(r"^\s*(?P<value>\d+)\s+(?P<key>.+)$")

    def tokenize(self, stream: Iterable[bytes | str]) -> list[Pair]:
        """Parse every line into a pair.

        Raises:
            MalformedLineError: On the first line that does not match.
            UnicodeDecodeError: If a line is not valid UTF-8.
        """
        pairs = []
        for number, line in enumerate(_read_lines(stream), start=1):
            match = self.pattern.match(line)
            if match is None:
                raise MalformedLineError(number, line)
            pairs.append(Pair(int(match.group("value")), match.group("key")))
        log.debug(f"Parsed {len(pairs)} pre-tallied pairs")
        return pairs


def build_tokenizer(settings: Settings) -> Tokenizer:
    """Choose the tokenizer matching the settings.

    Pre-tallied input takes precedence over ``tokenize``, which takes
    precedence over plain line counting.
    """
    if settings.graph_values == PreTallied.VALUE_KEY:
        return PreTalliedTokenizer.value_key()
    if settings.graph_values == PreTallied.KEY_VALUE:
        return PreTalliedTokenizer.key_value()
    if settings.tokenize and settings.tokenize != "none":
        return RegexTokenizer(settings.tokenize, settings.match_regexp)
    return LineTokenizer(settings.match_regexp)
