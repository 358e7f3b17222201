"""Frequency histograms for line-oriented text streams."""

from .cli import main
from .config import Palette, PreTallied, Settings
from .histogram import ColumnWidths, HistogramWriter, compute_widths
from .pairs import Pair, select_top
from .tokenizer import (
    LineTokenizer,
    MalformedLineError,
    PreTalliedTokenizer,
    RegexTokenizer,
    Tokenizer,
    build_tokenizer,
)

__all__ = [
    "Pair",
    "select_top",
    "Tokenizer",
    "LineTokenizer",
    "RegexTokenizer",
    "PreTalliedTokenizer",
    "MalformedLineError",
    "build_tokenizer",
    "HistogramWriter",
    "ColumnWidths",
    "compute_widths",
    "Settings",
    "Palette",
    "PreTallied",
    "main",
]
