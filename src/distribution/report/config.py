"""Settings for histogram reports.

Settings come from two places, in increasing priority:
- the rc file (``~/.distributionrc`` unless ``--rcfile`` says otherwise)
- the command line

The rc file is a YAML mapping of long option names to values::

    width: 100
    char: pb
    palette: 0,37,34,33,32
    graph: kv

Each entry is turned into the matching command-line option and placed in
front of the real arguments, so anything given on the command line wins.
"""

import argparse
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

RCFILE_NAME = ".distributionrc"
DEFAULT_PALETTE = "0,0,32,35,34"
DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 15

# Rows taken by the header, separator and the shell prompt in --size=full
FULL_SIZE_RESERVED_LINES = 3

SIZE_PRESETS = {
    "small": (60, 10),
    "sm": (60, 10),
    "s": (60, 10),
    "medium": (100, 20),
    "med": (100, 20),
    "m": (100, 20),
    "large": (140, 35),
    "lg": (140, 35),
    "l": (140, 35),
}
FULL_SIZE_NAMES = ("full", "f")

# Substitutions for --char that name a single unicode glyph
GLYPH_SUBSTITUTIONS = {
    "ba": "▬",  # bar
    "bl": "Ξ",  # building
    "em": "—",  # emdash
    "me": "⋯",  # mid-ellipses
    "di": "♦",  # diamond
    "dt": "•",  # dot
    "sq": "□",  # square
}

# Substitutions for --char that draw partial glyphs: (ladder, char_width)
PARTIAL_GLYPHS = {
    "pb": (("▏", "▎", "▍", "▌", "▋", "▊", "▉", "█"), 0.125),
    "pl": (("╴", "╸", "━"), 1 / 3),
}

# rc file keys, mapped to whether the option is a flag
RC_OPTIONS = {
    "width": False,
    "height": False,
    "size": False,
    "char": False,
    "color": True,
    "palette": False,
    "graph": False,
    "tokenize": False,
    "match": False,
    "verbose": True,
}


class PreTallied(Enum):
    """How pre-tallied input lines are laid out."""

    NA = "na"  # Input is not pre-tallied
    KEY_VALUE = "kv"
    VALUE_KEY = "vk"


@dataclass
class Palette:
    """Escape sequences written before each part of a histogram row."""

    regular: str = ""
    key: str = ""
    count: str = ""
    percent: str = ""
    graph: str = ""

    @classmethod
    def from_string(cls, palette: str) -> "Palette":
        """Build a palette from five comma-separated ANSI colour numbers.

        Args:
            palette: Colours for regular text, key, count, percent and graph,
                e.g. ``"0,37,34,33,32"``.

        Returns:
            Palette of ``ESC[<n>m`` sequences.

        Raises:
            ValueError: If the palette does not hold exactly five numbers.
        """
        codes = [code.strip() for code in palette.split(",")]
        if len(codes) != 5 or not all(code.isdigit() for code in codes):
            raise ValueError(f"Palette must be five comma-separated numbers: {palette!r}")
        return cls(*(f"\x1b[{code}m" for code in codes))


@dataclass
class Settings:
    """Finalized report settings."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    histogram_char: str = "-"
    char_width: float = 1.0
    graph_chars: tuple[str, ...] = ()
    unicode_mode: bool = False
    palette: Palette = field(default_factory=Palette)
    graph_values: PreTallied = PreTallied.NA
    tokenize: str = ""
    match_regexp: str = "."
    verbose: bool = False

    @classmethod
    def from_args(cls, argv: list[str], rcfile: Path | None = None) -> "Settings":
        """Build settings from command-line arguments and the rc file.

        Args:
            argv: Command-line arguments, without the program name.
            rcfile: rc file to read when ``--rcfile`` is not given.
                Defaults to ``~/.distributionrc``.

        Returns:
            Finalized settings.

        Raises:
            ValueError: If the rc file or an option value is invalid.
        """
        pre_parser = argparse.ArgumentParser(add_help=False)
        pre_parser.add_argument("--rcfile", type=Path)
        known, _ = pre_parser.parse_known_args(argv)
        rc_path = known.rcfile or rcfile or Path.home() / RCFILE_NAME

        args = build_parser().parse_args(load_rcfile(rc_path) + list(argv))
        return cls.from_namespace(args)

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> "Settings":
        """Resolve parsed arguments into settings."""
        settings = cls(verbose=args.verbose)

        if args.size in SIZE_PRESETS:
            settings.width, settings.height = SIZE_PRESETS[args.size]
        elif args.size in FULL_SIZE_NAMES:
            terminal = shutil.get_terminal_size()
            settings.width = terminal.columns
            settings.height = max(1, terminal.lines - FULL_SIZE_RESERVED_LINES)

        if args.width is not None:
            settings.width = args.width
        if args.height is not None:
            settings.height = args.height
        if settings.width <= 0 or settings.height <= 0:
            raise ValueError(
                f"Width and height must be positive, got {settings.width}x{settings.height}"
            )

        if args.color or args.palette is not None:
            settings.palette = Palette.from_string(args.palette or DEFAULT_PALETTE)

        if args.graph is not None:
            settings.graph_values = PreTallied(args.graph)
        settings.tokenize = args.tokenize or ""
        settings.match_regexp = args.match

        settings.histogram_char = args.char
        if args.char in PARTIAL_GLYPHS:
            settings.graph_chars, settings.char_width = PARTIAL_GLYPHS[args.char]
            settings.unicode_mode = True
        elif args.char in GLYPH_SUBSTITUTIONS:
            settings.histogram_char = GLYPH_SUBSTITUTIONS[args.char]
            settings.unicode_mode = True
        elif not 1 <= len(args.char) <= 2:
            raise ValueError(
                f"Histogram character must be one or two characters or a substitution: {args.char!r}"
            )
        if not settings.histogram_char.isascii():
            settings.unicode_mode = True

        return settings


def load_rcfile(path: Path) -> list[str]:
    """Load rc file entries as command-line arguments.

    Args:
        path: Path to the rc file. A missing file yields no arguments.

    Returns:
        Arguments in ``--name=value`` form.

    Raises:
        ValueError: If the file is not valid YAML, is not a mapping or names
            an unknown option.
        OSError: If the file exists but cannot be read.
    """
    if not path.is_file():
        return []

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"rc file {path} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"rc file {path} must contain a mapping of options")

    args = []
    for name, value in data.items():
        if name not in RC_OPTIONS:
            raise ValueError(f"Unknown option in rc file {path}: {name}")
        if value is None or value is False:
            continue
        # 'graph: true' is a bare --graph, meaning the default layout
        if RC_OPTIONS[name] or value is True:
            args.append(f"--{name}")
        else:
            args.append(f"--{name}={_rc_value(value)}")
    return args


def _rc_value(value: Any) -> str:
    """Render a YAML scalar as a command-line value."""
    if isinstance(value, list):
        return ",".join(str(v) for v in value)
    return str(value)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="distribution",
        description="Draw a frequency histogram of lines or tokens read from stdin",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
Examples:
  du -sb /etc/* | %(prog)s --palette=0,37,34,33,32 --graph
  du -sk /etc/* | awk '{print $2" "$1}' | %(prog)s --graph=kv
  zcat /var/log/syslog*gz | %(prog)s --char=o --tokenize=white
  zcat /var/log/syslog*gz | awk '{print $5}' | %(prog)s -t word -m word -h 15 -c /
  find /etc -type f | cut -c 6- | %(prog)s --tokenize=/ -w 90 -h 35 -c dt
  cat /usr/share/dict/words | awk '{print length($1)}' | %(prog)s -c '*' -w 50 -h 10

Bar characters (--char):
  pb    1/8-width unicode partial blocks, 8x the terminal resolution
  pl    1/3-width unicode partial lines, 3x the terminal resolution
  ba (▬) bar   bl (Ξ) building   em (—) emdash   me (⋯) mid-ellipses
  di (♦) diamond   dt (•) dot   sq (□) square
  Two characters, e.g. '=>', draw the bar with the first and cap it with the second.

Defaults can be stored as a YAML mapping in ~/.distributionrc, e.g. 'width: 100'.
        """,
    )

    # Size
    parser.add_argument("-w", "--width", type=int, metavar="N", help="Width of the report")
    parser.add_argument(
        "-h", "--height", type=int, metavar="N", help="Number of histogram rows, headers excluded"
    )
    parser.add_argument(
        "-s",
        "--size",
        choices=[*SIZE_PRESETS, *FULL_SIZE_NAMES],
        metavar="S",
        help="small (60x10), medium (100x20), large (140x35) or full (terminal size); "
        "overridden by --width/--height",
    )

    # Appearance
    parser.add_argument(
        "-c", "--char", default="-", metavar="C", help="Character(s) to draw bars with"
    )
    parser.add_argument("--color", action="store_true", help="Colourise the output")
    parser.add_argument(
        "-p",
        "--palette",
        metavar="P",
        help="ANSI colours for regular, key, count, percent and graph, e.g. 0,37,34,33,32. "
        "Implies --color",
    )

    # Input interpretation
    parser.add_argument(
        "-g",
        "--graph",
        nargs="?",
        const="vk",
        choices=["vk", "kv"],
        help="Input is already tallied: vk (count then key, default) or kv (key then count)",
    )
    parser.add_argument(
        "-t",
        "--tokenize",
        metavar="RE",
        help="Split lines on RE and count the tokens; 'white' splits on whitespace, "
        "'word' on non-word characters",
    )
    parser.add_argument(
        "-m",
        "--match",
        default=".",
        metavar="RE",
        help="Only count lines (or tokens) matching RE; 'word' for alphabetic, "
        "'num' for numeric",
    )

    # Misc
    parser.add_argument("--rcfile", type=Path, metavar="F", help="Read defaults from F")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details")
    parser.add_argument("--help", action="help", help="Show this help message and exit")

    return parser
