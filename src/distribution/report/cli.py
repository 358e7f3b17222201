#!/usr/bin/env python3
"""Histogram report CLI."""

import logging
import re
import sys

from .config import Settings
from .histogram import HistogramWriter
from .tokenizer import build_tokenizer

log = logging.getLogger(__name__)


def main() -> int:
    """Draw a histogram of stdin on stdout."""
    try:
        settings = Settings.from_args(sys.argv[1:])
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if settings.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )
    log.debug(f"Settings: {settings}")

    try:
        tokenizer = build_tokenizer(settings)
        pairs = tokenizer.tokenize(sys.stdin.buffer)
        writer = HistogramWriter(settings)
        writer.write_histogram(sys.stdout, pairs, header_writer=sys.stderr)
        sys.stdout.flush()
    except re.error as e:
        print(f"Error: Invalid regular expression: {e}", file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
