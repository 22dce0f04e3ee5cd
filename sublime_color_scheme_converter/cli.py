"""
Command line front end: reads a .sublime-color-scheme file and writes
the converted .tmTheme next to it.
"""

import os
import sys
import logging
import argparse

from rich.console import Console
from rich.text import Text

from . import __version__
from .theme import parse, ParseError
from .plist import serialize

APP = "sublime-color-scheme-converter"
DESC = "sublime-color-scheme to tmTheme converter"

SOURCE_EXT = ".sublime-color-scheme"
TARGET_EXT = ".tmTheme"

logger = logging.getLogger(__name__)


class ConversionError(Exception):
    """Wraps load and save failures with a user-facing message."""


def build_parser():
    parser = argparse.ArgumentParser(prog=APP, description=DESC)
    parser.add_argument("theme_file", nargs="?", metavar="theme-file",
                        help="path to .sublime-color-scheme file")
    parser.add_argument("-o", "--output", metavar="path",
                        help="path to output file")
    parser.add_argument("--camel-case", action="store_true",
                        help="rewrite snake_case global keys to camelCase")
    parser.add_argument("--no-color", action="store_true",
                        help="disable colors in output")
    parser.add_argument("--debug", action="store_true",
                        help="print debug log")
    parser.add_argument("-v", "--version", action="version",
                        version="{} {}".format(APP, __version__))
    return parser


def output_name(src):
    if src.endswith(SOURCE_EXT):
        return src[:-len(SOURCE_EXT)] + TARGET_EXT
    return os.path.splitext(src)[0] + TARGET_EXT


def read_source(src):
    with open(src, "rb") as sublime_color_scheme:
        return sublime_color_scheme.read()


def write_buffer(output, dst):
    with open(dst, "wb") as output_file:
        output_file.write(output)


def print_theme_info(console, theme):
    console.rule(Text(theme.name or "Theme", style="bold"), align="left")

    for label, value in (
        ("Author:", theme.author or "—"),
        ("Variables:", "{:,}".format(len(theme.variables))),
        ("Globals:", "{:,}".format(len(theme.globals))),
        ("Rules:", "{:,}".format(len(theme.rules))),
    ):
        console.print(Text.assemble("  ", (label.ljust(11), "bold"), value))

    console.rule()


def run(src, dst=None, camel_case=False, console=None):
    console = console or Console()

    try:
        theme = parse(read_source(src))
    except (OSError, ParseError) as e:
        raise ConversionError("Can't load theme: {}".format(e)) from e

    print_theme_info(console, theme)

    dst = dst or output_name(src)
    output = serialize(theme, camel_case=camel_case)

    try:
        write_buffer(output, dst)
    except OSError as e:
        raise ConversionError("Can't save theme: {}".format(e)) from e

    logger.debug("wrote %d bytes to %s", len(output), dst)
    console.print(Text.assemble(
        ("Theme successfully converted and saved as ", "green"),
        (dst, "bold green"),
    ))
    return dst


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # None lets rich fall back to NO_COLOR and terminal detection
    no_color = True if args.no_color else None
    console = Console(no_color=no_color)
    err_console = Console(stderr=True, no_color=no_color)

    if not args.theme_file:
        parser.print_help()
        return 0

    try:
        run(args.theme_file, args.output, args.camel_case, console)
    except ConversionError as e:
        err_console.print(Text(str(e), style="red"))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
