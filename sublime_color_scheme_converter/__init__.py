"""
SublimeColorSchemeConverter

Converts sublime-color-scheme json files into tmTheme plist files.
"""

import uuid

from .theme import Theme, Rule, ParseError, parse
from .resolver import resolve
from .plist import serialize

__version__ = "0.2.0"

__all__ = [
    "Theme", "Rule", "ParseError",
    "parse", "resolve", "serialize", "convert",
]


def convert(data, uuid_factory=uuid.uuid4, camel_case=False):
    return serialize(parse(data), uuid_factory=uuid_factory, camel_case=camel_case)
