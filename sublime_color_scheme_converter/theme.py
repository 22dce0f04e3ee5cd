"""
In-memory model of a sublime-color-scheme document.
"""

import json
import logging
import collections
from types import MappingProxyType
from dataclasses import dataclass, field
from typing import Mapping, Tuple

from .resolver import resolve

logger = logging.getLogger(__name__)

# Rule field name -> tmTheme settings key, in output order
RULE_SETTINGS = (
    ("font_style", "fontStyle"),
    ("foreground", "foreground"),
    ("background", "background"),
    ("selection_foreground", "selectionForeground"),
)


class ParseError(ValueError):
    """Raised when a document can't be decoded into a Theme."""


@dataclass(frozen=True)
class Rule:
    name: str = ""
    scope: str = ""
    font_style: str = ""
    foreground: str = ""
    background: str = ""
    selection_foreground: str = ""

    def settings(self, theme):
        """Resolved (key, value) pairs for every non-empty style field."""
        return [
            (key, resolve(getattr(self, attr), theme))
            for attr, key in RULE_SETTINGS
            if getattr(self, attr)
        ]


@dataclass(frozen=True)
class Theme:
    """
    Parsed theme. variables and globals are copied into read-only views,
    globals keeping the given key order.
    """

    name: str = ""
    author: str = ""
    variables: Mapping[str, str] = field(default_factory=dict)
    globals: Mapping[str, str] = field(default_factory=collections.OrderedDict)
    rules: Tuple[Rule, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))
        object.__setattr__(
            self, "globals", MappingProxyType(collections.OrderedDict(self.globals))
        )
        object.__setattr__(self, "rules", tuple(self.rules))

    def get_global(self, key):
        return resolve(self.globals[key], self)


def _text(value, where):
    # JSON allows lone surrogates (\ud800), UTF-8 output does not
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ParseError("{}: string is not valid unicode: {}".format(where, e)) from e
    return value


def _string(source, key, where):
    value = source.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ParseError("{}: field '{}' must be a string".format(where, key))
    return _text(value, where)


def _object(source, key):
    value = source.get(key)
    if value is None:
        return collections.OrderedDict()
    if not isinstance(value, dict):
        raise ParseError("field '{}' must be an object".format(key))
    return value


def parse_variables(variables):
    parsed = {}
    for key, value in variables.items():
        if not isinstance(value, str):
            raise ParseError("variables: value of '{}' must be a string".format(key))
        parsed[_text(key, "variables")] = _text(value, "variables")
    return parsed


def parse_globals(globals_):
    parsed = collections.OrderedDict()
    for key, value in globals_.items():
        if not isinstance(value, str):
            logger.warning("skipping global %r: value is not a string", key)
            continue
        parsed[_text(key, "globals")] = _text(value, "globals")
    return parsed


def parse_rules(rules):
    if rules is None:
        return ()
    if not isinstance(rules, list):
        raise ParseError("field 'rules' must be an array")

    parsed = []
    for index, rule in enumerate(rules):
        where = "rules[{}]".format(index)
        if not isinstance(rule, dict):
            raise ParseError("{}: rule must be an object".format(where))
        parsed.append(Rule(
            name=_string(rule, "name", where),
            scope=_string(rule, "scope", where),
            font_style=_string(rule, "font_style", where),
            foreground=_string(rule, "foreground", where),
            background=_string(rule, "background", where),
            selection_foreground=_string(rule, "selection_foreground", where),
        ))
    return tuple(parsed)


def parse(data):
    """
    Decodes a JSON sublime-color-scheme document (bytes or str) into a Theme.

    Key order of "globals" follows the source document. Raises ParseError on
    malformed input.
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError("theme is not valid UTF-8: {}".format(e)) from e

    try:
        source = json.loads(data, object_pairs_hook=collections.OrderedDict)
    except ValueError as e:
        raise ParseError("malformed JSON: {}".format(e)) from e

    if not isinstance(source, dict):
        raise ParseError("theme must be a JSON object")

    theme = Theme(
        name=_string(source, "name", "theme"),
        author=_string(source, "author", "theme"),
        variables=parse_variables(_object(source, "variables")),
        globals=parse_globals(_object(source, "globals")),
        rules=parse_rules(source.get("rules")),
    )

    logger.debug(
        "parsed theme %r: %d variables, %d globals, %d rules",
        theme.name, len(theme.variables), len(theme.globals), len(theme.rules)
    )
    return theme
