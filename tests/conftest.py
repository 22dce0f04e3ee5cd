"""Shared pytest fixtures for converter tests."""

import json
import uuid

import pytest

from sublime_color_scheme_converter import parse

FIXED_UUID = uuid.UUID("12345678-1234-5678-1234-567812345678")


@pytest.fixture
def fixed_uuid():
    return lambda: FIXED_UUID


@pytest.fixture
def scheme_source():
    return {
        "name": "Mariana Lite",
        "author": "Jane Doe",
        "variables": {
            "blue": "hsl(210, 50%, 60%)",
            "black": "#000",
            "red": "rgb(236, 95, 102)",
            "accent": "var(red)",
        },
        "globals": {
            "foreground": "var(black)",
            "background": "#fff",
            "caret": "var(accent)",
            "line_highlight": "color(var(black) alpha(0.1))",
            "selection": "rgba(255, 255, 255, 0.5)",
        },
        "rules": [
            {
                "name": "Comment",
                "scope": "comment, punctuation.definition.comment",
                "foreground": "color(#ffffff alpha(0.5))",
                "font_style": "italic",
            },
            {
                "scope": "keyword",
                "foreground": "var(accent)",
                "background": "hsla(0, 100%, 50%, 0.25)",
                "selection_foreground": "#abc",
            },
        ],
    }


@pytest.fixture
def scheme(scheme_source):
    return parse(json.dumps(scheme_source).encode("UTF-8"))
