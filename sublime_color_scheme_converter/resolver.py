"""
Value resolution for sublime-color-scheme values.

Expands var() references and rewrites color(), rgb(), rgba(), hsl() and
hsla() notations into lowercase web hex (#rrggbb or #rrggbbaa). Anything
that can't be resolved is replaced with a visible placeholder token.
"""

import re
import logging
import colorsys

logger = logging.getLogger(__name__)

MAX_PASSES = 16

UNKNOWN_VAR = "[UNKNOWN-VAR:{}]"
BAD_COLOR = "[COLOR-VALUE]"

re_var = re.compile(r"var\(([^)]+)\)")
re_color = re.compile(r"color\((#[0-9a-fA-F]{3,8}) alpha\((\d+(?:\.\d*)?|\.\d+)\)\)")
re_rgb = re.compile(r"rgb\((\d+), *(\d+), *(\d+)\)")
re_rgba = re.compile(r"rgba\((\d+), *(\d+), *(\d+), *(\d+(?:\.\d*)?|\.\d+)\)")
re_hsl = re.compile(r"hsl\((\d+), *(\d+)%, *(\d+)%\)")
re_hsla = re.compile(r"hsla\((\d+), *(\d+)%, *(\d+)%, *(\d+(?:\.\d*)?|\.\d+)\)")
re_short_hex = re.compile(r"#[0-9a-fA-F]{3,4}")


def resolve(raw, theme):
    """
    Returns the final value for a raw theme value.

    Variables are looked up in theme.variables. Never raises.
    """
    data = raw

    if "var(" in data:
        data = replace_variables(data, theme.variables)

    if "color(" in data:
        data = _expand(re_color, data, _color_to_hex)

    if "rgb(" in data:
        data = _expand(re_rgb, data, _rgb_to_hex)

    if "rgba(" in data:
        data = _expand(re_rgba, data, _rgba_to_hex)

    if "hsl(" in data:
        data = _expand(re_hsl, data, _hsl_to_hex)

    if "hsla(" in data:
        data = _expand(re_hsla, data, _hsla_to_hex)

    if re_short_hex.fullmatch(data):
        data = "#" + "".join(c * 2 for c in data[1:].lower())

    return data


def replace_variables(data, variables):
    def lookup(match):
        name = match.group(1)
        if name in variables:
            return variables[name]
        logger.debug("unknown variable %r", name)
        return UNKNOWN_VAR.format(name)

    return _expand(re_var, data, lookup)


def _expand(pattern, data, convert):
    # Bounded: a self-referencing variable is cut off after MAX_PASSES
    for _ in range(MAX_PASSES):
        match = pattern.search(data)
        if not match:
            break
        replacement = convert(match)
        logger.debug("%s -> %s", match.group(0), replacement)
        data = data.replace(match.group(0), replacement)
    return data


def _clamp(value, low, high):
    return max(low, min(high, value))


def to_byte(fraction):
    return int(_clamp(fraction, 0.0, 1.0) * 255 + 0.5)


def alpha_to_hex(a):
    return "{:02x}".format(to_byte(a))


def rgb_to_hex(r, g, b, a=None):
    hexcode = "#{:02x}{:02x}{:02x}".format(
        _clamp(r, 0, 255), _clamp(g, 0, 255), _clamp(b, 0, 255)
    )
    if a is not None:
        hexcode += alpha_to_hex(a)
    return hexcode


def parse_hex(hexcode):
    """
    Parses #rgb, #rgba, #rrggbb or #rrggbbaa into a tuple of channel bytes.
    Returns None for anything else.
    """
    digits = hexcode[1:] if hexcode.startswith("#") else ""
    if len(digits) in (3, 4):
        digits = "".join(c * 2 for c in digits)
    if len(digits) not in (6, 8):
        return None
    try:
        return tuple(int(digits[i:i + 2], 16) for i in range(0, len(digits), 2))
    except ValueError:
        return None


def hsl_to_rgb(h, s, l):
    r, g, b = colorsys.hls_to_rgb(
        (h % 360) / 360,
        _clamp(l, 0, 100) / 100,
        _clamp(s, 0, 100) / 100,
    )
    return to_byte(r), to_byte(g), to_byte(b)


def _color_to_hex(match):
    channels = parse_hex(match.group(1))
    if channels is None:
        return BAD_COLOR
    r, g, b = channels[:3]
    return rgb_to_hex(r, g, b, float(match.group(2)))


def _rgb_to_hex(match):
    r, g, b = (int(v) for v in match.groups())
    return rgb_to_hex(r, g, b)


def _rgba_to_hex(match):
    r, g, b = (int(v) for v in match.groups()[:3])
    return rgb_to_hex(r, g, b, float(match.group(4)))


def _hsl_to_hex(match):
    h, s, l = (int(v) for v in match.groups())
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def _hsla_to_hex(match):
    h, s, l = (int(v) for v in match.groups()[:3])
    return rgb_to_hex(*hsl_to_rgb(h, s, l), a=float(match.group(4)))
