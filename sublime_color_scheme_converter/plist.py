"""
tmTheme (XML property list) writer.
"""

import io
import re
import uuid

HEADER = """\
<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple Computer//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">

<!--
  This theme converted from sublime-color-scheme by sublime-color-scheme-converter
-->

<plist version="1.0">
  <dict>"""

FOOTER = """\
  </dict>
</plist>"""

# "&" goes first, the other entities contain it
ESCAPES = (
    ("&", "&amp;"),
    ("'", "&apos;"),
    ("\"", "&quot;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)

# Control characters XML 1.0 doesn't allow, even as references
re_illegal = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def escape(data):
    data = re_illegal.sub("", data)
    for char, entity in ESCAPES:
        data = data.replace(char, entity)
    return data


def convert_name(string):
    return re.sub(
        "_([a-zA-Z0-9])",
        lambda match: match.group(1).upper(),
        string
    )


def serialize(theme, uuid_factory=uuid.uuid4, camel_case=False):
    """
    Renders theme as tmTheme XML and returns UTF-8 bytes.

    Every color and style value is resolved on the way out. uuid_factory
    supplies the theme uuid, camel_case rewrites snake_case global keys.
    """
    buf = io.StringIO()

    print(HEADER, file=buf)
    write_basic_info(buf, theme, uuid_factory)
    write_body(buf, theme, camel_case)
    print(FOOTER, file=buf)

    return buf.getvalue().encode("UTF-8", "replace")


def write_basic_info(buf, theme, uuid_factory):
    write_node(buf, 2, "name", theme.name)

    if theme.author:
        write_node(buf, 2, "author", theme.author)

    write_node(buf, 2, "colorSpaceName", "sRGB")
    write_node(buf, 2, "uuid", str(uuid_factory()))


def write_body(buf, theme, camel_case):
    write_line(buf, 2, "<key>settings</key>")
    write_line(buf, 2, "<array>")
    write_line(buf, 3, "<dict>")
    write_line(buf, 4, "<key>settings</key>")
    write_line(buf, 4, "<dict>")

    for key in theme.globals:
        name = convert_name(key) if camel_case else key
        write_node(buf, 5, name, theme.get_global(key))

    write_line(buf, 4, "</dict>")
    write_line(buf, 3, "</dict>")

    for rule in theme.rules:
        write_rule(buf, rule, theme)

    write_line(buf, 2, "</array>")


def write_rule(buf, rule, theme):
    write_line(buf, 3, "<dict>")

    if rule.name:
        write_node(buf, 4, "name", rule.name)

    if rule.scope:
        write_node(buf, 4, "scope", rule.scope)

    write_line(buf, 4, "<key>settings</key>")
    write_line(buf, 4, "<dict>")

    for key, value in rule.settings(theme):
        write_node(buf, 5, key, value)

    write_line(buf, 4, "</dict>")
    write_line(buf, 3, "</dict>")


def write_node(buf, indent, key, value):
    write_line(buf, indent, "<key>{}</key>".format(escape(key)))
    write_line(buf, indent, "<string>{}</string>".format(escape(value)))


def write_line(buf, indent, line):
    print("  " * indent + line, file=buf)
