"""Tests for the command line front end."""

import json
import plistlib

import pytest

from sublime_color_scheme_converter import __version__
from sublime_color_scheme_converter.cli import main, output_name


@pytest.fixture
def scheme_file(tmp_path, scheme_source):
    path = tmp_path / "mariana.sublime-color-scheme"
    path.write_text(json.dumps(scheme_source), encoding="UTF-8")
    return path


class TestOutputName:
    def test_replaces_scheme_extension(self) -> None:
        assert output_name("themes/a.sublime-color-scheme") == "themes/a.tmTheme"

    def test_other_extension(self) -> None:
        assert output_name("themes/a.json") == "themes/a.tmTheme"


class TestMain:
    def test_converts_next_to_source(self, scheme_file, capsys) -> None:
        assert main([str(scheme_file), "--no-color"]) == 0

        target = scheme_file.with_name("mariana.tmTheme")
        plist = plistlib.loads(target.read_bytes())
        assert plist["name"] == "Mariana Lite"

        out = capsys.readouterr().out
        assert "Mariana Lite" in out
        assert "Jane Doe" in out
        assert "successfully converted" in out

    def test_output_option(self, scheme_file, tmp_path) -> None:
        target = tmp_path / "custom.tmTheme"
        assert main([str(scheme_file), "-o", str(target), "--no-color"]) == 0
        assert plistlib.loads(target.read_bytes())["colorSpaceName"] == "sRGB"

    def test_camel_case_option(self, scheme_file, tmp_path) -> None:
        target = tmp_path / "camel.tmTheme"
        assert main([str(scheme_file), "-o", str(target), "--camel-case"]) == 0
        settings = plistlib.loads(target.read_bytes())["settings"]
        assert "lineHighlight" in settings[0]["settings"]

    def test_missing_file(self, tmp_path, capsys) -> None:
        assert main([str(tmp_path / "nope.sublime-color-scheme"), "--no-color"]) == 1
        assert "Can't load theme" in capsys.readouterr().err

    def test_malformed_theme(self, tmp_path, capsys) -> None:
        path = tmp_path / "broken.sublime-color-scheme"
        path.write_text("{", encoding="UTF-8")

        assert main([str(path)]) == 1
        assert "Can't load theme" in capsys.readouterr().err
        assert not path.with_name("broken.tmTheme").exists()

    def test_unwritable_output(self, scheme_file, tmp_path, capsys) -> None:
        target = tmp_path / "missing-dir" / "out.tmTheme"
        assert main([str(scheme_file), "-o", str(target)]) == 1
        assert "Can't save theme" in capsys.readouterr().err

    def test_no_arguments_prints_usage(self, capsys) -> None:
        assert main([]) == 0
        assert "usage:" in capsys.readouterr().out

    def test_version(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out
