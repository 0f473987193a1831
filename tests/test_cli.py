"""Tests for the command line interface."""

import json

import pytest

from cxxcodebuilder.cli import create_parser, main

TEMPLATE = """\
{% for field in fields %}
int {{ field }};
{% endfor %}
void reset(void) {
  {% for field in fields %}
  {{ field }} = 0;
  {% endfor %}
}
"""

EXPECTED = "int a;\nint b;\nvoid reset(void) {\n\ta = 0;\n\tb = 0;\n}\n"


@pytest.fixture
def template(tmp_path):
    path = tmp_path / "state.c.j2"
    path.write_text(TEMPLATE)
    return path


@pytest.fixture
def context(tmp_path):
    path = tmp_path / "ctx.json"
    path.write_text(json.dumps({"fields": ["a", "b"]}))
    return path


class TestMain:
    def test_prints_to_stdout(self, template, context, capsys) -> None:
        assert main([str(template), "--context", str(context)]) == 0
        assert capsys.readouterr().out == EXPECTED

    def test_writes_output_file(self, template, context, tmp_path, capsys) -> None:
        output = tmp_path / "out" / "state.c"
        assert main([str(template), "-c", str(context), "-o", str(output)]) == 0
        assert output.read_text() == EXPECTED
        assert "Wrote" in capsys.readouterr().out

        assert main([str(template), "-c", str(context), "-o", str(output)]) == 0
        assert "up to date" in capsys.readouterr().out

    def test_indent_option(self, template, context, capsys) -> None:
        assert main([str(template), "-c", str(context), "--indent", "4"]) == 0
        assert "\n    a = 0;\n" in capsys.readouterr().out

    def test_invalid_indent_option(self, template, context, capsys) -> None:
        assert main([str(template), "-c", str(context), "--indent", "wide"]) == 1
        assert "Invalid indentation unit" in capsys.readouterr().err

    def test_guard(self, template, context, capsys) -> None:
        assert main([str(template), "-c", str(context), "--guard", "STATE_H"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("#ifndef STATE_H\n#define STATE_H\n\nint a;\n")
        assert out.endswith("}\n\n#endif /* STATE_H */\n")

    def test_auto_guard(self, template, context, tmp_path) -> None:
        output = tmp_path / "my-state.h"
        assert main([str(template), "-c", str(context), "-o", str(output), "--auto-guard"]) == 0
        assert output.read_text().startswith("#ifndef MY_STATE_H\n")

    def test_auto_guard_requires_output(self, template, context, capsys) -> None:
        assert main([str(template), "-c", str(context), "--auto-guard"]) == 1
        assert "--auto-guard requires --output" in capsys.readouterr().err

    def test_config_file_with_header_comment(self, template, context, tmp_path, capsys) -> None:
        config = tmp_path / "config.json"
        config.write_text(
            json.dumps({"header_comment": "Generated file.\nDo not edit.", "use_tabs": False, "indent_size": 2})
        )
        assert main([str(template), "-c", str(context), "--config", str(config)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("/*\n * Generated file.\n * Do not edit.\n */\nint a;\n")
        assert "\n  a = 0;\n" in out

    def test_missing_template(self, tmp_path, capsys) -> None:
        assert main([str(tmp_path / "missing.j2")]) == 1
        assert "Template not found" in capsys.readouterr().err

    def test_missing_variable(self, template, capsys) -> None:
        assert main([str(template)]) == 1
        assert "Error" in capsys.readouterr().err

    def test_bad_context(self, template, tmp_path, capsys) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("[]")
        assert main([str(template), "-c", str(bad)]) == 1
        assert "JSON object" in capsys.readouterr().err

    def test_mistyped_config_value(self, template, context, tmp_path, capsys) -> None:
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"use_tabs": False, "indent_size": "4"}))
        assert main([str(template), "-c", str(context), "--config", str(config)]) == 1
        err = capsys.readouterr().err
        assert "indent_size" in err
        assert "Traceback" not in err


class TestParser:
    def test_guard_options_are_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            create_parser().parse_args(["t.j2", "--guard", "X", "--auto-guard"])
