"""Tests for the Jinja2 template engine wrapper."""

import pytest

from cxxcodebuilder.core.templates import (
    TemplateEngine,
    TemplateError,
    create_template_engine,
    macro_case,
    pascal_case,
    snake_case,
)


class TestFilters:
    @pytest.mark.parametrize(
        "value, expected",
        [("userName", "user_name"), ("user-name", "user_name"), ("User Name", "user_name")],
    )
    def test_snake_case(self, value, expected) -> None:
        assert snake_case(value) == expected

    def test_pascal_case(self) -> None:
        assert pascal_case("sg_begin_pass") == "SgBeginPass"

    @pytest.mark.parametrize(
        "value, expected",
        [("my-header.h", "MY_HEADER_H"), ("MyHeader.h", "MY_HEADER_H"), ("config.hpp", "CONFIG_HPP")],
    )
    def test_macro_case(self, value, expected) -> None:
        assert macro_case(value) == expected


class TestTemplateEngine:
    def test_render_string(self) -> None:
        engine = TemplateEngine()
        assert engine.render_string("#define {{ n | macro_case }} 1", {"n": "debugMode"}) == (
            "#define DEBUG_MODE 1"
        )

    def test_c_string_filter(self) -> None:
        engine = TemplateEngine()
        assert engine.render_string("{{ s | c_string }}", {"s": "a\tb"}) == '"a\\tb"'

    def test_no_html_escaping(self) -> None:
        engine = TemplateEngine()
        assert engine.render_string("{{ e }}", {"e": "a < b && c"}) == "a < b && c"

    def test_in_memory_templates(self) -> None:
        engine = create_template_engine()
        engine.add_template("decl", "int {{ name }};")
        assert engine.template_exists("decl")
        assert not engine.template_exists("other")
        assert engine.render_template("decl", {"name": "x"}) == "int x;"

    def test_directory_templates(self, tmp_path) -> None:
        (tmp_path / "a.h.j2").write_text("struct {{ name }};")
        engine = TemplateEngine(tmp_path)
        assert engine.template_exists("a.h.j2")
        assert engine.render_template("a.h.j2", {"name": "Foo"}) == "struct Foo;"

    def test_in_memory_templates_keep_directory_templates(self, tmp_path) -> None:
        (tmp_path / "base.j2").write_text("int {{ name }};")
        engine = TemplateEngine(tmp_path)
        engine.add_template("extra", "y")
        assert engine.template_exists("base.j2")
        assert engine.template_exists("extra")
        assert engine.render_template("base.j2", {"name": "x"}) == "int x;"
        assert engine.render_template("extra", {}) == "y"

    def test_in_memory_template_shadows_file(self, tmp_path) -> None:
        (tmp_path / "t.j2").write_text("from file")
        engine = TemplateEngine(tmp_path)
        assert engine.render_template("t.j2", {}) == "from file"
        engine.add_template("t.j2", "from memory")
        assert engine.render_template("t.j2", {}) == "from memory"

    def test_missing_directory_falls_back_to_memory(self, tmp_path) -> None:
        engine = TemplateEngine(tmp_path / "missing")
        engine.add_template("t", "ok")
        assert engine.render_template("t", {}) == "ok"

    def test_missing_template(self) -> None:
        with pytest.raises(TemplateError, match="nope"):
            TemplateEngine().render_template("nope", {})

    def test_undefined_variable(self) -> None:
        with pytest.raises(TemplateError):
            TemplateEngine().render_string("{{ missing }}", {})

    def test_syntax_error(self) -> None:
        with pytest.raises(TemplateError):
            TemplateEngine().render_string("{% for %}", {})
