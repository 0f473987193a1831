"""Tests for the heuristic function declaration splitter."""

import pytest

from cxxcodebuilder.core.declarations import FunctionDeclaration, split_declaration
from cxxcodebuilder.core.errors import CodeBuilderError, MalformedDeclarationError


class TestSplitDeclaration:
    @pytest.mark.parametrize(
        "declaration, return_type, name, signature",
        [
            ("void hello(int a)", "void", "hello", "hello(int a)"),
            (
                "static int modifyLimit(int diff)",
                "static int",
                "modifyLimit",
                "modifyLimit(int diff)",
            ),
            ("void Foo::bar()", "void", "Foo::bar", "Foo::bar()"),
            ("void Foo::bar() const", "void", "Foo::bar", "Foo::bar() const"),
            ("Foo::~Foo()", "", "Foo::~Foo", "Foo::~Foo()"),
            ("const char *name (void)", "const char *", "name", "name(void)"),
            ("int\nmain(int argc,\n     char **argv)", "int", "main", "main(int argc,\n     char **argv)"),
            ("bool operator()(int x)", "bool", "operator", "operator()(int x)"),
        ],
    )
    def test_split(self, declaration, return_type, name, signature) -> None:
        assert split_declaration(declaration) == FunctionDeclaration(
            return_type=return_type, name=name, signature=signature
        )

    @pytest.mark.parametrize("declaration", ["int x", "", "(void)", "x = 1;"])
    def test_malformed(self, declaration) -> None:
        with pytest.raises(MalformedDeclarationError) as exc_info:
            split_declaration(declaration)
        assert exc_info.value.declaration == declaration

    def test_malformed_error_hierarchy(self) -> None:
        err = MalformedDeclarationError("int x")
        assert isinstance(err, CodeBuilderError)
        assert isinstance(err, ValueError)
        assert "int x" in str(err)
