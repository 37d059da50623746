import pytest

from argfork.exceptions import ArityFormatError, EmptyNameError
from argfork.parser.argument import ArgumentSpec, no_argument_parser, per_token
from argfork.parser.arity import Arity


def test_declaration_without_arity_takes_one_token():
    spec = ArgumentSpec.from_declaration("path")
    assert spec.name == "path"
    assert spec.arity == Arity(1, 1)
    assert spec.parse is no_argument_parser


def test_declaration_with_arity():
    spec = ArgumentSpec.from_declaration("files 1-", per_token(int))
    assert spec.arity == Arity(1, None)
    assert spec.parse(("1", "2")) == (1, 2)


def test_declaration_with_too_many_fields():
    with pytest.raises(ArityFormatError):
        ArgumentSpec.from_declaration("a 1 2")


@pytest.mark.parametrize("declaration", ["", "   "])
def test_blank_declaration(declaration):
    with pytest.raises(EmptyNameError):
        ArgumentSpec.from_declaration(declaration)


def test_empty_name():
    with pytest.raises(EmptyNameError):
        ArgumentSpec("")


def test_per_token_fails_on_first_bad_token():
    parse = per_token(int)
    with pytest.raises(ValueError):
        parse(("1", "x", "3"))
    assert parse(()) == ()
    assert "int" in parse.__name__


@pytest.mark.parametrize(
    "declaration, usage",
    [
        ("x", "<x>"),
        ("x 0-1", "[x:-1]"),
        ("x 2-3", "<x:2-3>"),
        ("x 1-", "{x:1-}"),
        ("x -", "(x:-)"),
    ],
)
def test_usage(declaration, usage):
    assert ArgumentSpec.from_declaration(declaration).usage() == usage
