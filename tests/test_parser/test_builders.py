import pytest

from argfork.exceptions import (
    ArityFormatError,
    EmptyNameError,
    GrammarError,
    ReservedNameError,
)
from argfork.parser import ArgBuilder, ArgumentSpec, CmdBuilder, FlagBuilder, FlagSpec
from argfork.parser.builders import check_reserved_name


def test_arg_builder_builds_in_order():
    arguments = ArgBuilder().add("first").add("rest 0-").build()
    assert [argument.name for argument in arguments] == ["first", "rest"]


def test_arg_builder_last_declaration_wins_first_slot():
    arguments = ArgBuilder().add("a").add("b").add("a 2").build()
    assert [argument.name for argument in arguments] == ["a", "b"]
    assert arguments[0].arity.min == 2


def test_arg_builder_reports_position():
    with pytest.raises(ArityFormatError) as excinfo:
        ArgBuilder().add("ok").add("bad 5-1").build()
    assert excinfo.value.position == 2
    assert excinfo.value.kind == "argument"
    assert str(excinfo.value).startswith("argument #2:")


def test_build_does_not_reset():
    builder = ArgBuilder().add("a")
    assert builder.build() == builder.build()
    assert len(builder) == 1
    builder.reset()
    assert len(builder) == 0
    assert builder.build() == ()


def test_flag_builder_nested_error_positions():
    flags = (
        FlagBuilder()
        .add("--ok")
        .add("--bad", arguments=ArgBuilder().add("a").add("b x-y"))
    )
    with pytest.raises(ArityFormatError) as excinfo:
        flags.build()
    assert excinfo.value.kind == "flag"
    assert excinfo.value.position == 2
    assert str(excinfo.value).startswith("flag #2: argument #2:")


def test_flag_builder_accepts_mixed_argument_list():
    spec = ArgumentSpec.from_declaration("second 0-1")
    (flag,) = FlagBuilder().add("--f", arguments=["first", spec]).build()
    assert [argument.name for argument in flag.arguments] == ["first", "second"]


def test_flag_builder_options():
    (flag,) = (
        FlagBuilder()
        .add("--out", required=True, description="Where.\nReally.", arguments=["path"])
        .build()
    )
    assert flag.required
    assert flag.description == ("Where.", "Really.")


def test_flag_builder_empty_name():
    with pytest.raises(EmptyNameError) as excinfo:
        FlagBuilder().add("").build()
    assert excinfo.value.position == 1


def test_reserved_help_flag():
    with pytest.raises(ReservedNameError):
        FlagBuilder().add("help").build()


def test_reserved_help_command():
    with pytest.raises(ReservedNameError) as excinfo:
        CmdBuilder().add("run").add("help").build()
    assert excinfo.value.kind == "command"
    assert excinfo.value.position == 2


def test_reserved_help_flag_in_spec_list():
    with pytest.raises(ReservedNameError):
        CmdBuilder().add("run", flags=[FlagSpec("help")]).build()


def test_check_reserved_name():
    check_reserved_name("--help", "flag")
    with pytest.raises(GrammarError):
        check_reserved_name("help", "flag")


def test_cmd_builder_dedup_and_nesting():
    commands = (
        CmdBuilder()
        .add("a", description="first")
        .add("b", flags=FlagBuilder().add("--x").add("--y").add("--x", required=True))
        .add("a", description="second")
        .build()
    )
    assert [command.name for command in commands] == ["a", "b"]
    assert commands[0].description == ("second",)
    assert [flag.name for flag in commands[1].flags] == ["--x", "--y"]
    assert commands[1].get_flag("--x").required
