"""End-to-end behaviour of `CommandSpec.parse`."""
import pytest

from argfork.exceptions import (
    AmbiguousCommandError,
    BranchLimitExceededError,
    MissingRequiredFlagError,
)
from argfork.options import ResolverConfig
from argfork.parser import (
    ArgBuilder,
    ArgumentSpec,
    CommandSpec,
    DiagnosticKind,
    FlagBuilder,
    FlagSpec,
    per_token,
)


def int_flag(name, arity="", required=False):
    return FlagSpec(
        name,
        required=required,
        arguments=(ArgumentSpec.from_declaration(f"n {arity}", per_token(int)),),
    )


def test_missing_required_flag_fails_before_matching():
    calls = []

    def recording(tokens):
        calls.append(tokens)
        return tokens

    command = CommandSpec(
        "run",
        flags=(
            FlagSpec("--r", required=True),
            FlagSpec("--o", arguments=(ArgumentSpec("x", parse=recording),)),
        ),
    )
    with pytest.raises(MissingRequiredFlagError):
        command.parse(["--o", "a", "b"])
    assert calls == []


def test_arity_window_counts():
    attempted = []

    def recording(tokens):
        attempted.append(len(tokens))
        return tokens

    flag = FlagSpec("--f", arguments=(ArgumentSpec.from_declaration("x 2-5", recording),))
    CommandSpec("run", flags=(flag,)).parse(["--f", "a", "b", "c", "d", "e", "f", "g"])
    assert set(attempted) == {2, 3, 4, 5}


def test_parse_is_deterministic():
    command = CommandSpec("run", flags=(int_flag("--a", "0-2"), int_flag("--b", "-")))
    tokens = ["--a", "1", "2", "--b", "3", "4", "--a", "5"]
    first = command.parse(tokens)
    second = command.parse(tokens)
    assert first == second
    assert first.command.to_dict() == second.command.to_dict()


def test_exact_arity_is_unambiguous():
    command = CommandSpec("run", flags=(int_flag("--v", required=True),))
    outcome = command.parse(["--v", "5"])
    assert outcome.command.to_dict() == {"--v": {"n": [5]}}
    assert not outcome.ambiguous
    assert outcome.clean


def test_variadic_prefers_most_values():
    command = CommandSpec("run", flags=(int_flag("--s", "1-3"),))
    outcome = command.parse(["--s", "1", "2", "3"])
    assert outcome.command.to_dict() == {"--s": {"n": [1, 2, 3]}}
    assert not outcome.ambiguous
    assert outcome.clean


def test_unclaimed_tokens_are_reported():
    command = CommandSpec("run", flags=(int_flag("--v"),))
    outcome = command.parse(["--v", "5", "--a", "B"])
    assert outcome.command.to_dict() == {"--v": {"n": [5]}}
    (diagnostic,) = outcome.diagnostics
    assert diagnostic.kind is DiagnosticKind.EXTRA_ARGUMENTS
    assert diagnostic.tokens == ("--a", "B")


def test_empty_input_degrades_to_empty_result():
    command = CommandSpec("run", flags=(int_flag("--v"),))
    outcome = command.parse([])
    assert outcome.command.is_empty
    assert outcome.has(DiagnosticKind.EMPTY_RESULT)
    assert outcome.execute() is None


def test_failed_parse_degrades_to_empty_result():
    command = CommandSpec("run", flags=(int_flag("--v", required=True),))
    outcome = command.parse(["--v", "five"])
    assert outcome.command.is_empty
    (diagnostic,) = outcome.diagnostics
    assert diagnostic.kind is DiagnosticKind.EMPTY_RESULT
    assert diagnostic.cause is not None


def test_repeated_flag_is_ambiguous():
    command = CommandSpec("run", flags=(int_flag("--x"),))
    outcome = command.parse(["--x", "1", "--x", "2"])
    assert outcome.ambiguous
    assert [candidate.to_dict() for candidate in outcome.candidates] == [
        {"--x": {"n": [2]}},
        {"--x": {"n": [1]}},
    ]
    with pytest.raises(AmbiguousCommandError):
        command.parse(["--x", "1", "--x", "2"], ResolverConfig(strict=True))


def test_failing_flag_empties_result():
    command = CommandSpec("run", flags=(int_flag("--a", "1-"), int_flag("--b")))
    outcome = command.parse(["--a", "1", "--b", "x"])
    assert outcome.command.is_empty


def test_failing_repeat_yields_tokens_to_earlier_occurrence():
    command = CommandSpec("run", flags=(int_flag("--a", "1-"),))
    outcome = command.parse(["--a", "1", "2", "--a"])
    assert outcome.command.to_dict() == {"--a": {"n": [1, 2]}}
    assert outcome.diagnostics[0].tokens == ("--a",)


def test_callback_receives_bound_arguments():
    flags = (
        FlagBuilder()
        .add("--n", required=True, arguments=ArgBuilder().add("values 1-", per_token(int)))
        .build()
    )
    command = CommandSpec(
        "sum", flags=flags, callback=lambda args: sum(args["--n"]["values"])
    )
    assert command.parse(["--n", "1", "2", "3"]).execute() == 6


def test_flags_interleave():
    command = CommandSpec(
        "copy",
        flags=(
            FlagSpec("--src", True, (ArgumentSpec.from_declaration("paths 1-"),)),
            FlagSpec("--dst", True, (ArgumentSpec.from_declaration("path"),)),
            FlagSpec("--force"),
        ),
    )
    outcome = command.parse(["--src", "a", "b", "--force", "--dst", "c"])
    assert outcome.command.to_dict() == {
        "--dst": {"path": ["c"]},
        "--force": {},
        "--src": {"paths": ["a", "b"]},
    }
    assert outcome.clean


def test_usage():
    command = CommandSpec("run", flags=(int_flag("--v", required=True), int_flag("--o", "-")))
    assert command.usage() == "run --v <n> [--o (n:-)]"


def test_branch_ceiling_on_parse():
    command = CommandSpec(
        "run", flags=tuple(int_flag(name, "-") for name in ("--a", "--b", "--c"))
    )
    tokens = ["--a", "1", "2", "--b", "3", "4", "--c", "5", "6"]
    assert not command.parse(tokens).command.is_empty
    with pytest.raises(BranchLimitExceededError) as excinfo:
        command.parse(tokens, ResolverConfig(max_branches=10))
    assert excinfo.value.limit == 10


def test_required_flags():
    command = CommandSpec(
        "run", flags=(int_flag("--a"), int_flag("--b", required=True), int_flag("--c"))
    )
    assert [flag.name for flag in command.required_flags] == ["--b"]
    assert command.get_flag("--c").name == "--c"
    assert command.get_flag("--z") is None
