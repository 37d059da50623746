import pytest

from argfork.exceptions import (
    BranchLimitExceededError,
    MissingRequiredFlagError,
    NotEnoughArgumentsError,
)
from argfork.parser.argument import ArgumentSpec
from argfork.parser.flag import FlagSpec
from argfork.parser.locator import locate_flags
from argfork.parser.results import Branch, Err, FlagResult, Ok
from argfork.parser.search import BranchSearch, merge_outcomes


def ok(value):
    return Ok(FlagResult("--x", {"v": (value,)}))


def err(message):
    return Err(ValueError(message))


def values(branch):
    outcome = branch.get("--x")
    if isinstance(outcome, Ok):
        return outcome.result.values["v"]
    return str(outcome.reason)


def test_merge_unbound_flag_forks_per_candidate():
    merged = merge_outcomes(Branch(), "--x", [ok(1), ok(2)])
    assert [values(branch) for branch in merged] == [(1,), (2,)]


def test_merge_ok_ok_keeps_and_forks():
    branch = Branch().bind("--x", ok(1))
    merged = merge_outcomes(branch, "--x", [ok(2), ok(3)])
    assert [values(b) for b in merged] == [(1,), (2,), (3,)]
    assert merged[0] is branch


def test_merge_err_err_keeps_latest():
    branch = Branch().bind("--x", err("old"))
    merged = merge_outcomes(branch, "--x", [err("new")])
    assert [values(b) for b in merged] == ["new"]


def test_merge_err_ok_takes_success():
    branch = Branch().bind("--x", err("old"))
    merged = merge_outcomes(branch, "--x", [ok(1), ok(2)])
    assert [values(b) for b in merged] == [(1,), (2,)]


def test_merge_ok_err_keeps_branch():
    branch = Branch().bind("--x", ok(1))
    assert merge_outcomes(branch, "--x", [err("late")]) == [branch]


def test_branch_bind_does_not_alias():
    base = Branch().bind("--a", ok(1))
    left = base.bind("--x", ok(2))
    right = base.bind("--x", ok(3))
    assert base.get("--x") is None
    assert values(left) == (2,)
    assert values(right) == (3,)
    with pytest.raises(TypeError):
        base.bindings["--x"] = ok(4)


def run(flags, tokens, max_branches=4096):
    occurrences = locate_flags(tokens, flags)
    return BranchSearch(flags, tokens, occurrences, max_branches).run()


def test_search_failed_flag_leaves_tokens_to_the_left():
    flag = FlagSpec("--x", arguments=(ArgumentSpec.from_declaration("v"),))
    result = run((flag,), ["--x", "1", "--x"])
    assert len(result.branches) == 1
    (branch,) = result.branches
    assert branch.results["--x"].values["v"] == ("1",)
    assert branch.consumed == frozenset({0, 1})


def test_search_prunes_failures_and_reports_reason():
    flag = FlagSpec("--x", arguments=(ArgumentSpec.from_declaration("v 2"),))
    result = run((flag,), ["--x", "1"])
    assert result.branches == []
    assert isinstance(result.reason, NotEnoughArgumentsError)
    assert result.explored == 1


def test_search_prunes_missing_required():
    required = FlagSpec("--r", required=True)
    other = FlagSpec("--o")
    search = BranchSearch((required, other), ["--o"], locate_flags(["--o"], (other,)), 10)
    result = search.run()
    assert result.branches == []
    assert isinstance(result.reason, MissingRequiredFlagError)


def test_search_branch_limit():
    flags = tuple(
        FlagSpec(name, arguments=(ArgumentSpec.from_declaration("v -"),))
        for name in ("--a", "--b", "--c")
    )
    tokens = ["--a", "1", "2", "--b", "3", "4", "--c", "5", "6"]
    assert len(run(flags, tokens).branches) == 27
    with pytest.raises(BranchLimitExceededError) as excinfo:
        run(flags, tokens, max_branches=10)
    assert excinfo.value.limit == 10


def test_search_without_occurrences():
    result = run((FlagSpec("--a"),), ["x", "y"])
    assert result.branches == []
    assert result.reason is None
