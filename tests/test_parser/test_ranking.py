import pytest

from argfork.exceptions import AmbiguousCommandError
from argfork.parser.diagnostics import DiagnosticKind
from argfork.parser.ranking import finalize, rank_branches, top_ranked, unclaimed_tokens
from argfork.parser.results import Branch, FlagResult, Ok, no_command_callback


def branch(**flags):
    result = Branch()
    for name, (values, positions) in flags.items():
        result = result.bind(
            name, Ok(FlagResult(name, {"v": tuple(values)}, positions=tuple(positions)))
        )
    return result


def test_rank_by_flags_then_values():
    few_values = branch(a=([1], [0, 1]), b=([], [2]))
    many_values = branch(a=([1, 2, 3], [0, 1, 2, 3]))
    most = branch(a=([1, 2], [0, 1, 2]), b=([3], [3, 4]))
    assert rank_branches([many_values, few_values, most]) == [
        most,
        few_values,
        many_values,
    ]


def test_rank_is_stable():
    first = branch(a=([1], [0, 1]))
    second = branch(a=([2], [0, 2]))
    assert top_ranked([first, second]) == [first, second]
    assert top_ranked([]) == []


def test_unclaimed_tokens_in_order():
    tokens = ["--a", "1", "x", "y"]
    assert unclaimed_tokens(tokens, branch(a=([1], [0, 1]))) == ("x", "y")


def test_finalize_empty_pool():
    reason = ValueError("boom")
    outcome = finalize("run", no_command_callback, ["x"], [], reason)
    assert outcome.command.is_empty
    assert not outcome.ambiguous
    (diagnostic,) = outcome.diagnostics
    assert diagnostic.kind is DiagnosticKind.EMPTY_RESULT
    assert diagnostic.cause is reason


def test_finalize_tie_exposes_all_candidates():
    first = branch(a=(["1"], [0, 1]))
    second = branch(a=(["2"], [0, 2]))
    outcome = finalize("run", no_command_callback, ["--a", "1", "2"], [first, second])
    assert outcome.ambiguous
    assert len(outcome.candidates) == 2
    assert outcome.command is outcome.candidates[0]
    assert outcome.has(DiagnosticKind.AMBIGUOUS)
    assert outcome.has(DiagnosticKind.EXTRA_ARGUMENTS)
    with pytest.raises(AmbiguousCommandError) as excinfo:
        outcome.unambiguous()
    assert len(excinfo.value.candidates) == 2


def test_finalize_clean_winner():
    winner = branch(a=(["1"], [0, 1]))
    outcome = finalize(
        "run", lambda args: args["a"]["v"], ["--a", "1"], [winner]
    )
    assert outcome.clean
    assert outcome.unambiguous() is outcome.command
    assert outcome.execute() == ("1",)
    assert outcome.command.to_dict() == {"a": {"v": ["1"]}}
