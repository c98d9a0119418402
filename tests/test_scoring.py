import sys

import pytest

from examServer.models.exam import Question
from examServer.models.runner import RunResult
from examServer.services.code_runner import PythonSubprocessRunner
from examServer.services.scoring import score_exam, pass_fail_status

from conftest import ScriptedRunner


def mcq(correct="Paris", weightage=1):
    return Question(questionText="Capital of France?", type="MCQ",
                    options=["Paris", "Rome", "Berlin"], correctAnswer=correct, weightage=weightage)


def msq(correct=("A", "C"), weightage=2):
    return Question(questionText="Pick vowels", type="MSQ",
                    options=["A", "B", "C", "D"], correctAnswers=list(correct), weightage=weightage)


def coding(inputs, weightage=5):
    cases = [{"input": i, "output": i, "isPublic": n == 0} for n, i in enumerate(inputs)]
    return Question(questionText="Echo", type="Coding", weightage=weightage, testCases=cases)


async def test_mcq_correct_answer_earns_full_weight(runner):
    summary = await score_exam([mcq()], {"0": "Paris"}, runner)
    assert summary.score == 1
    assert summary.totalPossibleScore == 1
    assert pass_fail_status(summary.score, 1) == "Pass"


async def test_mcq_comparison_is_strict(runner):
    summary = await score_exam([mcq()], {"0": "paris "}, runner)
    assert summary.score == 0


async def test_msq_partial_selection_forfeits_weight(runner):
    summary = await score_exam([msq()], {"0": ["A"]}, runner)
    assert summary.score == 0
    assert summary.totalPossibleScore == 2


async def test_msq_extra_selection_forfeits_weight(runner):
    summary = await score_exam([msq()], {"0": ["A", "B", "C"]}, runner)
    assert summary.score == 0


async def test_msq_repeated_selection_forfeits_weight(runner):
    summary = await score_exam([msq()], {"0": ["A", "A", "C"]}, runner)
    assert summary.score == 0
    assert summary.totalPossibleScore == 2


async def test_msq_exact_set_in_any_order(runner):
    summary = await score_exam([msq()], {"0": ["C", "A"]}, runner)
    assert summary.score == 2


async def test_coding_partial_credit():
    runner = ScriptedRunner({"3": RunResult(success=True, output="wrong")})
    summary = await score_exam([coding(["1", "2", "3", "4"])], {"0": "print(input())"}, runner)
    assert summary.score == 3.75
    assert summary.totalPossibleScore == 5
    assert len(runner.calls) == 4


async def test_coding_timeout_counts_as_failed_case():
    runner = ScriptedRunner({"slow": RunResult(success=False, output="Time Limit Exceeded (3s)")})
    summary = await score_exam([coding(["fast", "slow"], weightage=4)], {"0": "code"}, runner)
    assert summary.score == 2


async def test_coding_output_is_trimmed_at_both_ends_only():
    runner = ScriptedRunner({
        "a": RunResult(success=True, output="  hello world\n"),
        "b": RunResult(success=True, output="hello  world"),
    })
    question = Question(type="Coding", weightage=2, testCases=[
        {"input": "a", "output": "hello world"},
        {"input": "b", "output": "hello world"},
    ])
    summary = await score_exam([question], {"0": "code"}, runner)
    assert summary.score == 1


async def test_failed_run_with_matching_output_does_not_pass():
    runner = ScriptedRunner({"x": RunResult(success=False, output="x")})
    summary = await score_exam([coding(["x"])], {"0": "code"}, runner)
    assert summary.score == 0


async def test_coding_without_test_cases_keeps_weight_in_total(runner):
    # Known anomaly: the weight can never be earned
    question = Question(type="Coding", weightage=3, testCases=[])
    summary = await score_exam([question, mcq()], {"0": "print(1)", "1": "Paris"}, runner)
    assert summary.score == 1
    assert summary.totalPossibleScore == 4
    assert runner.calls == []


async def test_missing_and_malformed_answers_are_incorrect(runner):
    questions = [mcq(), msq(), coding(["1"])]
    summary = await score_exam(questions, {"0": ["Paris"], "1": "A"}, runner)
    assert summary.score == 0
    assert summary.totalPossibleScore == 8
    assert runner.calls == []


async def test_integer_answer_keys_are_accepted(runner):
    summary = await score_exam([mcq(), msq()], {0: "Paris", 1: ["A", "C"]}, runner)
    assert summary.score == 3


async def test_mixed_exam_breakdown_follows_question_order():
    runner = ScriptedRunner({"2": RunResult(success=False, output="Execution Error")})
    questions = [mcq(weightage=2), msq(), coding(["1", "2"], weightage=3)]
    answers = {"0": "Paris", "1": ["A", "C"], "2": "print(input())"}
    summary = await score_exam(questions, answers, runner)
    assert summary.breakdown == [2.0, 2.0, 1.5]
    assert summary.score == 5.5
    assert summary.totalPossibleScore == 7


async def test_thirds_accumulate_exactly():
    runner = ScriptedRunner({"3": RunResult(success=False, output="")})
    questions = [coding(["1", "2", "3"], weightage=1) for _ in range(3)]
    summary = await score_exam(questions, {"0": "c", "1": "c", "2": "c"}, runner)
    assert summary.score == 2.0


@pytest.mark.parametrize("score, passing_marks, expected", [
    (10, 10, "Pass"),
    (9.99, 10, "Fail"),
    (0, 0, "Pass"),
    (0, None, "Pass"),
])
def test_pass_fail_status(score, passing_marks, expected):
    assert pass_fail_status(score, passing_marks) == expected


async def test_source_that_cannot_be_launched_fails_its_cases():
    runner = PythonSubprocessRunner(sys.executable, timeout=3)
    questions = [coding(["1"], weightage=2), coding(["1"], weightage=2), mcq()]
    answers = {"0": "print(input())\x00", "1": "print('\ud800')", "2": "Paris"}

    summary = await score_exam(questions, answers, runner)

    assert summary.breakdown == [0.0, 0.0, 1.0]
    assert summary.totalPossibleScore == 5
