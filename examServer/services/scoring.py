"""Grading of a submitted answer set against an exam's questions.

Each question adds its weight to the total possible score. Credit is:

* MCQ: full weight when the answer is exactly the correct option text.
* MSQ: full weight when the selected set equals the correct set, else nothing.
* Coding: ``passed / total * weight`` over all test cases, public and hidden.

A Coding question without test cases still counts towards the total but can
never be earned. Missing or malformed answers score zero.
"""

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Dict, List, Optional, Sequence

from examServer.models.answer import CodeAnswer, McqAnswer, MsqAnswer, parse_answer
from examServer.models.exam import Question, QuestionType
from examServer.services.code_runner import CodeRunner

logger = logging.getLogger(__name__)

PASS = "Pass"
FAIL = "Fail"


@dataclass
class ScoreSummary:
    score: float
    totalPossibleScore: float
    breakdown: List[float] = field(default_factory=list)


def pass_fail_status(score: float, passing_marks: Optional[float]) -> str:
    return PASS if score >= (passing_marks or 0) else FAIL


def _lookup(answers: Dict[Any, Any], index: int) -> Any:
    # Answers arrive from JSON with string keys, but accept int keys too
    if str(index) in answers:
        return answers[str(index)]
    return answers.get(index)


async def _score_coding(question: Question, answer: Optional[CodeAnswer], runner: CodeRunner, index: int) -> Fraction:
    cases = question.testCases
    if not cases:
        logger.warning(f"Question {index} is a Coding question without test cases; its weight cannot be earned")
        return Fraction(0)
    if answer is None:
        return Fraction(0)

    passed = 0
    for case in cases:
        result = await runner.run(answer.source, case.input)
        if result.success and result.output.strip() == case.output.strip():
            passed += 1
    logger.debug(f"Question {index}: {passed}/{len(cases)} test cases passed")
    return Fraction(passed, len(cases)) * question.weightage


async def score_exam(questions: Sequence[Question], answers: Dict[Any, Any], runner: CodeRunner) -> ScoreSummary:
    """Grade questions in order, running Coding test cases one at a time."""
    answers = answers or {}
    score = Fraction(0)
    total = 0
    breakdown = []

    for index, question in enumerate(questions):
        weight = question.weightage
        total += weight
        answer = parse_answer(question.type, _lookup(answers, index))

        if question.type == QuestionType.MSQ:
            correct = isinstance(answer, MsqAnswer) and answer.selections == frozenset(question.correctAnswers)
            earned = Fraction(weight) if correct else Fraction(0)
        elif question.type == QuestionType.CODING:
            earned = await _score_coding(question, answer, runner, index)
        else:
            correct = isinstance(answer, McqAnswer) and answer.text == question.correctAnswer
            earned = Fraction(weight) if correct else Fraction(0)

        score += earned
        breakdown.append(float(earned))

    return ScoreSummary(score=float(score), totalPossibleScore=float(total), breakdown=breakdown)
