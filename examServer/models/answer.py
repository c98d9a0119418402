"""Typed student answers.

A raw answer value is interpreted once per question, according to the
question's type. Anything that does not have the expected shape becomes
``None`` and is graded as unanswered.
"""
from dataclasses import dataclass
from typing import Any, FrozenSet, Optional, Union

from examServer.models.exam import QuestionType


@dataclass(frozen=True)
class McqAnswer:
    text: str


@dataclass(frozen=True)
class MsqAnswer:
    selections: FrozenSet[str]


@dataclass(frozen=True)
class CodeAnswer:
    source: str


Answer = Union[McqAnswer, MsqAnswer, CodeAnswer]


def parse_answer(question_type: QuestionType, raw: Any) -> Optional[Answer]:
    if question_type == QuestionType.MSQ:
        if isinstance(raw, (list, tuple, set, frozenset)) and all(isinstance(v, str) for v in raw):
            # A repeated selection never matches the correct set
            if len(set(raw)) != len(raw):
                return None
            return MsqAnswer(frozenset(raw))
        return None
    if not isinstance(raw, str):
        return None
    if question_type == QuestionType.CODING:
        return CodeAnswer(raw)
    return McqAnswer(raw)
