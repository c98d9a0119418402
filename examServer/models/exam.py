from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, List
from datetime import datetime


class QuestionType(str, Enum):
    MCQ = "MCQ"
    MSQ = "MSQ"
    CODING = "Coding"


class TestCase(BaseModel):
    input: str = ""
    output: str = ""
    isPublic: bool = True


class Question(BaseModel):
    questionText: str = ""
    type: QuestionType = QuestionType.MCQ
    options: List[str] = []
    weightage: int = Field(default=1, gt=0)
    correctAnswer: Optional[str] = None    # MCQ
    correctAnswers: List[str] = []         # MSQ
    testCases: List[TestCase] = []         # Coding


def _check_authored_answers(questions: List[Question]):
    """Reject answer keys that cannot match any selectable option."""
    for index, question in enumerate(questions):
        if not question.options:
            continue
        if question.type == QuestionType.MCQ and question.correctAnswer is not None:
            if question.correctAnswer not in question.options:
                raise ValueError(f"Question {index}: correctAnswer must be one of the options")
        elif question.type == QuestionType.MSQ:
            extra = set(question.correctAnswers) - set(question.options)
            if extra:
                raise ValueError(f"Question {index}: correctAnswers not in options: {sorted(extra)}")


class ExamCreate(BaseModel):
    title: str
    duration: int = Field(gt=0)  # minutes
    passingMarks: float = Field(default=0, ge=0)
    questions: List[Question] = Field(min_length=1)
    proctoringEnabled: bool = True
    createdBy: Optional[str] = None

    @model_validator(mode="after")
    def validate_answer_keys(self):
        _check_authored_answers(self.questions)
        return self


class ExamUpdate(BaseModel):
    title: Optional[str] = None
    duration: Optional[int] = Field(default=None, gt=0)
    passingMarks: Optional[float] = Field(default=None, ge=0)
    questions: Optional[List[Question]] = Field(default=None, min_length=1)
    proctoringEnabled: Optional[bool] = None

    @model_validator(mode="after")
    def validate_answer_keys(self):
        if self.questions is not None:
            _check_authored_answers(self.questions)
        return self


class ExamDefinition(BaseModel):
    """A stored exam as loaded for grading."""
    model_config = ConfigDict(extra="ignore")

    examId: str
    examKey: str = ""
    title: str = ""
    duration: int = 0
    passingMarks: Optional[float] = 0
    questions: List[Question] = []
    isActive: bool = True
    proctoringEnabled: bool = True
    createdBy: Optional[str] = None
    createdAt: Optional[datetime] = None


class VerifyKeyRequest(BaseModel):
    examKey: str
    studentId: Optional[str] = None
