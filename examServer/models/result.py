from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime


class Violation(BaseModel):
    type: str  # tab_switch, face_not_visible, multiple_faces
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    screenshot: Optional[str] = None


class SubmissionCreate(BaseModel):
    examId: str
    studentId: Optional[str] = None
    answers: Dict[str, Any] = {}  # {"0": "Paris", "1": ["A", "C"], "2": "print(input())"}
    timeTaken: float = Field(default=0, ge=0)  # seconds
    violations: List[Violation] = []
    verificationPhoto: Optional[str] = None


class ResultResponse(BaseModel):
    resultId: str
    examId: str
    studentId: Optional[str] = None
    examTitle: Optional[str] = None
    score: float
    totalPossibleScore: float
    totalQuestions: int
    status: str
    timeTaken: float = 0
    violations: List[Violation] = []
    verificationPhoto: Optional[str] = None
    answers: Dict[str, Any] = {}
    breakdown: List[float] = []
    verificationStatus: str = "Pending"
    submittedAt: datetime
