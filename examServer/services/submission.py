import logging
import uuid
from datetime import datetime

from examServer.models.exam import ExamDefinition
from examServer.models.result import SubmissionCreate
from examServer.services.code_runner import CodeRunner
from examServer.services.scoring import pass_fail_status, score_exam

logger = logging.getLogger(__name__)


class ExamNotFoundError(Exception):
    def __init__(self, exam_id: str):
        super().__init__(f"Exam {exam_id} not found")
        self.exam_id = exam_id


async def submit_exam(db, submission: SubmissionCreate, runner: CodeRunner) -> dict:
    """Grade a submission and persist exactly one result document for it."""
    exam_doc = await db.exams.find_one({"examId": submission.examId})
    if not exam_doc:
        raise ExamNotFoundError(submission.examId)

    exam = ExamDefinition.model_validate(exam_doc)
    summary = await score_exam(exam.questions, submission.answers, runner)
    status = pass_fail_status(summary.score, exam.passingMarks)

    result_data = {
        "resultId": str(uuid.uuid4()),
        "examId": exam.examId,
        "studentId": submission.studentId,
        "examTitle": exam.title,
        "score": summary.score,
        "totalPossibleScore": summary.totalPossibleScore,
        "totalQuestions": len(exam.questions),
        "status": status,
        "timeTaken": submission.timeTaken,
        "violations": [v.model_dump() for v in submission.violations],
        "verificationPhoto": submission.verificationPhoto,
        "answers": submission.answers,
        "breakdown": summary.breakdown,
        "verificationStatus": "Pending",
        "submittedAt": datetime.utcnow(),
    }
    await db.results.insert_one(result_data)
    result_data["_id"] = str(result_data["_id"])

    logger.info(
        f"Scored submission for exam {exam.examId} by {submission.studentId}: "
        f"{summary.score}/{summary.totalPossibleScore} ({status})"
    )
    return result_data
