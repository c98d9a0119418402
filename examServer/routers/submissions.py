from fastapi import APIRouter, HTTPException, Depends
from examServer.dependencies import get_database, get_code_runner
from examServer.models.result import SubmissionCreate, ResultResponse
from examServer.models.runner import RunCodeRequest, RunResult
from examServer.services.submission import submit_exam, ExamNotFoundError
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=ResultResponse)
async def submit(submission: SubmissionCreate, db=Depends(get_database), runner=Depends(get_code_runner)):
    try:
        return await submit_exam(db, submission, runner)
    except ExamNotFoundError:
        raise HTTPException(status_code=404, detail="Exam not found")
    except Exception as e:
        logger.error(f"Failed to submit exam {submission.examId}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to submit exam")


@router.post("/run-code", response_model=RunResult)
async def run_code(request: RunCodeRequest, runner=Depends(get_code_runner)):
    try:
        return await runner.run(request.code, request.input)
    except Exception as e:
        logger.error(f"Runner error: {str(e)}")
        raise HTTPException(status_code=500, detail="Runner Error")
