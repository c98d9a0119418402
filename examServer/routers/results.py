from fastapi import APIRouter, HTTPException, Depends
from typing import List
from examServer.dependencies import get_database
from examServer.models.result import ResultResponse
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/exam/{exam_id}", response_model=List[dict])
async def get_exam_results(exam_id: str, db=Depends(get_database)):
    try:
        exam = await db.exams.find_one({"examId": exam_id})
        if not exam:
            raise HTTPException(status_code=404, detail="Exam not found")

        # Ranked by score
        cursor = db.results.find({"examId": exam_id}).sort("score", -1)
        results = await cursor.to_list(length=None)

        for result in results:
            result['_id'] = str(result['_id'])

        return results
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch results for exam {exam_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch results")


@router.get("/student/{student_id}", response_model=List[dict])
async def get_student_history(student_id: str, db=Depends(get_database)):
    try:
        cursor = db.results.find({"studentId": student_id}).sort("submittedAt", -1)
        results = await cursor.to_list(length=None)

        for result in results:
            result['_id'] = str(result['_id'])

        return results
    except Exception as e:
        logger.error(f"Failed to fetch history for student {student_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch student history")


@router.get("/{result_id}", response_model=ResultResponse)
async def get_result(result_id: str, db=Depends(get_database)):
    try:
        result = await db.results.find_one({"resultId": result_id})
        if not result:
            raise HTTPException(status_code=404, detail="Result not found")

        result['_id'] = str(result['_id'])
        return result
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch result {result_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch result")


@router.delete("/{result_id}")
async def delete_result(result_id: str, db=Depends(get_database)):
    try:
        result = await db.results.delete_one({"resultId": result_id})

        if result.deleted_count == 0:
            raise HTTPException(status_code=404, detail="Result not found")

        return {"message": "Result deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete result {result_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to delete result")
