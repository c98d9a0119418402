from fastapi import APIRouter, HTTPException, Depends
from typing import List, Optional
from examServer.dependencies import get_database, get_app_settings
from examServer.models.exam import ExamCreate, ExamUpdate, VerifyKeyRequest, QuestionType
from examServer.services.exam_keys import generate_unique_key
from datetime import datetime
import logging
import uuid

logger = logging.getLogger(__name__)

router = APIRouter()


def strip_answer_keys(exam: dict) -> dict:
    """Remove correct answers and hidden test cases before handing an exam to a student."""
    questions = []
    for question in exam.get("questions", []):
        question = dict(question)
        question.pop("correctAnswer", None)
        question.pop("correctAnswers", None)
        question["testCases"] = [tc for tc in question.get("testCases", []) if tc.get("isPublic", True)]
        questions.append(question)
    exam["questions"] = questions
    return exam


@router.post("/", response_model=dict, status_code=201)
async def create_exam(exam: ExamCreate, db=Depends(get_database), settings=Depends(get_app_settings)):
    try:
        exam_data = exam.model_dump(mode="json")
        exam_data["examId"] = str(uuid.uuid4())
        exam_data["examKey"] = await generate_unique_key(db, settings.exam_key_length)
        exam_data["isActive"] = True
        exam_data["createdAt"] = datetime.utcnow()

        for index, question in enumerate(exam.questions):
            if question.type == QuestionType.CODING and not question.testCases:
                logger.warning(f"Exam '{exam.title}' question {index} is a Coding question without test cases")

        await db.exams.insert_one(exam_data)
        exam_data["_id"] = str(exam_data["_id"])
        logger.info(f"Created exam {exam_data['examId']} with key {exam_data['examKey']}")
        return exam_data
    except Exception as e:
        logger.error(f"Failed to create exam: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to create exam")


@router.get("/", response_model=List[dict])
async def get_all_exams(createdBy: Optional[str] = None, db=Depends(get_database)):
    try:
        query = {"createdBy": createdBy} if createdBy else {}
        cursor = db.exams.find(query).sort("createdAt", -1)
        exams = await cursor.to_list(length=None)

        for exam in exams:
            exam['_id'] = str(exam['_id'])

        return exams
    except Exception as e:
        logger.error(f"Failed to fetch exams: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch exams")


@router.post("/verify-key", response_model=dict)
async def verify_exam_key(request: VerifyKeyRequest, db=Depends(get_database)):
    try:
        exam = await db.exams.find_one({"examKey": request.examKey, "isActive": True})
        if not exam:
            raise HTTPException(status_code=404, detail="Invalid Exam Key")

        if request.studentId:
            existing_result = await db.results.find_one({"examId": exam["examId"], "studentId": request.studentId})
            if existing_result:
                raise HTTPException(status_code=400, detail="You have already taken this exam")

        exam['_id'] = str(exam['_id'])
        return strip_answer_keys(exam)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to verify exam key: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to verify exam key")


@router.get("/{exam_id}", response_model=dict)
async def get_exam(exam_id: str, db=Depends(get_database)):
    try:
        exam = await db.exams.find_one({"examId": exam_id})
        if not exam:
            raise HTTPException(status_code=404, detail="Exam not found")

        exam['_id'] = str(exam['_id'])
        return exam
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch exam {exam_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch exam")


@router.put("/{exam_id}", response_model=dict)
async def update_exam(exam_id: str, exam_update: ExamUpdate, db=Depends(get_database)):
    try:
        update_data = {k: v for k, v in exam_update.model_dump(mode="json").items() if v is not None}
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")

        result = await db.exams.update_one(
            {"examId": exam_id},
            {"$set": update_data}
        )

        if result.matched_count == 0:
            raise HTTPException(status_code=404, detail="Exam not found")

        updated_exam = await db.exams.find_one({"examId": exam_id})
        updated_exam['_id'] = str(updated_exam['_id'])

        return {"message": "Exam updated successfully", "exam": updated_exam}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update exam {exam_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update exam")


@router.patch("/{exam_id}/status", response_model=dict)
async def toggle_exam_status(exam_id: str, db=Depends(get_database)):
    try:
        exam = await db.exams.find_one({"examId": exam_id})
        if not exam:
            raise HTTPException(status_code=404, detail="Exam not found")

        is_active = not exam.get("isActive", True)
        await db.exams.update_one({"examId": exam_id}, {"$set": {"isActive": is_active}})

        return {
            "message": f"Exam {'activated' if is_active else 'deactivated'} successfully",
            "isActive": is_active
        }
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to toggle exam {exam_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update exam status")


@router.delete("/{exam_id}")
async def delete_exam(exam_id: str, db=Depends(get_database)):
    try:
        result = await db.exams.delete_one({"examId": exam_id})

        if result.deleted_count == 0:
            raise HTTPException(status_code=404, detail="Exam not found")

        await db.results.delete_many({"examId": exam_id})

        return {"message": "Exam and associated results deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete exam {exam_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to delete exam")
