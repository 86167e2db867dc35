"""
Submission API routes.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.database.session import get_session
from app.services.similarity_service import InvalidInputError
from app.services.submission_service import SubmissionNotFoundError, SubmissionService


class SubmissionCreateRequest(BaseModel):
    student_id: str = Field(min_length=1)
    student_name: str = Field(min_length=1)
    roll_number: str = ""
    file_url: Optional[str] = None
    file_content: Optional[str] = None


class GradeRequest(BaseModel):
    marks: Optional[float] = Field(default=None, ge=0)
    feedback: Optional[str] = None


logger = logging.getLogger("app.submissions")
router = APIRouter(prefix="/api", tags=["submissions"])

submission_service = SubmissionService()


@router.post("/assignments/{assignment_id}/submissions", status_code=201)
async def create_submission(
    assignment_id: str, request_data: SubmissionCreateRequest, db: Session = Depends(get_session)
) -> Dict[str, Any]:
    """
    Submit an assignment and score it for plagiarism.

    Args:
        assignment_id: Assignment ID
        request_data: Student details and extracted file text
        db: Database session

    Returns:
        Stored submission with its plagiarism score
    """
    try:
        logger.info(f"New submission assignment_id={assignment_id} student_id={request_data.student_id}")

        submission = submission_service.create_submission(
            db,
            assignment_id=assignment_id,
            student_id=request_data.student_id,
            student_name=request_data.student_name,
            roll_number=request_data.roll_number,
            file_url=request_data.file_url,
            file_content=request_data.file_content,
        )

        return submission_service.serialize_submission(submission)

    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating submission for assignment {assignment_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/assignments/{assignment_id}/submissions")
async def list_submissions(
    assignment_id: str,
    search: Optional[str] = Query(default=None, description="Filter by student name or roll number"),
    db: Session = Depends(get_session),
) -> List[Dict[str, Any]]:
    """List an assignment's submissions."""
    try:
        submissions = submission_service.list_submissions(assignment_id, db, search=search)
        return [submission_service.serialize_submission(submission) for submission in submissions]

    except Exception as e:
        logger.error(f"Error listing submissions for assignment {assignment_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/submissions/{submission_id}")
async def get_submission(submission_id: str, db: Session = Depends(get_session)) -> Dict[str, Any]:
    try:
        submission = submission_service.get_submission(submission_id, db)
        return submission_service.serialize_submission(submission)

    except SubmissionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error getting submission {submission_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/submissions/{submission_id}/grade")
async def grade_submission(
    submission_id: str, request_data: GradeRequest, db: Session = Depends(get_session)
) -> Dict[str, Any]:
    """
    Grade a submission.

    Args:
        submission_id: Submission ID
        request_data: Marks and feedback
        db: Database session

    Returns:
        Updated submission
    """
    try:
        submission = submission_service.grade_submission(
            submission_id, db, marks=request_data.marks, feedback=request_data.feedback
        )
        return submission_service.serialize_submission(submission)

    except SubmissionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error grading submission {submission_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
