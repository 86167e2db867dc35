"""
Plagiarism cluster and report API routes.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.database.session import get_session
from app.services.similarity_service import InvalidInputError, jaccard_similarity, round_half_up
from app.services.submission_service import SubmissionService


class SimilarityRequest(BaseModel):
    text_a: str
    text_b: str


logger = logging.getLogger("app.cluster")
router = APIRouter(prefix="/api/cluster", tags=["cluster"])

submission_service = SubmissionService()


@router.get("/assignments/{assignment_id}")
async def get_assignment_clusters(
    assignment_id: str, threshold: Optional[float] = Query(default=None), db: Session = Depends(get_session)
) -> List[Dict[str, Any]]:
    """
    Clusters of similar submissions for an assignment, most suspicious first.

    Args:
        assignment_id: Assignment ID
        threshold: Optional override of the configured similarity threshold
        db: Database session

    Returns:
        List of clusters
    """
    try:
        logger.info(f"Clustering requested assignment_id={assignment_id} threshold={threshold}")

        clusters = submission_service.get_assignment_clusters(assignment_id, db, threshold)
        return [cluster.model_dump() for cluster in clusters]

    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error clustering assignment {assignment_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/assignments/{assignment_id}/report")
async def get_assignment_report(
    assignment_id: str, threshold: Optional[float] = Query(default=None), db: Session = Depends(get_session)
) -> Dict[str, Any]:
    """Plagiarism summary for an assignment: counts, distribution and clusters."""
    try:
        return submission_service.get_assignment_report(assignment_id, db, threshold)

    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error building report for assignment {assignment_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/similarity")
async def compare_texts(request_data: SimilarityRequest) -> Dict[str, Any]:
    """Similarity between two texts."""
    raw_similarity = jaccard_similarity(request_data.text_a, request_data.text_b)
    return {"similarity": round_half_up(raw_similarity), "raw_similarity": raw_similarity}
