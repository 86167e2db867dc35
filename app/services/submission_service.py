"""
Submission service: stores submissions and runs the plagiarism engine over them.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.plagiarism import PlagiarismCluster, SubmissionSnapshot
from app.models.submission import Submission
from app.services.config_service import config_service
from app.services.plagiarism_service import PlagiarismService, has_usable_text
from app.services.report_service import ReportService, plagiarism_level

logger = logging.getLogger("app.submissions")


class SubmissionNotFoundError(LookupError):
    """Raised when a submission ID does not exist."""


class SubmissionService:
    """Service for creating, grading and analysing assignment submissions."""

    def __init__(self):
        self.plagiarism_service = PlagiarismService()
        self.report_service = ReportService()
        self.logger = logger

    def get_assignment_snapshots(self, assignment_id: str, db: Session) -> List[SubmissionSnapshot]:
        """Current submissions of an assignment in submission order."""
        submissions = (
            db.query(Submission)
            .filter(Submission.assignment_id == assignment_id)
            .order_by(Submission.submitted_at, Submission.id)
            .all()
        )
        return [submission.to_snapshot() for submission in submissions]

    def create_submission(
        self,
        db: Session,
        assignment_id: str,
        student_id: str,
        student_name: str,
        roll_number: str = "",
        file_url: Optional[str] = None,
        file_content: Optional[str] = None,
    ) -> Submission:
        """
        Store a new submission with its plagiarism score.

        The score is computed against the assignment's submissions as they
        were before this one is added. Submissions without text content
        (e.g. PDF uploads) are not checked and get score 0.

        Args:
            db: Database session
            assignment_id: Assignment ID
            student_id: Student ID
            student_name: Student name
            roll_number: Student roll number
            file_url: Location of the uploaded file
            file_content: Extracted text of the upload, if any

        Returns:
            Persisted Submission
        """
        prior_submissions = self.get_assignment_snapshots(assignment_id, db)

        plagiarism_score = 0
        if has_usable_text(file_content):
            plagiarism_score = self.plagiarism_service.score_submission(
                file_content, assignment_id, student_id, prior_submissions
            )
        else:
            self.logger.info(f"Skipping plagiarism check for submission without text student_id={student_id}")

        submission = Submission(
            assignment_id=assignment_id,
            student_id=student_id,
            student_name=student_name,
            roll_number=roll_number,
            file_url=file_url,
            file_content=file_content,
            plagiarism_score=plagiarism_score,
        )

        try:
            db.add(submission)
            db.commit()
            db.refresh(submission)
        except Exception as e:
            self.logger.error(f"Error saving submission for assignment {assignment_id}: {e}")
            db.rollback()
            raise

        if plagiarism_score > config_service.high_plagiarism_threshold():
            self.logger.warning(
                f"High plagiarism detected submission_id={submission.id} student_name={student_name} "
                f"assignment_id={assignment_id} score={plagiarism_score}"
            )

        return submission

    def get_submission(self, submission_id: str, db: Session) -> Submission:
        submission = db.query(Submission).filter(Submission.id == submission_id).first()
        if not submission:
            raise SubmissionNotFoundError(f"Submission {submission_id} not found")
        return submission

    def list_submissions(self, assignment_id: str, db: Session, search: Optional[str] = None) -> List[Submission]:
        """
        Submissions of an assignment, optionally filtered by student name or roll number.
        """
        query = db.query(Submission).filter(Submission.assignment_id == assignment_id)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Submission.student_name.ilike(pattern), Submission.roll_number.ilike(pattern)))
        return query.order_by(Submission.submitted_at, Submission.id).all()

    def grade_submission(
        self,
        submission_id: str,
        db: Session,
        marks: Optional[float] = None,
        feedback: Optional[str] = None,
    ) -> Submission:
        """Record marks and feedback. The plagiarism score is left untouched."""
        submission = self.get_submission(submission_id, db)

        if marks is not None:
            submission.marks = marks
        if feedback is not None:
            submission.feedback = feedback

        try:
            db.add(submission)
            db.commit()
            db.refresh(submission)
        except Exception as e:
            self.logger.error(f"Error grading submission {submission_id}: {e}")
            db.rollback()
            raise

        self.logger.info(f"Graded submission submission_id={submission_id} marks={marks}")
        return submission

    def get_assignment_clusters(
        self, assignment_id: str, db: Session, threshold: Optional[float] = None
    ) -> List[PlagiarismCluster]:
        """Clusters of similar submissions, computed on demand."""
        snapshots = self.get_assignment_snapshots(assignment_id, db)
        return self.plagiarism_service.cluster_submissions(snapshots, threshold)

    def get_assignment_report(
        self, assignment_id: str, db: Session, threshold: Optional[float] = None
    ) -> Dict[str, Any]:
        snapshots = self.get_assignment_snapshots(assignment_id, db)
        return self.report_service.build_assignment_report(assignment_id, snapshots, threshold)

    def serialize_submission(self, submission: Submission) -> Dict[str, Any]:
        """Submission as returned by the API."""
        return {
            "id": submission.id,
            "assignment_id": submission.assignment_id,
            "student_id": submission.student_id,
            "student_name": submission.student_name,
            "roll_number": submission.roll_number,
            "file_url": submission.file_url,
            "submitted_at": submission.submitted_at,
            "marks": submission.marks,
            "feedback": submission.feedback,
            "plagiarism_score": submission.plagiarism_score,
            "plagiarism_level": plagiarism_level(submission.plagiarism_score),
            "plagiarism_checked": has_usable_text(submission.file_content),
        }
