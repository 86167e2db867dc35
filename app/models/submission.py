"""
Submission model.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

from app.models.plagiarism import SubmissionSnapshot


class Submission(SQLModel, table=True):
    """
    One student's attempt at one assignment.

    plagiarism_score is set when the submission is created and is not
    recomputed afterwards; grading only touches marks and feedback.
    """

    __tablename__ = "submissions"

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True, max_length=32)
    assignment_id: str = Field(index=True, max_length=64)
    student_id: str = Field(index=True, max_length=64)
    student_name: str = Field(max_length=255)
    roll_number: str = Field(default="", max_length=50)
    file_url: Optional[str] = Field(default=None, max_length=1000)
    file_content: Optional[str] = Field(default=None)  # Extracted text, only for text uploads
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    marks: Optional[float] = Field(default=None)
    feedback: Optional[str] = Field(default=None)
    plagiarism_score: int = Field(default=0)

    def to_snapshot(self) -> SubmissionSnapshot:
        """Immutable engine view of this submission."""
        return SubmissionSnapshot(
            id=self.id,
            assignment_id=self.assignment_id,
            student_id=self.student_id,
            student_name=self.student_name,
            roll_number=self.roll_number or "",
            text_content=self.file_content,
            plagiarism_score=self.plagiarism_score or 0,
        )
