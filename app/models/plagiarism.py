"""
Value types exchanged with the plagiarism engine.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SubmissionSnapshot(BaseModel):
    """
    Read-only view of a submission as the plagiarism engine sees it.

    The store builds these from persisted records so that scoring and
    clustering run over an immutable copy of the submission set.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Submission ID")
    assignment_id: str = Field(description="Assignment the submission belongs to")
    student_id: str = Field(description="Submitting student ID")
    student_name: str = Field(default="", description="Submitting student name")
    roll_number: str = Field(default="", description="Student roll number")
    text_content: Optional[str] = Field(default=None, description="Extracted text, absent for non-text files")
    plagiarism_score: int = Field(default=0, ge=0, le=100, description="Score assigned at submission time")


class PlagiarismCluster(BaseModel):
    """
    Group of two or more submissions judged similar to each other.

    Clusters are computed per request and never stored.
    """

    model_config = ConfigDict(frozen=True)

    plagiarism_score: int = Field(ge=0, le=100, description="Highest pairwise similarity inside the cluster")
    student_names: List[str] = Field(description="Member student names in first-seen order")
    submission_ids: List[str] = Field(description="Member submission IDs in first-seen order")
    content_hash: Optional[str] = Field(default=None, description="Shared content fingerprint when all members are identical")

    @property
    def size(self) -> int:
        return len(self.submission_ids)
