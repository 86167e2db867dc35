"""
Report service for plagiarism levels, score distribution and assignment reports.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from app.services.config_service import config_service
from app.services.plagiarism_service import PlagiarismService, has_usable_text

logger = logging.getLogger("app.report")

# (label, lowest score, highest score), bounds inclusive
DISTRIBUTION_BUCKETS = [
    ("0-20%", 0, 20),
    ("21-40%", 21, 40),
    ("41-60%", 41, 60),
    ("61-80%", 61, 80),
    ("81-100%", 81, 100),
]


def plagiarism_level(score: int) -> str:
    """
    Severity label for a plagiarism score.

    - low: 0-30
    - medium: 31-60
    - high: above 60
    """
    if score <= 30:
        return "low"
    elif score <= 60:
        return "medium"
    return "high"


def score_distribution(scores: Iterable[int]) -> Dict[str, int]:
    """Count scores per 20-point bucket."""
    distribution = {label: 0 for label, _, _ in DISTRIBUTION_BUCKETS}
    for score in scores:
        for label, low, high in DISTRIBUTION_BUCKETS:
            if score <= high:
                distribution[label] += 1
                break
    return distribution


def count_high_plagiarism(scores: Iterable[int], threshold: Optional[int] = None) -> int:
    """Number of scores strictly above the high plagiarism threshold."""
    if threshold is None:
        threshold = config_service.high_plagiarism_threshold()
    return sum(1 for score in scores if score > threshold)


class ReportService:
    """Service for building per-assignment plagiarism reports."""

    def __init__(self):
        self.plagiarism_service = PlagiarismService()
        self.logger = logger

    def build_assignment_report(
        self,
        assignment_id: str,
        submissions: Sequence[Any],
        threshold: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Summarize plagiarism for one assignment.

        Args:
            assignment_id: Assignment ID
            submissions: Snapshots of the assignment's submissions
            threshold: Clustering threshold, defaults to the configured value

        Returns:
            Dictionary with counts, score distribution and clusters
        """
        if threshold is None:
            threshold = config_service.similarity_threshold()

        clusters = self.plagiarism_service.cluster_submissions(submissions, threshold)
        scores: List[int] = [submission.plagiarism_score or 0 for submission in submissions]
        checked = sum(1 for submission in submissions if has_usable_text(submission.text_content))

        report = {
            "assignment_id": assignment_id,
            "total_submissions": len(submissions),
            "checked_submissions": checked,
            "high_plagiarism_count": count_high_plagiarism(scores),
            "average_score": round(sum(scores) / len(scores), 2) if scores else 0,
            "distribution": score_distribution(scores),
            "similarity_threshold": threshold,
            "clusters": [cluster.model_dump() for cluster in clusters],
            "generated_at": config_service.now(),
        }

        self.logger.info(
            f"Built plagiarism report assignment_id={assignment_id} submissions={len(submissions)} "
            f"clusters={len(clusters)}"
        )
        return report
