"""
Plagiarism scoring and clustering of assignment submissions.

Two operations share the similarity primitive:

- score_submission compares one new submission against the prior submissions
  of the same assignment (write path, one-to-many).
- cluster_submissions compares every pair of an assignment's submissions and
  groups connected similar submissions for teacher review (read path,
  all-to-all).

Both work on caller-supplied snapshots and keep no state between calls.
"""
import hashlib
import logging
from typing import Any, Dict, List, Optional, Sequence

import networkx as nx

from app.models.plagiarism import PlagiarismCluster
from app.services.config_service import config_service
from app.services.similarity_service import InvalidInputError, jaccard_similarity, round_half_up

logger = logging.getLogger("app.plagiarism")

REQUIRED_FIELDS = ("id", "assignment_id", "student_id", "student_name", "text_content")


def content_fingerprint(text: str) -> str:
    """SHA-1 fingerprint of trimmed, lower-cased content."""
    return hashlib.sha1(text.strip().lower().encode("utf-8")).hexdigest()


def has_usable_text(text: Optional[str]) -> bool:
    """True for a string with at least one non-whitespace character."""
    if text is None:
        return False
    if not isinstance(text, str):
        raise InvalidInputError(f"text content must be a string, got {type(text).__name__}")
    return bool(text.strip())


def _read_submission(submission: Any) -> Dict[str, Any]:
    """Pull the fields the engine needs, failing loudly on malformed records."""
    if submission is None:
        raise InvalidInputError("submission list must not contain None")

    try:
        return {name: getattr(submission, name) for name in REQUIRED_FIELDS}
    except AttributeError as e:
        raise InvalidInputError(f"submission is missing a required field: {e}") from e


class PlagiarismService:
    """Service for scoring new submissions and clustering similar ones."""

    def __init__(self):
        self.logger = logger

    def score_submission(
        self,
        new_text: str,
        assignment_id: str,
        submitter_id: str,
        prior_submissions: Sequence[Any],
    ) -> int:
        """
        Plagiarism score of a new submission against earlier ones.

        The score is the highest similarity between the new text and any
        earlier submission to the same assignment by a different student.
        prior_submissions must not include the new submission itself.

        Args:
            new_text: Text of the new submission
            assignment_id: Assignment being submitted to
            submitter_id: Student submitting
            prior_submissions: Submissions that existed before this one

        Returns:
            Integer score 0-100, 0 when nothing comparable exists
        """
        if new_text is None:
            raise InvalidInputError("new_text must not be None")
        if prior_submissions is None:
            raise InvalidInputError("prior_submissions must not be None")

        max_similarity = 0.0
        compared = 0

        for submission in prior_submissions:
            record = _read_submission(submission)
            if record["assignment_id"] != assignment_id or record["student_id"] == submitter_id:
                continue
            if not has_usable_text(record["text_content"]):
                continue

            compared += 1
            max_similarity = max(max_similarity, jaccard_similarity(new_text, record["text_content"]))

        score = round_half_up(max_similarity)
        self.logger.info(
            f"Scored submission assignment_id={assignment_id} student_id={submitter_id} "
            f"compared={compared} score={score}"
        )
        return score

    def cluster_submissions(
        self,
        submissions: Sequence[Any],
        threshold: Optional[float] = None,
    ) -> List[PlagiarismCluster]:
        """
        Group mutually similar submissions of one assignment.

        Every pair of submissions with text, from different students, whose
        similarity is at or above the threshold is linked; each connected
        group of two or more submissions becomes a cluster.

        Args:
            submissions: Submissions of a single assignment
            threshold: Similarity percentage for linking, defaults to the configured value

        Returns:
            Clusters sorted by descending plagiarism score
        """
        if submissions is None:
            raise InvalidInputError("submissions must not be None")

        if threshold is None:
            threshold = config_service.similarity_threshold()
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise InvalidInputError(f"threshold must be a number, got {threshold!r}")
        if not 0 <= threshold <= 100:
            raise InvalidInputError(f"threshold must be between 0 and 100, got {threshold}")

        records = [_read_submission(submission) for submission in submissions]
        candidates = [record for record in records if has_usable_text(record["text_content"])]

        graph = nx.Graph()
        graph.add_nodes_from(range(len(candidates)))

        for i in range(len(candidates)):
            for j in range(i + 1, len(candidates)):
                # Resubmissions by the same student are not plagiarism
                if candidates[i]["student_id"] == candidates[j]["student_id"]:
                    continue
                score = jaccard_similarity(candidates[i]["text_content"], candidates[j]["text_content"])
                if score >= threshold:
                    graph.add_edge(i, j, weight=score)

        components = []
        for component in nx.connected_components(graph):
            if len(component) < 2:
                continue
            members = sorted(component)
            best_score = max(weight for _, _, weight in graph.subgraph(members).edges(data="weight"))
            components.append((members, best_score))

        # Ranked on the unrounded score, ties keep first-seen order
        components.sort(key=lambda item: item[0][0])
        components.sort(key=lambda item: item[1], reverse=True)
        clusters = [
            self._build_cluster([candidates[index] for index in members], best_score)
            for members, best_score in components
        ]

        self.logger.info(
            f"Clustered submissions total={len(records)} with_text={len(candidates)} "
            f"threshold={threshold} clusters={len(clusters)}"
        )
        return clusters

    def _build_cluster(self, members: List[Dict[str, Any]], score: float) -> PlagiarismCluster:
        """Assemble a cluster from its members in first-seen order."""
        student_names: List[str] = []
        for member in members:
            if member["student_name"] not in student_names:
                student_names.append(member["student_name"])

        fingerprints = {content_fingerprint(member["text_content"]) for member in members}
        content_hash = fingerprints.pop() if len(fingerprints) == 1 else None

        return PlagiarismCluster(
            plagiarism_score=round_half_up(score),
            student_names=student_names,
            submission_ids=[str(member["id"]) for member in members],
            content_hash=content_hash,
        )
