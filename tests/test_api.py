"""
Tests for API endpoints.
"""
import pytest

ESSAY = "newton's third law states that every action has an equal and opposite reaction"


def submit(client, assignment_id="a1", **overrides):
    payload = {
        "student_id": "s1",
        "student_name": "Alice",
        "roll_number": "CS001",
        "file_url": "uploads/essay.txt",
        "file_content": ESSAY,
    }
    payload.update(overrides)
    return client.post(f"/api/assignments/{assignment_id}/submissions", json=payload)


class TestHealthEndpoint:
    """Test health check endpoints."""

    def test_health_check(self, client):
        """Test health check endpoint returns service info."""
        response = client.get("/healthz")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "PlagiarismLens"

    def test_health_check_content_type(self, client):
        """Test health check endpoint returns JSON."""
        response = client.get("/healthz")
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"

    def test_detailed_health(self, client):
        """Test detailed health reports database and settings."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["components"]["database"] == "ok"
        assert data["settings"]["similarity_threshold"] == 70


class TestSubmissionEndpoints:
    """Test submission endpoints."""

    def test_create_submission(self, client):
        """Test the first submission is stored with score 0."""
        response = submit(client)
        assert response.status_code == 201
        data = response.json()
        assert data["assignment_id"] == "a1"
        assert data["plagiarism_score"] == 0
        assert data["plagiarism_level"] == "low"
        assert data["plagiarism_checked"] is True

    def test_copied_submission_flagged(self, client):
        """Test a copy of an earlier submission scores 100."""
        submit(client)
        response = submit(client, student_id="s2", student_name="Bob")
        assert response.status_code == 201
        data = response.json()
        assert data["plagiarism_score"] == 100
        assert data["plagiarism_level"] == "high"

    def test_create_submission_validation(self, client):
        """Test missing student details are rejected."""
        response = client.post("/api/assignments/a1/submissions", json={"file_content": ESSAY})
        assert response.status_code == 422

    def test_list_and_get_submission(self, client):
        """Test listing and fetching submissions."""
        created = submit(client).json()
        submit(client, student_id="s2", student_name="Bob", roll_number="CS002")

        listed = client.get("/api/assignments/a1/submissions")
        assert listed.status_code == 200
        assert len(listed.json()) == 2

        searched = client.get("/api/assignments/a1/submissions", params={"search": "bob"})
        assert [s["student_name"] for s in searched.json()] == ["Bob"]

        fetched = client.get(f"/api/submissions/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["student_name"] == "Alice"

    def test_get_missing_submission(self, client):
        """Test unknown submission IDs return 404."""
        response = client.get("/api/submissions/does-not-exist")
        assert response.status_code == 404

    def test_grade_submission(self, client):
        """Test grading keeps the plagiarism score."""
        submit(client)
        copied = submit(client, student_id="s2", student_name="Bob").json()

        response = client.patch(f"/api/submissions/{copied['id']}/grade", json={"marks": 8, "feedback": "Good"})
        assert response.status_code == 200
        data = response.json()
        assert data["marks"] == 8
        assert data["feedback"] == "Good"
        assert data["plagiarism_score"] == 100

    def test_grade_missing_submission(self, client):
        """Test grading an unknown submission returns 404."""
        response = client.patch("/api/submissions/nope/grade", json={"marks": 5})
        assert response.status_code == 404


class TestClusterEndpoints:
    """Test cluster endpoints."""

    def test_assignment_clusters(self, client):
        """Test identical submissions are clustered and unrelated ones are not."""
        first = submit(client).json()
        second = submit(client, student_id="s2", student_name="Bob").json()
        submit(client, student_id="s3", student_name="Carol", file_content="a short story about dragons")

        response = client.get("/api/cluster/assignments/a1")
        assert response.status_code == 200
        clusters = response.json()
        assert len(clusters) == 1
        assert set(clusters[0]["submission_ids"]) == {first["id"], second["id"]}
        assert set(clusters[0]["student_names"]) == {"Alice", "Bob"}
        assert clusters[0]["plagiarism_score"] == 100

    def test_assignment_clusters_empty(self, client):
        """Test an assignment without submissions has no clusters."""
        response = client.get("/api/cluster/assignments/unknown")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.parametrize("path", ["/api/cluster/assignments/a1", "/api/cluster/assignments/a1/report"])
    @pytest.mark.parametrize("threshold", [150, -5])
    def test_invalid_threshold(self, client, path, threshold):
        """Test thresholds outside 0-100 are rejected as bad requests."""
        submit(client)
        response = client.get(path, params={"threshold": threshold})
        assert response.status_code == 400
        assert "threshold" in response.json()["detail"]

    def test_assignment_report(self, client):
        """Test the assignment report endpoint."""
        submit(client)
        submit(client, student_id="s2", student_name="Bob")

        response = client.get("/api/cluster/assignments/a1/report")
        assert response.status_code == 200
        data = response.json()
        assert data["total_submissions"] == 2
        assert data["high_plagiarism_count"] == 1
        assert data["distribution"]["81-100%"] == 1
        assert len(data["clusters"]) == 1

    def test_similarity(self, client):
        """Test comparing two texts directly."""
        response = client.post(
            "/api/cluster/similarity", json={"text_a": "alpha beta gamma", "text_b": "alpha beta delta"}
        )
        assert response.status_code == 200
        assert response.json() == {"similarity": 50, "raw_similarity": 50.0}
