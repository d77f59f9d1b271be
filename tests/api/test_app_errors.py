"""
Tests for application-level endpoints and error mapping.
"""

from fastapi.exceptions import RequestValidationError

from eventboard.main import describe_validation_error


class TestDescribeValidationError:
    """Test cases for validation error messages."""

    def test_invalid_event_id(self):
        exc = RequestValidationError([
            {"type": "int_parsing", "loc": ("path", "event_id"), "msg": "Input should be a valid integer"}
        ])

        assert describe_validation_error(exc) == "Invalid event id"

    def test_missing_field(self):
        exc = RequestValidationError([
            {"type": "missing", "loc": ("body", "category_ids"), "msg": "Field required"}
        ])

        assert describe_validation_error(exc) == "category_ids is required"

    def test_missing_body(self):
        exc = RequestValidationError([{"type": "missing", "loc": ("body",), "msg": "Field required"}])

        assert describe_validation_error(exc) == "Request body is required"

    def test_other_field(self):
        exc = RequestValidationError([
            {"type": "int_parsing", "loc": ("query", "limit"), "msg": "Input should be a valid integer"}
        ])

        assert describe_validation_error(exc) == "Invalid limit"

    def test_no_errors(self):
        assert describe_validation_error(RequestValidationError([])) == "Invalid request"


class TestAppEndpoints:
    """Test cases for root and health endpoints."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["service"] == "Eventboard"
        assert body["status"] == "running"

    def test_simple_health(self, client):
        response = client.get("/health")

        assert response.json() == {"status": "healthy", "service": "eventboard"}

    def test_api_health(self, client):
        """Test the detailed health check with caching disabled."""
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "healthy", "cache": "disabled"}

    def test_error_body_shape(self, client):
        response = client.get("/api/events/999")

        body = response.json()
        assert set(body) == {"error", "error_code", "timestamp"}
        assert body["error_code"] == "HTTP_ERROR"

    def test_validation_error_code(self, client):
        response = client.get("/api/events/abc")

        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_process_time_header(self, client):
        response = client.get("/health")

        assert "x-process-time" in response.headers
