"""
Unit tests for the review service client.
"""

from unittest.mock import Mock

import pytest
import requests

from ai_code_reviewer.client.api_client import ReviewAPIClient
from ai_code_reviewer.exceptions import ReviewAPIError
from ai_code_reviewer.models.review import ReviewRequest, Severity


def make_request():
    return ReviewRequest(
        content="print('hi')",
        language="python",
        file_name="src/app.py",
        template="security",
        prompt="Look for vulnerabilities.",
        ticket_id="PROJ-1",
    )


def make_http_response(status_code=200, json_data=None, content=b"{}", reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.reason = reason
    response.content = content
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


class TestReviewAPIClient:
    """Unit tests for ReviewAPIClient."""

    def setup_method(self):
        self.session = Mock()
        self.client = ReviewAPIClient(
            base_url="http://review.local:8080/",
            endpoint="/api/v1/query",
            timeout_seconds=12,
            session=self.session,
        )

    def test_client_initialization(self):
        """Test URL assembly and default session headers."""
        client = ReviewAPIClient("http://localhost:8080", "/api/v1/query")
        assert client.url == "http://localhost:8080/api/v1/query"
        assert client.timeout_seconds == 30
        assert client.session.headers["Content-Type"] == "application/json"
        client.close()

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValueError):
            ReviewAPIClient(timeout_seconds=0)

    def test_send_review_request_success(self):
        self.session.post.return_value = make_http_response(json_data={
            "feedback": "Consider input validation",
            "suggestions": ["Validate user input"],
            "severity": "high",
        })

        response = self.client.send_review_request(make_request())

        assert response.feedback == "Consider input validation"
        assert response.suggestions == ["Validate user input"]
        assert response.severity is Severity.HIGH

        args, kwargs = self.session.post.call_args
        assert args[0] == "http://review.local:8080/api/v1/query"
        assert kwargs["timeout"] == 12
        assert kwargs["json"]["fileName"] == "src/app.py"
        assert kwargs["json"]["ticketId"] == "PROJ-1"
        assert kwargs["json"]["diff"] == ""

    def test_timeout_raises_review_error(self):
        self.session.post.side_effect = requests.Timeout("read timed out")

        with pytest.raises(ReviewAPIError, match="timed out"):
            self.client.send_review_request(make_request())

    def test_connection_error_raises_review_error(self):
        self.session.post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(ReviewAPIError, match="API request failed"):
            self.client.send_review_request(make_request())

    def test_http_error_carries_status_and_message(self):
        self.session.post.return_value = make_http_response(
            status_code=503,
            json_data={"message": "index not ready"},
            content=b'{"message": "index not ready"}',
            reason="Service Unavailable",
        )

        with pytest.raises(ReviewAPIError) as exc_info:
            self.client.send_review_request(make_request())

        assert exc_info.value.status_code == 503
        assert "index not ready" in str(exc_info.value)
        assert exc_info.value.response_data == {"message": "index not ready"}

    def test_http_error_without_body(self):
        self.session.post.return_value = make_http_response(status_code=500, content=b"", reason="Server Error")

        with pytest.raises(ReviewAPIError, match="500 - Server Error"):
            self.client.send_review_request(make_request())

    def test_non_json_body(self):
        self.session.post.return_value = make_http_response(json_data=ValueError("no json"))

        with pytest.raises(ReviewAPIError, match="not JSON"):
            self.client.send_review_request(make_request())

    def test_non_object_body(self):
        self.session.post.return_value = make_http_response(json_data=["feedback"])

        with pytest.raises(ReviewAPIError, match="expected a JSON object"):
            self.client.send_review_request(make_request())

    def test_unknown_severity_is_contract_violation(self):
        self.session.post.return_value = make_http_response(json_data={
            "feedback": "hmm",
            "suggestions": [],
            "severity": "catastrophic",
        })

        with pytest.raises(ReviewAPIError, match="Malformed review response"):
            self.client.send_review_request(make_request())

    def test_missing_severity_is_contract_violation(self):
        self.session.post.return_value = make_http_response(json_data={"feedback": "hmm"})

        with pytest.raises(ReviewAPIError):
            self.client.send_review_request(make_request())

    def test_context_manager_closes_session(self):
        with self.client:
            pass
        self.session.close.assert_called_once()
