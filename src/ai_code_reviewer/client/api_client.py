"""
Review API Client

Sends review requests to the remote analysis endpoint and validates the
structured response (feedback, suggestions, severity).
"""

import logging
from typing import Dict, Optional

import requests
from pydantic import ValidationError

from ..exceptions import ReviewAPIError
from ..models.review import ReviewRequest, ReviewResponse


logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT_SECONDS = 30


class ReviewAPIClient:
    """
    HTTP client for the review service.

    One blocking POST per file with a fixed timeout. Transport failures,
    non-2xx responses and malformed bodies all raise ReviewAPIError.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        endpoint: str = "/api/v1/query",
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize review API client.

        Args:
            base_url: Service host (e.g. http://localhost:8080)
            endpoint: Query endpoint path appended to the host
            timeout_seconds: Per-request timeout
            session: Optional preconfigured requests session
        """
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self.base_url = base_url.rstrip('/')
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self.session = session or self._create_session()

    @property
    def url(self) -> str:
        """Full URL of the review endpoint."""
        return f"{self.base_url}{self.endpoint}"

    def _create_session(self) -> requests.Session:
        """Create requests session with JSON headers."""
        session = requests.Session()
        session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'User-Agent': 'AI-Code-Reviewer/1.0'
        })
        return session

    def _post(self, payload: Dict) -> requests.Response:
        """
        POST the payload to the review endpoint.

        Raises:
            ReviewAPIError: For transport errors and non-2xx responses
        """
        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout_seconds)
        except requests.Timeout as e:
            raise ReviewAPIError(f"API request timed out after {self.timeout_seconds}s") from e
        except requests.RequestException as e:
            raise ReviewAPIError(f"API request failed: {e}") from e

        if not response.ok:
            error_data = _safe_json(response)
            message = error_data.get('message') if isinstance(error_data, dict) else None
            raise ReviewAPIError(
                f"API request failed: {response.status_code} - {message or response.reason or 'Unknown error'}",
                status_code=response.status_code,
                response_data=error_data if isinstance(error_data, dict) else None,
            )

        return response

    def send_review_request(self, request: ReviewRequest) -> ReviewResponse:
        """
        Send a review request and validate the response.

        Args:
            request: ReviewRequest for a single file

        Returns:
            Validated ReviewResponse

        Raises:
            ReviewAPIError: On transport failure or malformed response
        """
        logger.debug(f"POST {self.url} for {request.file_name}")

        response = self._post(request.to_payload())

        try:
            data = response.json()
        except ValueError as e:
            raise ReviewAPIError("Malformed review response: body is not JSON",
                                 status_code=response.status_code) from e

        if not isinstance(data, dict):
            raise ReviewAPIError("Malformed review response: expected a JSON object",
                                 status_code=response.status_code)

        try:
            return ReviewResponse.model_validate(data)
        except ValidationError as e:
            raise ReviewAPIError(f"Malformed review response: {e}",
                                 status_code=response.status_code,
                                 response_data=data) from e

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _safe_json(response: requests.Response):
    """Decoded JSON body, or an empty dict when there is none."""
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {}
