#!/usr/bin/env python3
"""
Client for the remote recipe analysis service.
Every failure mode is reported as a failed RemoteOutcome; nothing is raised.
"""

from typing import Any, Dict, Optional

import requests
import structlog

from .config import AnalyzerConfig
from .errors import MalformedResponseError, RemoteAnalysisError
from .models import AnalyzeResult, RemoteOutcome

logger = structlog.get_logger(__name__)

TEXT_ENDPOINT = "/api/v1/analyzer/text"
URL_ENDPOINT = "/api/v1/analyzer/url"
BARCODE_ENDPOINT = "/api/v1/analyzer/barcode"


class RemoteAnalysisClient:
    """Single-attempt HTTP client for the analysis service."""

    def __init__(self, base_url: str, timeout: float = 10.0, api_token: Optional[str] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the remote client.

        Args:
            base_url: Service base URL
            timeout: Request timeout in seconds
            api_token: Optional bearer token
            session: Requests session, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': 'Recipe-Nutrition-AI/1.0',
            'Content-Type': 'application/json',
        })
        if api_token:
            self.session.headers['Authorization'] = f"Bearer {api_token}"

    @classmethod
    def from_config(cls, config: AnalyzerConfig) -> Optional["RemoteAnalysisClient"]:
        """Client for the configured service, or None when no URL is set."""
        if not config.remote_url:
            return None
        return cls(config.remote_url, timeout=config.remote_timeout, api_token=config.api_token)

    def analyze(self, text: str, context_id: Optional[str] = None) -> RemoteOutcome:
        """
        Ask the service to analyze recipe text.

        Args:
            text: Raw recipe text
            context_id: Optional member/context identifier

        Returns:
            RemoteOutcome carrying either the result or the failure reason
        """
        return self._attempt(TEXT_ENDPOINT, {"text": text}, context_id)

    def analyze_url(self, url: str, context_id: Optional[str] = None) -> RemoteOutcome:
        """Ask the service to fetch and analyze a recipe page."""
        return self._attempt(URL_ENDPOINT, {"url": url}, context_id)

    def analyze_barcode(self, barcode: str, context_id: Optional[str] = None) -> RemoteOutcome:
        """Ask the service to analyze a packaged product by barcode."""
        return self._attempt(BARCODE_ENDPOINT, {"barcode": barcode}, context_id)

    def _attempt(self, endpoint: str, payload: Dict[str, Any],
                 context_id: Optional[str]) -> RemoteOutcome:
        if context_id:
            payload["memberId"] = context_id
        try:
            return RemoteOutcome.success(self._request(endpoint, payload))
        except RemoteAnalysisError as e:
            logger.warning("remote_analysis_failed", endpoint=endpoint, error=e.message,
                           error_code=e.error_code, category=e.category.value,
                           status_code=e.status_code, trace_id=e.trace_id)
            return RemoteOutcome.failure(e.message)

    def _request(self, endpoint: str, payload: Dict[str, Any]) -> AnalyzeResult:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.Timeout as e:
            raise RemoteAnalysisError(f"Analysis request timed out after {self.timeout}s",
                                      timed_out=True) from e
        except requests.RequestException as e:
            raise RemoteAnalysisError(f"Analysis request failed: {e}") from e

        if not response.ok:
            raise RemoteAnalysisError(
                f"Analysis failed: {response.status_code} {_error_detail(response)}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError("Analysis response is not JSON",
                                         status_code=response.status_code) from e

        return AnalyzeResult.from_dict(body)


def _error_detail(response: requests.Response) -> str:
    """The service's "detail" message when the error body carries one."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return response.text or response.reason
