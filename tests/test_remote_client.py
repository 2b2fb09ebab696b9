"""Tests for RemoteAnalysisClient with a mocked requests session."""

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from recipe_nutrition.config import AnalyzerConfig
from recipe_nutrition.remote_client import RemoteAnalysisClient


REMOTE_PAYLOAD = {
    "title": "Remote Curry",
    "servings": 2,
    "ingredients": [{"qty": 1, "unit": "cup", "item": "rice"}],
    "steps": ["Cook."],
    "inferred": {"allergens": [], "diets": ["vegan"], "cuisines": ["indian"], "taste": []},
    "nutritionPerServing": {"calories": 321.5, "sugar": 2},
    "summary": "Remote summary",
    "suggestions": [],
}


@pytest.fixture
def session() -> Any:
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session


def make_response(status: int = 200, payload: Any = None, text: str = "") -> Any:
    response = MagicMock()
    response.ok = status < 400
    response.status_code = status
    response.text = text
    response.reason = "Error"
    response.json.return_value = payload
    return response


def test_successful_analysis(session):
    session.post.return_value = make_response(payload=REMOTE_PAYLOAD)
    client = RemoteAnalysisClient("https://api.example.com/", timeout=5, session=session)

    outcome = client.analyze("recipe text", context_id="member-1")

    assert outcome.ok
    assert outcome.result.title == "Remote Curry"
    assert outcome.result.ingredients[0].quantity == 1.0
    assert outcome.result.nutrition_per_serving["sugars"] == 2.0
    session.post.assert_called_once_with(
        "https://api.example.com/api/v1/analyzer/text",
        json={"text": "recipe text", "memberId": "member-1"},
        timeout=5,
    )


def test_member_id_is_optional(session):
    session.post.return_value = make_response(payload=REMOTE_PAYLOAD)
    client = RemoteAnalysisClient("https://api.example.com", session=session)

    client.analyze("recipe text")

    assert session.post.call_args.kwargs["json"] == {"text": "recipe text"}


def test_bearer_token_header(session):
    RemoteAnalysisClient("https://api.example.com", api_token="secret", session=session)

    assert session.headers["Authorization"] == "Bearer secret"


def test_error_status_is_failure(session):
    session.post.return_value = make_response(status=503, text="unavailable")
    client = RemoteAnalysisClient("https://api.example.com", session=session)

    outcome = client.analyze("recipe text")

    assert not outcome.ok
    assert outcome.result is None
    assert "503" in outcome.error


@pytest.mark.parametrize("exc", [requests.Timeout("slow"), requests.ConnectionError("down")])
def test_network_errors_are_failures(session, exc):
    session.post.side_effect = exc
    client = RemoteAnalysisClient("https://api.example.com", timeout=0.5, session=session)

    outcome = client.analyze("recipe text")

    assert not outcome.ok
    assert outcome.error


def test_timeout_message(session):
    session.post.side_effect = requests.Timeout("slow")
    client = RemoteAnalysisClient("https://api.example.com", timeout=0.5, session=session)

    assert "timed out" in client.analyze("recipe text").error


def test_non_json_body_is_failure(session):
    response = make_response()
    response.json.side_effect = ValueError("not json")
    session.post.return_value = response
    client = RemoteAnalysisClient("https://api.example.com", session=session)

    assert not client.analyze("recipe text").ok


@pytest.mark.parametrize("payload", [
    ["not", "an", "object"],
    {"title": "X", "ingredients": "rice"},
    {"title": "X", "nutritionPerServing": {"calories": "lots"}},
])
def test_malformed_shape_is_failure(session, payload):
    session.post.return_value = make_response(payload=payload)
    client = RemoteAnalysisClient("https://api.example.com", session=session)

    assert not client.analyze("recipe text").ok


def test_from_config():
    assert RemoteAnalysisClient.from_config(AnalyzerConfig()) is None

    client = RemoteAnalysisClient.from_config(
        AnalyzerConfig(remote_url="https://api.example.com", remote_timeout=3.0)
    )
    assert client.base_url == "https://api.example.com"
    assert client.timeout == 3.0


@pytest.mark.parametrize("method, argument, endpoint, payload", [
    ("analyze_url", "https://recipes.example.com/curry", "/api/v1/analyzer/url",
     {"url": "https://recipes.example.com/curry", "memberId": "member-2"}),
    ("analyze_barcode", "4006381333931", "/api/v1/analyzer/barcode",
     {"barcode": "4006381333931", "memberId": "member-2"}),
])
def test_url_and_barcode_endpoints(session, method, argument, endpoint, payload):
    session.post.return_value = make_response(payload=REMOTE_PAYLOAD)
    client = RemoteAnalysisClient("https://api.example.com", timeout=4, session=session)

    outcome = getattr(client, method)(argument, context_id="member-2")

    assert outcome.ok
    assert outcome.result.title == "Remote Curry"
    session.post.assert_called_once_with(
        f"https://api.example.com{endpoint}", json=payload, timeout=4,
    )


def test_error_detail_is_reported(session):
    session.post.return_value = make_response(
        status=404, payload={"detail": "Product not found"}, text='{"detail": "Product not found"}',
    )
    client = RemoteAnalysisClient("https://api.example.com", session=session)

    outcome = client.analyze_barcode("0000000000000")

    assert not outcome.ok
    assert outcome.error == "Analysis failed: 404 Product not found"
