"""Shared test configuration, fixtures and sample AI responses."""

import json

import pytest

from services.extraction.aliases import default_config


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls the real Gemini API (needs GEMINI_API_KEY)"
    )


# Shape produced by the Claude match prompt
CLAUDE_RESPONSE = {
    "Skills": ["Python", "FastAPI", "PostgreSQL"],
    "Work History": [
        {
            "Title": "Senior Engineer",
            "Company": "Acme",
            "Location": "Berlin",
            "startDate": "2021-03",
            "endDate": "Present",
            "durationMonths": 30,
        },
        {
            "Title": "Engineer",
            "Company": "Globex",
            "startDate": "2018-01",
            "endDate": "2021-02",
            "durationMonths": 37,
            "isCurrentRole": False,
        },
    ],
    "Red Flags": ["Short tenure at first employer"],
    "Summary": "Strong backend engineer.",
    "matching_score": 82,
}


@pytest.fixture
def config():
    return default_config()


@pytest.fixture
def claude_response():
    return json.loads(json.dumps(CLAUDE_RESPONSE))
