import pytest

from fastapi.testclient import TestClient

from formdraft.models.forms import FormQuestion

QUIZ_LINE = "1. What is the capital of France? A) Paris B) London C) Berlin D) Madrid"

SURVEY_TEXT = """
What is your favorite color?Red, Blue, Green
Describe your experience

Gender? Male, Female
Age? 18-25, 26-35, 36-45, 46-55, 56+
Your name
""".strip("\n")


def make_question(**overrides) -> FormQuestion:
    data = {"id": "q1", "type": "short_answer", "question": "Your name?"}
    data.update(overrides)
    return FormQuestion(**data)


@pytest.fixture
def api_client():
    """FastAPI TestClient for router tests."""
    from formdraft.main import api
    return TestClient(api)
