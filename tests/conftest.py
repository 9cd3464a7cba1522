import json
from collections.abc import Generator
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dropcheck.database import Base, get_db
from dropcheck.main import app


class FakeLLM:
    """Stands in for the llama_index OpenAI client; records every prompt it receives."""

    model = "fake-model"

    def __init__(self, text: str | None = None, error: Exception | None = None):
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    async def acomplete(self, prompt: str):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


def _section(topic: str) -> dict:
    return {
        "introduction": f"Your {topic} plan focuses on raising hemoglobin.",
        "recommendations": [
            {"title": f"{topic} one", "description": "Eat lentils, spinach and beans with vitamin C."},
            {"title": f"{topic} two", "description": "Space tea and coffee away from meals."},
        ],
        "scientific_rationale": "Hemoglobin of 11.2 g/dL with fatigue 7/10 points to low iron stores.",
    }


@pytest.fixture()
def bundle_payload() -> dict:
    return {
        "diet_advice": _section("Diet"),
        "exercise_routine": _section("Exercise"),
        "lifestyle_tips": _section("Lifestyle"),
    }


@pytest.fixture()
def bundle_text(bundle_payload) -> str:
    return "Here are your recommendations:\n" + json.dumps(bundle_payload)


@pytest.fixture()
def make_llm():
    return FakeLLM


@pytest.fixture()
def valid_request() -> dict:
    return {
        "age": 34,
        "height_cm": 180,
        "weight_kg": 78.5,
        "gender": "Male",
        "family_history": ["Diabetes"],
        "regular_medications": "None",
        "dietary_preference": "Non-vegetarian",
        "supplement_use": ["Iron"],
        "fatigue_level": 7,
        "dizziness_level": 3,
        "pale_skin_or_nails": 4,
        "shortness_of_breath": 2,
        "hemoglobin": 11.2,
        "glucose": 95,
        "crp": 5.1,
    }


@pytest.fixture()
def profile_payload() -> dict:
    return {
        "age": 29,
        "height": 165,
        "weight": 58,
        "gender": "Female",
        "family_history": True,
        "family_history_details": "Anemia, Thyroid",
        "regular_medications": "",
        "duration_of_periods": 6,
        "severity_of_periods": "Heavy",
        "irregular_cycles_or_spotting": False,
        "dietary_preferences": "Vegetarian",
        "supplement_use": ["Iron", "Vitamin B12"],
        "fatigue_level": 8,
        "dizziness_level": 6,
        "pale_skin_or_nails": 7,
        "shortness_of_breath": 4,
    }


@pytest.fixture()
def auth_headers() -> dict:
    return {"X-User-Id": "user-1"}


@pytest.fixture()
def db_session() -> Generator:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session) -> Generator[TestClient, None, None]:
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    # Tests use an in-memory DB via dependency override; skip app startup side effects.
    original_startup = list(app.router.on_startup)
    app.router.on_startup.clear()
    with TestClient(app) as test_client:
        yield test_client
    app.router.on_startup[:] = original_startup
    app.dependency_overrides.clear()
