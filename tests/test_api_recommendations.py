import json

import pytest


@pytest.fixture()
def seeded(client, auth_headers, profile_payload):
    assert client.put("/api/profile", json=profile_payload, headers=auth_headers).status_code == 200
    response = client.post("/api/results", json={"hemoglobin": 11.2, "glucose": 95, "crp": 5.1}, headers=auth_headers)
    return response.json()["data"]["result"]["id"]


@pytest.fixture()
def fake_llm(monkeypatch, make_llm, bundle_text):
    llm = make_llm(text=bundle_text)
    monkeypatch.setattr("dropcheck.services.recommender._build_llm", lambda: llm)
    return llm


def test_requires_profile_then_result(client, auth_headers, profile_payload, fake_llm):
    response = client.post("/api/recommendations", headers=auth_headers)
    assert response.status_code == 404
    assert "profile" in response.json()["message"]

    client.put("/api/profile", json=profile_payload, headers=auth_headers)
    response = client.post("/api/recommendations", headers=auth_headers)
    assert response.status_code == 404
    assert "test" in response.json()["message"].lower()
    assert fake_llm.prompts == []


def test_recommendations_for_latest_result_are_cached(client, auth_headers, seeded, fake_llm):
    first = client.post("/api/recommendations", headers=auth_headers)
    assert first.status_code == 200
    data = first.json()["data"]
    assert data["result_id"] == seeded
    assert data["cached"] is False
    assert list(data["recommendations"]) == ["diet_advice", "exercise_routine", "lifestyle_tips"]
    assert "- Severity of Periods: Heavy" in fake_llm.prompts[0]
    assert "- Family History: Anemia, Thyroid" in fake_llm.prompts[0]

    second = client.post("/api/recommendations", headers=auth_headers).json()["data"]
    assert second["cached"] is True
    assert second["recommendations"] == data["recommendations"]
    assert len(fake_llm.prompts) == 1

    refreshed = client.post("/api/recommendations", params={"refresh": True}, headers=auth_headers).json()["data"]
    assert refreshed["cached"] is False
    assert len(fake_llm.prompts) == 2


def test_cached_bundle_lookup_and_export(client, auth_headers, seeded, fake_llm):
    assert client.get(f"/api/recommendations/{seeded}", headers=auth_headers).status_code == 404

    client.post("/api/recommendations", headers=auth_headers)

    cached = client.get(f"/api/recommendations/{seeded}", headers=auth_headers)
    assert cached.status_code == 200
    assert cached.json()["data"]["diet_advice"]["recommendations"][0]["title"] == "Diet one"

    exported = client.get(f"/api/recommendations/{seeded}/export.csv", headers=auth_headers)
    assert exported.status_code == 200
    assert exported.text.splitlines()[0] == "section,kind,title,text"


def test_generate_with_explicit_request(client, auth_headers, valid_request, fake_llm):
    response = client.post("/api/recommendations/generate", json=valid_request, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"]["exercise_routine"]["introduction"]
    assert "- Gender: Male" in fake_llm.prompts[0]


def test_generate_rejects_invalid_request_before_calling_model(client, auth_headers, valid_request, monkeypatch):
    def fail_build():
        raise AssertionError("model must not be called")

    monkeypatch.setattr("dropcheck.services.recommender._build_llm", fail_build)
    del valid_request["dietary_preference"]

    response = client.post("/api/recommendations/generate", json=valid_request, headers=auth_headers)

    assert response.status_code == 422
    payload = response.json()
    assert payload["error"] == "InvalidRequest"
    assert payload["details"]["errors"][0]["field"] == "dietary_preference"


@pytest.mark.parametrize(
    "llm_kwargs, error_name",
    [
        ({"error": TimeoutError("model timed out")}, "RecommendationGenerationFailed"),
        ({"text": json.dumps({"diet_advice": {"introduction": "Only one section"}})}, "MalformedModelOutput"),
    ],
)
def test_model_failures_share_the_caller_message(
    client, auth_headers, seeded, monkeypatch, make_llm, llm_kwargs, error_name
):
    monkeypatch.setattr("dropcheck.services.recommender._build_llm", lambda: make_llm(**llm_kwargs))

    response = client.post("/api/recommendations", headers=auth_headers)

    assert response.status_code == 502
    payload = response.json()
    assert payload["error"] == error_name
    assert payload["message"] == "Could not load recommendations. Please try again later."
    assert client.get(f"/api/recommendations/{seeded}", headers=auth_headers).status_code == 404


def test_profile_change_invalidates_cached_recommendations(client, auth_headers, seeded, profile_payload, fake_llm):
    first = client.post("/api/recommendations", headers=auth_headers).json()["data"]
    assert first["cached"] is False

    profile_payload["dietary_preferences"] = "Non-vegetarian"
    assert client.put("/api/profile", json=profile_payload, headers=auth_headers).status_code == 200
    assert client.get(f"/api/recommendations/{seeded}", headers=auth_headers).status_code == 404

    second = client.post("/api/recommendations", headers=auth_headers).json()["data"]
    assert second["cached"] is False
    assert len(fake_llm.prompts) == 2
    assert "- Dietary Preference: Non-vegetarian" in fake_llm.prompts[1]


def test_generate_rejects_non_finite_lab_values(client, auth_headers, valid_request, monkeypatch):
    def fail_build():
        raise AssertionError("model must not be called")

    monkeypatch.setattr("dropcheck.services.recommender._build_llm", fail_build)
    valid_request["crp"] = float("inf")

    response = client.post(
        "/api/recommendations/generate",
        content=json.dumps(valid_request),
        headers={**auth_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert response.json()["details"]["errors"][0]["field"] == "crp"
