"""Shared fakes for the network edges: captions, oEmbed, and the model."""

from types import SimpleNamespace

import pytest
import requests
from fastapi.testclient import TestClient

from backend.main import app, get_client

SQUAT_TRANSCRIPT = (
    "Welcome back to this twenty minute leg workout. We start with bodyweight squats, "
    "three sets of fifteen reps, keep your chest up. Then reverse lunges, three sets of "
    "ten per leg. Finish with a sixty second wall sit."
)

SQUAT_WORKOUT = {
    "title": "20 Minute Leg Workout",
    "duration": "20 minutes",
    "equipment": "Bodyweight only",
    "exercises": [
        {"name": "Bodyweight Squat", "sets": "3", "reps": "15", "notes": "Keep your chest up"},
        {"name": "Reverse Lunge", "sets": "3", "reps": "10 per leg", "notes": ""},
        {"name": "Wall Sit", "sets": "1", "reps": "60 seconds"},
    ],
}


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeModelClient:
    """Returns a canned answer and remembers every prompt it was sent."""

    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.answer


def snippets(*texts):
    return [SimpleNamespace(text=text) for text in texts]


class FakeTranscriptApi:
    """Stands in for YouTubeTranscriptApi: ``list`` is the default strategy, ``fetch`` the English one."""

    def __init__(self, default=None, english=None, default_error=None, english_error=None):
        self.default = default
        self.english = english
        self.default_error = default_error
        self.english_error = english_error
        self.calls = []

    def list(self, video_id):
        self.calls.append(("list", video_id))
        if self.default_error:
            raise self.default_error
        if self.default is None:
            return []
        return [SimpleNamespace(fetch=lambda: self.default)]

    def fetch(self, video_id, languages=("en",)):
        self.calls.append(("fetch", video_id, list(languages)))
        if self.english_error:
            raise self.english_error
        return self.english


@pytest.fixture
def model_client():
    return FakeModelClient(answer=SQUAT_WORKOUT)


@pytest.fixture
def api_client(model_client):
    app.dependency_overrides[get_client] = lambda: model_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def video_lookups(monkeypatch):
    """Replace caption and title lookups used by the pipeline."""
    lookups = SimpleNamespace(transcript=SQUAT_TRANSCRIPT, title="Leg Day At Home", transcript_error=None)

    def fake_fetch_transcript(video_id):
        if lookups.transcript_error:
            raise lookups.transcript_error
        return lookups.transcript

    monkeypatch.setattr("backend.pipeline.fetch_transcript", fake_fetch_transcript)
    monkeypatch.setattr("backend.pipeline.fetch_video_title", lambda video_id: lookups.title)
    return lookups
