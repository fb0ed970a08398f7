import pytest

from backend.config import MAX_TRANSCRIPT_CHARS
from backend.errors import InvalidInputError, NotFoundError, ParseError, UpstreamError
from backend.models import WorkoutRequest
from backend.pipeline import extract_from_text, extract_from_url, run_pipeline, validate_workout
from tests.conftest import SQUAT_WORKOUT, FakeModelClient


def test_extract_from_url(video_lookups, model_client):
    workout = extract_from_url("https://youtu.be/abc123", model_client)

    assert workout.title == "20 Minute Leg Workout"
    assert [exercise.name for exercise in workout.exercises] == ["Bodyweight Squat", "Reverse Lunge", "Wall Sit"]
    assert all(exercise.sets and exercise.reps for exercise in workout.exercises)
    prompt = model_client.prompts[0]
    assert "Video Title: Leg Day At Home" in prompt
    assert video_lookups.transcript in prompt


def test_extract_from_url_truncates_long_transcripts(video_lookups, model_client):
    video_lookups.transcript = "a" * MAX_TRANSCRIPT_CHARS + "TAIL_MARKER"

    extract_from_url("https://youtu.be/abc123", model_client)

    prompt = model_client.prompts[0]
    assert "a" * MAX_TRANSCRIPT_CHARS in prompt
    assert "TAIL_MARKER" not in prompt


def test_extract_from_url_uses_video_title_when_model_omits_one(video_lookups):
    client = FakeModelClient(answer={"exercises": [{"name": "Burpee", "sets": 4, "reps": 12}]})

    workout = extract_from_url("https://www.youtube.com/watch?v=abc123", client)

    assert workout.title == "Leg Day At Home"
    assert workout.exercises[0].sets == "4"
    assert workout.exercises[0].reps == "12"
    assert workout.duration == "N/A"


def test_extract_from_url_invalid(video_lookups, model_client):
    with pytest.raises(InvalidInputError, match="Invalid YouTube URL"):
        extract_from_url("https://vimeo.com/123", model_client)
    assert model_client.prompts == []


def test_extract_from_url_without_exercises(video_lookups):
    client = FakeModelClient(answer={"title": "Vlog", "exercises": []})

    with pytest.raises(NotFoundError, match="Could not extract exercises from transcript"):
        extract_from_url("https://youtu.be/abc123", client)


def test_extract_from_text(model_client):
    workout = extract_from_text("plank 3x45sec, bicycle crunches 4x20", model_client)

    assert len(workout.exercises) == 3
    assert '"plank 3x45sec, bicycle crunches 4x20"' in model_client.prompts[0]


def test_extract_from_text_without_exercises():
    client = FakeModelClient(answer={"title": "Nothing"})

    with pytest.raises(InvalidInputError, match="Could not parse exercises from input"):
        extract_from_text("I went for a walk and had a coffee", client)


def test_extract_from_text_blank(model_client):
    with pytest.raises(InvalidInputError):
        extract_from_text("   ", model_client)
    assert model_client.prompts == []


def test_validate_workout_joins_equipment_list():
    data = {**SQUAT_WORKOUT, "equipment": ["Dumbbells", "Bench"]}

    workout = validate_workout(data, NotFoundError("none"))

    assert workout.equipment == "Dumbbells, Bench"


def test_validate_workout_rejects_nameless_exercise():
    data = {"title": "Core", "exercises": [{"sets": "3", "reps": "10"}]}

    with pytest.raises(ParseError):
        validate_workout(data, NotFoundError("none"))


def test_validate_workout_fills_missing_counts():
    data = {"exercises": [{"name": "Plank", "sets": None, "notes": ""}]}

    workout = validate_workout(data, NotFoundError("none"))

    assert workout.title == "Workout"
    assert workout.equipment == "Bodyweight only"
    assert workout.exercises[0].sets == "N/A"
    assert workout.exercises[0].reps == "N/A"
    assert workout.exercises[0].notes is None


@pytest.mark.parametrize(
    "request_body, message",
    [
        ({}, "Either URL or input is required"),
        ({"url": "  ", "input": ""}, "Either URL or input is required"),
        ({"url": "https://youtu.be/abc123", "input": "squats"}, "not both"),
    ],
)
def test_run_pipeline_requires_exactly_one_field(model_client, request_body, message):
    with pytest.raises(InvalidInputError, match=message):
        run_pipeline(WorkoutRequest(**request_body), model_client)


def test_run_pipeline_propagates_model_failures():
    client = FakeModelClient(error=UpstreamError("Ollama API request failed. Make sure Ollama is running."))

    with pytest.raises(UpstreamError):
        run_pipeline(WorkoutRequest(input="pushups 3x10"), client)
