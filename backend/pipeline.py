from typing import Dict, Optional

from loguru import logger
from pydantic import ValidationError

from backend.errors import InvalidInputError, NotFoundError, ParseError
from backend.models import ExtractedWorkout, WorkoutRequest
from backend.prompts import build_manual_prompt, build_video_prompt
from backend.transcript import extract_video_id, fetch_transcript, fetch_video_title

NO_EXERCISES_IN_TRANSCRIPT = (
    "Could not extract exercises from transcript. The transcript might not contain "
    "clear workout instructions. Please try Manual Input mode."
)
NO_EXERCISES_IN_INPUT = (
    "Could not parse exercises from input. "
    "Please provide clearer exercise descriptions with sets/reps."
)


def validate_workout(data: Dict, missing_error, default_title: Optional[str] = None) -> ExtractedWorkout:
    """Turn the model's JSON into an ExtractedWorkout.

    ``missing_error`` is raised when the answer has no exercises; a payload
    that has exercises but the wrong shape is a ParseError.
    """
    if not data.get("exercises"):
        raise missing_error
    if default_title and not data.get("title"):
        data = {**data, "title": default_title}
    try:
        return ExtractedWorkout.model_validate(data)
    except ValidationError as e:
        logger.error(f"Model output does not match the workout schema: {e}")
        raise ParseError("The AI model returned an incomplete workout. Please try again.") from e


def extract_from_url(url: str, client) -> ExtractedWorkout:
    video_id = extract_video_id(url)
    if not video_id:
        raise InvalidInputError("Invalid YouTube URL")

    logger.info(f"Fetching transcript for video: {video_id}")
    title = fetch_video_title(video_id)
    transcript = fetch_transcript(video_id)

    logger.info("Sending transcript to the model for analysis...")
    logger.debug(f"Transcript preview: {transcript[:200]}...")
    data = client.generate(build_video_prompt(title, transcript))

    workout = validate_workout(data, NotFoundError(NO_EXERCISES_IN_TRANSCRIPT), default_title=title)
    logger.info(f"Extracted {len(workout.exercises)} exercises")
    return workout


def extract_from_text(text: str, client) -> ExtractedWorkout:
    if not text or not text.strip():
        raise InvalidInputError("Please describe the workout")

    logger.info("Processing manual input...")
    data = client.generate(build_manual_prompt(text))

    workout = validate_workout(data, InvalidInputError(NO_EXERCISES_IN_INPUT))
    logger.info(f"Formatted {len(workout.exercises)} exercises from manual input")
    return workout


def run_pipeline(request: WorkoutRequest, client) -> ExtractedWorkout:
    has_url = bool(request.url and request.url.strip())
    has_input = bool(request.input and request.input.strip())

    if has_url and has_input:
        raise InvalidInputError("Provide either URL or input, not both")
    if has_url:
        return extract_from_url(request.url.strip(), client)
    if has_input:
        return extract_from_text(request.input, client)
    raise InvalidInputError("Either URL or input is required")
