# backend/models.py
from typing import Dict, List, Optional

from pydantic import BaseModel, field_validator


def _as_text(value):
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class WorkoutRequest(BaseModel):
    url: Optional[str] = None
    input: Optional[str] = None


class Exercise(BaseModel):
    name: str
    sets: str = "N/A"
    reps: str = "N/A"
    notes: Optional[str] = None

    @field_validator("sets", "reps", mode="before")
    @classmethod
    def coerce_counts(cls, value):
        if value is None or value == "":
            return "N/A"
        return _as_text(value)

    @field_validator("notes", mode="before")
    @classmethod
    def coerce_notes(cls, value):
        return _as_text(value) or None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        if not value.strip():
            raise ValueError("exercise name is empty")
        return value.strip()


class ExtractedWorkout(BaseModel):
    title: str = "Workout"
    duration: str = "N/A"
    equipment: str = "Bodyweight only"
    exercises: List[Exercise]

    @field_validator("title", mode="before")
    @classmethod
    def default_title(cls, value):
        return _as_text(value) or "Workout"

    @field_validator("duration", mode="before")
    @classmethod
    def coerce_duration(cls, value):
        return _as_text(value) or "N/A"

    @field_validator("equipment", mode="before")
    @classmethod
    def join_equipment(cls, value):
        # models sometimes answer with a list of items
        if isinstance(value, list):
            return ", ".join(str(item) for item in value) or "Bodyweight only"
        if not value:
            return "Bodyweight only"
        return value


class ErrorResponse(BaseModel):
    error: str


class StatusResponse(BaseModel):
    status: str
    message: str
    endpoints: Dict[str, str]
