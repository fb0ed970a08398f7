"""Text helpers for showing and exporting an extracted workout."""


def display_equipment(equipment):
    if isinstance(equipment, list):
        return ", ".join(equipment)
    return equipment


def has_value(value):
    return bool(value) and value != "N/A"


def format_for_hevy(workout):
    """Plain-text workout that pastes cleanly into Hevy, Strong and similar apps."""
    text = f"{workout['title']}\n"
    text += f"Duration: {workout['duration']}\n"
    text += f"Equipment: {display_equipment(workout['equipment'])}\n\n"

    for index, exercise in enumerate(workout["exercises"], start=1):
        text += f"{index}. {exercise['name']}\n"
        if has_value(exercise.get("sets")):
            text += f"   Sets: {exercise['sets']}\n"
        if has_value(exercise.get("reps")):
            text += f"   Reps: {exercise['reps']}\n"
        if exercise.get("notes"):
            text += f"   Notes: {exercise['notes']}\n"
        text += "\n"

    return text
