import os

import requests
import streamlit as st
from dotenv import load_dotenv

from backend.transcript import extract_video_id
from frontend.formatting import display_equipment, format_for_hevy, has_value

load_dotenv()
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:3001").rstrip("/")
# Local models can take a while on long transcripts
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "180"))


def request_workout(payload, fallback_error):
    """POST to the backend and return the workout dict, or raise with a user-facing message."""
    try:
        response = requests.post(f"{BACKEND_URL}/extract-workout", json=payload, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise RuntimeError(f"Could not reach the backend at {BACKEND_URL}: {e}") from e

    try:
        data = response.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    if not response.ok:
        raise RuntimeError(data.get("error") or fallback_error)
    return data


def analyze_video_url(video_url):
    if not video_url.strip():
        st.error("Please enter a video URL")
        return None
    if not extract_video_id(video_url):
        st.error("Invalid YouTube URL. Please use a valid YouTube video link.")
        return None

    with st.spinner("Extracting workout information..."):
        data = request_workout({"url": video_url.strip()}, "Failed to extract workout")

    if not data.get("exercises"):
        st.warning(
            "Found the video but could not extract detailed workout information. "
            "Try Manual Input mode and describe what you see in the video."
        )
        return None
    return data


def format_manual_input(workout_input):
    if not workout_input.strip():
        st.error("Please describe the workout")
        return None

    with st.spinner("Formatting workout..."):
        data = request_workout({"input": workout_input}, "Failed to format workout")

    if not data.get("exercises"):
        raise RuntimeError("No exercises found. Please provide more details.")
    return data


def render_workout(workout):
    st.subheader(workout["title"])
    st.write(f"⏱️ {workout['duration']}  |  🏋️ {display_equipment(workout['equipment'])}")

    for index, exercise in enumerate(workout["exercises"], start=1):
        st.markdown(f"**{index}. {exercise['name']}**")
        if has_value(exercise.get("sets")):
            st.markdown(f"Sets: {exercise['sets']}")
        if has_value(exercise.get("reps")):
            st.markdown(f"Reps: {exercise['reps']}")
        if exercise.get("notes"):
            st.caption(f"💡 {exercise['notes']}")

    st.markdown("---")
    st.write("Copy for Hevy (use the copy icon on the block below):")
    st.code(format_for_hevy(workout), language=None)
    st.success("Ready! Your workout is formatted for Hevy, Strong, or any tracking app.")


def main():
    st.title("🏋️ Workout Formatter")
    st.write("Convert YouTube videos into structured workout plans")

    mode = st.radio("Mode", ["YouTube URL", "Manual Input"], horizontal=True)

    if mode == "YouTube URL":
        video_url = st.text_input(
            "YouTube Video URL",
            placeholder="https://www.youtube.com/watch?v=... or https://youtu.be/...",
            help="The app will fetch the video's captions and extract workout details",
        )
        submitted = st.button("Extract from Video")
    else:
        workout_input = st.text_area(
            "Describe Your Workout",
            placeholder="Example: 30 min core workout - plank holds 3x45sec, bicycle crunches 4x20, leg raises 3x15...",
            height=150,
            help="Watch the video and type what you see: exercises, sets, reps, form cues",
        )
        submitted = st.button("Format Workout")

    if submitted:
        st.session_state.workout = None
        try:
            if mode == "YouTube URL":
                workout = analyze_video_url(video_url)
            else:
                workout = format_manual_input(workout_input)
        except RuntimeError as e:
            st.error(str(e))
            if mode == "YouTube URL":
                st.caption("Tip: Switch to Manual Input mode for reliable results")
            workout = None

        if workout:
            st.session_state.workout = workout

    if st.session_state.get("workout"):
        render_workout(st.session_state.workout)


if __name__ == "__main__":
    main()
