"""Transcript and title lookup for YouTube videos.

Captions come from youtube-transcript-api; the human-readable title comes from
YouTube's public oEmbed endpoint. Only the transcript is required: a missing
title falls back to a placeholder.
"""

import re
from typing import Optional

import requests
from loguru import logger
from youtube_transcript_api import YouTubeTranscriptApi

from backend.config import DEFAULT_VIDEO_TITLE, MIN_TRANSCRIPT_CHARS, OEMBED_TIMEOUT
from backend.errors import NotFoundError

OEMBED_URL = "https://www.youtube.com/oembed"

VIDEO_ID_PATTERN = re.compile(
    r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/shorts/|youtube\.com/embed/)"
    r"([^&\s?#/]+)"
)

NO_TRANSCRIPT_MESSAGE = (
    "Could not extract transcript from this video. This could be because:\n\n"
    "1. The video has no captions/subtitles\n"
    "2. Captions are auto-generated and not accessible\n"
    "3. The video is private or restricted\n\n"
    "Please:\n"
    "- Try a different video with manual captions, OR\n"
    "- Use Manual Input mode and type the exercises you see in the video"
)

TRANSCRIPT_TOO_SHORT_MESSAGE = (
    "Transcript is too short or empty. "
    "Please use Manual Input mode and describe what you see in the video."
)


def extract_video_id(url: str) -> Optional[str]:
    """Return the video id of a watch, youtu.be, shorts or embed link."""
    if not url:
        return None
    match = VIDEO_ID_PATTERN.search(url)
    return match.group(1) if match else None


def _fetch_default_language(api, video_id: str):
    for transcript in api.list(video_id):
        return transcript.fetch()
    raise NotFoundError(NO_TRANSCRIPT_MESSAGE)


def _fetch_english(api, video_id: str):
    return api.fetch(video_id, languages=["en"])


def _join_snippets(snippets) -> str:
    return " ".join(snippet.text for snippet in snippets)


def fetch_transcript(video_id: str, api=None) -> str:
    """Fetch captions for a video and join them into one text blob.

    The first caption track the video offers is tried first, then an explicit
    English track. Raises NotFoundError when neither works or the text is too
    short to describe a workout.
    """
    api = api or YouTubeTranscriptApi()
    strategies = [("auto", _fetch_default_language), ("en", _fetch_english)]

    transcript = ""
    for method, strategy in strategies:
        try:
            transcript = _join_snippets(strategy(api, video_id))
        except Exception as e:  # any failure moves on to the next caption track
            logger.warning(f"Transcript method '{method}' failed for {video_id}: {e}")
            continue
        logger.info(f"Transcript fetched ({method}): {len(transcript)} characters")
        break
    else:
        logger.error(f"All transcript methods failed for {video_id}")
        raise NotFoundError(NO_TRANSCRIPT_MESSAGE)

    if len(transcript.strip()) < MIN_TRANSCRIPT_CHARS:
        raise NotFoundError(TRANSCRIPT_TOO_SHORT_MESSAGE)
    return transcript


def fetch_video_title(video_id: str) -> str:
    """Look the title up through oEmbed, or return the placeholder title."""
    params = {"url": f"https://www.youtube.com/watch?v={video_id}", "format": "json"}
    try:
        response = requests.get(OEMBED_URL, params=params, timeout=OEMBED_TIMEOUT)
        response.raise_for_status()
        title = response.json().get("title")
    except (requests.RequestException, ValueError, AttributeError) as e:
        logger.warning(f"Could not fetch video title for {video_id}: {e}")
        return DEFAULT_VIDEO_TITLE

    if not title:
        return DEFAULT_VIDEO_TITLE
    logger.info(f"Video title: {title}")
    return title
