import os
from dotenv import load_dotenv

# Configuration
load_dotenv()

LLM_PROVIDER = os.getenv("LLM_PROVIDER", "ollama").lower()
SUPPORTED_PROVIDERS = ["ollama", "gemini"]

OLLAMA_HOST = os.getenv("OLLAMA_HOST", "http://localhost:11434").rstrip("/")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3.2")

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-pro")

# Seconds; local models can be slow on long transcripts
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "120"))
OEMBED_TIMEOUT = 10

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

MAX_TRANSCRIPT_CHARS = 8000
MIN_TRANSCRIPT_CHARS = 50
DEFAULT_VIDEO_TITLE = "Workout Video"
