import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from backend import config
from backend.errors import WorkoutError
from backend.llm import get_model_client
from backend.logger import setup_logger
from backend.models import ErrorResponse, ExtractedWorkout, StatusResponse, WorkoutRequest
from backend.pipeline import run_pipeline

setup_logger(config.LOG_LEVEL)

app = FastAPI(title="Workout Formatter API")

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # for demo
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(WorkoutError)
async def workout_error_handler(request: Request, exc: WorkoutError):
    if exc.status_code >= 500:
        logger.error(f"{request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.url.path} rejected ({exc.status_code}): {exc.message.splitlines()[0]}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning(f"{request.url.path} rejected malformed body: {errors}")
    if all(error.get("type") == "missing" for error in errors):
        message = "Either URL or input is required"
    else:
        message = "Invalid request body: url and input must be strings"
    return JSONResponse(status_code=400, content={"error": message})


def get_client():
    return get_model_client()


@app.get("/", response_model=StatusResponse)
def health_check():
    return StatusResponse(
        status="OK",
        message="Workout Formatter API with Transcript Extraction",
        endpoints={
            "POST /extract-workout": "Extract workout from YouTube transcript or manual input",
        },
    )


@app.post(
    "/extract-workout",
    response_model=ExtractedWorkout,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def extract_workout(request: WorkoutRequest, client=Depends(get_client)):
    try:
        return run_pipeline(request, client)
    except WorkoutError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error while processing workout: {e}")
        raise WorkoutError("Failed to process workout") from e


if __name__ == "__main__":
    logger.info(f"Backend server running on http://{config.HOST}:{config.PORT}")
    logger.info(f"API endpoint: http://{config.HOST}:{config.PORT}/extract-workout")
    logger.info(f"Using model provider: {config.LLM_PROVIDER}")
    uvicorn.run(app, host=config.HOST, port=config.PORT)
