"""Main FastAPI application."""
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from exercise_field_parser.api.routes import router
from exercise_field_parser.config import settings

app = FastAPI(title="Exercise Field Parser API")

# Configure CORS to allow requests from the workout editor UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


def run() -> None:
    """Serve the API with uvicorn; auto-reload only in development."""
    uvicorn.run(
        "exercise_field_parser.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
