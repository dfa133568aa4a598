"""FastAPI application entrypoint for the unified login gateway. Wiring and middleware only."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import router as v1_router
from app.core.config import settings

app = FastAPI(
    title="Unified Login Gateway",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Session cookies need credentialed CORS; only open it up in dev.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; points clients at the login endpoint."""
    return {
        "message": "Unified Login Gateway",
        "login": str(app.url_path_for("unified-login")),
    }
