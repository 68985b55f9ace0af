# fittrack/main.py
import time
import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from fittrack.errors import FitTrackError
from fittrack.routers.auth import router as auth_router
from fittrack.routers.users import router as users_router
from fittrack.routers.exercises import router as exercises_router
from fittrack.routers.plans import router as plans_router
from fittrack.routers.sessions import router as sessions_router
from fittrack.routers.exercise_logs import router as exercise_logs_router
from fittrack.routers.weight_logs import router as weight_logs_router
from fittrack.routers.analytics import router as analytics_router
from fittrack.db import SessionLocal  # for healthz DB check
from fittrack.settings import get_settings

log = logging.getLogger("uvicorn")
settings = get_settings()
logging.getLogger("fittrack").setLevel(settings.LOG_LEVEL.upper())


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.SEED_EXERCISES:
        from fittrack.seed import seed_builtin_exercises
        with SessionLocal() as db:
            seed_builtin_exercises(db)
    yield


app = FastAPI(
    title="FitTrack API",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "auth", "description": "Registration & login"},
        {"name": "users", "description": "Profile"},
        {"name": "exercises", "description": "Exercise library"},
        {"name": "plans", "description": "Weekly workout plans and their exercises"},
        {"name": "sessions", "description": "Workout sessions and their exercise logs"},
        {"name": "logs", "description": "Per-exercise logs"},
        {"name": "weight", "description": "Body-weight history"},
        {"name": "analytics", "description": "Weekly stats and weight trend"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.exception_handler(FitTrackError)
async def fittrack_error_handler(request: Request, exc: FitTrackError):
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.get("/")
def root():
    return {"ok": True, "name": "FitTrack API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": settings.API_VERSION}

# Routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(exercises_router)
app.include_router(plans_router)
app.include_router(sessions_router)
app.include_router(exercise_logs_router)
app.include_router(weight_logs_router)
app.include_router(analytics_router)
