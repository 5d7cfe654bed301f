import logging
import os
import warnings
from contextlib import asynccontextmanager

# Suppress Pydantic V1 compatibility warnings
warnings.filterwarnings("ignore", category=UserWarning, module="langchain_core._api.deprecation")
warnings.filterwarnings("ignore", category=UserWarning, module="pydantic.v1")

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import CORS_ORIGINS, LOG_LEVEL
from mealprep.database import engine, Base
import mealprep.models
from mealprep.api import grocery, login, meal_plan, meals, prep_plan, swap_meal, users
from mealprep.exceptions import MealPrepError
from mealprep.schemas.envelope import fail

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

ALEMBIC_INI = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "alembic.ini")


def run_migrations():
    """Run pending Alembic migrations, then make sure every table exists."""
    try:
        from alembic.config import Config
        from alembic import command
        alembic_cfg = Config(ALEMBIC_INI)
        alembic_cfg.attributes["configure_logger"] = False
        command.upgrade(alembic_cfg, "head")
        logger.info("[Alembic] Migrations applied successfully")
    except Exception as e:
        logger.warning(f"[Alembic] Migration failed, falling back to create_all: {e}")

    Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Database: {engine.url.render_as_string(hide_password=True)}")
    run_migrations()
    yield


app = FastAPI(title="Meal Prep Planner API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error envelope: every failure renders as {ok: false, error, details?} ---

@app.exception_handler(MealPrepError)
async def mealprep_error_handler(request: Request, exc: MealPrepError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} {exc.details or ''}")
    return JSONResponse(status_code=exc.status_code, content=fail(exc.message, exc.details))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    missing = [".".join(str(part) for part in err["loc"][1:]) for err in exc.errors() if err["type"] == "missing"]
    error = f"Missing required fields: {', '.join(missing)}" if missing else "Invalid request"
    details = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors())
    return JSONResponse(status_code=400, content=fail(error, details))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content=fail(str(exc.detail)), headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=fail("Internal server error", str(exc)))


app.include_router(users.router)
app.include_router(login.router)
app.include_router(prep_plan.router)
app.include_router(meal_plan.router)
app.include_router(swap_meal.router)
app.include_router(meals.router)
app.include_router(grocery.router)


# Root endpoint
@app.get("/")
def root():
    return {
        "message": "Welcome to Meal Prep Planner API",
        "docs": "/docs",
        "redoc": "/redoc"
    }


# Health check endpoint
@app.get("/health")
def health_check():
    return {"status": "healthy", "message": "API is running"}
