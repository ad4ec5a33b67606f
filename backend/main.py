import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.dependencies import close_gateway, get_gateway
from api.router import router
from config import settings
from services.errors import ConfigurationError, MatchError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        get_gateway()
    except ConfigurationError as e:
        logger.error("AI service not configured: %s", e.message)
    yield
    await close_gateway()


app = FastAPI(
    title="CV Job Matcher API",
    description="AI-powered compatibility analysis between a CV and a job description",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MatchError)
async def match_error_handler(request: Request, exc: MatchError):
    status_code = 400 if exc.is_bad_request else 500
    return JSONResponse(status_code=status_code, content={"error": exc.message})


app.include_router(router)
