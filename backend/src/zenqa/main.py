import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from src.zenqa.api.endpoints import execution, generation
from src.zenqa.api.models import HealthResponse
from src.zenqa.core.config import get_settings
from src.zenqa.core.errors import setup_exception_handlers

logging.basicConfig(
	level=logging.INFO,
	format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
	handlers=[logging.StreamHandler(sys.stdout)]
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
	settings = get_settings()
	logger.info(f"🧘 Starting {settings.SERVICE_NAME} ({settings.ENVIRONMENT})...")

	yield

	logger.info("Shutting down...")


settings = get_settings()

app = FastAPI(
	title=f"{settings.PROJECT_NAME} API",
	version=settings.VERSION,
	default_response_class=ORJSONResponse,
	lifespan=lifespan,
)

app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.CORS_ORIGINS,
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

setup_exception_handlers(app)

app.include_router(generation.router, prefix=settings.API_PREFIX, tags=["Generation"])
app.include_router(execution.router, prefix=settings.API_PREFIX, tags=["Execution"])


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
	return HealthResponse(
		status="UP",
		service=settings.SERVICE_NAME,
		timestamp=datetime.now().isoformat(),
	)
