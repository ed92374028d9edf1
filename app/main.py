import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import create_tables
from app.dependencies import verify_api_key
from app.routers.vehicles import router as vehicles_router
from app.utils.exceptions import register_exception_handlers

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    logger.info("Vehicle tables ready")
    yield


app = FastAPI(
    title="Vehicle Management API",
    description="Create, update, search and delete vehicle records keyed by registration number",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(vehicles_router, prefix="/api", dependencies=[Depends(verify_api_key)])


@app.get("/health")
async def health_check():
    return {"status": "success", "data": {"service": "vehicle-management-api", "version": "0.1.0"}, "message": None}
