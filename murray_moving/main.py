from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import auth, jobs, pricing

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("murray_moving")

app = FastAPI(
    title="Murray Moving Back Office",
    description="Tariff pricing and job lifecycle for Murray Moving",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(auth.router, prefix="/api")
app.include_router(pricing.router, prefix="/api")
app.include_router(jobs.router, prefix="/api")

if not settings.JWT_SECRET or not settings.ADMIN_PASSWORD_HASH:
    logger.warning("JWT_SECRET or ADMIN_PASSWORD_HASH not set, admin login will fail")


@app.get("/health")
def health():
    return {"status": "ok", "app": "murray-moving-backoffice"}
