import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum
from api.routes import router as companies_router
from api.links_routes import router as links_router
from config.settings import settings
from db.session import init_db

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the submitted-link table on first start"""
    init_db()
    yield


app = FastAPI(
    title="Hire Radar API",
    description="Aggregated apply links per company",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(companies_router, prefix="/api", tags=["Companies"])
app.include_router(links_router, prefix="/api/links", tags=["Links"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


# Lambda handler
handler = Mangum(app, lifespan="auto")
