import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .database import connect_to_mongo, close_mongo_connection
from .routes import conditions_router, eligibility_router
from .services.mongo_service import mongo_service

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await connect_to_mongo()
    logger.info("Connected to MongoDB")
    yield
    # Shutdown
    await close_mongo_connection()
    logger.info("Disconnected from MongoDB")


app = FastAPI(
    title=settings.app_name,
    description="Checks student profiles against scholarship eligibility criteria",
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(eligibility_router, prefix=settings.api_prefix)
app.include_router(conditions_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {"message": f"{settings.app_name} is running", "version": settings.app_version}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    database_ok = await mongo_service.health_check()
    return {
        "status": "healthy" if database_ok else "degraded",
        "service": "scholarcheck",
        "database": "connected" if database_ok else "unavailable"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("scholarcheck.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
