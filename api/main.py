"""
Census Generation API Server

REST API that generates synthetic census/enrollment spreadsheets.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from census import __version__ as generator_version
from .config import get_settings
from .routers import census, health

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ============================================
# Application Lifespan
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown"""
    logger.info(f"Starting {settings.app_name} (generator {generator_version})")
    
    yield
    
    logger.info(f"Shutting down {settings.app_name}")


# ============================================
# FastAPI Application
# ============================================

app = FastAPI(
    title=settings.app_name,
    description="""
    Generate synthetic census/enrollment spreadsheets for demo and test environments.
    
    ## Overview
    
    Each household has one employee and, depending on the composition,
    a spouse and one or two children. Every row carries a synthetic,
    non-issuable SSN; employee IDs are unique across a whole request.
    
    ## Endpoints
    
    - **POST /api/v1/census/generate** - Download census files (xlsx or zip)
    - **POST /api/v1/census/preview** - Same request, rows returned as JSON
    - **GET /api/v1/census/compositions** - Supported compositions and limits
    - **GET /api/v1/health** - Health check
    
    ## Usage Example
    
    ```python
    import httpx
    
    response = httpx.post(
        'http://localhost:8000/api/v1/census/generate',
        json={
            'num_files': 1,
            'num_households': 5,
            'composition': 'Employee + Spouse + Child'
        }
    )
    open('census.xlsx', 'wb').write(response.content)
    ```
    """,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Census-Files", "X-Census-Timestamp"],
)

app.include_router(health.router)
app.include_router(census.router)


# ============================================
# Root Endpoints
# ============================================

@app.get("/health", tags=["health"])
async def root_health():
    """Liveness check for load balancers"""
    return {"status": "ok"}


@app.get("/", tags=["health"])
async def root():
    """API information"""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/api/v1/health",
        "endpoints": {
            "generate": "POST /api/v1/census/generate",
            "preview": "POST /api/v1/census/preview",
            "compositions": "GET /api/v1/census/compositions"
        }
    }


# ============================================
# Run with: uvicorn api.main:app --port 8000
# ============================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
