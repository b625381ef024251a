from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from seqid_app.config import settings
from seqid_app.dependencies import get_storage
from seqid_app.exceptions import SeqIdError
from seqid_app.storage.strategies import BlobStorageStrategy
from seqid_app.api.v1 import auth, ids, records, admin

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Finds sequential 11/15 digit IDs in text and tracks them per user",
    debug=settings.debug
)


@app.exception_handler(SeqIdError)
async def seqid_error_handler(request: Request, exc: SeqIdError):
    """Domain errors become JSON with the error's status and code"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code}
    )


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
async def health_check(storage: BlobStorageStrategy = Depends(get_storage)):
    """Health check endpoint"""
    storage_ok = await storage.ping()
    return {
        "status": "healthy" if storage_ok else "degraded",
        "storage": "ok" if storage_ok else "unreachable",
        "environment": settings.environment
    }




######## Include routers
app.include_router(auth.router, prefix="/api/v1")
app.include_router(ids.router, prefix="/api/v1")
app.include_router(records.router, prefix="/api/v1")
app.include_router(admin.router, prefix="/api/v1")
