"""FastAPI web server for sitelens."""

from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from sitelens import (
    Analyzer,
    AnalyzerConfig,
    EnhancementStatus,
    ScrapeRequest,
    SQLiteWebsiteStore,
    WebsiteRecord,
    WebsiteRecordUpdate,
    WebsiteStore,
    to_record,
    __version__,
)
from sitelens.exceptions import StorageError
from sitelens.logging import configure_logging, get_logger

log = get_logger("api")


# Response models
class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


class RecordResponse(BaseModel):
    """Single record envelope."""

    message: str
    data: WebsiteRecord


class RecordListResponse(BaseModel):
    """Record list envelope."""

    message: str
    count: int
    data: list[WebsiteRecord]


def create_app(
    config: AnalyzerConfig | None = None,
    analyzer: Analyzer | None = None,
    store: WebsiteStore | None = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        config: AnalyzerConfig instance, uses defaults if None
        analyzer: Analyzer to use, built from config if None
        store: Record store, SQLite at config.database_path if None
    """
    config = config or AnalyzerConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Own the analyzer and store for the app's lifetime."""
        configure_logging(config)
        app.state.analyzer = analyzer or Analyzer(config)
        app.state.store = store or SQLiteWebsiteStore(config.database_path)
        yield
        await app.state.store.close()

    app = FastAPI(
        title="sitelens API",
        description="Website brand and description analyzer",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        log.error("storage_error", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content={"error": "Database operation failed"})

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health_check():
        """Check API health status."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            timestamp=datetime.now().isoformat(),
        )

    @app.get("/api/ai/status", response_model=EnhancementStatus, tags=["System"])
    async def ai_status(request: Request):
        """Report whether AI enhancement is enabled and which model it uses."""
        return request.app.state.analyzer.status()

    @app.post(
        "/api/websites/analyze",
        response_model=RecordResponse,
        status_code=201,
        tags=["Websites"],
    )
    async def analyze_website(body: ScrapeRequest, request: Request):
        """
        Scrape a website, enhance its description and store the result.

        Scrape failures return 422 with the error category.
        """
        log.info("analysis_request", url=body.url, enhance=body.enhance)
        result = await request.app.state.analyzer.analyze(body.url, enhance=body.enhance)

        if not result.success:
            return JSONResponse(
                status_code=422,
                content={
                    "error": "Failed to scrape website",
                    "details": result.error,
                    "error_category": result.error_category.value,
                },
            )

        record = await request.app.state.store.create(to_record(result))
        return RecordResponse(message="Website analyzed successfully", data=record)

    @app.get("/api/websites", response_model=RecordListResponse, tags=["Websites"])
    async def list_websites(request: Request):
        """List stored analyses, newest first."""
        records = await request.app.state.store.list_all()
        return RecordListResponse(
            message="Website records retrieved successfully",
            count=len(records),
            data=records,
        )

    @app.get("/api/websites/{record_id}", response_model=RecordResponse, tags=["Websites"])
    async def get_website(record_id: int, request: Request):
        """Fetch one stored analysis."""
        record = await request.app.state.store.get(record_id)
        if record is None:
            raise HTTPException(status_code=404, detail="Website record not found")
        return RecordResponse(message="Website record retrieved successfully", data=record)

    @app.put("/api/websites/{record_id}", response_model=RecordResponse, tags=["Websites"])
    async def update_website(record_id: int, changes: WebsiteRecordUpdate, request: Request):
        """Edit brand name and/or description of a stored analysis."""
        if not changes.changes():
            raise HTTPException(
                status_code=400,
                detail="At least one field (brand_name, description) is required for update",
            )
        record = await request.app.state.store.update(record_id, changes)
        if record is None:
            raise HTTPException(status_code=404, detail="Website record not found")
        return RecordResponse(message="Website record updated successfully", data=record)

    @app.delete("/api/websites/{record_id}", response_model=RecordResponse, tags=["Websites"])
    async def delete_website(record_id: int, request: Request):
        """Delete a stored analysis and return it."""
        record = await request.app.state.store.delete(record_id)
        if record is None:
            raise HTTPException(status_code=404, detail="Website record not found")
        return RecordResponse(message="Website record deleted successfully", data=record)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
