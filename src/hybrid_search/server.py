"""
FastAPI server exposing the search tools over HTTP.

Tool calls run in worker threads; each returns the tool envelope unchanged,
so failures inside a tool come back as ``success: false`` with status 200.
"""

import asyncio
from typing import Any

import structlog
from fastapi import Body, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import resolve_settings
from .logging_config import configure_logging
from .tools import EmbeddingLookupTool, HybridSearchTool

logger = structlog.get_logger(__name__)

app = FastAPI(title="HybridSearch", description="Hybrid lexical and vector retrieval tools")

_hybrid_tool: HybridSearchTool | None = None
_lookup_tool: EmbeddingLookupTool | None = None


def get_hybrid_tool() -> HybridSearchTool:
    """Get or create the hybrid search tool instance."""
    global _hybrid_tool
    if _hybrid_tool is None:
        _hybrid_tool = HybridSearchTool()
    return _hybrid_tool


def get_lookup_tool() -> EmbeddingLookupTool:
    """Get or create the lookup tool instance, which owns the persistent index."""
    global _lookup_tool
    if _lookup_tool is None:
        _lookup_tool = EmbeddingLookupTool()
    return _lookup_tool


def reset_tools() -> None:
    """Drop both tools, discarding the lookup index and health counters."""
    global _hybrid_tool, _lookup_tool
    _hybrid_tool = None
    _lookup_tool = None


class IndexRequest(BaseModel):
    """Request model for loading records into the lookup index."""

    records: list[Any]


@app.post("/api/search")
async def hybrid_search(payload: dict[str, Any] = Body(...)):
    """Rank the posted documents against the posted query."""
    try:
        result = await asyncio.to_thread(get_hybrid_tool().execute, payload)
        return result.model_dump(mode="json")
    except Exception as exc:
        logger.exception("search request failed")
        return JSONResponse({"error": str(exc)}, status_code=500)


@app.post("/api/lookup")
async def embedding_lookup(payload: dict[str, Any] = Body(...)):
    """Look up the nearest records in the persistent index."""
    try:
        result = await asyncio.to_thread(get_lookup_tool().execute, payload)
        return result.model_dump(mode="json")
    except Exception as exc:
        logger.exception("lookup request failed")
        return JSONResponse({"error": str(exc)}, status_code=500)


@app.post("/api/index")
async def load_index(request: IndexRequest):
    """Upsert records into the persistent lookup index."""
    try:
        tool = get_lookup_tool()
        stored = await asyncio.to_thread(tool.load, request.records)
        return {"stored": stored, "used_index_size": tool.index.size()}
    except Exception as exc:
        logger.exception("index request failed")
        return JSONResponse({"error": str(exc)}, status_code=500)


@app.get("/api/health")
async def health():
    """Report health for both tools."""
    return {
        "tools": [
            get_hybrid_tool().health_check().model_dump(mode="json"),
            get_lookup_tool().health_check().model_dump(mode="json"),
        ]
    }


def run_server(host: str = "127.0.0.1", port: int = 8000):
    """Run the FastAPI server."""
    import uvicorn

    settings = resolve_settings()
    configure_logging(settings.log_level, settings.log_format)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
