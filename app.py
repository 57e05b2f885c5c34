"""
Helix Cognition Engine API

Local FastAPI wrapper for offline trace analysis. Recorded traces are
replayed on a virtual clock; nothing is stored and the engine itself makes
no network calls.
"""

from typing import Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse

from src.engine.replay import replay_trace, summarize_timeline
from src.models.engine_config import EngineConfig
from src.parsers.trace_parser import TraceParser

app = FastAPI(
    title="Helix Cognition Engine",
    description="Replay recorded interaction traces to inspect archetype classification and phase",
    version="1.0.0",
)


@app.get("/")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "helix-cognition-engine",
        "version": "1.0.0",
    }


@app.get("/health")
async def health():
    """Alias for health check."""
    return await health_check()


@app.post("/replay")
async def replay(
    file: UploadFile = File(...),
    phase_seconds: Optional[float] = Query(default=None, alias="phaseSeconds"),
):
    """
    Replay a CSV interaction trace.

    Returns the timeline summary and final session state.
    """
    if not file.filename or not file.filename.lower().endswith('.csv'):
        raise HTTPException(status_code=400, detail="File must be a CSV")

    content = (await file.read()).decode('utf-8-sig', errors='replace')

    parser = TraceParser()
    try:
        events = parser.parse_string(content)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not events:
        raise HTTPException(status_code=400, detail="No valid events found in trace")

    config = EngineConfig(phase_seconds=phase_seconds)
    states = replay_trace(events, config)

    response = {
        "events_count": len(events),
        "phase_seconds": config.phase_seconds,
        "timeline": summarize_timeline(states),
        "warnings": parser.warnings if parser.warnings else None,
    }
    return JSONResponse(content=response)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
