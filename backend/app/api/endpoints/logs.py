"""
Logs API endpoint - serves recent application logs from the in-process ring
buffer filled by the loguru sink in app.services.log_sink.

Optional filtering by level, module, or free-text search.
"""
from typing import Optional

from fastapi import APIRouter, Query

from app.services.log_sink import recent_logs, MAX_LOG_ENTRIES

router = APIRouter()


@router.get("/logs")
async def get_logs(
    level: Optional[str] = Query(None, description="Filter by log level (INFO, WARNING, ERROR, DEBUG)"),
    search: Optional[str] = Query(None, description="Free-text search in log messages"),
    module: Optional[str] = Query(None, description="Filter by module name"),
    limit: int = Query(200, ge=1, le=MAX_LOG_ENTRIES, description="Max entries to return"),
):
    """Fetch recent logs, newest first."""
    logs = recent_logs()

    if level:
        level_upper = level.upper()
        logs = [l for l in logs if l.get("level") == level_upper]
    if search:
        search_lower = search.lower()
        logs = [l for l in logs if search_lower in l.get("msg", "").lower()]
    if module:
        module_lower = module.lower()
        logs = [l for l in logs if module_lower in l.get("module", "").lower()]

    logs = logs[:limit]

    return {"logs": logs, "total": len(logs)}
