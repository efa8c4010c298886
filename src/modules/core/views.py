import time
from typing import Any, Dict

import structlog
from django.http import HttpRequest, JsonResponse

from modules.core.container import get_container
from modules.core.models import utc_now

logger = structlog.get_logger(__name__)


def health_check(request: HttpRequest) -> JsonResponse:
    services: Dict[str, Dict[str, Any]] = {}
    overall_healthy = True

    # Check in-process store
    start = time.monotonic()
    container = get_container()
    services["store"] = {
        "status": "up",
        "collections": container.state.counts(),
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }

    # Check snapshot target
    snapshot = container.snapshot
    if snapshot.enabled:
        if not snapshot.path.is_dir():
            services["snapshot"] = {
                "status": "up",
                "path": str(snapshot.path),
                "exists": snapshot.path.exists(),
            }
        else:
            services["snapshot"] = {"status": "down", "path": str(snapshot.path)}
            overall_healthy = False
            logger.error("health_check.snapshot_unavailable", path=str(snapshot.path))
    else:
        services["snapshot"] = {"status": "disabled"}

    status_code = 200 if overall_healthy else 503

    logger.info(
        "health_check.completed", status="healthy" if overall_healthy else "unhealthy"
    )

    return JsonResponse(
        {
            "status": "healthy" if overall_healthy else "unhealthy",
            "timestamp": utc_now().isoformat(),
            "services": services,
        },
        status=status_code,
    )
