"""FastAPI adapter – health router."""
from __future__ import annotations

from typing import Any, Awaitable, Callable

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from taskmanager.observability.logging import get_logger

log = get_logger(__name__)

ReadinessCheck = Callable[[], Awaitable[bool]]


def FastAPIHealthRouter(
    path: str = "/health",
    readiness_checks: list[ReadinessCheck] | None = None,
    tags: list[str] | None = None,
) -> APIRouter:
    """Return a liveness + readiness router.

    Liveness is at ``{path}/live``, readiness at ``{path}/ready``. Readiness
    answers 503 as soon as one check returns ``False`` or raises.
    """
    router = APIRouter(tags=tags or ["ops"])
    checks = readiness_checks or []

    @router.get(f"{path}/live")
    async def liveness() -> dict[str, str]:
        return {"status": "ok"}

    @router.get(f"{path}/ready")
    async def readiness() -> Any:
        results: dict[str, bool] = {}
        for check in checks:
            name = getattr(check, "__name__", repr(check))
            try:
                ok = await check()
            except Exception as exc:  # noqa: BLE001 - a failing probe is a result, not an error
                log.warning("health.check_failed", check=name, error=str(exc))
                ok = False
            results[name] = ok

        all_ok = all(results.values())
        return JSONResponse(
            status_code=200 if all_ok else 503,
            content={"status": "ok" if all_ok else "degraded", "checks": results},
        )

    return router


__all__ = ["FastAPIHealthRouter", "ReadinessCheck"]
