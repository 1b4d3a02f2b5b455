# ecocart/api/v1/routers/health.py
import time
import subprocess
from fastapi import APIRouter, Request
from ecocart.core.config import get_settings
from ecocart.db import mongo
from ecocart.db.redis import get_redis  # returns Redis instance or None

router = APIRouter(tags=["health"])
START_TIME = time.time()


def _git_sha(short: bool = True) -> str:
    try:
        cmd = ["git", "rev-parse", "--short" if short else "HEAD"]
        return subprocess.check_output(cmd).decode().strip()
    except Exception:
        return "unknown"


@router.get("/health")
async def health(request: Request):
    """
    Tolerant health check:
    - ping Mongo via Motor (async)
    - Redis 'skipped' when not configured (cache only)
    - classifier loaded or not (classification endpoints answer 503 without it)
    """
    settings = get_settings()
    checks: dict[str, object] = {
        "app_name": settings.APP_NAME,
        "env": settings.APP_ENV,
        "debug": settings.DEBUG,
        "version": settings.GIT_SHA if settings.GIT_SHA != "unknown" else _git_sha(),
        "uptime_seconds": int(time.time() - START_TIME),
    }

    # --- Mongo ---
    try:
        db = mongo.get_db()
        await db.command("ping")
        checks["mongodb"] = "ok"
    except Exception as e:
        checks["mongodb"] = f"error: {e}"

    # --- Redis (tolerant) ---
    try:
        r = get_redis()
        if r:
            await r.ping()
            checks["redis"] = "ok"
        else:
            checks["redis"] = "skipped"
    except Exception as e:
        checks["redis"] = f"error: {e}"

    # --- Classifier ---
    classifier = getattr(request.app.state, "classifier", None)
    checks["classifier"] = "ok" if classifier is not None else "unavailable"
    if classifier is not None:
        checks["classifier_corpus_version"] = classifier.artifact.corpus_version

    checks["openai_api_key_set"] = bool(settings.OPENAI_API_KEY)

    # Global status: only real health checks count (a missing LLM key only disables rewrites)
    def _is_ok(v):
        return v in ("ok", "skipped") or v is True

    health_keys = ("mongodb", "redis", "classifier")
    status = "ok" if all(_is_ok(checks.get(k)) for k in health_keys) else "error"

    return {"status": status, "checks": checks, "timestamp": int(time.time())}
