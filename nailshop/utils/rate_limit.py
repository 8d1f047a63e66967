from typing import Any, Dict, List, Tuple
from fastapi import Request, Response, HTTPException
import logging
import os
import time

logger = logging.getLogger(__name__)


def _client_key(request: Request) -> str:
    # IP du client: derrière un proxy, uvicorn la réécrit depuis X-Forwarded-For
    # uniquement pour les proxies de confiance (FORWARDED_ALLOW_IPS)
    ip = request.client.host if request.client else "local"
    return f"ip:{ip}:{request.url.path}"


def _prune(store: Dict[str, Tuple[int, List[float]]], now: float) -> None:
    # Supprime les clés dont la fenêtre est écoulée
    for key in [k for k, (window, hits) in store.items() if not hits or now - hits[-1] >= window]:
        del store[key]


def optional_rate_limit(times: int, seconds: int):
    async def _dep(request: Request, response: Response):
        # Forcer le fallback mémoire en DEV si demandé
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            now = time.time()
            key = _client_key(request)
            store = getattr(request.app.state, "_rl_store", {})
            _prune(store, now)
            _, previous = store.get(key, (seconds, []))
            hits = [t for t in previous if now - t < seconds]
            if len(hits) >= times:
                raise HTTPException(status_code=429, detail="Too Many Requests")
            hits.append(now)
            store[key] = (seconds, hits)
            request.app.state._rl_store = store
            return

        # Respecter le flag global
        if getattr(request.app.state, "rate_limit_enabled", None) is not True:
            return

        from fastapi_limiter.depends import RateLimiter

        async def _identifier(req: Request) -> str:
            return _client_key(req)

        limiter = RateLimiter(times=times, seconds=seconds, identifier=_identifier)
        try:
            return await limiter(request, response)
        except HTTPException:
            raise
        except Exception as e:
            # Redis indisponible en cours de route: on laisse passer plutôt que bloquer les commandes
            logger.warning("rate_limit: limiter unavailable path=%s error=%s", request.url.path, e)
            return
    return _dep


def rate_limit_health_info(request: Request) -> Dict[str, Any]:
    enabled = getattr(request.app.state, "rate_limit_enabled", None)

    from fastapi_limiter import FastAPILimiter
    limiter_ready = getattr(FastAPILimiter, "redis", None) is not None
    backend = "redis" if limiter_ready else None
    if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
        backend = "memory"

    info: Dict[str, Any] = {
        "enabled": (bool(enabled) if enabled is not None else None),
        "ready": limiter_ready,
        "backend": backend,
    }

    redis_url = os.getenv("RATE_LIMIT_REDIS_URL")
    if backend == "redis" and redis_url:
        from urllib.parse import urlparse
        p = urlparse(redis_url)
        info["redis"] = {
            "scheme": p.scheme,
            "host": p.hostname,
            "port": p.port,
        }

    return info
