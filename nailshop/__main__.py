"""
Point d'entrée principal pour le backend FastAPI.

Usage:
    python -m nailshop

Ce mode lance uvicorn directement et lit quelques variables d'environnement:
- PORT: port d'écoute (par défaut 4242, via les Settings)
- UVICORN_RELOAD: active le reload auto en dev ("1"/"true"/"yes")
- LOG_LEVEL: niveau de logs uvicorn (ex: "info", "debug")
- FORWARDED_ALLOW_IPS: proxies autorisés à fixer l'IP client via X-Forwarded-For (défaut 127.0.0.1)
"""
import os

import uvicorn

from nailshop.config import load_settings

if __name__ == "__main__":
    settings = load_settings()
    # Activer le reload uniquement si explicitement demandé (ex: en local)
    reload_flag = os.environ.get("UVICORN_RELOAD", "").lower() in ("1", "true", "yes")
    log_level = os.environ.get("LOG_LEVEL", "info")
    forwarded_allow_ips = os.environ.get("FORWARDED_ALLOW_IPS", "127.0.0.1")
    uvicorn.run(
        "nailshop.asgi:app",  # on réutilise l'ASGI app unique
        host="0.0.0.0",
        port=settings.port,
        reload=reload_flag,
        log_level=log_level,
        proxy_headers=True,
        forwarded_allow_ips=forwarded_allow_ips,
    )
