from typing import List

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

"""
Middlewares transverses de l'application.
- register_basic_middlewares: CORS restreint à l'allow-list (pas de credentials).
- register_origin_guard: rejette toute requête portant un Origin hors allow-list.
- register_security_middleware: en-têtes de sécurité pour une API JSON.
Notes:
- L'ordre d'ajout est important: le dernier middleware ajouté s'exécute en premier.
- Les requêtes sans en-tête Origin (Stripe, appels serveur) ne sont pas concernées par le garde.
"""


def register_basic_middlewares(app: FastAPI, cors_origins: List[str]) -> None:
    """
    Ajoute CORSMiddleware:
    - allow_origins: liste explicite (CORS_ORIGINS), jamais "*"
    - allow_credentials=False: les formulaires n'envoient pas de cookies
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )


def register_origin_guard(app: FastAPI, cors_origins: List[str]) -> None:
    """
    Garde d'origine: un navigateur hors allow-list reçoit 403 avant tout traitement.
    - Ajouté après CORSMiddleware pour s'exécuter avant lui (pré-vols compris).
    """
    allowed = set(cors_origins)

    @app.middleware("http")
    async def origin_guard(request: Request, call_next):
        origin = request.headers.get("origin")
        if origin and origin not in allowed:
            return JSONResponse(status_code=403, content={"error": "Blocked by CORS"})
        return await call_next(request)


def register_security_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)

        # En-têtes de sécurité
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Permissions-Policy", "geolocation=(), microphone=(), camera=()")
        return response
