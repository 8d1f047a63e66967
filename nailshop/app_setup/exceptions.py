"""
Gestionnaires d'exceptions.
- ValidationError / UpstreamError -> JSON {"error": message} (400 / 500)
- SignatureError -> texte brut "Webhook Error: ..." (400), format attendu par le tableau de bord Stripe
- RequestValidationError (corps JSON mal formé) -> 400 {"error"} au lieu du 422 FastAPI
- HTTPException (429 rate limit, 404/405 du routeur Starlette) -> {"error": detail}
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nailshop.errors import NailshopError, SignatureError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SignatureError)
    async def on_signature_error(request: Request, exc: SignatureError):
        return PlainTextResponse(f"Webhook Error: {exc.message}", status_code=exc.status_code)

    @app.exception_handler(NailshopError)
    async def on_nailshop_error(request: Request, exc: NailshopError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def on_request_validation_error(request: Request, exc: RequestValidationError):
        logger.info("%s %s invalid body: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(StarletteHTTPException)
    async def on_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)
