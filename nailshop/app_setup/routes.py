"""
Routes simples (hors routers): liveness et sonde de santé.
- / : texte brut, utilisé par l'hébergeur pour vérifier que le process répond
- /healthz : {"ok": true}
- /favicon.ico: pas de contenu (204) pour éviter des 404 dans les logs.
"""
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, Response
from starlette.status import HTTP_204_NO_CONTENT


def register_routes(app: FastAPI) -> None:
    @app.get("/", include_in_schema=False, response_class=PlainTextResponse)
    def root():
        return "Backend is working!"

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=HTTP_204_NO_CONTENT)
