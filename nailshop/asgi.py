"""
ASGI entrypoint: expose `app` for process managers / deployments.

- En production, un process manager (ex: gunicorn/uvicorn-workers) importe `nailshop.asgi:app`
  pour servir l'application FastAPI en mode ASGI.
- Toute la configuration (routes, middlewares, collaborateurs) est centralisée
  dans nailshop.app.create_app, ce fichier ne fait qu'exposer l'instance `app`.
"""

from nailshop.app import create_app

app = create_app()
