"""
Registre central des routers.
- API: payments (checkout + webhook Stripe), inquiries (demandes de prestation)
- Health: health_router
"""
from fastapi import FastAPI

from nailshop.health.router import router as health_router
from nailshop.inquiries import views as inquiries_views
from nailshop.payments import views as payments_views


def register_routers(app: FastAPI) -> None:
    # API
    app.include_router(payments_views.router)
    app.include_router(inquiries_views.router)
    # Health & monitoring
    app.include_router(health_router)
