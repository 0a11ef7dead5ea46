"""
API router aggregator.

All feature routes are registered here and mounted under ``/api``.
"""

from fastapi import APIRouter

from app.features.auth.router import router as auth_router
from app.features.clients.router import router as clients_router
from app.features.dashboard.router import router as dashboard_router
from app.features.external_data.router import router as external_data_router
from app.features.logistics.router import router as logistics_router
from app.features.master_data.router import router as master_data_router
from app.features.recycling.router import router as recycling_router
from app.features.reports.router import router as reports_router
from app.features.settings.router import router as settings_router
from app.features.translation.router import router as translation_router
from app.features.users.router import router as users_router
from app.features.waste_data.router import router as waste_data_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(clients_router)
api_router.include_router(waste_data_router)
api_router.include_router(recycling_router)
api_router.include_router(reports_router)
api_router.include_router(master_data_router)
api_router.include_router(settings_router)
api_router.include_router(users_router)
api_router.include_router(dashboard_router)
api_router.include_router(logistics_router)
api_router.include_router(external_data_router)
api_router.include_router(translation_router)
