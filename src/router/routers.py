# src/router/routers.py

from fastapi import FastAPI
from src.auth.auth_controller import router as auth_router
from src.modules.user.user_controller import router as user_router
from src.modules.triage.triage_controller import router as triage_router
from src.modules.doctors.doctors_controller import router as doctors_router
from src.modules.appointments.appointments_controller import router as appointments_router
from src.modules.reports.reports_controller import router as reports_router
from src.modules.notifications.notifications_controller import router as notifications_router
from src.modules.documents.documents_controller import router as documents_router
from src.modules.dashboard.dashboard_controller import router as dashboard_router

def include_routers(app: FastAPI) -> None:
    """Include all API routers in the FastAPI application."""
    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(triage_router)
    app.include_router(doctors_router)
    app.include_router(appointments_router)
    app.include_router(reports_router)
    app.include_router(notifications_router)
    app.include_router(documents_router)
    app.include_router(dashboard_router)
