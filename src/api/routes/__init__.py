from fastapi import FastAPI

from . import accounts, admin, applications, auth, health, jobs


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the FastAPI application."""
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(accounts.router)
    app.include_router(admin.router)
    app.include_router(admin.stats_router)
    app.include_router(admin.directory_router)
    app.include_router(jobs.router)
    app.include_router(applications.router)
