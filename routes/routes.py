from fastapi import FastAPI
from .auth import router as auth_router
from .profiles import router as profiles_router
from .opportunities import router as opportunities_router
from .applications import router as applications_router
from .messages import router as message_routes
from .notifications import router as notifications_router
from .uploads import router as uploads_router
from .storage import router as storage_router

def setup_routes(app: FastAPI):
    @app.get("/")
    async def root():
        return {"message": "API is alive!"}

    app.include_router(
        auth_router,
        prefix="/auth",
        tags=["auth"],
    )

    app.include_router(
        profiles_router,
        prefix="/profiles",
        tags=["profiles"],
    )

    app.include_router(
        opportunities_router,
        prefix="/opportunities",
        tags=["opportunities"],
    )

    app.include_router(
        applications_router,
        prefix="/applications",
        tags=["applications"],
    )

    app.include_router(
        message_routes,
        prefix="/messages",
        tags=["messages"],
    )

    app.include_router(
        notifications_router,
        prefix="/notifications",
        tags=["notifications"],
    )

    app.include_router(
        uploads_router,
        prefix="/uploads",
        tags=["uploads"],
    )

    app.include_router(
        storage_router,
        prefix="/storage",
        tags=["storage"],
    )
