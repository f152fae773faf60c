from fastapi import APIRouter, Request

from backend import __version__

router = APIRouter()

APP_NAME = "Firebase Backend API"


@router.get("/")
async def root():
    return {
        "name": APP_NAME,
        "version": __version__,
        "status": "running",
        "docs": "/docs",
    }


@router.get("/health")
async def health_check(request: Request):
    # Only reports whether startup attached the clients; never calls Firebase
    health = {"status": "healthy", "components": {"api": "ok"}}
    services = getattr(request.app.state, "firebase", None)
    if services is None:
        health["status"] = "degraded"
        health["components"]["firebase"] = "not initialized"
    else:
        health["components"]["firebase"] = f"ok (project={services.project_id})"
    return health
