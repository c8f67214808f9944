# app/routes/branding.py
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.core.config import Settings
from app.core.deps import get_store, settings_from_app
from app.services.branding import generate_hover_color, resolve_branding
from app.services.store import PrincipalStore

router = APIRouter(prefix="/api/public", tags=["branding"])


@router.get("/branding")
def get_branding(
    request: Request,
    store: PrincipalStore = Depends(get_store),
    settings: Settings = Depends(settings_from_app),
):
    """Branding for the school behind the Host header. Always 200."""
    hostname = request.headers.get("host") or "localhost"
    branding = resolve_branding(store, hostname, settings)

    body = branding.to_public()
    body["hoverColor"] = generate_hover_color(branding.primary_color)

    return JSONResponse(
        body,
        headers={"Cache-Control": "public, s-maxage=60, stale-while-revalidate=300"},
    )
