from __future__ import annotations

import os

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .auth.dependencies import require_admin, require_user
from .auth.models import LoginRequest
from .auth.users import authenticate
from .config import PHOTO_MAXWIDTH, PHOTO_PATH
from .errors import FeedError
from .feed.models import FavoriteResponse, FeedResponse
from .state import AppState, get_state

app = FastAPI(title="Bar Feed API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "barfeed-secret-change-in-production"),
)


@app.exception_handler(FeedError)
async def feed_error_handler(request: Request, exc: FeedError) -> JSONResponse:
    return JSONResponse(status_code=exc.http_status, content=exc.model_dump())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(status_code=422, content={"success": False, "message": message})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── User endpoints ───────────────────────────────────────────────────────


@app.get("/home", response_model=FeedResponse)
async def home(
    lat: str | None = None,
    lng: str | None = None,
    page: str | None = None,
    limit: str | None = None,
    user: dict = Depends(require_user),
    state: AppState = Depends(get_state),
) -> FeedResponse:
    # Coordinates arrive as raw strings so validation can accept 0 and
    # reject NaN/inf with the feed's own 400 message.
    return await state.feed.get_home_feed(user["user_id"], lat, lng, page, limit)


@app.put("/favorites/{bar_id}", response_model=FavoriteResponse)
async def add_favorite(
    bar_id: str,
    user: dict = Depends(require_user),
    state: AppState = Depends(get_state),
) -> FavoriteResponse:
    if await state.catalog.get(bar_id) is None:
        raise HTTPException(status_code=404, detail="Bar not found")
    await state.favorites.add(user["user_id"], bar_id)
    return FavoriteResponse(bar_id=bar_id, is_favorite=True)


@app.delete("/favorites/{bar_id}", response_model=FavoriteResponse)
async def remove_favorite(
    bar_id: str,
    user: dict = Depends(require_user),
    state: AppState = Depends(get_state),
) -> FavoriteResponse:
    if await state.catalog.get(bar_id) is None:
        raise HTTPException(status_code=404, detail="Bar not found")
    await state.favorites.remove(user["user_id"], bar_id)
    return FavoriteResponse(bar_id=bar_id, is_favorite=False)


@app.get(PHOTO_PATH + "/{photo_reference}")
async def photo(
    photo_reference: str,
    maxwidth: int = Query(PHOTO_MAXWIDTH, ge=1, le=1600),
    user: dict = Depends(require_user),
    state: AppState = Depends(get_state),
) -> Response:
    content, content_type = await state.photos.fetch_photo(photo_reference, maxwidth)
    return Response(
        content=content,
        media_type=content_type,
        headers={"Cache-Control": "private, max-age=86400"},
    )


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events())
