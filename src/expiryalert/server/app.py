"""ASGI application for ExpiryAlert."""
# mypy: ignore-errors

from __future__ import annotations

import logging
from datetime import date
from time import perf_counter
from typing import Any, Optional
from uuid import uuid4

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field, ValidationError

from expiryalert import __version__, metrics
from expiryalert.config import Settings, get_settings
from expiryalert.errors import ItemNotFoundError, ItemValidationError
from expiryalert.logging_utils import configure_logging as configure_app_logging
from expiryalert.models.inventory import (
    Item,
    ItemView,
    ShelfLifeSuggestion,
    StatusFilter,
    WastedSummary,
)
from expiryalert.server import deps
from expiryalert.tracker.freshness import annotate
from expiryalert.tracker.store import InventoryStore

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    """Convert non-serializable values into JSON-safe representations."""

    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple)):
        return [_json_safe(entry) for entry in value]
    if isinstance(value, dict):
        return {key: _json_safe(sub_value) for key, sub_value in value.items()}
    return repr(value)


def _normalize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Ensure validation error payloads can be serialized to JSON."""

    return [{key: _json_safe(value) for key, value in error.items()} for error in errors]


def _configure_logging(settings: Settings) -> None:
    configure_app_logging(settings.log_level, settings.log_format, [settings.api_token or ""])


def _not_found(exc: ItemNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _unprocessable(detail: Any) -> HTTPException:
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application instance."""

    settings = get_settings()
    _configure_logging(settings)

    application = FastAPI(title="ExpiryAlert", version=__version__)
    logger.debug("Application created with log level %s", settings.log_level)

    if settings.log_requests:
        access_logger = logging.getLogger("expiryalert.access")

        @application.middleware("http")
        async def log_request_response(request: Request, call_next):
            """Log request/response details and record request metrics."""

            request_id = request.headers.get("X-Request-ID") or uuid4().hex
            request.state.request_id = request_id
            start = perf_counter()
            method = request.method
            path = request.url.path
            try:
                response: Response = await call_next(request)
            except Exception:
                duration_ms = (perf_counter() - start) * 1000
                access_logger.exception(
                    "HTTP %s %s status=500 duration_ms=%.2f",
                    method,
                    path,
                    duration_ms,
                    extra={"request_id": request_id},
                )
                metrics.REQUEST_COUNT.labels(method=method, path=path, status="500").inc()
                metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(
                    duration_ms / 1000.0
                )
                raise

            duration_ms = (perf_counter() - start) * 1000
            response.headers.setdefault("X-Request-ID", request_id)
            access_logger.info(
                "HTTP %s %s status=%s duration_ms=%.2f",
                method,
                path,
                response.status_code,
                duration_ms,
                extra={"request_id": request_id},
            )
            metrics.REQUEST_COUNT.labels(
                method=method,
                path=path,
                status=str(response.status_code),
            ).inc()
            metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
            return response

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        body_preview: str | None = None
        raw_body = await request.body()
        if raw_body:
            decoded = raw_body.decode("utf-8", errors="replace")
            if len(decoded) > 2048:
                decoded = decoded[:2048] + "...(truncated)"
            body_preview = decoded

        log_kwargs: dict[str, Any] = {}
        request_id = getattr(request.state, "request_id", None)
        if request_id:
            log_kwargs["extra"] = {"request_id": request_id}

        logger.warning(
            "Validation error on %s %s: %s | body=%s",
            request.method,
            request.url.path,
            exc.errors(),
            body_preview,
            **log_kwargs,
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": _normalize_validation_errors(exc.errors())},
        )

    @application.get(
        "/items",
        response_model=list[ItemView],
        summary="List active items by freshness",
    )
    def items_list(
        status_filter: StatusFilter = Query(default=StatusFilter.ALL, alias="status"),
        store: InventoryStore = Depends(deps.get_inventory_store),
    ) -> list[ItemView]:
        today = store.today()
        return [
            annotate(item, today, store.near_days)
            for item in store.view(status_filter, today)
        ]

    @application.get(
        "/items/{item_id}",
        response_model=ItemView,
        summary="Fetch an active item",
    )
    def items_get(
        item_id: int,
        store: InventoryStore = Depends(deps.get_inventory_store),
    ) -> ItemView:
        try:
            item = store.get(item_id)
        except ItemNotFoundError as exc:
            raise _not_found(exc) from exc
        return annotate(item, store.today(), store.near_days)

    @application.post(
        "/items",
        response_model=Item,
        status_code=status.HTTP_201_CREATED,
        summary="Add an item",
    )
    def items_create(
        payload: dict[str, Any] = Body(...),
        auth: None = Depends(deps.require_api_token),
        store: InventoryStore = Depends(deps.get_inventory_store),
    ) -> Item:
        try:
            parsed = ItemCreateRequest.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Invalid item create payload=%s errors=%s", payload, exc.errors())
            raise _unprocessable(_normalize_validation_errors(exc.errors())) from exc

        try:
            return store.add(parsed.name, parsed.expiry)
        except ItemValidationError as exc:
            raise _unprocessable(str(exc)) from exc

    @application.put(
        "/items/{item_id}",
        response_model=Item,
        summary="Update an item",
    )
    def items_update(
        item_id: int,
        payload: dict[str, Any] = Body(...),
        auth: None = Depends(deps.require_api_token),
        store: InventoryStore = Depends(deps.get_inventory_store),
    ) -> Item:
        try:
            parsed = ItemUpdateRequest.model_validate(payload)
        except ValidationError as exc:
            logger.warning(
                "Invalid item update payload=%s errors=%s (item_id=%s)",
                payload,
                exc.errors(),
                item_id,
            )
            raise _unprocessable(_normalize_validation_errors(exc.errors())) from exc

        changes = parsed.model_dump(exclude_unset=True)
        if not changes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No fields provided for update",
            )

        try:
            current = store.get(item_id)
            return store.update(
                item_id,
                changes.get("name") or current.name,
                changes.get("expiry") or current.expiry,
            )
        except ItemNotFoundError as exc:
            raise _not_found(exc) from exc
        except ItemValidationError as exc:
            raise _unprocessable(str(exc)) from exc

    @application.delete(
        "/items/{item_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Delete an item",
    )
    def items_delete(
        item_id: int,
        auth: None = Depends(deps.require_api_token),
        store: InventoryStore = Depends(deps.get_inventory_store),
    ) -> None:
        try:
            store.delete(item_id)
        except ItemNotFoundError as exc:
            raise _not_found(exc) from exc

    @application.post(
        "/items/{item_id}/waste",
        response_model=Item,
        summary="Mark an item as wasted",
    )
    def items_mark_wasted(
        item_id: int,
        auth: None = Depends(deps.require_api_token),
        store: InventoryStore = Depends(deps.get_inventory_store),
    ) -> Item:
        try:
            return store.mark_wasted(item_id)
        except ItemNotFoundError as exc:
            raise _not_found(exc) from exc

    @application.get(
        "/wasted",
        response_model=WastedSummary,
        summary="List wasted items",
    )
    def wasted_list(
        store: InventoryStore = Depends(deps.get_inventory_store),
    ) -> WastedSummary:
        return WastedSummary(count=store.wasted_count, items=list(store.wasted))

    @application.get(
        "/shelf-life/suggest",
        response_model=ShelfLifeSuggestion,
        summary="Suggest an expiry date for an item name",
    )
    def shelf_life_suggest(
        name: str = Query(..., min_length=1, max_length=255),
        on: Optional[date] = Query(default=None, alias="date"),
        store: InventoryStore = Depends(deps.get_inventory_store),
    ) -> ShelfLifeSuggestion:
        return ShelfLifeSuggestion(
            name=name,
            days=store.shelf_life.lookup(name),
            expiry=store.suggest_expiry(name, on),
        )

    @application.get("/metrics", include_in_schema=False)
    def metrics_endpoint() -> Response:
        payload = generate_latest()
        return Response(content=payload, media_type=CONTENT_TYPE_LATEST)

    return application


class ItemCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    expiry: str = Field(min_length=1, description="Expiry date (YYYY-MM-DD).")


class ItemUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    expiry: Optional[str] = Field(default=None, min_length=1, description="Expiry date (YYYY-MM-DD).")


app = create_app()

__all__ = ["app", "create_app"]
