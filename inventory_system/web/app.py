"""FastAPI-based web interface for the warehouse inventories."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import AppConfig
from ..repository import ErrorKind, RepositoryError
from ..services import InventoryManager, WarehouseService, ensure_demo_data

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DUPLICATE_KEY: 409,
    ErrorKind.INVALID_QUANTITY: 422,
}


class StockChange(BaseModel):
    delta: int


class QuantityUpdate(BaseModel):
    quantity: int


def create_app(
    service: Optional[WarehouseService] = None,
    *,
    config: Optional[AppConfig] = None,
    seed_demo_data: bool = True,
) -> FastAPI:
    config = config or AppConfig.from_environment()
    service = service or WarehouseService(config=config)
    if seed_demo_data:
        ensure_demo_data(service)

    app = FastAPI(title="Warehouse Inventory")
    app.state.warehouse = service

    @app.exception_handler(RepositoryError)
    async def repository_error_handler(request: Request, exc: RepositoryError):
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=STATUS_BY_KIND.get(exc.kind, 400),
            content={"error": exc.kind.value, "detail": str(exc)},
        )

    def manager_for(request: Request, section: str) -> InventoryManager:
        warehouse: WarehouseService = request.app.state.warehouse
        try:
            return warehouse.section(section)
        except ValueError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @app.get("/{section}/items")
    async def list_items(section: str, request: Request) -> List[Dict[str, Any]]:
        manager = manager_for(request, section)
        return [asdict(item) for item in manager.repository.list()]

    @app.get("/{section}/items/{item_id}")
    async def get_item(section: str, item_id: int, request: Request) -> Dict[str, Any]:
        manager = manager_for(request, section)
        return asdict(manager.repository.get(item_id))

    @app.post("/{section}/items/{item_id}/stock")
    async def increase_stock(section: str, item_id: int, change: StockChange, request: Request):
        manager = manager_for(request, section)
        result = manager.increase_stock(item_id, change.delta)
        status_code = 200 if result.ok else STATUS_BY_KIND.get(result.error, 400)
        return JSONResponse(
            status_code=status_code,
            content={"ok": result.ok, "message": result.message},
        )

    @app.put("/{section}/items/{item_id}/quantity")
    async def update_quantity(section: str, item_id: int, update: QuantityUpdate, request: Request):
        manager = manager_for(request, section)
        return asdict(manager.repository.update_quantity(item_id, update.quantity))

    @app.delete("/{section}/items/{item_id}")
    async def remove_item(section: str, item_id: int, request: Request):
        manager = manager_for(request, section)
        result = manager.remove_by_id(item_id)
        status_code = 200 if result.ok else STATUS_BY_KIND.get(result.error, 400)
        return JSONResponse(
            status_code=status_code,
            content={"ok": result.ok, "message": result.message},
        )

    return app


__all__ = ["create_app"]
