"""FastAPI application for the STCH vehicle registry."""

import time
import uuid
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .infrastructure.di_container import DIContainer, get_container
from .models.vehicle import (
    HealthResponse,
    InsuranceOut,
    ModificationRequestIn,
    ModificationResponse,
    VehicleOut,
)
from .presentation.controllers.vehicle_controller import VehicleController
from .utils.logging import request_logger, setup_logging

HTTP_MULTI_STATUS = 207


def create_app(container: Optional[DIContainer] = None) -> FastAPI:
    container = container or get_container()
    settings = container.settings
    controller = VehicleController(container)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings)
        await container.warm_up()
        yield
        await container.shutdown()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Vehicle and insurance registry of the STCH concessions",
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start_time = time.time()
        request_logger.log_request(
            request.method,
            request.url.path,
            request_id,
            request.client.host if request.client else None,
        )

        response = await call_next(request)

        request_logger.log_response(
            request.method,
            request.url.path,
            request_id,
            response.status_code,
            (time.time() - start_time) * 1000,
        )
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Invalid request",
                "details": {"errors": errors},
            },
        )

    router = APIRouter(prefix="/api")

    @router.post("/vehiculo/modificar", response_model=ModificationResponse)
    async def modify_vehicle(request: ModificationRequestIn):
        """
        Modify a vehicle and upsert its concession's insurance policy.

        200 when both sides succeed, 207 when the vehicle was committed but
        the insurance update failed.
        """
        result = await controller.modify_vehicle(request)
        if result.status == "partial":
            return JSONResponse(
                status_code=HTTP_MULTI_STATUS,
                content=result.model_dump(by_alias=True, mode="json"),
            )
        return result

    @router.get("/vehiculo/buscar", response_model=List[VehicleOut])
    async def search_vehicles(placa: Optional[str] = Query(None),
                              numSerie: Optional[str] = Query(None),
                              numMotor: Optional[str] = Query(None)):
        """Search by plate, serial number or engine number."""
        return await controller.search_vehicles(placa, numSerie, numMotor)

    @router.get("/vehiculo/{vehicle_id}", response_model=VehicleOut)
    async def get_vehicle(vehicle_id: int):
        return await controller.get_vehicle(vehicle_id)

    @router.get("/concesion/{concession_id}/seguro", response_model=InsuranceOut)
    async def get_insurance(concession_id: int):
        return await controller.get_insurance(concession_id)

    @router.post("/catalogos/estatus/refrescar")
    async def refresh_status_catalog():
        return await controller.refresh_status_catalog()

    app.include_router(router)

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        health = await container.health_check()
        status = "healthy" if health["container_status"] == "healthy" else "degraded"

        return HealthResponse(
            status=status,
            version=settings.app_version,
            databases=health.get("databases", {}),
            details={
                "services": health["services"],
                "status_cache": health.get("status_cache"),
                "errors": health["errors"],
            },
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "stch_vehicular.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_container().settings.debug,
    )
