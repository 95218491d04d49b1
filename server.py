from contextlib import asynccontextmanager
from typing import List, Optional
from uuid import UUID

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request, Response

from core.auth import FarmerPrincipal
from core.config import Settings, settings
from core.database import create_client, get_database, ping
from core.error_handling import register_exception_handlers
from core.farmer_store import MongoFarmerStore
from core.logging_config import get_logger, setup_logging
from core.metrics import MetricsMiddleware, RequestMetrics
from core.models import CreateFieldRequest, CreatePropertyRequest, PropertyResponse, SensorResponse
from core.ownership import OwnershipValidator
from core.ports import FarmerReader, PropertyStore, SensorStore
from core.property_service import PropertyService
from core.property_store import MongoPropertyStore
from core.sensor_service import SensorService
from core.sensor_store import MongoSensorStore

logger = get_logger(__name__)


def get_property_service(request: Request) -> PropertyService:
    return request.app.state.property_service


def get_sensor_service(request: Request) -> SensorService:
    return request.app.state.sensor_service


def build_router(principal: FarmerPrincipal) -> APIRouter:
    router = APIRouter(prefix="/v1/api")

    @router.get("/properties", response_model=List[PropertyResponse])
    async def list_properties(farmer_id: UUID = Depends(principal),
                              service: PropertyService = Depends(get_property_service)):
        return await service.list_properties(farmer_id)

    @router.get("/properties/{property_id}", response_model=PropertyResponse)
    async def get_property(property_id: UUID, farmer_id: UUID = Depends(principal),
                           service: PropertyService = Depends(get_property_service)):
        return await service.get_property(farmer_id, property_id)

    @router.post("/properties", response_model=PropertyResponse, status_code=201)
    async def create_property(body: CreatePropertyRequest, farmer_id: UUID = Depends(principal),
                              service: PropertyService = Depends(get_property_service)):
        return await service.create_property(farmer_id, body.name, body.location, body.total_area)

    @router.post("/properties/{property_id}", response_model=PropertyResponse, status_code=201)
    async def add_field(property_id: UUID, body: CreateFieldRequest, farmer_id: UUID = Depends(principal),
                        service: PropertyService = Depends(get_property_service)):
        return await service.add_field(farmer_id, property_id, body.name, body.crop_type, body.area)

    @router.get("/sensors", response_model=List[SensorResponse])
    async def list_sensors(farmer_id: UUID = Depends(principal),
                           service: SensorService = Depends(get_sensor_service)):
        return await service.list_sensors(farmer_id)

    @router.delete("/sensors/{sensor_id}", status_code=204)
    async def delete_sensor(sensor_id: UUID, farmer_id: UUID = Depends(principal),
                            service: SensorService = Depends(get_sensor_service)):
        await service.delete_sensor(farmer_id, sensor_id)
        return Response(status_code=204)

    return router


def wire_services(app: FastAPI, farmer_reader: FarmerReader, property_store: PropertyStore, sensor_store: SensorStore):
    ownership = OwnershipValidator(farmer_reader)
    app.state.property_service = PropertyService(ownership, property_store)
    app.state.sensor_service = SensorService(ownership, sensor_store)


def create_app(config: Settings = settings,
               farmer_reader: Optional[FarmerReader] = None,
               property_store: Optional[PropertyStore] = None,
               sensor_store: Optional[SensorStore] = None) -> FastAPI:
    """
    Builds the API. With no stores given, MongoDB stores are created on
    startup from config; tests pass their own stores instead.
    """
    use_mongo = farmer_reader is None or property_store is None or sensor_store is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not use_mongo:
            yield
            return
        client = create_client(config)
        database = get_database(client, config)
        app.state.mongo_client = client
        wire_services(app, MongoFarmerStore(database), MongoPropertyStore(database), MongoSensorStore(database))
        logger.info("---SERVER: Connected to MongoDB database '%s'---", config.mongo_db_name)
        try:
            yield
        finally:
            await client.close()

    app = FastAPI(title="AgroTech Management API", version="1.0.0", lifespan=lifespan)
    app.state.mongo_client = None
    if not use_mongo:
        wire_services(app, farmer_reader, property_store, sensor_store)

    register_exception_handlers(app, correlation_header=config.correlation_header)
    metrics = RequestMetrics()
    app.state.metrics = metrics
    app.add_middleware(MetricsMiddleware, metrics=metrics)
    app.include_router(build_router(FarmerPrincipal(config)))

    @app.get("/health")
    async def health(response: Response):
        client = app.state.mongo_client
        if client is not None and not await ping(client):
            response.status_code = 503
            return {"status": "unhealthy"}
        return {"status": "healthy"}

    @app.get("/metrics", include_in_schema=False)
    async def prometheus_metrics():
        return metrics.render()

    return app


app = create_app(settings)


if __name__ == "__main__":
    setup_logging(settings.log_level)
    uvicorn.run(app, host="0.0.0.0", port=8080)
