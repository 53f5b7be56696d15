"""Reference data endpoints for the journey plan form."""

from fastapi import APIRouter, HTTPException

from journey_planner.api.dependencies import CurrentUserDep, OptionsServiceDep
from journey_planner.api.schemas import (
    DriverCreateRequest,
    DriverDataResponse,
    DriverListResponse,
    DriverResponse,
    NamedOptionCreateRequest,
    NamedOptionDataResponse,
    NamedOptionListResponse,
    NamedOptionResponse,
    VehicleCreateRequest,
    VehicleDataResponse,
    VehicleListResponse,
    VehicleResponse,
)
from journey_planner.services.options_service import (
    OptionAlreadyExists,
    OptionKind,
    OptionLabelRequired,
    OptionsService,
)

router = APIRouter(prefix="/options", tags=["options"])


async def _add(service: OptionsService, kind: OptionKind, label: object, **extra: object) -> object:
    try:
        return await service.add_option(kind, label, **extra)
    except OptionLabelRequired as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OptionAlreadyExists as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/drivers", response_model=DriverListResponse, operation_id="listDrivers")
async def list_drivers(user: CurrentUserDep, service: OptionsServiceDep) -> DriverListResponse:
    drivers = await service.list_options(OptionKind.DRIVERS)
    return DriverListResponse(data=[DriverResponse.model_validate(d) for d in drivers])


@router.post("/drivers", response_model=DriverDataResponse, status_code=201, operation_id="addDriver")
async def add_driver(body: DriverCreateRequest, user: CurrentUserDep, service: OptionsServiceDep) -> DriverDataResponse:
    driver = await _add(service, OptionKind.DRIVERS, body.name, code=body.code, gsm=body.gsm)
    return DriverDataResponse(data=DriverResponse.model_validate(driver))


@router.get("/vehicles", response_model=VehicleListResponse, operation_id="listVehicles")
async def list_vehicles(user: CurrentUserDep, service: OptionsServiceDep) -> VehicleListResponse:
    vehicles = await service.list_options(OptionKind.VEHICLES)
    return VehicleListResponse(data=[VehicleResponse.model_validate(v) for v in vehicles])


@router.post("/vehicles", response_model=VehicleDataResponse, status_code=201, operation_id="addVehicle")
async def add_vehicle(
    body: VehicleCreateRequest, user: CurrentUserDep, service: OptionsServiceDep
) -> VehicleDataResponse:
    vehicle = await _add(service, OptionKind.VEHICLES, body.number)
    return VehicleDataResponse(data=VehicleResponse.model_validate(vehicle))


@router.get("/locations", response_model=NamedOptionListResponse, operation_id="listLocations")
async def list_locations(user: CurrentUserDep, service: OptionsServiceDep) -> NamedOptionListResponse:
    locations = await service.list_options(OptionKind.LOCATIONS)
    return NamedOptionListResponse(data=[NamedOptionResponse.model_validate(loc) for loc in locations])


@router.post("/locations", response_model=NamedOptionDataResponse, status_code=201, operation_id="addLocation")
async def add_location(
    body: NamedOptionCreateRequest, user: CurrentUserDep, service: OptionsServiceDep
) -> NamedOptionDataResponse:
    location = await _add(service, OptionKind.LOCATIONS, body.name)
    return NamedOptionDataResponse(data=NamedOptionResponse.model_validate(location))


@router.get("/rest-types", response_model=NamedOptionListResponse, operation_id="listRestTypes")
async def list_rest_types(user: CurrentUserDep, service: OptionsServiceDep) -> NamedOptionListResponse:
    rest_types = await service.list_options(OptionKind.REST_TYPES)
    return NamedOptionListResponse(data=[NamedOptionResponse.model_validate(r) for r in rest_types])


@router.post("/rest-types", response_model=NamedOptionDataResponse, status_code=201, operation_id="addRestType")
async def add_rest_type(
    body: NamedOptionCreateRequest, user: CurrentUserDep, service: OptionsServiceDep
) -> NamedOptionDataResponse:
    rest_type = await _add(service, OptionKind.REST_TYPES, body.name)
    return NamedOptionDataResponse(data=NamedOptionResponse.model_validate(rest_type))
