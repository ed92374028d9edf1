from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_external_records
from app.schemas.vehicle import VehicleCreate, VehiclePatch, VehicleResponse
from app.services import vehicle_service
from app.services.external_records import ExternalRecordsProvider
from app.utils.response import success_response

router = APIRouter(tags=["vehicles"])


def _to_response(vehicle) -> VehicleResponse:
    return VehicleResponse.model_validate(vehicle)


@router.post("/add/vehicle", status_code=201)
async def add_vehicle(payload: VehicleCreate, db: AsyncSession = Depends(get_db)):
    vehicle = await vehicle_service.add_vehicle(db, payload)
    return success_response(data=_to_response(vehicle))


@router.get("/vehicles")
async def get_all_vehicles(db: AsyncSession = Depends(get_db)):
    vehicles = await vehicle_service.get_all_vehicles(db)
    return success_response(data=[_to_response(v) for v in vehicles])


@router.get("/vehicles/search")
async def search_vehicles(
    fuel: str | None = None,
    city: str | None = None,
    state: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    vehicles = await vehicle_service.search_vehicles(db, fuel_type=fuel, city=city, state=state)
    return success_response(data=[_to_response(v) for v in vehicles])


@router.get("/vehicle/{vehicle_id}")
async def get_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    vehicle = await vehicle_service.get_vehicle_by_id(db, vehicle_id)
    return success_response(data=_to_response(vehicle))


@router.put("/vehicle/{vehicle_id}")
async def update_vehicle(vehicle_id: int, payload: VehicleCreate, db: AsyncSession = Depends(get_db)):
    vehicle = await vehicle_service.update_vehicle(db, vehicle_id, payload)
    return success_response(data=_to_response(vehicle))


@router.patch("/vehicle/{vehicle_id}")
async def patch_vehicle(vehicle_id: int, payload: VehiclePatch, db: AsyncSession = Depends(get_db)):
    vehicle = await vehicle_service.patch_vehicle(db, vehicle_id, payload)
    return success_response(data=_to_response(vehicle))


@router.delete("/vehicle/{vehicle_id}", status_code=204)
async def delete_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    await vehicle_service.delete_vehicle(db, vehicle_id)
    return Response(status_code=204)


@router.get("/vehicle/{registration_no}/challans")
async def get_vehicle_challans(
    registration_no: str,
    provider: ExternalRecordsProvider = Depends(get_external_records),
):
    challans = await vehicle_service.get_challans_by_registration_no(provider, registration_no)
    return success_response(data=challans)


@router.get("/vehicle/{registration_no}/insurance-expiry")
async def get_vehicle_insurance_expiry(
    registration_no: str,
    provider: ExternalRecordsProvider = Depends(get_external_records),
):
    insurance = await vehicle_service.get_insurance_expiry_by_registration_no(provider, registration_no)
    return success_response(data=insurance)
