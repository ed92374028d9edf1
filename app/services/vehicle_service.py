"""Vehicle business logic: lookups, search and uniqueness-enforcing writes.

Every write runs in the caller's ``AsyncSession`` and commits once. The
registration-number check here only produces a readable error; the unique
index on ``registration_key`` is what actually guarantees uniqueness, so
an ``IntegrityError`` at commit is reported the same way.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.vehicle import MUTABLE_FIELDS, Vehicle, casefold_key
from app.repositories import vehicle_repository
from app.schemas.vehicle import VehicleCreate, VehiclePatch
from app.services.external_records import ExternalRecordsProvider
from app.utils.exceptions import DuplicateRegistrationError, NotFoundError

logger = logging.getLogger(__name__)


def _has_text(value: str | None) -> bool:
    return value is not None and value.strip() != ""


async def _commit(db: AsyncSession, error: DuplicateRegistrationError) -> None:
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info("Unique index rejected write: %s", error.message)
        raise error


async def _get_or_404(db: AsyncSession, vehicle_id: int) -> Vehicle:
    vehicle = await vehicle_repository.get(db, vehicle_id)
    if vehicle is None:
        raise NotFoundError("Vehicle", "id", vehicle_id)
    return vehicle


async def _ensure_registration_available(db: AsyncSession, vehicle: Vehicle, registration_no: str) -> None:
    owner = await vehicle_repository.find_by_registration_no(db, registration_no)
    if owner is not None and owner.id != vehicle.id:
        logger.info("Registration number %s already owned by vehicle %s", registration_no, owner.id)
        raise DuplicateRegistrationError.on_update(registration_no)


async def add_vehicle(db: AsyncSession, data: VehicleCreate) -> Vehicle:
    if await vehicle_repository.find_by_registration_no(db, data.registration_no) is not None:
        logger.info("Rejected duplicate registration number %s", data.registration_no)
        raise DuplicateRegistrationError.on_create(data.registration_no)

    duplicate = DuplicateRegistrationError.on_create(data.registration_no)
    try:
        vehicle = await vehicle_repository.insert(db, Vehicle(**data.model_dump()))
    except IntegrityError:
        await db.rollback()
        raise duplicate
    await _commit(db, duplicate)
    logger.info("Created vehicle %s (%s)", vehicle.id, vehicle.registration_no)
    return vehicle


async def get_all_vehicles(db: AsyncSession) -> list[Vehicle]:
    return await vehicle_repository.get_all(db)


async def get_vehicle_by_id(db: AsyncSession, vehicle_id: int) -> Vehicle:
    return await _get_or_404(db, vehicle_id)


async def update_vehicle(db: AsyncSession, vehicle_id: int, data: VehicleCreate) -> Vehicle:
    """Replace every mutable field of a vehicle.

    Raises NotFoundError if the id is unknown and DuplicateRegistrationError if
    the new registration number belongs to another vehicle.
    """
    vehicle = await _get_or_404(db, vehicle_id)

    if casefold_key(data.registration_no) != vehicle.registration_key:
        await _ensure_registration_available(db, vehicle, data.registration_no)

    for field in MUTABLE_FIELDS:
        setattr(vehicle, field, getattr(data, field))

    await _commit(db, DuplicateRegistrationError.on_update(data.registration_no))
    logger.info("Updated vehicle %s", vehicle.id)
    return vehicle


async def patch_vehicle(db: AsyncSession, vehicle_id: int, data: VehiclePatch) -> Vehicle:
    """Merge the non-blank fields of ``data`` into a vehicle.

    A registration number equal to the current one ignoring case counts as
    unchanged. When nothing changes the vehicle is returned without a write.
    """
    vehicle = await _get_or_404(db, vehicle_id)

    changes: dict[str, str] = {}
    for field in MUTABLE_FIELDS:
        value = getattr(data, field)
        if not _has_text(value):
            continue
        current = getattr(vehicle, field)
        if field == "registration_no":
            if casefold_key(value) == vehicle.registration_key:
                continue
            await _ensure_registration_available(db, vehicle, value)
        elif value == current:
            continue
        changes[field] = value

    if not changes:
        logger.debug("Patch for vehicle %s changed nothing", vehicle.id)
        return vehicle

    for field, value in changes.items():
        setattr(vehicle, field, value)

    await _commit(db, DuplicateRegistrationError.on_update(vehicle.registration_no))
    logger.info("Patched vehicle %s: %s", vehicle.id, ", ".join(sorted(changes)))
    return vehicle


async def delete_vehicle(db: AsyncSession, vehicle_id: int) -> None:
    if not await vehicle_repository.delete(db, vehicle_id):
        raise NotFoundError("Vehicle", "id", vehicle_id)
    await db.commit()
    logger.info("Deleted vehicle %s", vehicle_id)


async def search_vehicles(
    db: AsyncSession,
    fuel_type: str | None = None,
    city: str | None = None,
    state: str | None = None,
) -> list[Vehicle]:
    # Only one filter applies, in this order.
    if _has_text(fuel_type):
        return await vehicle_repository.find_by_fuel_type(db, fuel_type)
    if _has_text(city):
        return await vehicle_repository.find_by_city(db, city)
    if _has_text(state):
        return await vehicle_repository.find_by_state(db, state)
    return await get_all_vehicles(db)


async def get_challans_by_registration_no(provider: ExternalRecordsProvider, registration_no: str) -> list:
    return await provider.fetch_challans(registration_no)


async def get_insurance_expiry_by_registration_no(provider: ExternalRecordsProvider, registration_no: str) -> str:
    return await provider.fetch_insurance_expiry(registration_no)
