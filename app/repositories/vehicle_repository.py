"""Persistence queries for the vehicles table.

Text lookups compare casefolded values against the ``*_key`` columns, the
same normalization the unique index on ``registration_key`` uses. None of these functions
commit; the calling service owns the unit of work.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.vehicle import Vehicle, casefold_key


async def insert(db: AsyncSession, vehicle: Vehicle) -> Vehicle:
    db.add(vehicle)
    await db.flush()
    return vehicle


async def get(db: AsyncSession, vehicle_id: int) -> Vehicle | None:
    return await db.get(Vehicle, vehicle_id)


async def get_all(db: AsyncSession) -> list[Vehicle]:
    result = await db.execute(select(Vehicle).order_by(Vehicle.id))
    return list(result.scalars().all())


async def _find_by_key(db: AsyncSession, column, value: str) -> list[Vehicle]:
    result = await db.execute(
        select(Vehicle).where(column == casefold_key(value)).order_by(Vehicle.id)
    )
    return list(result.scalars().all())


async def find_by_registration_no(db: AsyncSession, registration_no: str) -> Vehicle | None:
    matches = await _find_by_key(db, Vehicle.registration_key, registration_no)
    return matches[0] if matches else None


async def find_by_fuel_type(db: AsyncSession, fuel_type: str) -> list[Vehicle]:
    return await _find_by_key(db, Vehicle.fuel_type_key, fuel_type)


async def find_by_city(db: AsyncSession, city: str) -> list[Vehicle]:
    return await _find_by_key(db, Vehicle.city_key, city)


async def find_by_state(db: AsyncSession, state: str) -> list[Vehicle]:
    return await _find_by_key(db, Vehicle.state_key, state)


async def delete(db: AsyncSession, vehicle_id: int) -> bool:
    vehicle = await db.get(Vehicle, vehicle_id)
    if vehicle is None:
        return False
    await db.delete(vehicle)
    await db.flush()
    return True
