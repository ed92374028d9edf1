from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import validates

from app.database import Base


def casefold_key(value: str) -> str:
    return value.casefold()


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    fuel_type = Column(String, nullable=False)
    registration_no = Column(String, nullable=False)
    owner_name = Column(String, nullable=False)
    owner_address = Column(String, nullable=False)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)

    # Casefolded copies used for lookups; SQL lower() only folds ASCII on SQLite.
    registration_key = Column(String, nullable=False, unique=True)
    fuel_type_key = Column(String, nullable=False, index=True)
    city_key = Column(String, nullable=False, index=True)
    state_key = Column(String, nullable=False, index=True)

    @validates("registration_no", "fuel_type", "city", "state")
    def _sync_lookup_key(self, field: str, value: str) -> str:
        key_field = "registration_key" if field == "registration_no" else f"{field}_key"
        setattr(self, key_field, casefold_key(value))
        return value

    def __repr__(self):
        return f"<Vehicle {self.id} registration_no={self.registration_no}>"


MUTABLE_FIELDS = (
    "name",
    "fuel_type",
    "registration_no",
    "owner_name",
    "owner_address",
    "city",
    "state",
)
