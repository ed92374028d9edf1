from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100


class _VehicleSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VehicleCreate(_VehicleSchema):
    """Complete vehicle payload, used for create and full update."""

    name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    fuel_type: str
    registration_no: str
    owner_name: str
    owner_address: str
    city: str
    state: str

    @field_validator("*")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class VehiclePatch(_VehicleSchema):
    """Partial payload. Missing, null or blank fields leave the stored value alone."""

    name: str | None = None
    fuel_type: str | None = None
    registration_no: str | None = None
    owner_name: str | None = None
    owner_address: str | None = None
    city: str | None = None
    state: str | None = None

    @field_validator("name")
    @classmethod
    def name_length(cls, value: str | None) -> str | None:
        if value and value.strip() and not NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH:
            raise ValueError(
                f"Vehicle name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
            )
        return value


class VehicleResponse(_VehicleSchema):
    id: int
    name: str
    fuel_type: str
    registration_no: str
    owner_name: str
    owner_address: str
    city: str
    state: str

    # merged with the inherited camelCase alias config
    model_config = ConfigDict(from_attributes=True)
