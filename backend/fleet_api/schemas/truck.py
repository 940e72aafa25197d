"""Truck Schemas — create/replace and patch bodies for /trucks.

Invariants:
    - TruckCreate requires every caller-settable attribute (create and full replace)
    - TruckPatch requires at least one attribute; explicit nulls count as absent
    - owner, loads and id are never read from a body; unknown keys are ignored
"""

from pydantic import BaseModel, ConfigDict, model_validator

from fleet_api.schemas.fields import NonEmptyStr, PositiveNumber


class TruckCreate(BaseModel):
    """Full truck attributes for POST /trucks and PUT /trucks/{id}."""
    model_config = ConfigDict(extra="ignore")

    truck_vin: NonEmptyStr
    trailer_vin: NonEmptyStr
    truck_model: NonEmptyStr
    trailer_type: NonEmptyStr
    trailer_capacity: PositiveNumber


class TruckPatch(BaseModel):
    """Partial truck attributes for PATCH /trucks/{id}."""
    model_config = ConfigDict(extra="ignore")

    truck_vin: NonEmptyStr | None = None
    trailer_vin: NonEmptyStr | None = None
    truck_model: NonEmptyStr | None = None
    trailer_type: NonEmptyStr | None = None
    trailer_capacity: PositiveNumber | None = None

    @model_validator(mode="after")
    def require_one_field(self) -> "TruckPatch":
        if not self.changes():
            raise ValueError("at least one truck attribute is required")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)
