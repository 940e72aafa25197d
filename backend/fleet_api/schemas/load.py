"""Load Schemas — create/replace and patch bodies for /loads.

Invariants:
    - LoadCreate requires vendor, item, quantity and weight
    - LoadPatch requires at least one of them; explicit nulls count as absent
    - carrier is never read from a body: it changes only through attach/detach
"""

from pydantic import BaseModel, ConfigDict, model_validator

from fleet_api.schemas.fields import NonEmptyStr, PositiveNumber


class LoadCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    vendor: NonEmptyStr
    item: NonEmptyStr
    quantity: PositiveNumber
    weight: PositiveNumber


class LoadPatch(BaseModel):
    model_config = ConfigDict(extra="ignore")

    vendor: NonEmptyStr | None = None
    item: NonEmptyStr | None = None
    quantity: PositiveNumber | None = None
    weight: PositiveNumber | None = None

    @model_validator(mode="after")
    def require_one_field(self) -> "LoadPatch":
        if not self.changes():
            raise ValueError("at least one load attribute is required")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)
