from pydantic import BaseModel, Field, ValidationInfo, field_validator
from typing import List

from .normalize import normalize_label, normalize_number

# Global parameters used when a field is missing from a form or a stored project
DEFAULT_PARAMETERS = {
    "wallHeight": 2.5,        # m
    "paintCoverage": 10.0,    # m² per liter
    "paintPrice": 18.0,       # per liter
    "plasterPrice": 12.0,     # per m²
    "insulationPrice": 25.0,  # per m²
    "wallWaste": 7.5,         # percent
}

# A freshly added room row
DEFAULT_ROOM = {"name": "", "L": 4.0, "W": 3.0, "openings": 2.0}

# Rooms seeded into a new project
SAMPLE_ROOMS = [
    {"name": "Living room", "L": 6.0, "W": 4.0, "openings": 3.0},
    {"name": "Bedroom", "L": 3.5, "W": 3.0, "openings": 2.0},
]


class Room(BaseModel):
    name: str = "Room"
    length: float = Field(DEFAULT_ROOM["L"], alias="L")
    width: float = Field(DEFAULT_ROOM["W"], alias="W")
    openings: float = DEFAULT_ROOM["openings"]

    class Config:
        populate_by_name = True

    @field_validator("name", mode="before")
    @classmethod
    def _blank_name(cls, value):
        return normalize_label(value, "Room")

    @field_validator("length", "width", "openings", mode="before")
    @classmethod
    def _non_negative(cls, value, info: ValidationInfo):
        return normalize_number(value, cls.model_fields[info.field_name].default)


class Project(BaseModel):
    project_name: str = Field("", alias="projectName")
    wall_height: float = Field(DEFAULT_PARAMETERS["wallHeight"], alias="wallHeight")
    paint_coverage: float = Field(DEFAULT_PARAMETERS["paintCoverage"], alias="paintCoverage")
    paint_price: float = Field(DEFAULT_PARAMETERS["paintPrice"], alias="paintPrice")
    plaster_price: float = Field(DEFAULT_PARAMETERS["plasterPrice"], alias="plasterPrice")
    insulation_price: float = Field(DEFAULT_PARAMETERS["insulationPrice"], alias="insulationPrice")
    wall_waste: float = Field(DEFAULT_PARAMETERS["wallWaste"], alias="wallWaste")
    rooms: List[Room] = []

    class Config:
        populate_by_name = True

    @field_validator("project_name", mode="before")
    @classmethod
    def _trim_name(cls, value):
        return normalize_label(value, "")

    @field_validator(
        "wall_height", "paint_coverage", "paint_price",
        "plaster_price", "insulation_price", "wall_waste",
        mode="before",
    )
    @classmethod
    def _non_negative(cls, value, info: ValidationInfo):
        return normalize_number(value, cls.model_fields[info.field_name].default)

    @field_validator("rooms", mode="before")
    @classmethod
    def _room_list(cls, value):
        if not isinstance(value, (list, tuple)):
            return []
        return list(value)

    def to_storage(self) -> dict:
        """JSON-ready dict in the persisted layout (camelCase keys, rooms as L/W)."""
        return self.model_dump(by_alias=True)


class RoomArea(BaseModel):
    name: str
    perimeter: float
    gross_wall_area: float
    net_wall_area: float


class Estimate(BaseModel):
    total_wall_area: float
    paint_volume: float
    paint_cost: float
    plaster_cost: float
    insulation_cost: float
    total_cost: float
    rooms: List[RoomArea] = []


class SaveResult(BaseModel):
    ok: bool = True
    key: str


class Defaults(BaseModel):
    parameters: dict
    room: dict
    sample_rooms: List[dict]
