from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional


# camelCase on the wire and in LLM output, snake_case in Python
CAMEL = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    revalidate_instances="always",
)


def _strip(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    return v.strip()


# -------- Slots --------
# Every field is optional: a slot object is filled progressively over turns.
# Requiredness is decided by the completeness evaluator, not here.


class FlightSlots(BaseModel):
    model_config = CAMEL

    from_city: Optional[str] = Field(default=None, min_length=1)
    to_city: Optional[str] = Field(default=None, min_length=1)
    departure_date: Optional[str] = None  # free-form, "YYYY-MM-DD" preferred
    return_date: Optional[str] = None
    passenger_count: Optional[int] = Field(default=None, ge=1)

    @field_validator("from_city", "to_city")
    @classmethod
    def strip_city(cls, v: Optional[str]) -> Optional[str]:
        return _strip(v)


class HotelSlots(BaseModel):
    model_config = CAMEL

    location: Optional[str] = Field(default=None, min_length=1)
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    guest_count: Optional[int] = Field(default=None, ge=1)

    @field_validator("location")
    @classmethod
    def strip_location(cls, v: Optional[str]) -> Optional[str]:
        return _strip(v)


class CombinedSlots(FlightSlots, HotelSlots):
    """Flight and hotel fields side by side for the ``Both`` intent."""

    model_config = CAMEL


FLIGHT_FIELDS = tuple(FlightSlots.model_fields)
HOTEL_FIELDS = tuple(HotelSlots.model_fields)


# -------- Search results --------


class FlightResult(BaseModel):
    model_config = CAMEL

    id: str
    airline: str
    flight_number: str
    from_: str = Field(alias="from")
    to: str
    departure_time: str
    arrival_time: str
    duration: str
    price: float
    currency: str = "USD"


class HotelResult(BaseModel):
    model_config = CAMEL

    id: str
    name: str
    location: str
    rating: int = Field(ge=1, le=5)
    price_per_night: float
    currency: str = "USD"
    amenities: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
