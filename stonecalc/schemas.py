import enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Discriminator, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel


class CalcMode(str, enum.Enum):
    TO_MURUBBA = "toMurubba"
    TO_PIECES = "toPieces"
    TO_PIECES_FROM_METER = "toPiecesFromMeter"
    TO_MURUBBA_FROM_PIECES = "toMurubbaFromPieces"


class InputUnit(str, enum.Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire; both spellings accepted on input."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class _CalculationInputBase(CamelModel):
    """
    Raw form input. length/width are meters (metric) or feet (imperial);
    height is centimeters (metric) or inches (imperial). target_value is
    always canonical: a count, a murubba total, or running meters.
    """
    input_unit: InputUnit = InputUnit.METRIC
    length: float
    width: float
    height: float
    unit_price: float = Field(default=0.0, allow_inf_nan=False)


class ToMurubbaInput(_CalculationInputBase):
    calc_mode: Literal["toMurubba"]
    target_value: Optional[float] = 1.0     # piece count

    @field_validator("target_value")
    @classmethod
    def _default_count(cls, v):
        return 1.0 if v is None else v


class ToPiecesInput(_CalculationInputBase):
    calc_mode: Literal["toPieces"]
    target_value: float                     # target murubba


class ToPiecesFromMeterInput(_CalculationInputBase):
    calc_mode: Literal["toPiecesFromMeter"]
    target_value: float                     # target running meters


class ToMurubbaFromPiecesInput(_CalculationInputBase):
    calc_mode: Literal["toMurubbaFromPieces"]
    target_value: float                     # piece count


CalculationInput = Annotated[
    Union[ToMurubbaInput, ToPiecesInput, ToPiecesFromMeterInput, ToMurubbaFromPiecesInput],
    Discriminator("calc_mode"),
]

calculation_input_adapter = TypeAdapter(CalculationInput)


def parse_calculation_input(data: dict):
    """Validate a raw dict into the input variant selected by its calc_mode."""
    return calculation_input_adapter.validate_python(data)


class CalculationResult(CamelModel):
    """Immutable, fully derived result. All dimensions are metric-canonical."""
    calc_mode: CalcMode
    input_unit: InputUnit
    length: float               # m
    width: float                # m
    height: float               # cm
    quantity: float
    total_volume_m3: float
    total_murubba: float
    total_area: float           # m²
    pieces_per_murubba: float
    pieces_per_linear_unit: float
    target_value: Optional[float] = None
    total_linear_unit: Optional[float] = None
    unit_price: float
    total_price: float
    estimated_weight_ton: float

    class Config:
        frozen = True


class HistoryItem(CalculationResult):
    id: str
    timestamp: int              # epoch milliseconds
    label: Optional[str] = None
    user_mobile: Optional[str] = None


class UserProfile(BaseModel):
    mobile: str
    name: str = ""
    is_logged_in: bool = True


class ShareResponse(BaseModel):
    text: str
    url: str
    summary: dict = {}           # rounded display values, see display.summarize


class ClearHistoryResponse(BaseModel):
    deleted: int
