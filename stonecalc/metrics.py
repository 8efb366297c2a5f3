"""
Derived-metrics calculator.

Turns canonical dimensions and a mode outcome into a complete
CalculationResult: volume, weight, pieces-per-murubba and price.
Full floating precision is stored; rounding happens only in display.py.
"""

from .calculators.base import ModeOutcome, PriceBasis
from .calculators.registry import get_calculator
from .constants import DEFAULT_CONSTANTS, EngineConstants
from .errors import DivisionByZero
from .schemas import CalculationResult, CalcMode, InputUnit
from .units import CanonicalDims, check_in_range


def price_basis_quantity(basis: PriceBasis, quantity: float, total_murubba: float,
                         total_linear_unit: float) -> float:
    """The quantity unit_price is multiplied by for a given price basis."""
    if basis is PriceBasis.PIECE:
        return quantity
    if basis is PriceBasis.LINEAR_METER:
        return total_linear_unit or 0.0
    return total_murubba


def total_price(basis_quantity: float, unit_price: float) -> float:
    """basis × unit_price; a non-positive price means "not priced" and yields 0."""
    if unit_price <= 0:
        return 0.0
    return basis_quantity * unit_price


def volume_m3(dims: CanonicalDims, count: float) -> float:
    """length × width × thickness(m) × count."""
    return dims.length * dims.width * (dims.height / 100.0) * count


def weight_tons(total_volume_m3: float, constants: EngineConstants = DEFAULT_CONSTANTS) -> float:
    return total_volume_m3 * constants.density_t_per_m3


def pieces_per_murubba(dims: CanonicalDims, constants: EngineConstants = DEFAULT_CONSTANTS) -> float:
    """How many pieces of this size make up one murubba."""
    area = dims.length * dims.width
    if area == 0:
        raise DivisionByZero("Per-piece area is zero")
    return constants.murubba_sq_m / area


def derive_metrics(
    dims: CanonicalDims,
    outcome: ModeOutcome,
    calc_mode: CalcMode,
    input_unit: InputUnit,
    unit_price: float,
    constants: EngineConstants = DEFAULT_CONSTANTS,
    target_value: float = None,
) -> CalculationResult:
    """
    Assemble the immutable CalculationResult. No state, no I/O.

    Raises InvalidDimension when inputs are so large a derived total overflows.
    """
    total_volume = check_in_range("Total volume", volume_m3(dims, outcome.quantity))
    basis_quantity = price_basis_quantity(
        outcome.price_basis, outcome.quantity, outcome.total_murubba, outcome.total_linear_unit,
    )
    price = check_in_range("Total price", total_price(basis_quantity, unit_price))
    weight = check_in_range("Estimated weight", weight_tons(total_volume, constants))

    return CalculationResult(
        calc_mode=calc_mode,
        input_unit=input_unit,
        length=dims.length,
        width=dims.width,
        height=dims.height,
        quantity=outcome.quantity,
        total_volume_m3=total_volume,
        total_murubba=outcome.total_murubba,
        total_area=outcome.total_area,
        pieces_per_murubba=pieces_per_murubba(dims, constants),
        pieces_per_linear_unit=outcome.pieces_per_linear_unit,
        target_value=target_value,
        total_linear_unit=outcome.total_linear_unit,
        unit_price=unit_price,
        total_price=price,
        estimated_weight_ton=weight,
    )


def price_basis_for_mode(calc_mode) -> PriceBasis:
    """Price basis a mode quotes unit_price against."""
    return get_calculator(calc_mode).PRICE_BASIS


def basis_quantity_of(result: CalculationResult) -> float:
    """Price basis quantity of an existing result, used to cross-check total_price."""
    return price_basis_quantity(
        price_basis_for_mode(result.calc_mode),
        result.quantity, result.total_murubba, result.total_linear_unit,
    )
