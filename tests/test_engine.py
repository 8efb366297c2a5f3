"""
Engine + derived metrics: end-to-end properties of CalculationResult.

Tests:
1-4.   Worked scenarios (forward area, inverse pieces, unpriced, imperial)
5-8.   Price / weight / volume consistency
9-11.  Round trip toMurubba → toPieces
12-14. Idempotence, imperial/metric equivalence, immutability
15-18. Input validation and failure modes
"""

import math

import pytest
from pydantic import ValidationError

from stonecalc.calculators.base import PriceBasis
from stonecalc.constants import EngineConstants
from stonecalc.engine import StoneCalcEngine, calculate
from stonecalc.errors import InvalidDimension, InvalidMode
from stonecalc.metrics import (
    basis_quantity_of, pieces_per_murubba, price_basis_for_mode, total_price,
)
from stonecalc.schemas import (
    CalcMode, CalculationResult, InputUnit, ToMurubbaFromPiecesInput, ToMurubbaInput, ToPiecesFromMeterInput,
    ToPiecesInput, parse_calculation_input,
)
from stonecalc.units import CanonicalDims

K = 9.290304
DENSITY = 2.7
engine = StoneCalcEngine(EngineConstants(murubba_sq_m=K, density_t_per_m3=DENSITY))

FLOAT_FIELDS = [
    "length", "width", "height", "quantity", "total_volume_m3", "total_murubba",
    "total_area", "pieces_per_murubba", "pieces_per_linear_unit", "total_linear_unit",
    "unit_price", "total_price", "estimated_weight_ton",
]


def _input(**overrides):
    """CalculationInput for a 60×60×2 cm tile, toMurubbaFromPieces, 100 pieces."""
    data = {
        "calc_mode": "toMurubbaFromPieces",
        "input_unit": "metric",
        "length": 0.6,
        "width": 0.6,
        "height": 2.0,
        "target_value": 100,
        "unit_price": 0.0,
    }
    data.update(overrides)
    return parse_calculation_input(data)


def _sample_inputs(unit_price=1500.0):
    """One valid input per mode."""
    return [
        _input(calc_mode="toMurubba", length=10, width=5, height=2, target_value=3, unit_price=unit_price),
        _input(calc_mode="toPieces", target_value=2.5, unit_price=unit_price),
        _input(calc_mode="toPiecesFromMeter", length=0.6, width=0.3, target_value=12, unit_price=unit_price),
        _input(calc_mode="toMurubbaFromPieces", target_value=75, unit_price=unit_price),
    ]


# ============================================================
# 1-4. Worked scenarios
# ============================================================

def test_scenario_forward_area():
    """toMurubba 10 m × 5 m × 2 cm, count 1 → 50 m², 50/K murubba."""
    result = engine.calculate(_input(calc_mode="toMurubba", length=10, width=5, height=2, target_value=1))
    assert result.calc_mode is CalcMode.TO_MURUBBA
    assert result.total_area == 50.0
    assert result.total_murubba == pytest.approx(50.0 / K)
    assert result.total_volume_m3 == pytest.approx(1.0)
    assert result.estimated_weight_ton == pytest.approx(2.7)


def test_scenario_inverse_pieces():
    """toPieces with target 50/K murubba on 50 m² pieces → exactly 1 piece."""
    result = engine.calculate(_input(calc_mode="toPieces", length=10, width=5, height=2, target_value=50.0 / K))
    assert result.quantity == 1


@pytest.mark.parametrize("calc_input", _sample_inputs(unit_price=0.0))
def test_scenario_unpriced_total_is_zero(calc_input):
    assert engine.calculate(calc_input).total_price == 0.0


def test_scenario_imperial_dimensions():
    """10 ft × 5 ft → 3.048 m × 1.524 m; thickness 1 in → 2.54 cm."""
    result = engine.calculate(_input(calc_mode="toMurubba", input_unit="imperial",
                                     length=10, width=5, height=1, target_value=1))
    assert result.input_unit is InputUnit.IMPERIAL
    assert result.length == pytest.approx(3.048, abs=1e-6)
    assert result.width == pytest.approx(1.524, abs=1e-6)
    assert result.height == pytest.approx(2.54, abs=1e-6)
    # 50 sq ft is half a murubba of 100 sq ft
    assert result.total_murubba == pytest.approx(0.5)


# ============================================================
# 5-8. Consistency
# ============================================================

@pytest.mark.parametrize("calc_input", _sample_inputs())
def test_total_price_is_basis_times_unit_price(calc_input):
    result = engine.calculate(calc_input)
    assert result.total_price == pytest.approx(basis_quantity_of(result) * result.unit_price)


def test_price_basis_per_mode():
    results = {r.calc_mode: r for r in map(engine.calculate, _sample_inputs(unit_price=10.0))}
    assert price_basis_for_mode("toMurubba") is PriceBasis.MURUBBA
    assert price_basis_for_mode("toPieces") is PriceBasis.PIECE
    assert price_basis_for_mode("toPiecesFromMeter") is PriceBasis.LINEAR_METER
    assert price_basis_for_mode("toMurubbaFromPieces") is PriceBasis.MURUBBA

    assert results[CalcMode.TO_MURUBBA].total_price == pytest.approx(results[CalcMode.TO_MURUBBA].total_murubba * 10)
    assert results[CalcMode.TO_PIECES].total_price == pytest.approx(results[CalcMode.TO_PIECES].quantity * 10)
    assert results[CalcMode.TO_PIECES_FROM_METER].total_price == pytest.approx(12 * 10)


@pytest.mark.parametrize("unit_price", [0.0, -5.0, -0.01])
def test_non_positive_unit_price_gives_zero_total(unit_price):
    result = engine.calculate(_input(unit_price=unit_price))
    assert result.total_price == 0.0
    assert total_price(123.4, unit_price) == 0.0


@pytest.mark.parametrize("calc_input", _sample_inputs())
def test_weight_volume_and_ratios_are_consistent(calc_input):
    result = engine.calculate(calc_input)
    assert result.estimated_weight_ton == result.total_volume_m3 * DENSITY
    assert result.total_volume_m3 == pytest.approx(
        result.length * result.width * (result.height / 100) * result.quantity
    )
    assert result.total_area == pytest.approx(result.length * result.width * result.quantity)
    assert result.total_murubba == pytest.approx(result.total_area / K)
    assert result.pieces_per_murubba == pytest.approx(K / (result.length * result.width))
    assert result.pieces_per_linear_unit == pytest.approx(1 / result.length)
    # pieces_per_murubba cross-checks quantity against total_murubba
    assert result.quantity == pytest.approx(result.total_murubba * result.pieces_per_murubba)


def test_tile_batch_numbers():
    """100 tiles of 60×60×2 cm: 36 m², 0.72 m³, 1.944 t."""
    result = engine.calculate(_input())
    assert result.total_area == pytest.approx(36.0)
    assert result.total_volume_m3 == pytest.approx(0.72)
    assert result.estimated_weight_ton == pytest.approx(1.944)
    assert result.pieces_per_murubba == pytest.approx(25.80640, rel=1e-5)
    assert result.total_linear_unit == pytest.approx(60.0)
    assert pieces_per_murubba(CanonicalDims(0.6, 0.6, 2.0)) == pytest.approx(K / 0.36)


# ============================================================
# 9-11. Round trip
# ============================================================

@pytest.mark.parametrize("dims,count", [
    ((10, 5, 2), 1),
    ((0.6, 0.6, 2), 7),
    ((0.6, 0.6, 2), 100),
    ((0.3, 0.45, 1.5), 13),
    ((1.2, 0.6, 3), 250),
])
def test_round_trip_even_division_returns_same_count(dims, count):
    length, width, height = dims
    forward = engine.calculate(_input(calc_mode="toMurubba", length=length, width=width,
                                      height=height, target_value=count))
    back = engine.calculate(_input(calc_mode="toPieces", length=length, width=width,
                                   height=height, target_value=forward.total_murubba))
    assert back.quantity == count


@pytest.mark.parametrize("count", [1.5, 7.2, 99.01])
def test_round_trip_fractional_count_never_loses_material(count):
    forward = engine.calculate(_input(calc_mode="toMurubba", target_value=count))
    back = engine.calculate(_input(calc_mode="toPieces", target_value=forward.total_murubba))
    assert back.quantity >= count
    assert back.quantity == math.ceil(count)


def test_round_trip_imperial_boundary():
    """2 murubba of 10 ft × 5 ft slabs = 200 sq ft / 50 sq ft = exactly 4."""
    result = engine.calculate(_input(calc_mode="toPieces", input_unit="imperial",
                                     length=10, width=5, height=1, target_value=2))
    assert result.quantity == 4


# ============================================================
# 12-14. Idempotence, equivalence, immutability
# ============================================================

@pytest.mark.parametrize("calc_input", _sample_inputs())
def test_identical_inputs_give_identical_results(calc_input):
    first = engine.calculate(calc_input)
    second = engine.calculate(calc_input)
    assert first == second
    assert first.model_dump() == second.model_dump()


@pytest.mark.parametrize("mode,target", [
    ("toMurubba", 3),
    ("toPieces", 2),
    ("toPiecesFromMeter", 7.5),
    ("toMurubbaFromPieces", 12),
])
def test_imperial_equals_metric_equivalent(mode, target):
    imperial = engine.calculate(_input(calc_mode=mode, input_unit="imperial",
                                       length=10, width=5, height=1, target_value=target, unit_price=900))
    metric = engine.calculate(_input(calc_mode=mode, input_unit="metric",
                                     length=3.048, width=1.524, height=2.54, target_value=target, unit_price=900))
    for field in FLOAT_FIELDS:
        assert getattr(imperial, field) == pytest.approx(getattr(metric, field), rel=1e-9), field


def test_result_is_frozen():
    result = engine.calculate(_input())
    with pytest.raises(ValidationError):
        result.total_price = 1.0


# ============================================================
# 15-18. Validation and failures
# ============================================================

@pytest.mark.parametrize("mode", [m.value for m in CalcMode])
@pytest.mark.parametrize("zeroed", ["length", "width", "height"])
def test_zero_dimension_fails_in_every_mode(mode, zeroed):
    with pytest.raises(InvalidDimension):
        engine.calculate(_input(calc_mode=mode, target_value=5, **{zeroed: 0}))


@pytest.mark.parametrize("mode", ["toPieces", "toPiecesFromMeter", "toMurubbaFromPieces"])
def test_inverse_modes_require_target(mode):
    with pytest.raises(ValidationError):
        _input(calc_mode=mode, target_value=None)


def test_to_murubba_target_defaults_to_one():
    calc_input = _input(calc_mode="toMurubba", target_value=None)
    assert calc_input.target_value == 1.0
    assert engine.calculate(calc_input).quantity == 1.0


def test_non_finite_unit_price_rejected():
    with pytest.raises(ValidationError):
        _input(unit_price=math.inf)


def test_unknown_mode_reaching_engine_raises_invalid_mode():
    """Bypass validation to simulate a mode outside the closed set."""
    calc_input = ToMurubbaInput.model_construct(
        calc_mode="toCubicFeet", input_unit=InputUnit.METRIC,
        length=1.0, width=1.0, height=2.0, target_value=1.0, unit_price=0.0,
    )
    with pytest.raises(InvalidMode):
        engine.calculate(calc_input)


def test_module_level_calculate_uses_injected_constants():
    result = calculate(_input(calc_mode="toMurubba", length=10, width=5, target_value=1),
                       EngineConstants(murubba_sq_m=50.0))
    assert result.total_murubba == 1.0


# ============================================================
# 19-22. Input variants, wire format, overflow
# ============================================================

@pytest.mark.parametrize("mode,model", [
    ("toMurubba", ToMurubbaInput),
    ("toPieces", ToPiecesInput),
    ("toPiecesFromMeter", ToPiecesFromMeterInput),
    ("toMurubbaFromPieces", ToMurubbaFromPiecesInput),
])
def test_calc_mode_selects_input_variant(mode, model):
    assert type(_input(calc_mode=mode, target_value=4)) is model


def test_unknown_mode_fails_validation():
    with pytest.raises(ValidationError):
        _input(calc_mode="toCubicFeet")


def test_camel_case_input_accepted():
    calc_input = parse_calculation_input({
        "calcMode": "toPiecesFromMeter",
        "inputUnit": "imperial",
        "length": 2,
        "width": 1,
        "height": 1,
        "targetValue": 12,
        "unitPrice": 40,
    })
    assert isinstance(calc_input, ToPiecesFromMeterInput)
    assert calc_input.input_unit is InputUnit.IMPERIAL
    assert calc_input.target_value == 12
    assert calc_input.unit_price == 40


def test_result_serializes_camel_case_and_reads_back():
    result = engine.calculate(_input(unit_price=1200.0))
    wire = result.model_dump(mode="json", by_alias=True)
    assert wire["calcMode"] == "toMurubbaFromPieces"
    assert wire["totalVolumeM3"] == pytest.approx(result.total_volume_m3)
    assert wire["estimatedWeightTon"] == pytest.approx(result.estimated_weight_ton)
    assert "calc_mode" not in wire
    assert CalculationResult.model_validate(wire) == result


def test_price_overflow_is_invalid_dimension():
    with pytest.raises(InvalidDimension, match="Total price"):
        engine.calculate(_input(target_value=1e10, unit_price=1e300))


@pytest.mark.parametrize("mode,length", [("toPieces", 0.01), ("toPiecesFromMeter", 0.001)])
def test_huge_target_is_invalid_dimension(mode, length):
    with pytest.raises(InvalidDimension):
        engine.calculate(_input(calc_mode=mode, length=length, width=0.01, height=1, target_value=1e307))
