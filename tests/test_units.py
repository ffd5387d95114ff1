import pytest

from room_designer.units import get_unit_conversion_factor, to_meters


@pytest.mark.parametrize("unit,factor", [
    ("m", 1),
    ("cm", 0.01),
    ("CM", 0.01),
    ("in", 0.0254),
    ("Ft", 0.3048),
])
def test_known_units(unit, factor):
    assert get_unit_conversion_factor(unit) == factor


def test_unknown_units_default_to_meters():
    assert get_unit_conversion_factor("unknown") == 1
    assert get_unit_conversion_factor("") == 1
    assert get_unit_conversion_factor(None) == 1


def test_to_meters():
    assert to_meters(250, "cm") == pytest.approx(2.5)
    assert to_meters(3, "weird") == 3
