from typing import Optional

# Meters per unit
UNIT_FACTORS = {
    "m": 1.0,
    "cm": 0.01,
    "in": 0.0254,
    "ft": 0.3048,
}


def get_unit_conversion_factor(unit: Optional[str]) -> float:
    """Meters per `unit`. Unknown or missing labels are treated as meters."""
    if not isinstance(unit, str):
        return 1.0
    return UNIT_FACTORS.get(unit.lower(), 1.0)


def to_meters(value: float, unit: Optional[str]) -> float:
    return value * get_unit_conversion_factor(unit)
