"""Rounding rules shared by calculations and serializers"""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 0) -> float:
    """Round halves away from zero (Python's round() uses banker's rounding)"""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_currency(value: float) -> float:
    """Currency magnitudes are reported with 2 decimals"""
    return round_half_up(value, 2)


def round_clients(value: float) -> int:
    """Projected client counts are whole clients, halves rounded up"""
    return int(round_half_up(value))
