import math
import re
from decimal import Decimal, DecimalException

from ..core.exceptions import ParseError

_QUANTITY_RE = re.compile(r"^([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)([A-Za-z]*)$")

MEMORY_MULTIPLIERS = {
    "": Decimal(1),
    # Binary SI suffixes
    "Ki": Decimal(1024),
    "Mi": Decimal(1024) ** 2,
    "Gi": Decimal(1024) ** 3,
    "Ti": Decimal(1024) ** 4,
    "Pi": Decimal(1024) ** 5,
    "Ei": Decimal(1024) ** 6,
    # Decimal SI suffixes
    "k": Decimal(1000),
    "M": Decimal(1000) ** 2,
    "G": Decimal(1000) ** 3,
    "T": Decimal(1000) ** 4,
    "P": Decimal(1000) ** 5,
    "E": Decimal(1000) ** 6,
}

# Multipliers from the CPU suffix to millicores. metrics-server reports usage in
# nanocores ("n"), specs usually use millicores ("m") or whole cores.
CPU_MULTIPLIERS = {
    "": Decimal(1000),
    "m": Decimal(1),
    "u": Decimal("0.001"),
    "n": Decimal("0.000001"),
}


def _split_quantity(raw: str, kind: str):
    if not isinstance(raw, str):
        raise ParseError(raw, kind)
    match = _QUANTITY_RE.match(raw.strip())
    if not match:
        raise ParseError(raw, kind)
    return Decimal(match.group(1)), match.group(2)


def _scale(number: Decimal, multiplier: Decimal, raw: str, kind: str) -> float:
    try:
        value = float(number * multiplier)
    except DecimalException as e:
        raise ParseError(raw, kind) from e
    if not math.isfinite(value):
        raise ParseError(raw, kind)
    return value


def parse_memory(raw: str) -> float:
    """
    Converts a K8s memory quantity ("128Mi", "1G", "500") to bytes.

    Raises:
        ParseError: If the numeric portion is invalid, the suffix is unknown or
            the value does not fit a float.
    """
    number, suffix = _split_quantity(raw, "memory")
    multiplier = MEMORY_MULTIPLIERS.get(suffix)
    if multiplier is None:
        raise ParseError(raw, "memory")
    return _scale(number, multiplier, raw, "memory")


def parse_cpu(raw: str) -> float:
    """
    Converts a K8s CPU quantity to millicores: "500m" -> 500, "2" -> 2000, "0.5" -> 500.

    Raises:
        ParseError: If the input is not a valid CPU quantity.
    """
    number, suffix = _split_quantity(raw, "cpu")
    multiplier = CPU_MULTIPLIERS.get(suffix)
    if multiplier is None:
        raise ParseError(raw, "cpu")
    return _scale(number, multiplier, raw, "cpu")
