# yardview/services/location_decoder.py
import re
from dataclasses import dataclass
from typing import Optional

from yardview.core.constants import (
    UNKNOWN_BLOCK,
    HEAP_NAME_MIN_LENGTH,
    HEAP_NAME_MAX_LENGTH,
)

_HEAP_PATTERN = re.compile(r'^[A-Za-z0-9\s]+$')


@dataclass(frozen=True)
class DecodedLocation:
    block: str
    bay: int
    row: int
    tier: int
    is_unmapped: bool

    @property
    def is_heap(self) -> bool:
        return self.is_unmapped and self.block != UNKNOWN_BLOCK


UNMAPPED = DecodedLocation(block=UNKNOWN_BLOCK, bay=0, row=0, tier=0, is_unmapped=True)


def _to_int(value: str) -> Optional[int]:
    # Solo dígitos ASCII; int() aceptaría '+5' o '1_0'
    if not value or not (value.isascii() and value.isdigit()):
        return None
    return int(value)


def _split_grid(location: str):
    """
    Separa bloque/bay/row/tier según el formato:
    - Con guiones: A2-22-05-1
    - Concatenado (ancho fijo): A222051 -> tier=1, row=05, bay=22, bloque=A2
    """
    parts = location.split('-')
    if len(parts) == 4:
        return parts

    if len(location) >= 6:
        return location[:-5], location[-5:-3], location[-3:-1], location[-1:]

    return None


def _heap_zone(location: str) -> DecodedLocation:
    """Zonas sin grilla (APR01, CFS 1, MNR...) identificadas solo por nombre"""
    if (HEAP_NAME_MIN_LENGTH <= len(location) <= HEAP_NAME_MAX_LENGTH
            and _HEAP_PATTERN.match(location)):
        return DecodedLocation(block=location.upper(), bay=0, row=0, tier=0, is_unmapped=True)
    return UNMAPPED


def decode_location(raw_location: Optional[str]) -> DecodedLocation:
    """
    Decodifica una posición del patio en bloque/bay/row/tier.

    Si no es una posición de grilla válida (row y tier >= 1), intenta
    interpretarla como zona heap; si tampoco aplica, el bloque queda 'UNK'.
    """
    if not raw_location or not raw_location.strip():
        return UNMAPPED

    trimmed = raw_location.strip()
    location = re.sub(r'\s', '', trimmed)

    grid = _split_grid(location)
    if grid is not None:
        block, bay_str, row_str, tier_str = grid
        bay, row, tier = _to_int(bay_str), _to_int(row_str), _to_int(tier_str)

        if block and None not in (bay, row, tier) and row >= 1 and tier >= 1:
            return DecodedLocation(block=block.upper(), bay=bay, row=row, tier=tier, is_unmapped=False)

    return _heap_zone(trimmed)
