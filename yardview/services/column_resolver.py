# yardview/services/column_resolver.py
"""
Resolución de columnas para planillas sin esquema fijo.

Los reportes del patio llegan con encabezados en vietnamita, inglés o
abreviados ("Số cont", "Container No", "F/E"...). En vez de un esquema,
cada campo semántico tiene una lista ordenada de alias (ver core/constants.py).
"""
import math
from typing import Any, Mapping, Optional, Sequence, Union

Scalar = Union[str, int, float, bool, None]
RowRecord = Mapping[str, Scalar]


def is_blank(value: Any) -> bool:
    """Celda vacía: None, NaN o texto en blanco"""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and value.strip() == '':
        return True
    return False


def cell_text(value: Any) -> Optional[str]:
    """
    Convierte una celda a texto limpio.
    Los números enteros leídos como float (ej: 222051.0) pierden el '.0'
    """
    if is_blank(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def resolve_column(row: RowRecord, candidate_keys: Sequence[str]) -> Any:
    """
    Busca el valor de un campo usando una lista de alias en minúsculas.

    1. Coincidencia exacta (encabezado normalizado == alias), en el orden
       natural de los encabezados de la fila.
    2. Si no hay exacta, el primer encabezado que CONTIENE algún alias de
       más de un carácter. Ej: "Số ngày lưu bãi" se encuentra con "lưu bãi".

    Retorna None si ningún encabezado coincide.
    """
    headers = [(key, str(key).strip().lower()) for key in row.keys()]

    for key, normalized in headers:
        if normalized in candidate_keys:
            return row[key]

    for key, normalized in headers:
        if any(len(alias) > 1 and alias in normalized for alias in candidate_keys):
            return row[key]

    return None


def resolve_text(row: RowRecord, candidate_keys: Sequence[str]) -> Optional[str]:
    """Igual que resolve_column pero devuelve texto limpio (None si está vacío)"""
    return cell_text(resolve_column(row, candidate_keys))
