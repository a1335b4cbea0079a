# yardview/services/workbook_reader.py
import io
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from yardview.schemas.yard import ParseResult
from yardview.services.column_resolver import is_blank
from yardview.services.container_materializer import parse_rows

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = ('.xlsx', '.xlsm', '.xltx', '.xltm')


class WorkbookDecodeError(Exception):
    """El archivo no se pudo leer como planilla (corrupto, vacío o formato desconocido)"""


def _read_dataframe(data: bytes, filename: Optional[str]) -> pd.DataFrame:
    suffix = Path(filename).suffix.lower() if filename else ''

    if suffix == '.csv':
        # Separador detectado automáticamente (',' o ';')
        return pd.read_csv(
            io.BytesIO(data),
            sep=None,
            engine='python',
            dtype=str,
            encoding='utf-8-sig',
        )

    # Sin extensión se intenta como Excel
    if suffix and suffix not in EXCEL_SUFFIXES:
        raise ValueError(f"Formato no soportado: {suffix}")

    # Primera hoja; dtype=object conserva enteros y textos tal cual
    return pd.read_excel(io.BytesIO(data), sheet_name=0, engine='openpyxl', dtype=object)


def read_rows(data: bytes, filename: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Decodifica una planilla (Excel o CSV) en una lista de filas
    {encabezado: valor}. Las celdas vacías no aparecen en la fila.
    """
    if not data:
        raise WorkbookDecodeError("El archivo está vacío")

    try:
        df = _read_dataframe(data, filename)
    except Exception as e:
        logger.error(f"Error leyendo {filename or 'planilla'}: {e}")
        raise WorkbookDecodeError(
            "No se pudo leer el archivo. Verifique que sea una planilla Excel/CSV válida y no esté dañada."
        ) from e

    # Limpiar nombres de columnas
    df.columns = [str(col).strip() for col in df.columns]
    df = df.loc[:, ~df.columns.str.contains('^Unnamed')]
    # Filas completamente vacías no son datos
    df = df.dropna(how='all')

    rows = []
    for record in df.to_dict(orient='records'):
        rows.append({key: value for key, value in record.items() if not is_blank(value)})

    logger.info(f"{filename or 'planilla'}: {len(rows)} filas, {len(df.columns)} columnas")
    return rows


def parse_workbook(data: bytes, filename: Optional[str] = None) -> ParseResult:
    """Lee y procesa una planilla completa. Falla entera o no falla."""
    return parse_rows(read_rows(data, filename))


def parse_workbook_file(path: str) -> ParseResult:
    file_path = Path(path)
    return parse_workbook(file_path.read_bytes(), file_path.name)
