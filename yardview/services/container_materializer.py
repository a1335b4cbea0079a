# yardview/services/container_materializer.py
"""
Materialización de contenedores a partir de filas de planilla.

Cada fila produce un RowOutcome (0, 1 o 2 contenedores + delta de
estadísticas). parse_rows hace el fold de los deltas; como la combinación es
asociativa, las filas se pueden procesar en cualquier orden o por bloques.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from yardview.core.constants import (
    ID_KEYS, OWNER_KEYS, VESSEL_KEYS, ISO_KEYS, SIZE_KEYS,
    FULL_EMPTY_KEYS, STATUS_KEYS, FLOW_KEYS, DWELL_KEYS, LOCATION_KEYS,
    COMMODITY_KEYS, BILL_OF_LADING_KEYS, IN_DATE_KEYS, HOLD_REASON_KEYS,
    SUMMARY_ROW_MARKERS, UNKNOWN_BLOCK, UNMAPPED_LOCATION,
)
from yardview.schemas.yard import Container, ParseResult, ParseStats
from yardview.services.column_resolver import RowRecord, resolve_column, resolve_text
from yardview.services.field_classifiers import (
    classify_status,
    classify_flow,
    classify_detailed_flow,
    container_type,
    infer_size,
    parse_dwell_days,
)
from yardview.services.location_decoder import decode_location

logger = logging.getLogger(__name__)

SKIPPED = ParseStats(skippedRows=1)
IGNORED_SUMMARY = ParseStats(ignoredSummaryRows=1)
CREATED = ParseStats(createdContainers=1)


@dataclass(frozen=True)
class RowOutcome:
    containers: Tuple[Container, ...] = ()
    stats: ParseStats = field(default_factory=ParseStats)
    vessel: Optional[str] = None


def _is_summary_row(container_id: str) -> bool:
    lowered = container_id.lower()
    return any(marker in lowered for marker in SUMMARY_ROW_MARKERS)


def materialize_row(row: RowRecord, row_index: int) -> RowOutcome:
    """
    Convierte una fila en contenedores.

    - Sin ID: fila omitida (skippedRows).
    - ID con 'total'/'tổng': fila de totales, se ignora (ignoredSummaryRows).
    - Bay par en grilla: 40' en dos registros, bays b-1 (start) y b+1 (end).
    - Bay impar: un 20'.
    - Heap o sin mapear: un registro con bay=0 y tamaño según columnas/ISO.
    """
    container_id = resolve_text(row, ID_KEYS)
    if not container_id:
        logger.debug(f"Fila {row_index}: sin número de contenedor, omitida")
        return RowOutcome(stats=SKIPPED)

    if _is_summary_row(container_id):
        return RowOutcome(stats=IGNORED_SUMMARY)

    owner = resolve_text(row, OWNER_KEYS) or 'Unknown'
    vessel = resolve_text(row, VESSEL_KEYS)

    iso_text = resolve_text(row, ISO_KEYS)
    iso = iso_text.upper() if iso_text else None
    size = infer_size(resolve_column(row, SIZE_KEYS), iso)

    # Columna F/E primero; 'Status' a veces trae 'Stacking' o 'Shifting'
    status_text = resolve_text(row, FULL_EMPTY_KEYS) or resolve_text(row, STATUS_KEYS)
    flow_text = resolve_text(row, FLOW_KEYS)

    status = classify_status(status_text, flow_text)
    flow = classify_flow(flow_text, status_text)
    detailed_flow = classify_detailed_flow(flow_text, status_text, status)

    dwell_days = parse_dwell_days(resolve_column(row, DWELL_KEYS))

    location_raw = resolve_text(row, LOCATION_KEYS)
    decoded = decode_location(location_raw)

    if decoded.is_unmapped and decoded.block == UNKNOWN_BLOCK:
        location = UNMAPPED_LOCATION
    else:
        location = location_raw

    common = dict(
        id=container_id,
        location=location,
        block=decoded.block,
        row=decoded.row,
        tier=decoded.tier,
        owner=owner,
        vessel=vessel,
        status=status,
        flow=flow,
        detailedFlow=detailed_flow,
        type=container_type(iso),
        iso=iso,
        dwellDays=dwell_days,
        commodity=resolve_text(row, COMMODITY_KEYS),
        billOfLading=resolve_text(row, BILL_OF_LADING_KEYS),
        inDate=resolve_text(row, IN_DATE_KEYS),
        holdReason=resolve_text(row, HOLD_REASON_KEYS),
    )

    if decoded.is_unmapped:
        containers = (Container(**common, bay=0, size=size, isMultiBay=False),)
    elif decoded.bay % 2 == 0:
        containers = (
            Container(**common, bay=decoded.bay - 1, size=40, isMultiBay=True, partType='start'),
            Container(**common, bay=decoded.bay + 1, size=40, isMultiBay=True, partType='end'),
        )
    else:
        containers = (Container(**common, bay=decoded.bay, size=20, isMultiBay=False),)

    return RowOutcome(containers=containers, stats=CREATED, vessel=vessel)


def _safe_materialize(row: RowRecord, row_index: int) -> RowOutcome:
    """Una fila corrupta nunca aborta el archivo: se cuenta como omitida"""
    try:
        return materialize_row(row, row_index)
    except Exception as e:
        logger.debug(f"Fila {row_index}: error al procesar ({e}), omitida")
        return RowOutcome(stats=SKIPPED)


def fold_outcomes(total_rows: int, outcomes: Iterable[RowOutcome]) -> ParseResult:
    stats = ParseStats(totalRows=total_rows)
    containers: List[Container] = []
    vessels = set()

    for outcome in outcomes:
        stats = stats.merge(outcome.stats)
        containers.extend(outcome.containers)
        if outcome.vessel:
            vessels.add(outcome.vessel)

    return ParseResult(containers=containers, stats=stats, vessels=sorted(vessels))


def parse_rows(rows: Sequence[RowRecord]) -> ParseResult:
    """
    Procesa todas las filas de una planilla.
    Las estadísticas parten en cero en cada llamada.
    """
    result = fold_outcomes(
        len(rows),
        (_safe_materialize(row, index) for index, row in enumerate(rows))
    )

    stats = result.stats
    logger.info(
        f"✅ {stats.totalRows} filas: {stats.createdContainers} contenedores, "
        f"{stats.skippedRows} omitidas, {stats.ignoredSummaryRows} de totales, "
        f"{len(result.vessels)} buques"
    )
    return result
