# yardview/services/yard_aggregator.py
"""
Agregaciones sobre la colección de contenedores: ocupación por bloque,
totales por grupo, estadísticas por buque y permanencia.

Regla común: la mitad 'end' de un 40' nunca se cuenta.
"""
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from yardview.core.constants import (
    FLOW_EXPORT, FLOW_IMPORT,
    STATUS_FULL, STATUS_EMPTY,
    ISO_FILTER_ALL, GROUP_ORDER,
    MACHINE_RTG,
)
from yardview.schemas.blocks import BlockConfig
from yardview.schemas.yard import (
    BlockStats,
    Container,
    DischargeCapacityResponse,
    DwellBucket,
    DwellCategoryStats,
    GroupStats,
    VesselStatisticsResponse,
)
from yardview.services.field_classifiers import calculate_teu, matches_iso_filter


def filter_by_iso_type(containers: Iterable[Container], iso_filter: str = ISO_FILTER_ALL) -> List[Container]:
    return [c for c in containers if matches_iso_filter(c.iso, c.status, iso_filter)]


def unique_containers(containers: Iterable[Container]) -> List[Container]:
    """Un registro por contenedor lógico (sin las mitades 'end')"""
    return [c for c in containers if not c.is_end_part]


def _teus(containers: Iterable[Container]) -> int:
    return sum(calculate_teu(c.iso, c.size) for c in containers)


def _percent(value: float, capacity: int) -> float:
    return (value / capacity) * 100 if capacity > 0 else 0.0


def build_block_stats(
    name: str,
    group: str,
    capacity: int,
    export_teus: int = 0,
    import_teus: int = 0,
    empty_teus: int = 0,
    export_count: int = 0,
    import_count: int = 0,
    empty_count: int = 0,
) -> BlockStats:
    """Arma un BlockStats con los derivados (usado, disponible, porcentajes). Sin tope al 100%."""
    used = export_teus + import_teus + empty_teus
    available = capacity - used
    export_pct = _percent(export_teus, capacity)
    import_pct = _percent(import_teus, capacity)
    empty_pct = _percent(empty_teus, capacity)

    return BlockStats(
        name=name,
        group=group,
        capacity=capacity,
        exportFullTeus=export_teus,
        importFullTeus=import_teus,
        emptyTeus=empty_teus,
        exportFullCount=export_count,
        importFullCount=import_count,
        emptyCount=empty_count,
        usedTeus=used,
        availableTeus=available,
        exportPercent=export_pct,
        importPercent=import_pct,
        emptyPercent=empty_pct,
        usedPercent=export_pct + import_pct + empty_pct,
        availablePercent=_percent(available, capacity),
    )


def aggregate_block_stats(
    containers: Iterable[Container],
    block_configs: Sequence[BlockConfig],
    iso_filter: str = ISO_FILTER_ALL,
) -> List[BlockStats]:
    """
    Ocupación por bloque, en el orden de la configuración.

    Categorías (en orden de precedencia, sin solapamiento):
    1. Outbound:    flow == EXPORT (cualquier estado)
    2. Empty stock: status == EMPTY y flow != EXPORT
    3. Inbound:     status == FULL  y flow != EXPORT
    """
    filtered = unique_containers(filter_by_iso_type(containers, iso_filter))

    by_block: Dict[str, List[Container]] = {}
    for c in filtered:
        by_block.setdefault(c.block, []).append(c)

    stats = []
    for block in block_configs:
        block_containers = by_block.get(block.name, [])

        outbound = [c for c in block_containers if c.flow == FLOW_EXPORT]
        empty_stock = [c for c in block_containers if c.status == STATUS_EMPTY and c.flow != FLOW_EXPORT]
        inbound = [c for c in block_containers if c.status == STATUS_FULL and c.flow != FLOW_EXPORT]

        stats.append(build_block_stats(
            name=block.name,
            group=block.group or 'N/A',
            capacity=block.capacity or 0,
            export_teus=_teus(outbound),
            import_teus=_teus(inbound),
            empty_teus=_teus(empty_stock),
            export_count=len(outbound),
            import_count=len(inbound),
            empty_count=len(empty_stock),
        ))

    return stats


def sum_block_stats(blocks: Iterable[BlockStats], name: str = 'TOTAL', group: str = '') -> BlockStats:
    blocks = list(blocks)
    return build_block_stats(
        name=name,
        group=group,
        capacity=sum(b.capacity for b in blocks),
        export_teus=sum(b.exportFullTeus for b in blocks),
        import_teus=sum(b.importFullTeus for b in blocks),
        empty_teus=sum(b.emptyTeus for b in blocks),
        export_count=sum(b.exportFullCount for b in blocks),
        import_count=sum(b.importFullCount for b in blocks),
        empty_count=sum(b.emptyCount for b in blocks),
    )


def group_block_stats(blocks: Sequence[BlockStats], iso_filter: str = ISO_FILTER_ALL) -> List[GroupStats]:
    """
    Agrupa por grupo de bloque con subtotal.
    DRY muestra solo GP, REEFER solo REEFER; ALL muestra GP, REEFER y luego el resto.
    """
    grouped: "OrderedDict[str, List[BlockStats]]" = OrderedDict()
    for block in blocks:
        grouped.setdefault(block.group, []).append(block)

    order = list(GROUP_ORDER.get(iso_filter, GROUP_ORDER[ISO_FILTER_ALL]))
    if iso_filter == ISO_FILTER_ALL:
        order += [g for g in grouped if g not in order]

    return [
        GroupStats(group=g, blocks=grouped[g], total=sum_block_stats(grouped[g], name=g, group=g))
        for g in order
        if grouped.get(g)
    ]


# ===================== BUQUES =====================

def vessel_statistics(
    containers: Iterable[Container],
    block_configs: Sequence[BlockConfig],
    vessels: Optional[Sequence[str]] = None,
    known_vessels: Optional[Sequence[str]] = None,
    export_full: bool = True,
    export_empty: bool = True,
    import_full: bool = True,
    import_empty: bool = True,
) -> VesselStatisticsResponse:
    """
    Conteo de contenedores por bloque y buque.
    Solo cuentan flujos EXPORT/IMPORT habilitados por los filtros F/E;
    contenedores sin flujo o en STORAGE no se cuentan.
    Los buques pedidos que no aparecen en el archivo se descartan.
    """
    containers = list(containers)
    by_block: Dict[str, Dict[str, int]] = {b.name: {} for b in block_configs}

    for c in unique_containers(containers):
        if not c.vessel:
            continue

        is_full = c.status == STATUS_FULL
        if c.flow == FLOW_EXPORT:
            include = (is_full and export_full) or (not is_full and export_empty)
        elif c.flow == FLOW_IMPORT:
            include = (is_full and import_full) or (not is_full and import_empty)
        else:
            include = False

        if include:
            block_counts = by_block.setdefault(c.block, {})
            block_counts[c.vessel] = block_counts.get(c.vessel, 0) + 1

    if known_vessels is None:
        known_vessels = {c.vessel for c in containers if c.vessel}

    if vessels is None:
        displayed = sorted({v for counts in by_block.values() for v in counts})
    else:
        displayed = sorted(set(vessels) & set(known_vessels))

    block_names = [b.name for b in block_configs]
    totals = {
        v: sum(by_block.get(name, {}).get(v, 0) for name in block_names)
        for v in displayed
    }

    return VesselStatisticsResponse(vessels=displayed, byBlock=by_block, totals=totals)


def discharge_capacity(
    containers: Iterable[Container],
    block_configs: Sequence[BlockConfig],
) -> DischargeCapacityResponse:
    """
    Espacio disponible para descarga en bloques RTG.
    Los bloques sin tipo de máquina se consideran RS. Los TEUs salen del
    tamaño (40 -> 2), sin mirar el ISO ni el filtro Dry/Reefer.
    """
    rtg_blocks = [b for b in block_configs if b.machineType == MACHINE_RTG]
    rs_blocks = [b for b in block_configs if b.machineType != MACHINE_RTG]
    rtg_names = {b.name for b in rtg_blocks}

    capacity = sum(b.capacity or 0 for b in rtg_blocks)
    used = sum(
        2 if c.size == 40 else 1
        for c in unique_containers(containers)
        if c.block in rtg_names
    )

    return DischargeCapacityResponse(
        rtgBlocks=[b.name for b in rtg_blocks],
        rsBlocks=[b.name for b in rs_blocks],
        rtgCapacity=capacity,
        rtgUsedTeus=used,
        rtgAvailableTeus=capacity - used,
    )


# ===================== PERMANENCIA =====================

def _bucket_label(low: float, high: Optional[float]) -> str:
    if high is None:
        return f"{low:g}+"
    return f"{low:g}-{high:g}"


def dwell_statistics(containers: Iterable[Container], thresholds: Sequence[int]) -> List[DwellCategoryStats]:
    """
    Permanencia por flujo detallado (IMPORT STORAGE, STORAGE EMPTY, ...).
    Los límites definen intervalos [0, t1), [t1, t2), ..., [tn, ∞).
    """
    edges = sorted(set(float(t) for t in thresholds if t > 0))
    by_category: Dict[str, List[float]] = {}
    for c in unique_containers(containers):
        category = c.detailedFlow or 'N/A'
        by_category.setdefault(category, []).append(c.dwellDays)

    result = []
    for category in sorted(by_category):
        days = np.array(by_category[category], dtype=float)
        # Último intervalo abierto: se cierra por encima del máximo observado
        upper = max(float(days.max()), edges[-1] if edges else 0.0) + 1.0
        bins = [0.0] + edges + [upper]
        counts, _ = np.histogram(days, bins=bins)

        buckets = []
        for i, count in enumerate(counts):
            low = bins[i]
            high = bins[i + 1] if i + 1 < len(bins) - 1 else None
            buckets.append(DwellBucket(label=_bucket_label(low, high), minDays=low, maxDays=high, count=int(count)))

        result.append(DwellCategoryStats(
            category=category,
            count=int(days.size),
            averageDays=round(float(np.mean(days)), 2),
            maxDays=float(np.max(days)),
            buckets=buckets,
        ))

    return result


# ===================== BÚSQUEDA =====================

def search_containers(containers: Iterable[Container], query: str) -> List[str]:
    """
    IDs que contienen el texto buscado, o cuya ubicación (sin espacios ni
    guiones) es igual a la búsqueda sin guiones. 'A2-22-05-1' == 'A222051'.
    """
    term = (query or '').strip().upper()
    if not term:
        return []

    location_term = term.replace('-', '')
    matches: Dict[str, None] = {}
    for c in containers:
        location = ''.join(c.location.split()).replace('-', '').upper()
        if term in c.id.upper() or location == location_term:
            matches[c.id] = None
    return list(matches)


def containers_by_block(containers: Iterable[Container]) -> Dict[str, List[Container]]:
    grouped: Dict[str, List[Container]] = {}
    for c in containers:
        grouped.setdefault(c.block, []).append(c)
    return grouped
