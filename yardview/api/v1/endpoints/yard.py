# yardview/api/v1/endpoints/yard.py
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, Path
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from yardview.core.config import get_settings
from yardview.core.constants import CATEGORY_COLORS
from yardview.core.database import get_db
from yardview.schemas.yard import (
    Container,
    DischargeCapacityResponse,
    DwellStatisticsResponse,
    IsoTypeFilter,
    ParseResult,
    SearchResponse,
    UploadResponse,
    VesselStatisticsResponse,
    YardStatisticsResponse,
)
from yardview.services.block_config_service import BlockConfigService
from yardview.services.parse_cache import CachedUpload, ParseResultCache, get_parse_cache
from yardview.services.workbook_reader import WorkbookDecodeError, parse_workbook
from yardview.services.yard_aggregator import (
    aggregate_block_stats,
    containers_by_block,
    discharge_capacity,
    dwell_statistics,
    filter_by_iso_type,
    group_block_stats,
    search_containers,
    sum_block_stats,
    vessel_statistics,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_upload(upload_id: str, cache: ParseResultCache) -> CachedUpload:
    entry = cache.get(upload_id)
    if entry is None:
        raise HTTPException(
            status_code=404,
            detail=f"No hay datos para la carga {upload_id}. Vuelva a subir el archivo."
        )
    return entry


@router.post("/uploads", response_model=UploadResponse)
async def upload_yard_file(
    file: UploadFile = File(..., description="Planilla Excel/CSV con el inventario del patio"),
    cache: ParseResultCache = Depends(get_parse_cache)
):
    """
    Procesa una planilla del patio y guarda el resultado en caché.
    Si el archivo no se puede leer, no se guarda nada (error único).
    """
    settings = get_settings()
    data = await file.read()

    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Archivo demasiado grande ({len(data):,} bytes, máximo {settings.MAX_UPLOAD_BYTES:,})"
        )

    try:
        result = await run_in_threadpool(parse_workbook, data, file.filename)
    except WorkbookDecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    entry = cache.put(result, file.filename)
    logger.info(f"Carga {entry.upload_id}: {file.filename} ({len(result.containers)} registros)")

    return UploadResponse(
        uploadId=entry.upload_id,
        filename=file.filename,
        stats=result.stats,
        vessels=result.vessels,
        blocks=sorted({c.block for c in result.containers})
    )


@router.get("/uploads/{upload_id}", response_model=ParseResult)
async def get_upload(
    upload_id: str = Path(..., description="ID devuelto al subir el archivo"),
    cache: ParseResultCache = Depends(get_parse_cache)
):
    return _get_upload(upload_id, cache).result


@router.get("/uploads/{upload_id}/block-stats", response_model=YardStatisticsResponse)
async def get_block_stats(
    upload_id: str,
    iso_type: IsoTypeFilter = Query('ALL', description="ALL, DRY (ISO **G/P/T/L/U*) o REEFER (ISO **R*)"),
    cache: ParseResultCache = Depends(get_parse_cache),
    db: AsyncSession = Depends(get_db)
):
    """
    Ocupación por bloque (export / import / vacíos) en TEUs y porcentaje
    sobre la capacidad configurada. Incluye subtotales por grupo y total.
    """
    entry = _get_upload(upload_id, cache)
    block_configs = await BlockConfigService(db).list_blocks()

    blocks = aggregate_block_stats(entry.result.containers, block_configs, iso_type)

    return YardStatisticsResponse(
        isoType=iso_type,
        groups=group_block_stats(blocks, iso_type),
        total=sum_block_stats(blocks),
        colors=CATEGORY_COLORS
    )


@router.get("/uploads/{upload_id}/vessel-stats", response_model=VesselStatisticsResponse)
async def get_vessel_stats(
    upload_id: str,
    vessels: Optional[List[str]] = Query(None, description="Buques a mostrar (todos si se omite)"),
    export_full: bool = Query(True),
    export_empty: bool = Query(True),
    import_full: bool = Query(True),
    import_empty: bool = Query(True),
    cache: ParseResultCache = Depends(get_parse_cache),
    db: AsyncSession = Depends(get_db)
):
    """Contenedores por bloque y buque, filtrando por flujo y F/E"""
    entry = _get_upload(upload_id, cache)
    block_configs = await BlockConfigService(db).list_blocks()

    return vessel_statistics(
        entry.result.containers,
        block_configs,
        vessels=vessels,
        known_vessels=entry.result.vessels,
        export_full=export_full,
        export_empty=export_empty,
        import_full=import_full,
        import_empty=import_empty
    )


@router.get("/uploads/{upload_id}/discharge-capacity", response_model=DischargeCapacityResponse)
async def get_discharge_capacity(
    upload_id: str,
    cache: ParseResultCache = Depends(get_parse_cache),
    db: AsyncSession = Depends(get_db)
):
    """Capacidad RTG: TEUs usados y disponibles en bloques RTG, y lista de bloques RS"""
    entry = _get_upload(upload_id, cache)
    block_configs = await BlockConfigService(db).list_blocks()
    return discharge_capacity(entry.result.containers, block_configs)


@router.get("/uploads/{upload_id}/dwell-stats", response_model=DwellStatisticsResponse)
async def get_dwell_stats(
    upload_id: str,
    iso_type: IsoTypeFilter = Query('ALL'),
    cache: ParseResultCache = Depends(get_parse_cache)
):
    """Permanencia (días) por flujo detallado"""
    entry = _get_upload(upload_id, cache)
    containers = filter_by_iso_type(entry.result.containers, iso_type)

    return DwellStatisticsResponse(
        isoType=iso_type,
        categories=dwell_statistics(containers, get_settings().DWELL_BUCKETS)
    )


@router.get("/uploads/{upload_id}/search", response_model=SearchResponse)
async def search(
    upload_id: str,
    q: str = Query(..., min_length=1, description="Número de contenedor o ubicación"),
    cache: ParseResultCache = Depends(get_parse_cache)
):
    entry = _get_upload(upload_id, cache)
    return SearchResponse(query=q, containerIds=search_containers(entry.result.containers, q))


@router.get("/uploads/{upload_id}/blocks/{block_name}", response_model=List[Container])
async def get_block_containers(
    upload_id: str,
    block_name: str,
    iso_type: IsoTypeFilter = Query('ALL'),
    cache: ParseResultCache = Depends(get_parse_cache)
):
    """Contenedores de un bloque (incluye ambas mitades de los 40' para dibujar la grilla)"""
    entry = _get_upload(upload_id, cache)
    containers = filter_by_iso_type(entry.result.containers, iso_type)
    return containers_by_block(containers).get(block_name.strip().upper(), [])
