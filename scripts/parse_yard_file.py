# scripts/parse_yard_file.py
import sys
from pathlib import Path
import argparse
import logging
from datetime import datetime

sys.path.append(str(Path(__file__).parent.parent))

from yardview.core.constants import DEFAULT_BLOCKS
from yardview.core.logging_config import setup_logging
from yardview.schemas.blocks import BlockConfig
from yardview.services.workbook_reader import WorkbookDecodeError, parse_workbook_file
from yardview.services.yard_aggregator import (
    aggregate_block_stats,
    group_block_stats,
    sum_block_stats,
)

setup_logging()
logger = logging.getLogger(__name__)


def main(path: str, iso_type: str = 'ALL', block: str = None) -> int:
    """
    Procesa una planilla del patio y muestra la ocupación por bloque
    usando la configuración de bloques por defecto.
    """
    start_time = datetime.now()

    try:
        result = parse_workbook_file(path)
    except (OSError, WorkbookDecodeError) as e:
        logger.error(f"❌ {e}")
        return 1

    stats = result.stats
    logger.info("=" * 60)
    logger.info(f"ARCHIVO: {Path(path).name}")
    logger.info("=" * 60)
    logger.info(f"Filas: {stats.totalRows:,}")
    logger.info(f"Contenedores: {stats.createdContainers:,}")
    logger.info(f"Omitidas: {stats.skippedRows:,}")
    logger.info(f"Filas de totales: {stats.ignoredSummaryRows:,}")
    logger.info(f"Buques: {', '.join(result.vessels) or '-'}")

    block_configs = [BlockConfig(**b) for b in DEFAULT_BLOCKS]
    if block:
        block_configs = [b for b in block_configs if b.name == block.upper()]
        if not block_configs:
            logger.warning(f"Bloque {block} no está en la configuración por defecto")

    blocks = aggregate_block_stats(result.containers, block_configs, iso_type)

    logger.info(f"\n=== OCUPACIÓN POR BLOQUE ({iso_type}) ===")
    for group in group_block_stats(blocks, iso_type):
        logger.info(f"\nGrupo: {group.group}")
        for b in group.blocks:
            if b.usedTeus == 0 and not block:
                continue
            logger.info(
                f"  {b.name}: {b.usedTeus}/{b.capacity} TEUs ({b.usedPercent:.1f}%) "
                f"exp={b.exportFullTeus} imp={b.importFullTeus} vac={b.emptyTeus}"
            )
        logger.info(f"  Subtotal: {group.total.usedTeus}/{group.total.capacity} TEUs ({group.total.usedPercent:.1f}%)")

    total = sum_block_stats(blocks)
    logger.info(f"\nTOTAL: {total.usedTeus}/{total.capacity} TEUs ({total.usedPercent:.1f}%)")

    duration = datetime.now() - start_time
    logger.info(f"\n⏱️  Tiempo total de ejecución: {duration}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Procesar planilla de inventario del patio')
    parser.add_argument('path', help='Archivo Excel (.xlsx) o CSV')
    parser.add_argument('--iso-type', choices=['ALL', 'DRY', 'REEFER'], default='ALL', help='Filtro por tipo ISO')
    parser.add_argument('--block', type=str, help='Mostrar solo un bloque')

    args = parser.parse_args()
    sys.exit(main(args.path, args.iso_type, args.block))
