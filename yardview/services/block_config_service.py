# yardview/services/block_config_service.py
import logging
from typing import List, Optional

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from yardview.core.constants import (
    DEFAULT_BLOCKS,
    BLOCK_TYPE_HEAP,
    MACHINE_RS,
    get_machine_type,
)
from yardview.models.yard_block import YardBlock
from yardview.schemas.blocks import BlockConfig, BlockConfigCreate, BlockConfigUpdate

logger = logging.getLogger(__name__)


class DuplicateBlockError(Exception):
    """Ya existe un bloque con ese nombre"""


class BlockNotFoundError(Exception):
    """El bloque no existe"""


def _normalize_name(name: str) -> str:
    return name.strip().upper()


class BlockConfigService:
    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def to_schema(block: YardBlock) -> BlockConfig:
        return BlockConfig(
            name=block.name,
            group=block.group,
            capacity=block.capacity,
            totalBays=block.total_bays,
            rowsPerBay=block.rows_per_bay,
            tiersPerBay=block.tiers_per_bay,
            blockType=block.block_type,
            machineType=block.machine_type,
            isDefault=bool(block.is_default),
        )

    async def _find(self, name: str) -> Optional[YardBlock]:
        result = await self.db.execute(
            select(YardBlock).where(func.upper(YardBlock.name) == _normalize_name(name))
        )
        return result.scalars().first()

    async def _next_position(self) -> int:
        result = await self.db.execute(select(func.max(YardBlock.position)))
        current = result.scalar()
        return (current or 0) + 1

    async def list_blocks(self) -> List[BlockConfig]:
        """Bloques en orden de despliegue"""
        result = await self.db.execute(
            select(YardBlock).order_by(YardBlock.position, YardBlock.created_at)
        )
        return [self.to_schema(b) for b in result.scalars().all()]

    async def get_block(self, name: str) -> BlockConfig:
        block = await self._find(name)
        if block is None:
            raise BlockNotFoundError(f"Bloque no encontrado: {name}")
        return self.to_schema(block)

    async def add_block(self, request: BlockConfigCreate, is_default: bool = False) -> BlockConfig:
        """
        Agrega un bloque. El nombre se compara sin distinguir mayúsculas.
        Los HEAP no tienen grilla y se operan con reach stacker.
        """
        name = _normalize_name(request.name)
        if await self._find(name) is not None:
            raise DuplicateBlockError(f"El bloque {name} ya existe")

        is_heap = request.blockType == BLOCK_TYPE_HEAP
        block = YardBlock(
            name=name,
            group=request.group,
            capacity=request.capacity,
            total_bays=0 if is_heap else request.totalBays,
            rows_per_bay=0 if is_heap else request.rowsPerBay,
            tiers_per_bay=0 if is_heap else request.tiersPerBay,
            block_type=request.blockType,
            machine_type=MACHINE_RS if is_heap else (request.machineType or get_machine_type(name)),
            is_default=is_default,
            position=await self._next_position(),
        )
        self.db.add(block)
        await self.db.commit()
        await self.db.refresh(block)

        logger.info(f"Bloque agregado: {name} ({block.block_type}, {block.capacity} TEUs)")
        return self.to_schema(block)

    async def update_block(self, name: str, request: BlockConfigUpdate) -> BlockConfig:
        block = await self._find(name)
        if block is None:
            raise BlockNotFoundError(f"Bloque no encontrado: {name}")

        changes = request.model_dump(exclude_unset=True)
        field_map = {
            'group': 'group',
            'capacity': 'capacity',
            'totalBays': 'total_bays',
            'rowsPerBay': 'rows_per_bay',
            'tiersPerBay': 'tiers_per_bay',
            'blockType': 'block_type',
            'machineType': 'machine_type',
        }
        for key, value in changes.items():
            if value is not None:
                setattr(block, field_map[key], value)

        if block.block_type == BLOCK_TYPE_HEAP:
            block.total_bays = block.rows_per_bay = block.tiers_per_bay = 0
            block.machine_type = MACHINE_RS

        await self.db.commit()
        await self.db.refresh(block)
        return self.to_schema(block)

    async def remove_block(self, name: str) -> None:
        block = await self._find(name)
        if block is None:
            raise BlockNotFoundError(f"Bloque no encontrado: {name}")

        await self.db.delete(block)
        await self.db.commit()
        logger.info(f"Bloque eliminado: {block.name}")

    async def seed_defaults(self) -> int:
        """Inserta los bloques por defecto que falten. Retorna cuántos se crearon."""
        result = await self.db.execute(select(func.upper(YardBlock.name)))
        existing = set(result.scalars().all())
        position = await self._next_position()

        created = 0
        for default in DEFAULT_BLOCKS:
            name = _normalize_name(default['name'])
            if name in existing:
                continue

            is_heap = default['blockType'] == BLOCK_TYPE_HEAP
            self.db.add(YardBlock(
                name=name,
                group=default['group'],
                capacity=default['capacity'],
                total_bays=default['totalBays'],
                rows_per_bay=default['rowsPerBay'],
                tiers_per_bay=default['tiersPerBay'],
                block_type=default['blockType'],
                machine_type=MACHINE_RS if is_heap else default.get('machineType', get_machine_type(name)),
                is_default=True,
                position=position,
            ))
            existing.add(name)
            position += 1
            created += 1

        await self.db.commit()
        if created:
            logger.info(f"✅ {created} bloques por defecto creados")
        return created

    async def reset_defaults(self) -> List[BlockConfig]:
        """Elimina todos los bloques y vuelve a la configuración inicial"""
        await self.db.execute(delete(YardBlock))
        await self.db.commit()
        await self.seed_defaults()
        return await self.list_blocks()
