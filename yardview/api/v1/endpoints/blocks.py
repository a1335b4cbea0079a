# yardview/api/v1/endpoints/blocks.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from yardview.core.database import get_db
from yardview.schemas.blocks import BlockConfig, BlockConfigCreate, BlockConfigUpdate
from yardview.services.block_config_service import (
    BlockConfigService,
    BlockNotFoundError,
    DuplicateBlockError,
)

router = APIRouter()


@router.get("", response_model=List[BlockConfig])
async def list_blocks(db: AsyncSession = Depends(get_db)):
    return await BlockConfigService(db).list_blocks()


@router.post("", response_model=BlockConfig, status_code=201)
async def add_block(request: BlockConfigCreate, db: AsyncSession = Depends(get_db)):
    """Agrega un bloque. Rechaza nombres repetidos (sin distinguir mayúsculas)."""
    try:
        return await BlockConfigService(db).add_block(request)
    except DuplicateBlockError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/{name}", response_model=BlockConfig)
async def get_block(name: str, db: AsyncSession = Depends(get_db)):
    try:
        return await BlockConfigService(db).get_block(name)
    except BlockNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{name}", response_model=BlockConfig)
async def update_block(name: str, request: BlockConfigUpdate, db: AsyncSession = Depends(get_db)):
    try:
        return await BlockConfigService(db).update_block(name, request)
    except BlockNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{name}", status_code=204)
async def remove_block(name: str, db: AsyncSession = Depends(get_db)):
    try:
        await BlockConfigService(db).remove_block(name)
    except BlockNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/reset", response_model=List[BlockConfig])
async def reset_blocks(db: AsyncSession = Depends(get_db)):
    """Vuelve a la configuración por defecto"""
    return await BlockConfigService(db).reset_defaults()
