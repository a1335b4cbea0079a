# yardview/schemas/blocks.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Literal

BlockType = Literal['GRID', 'HEAP']
MachineType = Literal['RTG', 'RS']


class BlockConfig(BaseModel):
    """Configuración de bloque tal como la consume la agregación"""
    name: str
    group: str = 'GP'
    capacity: int = Field(0, ge=0)  # TEUs
    totalBays: int = Field(0, ge=0)
    rowsPerBay: int = Field(0, ge=0)
    tiersPerBay: int = Field(0, ge=0)
    blockType: BlockType = 'GRID'
    machineType: Optional[MachineType] = None
    isDefault: bool = False


class BlockConfigCreate(BaseModel):
    """Request para agregar un bloque"""
    name: str = Field(..., min_length=1, max_length=20)
    group: str = 'GP'
    capacity: int = Field(0, ge=0)
    totalBays: int = Field(0, ge=0)
    rowsPerBay: int = Field(0, ge=0)
    tiersPerBay: int = Field(0, ge=0)
    blockType: BlockType = 'GRID'
    machineType: Optional[MachineType] = None

    @field_validator('name')
    @classmethod
    def normalize_name(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError('El nombre del bloque no puede estar vacío')
        return value


class BlockConfigUpdate(BaseModel):
    """Request para editar un bloque (campos opcionales)"""
    group: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=0)
    totalBays: Optional[int] = Field(None, ge=0)
    rowsPerBay: Optional[int] = Field(None, ge=0)
    tiersPerBay: Optional[int] = Field(None, ge=0)
    blockType: Optional[BlockType] = None
    machineType: Optional[MachineType] = None
