# yardview/models/yard_block.py
from sqlalchemy import Column, Integer, String, Boolean, Index

from yardview.models.base import BaseModel


class YardBlock(BaseModel):
    """
    Configuración de un bloque del patio.
    Los bloques HEAP no tienen grilla interna (bays/rows/tiers en 0).
    """
    __tablename__ = "yard_blocks"

    name = Column(String(20), nullable=False, unique=True)    # A2, CFS 1
    group = Column(String(20), nullable=False, default='GP')  # GP, REEFER, RỖNG, OTHER
    capacity = Column(Integer, nullable=False, default=0)     # TEUs

    # Grilla
    total_bays = Column(Integer, nullable=False, default=0)
    rows_per_bay = Column(Integer, nullable=False, default=0)
    tiers_per_bay = Column(Integer, nullable=False, default=0)

    block_type = Column(String(10), nullable=False, default='GRID')  # GRID / HEAP
    machine_type = Column(String(10), nullable=False, default='RS')  # RTG / RS
    is_default = Column(Boolean, default=False)

    # Orden de despliegue (orden de la lista por defecto o de inserción)
    position = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index('idx_yard_block_group', 'group'),
    )
