# yardview/schemas/yard.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Literal

Status = Literal['FULL', 'EMPTY']
Flow = Literal['IMPORT', 'EXPORT', 'STORAGE']
IsoTypeFilter = Literal['ALL', 'DRY', 'REEFER']


class Container(BaseModel):
    """Contenedor normalizado. Un 40' en grilla se representa con dos registros (start/end)"""
    model_config = ConfigDict(frozen=True)

    id: str
    location: str
    block: str
    bay: int
    row: int
    tier: int
    owner: str = 'Unknown'
    size: Literal[20, 40] = 20
    isMultiBay: bool = False
    partType: Optional[Literal['start', 'end']] = None
    vessel: Optional[str] = None
    status: Status = 'FULL'
    flow: Optional[Flow] = None
    detailedFlow: str = ''
    type: Literal['GP', 'REEFER'] = 'GP'
    iso: Optional[str] = None
    dwellDays: float = 0.0
    commodity: Optional[str] = None
    billOfLading: Optional[str] = None
    inDate: Optional[str] = None
    holdReason: Optional[str] = None

    @property
    def is_end_part(self) -> bool:
        """Mitad 'end' de un 40': no se cuenta en agregaciones"""
        return self.isMultiBay and self.partType == 'end'


class ParseStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    totalRows: int = 0
    createdContainers: int = 0  # contenedores lógicos, no registros
    skippedRows: int = 0
    ignoredSummaryRows: int = 0  # filas de totales del reporte

    def merge(self, other: "ParseStats") -> "ParseStats":
        return ParseStats(
            totalRows=self.totalRows + other.totalRows,
            createdContainers=self.createdContainers + other.createdContainers,
            skippedRows=self.skippedRows + other.skippedRows,
            ignoredSummaryRows=self.ignoredSummaryRows + other.ignoredSummaryRows,
        )


class ParseResult(BaseModel):
    containers: List[Container]
    stats: ParseStats
    vessels: List[str]


class UploadResponse(BaseModel):
    uploadId: str
    filename: Optional[str] = None
    stats: ParseStats
    vessels: List[str]
    blocks: List[str]  # bloques encontrados en el archivo


class BlockStats(BaseModel):
    name: str
    group: str
    capacity: int
    exportFullTeus: int = 0   # Outbound
    importFullTeus: int = 0   # Inbound
    emptyTeus: int = 0        # Empty stock
    exportFullCount: int = 0
    importFullCount: int = 0
    emptyCount: int = 0
    usedTeus: int = 0
    availableTeus: int = 0
    exportPercent: float = 0.0
    importPercent: float = 0.0
    emptyPercent: float = 0.0
    usedPercent: float = 0.0
    availablePercent: float = 0.0


class GroupStats(BaseModel):
    group: str
    blocks: List[BlockStats]
    total: BlockStats


class YardStatisticsResponse(BaseModel):
    isoType: IsoTypeFilter
    groups: List[GroupStats]
    total: BlockStats
    colors: Dict[str, str]


class VesselStatisticsResponse(BaseModel):
    vessels: List[str]
    # { 'A2': { 'EVER ORIENT': 5 } }
    byBlock: Dict[str, Dict[str, int]]
    totals: Dict[str, int]


class DwellBucket(BaseModel):
    label: str
    minDays: float
    maxDays: Optional[float] = None
    count: int


class DwellCategoryStats(BaseModel):
    category: str
    count: int
    averageDays: float
    maxDays: float
    buckets: List[DwellBucket]


class DwellStatisticsResponse(BaseModel):
    isoType: IsoTypeFilter
    categories: List[DwellCategoryStats]


class SearchResponse(BaseModel):
    query: str
    containerIds: List[str] = Field(default_factory=list)


class DischargeCapacityResponse(BaseModel):
    """Capacidad de descarga en bloques operados con RTG"""
    rtgBlocks: List[str]
    rsBlocks: List[str]
    rtgCapacity: int
    rtgUsedTeus: int
    rtgAvailableTeus: int
