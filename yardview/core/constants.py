# yardview/core/constants.py
"""
Constantes para el visor de patio
"""

# ===================== ALIAS DE COLUMNAS =====================
# Encabezados posibles (en minúsculas) para cada campo semántico.
# El orden importa: se prueban de izquierda a derecha.

ID_KEYS = ['số cont', 'container', 'container number', 'cont', 'id', 'no', 'số']
OWNER_KEYS = ['hãng khai thác', 'chủ hàng', 'owner', 'operator']
VESSEL_KEYS = ['tên tàu', 'vessel']
ISO_KEYS = ['loại iso', 'iso code', 'iso', 'kích cỡ iso', 'type', 'mã']
SIZE_KEYS = ['size', 'sz', 'length', 'kích', 'cỡ']
FULL_EMPTY_KEYS = ['f/e', 'fe', 'full/empty']
STATUS_KEYS = ['trạng thái', 'status', 'tình trạng', 'stat', 'trạng']
FLOW_KEYS = ['hướng', 'flow', 'category', 'cat', 'type', 'loại', 'im', 'ex']
DWELL_KEYS = [
    'dwell', 'dwell time', 'days', 'số ngày', 'ngày lưu',
    'lưu bãi', 'time in', 'tồn', 'số ngày lưu bãi'
]
LOCATION_KEYS = ['vị trí trên bãi', 'vị trí', 'location']
COMMODITY_KEYS = ['hàng hóa', 'hàng hoá', 'tên hàng', 'commodity', 'cargo', 'goods']
BILL_OF_LADING_KEYS = ['số vận đơn', 'số bl', 'bill of lading', 'b/l', 'bl']
IN_DATE_KEYS = ['ngày nhập bãi', 'ngày nhập', 'ngày vào', 'time in', 'in date']
HOLD_REASON_KEYS = ['lý do giữ', 'lý do', 'hold reason', 'remark', 'ghi chú']

# Filas de totales en los reportes exportados
SUMMARY_ROW_MARKERS = ['total', 'tổng']

# ===================== UBICACIONES =====================
UNKNOWN_BLOCK = 'UNK'
UNMAPPED_LOCATION = 'Unmapped'

# Zonas sin grilla (heap): largo permitido del código
HEAP_NAME_MIN_LENGTH = 2
HEAP_NAME_MAX_LENGTH = 10

# ===================== CLASIFICACIÓN =====================
STATUS_FULL = 'FULL'
STATUS_EMPTY = 'EMPTY'

FLOW_IMPORT = 'IMPORT'
FLOW_EXPORT = 'EXPORT'
FLOW_STORAGE = 'STORAGE'

TYPE_GP = 'GP'
TYPE_REEFER = 'REEFER'

ISO_FILTER_ALL = 'ALL'
ISO_FILTER_DRY = 'DRY'
ISO_FILTER_REEFER = 'REEFER'

# Tercer carácter del código ISO
DRY_ISO_TYPE_CHARS = {'G', 'P', 'T', 'L', 'U'}
REEFER_ISO_TYPE_CHAR = 'R'

# ===================== BLOQUES =====================
BLOCK_TYPE_GRID = 'GRID'
BLOCK_TYPE_HEAP = 'HEAP'

MACHINE_RTG = 'RTG'
MACHINE_RS = 'RS'  # Reach stacker

RTG_BLOCK_NAMES = [
    'A1', 'B1', 'C1', 'D1', 'E1', 'F1', 'G1', 'H1', 'I1',
    'A2', 'B2', 'C2', 'D2', 'E2', 'F2', 'G2', 'H2', 'I2',
    'A0', 'H0', 'I0'
]

# Orden de grupos en la tabla de estadísticas
GROUP_ORDER = {
    ISO_FILTER_DRY: ['GP'],
    ISO_FILTER_REEFER: ['REEFER'],
    ISO_FILTER_ALL: ['GP', 'REEFER'],
}


def _grid(name: str, capacity: int, group: str, bays: int, rows: int, tiers: int) -> dict:
    return {
        'name': name,
        'capacity': capacity,
        'group': group,
        'totalBays': bays,
        'rowsPerBay': rows,
        'tiersPerBay': tiers,
        'blockType': BLOCK_TYPE_GRID,
    }


def _heap(name: str, capacity: int = 500) -> dict:
    return {
        'name': name,
        'capacity': capacity,
        'group': 'OTHER',
        'totalBays': 0,
        'rowsPerBay': 0,
        'tiersPerBay': 0,
        'blockType': BLOCK_TYPE_HEAP,
        'machineType': MACHINE_RS,
    }


# Configuración inicial del patio (capacidad en TEUs)
DEFAULT_BLOCKS = [
    _grid('A1', 676, 'GP', 30, 6, 5),
    _grid('B1', 676, 'GP', 30, 6, 5),
    _grid('C1', 676, 'GP', 30, 6, 5),
    _grid('D1', 676, 'GP', 30, 6, 5),
    _grid('A2', 884, 'GP', 35, 6, 5),
    _grid('B2', 884, 'GP', 35, 6, 5),
    _grid('C2', 884, 'GP', 35, 6, 5),
    _grid('D2', 884, 'GP', 35, 6, 5),
    _grid('E1', 600, 'GP', 28, 6, 5),
    _grid('F1', 676, 'GP', 30, 6, 5),
    _grid('G1', 676, 'GP', 30, 6, 5),
    _grid('H1', 676, 'GP', 30, 6, 5),
    _grid('E2', 598, 'GP', 28, 6, 5),
    _grid('F2', 884, 'GP', 35, 6, 5),
    _grid('G2', 884, 'GP', 35, 6, 5),
    _grid('H2', 884, 'GP', 35, 6, 5),
    _grid('A0', 650, 'RỖNG', 30, 6, 5),
    _grid('H0', 650, 'RỖNG', 30, 6, 5),
    _grid('I0', 650, 'RỖNG', 30, 6, 5),
    _grid('N1', 376, 'GP', 20, 6, 4),
    _grid('N2', 344, 'GP', 20, 6, 4),
    _grid('N3', 408, 'GP', 20, 6, 4),
    _grid('N4', 162, 'GP', 10, 5, 4),
    _grid('Z2', 516, 'GP', 25, 6, 5),
    _grid('Z1', 126, 'GP', 10, 5, 3),
    _grid('I1', 504, 'GP', 25, 6, 5),
    _grid('I2', 336, 'GP', 20, 6, 4),
    _grid('E2-B', 192, 'GP', 12, 5, 4),
    _grid('R1', 650, 'REEFER', 30, 6, 5),
    _grid('R3', 450, 'REEFER', 25, 6, 5),
    _grid('R4', 259, 'REEFER', 15, 6, 4),
    _grid('R2', 400, 'REEFER', 20, 6, 5),
    _grid('B0', 1144, 'RỖNG', 40, 7, 6),
    _grid('C0', 940, 'RỖNG', 35, 7, 6),
    _grid('D0', 940, 'RỖNG', 35, 7, 6),
    _grid('E0', 840, 'RỖNG', 32, 7, 6),
    _grid('F0', 80, 'RỖNG', 8, 4, 3),
    _grid('L0', 940, 'RỖNG', 35, 7, 6),
    _grid('M0', 940, 'RỖNG', 35, 7, 6),
    _grid('M1', 1128, 'GP', 40, 7, 6),
    _grid('L1', 1128, 'GP', 40, 7, 6),
    _grid('K1', 378, 'GP', 20, 6, 4),
    _grid('N6', 160, 'GP', 10, 5, 4),
    _grid('N7', 201, 'GP', 12, 5, 4),
    _grid('N8', 25, 'GP', 5, 3, 3),
    _grid('N9', 25, 'GP', 5, 3, 3),
    _grid('N10', 10, 'GP', 4, 2, 2),
    _grid('N11', 56, 'GP', 6, 4, 3),
    _grid('T0', 80, 'RỖNG', 8, 4, 3),
    _grid('T2', 30, 'GP', 5, 3, 3),
    _grid('Z0', 72, 'RỖNG', 8, 4, 3),
    # Zonas heap (sin bay/row/tier)
    _heap('APR01'),
    _heap('APR02'),
    _heap('APRON'),
    _heap('MNR'),
    _heap('MNR1'),
    _heap('CFS 1'),
    _heap('CFS 2'),
    _heap('CFS 3'),
    _heap('CFS 4'),
    _heap('CFS 5'),
    _heap('WAS'),
]


def get_machine_type(name: str) -> str:
    """Bloques RTG conocidos; el resto se opera con reach stacker
    Ej: 'a2' -> 'RTG', 'N1' -> 'RS'
    """
    return MACHINE_RTG if name.upper() in RTG_BLOCK_NAMES else MACHINE_RS


# ===================== COLORES PARA VISUALIZACIÓN =====================

# Colores por categoría de ocupación
CATEGORY_COLORS = {
    'export': '#22c55e',    # Verde - Outbound
    'import': '#eab308',    # Amarillo - Inbound
    'empty': '#60a5fa',     # Azul - Empty stock
    'available': '#06b6d4'  # Cian - Disponible
}
