# yardview/services/field_classifiers.py
"""
Clasificadores de campos: estado (F/E), flujo, flujo detallado, tamaño,
TEUs, tipo ISO y días de permanencia.

Las reglas de texto se expresan como listas ordenadas de tokens
(ExactToken / SubstringToken) y se evalúan en el orden declarado.
"""
import re
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple, Union

from yardview.core.constants import (
    STATUS_FULL, STATUS_EMPTY,
    FLOW_IMPORT, FLOW_EXPORT, FLOW_STORAGE,
    TYPE_GP, TYPE_REEFER,
    ISO_FILTER_ALL, ISO_FILTER_DRY, ISO_FILTER_REEFER,
    DRY_ISO_TYPE_CHARS, REEFER_ISO_TYPE_CHAR,
)
from yardview.services.column_resolver import cell_text


@dataclass(frozen=True)
class ExactToken:
    token: str

    def matches(self, text: str) -> bool:
        return text == self.token


@dataclass(frozen=True)
class SubstringToken:
    token: str

    def matches(self, text: str) -> bool:
        return self.token in text


TokenRule = Union[ExactToken, SubstringToken]


def matches_any(text: str, rules: Sequence[TokenRule]) -> bool:
    return any(rule.matches(text) for rule in rules)


def first_match(text: str, rules: Sequence[Tuple[str, Sequence[TokenRule]]]) -> Optional[str]:
    """Devuelve la etiqueta de la primera regla que coincide"""
    for label, tokens in rules:
        if matches_any(text, tokens):
            return label
    return None


# ===================== REGLAS =====================

# Texto de estado que indica contenedor vacío
EMPTY_STATUS_RULES = (
    ExactToken('e'),
    ExactToken('r'),
    ExactToken('mt'),
    SubstringToken('empty'),
    SubstringToken('rỗng'),
    SubstringToken('mt '),
    SubstringToken(' mt'),
)

# Evidencia de vacío en el texto de flujo (solo puede pasar FULL -> EMPTY)
EMPTY_FLOW_RULES = (
    SubstringToken('empty'),
    SubstringToken('rỗng'),
    SubstringToken('mt'),
)

FLOW_RULES = (
    (FLOW_EXPORT, (SubstringToken('ex'), SubstringToken('out'), SubstringToken('xuất'))),
    (FLOW_IMPORT, (SubstringToken('im'), SubstringToken('in'), SubstringToken('nhập'))),
    (FLOW_STORAGE, (SubstringToken('storage'),)),
)

# Respaldo: flujo deducido desde la columna de estado
STATUS_FLOW_RULES = (
    (FLOW_EXPORT, (SubstringToken('export'), SubstringToken('xuất'))),
    (FLOW_IMPORT, (SubstringToken('import'), SubstringToken('nhập'))),
)


# ===================== ESTADO / FLUJO =====================

def classify_status(status_text: Optional[str], flow_text: Optional[str]) -> str:
    """
    FULL o EMPTY. Por defecto FULL.
    El texto de flujo puede convertir un FULL en EMPTY, nunca al revés.
    """
    s_lower = (status_text or '').strip().lower()
    f_lower = (flow_text or '').strip().lower()

    if matches_any(s_lower, EMPTY_STATUS_RULES):
        return STATUS_EMPTY
    if matches_any(f_lower, EMPTY_FLOW_RULES):
        return STATUS_EMPTY
    return STATUS_FULL


def classify_flow(flow_text: Optional[str], status_text: Optional[str]) -> Optional[str]:
    """IMPORT / EXPORT / STORAGE, o None si no hay evidencia"""
    f_lower = (flow_text or '').strip().lower()
    s_lower = (status_text or '').strip().lower()

    flow = first_match(f_lower, FLOW_RULES)
    if flow is None:
        flow = first_match(s_lower, STATUS_FLOW_RULES)
    return flow


def classify_detailed_flow(flow_text: Optional[str], status_text: Optional[str], status: str) -> str:
    """
    Etiqueta más fina para los reportes de permanencia
    (IMPORT STORAGE, STORAGE EMPTY, IMPORT, EXPORT).
    Si nada coincide se conserva el texto de flujo original en mayúsculas.
    """
    flow_raw = (flow_text or '').strip()
    f_lower = flow_raw.lower()
    s_lower = (status_text or '').strip().lower()

    if 'import' in f_lower and 'storage' in f_lower:
        return 'IMPORT STORAGE'
    if 'storage' in f_lower and ('empty' in f_lower or 'mt' in f_lower or status == STATUS_EMPTY):
        return 'STORAGE EMPTY'
    if 'import' in f_lower or 'import' in s_lower or 'nhập' in f_lower:
        return 'IMPORT'
    if 'export' in f_lower or 'export' in s_lower or 'xuất' in f_lower:
        return 'EXPORT'
    return flow_raw.upper()


# ===================== TAMAÑO / TEU =====================

def infer_size(size_value: Any, iso: Optional[str]) -> int:
    """
    Prioridad: columna de tamaño > prefijo ISO > 20.
    El prefijo ISO '1' (10 pies) se trata como 20.
    """
    size_text = cell_text(size_value)
    if size_text:
        digits = re.sub(r'\D', '', size_text)
        if digits and int(digits) in (40, 45):
            return 40
        return 20

    if iso and iso.startswith(('4', 'L')):
        return 40
    return 20


def calculate_teu(iso: Optional[str], size: int) -> int:
    """
    TEUs de un contenedor. El prefijo ISO manda sobre el tamaño:
    '1'/'2' -> 1 TEU, '4'/'L' -> 2 TEU; si no, size >= 40 -> 2.
    """
    if iso:
        prefix = iso.strip().upper()[:1]
        if prefix in ('1', '2'):
            return 1
        if prefix in ('4', 'L'):
            return 2
    return 2 if size >= 40 else 1


def container_type(iso: Optional[str]) -> str:
    return TYPE_REEFER if iso and REEFER_ISO_TYPE_CHAR in iso else TYPE_GP


def matches_iso_filter(iso: Optional[str], status: str, iso_filter: str) -> bool:
    """
    Filtro Dry/Reefer por el tercer carácter del código ISO.
    Los vacíos suelen venir sin ISO en los reportes: se cuentan como Dry.
    """
    if iso_filter == ISO_FILTER_ALL:
        return True

    code = (iso or '').strip().upper()
    if len(code) < 3:
        if status == STATUS_EMPTY:
            return iso_filter == ISO_FILTER_DRY
        return False

    type_char = code[2]
    if iso_filter == ISO_FILTER_DRY:
        return type_char in DRY_ISO_TYPE_CHARS
    if iso_filter == ISO_FILTER_REEFER:
        return type_char == REEFER_ISO_TYPE_CHAR
    return True


# ===================== PERMANENCIA =====================

_NUMBER_PATTERN = re.compile(r'\d+(?:\.\d*)?|\.\d+')


def parse_dwell_days(value: Any) -> float:
    """Días en patio: se eliminan los caracteres no numéricos (salvo el punto)"""
    text = cell_text(value)
    if not text:
        return 0.0

    cleaned = re.sub(r'[^0-9.]', '', text)
    match = _NUMBER_PATTERN.match(cleaned)
    if not match:
        return 0.0
    return float(match.group(0))
