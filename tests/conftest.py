import os
import tempfile

# La app crea el engine al importar: la base de pruebas se define antes
_TMP_DIR = tempfile.mkdtemp(prefix="yardview-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'yardview.db')}"
os.environ["LOG_LEVEL"] = "DEBUG"

import pytest

from yardview.schemas.yard import Container


def make_container(**overrides) -> Container:
    values = dict(
        id='MSKU1234565',
        location='A2-21-01-1',
        block='A2',
        bay=21,
        row=1,
        tier=1,
        iso='22G1',
        size=20,
        status='FULL',
        flow='EXPORT',
        detailedFlow='EXPORT',
    )
    values.update(overrides)
    return Container(**values)


@pytest.fixture
def yard_rows():
    """Filas tal como las entrega el lector de planillas (sin celdas vacías)"""
    return [
        {'Container': 'MSKU1234565', 'Vessel': 'EVER ORIENT', 'ISO': '22G1', 'F/E': 'F',
         'Category': 'Export', 'Location': 'A2-21-01-1', 'Dwell': '3 days'},
        {'Container': 'TGHU7654321', 'Vessel': 'MAERSK KOWLOON', 'ISO': '45G1', 'F/E': 'F',
         'Category': 'Import', 'Location': 'A2-22-05-2', 'Dwell': '10'},
        {'Container': 'CAIU5555550', 'ISO': '22G1', 'F/E': 'E',
         'Category': 'Storage', 'Location': 'APR01', 'Dwell': '40.5'},
        {'Container': 'TRLU9999990', 'Vessel': 'EVER ORIENT', 'ISO': '45R1', 'F/E': 'F',
         'Category': 'Export', 'Location': 'R1-10-02-1'},
        {'Vessel': 'EVER ORIENT', 'Location': 'A2-01-01-1'},
        {'Container': 'Total: 4'},
        {'Container': 'XYZU0000001', 'Category': 'Import', 'Location': 'garbage-loc!'},
    ]


@pytest.fixture
def yard_csv() -> bytes:
    lines = [
        "Container,Vessel,ISO,F/E,Category,Location,Dwell",
        "MSKU1234565,EVER ORIENT,22G1,F,Export,A2-21-01-1,3 days",
        "TGHU7654321,MAERSK KOWLOON,45G1,F,Import,A2-22-05-2,10",
        "CAIU5555550,,22G1,E,Storage,APR01,40.5",
        "TRLU9999990,EVER ORIENT,45R1,F,Export,R1-10-02-1,",
        ",EVER ORIENT,,,,A2-01-01-1,",
        "Total: 4,,,,,,",
        "XYZU0000001,,,,Import,garbage-loc!,",
    ]
    return ("\n".join(lines) + "\n").encode("utf-8")
