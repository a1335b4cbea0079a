import pytest

from yardview.schemas.blocks import BlockConfig
from yardview.services.container_materializer import parse_rows
from yardview.services.yard_aggregator import (
    aggregate_block_stats,
    build_block_stats,
    discharge_capacity,
    dwell_statistics,
    group_block_stats,
    search_containers,
    sum_block_stats,
    vessel_statistics,
)

from conftest import make_container

BLOCKS = [
    BlockConfig(name='A2', group='GP', capacity=884),
    BlockConfig(name='R1', group='REEFER', capacity=650),
    BlockConfig(name='APR01', group='OTHER', capacity=500, blockType='HEAP'),
]


def _by_name(stats):
    return {s.name: s for s in stats}


def test_forty_foot_pair_counted_once():
    containers = [
        make_container(bay=21, size=40, iso='45G1', isMultiBay=True, partType='start'),
        make_container(bay=23, size=40, iso='45G1', isMultiBay=True, partType='end'),
    ]
    a2 = _by_name(aggregate_block_stats(containers, BLOCKS))['A2']

    assert a2.exportFullTeus == 2
    assert a2.exportFullCount == 1


def test_categories_do_not_overlap():
    containers = [
        make_container(id='C1', status='EMPTY', flow='EXPORT'),
        make_container(id='C2', status='EMPTY', flow='IMPORT'),
        make_container(id='C3', status='FULL', flow='STORAGE'),
        make_container(id='C4', status='FULL', flow=None),
    ]
    a2 = _by_name(aggregate_block_stats(containers, BLOCKS))['A2']

    assert (a2.exportFullCount, a2.emptyCount, a2.importFullCount) == (1, 1, 2)
    assert a2.usedTeus == 4


def test_block_stats_from_parsed_rows(yard_rows):
    result = parse_rows(yard_rows)
    stats = _by_name(aggregate_block_stats(result.containers, BLOCKS))

    assert (stats['A2'].exportFullTeus, stats['A2'].importFullTeus, stats['A2'].emptyTeus) == (1, 2, 0)
    assert stats['R1'].exportFullTeus == 2
    assert stats['APR01'].emptyTeus == 1
    assert stats['A2'].usedPercent == pytest.approx(3 / 884 * 100)


def test_iso_filter_applies_to_block_stats(yard_rows):
    containers = parse_rows(yard_rows).containers

    dry = _by_name(aggregate_block_stats(containers, BLOCKS, 'DRY'))
    reefer = _by_name(aggregate_block_stats(containers, BLOCKS, 'REEFER'))

    assert dry['R1'].usedTeus == 0
    assert dry['A2'].usedTeus == 3
    assert reefer['R1'].usedTeus == 2
    assert reefer['A2'].usedTeus == 0


def test_percentages_are_not_capped():
    stats = build_block_stats('N10', 'GP', 1, export_teus=2)

    assert stats.usedPercent == pytest.approx(200.0)
    assert stats.availableTeus == -1
    assert stats.availablePercent == pytest.approx(-100.0)


def test_zero_capacity_gives_zero_percent():
    stats = build_block_stats('X', 'GP', 0, import_teus=3)
    assert stats.usedPercent == 0.0
    assert stats.usedTeus == 3


def test_sum_block_stats():
    total = sum_block_stats([
        build_block_stats('A', 'GP', 100, export_teus=10),
        build_block_stats('B', 'GP', 100, import_teus=30, empty_teus=10),
    ])
    assert total.capacity == 200
    assert total.usedTeus == 50
    assert total.usedPercent == pytest.approx(25.0)


def test_group_order():
    blocks = [
        build_block_stats('A0', 'RỖNG', 650),
        build_block_stats('R1', 'REEFER', 650),
        build_block_stats('A1', 'GP', 676),
        build_block_stats('APR01', 'OTHER', 500),
        build_block_stats('A2', 'GP', 884),
    ]

    groups = group_block_stats(blocks, 'ALL')
    assert [g.group for g in groups] == ['GP', 'REEFER', 'RỖNG', 'OTHER']
    assert [b.name for b in groups[0].blocks] == ['A1', 'A2']
    assert groups[0].total.capacity == 676 + 884

    assert [g.group for g in group_block_stats(blocks, 'DRY')] == ['GP']
    assert [g.group for g in group_block_stats(blocks, 'REEFER')] == ['REEFER']


def test_vessel_statistics(yard_rows):
    containers = parse_rows(yard_rows).containers
    stats = vessel_statistics(containers, BLOCKS)

    assert stats.vessels == ['EVER ORIENT', 'MAERSK KOWLOON']
    assert stats.byBlock['A2'] == {'EVER ORIENT': 1, 'MAERSK KOWLOON': 1}
    assert stats.byBlock['R1'] == {'EVER ORIENT': 1}
    assert stats.totals == {'EVER ORIENT': 2, 'MAERSK KOWLOON': 1}


def test_vessel_statistics_filters():
    containers = [
        make_container(id='C1', vessel='V1', status='FULL', flow='EXPORT'),
        make_container(id='C2', vessel='V1', status='EMPTY', flow='EXPORT'),
        make_container(id='C3', vessel='V1', status='FULL', flow='IMPORT'),
        make_container(id='C4', vessel='V1', status='FULL', flow='STORAGE'),
    ]

    only_export_full = vessel_statistics(
        containers, BLOCKS, import_full=False, import_empty=False, export_empty=False
    )
    assert only_export_full.totals == {'V1': 1}

    everything = vessel_statistics(containers, BLOCKS)
    assert everything.totals == {'V1': 3}

    selected = vessel_statistics(containers, BLOCKS, vessels=['V1', 'V2'])
    assert selected.vessels == ['V1']
    assert selected.totals == {'V1': 3}


def test_vessel_statistics_drops_unknown_vessels(yard_rows):
    result = parse_rows(yard_rows)
    stats = vessel_statistics(
        result.containers, BLOCKS,
        vessels=['MAERSK KOWLOON', 'GHOST SHIP'],
        known_vessels=result.vessels,
    )

    assert stats.vessels == ['MAERSK KOWLOON']
    assert stats.totals == {'MAERSK KOWLOON': 1}


def test_discharge_capacity_counts_rtg_blocks_only():
    blocks = [
        BlockConfig(name='A2', group='GP', capacity=884, machineType='RTG'),
        BlockConfig(name='N1', group='GP', capacity=376, machineType='RS'),
        BlockConfig(name='APR01', group='OTHER', capacity=500, blockType='HEAP'),
    ]
    containers = [
        make_container(id='C1', block='A2', bay=21, size=40, iso='22G1', isMultiBay=True, partType='start'),
        make_container(id='C1', block='A2', bay=23, size=40, iso='22G1', isMultiBay=True, partType='end'),
        make_container(id='C2', block='A2', bay=5, size=20, iso='45R1'),
        make_container(id='C3', block='N1', bay=3, size=20),
    ]
    stats = discharge_capacity(containers, blocks)

    assert stats.rtgBlocks == ['A2']
    assert stats.rsBlocks == ['N1', 'APR01']
    assert stats.rtgCapacity == 884
    # El tamaño manda: el 40' cuenta 2 aunque su ISO sea de 20'
    assert stats.rtgUsedTeus == 3
    assert stats.rtgAvailableTeus == 881


def test_discharge_capacity_can_go_negative():
    blocks = [BlockConfig(name='N10', group='GP', capacity=1, machineType='RTG')]
    containers = [make_container(block='N10', bay=1, size=20), make_container(id='C2', block='N10', bay=3, size=20)]

    assert discharge_capacity(containers, blocks).rtgAvailableTeus == -1


def test_dwell_statistics_buckets():
    containers = [
        make_container(id=f'C{i}', dwellDays=days, detailedFlow='IMPORT')
        for i, days in enumerate([0, 3, 6.9, 7, 12])
    ]
    (stats,) = dwell_statistics(containers, [3, 7])

    assert stats.category == 'IMPORT'
    assert stats.count == 5
    assert stats.maxDays == 12
    assert stats.averageDays == pytest.approx(5.78)
    assert [b.label for b in stats.buckets] == ['0-3', '3-7', '7+']
    assert [b.count for b in stats.buckets] == [1, 2, 2]
    assert stats.buckets[-1].maxDays is None


def test_dwell_statistics_skips_end_parts():
    containers = [
        make_container(bay=21, size=40, isMultiBay=True, partType='start', dwellDays=5, detailedFlow='EXPORT'),
        make_container(bay=23, size=40, isMultiBay=True, partType='end', dwellDays=5, detailedFlow='EXPORT'),
    ]
    (stats,) = dwell_statistics(containers, [3])
    assert stats.count == 1


def test_search_by_id_and_location(yard_rows):
    containers = parse_rows(yard_rows).containers

    assert search_containers(containers, 'tghu') == ['TGHU7654321']
    assert search_containers(containers, 'A2-22-05-2') == ['TGHU7654321']
    assert search_containers(containers, 'A222052') == ['TGHU7654321']
    assert search_containers(containers, 'apr01') == ['CAIU5555550']
    assert search_containers(containers, '  ') == []
