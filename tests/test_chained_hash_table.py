import random

import pytest

import HashBenchUtils as utils
from ChainedHashTable import ChainedHashTable
from HashStrategies import HashStrategy


@pytest.mark.parametrize('size', [0, -1, -100])
def test_rejects_non_positive_size(size):
    with pytest.raises(ValueError):
        ChainedHashTable(size)


def test_construction_parameters():
    table = ChainedHashTable(30, random.Random(0))
    assert table.m == 30
    assert table.p == 31
    assert 1 <= table.b <= table.p - 1
    assert 0 <= table.c <= table.p - 1
    assert len(table.buckets) == 30
    assert len(table) == 0


def test_seeded_tables_share_parameters():
    a = ChainedHashTable(1000, random.Random(42))
    b = ChainedHashTable(1000, random.Random(42))
    assert (a.p, a.b, a.c) == (b.p, b.b, b.c)


def test_b_is_never_zero():
    rng = random.Random(5)
    # p = 2 leaves b a single choice
    for _ in range(50):
        assert ChainedHashTable(1, rng).b == 1


@pytest.mark.parametrize('strategy', list(HashStrategy))
def test_insert_then_remove_round_trip(strategy):
    table = ChainedHashTable(97, random.Random(1))
    table.insert(12345, strategy)
    assert len(table) == 1
    assert table.remove(12345, strategy) is True
    assert all(bucket == [] for bucket in table.buckets)


def test_remove_missing_key_leaves_table_alone():
    table = ChainedHashTable(10, random.Random(1))
    assert table.remove(3, HashStrategy.DIVISION) is False

    table.insert(3, HashStrategy.DIVISION)
    before = [list(bucket) for bucket in table.buckets]
    # 13 shares bucket 3 but was never inserted
    assert table.remove(13, HashStrategy.DIVISION) is False
    assert table.remove(4, HashStrategy.DIVISION) is False
    assert table.buckets == before


def test_colliding_keys_share_bucket_zero():
    table = ChainedHashTable(9, random.Random(1))
    for key in [0, 9, 18]:
        table.insert(key, HashStrategy.DIVISION)
    assert table.buckets[0] == [0, 9, 18]
    assert all(bucket == [] for bucket in table.buckets[1:])


def test_duplicates_are_kept_and_removal_is_stable():
    table = ChainedHashTable(9, random.Random(1))
    for key in [0, 9, 0, 18, 0]:
        table.insert(key, HashStrategy.DIVISION)
    assert table.remove(0, HashStrategy.DIVISION)
    assert table.buckets[0] == [9, 0, 18, 0]
    assert table.remove(0, HashStrategy.DIVISION)
    assert table.buckets[0] == [9, 18, 0]


def test_insert_rejects_out_of_range_index():
    table = ChainedHashTable(5, random.Random(1))
    with pytest.raises(utils.HashIndexError):
        table.insert(1, lambda key, t: t.m)
    with pytest.raises(IndexError):
        table.insert(1, lambda key, t: -1)
    assert len(table) == 0


def test_remove_treats_out_of_range_index_as_missing():
    table = ChainedHashTable(5, random.Random(1))
    table.insert(1, HashStrategy.DIVISION)
    assert table.remove(1, lambda key, t: t.m) is False
    assert table.remove(1, lambda key, t: -3) is False
    assert len(table) == 1


def test_clear_keeps_capacity_and_parameters():
    table = ChainedHashTable(50, random.Random(9))
    params = (table.m, table.p, table.b, table.c)
    before = [HashStrategy.UNIVERSAL(key, table) for key in range(200)]
    for key in range(100):
        table.insert(key, HashStrategy.UNIVERSAL)
    table.clear()
    assert all(bucket == [] for bucket in table.buckets)
    assert len(table.buckets) == 50
    assert (table.m, table.p, table.b, table.c) == params
    assert [HashStrategy.UNIVERSAL(key, table) for key in range(200)] == before


def test_keys_land_where_strategy_says():
    table = ChainedHashTable(31, random.Random(4))
    keys = [random.Random(8).randint(0, utils.INT_MAX) for _ in range(100)]
    for strategy in HashStrategy:
        for key in keys:
            table.insert(key, strategy)
        for index, bucket in enumerate(table.buckets):
            assert all(strategy(key, table) == index for key in bucket)
        table.clear()


def test_snapshot_ignores_order():
    a = ChainedHashTable(9, random.Random(1))
    b = ChainedHashTable(9, random.Random(2))
    for key in [18, 4, 0, 9]:
        a.insert(key, HashStrategy.DIVISION)
    for key in [9, 0, 4, 18]:
        b.insert(key, HashStrategy.DIVISION)
    assert a.buckets != b.buckets
    assert a.snapshot() == b.snapshot()
    assert list(a.snapshot().keys()) == [0, 4]


def test_load_factor_and_str():
    table = ChainedHashTable(4, random.Random(1))
    table.insert(1, HashStrategy.DIVISION)
    table.insert(5, HashStrategy.DIVISION)
    assert table.load_factor() == 0.5
    dump = str(table)
    assert 'Buckets (m): 4' in dump
    assert '1: [1, 5]' in dump


def test_str_lists_a_limited_number_of_buckets():
    table = ChainedHashTable(30, random.Random(1))
    for key in range(25):
        table.insert(key, HashStrategy.DIVISION)
    dump = str(table)
    assert '\t9: [9]' in dump
    assert '\t10: [10]' not in dump
    assert '... (15 more non-empty buckets)' in dump
