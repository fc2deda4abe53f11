from ndnfwd.name import name_from_string
from ndnfwd.network_region import NetworkRegionTable


def test_empty_table_produces_nothing():
    table = NetworkRegionTable()
    assert not table.is_producer(name_from_string("/a/b"))
    assert len(table) == 0


def test_add_ignores_duplicates():
    table = NetworkRegionTable()
    table.add(name_from_string("/region"))
    table.add(name_from_string("/region"))
    assert len(table) == 1
    assert [str(name) for name in table] == ["/region"]


def test_is_producer_by_prefix():
    table = NetworkRegionTable()
    table.add(name_from_string("/region/one"))
    assert table.is_producer(name_from_string("/region/one"))
    assert table.is_producer(name_from_string("/region/one/data/seg=1"))
    assert not table.is_producer(name_from_string("/region"))
    assert not table.is_producer(name_from_string("/other/one"))