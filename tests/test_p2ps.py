import pytest

from threshkit.collections.p2ps import (
    FillHoleVecMap,
    FillP2ps,
    FullP2ps,
    P2ps,
    iter_p2ps,
)
from threshkit.collections.typed_usize import TypedUsize
from threshkit.collections.vecmap import HoleVecMap, TofnFatal

ZERO = TypedUsize.from_usize(0)
ONE = TypedUsize.from_usize(1)
TWO = TypedUsize.from_usize(2)


def _filled_three() -> FillP2ps:
    fill = FillP2ps(3)
    fill.set(ZERO, ONE, 0)
    fill.set(ZERO, TWO, 1)
    fill.set(ONE, ZERO, 2)
    fill.set(ONE, TWO, 3)
    fill.set(TWO, ZERO, 4)
    fill.set(TWO, ONE, 5)
    return fill


EXPECTS = [
    (ZERO, [(ONE, 0), (TWO, 1)]),
    (ONE, [(ZERO, 2), (TWO, 3)]),
    (TWO, [(ZERO, 4), (ONE, 5)]),
]


def test_size_0():
    fill = FillP2ps(0)
    assert fill.size() == 0
    assert fill.is_full()
    assert list(fill) == []

    p2ps = fill.to_p2ps()
    assert p2ps.size() == 0
    assert list(p2ps) == []

    full = FillP2ps(0).to_fullp2ps()
    assert full.size() == 0
    assert list(full) == []


def test_size_1():
    fill = FillP2ps(1)
    assert fill.size() == 1
    assert fill.is_full()

    items = list(fill)
    assert len(items) == 1
    _, row = items[0]
    assert row.size() == 1
    assert list(row) == []


def test_basic_correctness():
    fill = _filled_three()
    assert fill.is_full()
    full = fill.to_fullp2ps()

    rows = list(full)
    assert len(rows) == 3
    for (_, row), (_, expects) in zip(rows, EXPECTS):
        assert len(list(row)) == 2
        assert list(row) == expects

    for (sender, row), (expected_sender, expects) in zip(full, EXPECTS):
        assert sender == expected_sender
        assert list(row) == expects


def test_fullp2ps_get_and_to_me():
    full = _filled_three().to_fullp2ps()
    assert full.get(ONE, TWO) == 3
    assert list(full.to_me(ZERO)) == [(ONE, 2), (TWO, 4)]
    with pytest.raises(TofnFatal):
        full.to_me(3)
    with pytest.raises(TofnFatal):
        full.get(ONE, ONE)


def test_fullp2ps_map_to_me():
    full = _filled_three().to_fullp2ps()
    to_me = full.map_to_me(ZERO, lambda v: v * 10)
    assert to_me == HoleVecMap([20, 40], 0)
    to_me2 = full.map_to_me2(ONE, lambda s, v: (s.value, v))
    assert list(to_me2) == [(ZERO, (0, 0)), (TWO, (2, 5))]


def test_fullp2ps_map_and_map2():
    full = _filled_three().to_fullp2ps()
    assert full.map(lambda v: v + 1).get(TWO, ONE) == 6
    mapped = full.map2(lambda receiver, v: receiver.value * 100 + v)
    assert mapped.get(ZERO, TWO) == 201
    assert mapped.get(TWO, ZERO) == 4


def test_fullp2ps_to_p2ps_round_trip():
    full = _filled_three().to_fullp2ps()
    assert full.to_p2ps().to_fullp2ps() == full


def test_fill_p2ps_not_full_errors():
    fill = FillP2ps(3)
    fill.set(ZERO, ONE, 7)
    assert not fill.is_full()
    assert not fill.is_full_from(ZERO)
    assert fill.is_none(ZERO, TWO)
    assert not fill.is_none(ZERO, ONE)
    with pytest.raises(TofnFatal):
        fill.to_fullp2ps()
    with pytest.raises(TofnFatal):
        fill.to_p2ps()


def test_fill_p2ps_empty_rows_become_none():
    fill = FillP2ps(3)
    fill.set(ONE, ZERO, 8)
    fill.set(ONE, TWO, 9)
    p2ps = fill.to_p2ps()
    assert p2ps.get(ZERO) is None
    assert p2ps.get(TWO) is None
    assert list(p2ps.get(ONE)) == [(ZERO, 8), (TWO, 9)]
    with pytest.raises(TofnFatal):
        p2ps.to_fullp2ps()


def test_fill_p2ps_unset_all_and_iter_from():
    fill = _filled_three()
    fill.unset_all(ONE)
    assert not fill.is_full()
    assert list(fill.iter_from(ONE)) == [(ZERO, None), (TWO, None)]
    assert list(fill.iter_from(TWO)) == [(ZERO, 4), (ONE, 5)]
    with pytest.raises(TofnFatal):
        fill.unset_all(5)


def test_fill_p2ps_set_at_hole_raises():
    fill = FillP2ps(3)
    with pytest.raises(TofnFatal):
        fill.set(ONE, ONE, 1)
    with pytest.raises(TofnFatal):
        fill.set(3, ONE, 1)


def test_fill_p2ps_map():
    mapped = _filled_three().map(lambda v: -v)
    assert mapped.is_full()
    assert mapped.to_fullp2ps().get(TWO, ONE) == -5


def test_fillholevecmap_behaviour():
    with pytest.raises(TofnFatal):
        FillHoleVecMap(0, 0)
    row = FillHoleVecMap(3, 1)
    assert row.size() == 3
    assert row.is_empty()
    row.set(0, "a")
    assert not row.is_empty()
    assert not row.is_full()
    with pytest.raises(TofnFatal):
        row.map_to_holevec(lambda v: v)
    row.set(2, "c")
    assert row.is_full()
    assert list(row.map(str.upper)) == [(ZERO, "A"), (TWO, "C")]
    assert row.to_holevec() == HoleVecMap(["a", "c"], 1)
    row.unset(0)
    assert row.is_none(0)
    assert not row.is_full()


def test_p2ps_new_size_1_some_and_map():
    p2ps = P2ps.new_size_1_some()
    assert p2ps.size() == 1
    assert p2ps.get(0) == HoleVecMap([], 0)
    full = p2ps.to_fullp2ps()
    assert full.size() == 1

    partial = P2ps([None, HoleVecMap([1, 2], 1), None])
    mapped = partial.map(lambda v: v * 3)
    assert mapped.get(0) is None
    assert list(mapped.get(1)) == [(ZERO, 3), (TWO, 6)]


def test_iter_p2ps_flattens():
    full = _filled_three().to_fullp2ps()
    assert list(iter_p2ps(full)) == [
        (ZERO, ONE, 0),
        (ZERO, TWO, 1),
        (ONE, ZERO, 2),
        (ONE, TWO, 3),
        (TWO, ZERO, 4),
        (TWO, ONE, 5),
    ]
    partial = P2ps([None, HoleVecMap([7], 1)])
    assert list(iter_p2ps(partial)) == [(ONE, ZERO, 7)]


def test_fullp2ps_from_rows_equality():
    full = FullP2ps([HoleVecMap([1], 0), HoleVecMap([2], 1)])
    assert full == _two_party()


def _two_party() -> FullP2ps:
    fill = FillP2ps(2)
    fill.set(0, 1, 1)
    fill.set(1, 0, 2)
    return fill.to_fullp2ps()