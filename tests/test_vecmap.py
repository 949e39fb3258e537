import pytest

from threshkit.collections.typed_usize import TypedUsize
from threshkit.collections.vecmap import HoleVecMap, TofnFatal, VecMap


def test_get_and_set():
    vm = VecMap(["a", "b", "c"])
    assert vm.get(TypedUsize.from_usize(1)) == "b"
    vm.set(TypedUsize.from_usize(1), "z")
    assert vm.to_list() == ["a", "z", "c"]


def test_get_out_of_bounds():
    vm = VecMap(["a"])
    with pytest.raises(TofnFatal):
        vm.get(TypedUsize.from_usize(1))
    with pytest.raises(TofnFatal):
        vm.set(TypedUsize.from_usize(5), "x")


def test_len_and_empty():
    assert VecMap([]).is_empty()
    vm = VecMap(["a", "b"])
    assert not vm.is_empty()
    assert len(vm) == len(["a", "b"])


def test_iteration_yields_typed_indices():
    items = ["a", "b", "c"]
    vm = VecMap(items)
    pairs = list(vm)
    assert [i.as_usize() for i, _ in pairs] == list(range(len(items)))
    assert [v for _, v in pairs] == items
    assert list(vm.values()) == items


def test_map_and_map2():
    vm = VecMap([1, 2, 3])
    assert vm.map(lambda v: v * 10) == VecMap([10, 20, 30])
    assert vm.map2(lambda i, v: (i.as_usize(), v)).to_list() == [(0, 1), (1, 2), (2, 3)]


def test_map_propagates_exceptions():
    def boom(_):
        raise TofnFatal("bad")

    with pytest.raises(TofnFatal):
        VecMap([1]).map(boom)


def test_puncture_and_plug_round_trip():
    vm = VecMap(["a", "b", "c"])
    hole_vec, removed = vm.puncture_hole(TypedUsize.from_usize(1))
    assert removed == "b"
    assert hole_vec.get_hole() == TypedUsize.from_usize(1)
    assert hole_vec.forget_hole().to_list() == ["a", "c"]
    assert hole_vec.plug_hole(removed) == vm


def test_puncture_hole_out_of_bounds():
    vm = VecMap(["a", "b"])
    with pytest.raises(TofnFatal):
        vm.puncture_hole(TypedUsize.from_usize(len(vm)))


def test_remember_hole_bounds():
    vm = VecMap(["a", "c"])
    at_end = vm.remember_hole(TypedUsize.from_usize(len(vm)))
    assert at_end.get_hole().as_usize() == len(vm)
    with pytest.raises(TofnFatal):
        vm.remember_hole(TypedUsize.from_usize(len(vm) + 1))


def test_hole_indexing():
    hv = VecMap(["a", "c"]).remember_hole(TypedUsize.from_usize(1))
    assert len(hv) == len(["a", "c"]) + 1
    assert hv.get(TypedUsize.from_usize(0)) == "a"
    assert hv.get(TypedUsize.from_usize(2)) == "c"
    with pytest.raises(TofnFatal):
        hv.get(TypedUsize.from_usize(1))
    with pytest.raises(TofnFatal):
        hv.get(TypedUsize.from_usize(len(hv)))


def test_hole_set():
    hv = VecMap(["a", "c"]).remember_hole(TypedUsize.from_usize(1))
    hv.set(TypedUsize.from_usize(2), "z")
    assert hv.get(TypedUsize.from_usize(2)) == "z"
    with pytest.raises(TofnFatal):
        hv.set(TypedUsize.from_usize(1), "y")


def test_hole_iteration_skips_hole():
    hole = 1
    hv = VecMap(["a", "c", "d"]).remember_hole(TypedUsize.from_usize(hole))
    indices = [i.as_usize() for i, _ in hv]
    assert indices == [i for i in range(len(hv)) if i != hole]
    assert [v for _, v in hv] == ["a", "c", "d"]


def test_hole_of_length_one_is_empty():
    hv = VecMap([]).remember_hole(TypedUsize.from_usize(0))
    assert hv.is_empty()
    assert len(hv) == 1
    assert list(hv) == []


def test_hole_map_and_map2_keep_hole():
    hv = VecMap([1, 2]).remember_hole(TypedUsize.from_usize(0))
    mapped = hv.map(lambda v: v + 100)
    assert mapped.get_hole() == hv.get_hole()
    assert mapped.forget_hole().to_list() == [101, 102]
    indexed = hv.map2(lambda i, v: i.as_usize())
    assert [v for _, v in indexed] == [i.as_usize() for i, _ in hv]


def test_hole_constructor_validates():
    with pytest.raises(TofnFatal):
        HoleVecMap(VecMap(["a"]), TypedUsize.from_usize(2))