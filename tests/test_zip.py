from threshkit.collections.typed_usize import TypedUsize
from threshkit.collections.vecmap import HoleVecMap, VecMap
from threshkit.collections.zip import zip2, zip3


def test_zip2_basic_correctness():
    test_size = 5
    v0 = VecMap(range(test_size))
    v1 = VecMap(range(test_size, 2 * test_size))
    results = list(zip2(v0, v1))
    assert len(results) == test_size
    for counter, (i, a0, a1) in enumerate(results):
        assert i.as_usize() == counter
        assert a0 == counter
        assert a1 == counter + test_size


def test_zip3_values_and_indices():
    v0 = VecMap(["a", "b", "c"])
    v1 = VecMap([1, 2, 3])
    v2 = VecMap([True, False, True])
    assert list(zip3(v0, v1, v2)) == [
        (TypedUsize(0), "a", 1, True),
        (TypedUsize(1), "b", 2, False),
        (TypedUsize(2), "c", 3, True),
    ]


def test_zip_stops_at_shorter():
    assert len(list(zip2(VecMap([1, 2, 3]), VecMap([4])))) == 1
    assert list(zip3(VecMap([1, 2]), VecMap([3, 4]), VecMap([]))) == []


def test_zip2_uses_first_indices():
    holes = HoleVecMap([10, 20], 0)
    plain = VecMap([1, 2])
    assert [(i.value, a, b) for i, a, b in zip2(holes, plain)] == [(1, 10, 1), (2, 20, 2)]