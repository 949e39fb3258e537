import pytest

from threshkit.collections.typed_usize import TypedUsize
from threshkit.crypto.hash import Output, Randomness, commit, commit_with_randomness


def test_commit_opens_with_returned_randomness():
    output, randomness = commit(3, TypedUsize(1), b"message")
    assert commit_with_randomness(3, TypedUsize(1), b"message", randomness) == output
    assert len(output.data) == 32
    assert len(randomness.data) == 32


def test_commit_uses_fresh_randomness():
    (out1, r1), (out2, r2) = commit(0, TypedUsize(0), b"x"), commit(0, TypedUsize(0), b"x")
    assert r1 != r2
    assert out1 != out2


@pytest.mark.parametrize(
    "args",
    [
        (1, TypedUsize(2), b"msg"),
        (0, TypedUsize(3), b"msg"),
        (0, TypedUsize(2), b"other"),
    ],
)
def test_every_input_changes_output(args):
    randomness = Randomness(bytes(32))
    base = commit_with_randomness(0, TypedUsize(2), b"msg", randomness)
    assert commit_with_randomness(*args, randomness) != base


def test_randomness_changes_output():
    a = commit_with_randomness(0, TypedUsize(0), b"m", Randomness(bytes(32)))
    b = commit_with_randomness(0, TypedUsize(0), b"m", Randomness(b"\x01" + bytes(31)))
    assert a != b


def test_deterministic():
    randomness = Randomness(b"\x07" * 32)
    assert commit_with_randomness(5, TypedUsize(9), b"abc", randomness) == commit_with_randomness(
        5, TypedUsize(9), bytearray(b"abc"), randomness
    )


def test_bad_sizes_rejected():
    with pytest.raises(ValueError):
        Randomness(bytes(31))
    with pytest.raises(ValueError):
        Output(bytes(33))


def test_bad_tag_rejected():
    with pytest.raises(ValueError):
        commit_with_randomness(256, TypedUsize(0), b"", Randomness(bytes(32)))