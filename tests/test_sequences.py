from fractions import Fraction

import pytest

from felsim.sequences import Hammersley, RandomU, Sequence


def test_sequence_is_abstract():
    with pytest.raises(TypeError):
        Sequence()


def test_random_values_lie_in_unit_interval():
    gen = RandomU(12345)
    values = [gen.get_element() for _ in range(5000)]
    assert all(0.0 < v <= 1.0 for v in values)


def test_random_is_reproducible():
    a = RandomU(987)
    b = RandomU(987)
    assert [a.get_element() for _ in range(100)] == [b.get_element() for _ in range(100)]


def test_random_different_seeds_differ():
    a = RandomU(1001)
    b = RandomU(1002)
    assert [a.get_element() for _ in range(10)] != [b.get_element() for _ in range(10)]


def test_random_small_seeds_are_clamped():
    a = RandomU(0)
    b = RandomU(1)
    assert [a.get_element() for _ in range(20)] == [b.get_element() for _ in range(20)]


def test_random_set_has_no_effect():
    a = RandomU(55)
    b = RandomU(55)
    a.set(1000)
    assert [a.get_element() for _ in range(20)] == [b.get_element() for _ in range(20)]


def test_random_mean_is_one_half():
    gen = RandomU(424242)
    n = 20000
    mean = sum(gen.get_element() for _ in range(n)) / n
    assert mean == pytest.approx(0.5, abs=0.01)


@pytest.mark.parametrize("base_index,base,power", [(0, 2, 3), (1, 3, 2), (2, 5, 2)])
def test_hammersley_fills_grid(base_index, base, power):
    seq = Hammersley(base_index)
    count = base**power - 1
    values = {Fraction(seq.get_element()).limit_denominator(base**power) for _ in range(count)}
    assert values == {Fraction(j, base**power) for j in range(1, base**power)}


def test_hammersley_set_skips_ahead():
    fresh = Hammersley(1)
    expected = [fresh.get_element() for _ in range(8)][5:]
    seq = Hammersley(1)
    seq.set(5)
    assert [seq.get_element() for _ in range(3)] == expected


def test_hammersley_set_zero_restarts():
    seq = Hammersley(0)
    first = [seq.get_element() for _ in range(4)]
    seq.set(0)
    assert [seq.get_element() for _ in range(4)] == first


@pytest.mark.parametrize("index", [-1, 26])
def test_hammersley_invalid_base(index):
    with pytest.raises(ValueError):
        Hammersley(index)