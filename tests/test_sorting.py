import math

import pytest

from felsim.quietloading import Particle
from felsim.sorting import Sorting


def _sorter(**limits):
    sorter = Sorting(dosort=True)
    params = dict(s0=0.0, slen=1.0, sendmin=-math.inf, sendmax=math.inf,
                  keepmin=-math.inf, keepmax=math.inf, globalframe=False)
    params.update(limits)
    sorter.configure(**params)
    return sorter


def test_local_sort_moves_particle_forward():
    slices = [[Particle(theta=2.5, gamma=7.0)], [], []]
    _sorter().local_sort(slices)
    assert slices[0] == []
    assert slices[1] == []
    assert len(slices[2]) == 1
    assert slices[2][0].theta == pytest.approx(0.5)
    assert slices[2][0].gamma == 7.0


def test_local_sort_moves_particle_backward():
    slices = [[], [Particle(theta=-0.25, x=3.0)]]
    _sorter().local_sort(slices)
    assert slices[1] == []
    assert slices[0][0].theta == pytest.approx(0.75)
    assert slices[0][0].x == 3.0


def test_local_sort_conserves_particles_and_bounds_phase():
    slices = [[Particle(theta=t) for t in (0.1, 1.2, 2.9, 0.5)],
              [Particle(theta=t) for t in (-0.5, 0.3, 1.1)],
              [Particle(theta=t) for t in (-2.0, 0.7)]]
    total = sum(len(s) for s in slices)
    _sorter().local_sort(slices)
    assert sum(len(s) for s in slices) == total
    for particles in slices:
        for p in particles:
            assert 0.0 <= p.theta < 1.0


def test_local_sort_outside_beam_raises():
    slices = [[Particle(theta=-0.5)]]
    with pytest.raises(IndexError):
        _sorter().local_sort(slices)


def test_sort_disabled_leaves_beam_unchanged():
    slices = [[Particle(theta=3.0)], []]
    sorter = Sorting(dosort=False)
    assert sorter.sort(slices) == 0
    assert slices[0][0].theta == 3.0


def test_global_sort_removes_outside_keep_window():
    slices = [[Particle(theta=0.5), Particle(theta=-0.5)],
              [Particle(theta=0.5)],
              [Particle(theta=0.5), Particle(theta=1.5)]]
    sorter = _sorter(sendmin=0.0, sendmax=3.0, keepmin=0.0, keepmax=3.0)
    backward, forward = sorter.global_sort(slices)
    assert [len(s) for s in slices] == [1, 1, 1]
    assert len(backward) == 1
    assert len(forward) == 1
    assert backward[0].theta == pytest.approx(0.5)
    assert forward[0].theta == pytest.approx(0.5)


def test_global_sort_in_global_frame_keeps_phase():
    slices = [[Particle(theta=-0.5)], [Particle(theta=2.5)]]
    sorter = _sorter(sendmin=0.0, sendmax=2.0, keepmin=0.0, keepmax=2.0, globalframe=True)
    backward, forward = sorter.global_sort(slices)
    assert backward[0].theta == -0.5
    assert forward[0].theta == 2.5
    assert slices == [[], []]


def test_sort_combines_global_and_local():
    slices = [[Particle(theta=1.5), Particle(theta=-0.5)], []]
    sorter = _sorter(keepmin=0.0, keepmax=2.0, sendmin=0.0, sendmax=2.0)
    assert sorter.sort(slices) == 0
    assert slices[0] == []
    assert len(slices[1]) == 1
    assert slices[1][0].theta == pytest.approx(0.5)


def test_configure_rejects_non_positive_slice_length():
    with pytest.raises(ValueError):
        Sorting().configure(0.0, 0.0, 0.0, 1.0, 0.0, 1.0, False)