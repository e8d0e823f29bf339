import math
from dataclasses import dataclass

import pytest

from felsim.constants import CE
from felsim.loadbeam import BeamRecord, load_beam
from felsim.profile import ProfileSet
from felsim.textproc import InputError
from felsim.timewindow import TimeWindow


@dataclass
class _Config:
    lambda0: float = 1e-10
    gamma0: float = 5800 / 0.511
    one4one: bool = False
    shotnoise: bool = True
    npart: int = 8
    nbins: int = 4
    seed: int = 123456789


def _config(**kwargs):
    return _Config(**kwargs)


def test_steady_state_single_slice():
    config = _config()
    beam = load_beam({}, config, TimeWindow(), ProfileSet(), BeamRecord())
    assert len(beam.slices) == 1
    assert len(beam.slices[0]) == 8
    assert beam.current == [1000.0]
    assert beam.reflength == config.lambda0
    assert beam.nbins == 4
    assert beam.one4one is False


def test_zero_energy_spread_gives_reference_energy():
    config = _config()
    beam = load_beam({}, config, TimeWindow(), ProfileSet(), BeamRecord())
    for p in beam.slices[0]:
        assert p.gamma == pytest.approx(config.gamma0)


def test_gamma_override():
    beam = load_beam({"gamma": "1000"}, _config(), TimeWindow(), ProfileSet(), BeamRecord())
    assert all(p.gamma == pytest.approx(1000.0) for p in beam.slices[0])


def test_beamlets_share_transverse_coordinates():
    beam = load_beam({}, _config(), TimeWindow(), ProfileSet(), BeamRecord())
    particles = beam.slices[0]
    for k in range(0, 8, 4):
        group = particles[k:k + 4]
        assert {p.x for p in group} == {group[0].x}
        assert {p.py for p in group} == {group[0].py}


def test_phases_within_slice_without_bunching():
    beam = load_beam({}, _config(), TimeWindow(), ProfileSet(), BeamRecord())
    assert all(0 <= p.theta < 2 * math.pi for p in beam.slices[0])


def test_profile_reference_sets_current():
    profiles = ProfileSet()
    profiles.add("&profile_const", {"label": "cur", "c0": "500"})
    beam = load_beam({"current": "@cur"}, _config(), TimeWindow(), profiles, BeamRecord())
    assert beam.current == [500.0]


def test_unknown_profile_reference():
    with pytest.raises(InputError):
        load_beam({"current": "@missing"}, _config(), TimeWindow(), ProfileSet(), BeamRecord())


def test_unknown_keyword():
    with pytest.raises(InputError):
        load_beam({"charge": "1"}, _config(), TimeWindow(), ProfileSet(), BeamRecord())


def test_npart_not_multiple_of_nbins():
    with pytest.raises(InputError):
        load_beam({}, _config(npart=10), TimeWindow(), ProfileSet(), BeamRecord())


def test_beam_already_defined():
    beam = load_beam({}, _config(), TimeWindow(), ProfileSet(), BeamRecord())
    with pytest.raises(InputError):
        load_beam({}, _config(), TimeWindow(), ProfileSet(), beam)


def test_time_dependent_run_with_shot_noise():
    config = _config()
    window = TimeWindow()
    window.configure({"slen": "4e-10"}, config.lambda0)
    beam = load_beam({}, config, window, ProfileSet(), BeamRecord())
    assert len(beam.slices) == window.node_nslice
    assert all(len(particles) == 8 for particles in beam.slices)
    assert beam.s0 == window.positions()[0]


def test_one4one_particle_count_follows_current():
    config = _config(one4one=True, nbins=1)
    beam = load_beam({"current": "1"}, config, TimeWindow(), ProfileSet(), BeamRecord())
    expected = round(1 * config.lambda0 / CE)
    assert len(beam.slices[0]) == expected
    assert beam.nbins == 1
    assert beam.sorting.dosort is True