import math

import pytest

from felsim.textproc import InputError
from felsim.timewindow import TimeWindow


def test_defaults_single_slice():
    window = TimeWindow()
    assert window.positions() == [0.0]
    assert window.sample_rate() == 1.0
    assert not window.is_time


def test_finish_init_before_configure_does_nothing():
    window = TimeWindow()
    window.finish_init(1e-10)
    assert window.nslice == 1
    assert window.ds == 1.0


def test_configure_sets_slices():
    window = TimeWindow()
    window.configure({"s0": "1e-6", "slen": "1e-8", "sample": "1"}, 1e-10)
    assert window.is_time and not window.is_scan
    s = window.positions()
    assert len(s) == window.nslice == 100
    assert s[0] == 1e-6
    assert math.isclose(s[1] - s[0], 1e-10)
    assert math.isclose(window.slen, window.ds * window.nslice)


def test_sample_rate_scales_spacing():
    window = TimeWindow()
    window.configure({"slen": "1e-8", "sample": "5"}, 1e-10)
    assert window.sample_rate() == 5.0
    assert math.isclose(window.ds, 5e-10)
    assert window.nslice == 20


def test_nodes_round_up_slice_count():
    window = TimeWindow(rank=1, size=3)
    window.configure({"slen": "1e-8"}, 1e-10)
    assert window.nslice % 3 == 0
    assert window.nslice >= 100
    assert window.node_nslice * 3 == window.nslice
    assert window.node_offset == window.node_nslice
    assert math.isclose(window.slen, window.ds * window.nslice)


def test_at_least_one_slice_per_node():
    window = TimeWindow(rank=0, size=4)
    window.configure({"slen": "0"}, 1e-10)
    assert window.nslice == 4
    assert window.node_nslice == 1


def test_time_false_is_scan():
    window = TimeWindow()
    window.configure({"time": "false", "sample": "3"}, 1e-10)
    assert window.is_scan
    assert window.sample_rate() == 1.0


def test_finish_init_after_reference_change():
    window = TimeWindow()
    window.configure({"slen": "1e-8"}, 1e-10)
    before = window.slen
    window.finish_init(2e-10)
    assert window.nslice == 50
    assert math.isclose(window.slen, before)


def test_unknown_keyword_raises():
    with pytest.raises(InputError):
        TimeWindow().configure({"length": "1"}, 1e-10)