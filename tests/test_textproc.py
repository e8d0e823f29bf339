import pytest

from felsim.textproc import InputError, atob, chop, reference, take_options, trim


def test_trim_removes_blanks_and_tabs_only():
    assert trim(" \t a b \t ") == "a b"
    assert trim("\n x \n") == "\n x \n"
    assert trim(" \t ") == ""


def test_chop_splits_and_trims():
    assert chop(" a , b,c ") == ["a", "b", "c"]
    assert chop("single") == ["single"]
    assert chop("a,,b") == ["a", "", "b"]


@pytest.mark.parametrize("text", ["1", "true", "t"])
def test_atob_true(text):
    assert atob(text) is True


@pytest.mark.parametrize("text", ["0", "false", "True", "yes", ""])
def test_atob_false(text):
    assert atob(text) is False


def test_reference_with_label_keeps_value():
    assert reference("@current_profile", 3.0) == (3.0, "current_profile")


def test_reference_with_number():
    assert reference("2.5", 3.0) == (2.5, "")
    assert reference("garbage", 3.0) == (0.0, "")


def test_take_options_converts_like_c():
    args = {"a": "1.5abc", "b": "12.7", "c": "true", "d": " text ", "e": "x"}
    spec = {"a": float, "b": int, "c": bool, "d": str, "e": float, "f": int}
    result = take_options(args, spec, "&test")
    assert result == {"a": 1.5, "b": 12, "c": True, "d": " text ", "e": 0.0}


def test_take_options_does_not_mutate_args():
    args = {"a": "1"}
    take_options(args, {"a": int}, "&test")
    assert args == {"a": "1"}


def test_take_options_custom_converter():
    result = take_options({"v": "a,b"}, {"v": chop}, "&test")
    assert result == {"v": ["a", "b"]}


def test_take_options_unknown_key_raises():
    with pytest.raises(InputError, match="&setup"):
        take_options({"zzz": "1"}, {"a": int}, "&setup")