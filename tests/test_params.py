import pytest

from firesim.model import LexicoIndices
from firesim.params import (
    HelpRequested,
    ParameterError,
    Params,
    check_params,
    format_params,
    parse_arguments,
)


def test_no_arguments_gives_defaults():
    params = parse_arguments([])
    assert params == Params()
    assert params.discretization == 20
    assert params.start == LexicoIndices(10, 10)


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help(flag):
    with pytest.raises(HelpRequested) as info:
        parse_arguments([flag])
    assert "--number_of_cases" in info.value.usage


def test_short_discretization():
    assert parse_arguments(["-n", "30"]).discretization == 30


def test_long_discretization():
    assert parse_arguments(["--number_of_cases=50"]).discretization == 50


def test_length_is_read_as_integer():
    assert parse_arguments(["-l", "2.7"]).length == 2.0
    assert parse_arguments(["--longueur=3"]).length == 3.0


def test_short_wind():
    assert parse_arguments(["-w", "3,4.5"]).wind == (3.0, 4.5)


def test_long_wind():
    assert parse_arguments(["--wind=5,2.5"]).wind == (5.0, 2.5)


def test_start_is_column_then_row():
    assert parse_arguments(["-s", "3,7"]).start == LexicoIndices(7, 3)
    assert parse_arguments(["--start=4,1"]).start == LexicoIndices(1, 4)


def test_several_options():
    params = parse_arguments(["-n", "40", "--wind=1,2", "-s", "5,6"])
    assert params.discretization == 40
    assert params.wind == (1.0, 2.0)
    assert params.start == LexicoIndices(6, 5)


def test_unknown_argument_stops_parsing():
    params = parse_arguments(["-x", "-n", "5"])
    assert params.discretization == Params().discretization


@pytest.mark.parametrize("flag", ["-l", "-n", "-w", "-s"])
def test_missing_value(flag):
    with pytest.raises(ParameterError):
        parse_arguments([flag])


def test_missing_comma():
    with pytest.raises(ParameterError):
        parse_arguments(["-w", "3"])


def test_malformed_number():
    with pytest.raises(ParameterError):
        parse_arguments(["-n", "abc"])


def test_check_valid_params():
    assert check_params(Params()) == []


def test_check_start_outside():
    params = Params(discretization=5, start=LexicoIndices(2, 5))
    assert len(check_params(params)) == 1


def test_check_reports_every_problem():
    params = Params(length=0.0, discretization=0, start=LexicoIndices(0, 0))
    assert len(check_params(params)) == 3


def test_format_params():
    text = format_params(Params(discretization=30, wind=(1.5, 2.0), start=LexicoIndices(4, 3)))
    assert "Cells per direction: 30" in text
    assert "[1.5, 2]" in text
    assert "3, 4" in text