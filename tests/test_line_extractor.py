import math

from minimawatch.services.line_extractor import Minima, ParsedCondition, extract, is_below

MINIMA = Minima(ceiling_ft=500, visibility_sm=1)


def test_extracts_ceiling_and_visibility():
    parsed = extract("FM011200 27010KT 3SM BR OVC008")

    assert parsed.ceiling_ft == 800
    assert parsed.visibility_sm == 3
    assert parsed.visibility_is_at_least is False


def test_ceiling_uses_first_broken_overcast_or_vertical_visibility_layer():
    assert extract("FEW005 SCT010 BKN025 OVC040").ceiling_ft == 2500
    assert extract("1/4SM FG VV002").ceiling_ft == 200
    assert extract("P6SM FEW010 SCT250").ceiling_ft == math.inf


def test_line_without_groups_is_unlimited():
    parsed = extract("RMK AO2 SLP123")

    assert parsed == ParsedCondition(math.inf, math.inf, False)
    assert is_below(parsed, MINIMA) is False


def test_empty_input_is_unlimited():
    assert extract("") == ParsedCondition()
    assert extract(None) == ParsedCondition()


def test_greater_than_visibility_is_flagged():
    parsed = extract("18010KT P6SM SKC")

    assert parsed.visibility_sm == 6
    assert parsed.visibility_is_at_least is True
    assert is_below(parsed, Minima(ceiling_ft=500, visibility_sm=6)) is False
    assert is_below(parsed, Minima(ceiling_ft=500, visibility_sm=3)) is False


def test_two_digit_visibility():
    assert extract("10SM BKN030").visibility_sm == 10


def test_fractional_visibility_groups():
    assert extract("1/2SM FG OVC002").visibility_sm == 0.5
    assert extract("1 1/2SM BR BKN006").visibility_sm == 1.5
    assert extract("27010KT 3/4SM -SN").visibility_sm == 0.75

    below_quarter = extract("M1/4SM FG VV001")
    assert below_quarter.visibility_sm == 0.25
    assert below_quarter.visibility_is_at_least is False


def test_fraction_does_not_read_as_whole_miles():
    assert is_below(extract("TEMPO 0112/0114 1/2SM FG"), MINIMA) is True


def test_below_when_either_dimension_fails():
    assert is_below(extract("5SM OVC004"), MINIMA) is True
    assert is_below(extract("1/2SM BKN030"), MINIMA) is True
    assert is_below(extract("5SM BKN030"), MINIMA) is False


def test_values_equal_to_minima_are_not_below():
    assert is_below(extract("1SM OVC005"), MINIMA) is False


def test_unspaced_mixed_fraction_falls_back_to_whole_miles():
    parsed = extract("11/2SM BR OVC008")

    assert parsed.visibility_sm == 2
    assert parsed.visibility_is_at_least is False
