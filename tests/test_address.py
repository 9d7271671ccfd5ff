"""Tests for composing the checkout address line."""

import pytest

from storefront_e2e.tools.address import build_address_field


def test_joins_all_parts_with_single_spaces():
    assert build_address_field("Church Street", "45", "bis") == "Church Street 45 bis"


def test_empty_addition_is_dropped():
    assert build_address_field("Main Street", "123", "") == "Main Street 123"


def test_empty_leading_part_leaves_no_leading_space():
    assert build_address_field("", "123", "A") == "123 A"


def test_whitespace_only_part_is_dropped():
    """WS-004: an addition of only spaces never reaches the form."""
    assert build_address_field("Main Street", "123", "      ") == "Main Street 123"


@pytest.mark.parametrize(
    "street_name, house_number, addition, expected",
    [
        ("Main Street", "123", "  ABC", "Main Street 123   ABC"),
        ("Main Street", "123", "ABC  ", "Main Street 123 ABC  "),
        ("  Main Street", "123", "A", "  Main Street 123 A"),
    ],
)
def test_surviving_parts_are_not_trimmed(street_name, house_number, addition, expected):
    """Trimming is left to the shop's form field."""
    assert build_address_field(street_name, house_number, addition) == expected


def test_already_joined_input_is_unchanged():
    assert build_address_field("Main Street 123", "", "") == "Main Street 123"


def test_all_empty_gives_empty_string():
    assert build_address_field("", "", "") == ""
