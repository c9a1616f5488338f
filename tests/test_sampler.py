"""
Tests for field generators and date helpers.
"""

import re
from datetime import date, datetime

import numpy as np
import pytest

from census.exceptions import CensusError, GenerationExhausted
from census.sampler import (
    make_rng, random_digits, generate_ssn, generate_unique_employee_id,
    compute_age, years_before, sample_birthdate, sample_sex,
    format_date, format_timestamp, clamp_count
)

SSN_PATTERN = re.compile(r'^\d{3}-\d{2}-\d{4}$')


class _ScriptedRng:
    """Stands in for numpy's Generator, replaying fixed draws"""

    def __init__(self, choices, digits):
        self._choices = list(choices)
        self._digits = list(digits)

    def choice(self, options):
        return self._choices.pop(0)

    def integers(self, low, high, size=None):
        return np.array(self._digits.pop(0))


def test_ssn_shape_and_exclusions():
    """Every SSN has a 5/6/7 area, no 666, no 00 group, no 0000 serial"""
    rng = make_rng(0)
    for _ in range(2000):
        ssn = generate_ssn(rng)
        assert SSN_PATTERN.match(ssn)
        area, group, serial = ssn.split('-')
        assert area[0] in '567'
        assert area != "666"
        assert group != "00"
        assert serial != "0000"


def test_ssn_resamples_rejected_parts():
    """666 area, 00 group and 0000 serial are each drawn again"""
    rng = _ScriptedRng(
        choices=['6', '5'],
        digits=[[6, 6], [1, 2], [0, 0], [4, 5], [0, 0, 0, 0], [0, 0, 0, 7]]
    )
    assert generate_ssn(rng) == "512-45-0007"


def test_ssn_gives_up_after_cap():
    """A source that only yields 666 exhausts the retry cap"""
    rng = _ScriptedRng(choices=['6'] * 5, digits=[[6, 6]] * 5)
    with pytest.raises(GenerationExhausted):
        generate_ssn(rng, max_attempts=5)


def test_unique_employee_ids():
    """IDs are 6 digits, never repeat, and are recorded in the set"""
    rng = make_rng(1)
    used = set()
    ids = [generate_unique_employee_id(used, rng) for _ in range(500)]
    
    assert len(set(ids)) == 500
    assert used == set(ids)
    assert all(len(i) == 6 and i.isdigit() for i in ids)


def test_unique_employee_id_exhausted():
    """A set that already holds every candidate raises"""
    rng = _ScriptedRng(choices=[], digits=[[1, 2, 3, 4, 5, 6]] * 3)
    with pytest.raises(GenerationExhausted):
        generate_unique_employee_id({"123456"}, rng, max_attempts=3)


def test_random_digits_keeps_leading_zeros():
    rng = _ScriptedRng(choices=[], digits=[[0, 0, 7]])
    assert random_digits(rng, 3) == "007"


@pytest.mark.parametrize("years", [0, 1, 22, 60])
def test_compute_age_exact_birthday(years):
    """Birth date exactly K years ago gives age K"""
    today = date(2024, 6, 15)
    assert compute_age(date(2024 - years, 6, 15), today) == years


def test_compute_age_one_day_either_side():
    today = date(2024, 6, 15)
    # K years and one day before today: birthday already passed
    assert compute_age(date(1994, 6, 14), today) == 30
    # Birthday tomorrow: not yet K
    assert compute_age(date(1994, 6, 16), today) == 29


def test_compute_age_month_comparison():
    """Month/day ordering, not just year subtraction"""
    assert compute_age(date(2000, 12, 31), date(2024, 1, 1)) == 23
    assert compute_age(date(2000, 1, 1), date(2024, 12, 31)) == 24


def test_compute_age_leap_day():
    assert compute_age(date(2000, 2, 29), date(2023, 2, 28)) == 22
    assert compute_age(date(2000, 2, 29), date(2023, 3, 1)) == 23


def test_years_before_leap_day_falls_back():
    assert years_before(date(2024, 2, 29), 1) == date(2023, 2, 28)
    assert years_before(date(2024, 2, 29), 4) == date(2020, 2, 29)


@pytest.mark.parametrize("age_range", [(22, 60), (0, 25), (30, 30)])
def test_sample_birthdate_within_age_range(age_range):
    """Sampled ages land in the inclusive range"""
    rng = make_rng(7)
    as_of = date(2024, 2, 29)
    ages = {compute_age(sample_birthdate(rng, age_range, as_of), as_of) for _ in range(3000)}
    
    assert min(ages) >= age_range[0]
    assert max(ages) <= age_range[1]


def test_sample_birthdate_covers_both_ends():
    rng = make_rng(3)
    as_of = date(2024, 6, 1)
    ages = {compute_age(sample_birthdate(rng, (0, 2), as_of), as_of) for _ in range(500)}
    assert ages == {0, 1, 2}


def test_sample_birthdate_not_in_future():
    rng = make_rng(5)
    as_of = date(2024, 6, 1)
    assert all(sample_birthdate(rng, (0, 0), as_of) <= as_of for _ in range(200))


def test_sample_sex_is_binary():
    rng = make_rng(11)
    assert {sample_sex(rng) for _ in range(200)} == {'F', 'M'}


def test_format_date():
    assert format_date(date(2024, 3, 5)) == "03/05/2024"
    assert format_date(date(1999, 12, 31)) == "12/31/1999"
    assert format_date(None) == ""


def test_format_timestamp():
    assert format_timestamp(datetime(2024, 3, 5, 7, 4)) == "030520240704"
    assert format_timestamp(datetime(2025, 11, 30, 23, 59)) == "113020252359"


@pytest.mark.parametrize("value,expected", [
    (3, 3),
    (0, 1),
    (-4, 1),
    (999, 10),
    ("7", 7),
    ("3.9", 3),
    ("abc", 1),
    ("", 1),
    (None, 1),
    (10, 10),
    ("3abc", 3),
    ("1e3", 1),
    (" +4 ", 4),
    ("-2x", 1),
    ("x3", 1),
    (3.9, 3),
])
def test_clamp_count(value, expected):
    """Out-of-range values clamp, non-numeric values default to the minimum"""
    assert clamp_count(value, 1, 10) == expected


def test_seeded_rng_is_reproducible():
    a = [generate_ssn(make_rng(99)) for _ in range(3)]
    b = [generate_ssn(make_rng(99)) for _ in range(3)]
    assert a == b


def test_make_rng_rejects_negative_seed():
    """numpy seeds must be non-negative"""
    with pytest.raises(CensusError):
        make_rng(-1)
