"""
Random field generators for census records.

Every sampler takes the batch's numpy Generator explicitly so a whole batch
can be reproduced from one seed.
"""

import re
from datetime import date, datetime, timedelta
from typing import Any, Optional, Set, Tuple

import numpy as np

from .exceptions import CensusError, GenerationExhausted

# Retry cap for every rejection-sampling loop
MAX_ATTEMPTS = 1000

SSN_AREA_PREFIXES = ['5', '6', '7']

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Create the random source for one batch.

    Args:
        seed: Random seed for reproducibility (None for fresh entropy)

    Returns:
        numpy Generator shared by every sampler in the batch
    """
    if seed is not None and seed < 0:
        raise CensusError(f"Seed must be non-negative, got {seed}")
    return np.random.default_rng(seed)


def random_digits(rng: np.random.Generator, n: int) -> str:
    """Random numeric string of exactly n digits (leading zeros allowed)"""
    return ''.join(str(d) for d in rng.integers(0, 10, size=n))


def generate_ssn(rng: np.random.Generator, max_attempts: int = MAX_ATTEMPTS) -> str:
    """
    Generate a test-safe SSN shaped AAA-GG-SSSS.

    Area starts with 5, 6 or 7 and is never "666"; group is never "00";
    serial is never "0000". Each part is resampled independently.

    Raises:
        GenerationExhausted: if any part keeps failing its constraint
    """
    area = _resample(
        lambda: str(rng.choice(SSN_AREA_PREFIXES)) + random_digits(rng, 2),
        lambda v: v != "666",
        "SSN area",
        max_attempts
    )
    group = _resample(
        lambda: random_digits(rng, 2),
        lambda v: v != "00",
        "SSN group",
        max_attempts
    )
    serial = _resample(
        lambda: random_digits(rng, 4),
        lambda v: v != "0000",
        "SSN serial",
        max_attempts
    )
    return f"{area}-{group}-{serial}"


def generate_unique_employee_id(
    used_ids: Set[str],
    rng: np.random.Generator,
    max_attempts: int = MAX_ATTEMPTS
) -> str:
    """
    Generate a 6-digit employee ID not already in ``used_ids``.

    The new ID is added to ``used_ids`` before returning. The caller owns
    the set for the lifetime of one batch.

    Raises:
        GenerationExhausted: if no unused ID was found
    """
    eeid = _resample(
        lambda: random_digits(rng, 6),
        lambda v: v not in used_ids,
        "unique employee ID",
        max_attempts
    )
    used_ids.add(eeid)
    return eeid


def _resample(draw, accept, what: str, max_attempts: int) -> Any:
    for _ in range(max_attempts):
        value = draw()
        if accept(value):
            return value
    raise GenerationExhausted(what, max_attempts)


def compute_age(birth_date: date, as_of: Optional[date] = None) -> int:
    """
    Age in completed years on ``as_of`` (default: today).

    Args:
        birth_date: Date of birth
        as_of: Reference date

    Returns:
        Year difference, less one if the birthday has not yet occurred
    """
    if as_of is None:
        as_of = date.today()
    age = as_of.year - birth_date.year
    if (as_of.month, as_of.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def years_before(d: date, years: int) -> date:
    """Same calendar day ``years`` earlier; Feb 29 falls back to Feb 28"""
    try:
        return d.replace(year=d.year - years)
    except ValueError:
        return d.replace(year=d.year - years, day=28)


def sample_birthdate(
    rng: np.random.Generator,
    age_range: Tuple[int, int],
    as_of: Optional[date] = None
) -> date:
    """
    Sample a birth date uniformly such that the age on ``as_of`` lies in
    ``age_range`` (inclusive).

    Args:
        rng: Batch random source
        age_range: (min_age, max_age) in completed years
        as_of: Reference date (default: today)
    """
    if as_of is None:
        as_of = date.today()
    min_age, max_age = age_range
    if min_age > max_age:
        raise ValueError(f"Invalid age range: {age_range}")

    latest = years_before(as_of, min_age)
    earliest = years_before(as_of, max_age + 1) + timedelta(days=1)
    span = (latest - earliest).days
    return earliest + timedelta(days=int(rng.integers(0, span + 1)))


def sample_sex(rng: np.random.Generator) -> str:
    """Sample binary sex as 'F' or 'M'"""
    return 'F' if rng.random() < 0.5 else 'M'


def format_date(d: Optional[date]) -> str:
    """MM/DD/YYYY, zero-padded; empty string for None"""
    if d is None:
        return ""
    return f"{d.month:02d}/{d.day:02d}/{d.year:04d}"


def format_timestamp(dt: datetime) -> str:
    """MMDDYYYYhhmm, zero-padded; used for output file names"""
    return f"{dt.month:02d}{dt.day:02d}{dt.year:04d}{dt.hour:02d}{dt.minute:02d}"


def clamp_count(value: Any, low: int, high: int) -> int:
    """
    Clamp a requested count to [low, high].

    Non-numeric input falls back to ``low``. Strings are read by their
    leading integer ("7" -> 7, "3.9" -> 3, "3abc" -> 3, "1e3" -> 1,
    "abc" -> low).
    """
    try:
        if isinstance(value, str):
            match = _LEADING_INT.match(value)
            if match is None:
                return low
            value = match.group(0)
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return low
    return max(low, min(high, number))
