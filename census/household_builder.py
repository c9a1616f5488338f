"""
Row and household assembly.

Builds fully populated PersonRecords and groups them into households
ordered Employee, Spouse, Child(ren).
"""

import logging
import re
from datetime import date
from typing import List, Optional, Set

import numpy as np
from faker import Faker

from .models import (
    PersonRecord, Household, MemberType, CompositionPolicy,
    ADULT_AGE_RANGE, CHILD_AGE_RANGE, CHILD_COUNT_RANGE,
    EMPLOYEE_CLASSES, INCOME_RANGE, DATE_OF_HIRE, EMAIL_DOMAIN
)
from .sampler import (
    generate_ssn, generate_unique_employee_id, compute_age,
    sample_birthdate, sample_sex, random_digits
)

logger = logging.getLogger(__name__)

_NON_LETTERS = re.compile(r'[^a-zA-Z]')


def build_email(first_name: str, last_name: str, rng: np.random.Generator) -> str:
    """
    Sandbox email from the letters of the name plus 3 random digits.

    Example: "Mary-Ann", "O'Neil" -> "maryannoneil042@yopmail.com"
    """
    clean_first = _NON_LETTERS.sub('', first_name).lower()
    clean_last = _NON_LETTERS.sub('', last_name).lower()
    return f"{clean_first}{clean_last}{random_digits(rng, 3)}@{EMAIL_DOMAIN}"


class RecordBuilder:
    """
    Builds census rows for one batch.

    Holds the batch's random source and a Faker instance seeded from it,
    so every name, date and identifier in a batch derives from one seed.
    """

    def __init__(
        self,
        rng: np.random.Generator,
        as_of: Optional[date] = None,
        faker: Optional[Faker] = None
    ):
        """
        Initialize with the batch random source.

        Args:
            rng: numpy Generator shared by the whole batch
            as_of: Reference date for birth dates and ages (default: today)
            faker: Name provider (default: en_US Faker seeded from rng)
        """
        self.rng = rng
        self.as_of = as_of or date.today()
        if faker is None:
            faker = Faker("en_US")
            faker.seed_instance(int(rng.integers(1, 2_000_000_000)))
        self.faker = faker

    def first_name(self) -> str:
        return self.faker.first_name()

    def last_name(self) -> str:
        return self.faker.last_name()

    def build_record(
        self,
        employee_id: str,
        composition: CompositionPolicy,
        member_type: MemberType,
        last_name: str,
        first_name: Optional[str] = None
    ) -> PersonRecord:
        """
        Build one fully populated row.

        Args:
            employee_id: Household's shared employee ID
            composition: Household composition (carried for context only)
            member_type: Role; selects age range and employee-only fields
            last_name: Household surname, inherited unchanged
            first_name: Employee's first name. Ignored for dependents,
                        who always get a freshly sampled one.

        Returns:
            PersonRecord with every field set
        """
        is_employee = member_type == MemberType.EMPLOYEE
        if is_employee and not first_name:
            raise ValueError("Employee rows require a first name")

        age_range = ADULT_AGE_RANGE if member_type != MemberType.CHILD else CHILD_AGE_RANGE
        dob = sample_birthdate(self.rng, age_range, self.as_of)

        record = PersonRecord(
            employee_id=employee_id,
            member_type=member_type,
            last_name=last_name,
            first_name=first_name if is_employee else self.first_name(),
            ssn=generate_ssn(self.rng),
            date_of_birth=dob,
            age=compute_age(dob, self.as_of),
            gender=sample_sex(self.rng),
        )

        if is_employee:
            record.email = build_email(first_name, last_name, self.rng)
            record.date_of_hire = DATE_OF_HIRE
            record.annual_income = int(self.rng.integers(INCOME_RANGE[0], INCOME_RANGE[1] + 1))
            record.employee_class = str(self.rng.choice(EMPLOYEE_CLASSES))

        return record

    def child_count(self) -> int:
        """Children per household, uniform over CHILD_COUNT_RANGE"""
        low, high = CHILD_COUNT_RANGE
        return int(self.rng.integers(low, high + 1))

    def build_household(
        self,
        composition: CompositionPolicy,
        used_ids: Set[str]
    ) -> Household:
        """
        Build one household for the given composition.

        Issues one employee ID from ``used_ids`` (mutating it), then builds
        the employee row, a spouse row if the policy includes a spouse,
        and 1-2 child rows if it includes children.

        Args:
            composition: Requested household shape
            used_ids: Batch-wide set of issued employee IDs

        Returns:
            Household with members in Employee, Spouse, Child order
        """
        employee_id = generate_unique_employee_id(used_ids, self.rng)
        last_name = self.last_name()
        first_name = self.first_name()

        household = Household(
            employee_id=employee_id,
            composition=composition,
            last_name=last_name
        )
        household.members.append(self.build_record(
            employee_id, composition, MemberType.EMPLOYEE, last_name, first_name
        ))

        if composition.includes_spouse:
            household.members.append(self.build_record(
                employee_id, composition, MemberType.SPOUSE, last_name
            ))

        if composition.includes_child:
            for _ in range(self.child_count()):
                household.members.append(self.build_record(
                    employee_id, composition, MemberType.CHILD, last_name
                ))

        logger.debug(
            f"Built household {employee_id} ({composition.value}) "
            f"with {len(household.members)} members"
        )
        return household

    def build_households(
        self,
        count: int,
        composition: CompositionPolicy,
        used_ids: Set[str]
    ) -> List[Household]:
        """Build ``count`` households sharing ``used_ids``"""
        return [self.build_household(composition, used_ids) for _ in range(count)]
