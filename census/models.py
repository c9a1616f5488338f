"""
Data models for census generation.

Defines the core data structures used throughout the generation pipeline
and the fixed column layout of the exported census sheet.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Union
from enum import Enum

from .sampler import format_date


class MemberType(Enum):
    """Role of a person within a household"""
    EMPLOYEE = "Employee"
    SPOUSE = "Spouse"
    CHILD = "Child"


class CompositionPolicy(Enum):
    """Requested household shape"""
    EMPLOYEE_ONLY = "Employee Only"
    EMPLOYEE_SPOUSE = "Employee + Spouse"
    EMPLOYEE_SPOUSE_CHILD = "Employee + Spouse + Child"

    @property
    def includes_spouse(self) -> bool:
        return "Spouse" in self.value

    @property
    def includes_child(self) -> bool:
        return "Child" in self.value

    @classmethod
    def parse(cls, value: Union[str, "CompositionPolicy"]) -> "CompositionPolicy":
        """
        Resolve a composition label or enum member name.

        Accepts the display label ("Employee + Spouse") or the member name
        ("EMPLOYEE_SPOUSE", case-insensitive).
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for policy in cls:
            if text == policy.value or text.upper() == policy.name:
                return policy
        raise ValueError(
            f"Unknown composition '{value}'. Available: {[p.value for p in cls]}"
        )


# Adult / child age ranges (inclusive, completed years)
ADULT_AGE_RANGE = (22, 60)
CHILD_AGE_RANGE = (0, 25)

# Children per household when the policy includes children
CHILD_COUNT_RANGE = (1, 2)

# Employee-only fields
EMPLOYEE_CLASSES = [
    "Full-Time Salaried",
    "Full-Time Hourly",
    "Part-Time Salaried",
    "Part-Time Hourly",
]
INCOME_RANGE = (50000, 90000)
DATE_OF_HIRE = "01/01/2023"
EMAIL_DOMAIN = "yopmail.com"

# Shared fixed fields
STATIC_ADDRESS = {
    'line1': "1 Main Street",
    'city': "Hartford",
    'zip': "06106",
    'state': "Connecticut",
}
DISABLED_FLAG = "N"
MAILING_SAME_AS_HOME = "yes"
PAPERLESS = "no"

# Sheet layout
SHEET_NAME = "Worksheet"
CLIENT_NAME = "Apex Global Solutions"
TITLE = f"Presented to: {CLIENT_NAME}"
FILE_PREFIX = "CensusFile"
FILE_EXTENSION = "xlsx"

COLUMN_HEADERS = [
    "EE ID", "Last Name", "First Name", "Email", "Member Type", "SSN",
    "Date of Birth", "Age", "Gender", "Disabled", "Date of Hire",
    "Annual Household Income", "Class Name", "Address Line 1",
    "Apt/Floor # Line 2", "City", "Zip Code", "State",
    "Mailing Same as Home (yes/no)", "Paperless (yes/no)",
    "Contribution Start Date", "Current Group Plan Premium",
    "Renewal Group Plan Premium",
]

# Width hints in characters, starting with the blank leading column
COLUMN_WIDTHS = [2, 10, 15, 15, 30, 15, 15, 12, 5, 5, 5, 12, 15, 20, 20, 10, 15, 10, 15]

Cell = Union[str, int]


@dataclass
class PersonRecord:
    """
    One census row.

    Employee-only fields (date_of_hire, annual_income, employee_class) and
    email are empty for spouses and children.
    """
    employee_id: str
    member_type: MemberType
    last_name: str
    first_name: str
    ssn: str
    date_of_birth: date
    age: int
    gender: str  # "M" or "F"

    email: str = ""
    date_of_hire: str = ""
    annual_income: Optional[int] = None
    employee_class: str = ""

    # Fixed fields
    disabled: str = DISABLED_FLAG
    address_line1: str = STATIC_ADDRESS['line1']
    address_line2: str = ""
    city: str = STATIC_ADDRESS['city']
    zip_code: str = STATIC_ADDRESS['zip']
    state: str = STATIC_ADDRESS['state']
    mailing_same_as_home: str = MAILING_SAME_AS_HOME
    paperless: str = PAPERLESS

    # Reserved placeholders, always empty
    contribution_start_date: str = ""
    current_premium: str = ""
    renewal_premium: str = ""

    def to_row(self) -> List[Cell]:
        """
        Convert to a sheet row: a blank leading cell followed by the
        23 data fields in COLUMN_HEADERS order.
        """
        return [
            "",
            self.employee_id,
            self.last_name,
            self.first_name,
            self.email,
            self.member_type.value,
            self.ssn,
            format_date(self.date_of_birth),
            self.age,
            self.gender,
            self.disabled,
            self.date_of_hire,
            self.annual_income if self.annual_income is not None else "",
            self.employee_class,
            self.address_line1,
            self.address_line2,
            self.city,
            self.zip_code,
            self.state,
            self.mailing_same_as_home,
            self.paperless,
            self.contribution_start_date,
            self.current_premium,
            self.renewal_premium,
        ]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return dict(zip(COLUMN_HEADERS, self.to_row()[1:]))


@dataclass
class Household:
    """
    One employee plus optional spouse and children sharing an employee ID
    and surname. Members are ordered Employee, Spouse, Child(ren).
    """
    employee_id: str
    composition: CompositionPolicy
    last_name: str
    members: List[PersonRecord] = field(default_factory=list)

    def get_employee(self) -> Optional[PersonRecord]:
        """Get the employee member"""
        for p in self.members:
            if p.member_type == MemberType.EMPLOYEE:
                return p
        return None

    def get_spouse(self) -> Optional[PersonRecord]:
        """Get the spouse if present"""
        for p in self.members:
            if p.member_type == MemberType.SPOUSE:
                return p
        return None

    def get_children(self) -> List[PersonRecord]:
        """Get all child members"""
        return [p for p in self.members if p.member_type == MemberType.CHILD]

    def to_rows(self) -> List[List[Cell]]:
        return [m.to_row() for m in self.members]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            'employee_id': self.employee_id,
            'composition': self.composition.value,
            'last_name': self.last_name,
            'member_count': len(self.members),
            'members': [m.to_dict() for m in self.members],
        }


@dataclass
class CensusSheet:
    """One output file's worth of households"""
    index: int
    filename: str
    households: List[Household] = field(default_factory=list)

    def data_rows(self) -> List[List[Cell]]:
        """Person rows in household order"""
        rows = []
        for household in self.households:
            rows.extend(household.to_rows())
        return rows

    def to_table(self) -> List[List[Cell]]:
        """
        Full sheet table: blank, title, blank, blank, header, then data rows.
        """
        rows: List[List[Cell]] = [
            [""],
            ["", TITLE],
            [""],
            [""],
            ["", *COLUMN_HEADERS],
        ]
        rows.extend(self.data_rows())
        return rows

    def employee_ids(self) -> List[str]:
        return [h.employee_id for h in self.households]


@dataclass
class CensusBatch:
    """One generation request's output"""
    composition: CompositionPolicy
    num_households: int
    timestamp: str
    generated_at: datetime
    seed: Optional[int] = None
    sheets: List[CensusSheet] = field(default_factory=list)
    cancelled: bool = False

    def employee_ids(self) -> List[str]:
        """All employee IDs issued across every sheet"""
        ids = []
        for sheet in self.sheets:
            ids.extend(sheet.employee_ids())
        return ids
