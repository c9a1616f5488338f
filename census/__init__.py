"""
Census Generator Package

Generates synthetic census/enrollment records (employee plus dependents)
and exports them as spreadsheet files for demo and test environments.
"""

from .pipeline import (
    CensusGenerator,
    GenerationRequest,
    generate_census,
    build_filename,
    sheet_to_dataframe,
    MIN_FILES,
    MAX_FILES,
    MIN_HOUSEHOLDS,
    MAX_HOUSEHOLDS,
)
from .household_builder import RecordBuilder, build_email
from .models import (
    PersonRecord,
    Household,
    CensusSheet,
    CensusBatch,
    MemberType,
    CompositionPolicy,
    COLUMN_HEADERS,
    COLUMN_WIDTHS,
    SHEET_NAME,
    TITLE,
)
from .sampler import (
    make_rng,
    generate_ssn,
    generate_unique_employee_id,
    compute_age,
    sample_birthdate,
    format_date,
    format_timestamp,
    clamp_count,
)
from .workbook import write_workbook, XLSX_MEDIA_TYPE
from .delivery import ArtifactDelivery, DirectoryDelivery, MemoryDelivery
from .exceptions import CensusError, GenerationExhausted, DeliveryError

__version__ = "1.0.0"

__all__ = [
    # Main classes
    'CensusGenerator',
    'GenerationRequest',
    'RecordBuilder',
    'generate_census',
    'build_filename',
    'build_email',
    'sheet_to_dataframe',

    # Data models
    'PersonRecord',
    'Household',
    'CensusSheet',
    'CensusBatch',

    # Enums
    'MemberType',
    'CompositionPolicy',

    # Constants
    'COLUMN_HEADERS',
    'COLUMN_WIDTHS',
    'SHEET_NAME',
    'TITLE',
    'MIN_FILES',
    'MAX_FILES',
    'MIN_HOUSEHOLDS',
    'MAX_HOUSEHOLDS',
    'XLSX_MEDIA_TYPE',

    # Sampling utilities
    'make_rng',
    'generate_ssn',
    'generate_unique_employee_id',
    'compute_age',
    'sample_birthdate',
    'format_date',
    'format_timestamp',
    'clamp_count',

    # Output
    'write_workbook',
    'ArtifactDelivery',
    'DirectoryDelivery',
    'MemoryDelivery',

    # Errors
    'CensusError',
    'GenerationExhausted',
    'DeliveryError',
]
