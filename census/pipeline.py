"""
Main census generation pipeline.

Turns a generation request into one or more census sheets:
1. Clamp the request (files 1-5, households 1-10)
2. Build households per sheet, sharing one employee-ID set for the batch
3. Assemble each sheet's table (decorative rows, header, person rows)
4. Serialize each table to a workbook and hand it to a delivery
"""

import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, List, Optional, Set, Union

import pandas as pd

from .models import (
    CensusBatch, CensusSheet, CompositionPolicy, Cell,
    COLUMN_HEADERS, COLUMN_WIDTHS, FILE_PREFIX, FILE_EXTENSION
)
from .sampler import make_rng, clamp_count, format_timestamp
from .household_builder import RecordBuilder
from .workbook import write_workbook
from .delivery import ArtifactDelivery
from .exceptions import CensusError, DeliveryError

logger = logging.getLogger(__name__)

MIN_FILES, MAX_FILES = 1, 5
MIN_HOUSEHOLDS, MAX_HOUSEHOLDS = 1, 10

Serializer = Callable[[List[List[Cell]], List[int]], bytes]


@dataclass
class GenerationRequest:
    """
    A batch request with counts already clamped to their bounds.

    Use GenerationRequest.create() to build one from raw input.
    """
    num_files: int
    num_households: int
    composition: CompositionPolicy

    @classmethod
    def create(
        cls,
        num_files: Any = MIN_FILES,
        num_households: Any = MIN_HOUSEHOLDS,
        composition: Union[str, CompositionPolicy] = CompositionPolicy.EMPLOYEE_ONLY
    ) -> "GenerationRequest":
        """
        Build a request from raw values.

        Out-of-range counts are clamped to the nearest bound and
        non-numeric counts become 1; nothing is rejected except an
        unknown composition.
        """
        return cls(
            num_files=clamp_count(num_files, MIN_FILES, MAX_FILES),
            num_households=clamp_count(num_households, MIN_HOUSEHOLDS, MAX_HOUSEHOLDS),
            composition=CompositionPolicy.parse(composition)
        )


def build_filename(timestamp: str) -> str:
    return f"{FILE_PREFIX}_{timestamp}.{FILE_EXTENSION}"


class CensusGenerator:
    """
    Census batch generator.

    One instance per batch: it owns the random source, the record builder
    and the employee-ID set, so IDs stay unique across every file in the
    batch.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        now: Optional[datetime] = None,
        serializer: Optional[Serializer] = None
    ):
        """
        Initialize census generator.

        Args:
            seed: Random seed for reproducibility
            now: Generation time; sets the file timestamp and the date
                 ages are computed against (default: current local time)
            serializer: Table-to-workbook writer (default: xlsx via openpyxl)
        """
        self.seed = seed
        self.now = now or datetime.now()
        self.as_of: date = self.now.date()
        self.timestamp = format_timestamp(self.now)
        self.rng = make_rng(seed)
        self.builder = RecordBuilder(self.rng, as_of=self.as_of)
        self.used_ids: Set[str] = set()
        self.serializer = serializer or (lambda rows, widths: write_workbook(rows, widths))

        logger.debug(f"Initialized census generator (seed={seed}, timestamp={self.timestamp})")

    # =========================================================================
    # Sheet Generation
    # =========================================================================

    def generate_sheet(self, index: int, request: GenerationRequest) -> CensusSheet:
        """
        Generate one sheet's households.

        Args:
            index: Zero-based file index within the batch
            request: Clamped batch request

        Returns:
            CensusSheet with request.num_households households
        """
        households = self.builder.build_households(
            request.num_households,
            request.composition,
            self.used_ids
        )
        sheet = CensusSheet(
            index=index,
            filename=build_filename(self.timestamp),
            households=households
        )
        logger.debug(
            f"Sheet {index}: {len(households)} households, "
            f"{len(sheet.data_rows())} rows"
        )
        return sheet

    @staticmethod
    def build_table(sheet: CensusSheet) -> List[List[Cell]]:
        """Assemble the sheet table: 4 decorative rows, header, person rows"""
        return sheet.to_table()

    # =========================================================================
    # Batch Generation
    # =========================================================================

    def generate_batch(
        self,
        request: GenerationRequest,
        cancel_event: Optional[threading.Event] = None
    ) -> CensusBatch:
        """
        Generate every sheet in a batch without serializing.

        Args:
            request: Clamped batch request
            cancel_event: Checked before each file; when set, the batch
                          stops and returns the sheets built so far

        Returns:
            CensusBatch holding request.num_files sheets (fewer if cancelled)
        """
        batch = CensusBatch(
            composition=request.composition,
            num_households=request.num_households,
            timestamp=self.timestamp,
            generated_at=self.now,
            seed=self.seed
        )

        for i in range(request.num_files):
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"Batch cancelled after {i} of {request.num_files} files")
                batch.cancelled = True
                break
            batch.sheets.append(self.generate_sheet(i, request))

        logger.info(
            f"Generated {len(batch.sheets)} census sheets "
            f"({request.num_households} x '{request.composition.value}')"
        )
        return batch

    def export_batch(
        self,
        request: GenerationRequest,
        delivery: ArtifactDelivery,
        cancel_event: Optional[threading.Event] = None
    ) -> List[str]:
        """
        Generate, serialize and deliver a batch one file at a time.

        Args:
            request: Clamped batch request
            delivery: Where finished workbooks go
            cancel_event: Checked before each file

        Returns:
            Delivery locations, in file order

        Raises:
            DeliveryError: a file could not be serialized or delivered;
                           files before it were already delivered
        """
        delivered: List[int] = []
        locations: List[str] = []

        for i in range(request.num_files):
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"Export cancelled after {i} of {request.num_files} files")
                break

            sheet = self.generate_sheet(i, request)
            try:
                data = self.serializer(self.build_table(sheet), list(COLUMN_WIDTHS))
                locations.append(delivery.deliver(data, sheet.filename))
            except CensusError:
                raise
            except Exception as e:
                logger.error(f"Delivery of file {i} failed: {e}")
                raise DeliveryError(
                    filename=sheet.filename,
                    failed_index=i,
                    delivered=delivered,
                    reason=str(e)
                ) from e
            delivered.append(i)

        logger.info(f"Exported {len(locations)} census files")
        return locations


def generate_census(
    num_files: Any = MIN_FILES,
    num_households: Any = MIN_HOUSEHOLDS,
    composition: Union[str, CompositionPolicy] = CompositionPolicy.EMPLOYEE_ONLY,
    seed: Optional[int] = None,
    now: Optional[datetime] = None
) -> CensusBatch:
    """Convenience wrapper: clamp the request and generate a batch"""
    request = GenerationRequest.create(num_files, num_households, composition)
    return CensusGenerator(seed=seed, now=now).generate_batch(request)


def sheet_to_dataframe(sheet: CensusSheet) -> pd.DataFrame:
    """Person rows of a sheet as a DataFrame keyed by column header"""
    rows = [row[1:] for row in sheet.data_rows()]
    return pd.DataFrame(rows, columns=COLUMN_HEADERS)
