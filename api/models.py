"""
Pydantic models for API requests and responses.

These models define the structure of data sent to and from the API.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional
from datetime import datetime, timezone

from census.models import CompositionPolicy
from census.pipeline import MIN_FILES, MAX_FILES, MIN_HOUSEHOLDS, MAX_HOUSEHOLDS
from census.sampler import clamp_count


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# REQUEST MODELS
# ============================================================================

class GenerateCensusRequest(BaseModel):
    """
    Request model for generating census files.
    
    Counts are clamped to their bounds instead of being rejected:
    num_files to 1-5, num_households to 1-10, non-numeric values to 1.
    """
    
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "num_files": 1,
                "num_households": 5,
                "composition": "Employee + Spouse + Child"
            }
        }
    )
    
    num_files: int = Field(
        1,
        description="Number of census files to generate (clamped to 1-5)",
        examples=[1, 3]
    )
    num_households: int = Field(
        5,
        description="Households per file (clamped to 1-10)",
        examples=[5, 10]
    )
    composition: CompositionPolicy = Field(
        CompositionPolicy.EMPLOYEE_ONLY,
        description="Household composition",
        examples=[p.value for p in CompositionPolicy]
    )
    seed: Optional[int] = Field(
        None,
        description="Random seed for reproducibility (non-negative)",
        ge=0,
        examples=[42, 12345]
    )
    
    @field_validator('num_files', mode='before')
    @classmethod
    def clamp_num_files(cls, v: Any) -> int:
        """Clamp file count to 1-5"""
        return clamp_count(v, MIN_FILES, MAX_FILES)
    
    @field_validator('num_households', mode='before')
    @classmethod
    def clamp_num_households(cls, v: Any) -> int:
        """Clamp household count to 1-10"""
        return clamp_count(v, MIN_HOUSEHOLDS, MAX_HOUSEHOLDS)


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class HouseholdSummary(BaseModel):
    """One generated household with its rows"""
    
    employee_id: str = Field(..., description="6-digit employee ID shared by the household")
    composition: str = Field(..., description="Household composition")
    last_name: str = Field(..., description="Household surname")
    member_count: int = Field(..., description="Number of rows in the household")
    members: List[dict] = Field(..., description="Rows keyed by column header")


class CensusFileSummary(BaseModel):
    """One generated census file"""
    
    index: int = Field(..., description="Zero-based file index in the batch")
    filename: str = Field(..., description="Output file name")
    row_count: int = Field(..., description="Number of person rows")
    households: List[HouseholdSummary]


class PreviewCensusResponse(BaseModel):
    """Response model for census preview"""
    
    files: List[CensusFileSummary] = Field(..., description="Generated files")
    count: int = Field(..., description="Number of files generated")
    num_households: int = Field(..., description="Households per file after clamping")
    composition: str = Field(..., description="Household composition")
    timestamp: str = Field(..., description="File name timestamp (MMDDYYYYhhmm)")
    seed: Optional[int] = Field(None, description="Random seed used")
    generated_at: datetime = Field(
        default_factory=_utcnow,
        description="Generation timestamp (UTC)"
    )


class CompositionInfo(BaseModel):
    """A supported household composition"""
    
    name: str
    label: str
    includes_spouse: bool
    includes_child: bool


class CompositionsResponse(BaseModel):
    """Supported compositions and request limits"""
    
    compositions: List[CompositionInfo]
    max_files: int
    max_households: int


class HealthResponse(BaseModel):
    """Health check response"""
    
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "version": "1.0.0",
                "timestamp": "2024-12-21T12:00:00Z"
            }
        }
    )
    
    status: str = Field(..., description="Health status: healthy or unhealthy")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Check timestamp (UTC)"
    )
