"""
Census generation endpoints.
"""

import io
import logging
import zipfile
from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from census.delivery import MemoryDelivery
from census.exceptions import CensusError
from census.models import CompositionPolicy
from census.pipeline import GenerationRequest, MAX_FILES, MAX_HOUSEHOLDS
from census.workbook import XLSX_MEDIA_TYPE

from ..models import (
    GenerateCensusRequest, PreviewCensusResponse, CensusFileSummary,
    HouseholdSummary, CompositionsResponse, CompositionInfo
)
from ..dependencies import get_settings, get_generator_factory, GeneratorFactory
from ..config import Settings

logger = logging.getLogger(__name__)

ZIP_MEDIA_TYPE = "application/zip"

router = APIRouter(
    prefix="/api/v1/census",
    tags=["census"]
)


def _to_generation_request(request: GenerateCensusRequest) -> GenerationRequest:
    # Counts were already clamped by the request model
    return GenerationRequest(
        num_files=request.num_files,
        num_households=request.num_households,
        composition=request.composition
    )


@router.get("/compositions", response_model=CompositionsResponse)
async def list_compositions():
    """
    List supported household compositions and request limits.
    """
    return CompositionsResponse(
        compositions=[
            CompositionInfo(
                name=p.name,
                label=p.value,
                includes_spouse=p.includes_spouse,
                includes_child=p.includes_child
            )
            for p in CompositionPolicy
        ],
        max_files=MAX_FILES,
        max_households=MAX_HOUSEHOLDS
    )


@router.post(
    "/generate",
    responses={
        200: {
            "content": {XLSX_MEDIA_TYPE: {}, ZIP_MEDIA_TYPE: {}},
            "description": "One xlsx file, or a zip archive when more than one file was requested",
        },
        500: {"description": "Generation failed; the message is in `detail`"},
    }
)
def generate_census(
    request: GenerateCensusRequest,
    settings: Annotated[Settings, Depends(get_settings)],
    new_generator: Annotated[GeneratorFactory, Depends(get_generator_factory)]
):
    """
    Generate census spreadsheet files.
    
    ## Request Parameters
    
    - **num_files**: Number of files (clamped to 1-5)
    - **num_households**: Households per file (clamped to 1-10)
    - **composition**: Employee Only, Employee + Spouse, or Employee + Spouse + Child
    - **seed**: Random seed for reproducibility (optional)
    
    ## Response
    
    A single `CensusFile_<MMDDYYYYhhmm>.xlsx` when one file is requested,
    otherwise a zip archive holding every file. Files in one batch share
    the timestamp; duplicates are suffixed " (1)", " (2)", ...
    
    ## Example Request
```json
    {
      "num_files": 2,
      "num_households": 5,
      "composition": "Employee + Spouse"
    }
```
    """
    generation_request = _to_generation_request(request)
    generator = new_generator(request.seed)
    delivery = MemoryDelivery()
    
    try:
        generator.export_batch(generation_request, delivery)
    except CensusError as e:
        logger.error(f"Census generation failed: {e}")
        raise HTTPException(status_code=500, detail=f"Generation failed: {str(e)}")
    
    headers = {
        "X-Census-Files": str(len(delivery.artifacts)),
        "X-Census-Timestamp": generator.timestamp,
    }
    
    if len(delivery.artifacts) == 1:
        artifact = delivery.artifacts[0]
        headers["Content-Disposition"] = f'attachment; filename="{artifact.filename}"'
        return Response(content=artifact.data, media_type=XLSX_MEDIA_TYPE, headers=headers)
    
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as archive:
        for artifact in delivery.artifacts:
            archive.writestr(artifact.filename, artifact.data)
    
    archive_name = f"{settings.archive_prefix}_{generator.timestamp}.zip"
    headers["Content-Disposition"] = f'attachment; filename="{archive_name}"'
    logger.info(f"Returning {len(delivery.artifacts)} census files as {archive_name}")
    return Response(content=buffer.getvalue(), media_type=ZIP_MEDIA_TYPE, headers=headers)


@router.post("/preview", response_model=PreviewCensusResponse)
def preview_census(
    request: GenerateCensusRequest,
    new_generator: Annotated[GeneratorFactory, Depends(get_generator_factory)]
):
    """
    Generate census rows as JSON without building workbooks.
    
    Takes the same request as /generate. Useful for inspecting what a
    seed produces before downloading files.
    """
    generator = new_generator(request.seed)
    
    try:
        batch = generator.generate_batch(_to_generation_request(request))
    except CensusError as e:
        logger.error(f"Census preview failed: {e}")
        raise HTTPException(status_code=500, detail=f"Generation failed: {str(e)}")
    
    files = [
        CensusFileSummary(
            index=sheet.index,
            filename=sheet.filename,
            row_count=len(sheet.data_rows()),
            households=[HouseholdSummary(**h.to_dict()) for h in sheet.households]
        )
        for sheet in batch.sheets
    ]
    
    return PreviewCensusResponse(
        files=files,
        count=len(files),
        num_households=batch.num_households,
        composition=batch.composition.value,
        timestamp=batch.timestamp,
        seed=batch.seed
    )
