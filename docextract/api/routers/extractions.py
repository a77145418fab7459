"""
Extraction API endpoints.

Routes: POST /extractions

Dependencies: docextract.application.services.extraction_service, docextract.models
System role: Document extraction HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse, StreamingResponse

from docextract.api.deps import get_extraction_service
from docextract.application.services.extraction_service import ExtractionService
from docextract.core.exceptions import DocumentValidationError, QueueFullError
from docextract.models.extraction import ExtractionOptions

from .router_utils import parse_candidate_list, parse_form_flag

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/extractions", tags=["extractions"])


@router.post("", status_code=202)
async def submit_extraction(
    file: UploadFile | None = File(None),
    technicians: str | None = Form(None),
    groups: str | None = Form(None),
    categories: str | None = Form(None),
    use_thinking_model: str | None = Form(None),
    stream_output: str | None = Form(None),
    extraction_service: ExtractionService = Depends(get_extraction_service),
):
    """
    Submit a PDF for task extraction.

    Polling mode returns a job id immediately; poll GET /jobs/{jobId} until
    the status is completed or failed. With ``stream_output=true`` the
    response is instead a live text stream of model output and progress
    markers, ending with a fenced JSON block of the tasks and a summary line.

    Args:
        file: PDF upload
        technicians: JSON array of candidate assignees
        groups: JSON array of candidate groups
        categories: JSON array of candidate categories
        use_thinking_model: "true" selects the higher capability tier
        stream_output: "true" streams the extraction instead of queueing a job
        extraction_service: Injected ExtractionService

    Returns:
        JSONResponse | StreamingResponse: Job id (202) or live text channel

    Raises:
        HTTPException(400): Missing, non-PDF or oversized file, malformed lists
        HTTPException(503): Worker queue is full

    Example Response:
        {
            "jobId": "0b8f0e0e-3c1c-4ad4-9f4e-0d6c3e1f2a11",
            "status": "pending",
            "message": "Processing started. Check job status using the jobId."
        }
    """
    try:
        options = ExtractionOptions(
            technicians=parse_candidate_list(technicians, "technicians"),
            groups=parse_candidate_list(groups, "groups"),
            categories=parse_candidate_list(categories, "categories"),
            use_thinking_model=parse_form_flag(use_thinking_model),
        )
        document = await file.read() if file is not None else None
        media_type = file.content_type if file is not None else None

        logger.info(
            "Extraction requested",
            extra={
                "file_name": file.filename if file is not None else None,
                "document_bytes": len(document) if document else 0,
                "use_thinking_model": options.use_thinking_model,
                "stream_output": parse_form_flag(stream_output),
            },
        )

        if parse_form_flag(stream_output):
            channel = extraction_service.start_stream(document, media_type, options)
            return StreamingResponse(channel, media_type="text/plain; charset=utf-8")

        submitted = extraction_service.submit(document, media_type, options)
    except DocumentValidationError as e:
        logger.warning("Extraction rejected", extra={"error": e.message, **e.details})
        raise HTTPException(status_code=400, detail=e.message)
    except QueueFullError as e:
        raise HTTPException(status_code=503, detail=e.message)

    return JSONResponse(
        status_code=202,
        content=submitted.model_dump(mode="json", by_alias=True),
    )
