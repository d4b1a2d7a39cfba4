"""
integra.api.endpoints.process - Orchestration Entry Point

``POST /api/process`` hands the raw body to the pipeline, which does its
own structural validation so malformed bodies get the standard error
envelope (with a request ID) instead of FastAPI's 422.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from integra.api.deps import Pipeline
from integra.core.correlation import RequestContext

router = APIRouter()

REQUEST_ID_HEADER = "X-Request-ID"


@router.post("/process")
async def process_request(request: Request, pipeline: Pipeline) -> JSONResponse:
    """
    Run one integration request through auth, fetch and notify.

    Returns:
        IntegrationResponse JSON with the status code mapped from the outcome
    """
    context = RequestContext()
    body = await request.body()
    result = await pipeline.process(body, context=context)

    return JSONResponse(
        status_code=result.status_code,
        content=result.response.to_payload(),
        headers={REQUEST_ID_HEADER: result.response.request_id},
    )
