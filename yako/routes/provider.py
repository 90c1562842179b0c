"""
LLM provider credential check.
"""

from fastapi import APIRouter, Request
from loguru import logger

from yako.models.schemas import ProviderKeyStatus

router = APIRouter(prefix="/api", tags=["provider"])


@router.get("/check-provider-key", response_model=ProviderKeyStatus)
@router.get("/check-api-key", response_model=ProviderKeyStatus, include_in_schema=False)
async def check_provider_key(request: Request):
    valid, message = await request.app.state.provider.check_key()
    logger.info(f"Provider key check: valid={valid} ({message})")
    return ProviderKeyStatus(valid=valid, message=message)
