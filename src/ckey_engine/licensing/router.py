"""License key API router."""

from fastapi import APIRouter, Depends

from ckey_engine.common.config import get_settings
from ckey_engine.common.exceptions import RequestLimitError
from ckey_engine.common.logging import get_logger
from ckey_engine.common.security import require_issuer
from ckey_engine.keygen.generator import generate_license_key
from ckey_engine.keygen.validator import validate_key
from ckey_engine.licensing.schemas import (
    KeyBatchResponse,
    KeyCreate,
    VerifyRequest,
    VerifyResponse,
)

logger = get_logger("licensing.router")

router = APIRouter()


def _check_name(name: str) -> None:
    limit = get_settings().max_name_length
    if len(name) > limit:
        raise RequestLimitError(f"Name exceeds {limit} characters")


@router.post("/keys", response_model=KeyBatchResponse, status_code=201)
async def create_keys(body: KeyCreate, _=Depends(require_issuer)):
    settings = get_settings()
    _check_name(body.name)
    if body.count > settings.max_batch_size:
        raise RequestLimitError(f"At most {settings.max_batch_size} keys per request")

    keys = [generate_license_key(body.name) for _ in range(body.count)]
    logger.info("Issued %d license key(s)", len(keys))
    return KeyBatchResponse(name=body.name, keys=keys)


@router.post("/keys/verify", response_model=VerifyResponse)
async def verify_key(body: VerifyRequest):
    _check_name(body.name)
    result = validate_key(body.name, body.key)
    return VerifyResponse(valid=result.valid, code=result.code, message=result.message)
