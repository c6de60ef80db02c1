"""API key authentication dependencies."""

from typing import Optional

from fastapi import Header, HTTPException


async def require_issuer(
    x_ckey_api_key: Optional[str] = Header(None, alias="X-Ckey-Api-Key"),
) -> Optional[str]:
    """Gate key issuance on the admin API key when the deployment asks for it."""
    from ckey_engine.common.config import get_settings

    settings = get_settings()
    if not settings.require_api_key_for_generate:
        return x_ckey_api_key
    if x_ckey_api_key != settings.api_key:
        raise HTTPException(status_code=403, detail="Invalid API key")
    return x_ckey_api_key
