"""
Debug Router

Lists the stored accounts with the exact bytes of each username, to make
stray whitespace and casing visible. Disabled with DEBUG_ENDPOINTS=false.
"""

from fastapi import APIRouter, Depends, HTTPException

from auth import AccountDirectory, get_account_directory
from core.config import Settings, get_settings

router = APIRouter(prefix="/api/debug", tags=["debug"])


@router.get("/users")
async def list_users(
    settings: Settings = Depends(get_settings),
    directory: AccountDirectory = Depends(get_account_directory),
):
    """Account listing without passwords."""
    if not settings.debug_endpoints:
        raise HTTPException(status_code=404, detail="Not Found")

    return [
        {
            "id": account.id,
            "username": account.identifier,
            "usernameLength": len(account.identifier),
            "usernameHex": account.identifier.encode("utf-8").hex(),
            "email": account.contact,
        }
        for account in directory
    ]
