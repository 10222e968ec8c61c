"""Account profile router."""

from fastapi import APIRouter

from tessera.presentation.api.dependencies import CurrentAccount
from tessera.presentation.api.schemas.auth import AccountResponse

router = APIRouter()


@router.get("/me", summary="Get the signed-in account")
async def get_me(account: CurrentAccount) -> AccountResponse:
    """Return the public fields of the account behind the session cookie."""
    return AccountResponse.from_account(account)
