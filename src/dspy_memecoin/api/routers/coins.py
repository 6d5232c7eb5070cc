"""Router for coin preparation and recording."""

from fastapi import APIRouter, Depends

from ...exceptions.meme_specific import MemeNotFoundError
from ...models.coin import CoinCreationRequest, CoinCreationResult
from ...models.schemas.coins import CoinResultRequest
from ...models.schemas.memes import ApiResponse
from ..dependencies import Services, get_services

router = APIRouter()


@router.post("/prepare", response_model=ApiResponse)
async def prepare_coin(
    request: CoinCreationRequest,
    services: Services = Depends(get_services),
) -> ApiResponse:
    """
    Check a meme can be minted and return the deployment draft.

    Args:
        request: Meme id, optional name/symbol and the payout address
        services: Wired services

    Returns:
        Draft with name, symbol, network, currency and metadata, plus the
        pinned metadata ``uri`` when IPFS uploads are configured
    """
    draft = await services.minting.prepare_pinned_coin(request)
    return ApiResponse(data=draft.to_dict())


@router.post("/create", response_model=ApiResponse)
async def create_coin(
    request: CoinCreationRequest,
    services: Services = Depends(get_services),
) -> ApiResponse:
    """
    Pin, deploy and record a coin server-side.

    Returns:
        The creation result; deployment failures come back with ``success=false``
    """
    result = await services.minting.create_coin(request)
    return ApiResponse(success=result.success, data=result.dump(), error=result.error)


@router.post("/{meme_id}/result", response_model=ApiResponse)
def record_coin_result(
    meme_id: str,
    request: CoinResultRequest,
    services: Services = Depends(get_services),
) -> ApiResponse:
    """
    Record the result of a wallet-signed deployment.

    Returns:
        The stored coin record, or the failure reason
    """
    result = CoinCreationResult(
        success=request.success,
        transaction_hash=request.transaction_hash,
        contract_address=request.contract_address,
        chain_id=request.chain_id,
        ipfs_hash=request.ipfs_hash,
        error=request.error,
    )
    coin = services.minting.record_coin_result(meme_id, result, creator=request.creator)
    if coin is None:
        return ApiResponse(success=False, error=request.error or "Coin creation failed")
    return ApiResponse(data=coin.dump())


@router.get("", response_model=ApiResponse)
def list_coins(services: Services = Depends(get_services)) -> ApiResponse:
    return ApiResponse(data=[coin.dump() for coin in services.store.coins()])


@router.get("/by-meme/{meme_id}", response_model=ApiResponse)
def get_coin_for_meme(meme_id: str, services: Services = Depends(get_services)) -> ApiResponse:
    coin = services.store.get_coin_by_meme_id(meme_id)
    if coin is None:
        raise MemeNotFoundError(meme_id)
    return ApiResponse(data=coin.dump())
