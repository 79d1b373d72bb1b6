"""Currency endpoints - the display currencies a bill can use"""

from typing import Any, List

from fastapi import APIRouter

from splitter.schemas.currency import CurrencyResponse
from splitter.schemas.responses import SuccessResponse
from splitter.utils.currency import SUPPORTED_CURRENCIES, default_currency

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[CurrencyResponse]])
async def list_currencies() -> Any:
    """
    Supported currencies in picker order, with the configured default flagged.
    """
    default_code = default_currency().code
    currencies = [
        CurrencyResponse(
            code=currency.code,
            symbol=currency.symbol,
            name=currency.name,
            decimal_places=currency.decimal_places,
            display_name=currency.display_name,
            is_default=currency.code == default_code,
        )
        for currency in SUPPORTED_CURRENCIES
    ]
    return SuccessResponse(data=currencies)
