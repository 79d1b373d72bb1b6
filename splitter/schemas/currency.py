from pydantic import BaseModel, ConfigDict


class CurrencyResponse(BaseModel):
    code: str
    symbol: str
    name: str
    decimal_places: int
    display_name: str
    is_default: bool = False

    model_config = ConfigDict(from_attributes=True)
