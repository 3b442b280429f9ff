from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str


class CapabilitiesResponse(BaseModel):
    coin: str
    coin_id: int
    capabilities: list[str]
