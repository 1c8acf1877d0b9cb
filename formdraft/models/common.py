from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error_code: str
    message: str


class StatusResponse(BaseModel):
    service: str
    version: str
    id_strategy: str
    max_input_chars: int
