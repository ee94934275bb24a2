from pydantic import BaseModel


class GenericMessageResponse(BaseModel):
    message: str


class ToggleStateResponse(BaseModel):
    target_id: str
    active: bool
