from pydantic import BaseModel, Field


class OkResponse(BaseModel):
    """Acknowledgement returned by write endpoints"""

    ok: bool = Field(True, description="Operation accepted by the report store")


class ErrorResponse(BaseModel):
    """Error body produced by HTTPException handlers"""

    detail: str
