from pydantic import BaseModel


class DeleteResponse(BaseModel):
    """Response body for successful deletions."""

    success: bool = True
