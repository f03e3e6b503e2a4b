"""
Shared pydantic response models.
"""
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
