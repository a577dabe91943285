"""
Schemas shared by several routers.
"""

from pydantic import BaseModel


class DeleteResponse(BaseModel):
    success: bool
