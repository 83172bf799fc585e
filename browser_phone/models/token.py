"""
Request/response models for access token issuance
"""

from typing import Optional
from pydantic import BaseModel, Field


class TokenRequest(BaseModel):
    """Optional body of POST /api/token"""
    model_config = {
        "json_schema_extra": {
            "example": {"identity": "browser_user"}
        }
    }

    identity: Optional[str] = Field(
        default=None,
        description="Client identity; generated from the current time when omitted"
    )


class TokenResponse(BaseModel):
    """Issued access token"""
    identity: str = Field(..., description="Identity the token was issued for")
    token: str = Field(..., description="Serialized Twilio access token (JWT)")
