from pydantic import BaseModel


class TokenUser(BaseModel):
    id: str
    name: str
    email: str


class TokenResponse(BaseModel):
    """Schema for authentication token response"""
    access_token: str
    token_type: str = "bearer"
    user: TokenUser
