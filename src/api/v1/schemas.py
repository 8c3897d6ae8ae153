from datetime import datetime
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    id: str
    google_id: str
    email: str
    name: str
    picture: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    auth_url: str


class AuthCallbackResponse(BaseModel):
    token: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str


class NewsSubmissionRequest(BaseModel):
    content: str = Field(..., min_length=1, description="News text to fact-check")
    link: Optional[str] = Field(None, max_length=500, description="Source link")
    photo_url: Optional[str] = Field(None, max_length=500, description="Photo URL")


class NewsResponse(BaseModel):
    id: str
    user_id: str
    content: str
    link: Optional[str] = None
    photo_url: Optional[str] = None
    status: str
    explanation: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NewsVerificationResponse(BaseModel):
    id: str
    status: str
    explanation: str


class UserNewsListResponse(BaseModel):
    news: List[NewsResponse]
    count: int


class ServiceStatusResponse(BaseModel):
    openai: Dict[str, Any]
    database: Dict[str, Any]
