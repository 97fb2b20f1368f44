from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, Dict, Any
from datetime import datetime
import uuid

from coffeelog.core.schemas import CamelModel


class UserCreate(BaseModel):
    """Схема для регистрации пользователя"""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    name: Optional[str] = Field(None, max_length=100)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if v is not None:
            v = v.strip()
            return v or None
        return v


class UserLogin(BaseModel):
    """Схема для входа пользователя"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    """Пользователь без хеша пароля"""
    id: uuid.UUID
    email: EmailStr
    name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class LoginResponse(CamelModel):
    success: bool = True
    message: str = "Logged in"
    user: UserResponse


class SessionResponse(BaseModel):
    user: Optional[Dict[str, Any]] = None
