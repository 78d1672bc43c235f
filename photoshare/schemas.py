from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .config import settings


class LoginRequest(BaseModel):
    name: str = Field(min_length=settings.USERNAME_MIN_LENGTH, max_length=settings.USERNAME_MAX_LENGTH)


class LoginResponse(BaseModel):
    identifier: str
    token: str


class UsernameUpdate(BaseModel):
    new_username: str = Field(
        alias="newUsername",
        min_length=settings.USERNAME_MIN_LENGTH,
        max_length=settings.USERNAME_MAX_LENGTH,
    )


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    username: str


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    username: str
    followers: list[str]
    following: list[str]
    photos: list[str]


class PhotoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    photo_id: str
    user_id: str
    content_type: str | None = None
    timestamp: datetime


class CommentIn(BaseModel):
    content: str = Field(min_length=1, max_length=settings.COMMENT_MAX_LENGTH)


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    comment_id: str
    photo_id: str
    user_id: str
    username: str
    content: str
    timestamp: datetime


class PhotoDetailOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    photo_id: str
    user_id: str
    username: str
    content_type: str | None = None
    timestamp: datetime
    likes_count: int
    comments: list[CommentOut]
