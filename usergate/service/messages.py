"""Payload schemas for messages that carry more than a request model."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..auth.schemas import CreateUserRequest, UpdateUserRequest


class _Message(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CreatorMessage(_Message):
    creator_id: str


class UserIdMessage(_Message):
    user_id: str


class EmailMessage(_Message):
    email: str


class CreateUserMessage(_Message):
    user: CreateUserRequest
    creator_id: str


class UpdateUserMessage(_Message):
    user_id: str
    update: UpdateUserRequest
    creator_id: str


class DeleteUserMessage(_Message):
    user_id: str
    creator_id: str
