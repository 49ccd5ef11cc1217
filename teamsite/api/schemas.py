from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Token(BaseModel):
    access_token: str
    token_type: str


class _CamelResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MutationResponse(_CamelResponse):
    success: bool = True
    id: str | None = None
    data: dict[str, Any] | None = None


class SubmissionResponse(_CamelResponse):
    success: bool = True
    id: str
    email_sent: bool


class SettingsResponse(_CamelResponse):
    success: bool = True
    data: dict[str, Any] | None = None
