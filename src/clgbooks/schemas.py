from __future__ import annotations
from pydantic import BaseModel, constr, model_validator

from .config import Settings


class ChatRequest(BaseModel):
    message: constr(min_length=1, strip_whitespace=True)

    @model_validator(mode="after")
    def _check_length(self) -> "ChatRequest":
        if len(self.message) > Settings.MAX_MESSAGE_LENGTH:
            raise ValueError("The message is too long")
        return self
