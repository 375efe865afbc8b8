from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

# ------------------------------- Common Models ------------------------------- #


class ApiStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"
    INVALID_STATE = "invalid_state"
    CONFLICT = "conflict"
    AUTHENTICATION_ERROR = "authentication_error"
    FORBIDDEN = "forbidden"
    SERVER_ERROR = "server_error"
    RATE_LIMITED = "rate_limited"


class BaseRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class BaseResponse(BaseModel):
    status: ApiStatus
    message: str
    data: Optional[Any] = None
