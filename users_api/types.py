from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from users_api import StatusCode


@dataclass(frozen=True)
class Response:
    status_code: StatusCode
    content_type: str
    body: Union[str, bytes]
    headers: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class Request:
    method: str
    path: str
    params: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)
