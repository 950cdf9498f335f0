"""
tplloader: 디렉터리 기반 템플릿 로더 (Jinja2).

- root 아래 확장자가 일치하는 파일을 logical name(상대 경로)으로 등록/파싱
- 개발 중 reload(): 새 파일/수정된 파일만 다시 파싱
"""

from .config import load_config
from .domain.errors import (
    ConfigError,
    ConflictError,
    LoaderError,
    ParseError,
    PreconditionError,
    TraversalError,
)
from .domain.schemas import LoaderState, ReloadResult
from .templates import H, TemplateLoader, helper_map, new

__version__ = "0.1.0"

__all__ = [
    "TemplateLoader",
    "new",
    "load_config",
    "H",
    "helper_map",
    "LoaderState",
    "ReloadResult",
    "LoaderError",
    "ConflictError",
    "TraversalError",
    "ParseError",
    "PreconditionError",
    "ConfigError",
]
