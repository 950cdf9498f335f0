"""
Error definitions for the template loader.

규칙:
- 조용한 실패 금지 → 감지한 작업에서 즉시 raise
- 원인 예외는 항상 체이닝 (raise ... from e)
- 예외: reload 중 개별 엔트리의 traversal 에러는 건너뜀 (best-effort)
"""

from typing import Any


class LoaderError(Exception):
    """
    템플릿 로더 에러의 공통 베이스.

    Usage:
        raise ConflictError(
            ErrorCodes.TEMPLATE_CONFLICT,
            f"template '{name}' existed",
            name=name,
        )
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "message": self.message,
            **self.context,
        }


class ConflictError(LoaderError):
    """full walk 중 같은 logical name이 두 번 발견됨 (walk 전체 중단)."""


class TraversalError(LoaderError):
    """디렉터리 순회 또는 소스 읽기 실패."""


class ParseError(LoaderError):
    """템플릿 문법 에러 (Jinja2 TemplateSyntaxError 래핑)."""


class PreconditionError(LoaderError):
    """호출 순서 위반 (예: walk() 전에 parse_files())."""


class ConfigError(LoaderError):
    """설정 파일/값 오류."""


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Walk ===
    TEMPLATE_CONFLICT = "TEMPLATE_CONFLICT"
    TRAVERSAL_FAILED = "TRAVERSAL_FAILED"
    RELATIVE_PATH_FAILED = "RELATIVE_PATH_FAILED"

    # === Parse ===
    SOURCE_READ_FAILED = "SOURCE_READ_FAILED"
    TEMPLATE_SYNTAX_ERROR = "TEMPLATE_SYNTAX_ERROR"
    FILES_EMPTY = "FILES_EMPTY"

    # === Config ===
    INVALID_CONFIG = "INVALID_CONFIG"
