"""
Error definitions for the installer.

규칙:
- 디렉터리 레벨 에러 (DIRECTORY_NOT_EMPTY, DIRECTORY_ACCESS) → fatal, 쓰기 전에 중단
- 파일 단위 에러 → non-fatal, 해당 entry만 skip 후 다음 entry 계속 진행
- 조용한 실패 금지: skip된 entry는 반드시 report에 남김
"""

from typing import Any

# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Definition ===
    INVALID_DEFINITION = "INVALID_DEFINITION"
    INVALID_DELIMITERS = "INVALID_DELIMITERS"

    # === Directory (fatal) ===
    DIRECTORY_NOT_EMPTY = "DIRECTORY_NOT_EMPTY"
    DIRECTORY_ACCESS = "DIRECTORY_ACCESS"
    TEMPLATE_DIR_UNRESOLVED = "TEMPLATE_DIR_UNRESOLVED"

    # === Entry (non-fatal) ===
    TEMPLATE_READ_FAILED = "TEMPLATE_READ_FAILED"
    EMPTY_CONTENT = "EMPTY_CONTENT"
    RENDER_FAILED = "RENDER_FAILED"
    SUBDIRECTORY_CREATE_FAILED = "SUBDIRECTORY_CREATE_FAILED"
    OUTPUT_WRITE_FAILED = "OUTPUT_WRITE_FAILED"


# =============================================================================
# Exceptions
# =============================================================================

class BootstrapError(Exception):
    """
    installer 에러 베이스.

    code는 클래스마다 고정, context는 로그/JSON 직렬화용 부가 정보.

    Usage:
        raise TemplateReadError(
            f"Can't open input file {path}: {e}",
            template_key="foo.tmpl",
            path=str(path),
        )
    """

    code = "BOOTSTRAP_ERROR"
    fatal = False

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(f"[{self.code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            **self.context,
            "code": self.code,
            "message": self.message,
        }


class DefinitionError(BootstrapError):
    """installer 정의(manifest, delimiters, YAML) 오류."""

    code = ErrorCodes.INVALID_DEFINITION
    fatal = True

    def __init__(self, message: str, code: str | None = None, **context: Any) -> None:
        if code is not None:
            self.code = code
        super().__init__(message, **context)


class DirectoryNotEmptyError(BootstrapError):
    """install 대상 디렉터리에 점(.)만으로 된 이름 외의 항목이 있음."""

    code = ErrorCodes.DIRECTORY_NOT_EMPTY
    fatal = True


class DirectoryAccessError(BootstrapError):
    """install 대상 디렉터리를 열 수 없음 (없음, 권한 없음 등)."""

    code = ErrorCodes.DIRECTORY_ACCESS
    fatal = True


class TemplateDirError(BootstrapError):
    """기본 template 디렉터리를 찾을 수 없음."""

    code = ErrorCodes.TEMPLATE_DIR_UNRESOLVED
    fatal = True


class TemplateReadError(BootstrapError):
    code = ErrorCodes.TEMPLATE_READ_FAILED


class EmptyContentError(BootstrapError):
    code = ErrorCodes.EMPTY_CONTENT


class RenderError(BootstrapError):
    code = ErrorCodes.RENDER_FAILED


class SubdirectoryCreateError(BootstrapError):
    code = ErrorCodes.SUBDIRECTORY_CREATE_FAILED


class OutputWriteError(BootstrapError):
    code = ErrorCodes.OUTPUT_WRITE_FAILED
