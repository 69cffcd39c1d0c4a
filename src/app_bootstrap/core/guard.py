"""
Directory guard: install 대상 디렉터리가 비어 있는지 사전 확인.

규칙:
- 점(.)만으로 된 이름(".", "..")은 무시, 숨김 파일(.git 등)은 무시하지 않음
- 디렉터리를 열 수 없으면 DirectoryAccessError
- 비어 있지 않으면 DirectoryNotEmptyError

주의: 확인과 이후 쓰기 사이에 락을 잡지 않음 (TOCTOU 허용)
"""

import re
from pathlib import Path

from app_bootstrap.domain.errors import DirectoryAccessError, DirectoryNotEmptyError

DOT_ENTRY_PATTERN = re.compile(r"^\.+$")


def list_significant_entries(path: Path) -> list[str]:
    """
    점(.)만으로 된 이름을 제외한 항목 목록.

    Raises:
        DirectoryAccessError: 디렉터리를 열 수 없음
    """
    try:
        names = [entry.name for entry in Path(path).iterdir()]
    except OSError as e:
        raise DirectoryAccessError(
            f"Can't open {path} to check if it's empty: {e.strerror or e}",
            path=str(path),
            error=str(e),
        ) from e

    return sorted(name for name in names if not DOT_ENTRY_PATTERN.match(name))


def check_empty_directory(path: Path) -> None:
    """
    install 대상 디렉터리가 비어 있는지 확인.

    Args:
        path: install 대상 디렉터리

    Raises:
        DirectoryAccessError: DIRECTORY_ACCESS
        DirectoryNotEmptyError: DIRECTORY_NOT_EMPTY
    """
    entries = list_significant_entries(path)
    if entries:
        raise DirectoryNotEmptyError(
            f"Directory {path} isn't empty. Remove files and try again.",
            path=str(path),
            entries=entries,
        )
