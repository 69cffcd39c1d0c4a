"""
Data schemas for the installer.

규칙:
- DelimiterPair, InstallerDefinition은 불변 (install 중 변경 금지)
- InstallReport는 entry 처리 순서(output path 정렬)를 그대로 보존
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from app_bootstrap.domain.errors import BootstrapError

# =============================================================================
# Definition Schemas
# =============================================================================

@dataclass(frozen=True)
class DelimiterPair:
    """template 표현식을 감싸는 시작/끝 마커."""
    start: str
    end: str

    def as_tuple(self) -> tuple[str, str]:
        return (self.start, self.end)


@dataclass
class InstallOptions:
    """
    install 1회 실행 옵션.

    - template_dir: 없으면 InstallerDefinition의 기본 share 디렉터리
    - install_dir: 없으면 현재 작업 디렉터리 (빈 문자열도 없는 것으로 취급)
    - data: 모든 template에 그대로 전달되는 data context
    """
    template_dir: Path | str | None = None
    install_dir: Path | str | None = None
    data: Mapping[str, Any] | None = None

    def resolve_install_dir(self) -> Path:
        return Path(self.install_dir) if self.install_dir else Path.cwd()

    @property
    def context(self) -> Mapping[str, Any]:
        return self.data if self.data is not None else {}


# =============================================================================
# Outcome / Report Schemas
# =============================================================================

class EntryStatus(str, Enum):
    """manifest entry 처리 결과."""
    WRITTEN = "written"  # 렌더링 후 파일 생성 완료
    SKIPPED = "skipped"  # non-fatal 에러로 건너뜀


@dataclass
class EntryOutcome:
    """
    manifest entry 1개의 처리 결과.

    성공: status=WRITTEN, written_path 채워짐
    실패: status=SKIPPED, error에 원인 (BootstrapError 하위 타입)
    """
    template_key: str
    output_path: str
    status: EntryStatus
    written_path: Path | None = None
    error: BootstrapError | None = None

    @property
    def ok(self) -> bool:
        return self.status == EntryStatus.WRITTEN

    @property
    def code(self) -> str | None:
        return self.error.code if self.error is not None else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "template_key": self.template_key,
            "output_path": self.output_path,
            "status": self.status.value,
            "written_path": str(self.written_path) if self.written_path else None,
            "error": self.error.to_dict() if self.error is not None else None,
        }


@dataclass
class InstallReport:
    """
    install 실행 결과.

    entry별 결과를 처리 순서대로 모음. 호출자가 출력/집계/CI 실패 여부를 결정.
    """
    run_id: str
    installer: str
    install_dir: str
    template_dir: str
    started_at: str  # ISO 8601
    finished_at: str | None = None
    result: str = "pending"  # pending, success, partial

    outcomes: list[EntryOutcome] = field(default_factory=list)

    @property
    def written(self) -> list[EntryOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failures(self) -> list[EntryOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def succeeded(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "installer": self.installer,
            "install_dir": self.install_dir,
            "template_dir": self.template_dir,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "result": self.result,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }
