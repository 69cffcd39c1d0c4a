"""
Install report 관리: 생성, entry 결과 기록, 완료, 저장/로드.

규칙:
- entry 결과는 처리 순서대로 append (output path 정렬 순)
- result: pending → success (전부 기록됨) | partial (skip된 entry 있음)
"""

import json
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from app_bootstrap.core.storage import replace_json_file
from app_bootstrap.domain.constants import REPORT_FILENAME_PREFIX, REPORT_FILENAME_SUFFIX
from app_bootstrap.domain.schemas import EntryOutcome, InstallReport

# =============================================================================
# Report Lifecycle
# =============================================================================


def generate_run_id() -> str:
    """
    Run ID 생성.

    포맷: RUN-{timestamp}-{uuid[:8]}
    """
    timestamp = datetime.now(UTC).strftime("%Y%m%d%H%M%S")
    return f"RUN-{timestamp}-{uuid.uuid4().hex[:8]}"


def create_install_report(
    installer: str,
    install_dir: Path,
    template_dir: Path,
) -> InstallReport:
    """
    새 InstallReport 생성.

    Args:
        installer: installer 이름 (InstallerDefinition.name)
        install_dir: 확정된 install 디렉터리
        template_dir: 확정된 template 디렉터리
    """
    return InstallReport(
        run_id=generate_run_id(),
        installer=installer,
        install_dir=str(install_dir),
        template_dir=str(template_dir),
        started_at=datetime.now(UTC).isoformat(),
    )


def record_outcome(report: InstallReport, outcome: EntryOutcome) -> None:
    report.outcomes.append(outcome)


def complete_install_report(report: InstallReport) -> None:
    """InstallReport 완료 처리."""
    report.finished_at = datetime.now(UTC).isoformat()
    report.result = "success" if report.succeeded else "partial"


# =============================================================================
# Persistence
# =============================================================================


def save_install_report(report: InstallReport, logs_dir: Path) -> Path:
    """
    InstallReport를 파일로 저장.

    Args:
        report: InstallReport 인스턴스
        logs_dir: 저장 디렉터리 (install 디렉터리와 별개로 호출자가 지정)

    Returns:
        저장된 파일 경로
    """
    log_path = logs_dir / f"{REPORT_FILENAME_PREFIX}{report.run_id}{REPORT_FILENAME_SUFFIX}"
    replace_json_file(log_path, report.to_dict())
    return log_path


def load_install_report(log_path: Path) -> dict[str, Any]:
    data: dict[str, Any] = json.loads(log_path.read_text(encoding="utf-8"))
    return data


def list_install_reports(logs_dir: Path) -> list[Path]:
    """
    저장된 report 파일 목록 (최신순).
    """
    if not logs_dir.exists():
        return []

    reports = list(logs_dir.glob(f"{REPORT_FILENAME_PREFIX}*{REPORT_FILENAME_SUFFIX}"))
    reports.sort(key=lambda p: p.stat().st_mtime, reverse=True)
    return reports
