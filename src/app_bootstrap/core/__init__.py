"""
Core layer: install 실행 모듈.

역할:
- 대상 디렉터리 guard, manifest entry 렌더링/쓰기, install report
"""

from .guard import check_empty_directory
from .installer import Installer, install, run_install
from .logging import (
    complete_install_report,
    create_install_report,
    list_install_reports,
    load_install_report,
    record_outcome,
    save_install_report,
)

__all__ = [
    # guard
    "check_empty_directory",
    # installer
    "Installer",
    "install",
    "run_install",
    # logging
    "create_install_report",
    "record_outcome",
    "complete_install_report",
    "save_install_report",
    "load_install_report",
    "list_install_reports",
]
