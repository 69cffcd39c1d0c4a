"""
Installer engine: manifest entry별 template 로드 → 렌더링 → 파일 생성.

규칙:
- 대상 디렉터리가 비어 있지 않거나 열 수 없으면 쓰기 전에 중단 (fatal)
- entry는 output path 정렬 순으로 처리
- entry 단위 실패는 non-fatal: report에 기록, stderr 경고, 다음 entry 계속
- 원자적 트랜잭션 아님: 실패 전까지 생성된 파일은 그대로 남음
"""

import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from app_bootstrap.core.guard import check_empty_directory
from app_bootstrap.core.logging import (
    complete_install_report,
    create_install_report,
    record_outcome,
)
from app_bootstrap.domain.errors import (
    BootstrapError,
    EmptyContentError,
    OutputWriteError,
    RenderError,
    SubdirectoryCreateError,
    TemplateReadError,
)
from app_bootstrap.domain.schemas import (
    EntryOutcome,
    EntryStatus,
    InstallOptions,
    InstallReport,
)
from app_bootstrap.templates.definition import InstallerDefinition
from app_bootstrap.templates.substitution import Renderer, get_default_renderer

logger = logging.getLogger(__name__)


class Installer:
    """
    installer 실행기.

    Usage:
        installer = Installer(definition)
        report = installer.install(
            template_dir=template_dir,
            install_dir=install_dir,
            data={"app_name": "Foo::Bar"},
        )
    """

    def __init__(
        self,
        definition: InstallerDefinition,
        renderer: Renderer | None = None,
        echo: bool = True,
    ):
        """
        Args:
            definition: manifest + delimiters
            renderer: 치환 엔진 (기본값 ExpressionRenderer)
            echo: 진행 상황을 stdout, 경고를 stderr로 출력할지 여부
        """
        self.definition = definition
        self.renderer = renderer or get_default_renderer()
        self.echo = echo

    def install(
        self,
        template_dir: Path | str | None = None,
        install_dir: Path | str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> InstallReport:
        """
        template을 렌더링해 install 디렉터리에 파일 구조 생성.

        Args:
            template_dir: template 디렉터리 (기본값: 패키지 share/)
            install_dir: 대상 디렉터리 (기본값: 현재 작업 디렉터리)
            data: data context

        Returns:
            InstallReport (entry별 결과, output path 순)

        Raises:
            DirectoryAccessError: 대상 디렉터리를 열 수 없음
            DirectoryNotEmptyError: 대상 디렉터리가 비어 있지 않음
            TemplateDirError: 기본 template 디렉터리를 찾을 수 없음
        """
        options = InstallOptions(
            template_dir=template_dir,
            install_dir=install_dir,
            data=data,
        )

        install_path = options.resolve_install_dir()
        check_empty_directory(install_path)

        if options.template_dir:
            template_path = Path(options.template_dir)
        else:
            template_path = self.definition.default_template_dir()

        report = create_install_report(self.definition.name, install_path, template_path)

        self._say(f"Running install from {self.definition.name}...")
        self._say("Creating file structure...")

        for template_key, output_path in self.definition.sorted_entries():
            outcome = self._install_entry(
                template_path,
                install_path,
                template_key,
                output_path,
                options.context,
            )
            record_outcome(report, outcome)

            if outcome.ok:
                self._say(f"  {outcome.written_path}")
            else:
                logger.warning(f"Skipped {template_key} -> {output_path}: {outcome.error}")
                self._warn(outcome.error.message)

        complete_install_report(report)
        return report

    # =========================================================================
    # Entry Processing
    # =========================================================================

    def _install_entry(
        self,
        template_path: Path,
        install_path: Path,
        template_key: str,
        output_path: str,
        context: Mapping[str, Any],
    ) -> EntryOutcome:
        """entry 1개 처리. 실패는 예외 대신 SKIPPED outcome으로 반환."""
        try:
            content = self._render_entry(template_path, template_key, output_path, context)
            target = self._write_entry(install_path, template_key, output_path, content)
        except BootstrapError as e:
            return EntryOutcome(
                template_key=template_key,
                output_path=output_path,
                status=EntryStatus.SKIPPED,
                error=e,
            )

        logger.debug(f"Wrote {target} from {template_key}")
        return EntryOutcome(
            template_key=template_key,
            output_path=output_path,
            status=EntryStatus.WRITTEN,
            written_path=target,
        )

    def _render_entry(
        self,
        template_path: Path,
        template_key: str,
        output_path: str,
        context: Mapping[str, Any],
    ) -> str:
        """
        template 읽기 + 렌더링.

        Raises:
            TemplateReadError: 파일 열기/디코딩 실패
            EmptyContentError: 빈 template
            RenderError: 치환 실패
        """
        source = template_path / template_key
        try:
            # newline="": 원본 줄바꿈 보존
            with open(source, encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateReadError(
                f"Can't open input file {source}: {e}",
                template_key=template_key,
                path=str(source),
                error=str(e),
            ) from e

        if not content:
            raise EmptyContentError(
                f"Couldn't get content for file {output_path}",
                template_key=template_key,
                output_path=output_path,
            )

        try:
            return self.renderer.render(content, self.definition.delimiter_pair, context)
        except RenderError as e:
            context = dict(e.context)
            # "message"는 BootstrapError 생성자 인자와 겹침
            if "message" in context:
                context["detail"] = context.pop("message")
            context.update(template_key=template_key, output_path=output_path)
            raise RenderError(
                f"Couldn't get content for file {output_path}: {e.message}",
                **context,
            ) from e
        except Exception as e:
            raise RenderError(
                f"Couldn't get content for file {output_path}: {e}",
                template_key=template_key,
                output_path=output_path,
                error=str(e),
            ) from e

    def _write_entry(
        self,
        install_path: Path,
        template_key: str,
        output_path: str,
        content: str,
    ) -> Path:
        """
        하위 디렉터리 생성 + 파일 쓰기.

        Raises:
            SubdirectoryCreateError: 하위 디렉터리 생성 실패
            OutputWriteError: 대상 경로가 install 디렉터리 밖, 또는 파일 열기 실패
        """
        target = install_path / output_path
        if not target.resolve().is_relative_to(install_path.resolve()):
            raise OutputWriteError(
                f"Couldn't open {output_path} to write: outside of {install_path}",
                template_key=template_key,
                output_path=output_path,
            )

        subdir = target.parent
        if not subdir.exists():
            try:
                subdir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise SubdirectoryCreateError(
                    f"Can't make subdirectory {subdir}: {e}",
                    template_key=template_key,
                    path=str(subdir),
                    error=str(e),
                ) from e

        try:
            with open(target, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise OutputWriteError(
                f"Couldn't open {output_path} to write: {e}",
                template_key=template_key,
                output_path=output_path,
                error=str(e),
            ) from e

        return target

    # =========================================================================
    # Output
    # =========================================================================

    def _say(self, message: str) -> None:
        if self.echo:
            print(message)

    def _warn(self, message: str) -> None:
        if self.echo:
            print(message, file=sys.stderr)


# =============================================================================
# Convenience Functions
# =============================================================================


def install(
    definition: InstallerDefinition,
    template_dir: Path | str | None = None,
    install_dir: Path | str | None = None,
    data: Mapping[str, Any] | None = None,
    renderer: Renderer | None = None,
    echo: bool = True,
) -> InstallReport:
    """
    install 실행 (간편 함수).

    Args:
        definition: manifest + delimiters
        template_dir: template 디렉터리
        install_dir: 대상 디렉터리
        data: data context
        renderer: 치환 엔진
        echo: stdout/stderr 출력 여부

    Returns:
        InstallReport
    """
    installer = Installer(definition, renderer=renderer, echo=echo)
    return installer.install(template_dir=template_dir, install_dir=install_dir, data=data)


def run_install(definition: InstallerDefinition, **options: Any) -> int:
    """
    installer 스크립트용 진입점. exit code 반환.

    fatal 에러는 stderr에 메시지를 남기고 1, 그 외(부분 실패 포함)는 0.
    """
    try:
        install(definition, **options)
    except BootstrapError as e:
        logger.error(f"Install from {definition.name} aborted: {e}")
        print(e.message, file=sys.stderr)
        return 1
    return 0
