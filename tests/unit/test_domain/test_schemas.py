"""
test_schemas.py - outcome / report 스키마 테스트
"""

from pathlib import Path

import pytest

from app_bootstrap.domain.errors import TemplateReadError
from app_bootstrap.domain.schemas import (
    DelimiterPair,
    EntryOutcome,
    EntryStatus,
    InstallOptions,
    InstallReport,
)


@pytest.fixture
def written_outcome(tmp_path: Path) -> EntryOutcome:
    return EntryOutcome(
        template_key="foo_cgi.tmpl",
        output_path="foo.cgi",
        status=EntryStatus.WRITTEN,
        written_path=tmp_path / "foo.cgi",
    )


@pytest.fixture
def skipped_outcome() -> EntryOutcome:
    return EntryOutcome(
        template_key="missing.tmpl",
        output_path="missing.txt",
        status=EntryStatus.SKIPPED,
        error=TemplateReadError("Can't open input file missing.tmpl"),
    )


class TestDelimiterPair:

    def test_frozen(self):
        pair = DelimiterPair("<%", "%>")

        with pytest.raises(AttributeError):
            pair.start = "{{"  # type: ignore[misc]

    def test_as_tuple(self):
        assert DelimiterPair("<%", "%>").as_tuple() == ("<%", "%>")


class TestInstallOptions:

    def test_install_dir_defaults_to_cwd(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert InstallOptions().resolve_install_dir().resolve() == tmp_path.resolve()
        # 빈 문자열도 생략으로 취급
        assert InstallOptions(install_dir="").resolve_install_dir().resolve() == tmp_path.resolve()

    def test_explicit_install_dir(self, tmp_path: Path):
        options = InstallOptions(install_dir=str(tmp_path / "out"))

        assert options.resolve_install_dir() == tmp_path / "out"

    def test_context_defaults_to_empty(self):
        assert InstallOptions().context == {}
        assert InstallOptions(data={"a": 1}).context == {"a": 1}

    def test_unknown_option_rejected(self):
        with pytest.raises(TypeError):
            InstallOptions(verbose=True)  # type: ignore[call-arg]


class TestEntryOutcome:

    def test_written(self, written_outcome: EntryOutcome, tmp_path: Path):
        assert written_outcome.ok
        assert written_outcome.code is None
        assert written_outcome.to_dict() == {
            "template_key": "foo_cgi.tmpl",
            "output_path": "foo.cgi",
            "status": "written",
            "written_path": str(tmp_path / "foo.cgi"),
            "error": None,
        }

    def test_skipped(self, skipped_outcome: EntryOutcome):
        assert not skipped_outcome.ok
        assert skipped_outcome.code == "TEMPLATE_READ_FAILED"
        assert skipped_outcome.to_dict()["error"]["code"] == "TEMPLATE_READ_FAILED"
        assert skipped_outcome.to_dict()["written_path"] is None


class TestInstallReport:

    def test_written_and_failures(self, written_outcome, skipped_outcome):
        report = InstallReport(
            run_id="RUN-1",
            installer="foo_bar.install",
            install_dir="/tmp/install",
            template_dir="/tmp/share",
            started_at="2024-01-15T00:00:00+00:00",
            outcomes=[written_outcome, skipped_outcome],
        )

        assert report.written == [written_outcome]
        assert report.failures == [skipped_outcome]
        assert not report.succeeded
        assert [o["status"] for o in report.to_dict()["outcomes"]] == ["written", "skipped"]

    def test_empty_report_succeeds(self):
        report = InstallReport(
            run_id="RUN-1",
            installer="foo_bar.install",
            install_dir="/tmp/install",
            template_dir="/tmp/share",
            started_at="2024-01-15T00:00:00+00:00",
        )

        assert report.succeeded
        assert report.result == "pending"
