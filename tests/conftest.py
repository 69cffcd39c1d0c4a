"""
Pytest fixtures for the installer tests.

구성:
- template 디렉터리 (Foo::Bar 예시 distro의 share/)
- 빈 install 디렉터리
- installer 정의, data context
"""

from pathlib import Path

import pytest

from app_bootstrap.templates.definition import InstallerDefinition

# =============================================================================
# Template Fixtures
# =============================================================================

FOO_CGI_TEMPLATE = """#!/usr/bin/perl
use {{{$app_name}}};
{{{$app_name}}}->run;
"""

LOCAL_PM_TEMPLATE = """package {{{$app_name}}}::Local;

use base qw({{{$app_name}}});

1;
"""

LOCAL_TEST_TEMPLATE = """use Test::More tests => 1;
use_ok('{{{ app_name }}}::Local');
"""


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """
    예시 template 디렉터리.

    포함:
    - foo_cgi.tmpl, local_pm.tmpl, local_test.tmpl
    """
    share = tmp_path / "share"
    share.mkdir()
    (share / "foo_cgi.tmpl").write_text(FOO_CGI_TEMPLATE, encoding="utf-8")
    (share / "local_pm.tmpl").write_text(LOCAL_PM_TEMPLATE, encoding="utf-8")
    (share / "local_test.tmpl").write_text(LOCAL_TEST_TEMPLATE, encoding="utf-8")
    return share


@pytest.fixture
def install_dir(tmp_path: Path) -> Path:
    """빈 install 대상 디렉터리."""
    target = tmp_path / "install"
    target.mkdir()
    return target


# =============================================================================
# Definition Fixtures
# =============================================================================

@pytest.fixture
def foo_files() -> dict[str, str]:
    """module-starter 스타일 manifest."""
    return {
        "foo_cgi.tmpl": "foo.cgi",
        "local_pm.tmpl": "lib/Foo/Local.pm",
        "local_test.tmpl": "t/foo_local.t",
    }


@pytest.fixture
def definition(foo_files: dict[str, str], template_dir: Path) -> InstallerDefinition:
    """template_dir fixture를 기본 template 디렉터리로 쓰는 정의."""
    return InstallerDefinition(
        name="foo_bar.install",
        template_dir_resolver=lambda _identity: template_dir,
    ).files(foo_files)


@pytest.fixture
def sample_data() -> dict:
    """data context."""
    return {"app_name": "Foo::Bar"}
