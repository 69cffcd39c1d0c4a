"""
app_bootstrap: 배포판에 포함된 template으로 애플리케이션 골격을 설치.

Usage:
    from app_bootstrap import InstallerDefinition, install

    definition = InstallerDefinition("foo_bar.install").files({
        "foo_cgi.tmpl": "foo.cgi",
        "local_pm.tmpl": "lib/Foo/Local.pm",
        "local_test.tmpl": "t/foo_local.t",
    })
    install(definition, install_dir="myapp", data={"app_name": "Foo::Bar"})
"""

from .core import Installer, check_empty_directory, install, run_install
from .domain.errors import (
    BootstrapError,
    DefinitionError,
    DirectoryAccessError,
    DirectoryNotEmptyError,
    EmptyContentError,
    ErrorCodes,
    OutputWriteError,
    RenderError,
    SubdirectoryCreateError,
    TemplateDirError,
    TemplateReadError,
)
from .domain.schemas import DelimiterPair, EntryOutcome, EntryStatus, InstallReport
from .templates import (
    ExpressionRenderer,
    InstallerDefinition,
    Renderer,
    load_definition,
    render_template,
)

__version__ = "0.1.0"

__all__ = [
    "Installer",
    "InstallerDefinition",
    "install",
    "run_install",
    "check_empty_directory",
    "load_definition",
    "render_template",
    "Renderer",
    "ExpressionRenderer",
    "DelimiterPair",
    "EntryOutcome",
    "EntryStatus",
    "InstallReport",
    "ErrorCodes",
    "BootstrapError",
    "DefinitionError",
    "DirectoryNotEmptyError",
    "DirectoryAccessError",
    "TemplateDirError",
    "TemplateReadError",
    "EmptyContentError",
    "RenderError",
    "SubdirectoryCreateError",
    "OutputWriteError",
]
