"""
Installer 정의: manifest (template key → output path) + delimiters.

규칙:
- InstallerDefinition은 불변 값. files()/delimiters()는 새 정의를 반환
- files()는 manifest 전체 교체 (병합 아님)
- output path 유효성은 등록 시점이 아니라 쓰기 시점에 검사
- 기본 template 디렉터리: 설치된 패키지(또는 모듈 위치)의 share/ (resolver 주입 가능)
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from importlib import util
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from app_bootstrap.domain.constants import DEFAULT_DELIMITERS, SHARE_DIRNAME
from app_bootstrap.domain.errors import DefinitionError, ErrorCodes, TemplateDirError
from app_bootstrap.domain.schemas import DelimiterPair

TemplateDirResolver = Callable[[str], Path]


# =============================================================================
# Default Template Directory
# =============================================================================


def package_share_dir(identity: str) -> Path:
    """
    installer identity (import 가능한 패키지 또는 모듈명) → share/ 디렉터리.

    패키지면 패키지 디렉터리, 모듈이면 모듈 파일이 있는 디렉터리 기준.

    Args:
        identity: 예) "foo_bar.install"

    Returns:
        <패키지 또는 모듈 디렉터리>/share

    Raises:
        TemplateDirError: TEMPLATE_DIR_UNRESOLVED
    """
    try:
        spec = util.find_spec(identity)
    except (ImportError, ValueError) as e:
        raise TemplateDirError(
            f"Can't locate package resources for '{identity}': {e}",
            identity=identity,
        ) from e

    if spec is None:
        raise TemplateDirError(
            f"Can't locate package resources for '{identity}': no such module",
            identity=identity,
        )

    if spec.submodule_search_locations:
        root = Path(next(iter(spec.submodule_search_locations)))
    elif spec.has_location and spec.origin:
        root = Path(spec.origin).parent
    else:
        # built-in / frozen 모듈
        raise TemplateDirError(
            f"Can't locate package resources for '{identity}': module has no location",
            identity=identity,
        )
    return root / SHARE_DIRNAME


# =============================================================================
# Validation
# =============================================================================


def validate_delimiters(delimiters: DelimiterPair) -> None:
    """
    delimiter 쌍 검증.

    규칙:
    - start/end 모두 문자열
    - 빈 문자열 금지

    Raises:
        DefinitionError: INVALID_DELIMITERS
    """
    for label, marker in (("start", delimiters.start), ("end", delimiters.end)):
        if not isinstance(marker, str) or not marker:
            raise DefinitionError(
                f"{label} delimiter must be a non-empty string",
                code=ErrorCodes.INVALID_DELIMITERS,
                marker=marker,
            )


# =============================================================================
# Installer Definition
# =============================================================================


@dataclass(frozen=True)
class InstallerDefinition:
    """
    installer 정의.

    Usage:
        definition = (
            InstallerDefinition("foo_bar.install")
            .files({
                "foo_cgi.tmpl": "foo.cgi",
                "local_pm.tmpl": "lib/Foo/Local.pm",
            })
            .delimiters("<%", "%>")
        )
    """
    name: str
    manifest: Mapping[str, str] = field(default_factory=dict)
    delimiter_pair: DelimiterPair = DelimiterPair(*DEFAULT_DELIMITERS)
    template_dir_resolver: TemplateDirResolver = package_share_dir

    def __post_init__(self) -> None:
        # 호출자 dict와 분리된 읽기 전용 사본
        object.__setattr__(self, "manifest", MappingProxyType(dict(self.manifest)))
        validate_delimiters(self.delimiter_pair)

    def files(self, mapping: Mapping[str, str]) -> "InstallerDefinition":
        """manifest 전체 교체."""
        return replace(self, manifest=mapping)

    def delimiters(self, start: str, end: str) -> "InstallerDefinition":
        """delimiter 쌍 교체."""
        return replace(self, delimiter_pair=DelimiterPair(start, end))

    def default_template_dir(self) -> Path:
        return Path(self.template_dir_resolver(self.name))

    def sorted_entries(self) -> list[tuple[str, str]]:
        """
        (template_key, output_path) 목록, output path 순.

        같은 output path면 template key 순 (결정론적).
        """
        return sorted(self.manifest.items(), key=lambda item: (item[1], item[0]))


# =============================================================================
# YAML Loading
# =============================================================================


def load_definition(path: Path) -> InstallerDefinition:
    """
    YAML 파일에서 installer 정의 로드.

    형식:
        name: foo_bar.install          # 생략 시 파일명 stem
        delimiters: ["<%", "%>"]       # 생략 시 {{{ }}}
        template_dir: share            # 생략 시 패키지 share/, YAML 기준 상대경로
        files:
          foo_cgi.tmpl: foo.cgi

    Raises:
        DefinitionError: INVALID_DEFINITION, INVALID_DELIMITERS
    """
    try:
        with open(path, encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise DefinitionError(
            f"Can't load installer definition {path}: {e}",
            path=str(path),
        ) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DefinitionError(
            "Installer definition must be a mapping",
            path=str(path),
        )

    files = data.get("files") or {}
    if not isinstance(files, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in files.items()
    ):
        raise DefinitionError(
            "'files' must map template keys to output paths",
            path=str(path),
        )

    definition = InstallerDefinition(name=str(data.get("name") or Path(path).stem))
    definition = definition.files(files)

    delimiters = data.get("delimiters")
    if delimiters is not None:
        if not isinstance(delimiters, list | tuple) or len(delimiters) != 2:
            raise DefinitionError(
                "'delimiters' must be a [start, end] pair",
                code=ErrorCodes.INVALID_DELIMITERS,
                path=str(path),
            )
        definition = definition.delimiters(*delimiters)

    template_dir = data.get("template_dir")
    if template_dir:
        base = (Path(path).parent / str(template_dir)).resolve()
        definition = replace(definition, template_dir_resolver=lambda _identity: base)

    return definition
