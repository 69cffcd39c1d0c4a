"""
Template substitution: delimiter 사이의 표현식을 data context로 평가.

규칙:
- delimiter 밖의 텍스트는 그대로 통과 (다른 delimiter로 감싼 텍스트 포함)
- 표현식은 Jinja2 expression으로 평가, 결과는 문자열로 변환 (None → "")
- 정의되지 않은 이름 참조 → RenderError (컨테이너 안에 있어도)
- Perl 스타일 sigil 허용: {{{$app_name}}} == {{{ app_name }}} (문자열 리터럴 안의 $는 제외)
"""

import re
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Protocol

from jinja2 import Environment, StrictUndefined, Undefined

from app_bootstrap.domain.constants import DEFAULT_DELIMITERS
from app_bootstrap.domain.errors import RenderError
from app_bootstrap.domain.schemas import DelimiterPair

# group 1: 따옴표 문자열 리터럴 (그대로 유지), 그 외: 식별자 앞의 $ sigil
SIGIL_PATTERN = re.compile(
    r"""('(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")|\$(?=[A-Za-z_])""",
    re.DOTALL,
)


def strip_sigils(expression: str) -> str:
    """식별자 앞 $ 제거. 문자열 리터럴 안의 $는 보존."""
    return SIGIL_PATTERN.sub(lambda m: m.group(1) or "", expression)


class ReprStrictUndefined(StrictUndefined):
    """
    repr()에서도 UndefinedError를 내는 StrictUndefined.

    list/dict의 str()은 원소마다 repr()을 호출하므로 {{{ [missing] }}} 도 실패해야 함.
    """

    __slots__ = ()
    __repr__ = Undefined._fail_with_undefined_error


# =============================================================================
# Renderer Protocol (for dependency injection)
# =============================================================================


class Renderer(Protocol):
    """template 치환 엔진 인터페이스."""

    def render(
        self,
        source: str,
        delimiters: DelimiterPair,
        context: Mapping[str, Any],
    ) -> str:
        """
        source의 delimiter 표현식을 context로 치환.

        Raises:
            RenderError: 표현식 평가 실패
        """
        ...


@lru_cache(maxsize=32)
def delimited_pattern(delimiters: DelimiterPair) -> re.Pattern[str]:
    """delimiter 쌍 → 표현식 추출 정규식 (non-greedy, 여러 줄 허용)."""
    return re.compile(
        re.escape(delimiters.start) + r"(.*?)" + re.escape(delimiters.end),
        re.DOTALL,
    )


# =============================================================================
# Default Renderer
# =============================================================================


class ExpressionRenderer:
    """
    Jinja2 expression 기반 기본 renderer.

    Jinja2 block 문법({% %})은 사용하지 않음. delimiter 사이 텍스트만
    compile_expression으로 평가하므로 template 본문의 {% 나 {{ 는 안전.
    """

    def __init__(self, environment: Environment | None = None):
        """
        Args:
            environment: 사용자 정의 Jinja2 Environment (filters 추가 등)
        """
        self.env = environment or Environment(
            undefined=ReprStrictUndefined,
            autoescape=False,
        )

    def render(
        self,
        source: str,
        delimiters: DelimiterPair,
        context: Mapping[str, Any],
    ) -> str:
        pattern = delimited_pattern(delimiters)

        def replacer(match: re.Match[str]) -> str:
            return self.evaluate(match.group(1), context)

        return pattern.sub(replacer, source)

    def evaluate(self, expression: str, context: Mapping[str, Any]) -> str:
        """
        표현식 1개 평가.

        Args:
            expression: delimiter 사이의 원문 (공백, sigil 포함 가능)
            context: data context

        Returns:
            평가 결과 문자열

        Raises:
            RenderError: 빈 표현식, 문법 오류, 미정의 이름, 평가 중 예외
        """
        normalized = strip_sigils(expression.strip())
        if not normalized:
            raise RenderError(
                "Empty expression between delimiters",
                expression=expression,
            )

        try:
            compiled = self.env.compile_expression(normalized, undefined_to_none=False)
            value = compiled(dict(context))
            # 미정의 값은 str()/repr() 시점에 UndefinedError 발생
            return "" if value is None else str(value)
        except Exception as e:
            raise RenderError(
                f"Couldn't evaluate '{expression.strip()}': {e}",
                expression=expression,
                error=str(e),
            ) from e


_default_renderer: ExpressionRenderer | None = None


def get_default_renderer() -> ExpressionRenderer:
    """기본 renderer (lazy, 프로세스 단위 1개)."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = ExpressionRenderer()
    return _default_renderer


# =============================================================================
# Convenience Functions
# =============================================================================


def render_template(
    source: str,
    delimiters: DelimiterPair | None = None,
    context: Mapping[str, Any] | None = None,
    renderer: Renderer | None = None,
) -> str:
    """
    template 문자열 렌더링 (간편 함수).

    Args:
        source: template 원문
        delimiters: 기본값 {{{ }}}
        context: data context
        renderer: 기본값 ExpressionRenderer

    Returns:
        렌더링된 문자열
    """
    if delimiters is None:
        delimiters = DelimiterPair(*DEFAULT_DELIMITERS)
    renderer = renderer or get_default_renderer()
    return renderer.render(source, delimiters, context or {})
