"""
Template Set: 이름 붙은 Jinja2 템플릿 모음.

규칙:
- 키 = logical name (registry와 동일)
- 같은 이름 재파싱 → 그 unit만 교체 (environment 재생성 없음 → helper 유지)
- 교체는 dict 대입 한 번 → 읽는 쪽은 이전/새 unit 중 하나만 본다
- {% include %} / {% extends %} 는 이 set 안에서만 찾는다
- get_template(name, globals=...) → 저장된 code로 새 unit 생성 (등록된 unit은 변경 없음)
"""

from collections import ChainMap
from collections.abc import Callable, Mapping
from types import CodeType
from typing import Any

from jinja2 import (
    BaseLoader,
    Environment,
    Template,
    TemplateNotFound,
    TemplateSyntaxError,
    select_autoescape,
)

from tplloader.domain.constants import AUTOESCAPE_EXTENSIONS
from tplloader.domain.errors import ErrorCodes, ParseError


class _TemplateSetLoader(BaseLoader):
    """
    Environment.get_template() → 이미 파싱된 unit 반환.

    추가 globals가 있으면 같은 code에서 그 globals를 가진 unit을 새로 만든다.
    """

    def __init__(self, template_set: "TemplateSet") -> None:
        self._template_set = template_set

    def get_source(self, environment: Environment, template: str) -> Any:
        # load()를 직접 구현하므로 소스 경로는 쓰지 않는다
        raise TemplateNotFound(template)

    def load(
        self,
        environment: Environment,
        name: str,
        globals: Mapping[str, Any] | None = None,
    ) -> Template:
        compiled = self._template_set.compiled(name)
        if compiled is None:
            raise TemplateNotFound(name)
        code, unit = compiled

        # Environment는 make_globals() 결과 (ChainMap(추가분, environment.globals))를 넘긴다
        extra = globals.maps[0] if isinstance(globals, ChainMap) else globals
        if not extra:
            return unit
        return environment.template_class.from_code(
            environment, code, environment.make_globals(extra)
        )


class TemplateSet:
    """파싱된 템플릿 unit 모음."""

    def __init__(self, autoescape: bool = True) -> None:
        # name → (code, unit): 한 번의 대입으로 교체
        self._units: dict[str, tuple[CodeType, Template]] = {}
        self.environment = Environment(
            loader=_TemplateSetLoader(self),
            autoescape=select_autoescape(
                enabled_extensions=AUTOESCAPE_EXTENSIONS,
                default_for_string=True,
                default=False,
            ) if autoescape else False,
            # 캐시는 이 set이 소유: environment 캐시가 있으면 reload 후 이전 unit이 남는다
            cache_size=0,
        )

    def parse(self, name: str, source: str, filename: str | None = None) -> Template:
        """
        소스를 파싱해 name으로 등록 (기존 unit 교체).

        Args:
            name: logical name
            source: 템플릿 소스
            filename: 에러 메시지용 실제 경로

        Returns:
            등록된 Template

        Raises:
            ParseError: TEMPLATE_SYNTAX_ERROR
        """
        try:
            code = self.environment.compile(source, name=name, filename=filename)
        except TemplateSyntaxError as e:
            raise ParseError(
                ErrorCodes.TEMPLATE_SYNTAX_ERROR,
                f"template '{name}': {e.message}",
                name=name,
                lineno=e.lineno,
                filename=filename,
            ) from e

        unit = self.environment.template_class.from_code(
            self.environment,
            code,
            self.environment.make_globals(None),
        )
        self._units[name] = (code, unit)
        return unit

    def lookup(self, name: str) -> Template | None:
        compiled = self._units.get(name)
        return compiled[1] if compiled is not None else None

    def compiled(self, name: str) -> tuple[CodeType, Template] | None:
        return self._units.get(name)

    def add_helpers(self, helpers: Mapping[str, Callable[..., Any]]) -> None:
        # unit globals는 environment.globals 위의 ChainMap
        self.environment.globals.update(helpers)

    def names(self) -> list[str]:
        return sorted(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def __contains__(self, name: object) -> bool:
        return name in self._units
