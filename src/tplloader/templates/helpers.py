"""
기본 템플릿 helper.

- set: 컨텍스트 dict에 값 설정        {{ set(page, "title", "Home") }}
- append: 컨텍스트 dict의 리스트에 추가 {{ append(page, "scripts", "app.js") }}
- raw: 이스케이프 없이 출력           {{ raw(html) }}

set/append는 빈 Markup을 돌려주므로 출력에 흔적을 남기지 않는다.
"""

from collections.abc import Callable
from typing import Any

from markupsafe import Markup

# 템플릿 렌더 컨텍스트 권장 타입 (helper들이 이 타입에 의존)
H = dict[str, Any]


def set_helper(data: H, key: str, value: Any) -> Markup:
    data[key] = value
    return Markup("")


def append_helper(data: H, key: str, value: Any) -> Markup:
    """key가 없으면 새 리스트 생성."""
    if data.get(key) is None:
        data[key] = [value]
    else:
        data[key].append(value)
    return Markup("")


def raw_helper(text: str) -> Markup:
    return Markup(text)


def helper_map() -> dict[str, Callable[..., Any]]:
    """기본 helper 묶음."""
    return {
        "set": set_helper,
        "append": append_helper,
        "raw": raw_helper,
    }
