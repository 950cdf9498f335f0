"""
Pytest fixtures for the template loader tests.

구성:
- sample_root: .html / .tpl 가 섞인 템플릿 트리
- scenario_root: a.html / b.html / c/d.html 최소 트리
- write_template: 내용 + mtime_ns 를 정확히 지정해 파일 작성
"""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from tplloader import TemplateLoader

# 테스트용 기준 시각 (ns). os.utime(ns=...)로 정확히 지정 → 비교 결과 결정적
BASE_MTIME_NS = 1_700_000_000_000_000_000

ACCEPTED_HTML = [
    "header.html",
    "footer.html",
    "a/index.html",
    "a/about.html",
    "a/nested_a/index.html",
    "b/index.html",
]

ACCEPTED_TPL = [
    "body.tpl",
    "a/nested_a/list.tpl",
]

WriteTemplate = Callable[..., Path]

# =============================================================================
# File Fixtures
# =============================================================================


def _write(root: Path, name: str, content: str, mtime_ns: int = BASE_MTIME_NS) -> Path:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    os.utime(path, ns=(mtime_ns, mtime_ns))
    return path


@pytest.fixture
def write_template() -> WriteTemplate:
    """(root, name, content, mtime_ns) → 파일 경로."""
    return _write


@pytest.fixture
def sample_root(tmp_path: Path) -> Path:
    """
    샘플 템플릿 트리.

    포함:
    - .html 6개 (중첩 디렉터리 포함)
    - .tpl 2개
    - 확장자 없는 파일, 이름이 .html로 끝나는 디렉터리
    """
    root = tmp_path / "sample"
    for name in ACCEPTED_HTML:
        _write(root, name, f"<p>{name}</p>")
    for name in ACCEPTED_TPL:
        _write(root, name, f"{name}")
    _write(root, "README", "not a template")
    (root / "assets.html").mkdir()
    return root


@pytest.fixture
def scenario_root(tmp_path: Path) -> Path:
    """a.html="A", b.html="B", c/d.html="D"."""
    root = tmp_path / "scenario"
    _write(root, "a.html", "A")
    _write(root, "b.html", "B")
    _write(root, "c/d.html", "D")
    return root


@pytest.fixture
def loader(scenario_root: Path) -> TemplateLoader:
    """scenario_root 에 대한 로더 (load 전)."""
    return TemplateLoader(scenario_root)


@pytest.fixture
def test_config(sample_root: Path) -> dict:
    """테스트용 설정."""
    return {
        "templates": {
            "root": str(sample_root),
            "extension": ".html",
            "debug": False,
            "autoescape": True,
        },
    }
