"""
디렉터리 순회 + 소스 읽기 (walk collaborator 기본 구현).

동작:
- root 자신부터 시작해 깊이 우선, 디렉터리 안은 이름순 (결정적 순서)
- lstat 사용: 심볼릭 링크 디렉터리는 따라가지 않음
- 에러는 raise하지 않고 WalkEntry.error로 전달 → 처리 정책은 scanner가 결정
"""

import os
import stat
from collections.abc import Callable, Iterator
from pathlib import Path

from tplloader.domain.constants import SOURCE_ENCODING
from tplloader.domain.schemas import WalkEntry

# 주입 가능한 walk 함수 시그니처
Walker = Callable[[Path], Iterator[WalkEntry]]


def walk_tree(root: Path) -> Iterator[WalkEntry]:
    """
    root 아래 모든 엔트리 순회.

    Args:
        root: 순회 시작 경로

    Yields:
        WalkEntry (root 자신 포함)
    """
    root = Path(root)
    try:
        st = os.lstat(root)
    except OSError as e:
        yield WalkEntry(path=root, is_dir=False, error=e)
        return

    yield from _walk(root, st)


def _walk(path: Path, st: os.stat_result) -> Iterator[WalkEntry]:
    is_dir = stat.S_ISDIR(st.st_mode)
    yield WalkEntry(path=path, is_dir=is_dir, mtime_ns=st.st_mtime_ns)
    if not is_dir:
        return

    try:
        names = sorted(os.listdir(path))
    except OSError as e:
        # 디렉터리 목록 실패: 같은 경로로 한 번 더, 에러와 함께
        yield WalkEntry(path=path, is_dir=True, mtime_ns=st.st_mtime_ns, error=e)
        return

    for name in names:
        child = path / name
        try:
            child_st = os.lstat(child)
        except OSError as e:
            yield WalkEntry(path=child, is_dir=False, error=e)
            continue
        yield from _walk(child, child_st)


def read_source(path: Path) -> str:
    """템플릿 소스 읽기."""
    return Path(path).read_text(encoding=SOURCE_ENCODING)


def file_extension(path: Path) -> str:
    """
    마지막 "." 부터의 확장자.

    "f.tpl.html" → ".html", ".html" → ".html", "Makefile" → ""
    (Path.suffix와 달리 점으로 시작하는 이름도 확장자로 본다)
    """
    name = Path(path).name
    idx = name.rfind(".")
    return name[idx:] if idx >= 0 else ""
