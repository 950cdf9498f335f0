"""
Data schemas for the template loader.

규칙:
- logical name = root 기준 상대 경로 ("/" 구분자), registry와 template set 공통 키
- 수정 시각은 정수 나노초 (st_mtime_ns) → 비교는 정확히 일치할 때만 unchanged
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

# =============================================================================
# Scan
# =============================================================================

class ScanMode(str, Enum):
    """
    분류 모드.

    같은 분류 함수에 모드만 바꿔 넘겨서 두 경로가 어긋나지 않게 한다.
    """
    FULL = "full"                # load/walk: 중복 이름 = 충돌, 순회 에러 = 중단
    INCREMENTAL = "incremental"  # reload: 기존 이름 = 갱신 후보, 순회 에러 = 건너뜀


class FileState(str, Enum):
    """엔트리 분류 결과."""
    SKIPPED = "skipped"      # 디렉터리, 확장자 불일치, (reload 시) 순회 에러
    NEW = "new"              # registry에 없는 이름
    UNCHANGED = "unchanged"  # 이름 존재 + mtime 동일
    UPDATED = "updated"      # 이름 존재 + mtime 다름
    CONFLICT = "conflict"    # full walk 중 이름 중복


class LoaderState(str, Enum):
    """로더 상태."""
    UNINITIALIZED = "uninitialized"
    READY = "ready"


# =============================================================================
# Core Schemas
# =============================================================================

@dataclass(frozen=True)
class WalkEntry:
    """디렉터리 순회 엔트리 (walk collaborator 출력)."""
    path: Path
    is_dir: bool
    mtime_ns: int = 0
    error: OSError | None = None


@dataclass
class TrackedFile:
    """registry에 기록되는 파일 정보."""
    name: str
    path: Path
    mtime_ns: int
    content: str | None = None  # debug 모드 또는 reload 시 캐시


@dataclass(frozen=True)
class Classification:
    """classify_entry() 결과."""
    state: FileState
    entry: WalkEntry
    name: str | None = None
    previous_mtime_ns: int | None = None  # scan 시점의 registry 값 (없으면 None)

    @property
    def changed(self) -> bool:
        return self.state in (FileState.NEW, FileState.UPDATED)


@dataclass
class ReloadResult:
    """reload() 결과 요약."""
    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    unchanged: int = 0
    skipped_errors: int = 0

    @property
    def changed(self) -> list[str]:
        return [*self.added, *self.updated]

    def to_dict(self) -> dict[str, object]:
        return {
            "added": list(self.added),
            "updated": list(self.updated),
            "unchanged": self.unchanged,
            "skipped_errors": self.skipped_errors,
        }
