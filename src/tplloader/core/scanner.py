"""
Scan/Reload Engine: 순회 결과를 registry와 비교해 분류.

full walk (ScanMode.FULL):
- registry를 비우고 다시 채움
- 같은 logical name 두 번 → ConflictError, walk 전체 중단 (부분 성공 없음)
- 순회 에러 → TraversalError, walk 전체 중단

incremental scan (ScanMode.INCREMENTAL):
- registry는 읽기만 함 (등록은 호출자가 락 안에서)
- 순회 에러 → 해당 엔트리만 건너뜀
- mtime_ns 정확히 같으면 unchanged, 그 외는 changed
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from tplloader.core.registry import FileRegistry
from tplloader.core.walker import Walker, file_extension, walk_tree
from tplloader.domain.constants import LOGICAL_NAME_SEPARATOR
from tplloader.domain.errors import ErrorCodes, TraversalError
from tplloader.domain.schemas import (
    Classification,
    FileState,
    ScanMode,
    TrackedFile,
    WalkEntry,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Classification
# =============================================================================


def logical_name(root: Path, path: Path) -> str:
    """
    root 기준 상대 경로 → logical name.

    Raises:
        TraversalError: RELATIVE_PATH_FAILED (root 밖의 경로)
    """
    try:
        relative = Path(path).relative_to(root)
    except ValueError as e:
        raise TraversalError(
            ErrorCodes.RELATIVE_PATH_FAILED,
            f"failed to get relative path for '{path}'",
            path=str(path),
            root=str(root),
        ) from e
    return LOGICAL_NAME_SEPARATOR.join(relative.parts)


def accepts(entry: WalkEntry, extension: str) -> bool:
    """디렉터리가 아니고 확장자가 정확히 일치하는 파일만."""
    return not entry.is_dir and file_extension(entry.path) == extension


def classify_entry(
    entry: WalkEntry,
    mode: ScanMode,
    root: Path,
    extension: str,
    registry: FileRegistry,
) -> Classification:
    """
    엔트리 하나 분류 (full/incremental 공통).

    Args:
        entry: walk collaborator가 넘긴 엔트리
        mode: 분류 모드
        root: 템플릿 root
        extension: 허용 확장자 (".html" 등)
        registry: 비교 기준

    Returns:
        Classification

    Raises:
        TraversalError: FULL 모드에서 entry.error가 있을 때
    """
    if entry.error is not None:
        if mode is ScanMode.FULL:
            raise TraversalError(
                ErrorCodes.TRAVERSAL_FAILED,
                f"failed to walk '{entry.path}': {entry.error}",
                path=str(entry.path),
            ) from entry.error
        return Classification(FileState.SKIPPED, entry)

    if not accepts(entry, extension):
        return Classification(FileState.SKIPPED, entry)

    name = logical_name(root, entry.path)
    existing = registry.lookup(name)

    if existing is None:
        return Classification(FileState.NEW, entry, name)
    if mode is ScanMode.FULL:
        return Classification(FileState.CONFLICT, entry, name, existing.mtime_ns)
    if existing.mtime_ns == entry.mtime_ns:
        return Classification(FileState.UNCHANGED, entry, name, existing.mtime_ns)
    return Classification(FileState.UPDATED, entry, name, existing.mtime_ns)


# =============================================================================
# Scans
# =============================================================================


def full_scan(
    root: Path,
    extension: str,
    registry: FileRegistry,
    walker: Walker = walk_tree,
) -> list[str]:
    """
    registry를 비우고 root 전체를 다시 등록.

    호출자가 락을 잡고 있어야 한다.

    Returns:
        등록된 logical name 목록 (순회 순서)

    Raises:
        ConflictError: TEMPLATE_CONFLICT
        TraversalError: TRAVERSAL_FAILED, RELATIVE_PATH_FAILED
    """
    registry.reset()
    registered: list[str] = []

    for entry in walker(root):
        result = classify_entry(entry, ScanMode.FULL, root, extension, registry)
        if result.state not in (FileState.NEW, FileState.CONFLICT):
            continue

        # CONFLICT → register()가 ConflictError (existing_path 포함)
        registry.register(
            TrackedFile(name=result.name, path=entry.path, mtime_ns=entry.mtime_ns),
            ScanMode.FULL,
        )
        registered.append(result.name)

    return registered


@dataclass
class IncrementalScan:
    """incremental_scan() 결과: 변경 파일 + 집계."""
    changed: list[Classification] = field(default_factory=list)
    unchanged: int = 0
    skipped_errors: int = 0


def incremental_scan(
    root: Path,
    extension: str,
    registry: FileRegistry,
    walker: Walker = walk_tree,
) -> IncrementalScan:
    """
    registry와 비교해 new/updated 엔트리만 수집.

    registry는 수정하지 않는다. 락 없이 호출 가능.
    """
    scan = IncrementalScan()

    for entry in walker(root):
        try:
            result = classify_entry(entry, ScanMode.INCREMENTAL, root, extension, registry)
        except TraversalError as e:
            # root 밖 경로 등: reload는 best-effort
            logger.warning(f"Skipping entry during reload: {e}")
            scan.skipped_errors += 1
            continue

        if entry.error is not None:
            logger.debug(f"Skipping unreadable entry {entry.path}: {entry.error}")
            scan.skipped_errors += 1
        elif result.state is FileState.UNCHANGED:
            scan.unchanged += 1
        elif result.changed:
            scan.changed.append(result)

    return scan
