"""
File Registry: logical name → TrackedFile.

규칙:
- full walk 컨텍스트: 이미 있는 이름 등록 → ConflictError (덮어쓰기 금지)
- incremental 컨텍스트: 이미 있는 이름 등록 → 갱신
- 자동 삭제 없음: 디스크에서 지워진 파일도 reset() 전까지 남아 있음
- 락은 소유자(TemplateLoader)가 잡는다. registry 자체는 락 없음
"""

from collections.abc import Iterator

from tplloader.domain.errors import ConflictError, ErrorCodes
from tplloader.domain.schemas import ScanMode, TrackedFile


class FileRegistry:
    """마지막으로 관찰한 파일 시스템 상태."""

    def __init__(self) -> None:
        self._files: dict[str, TrackedFile] = {}

    def register(self, tracked: TrackedFile, mode: ScanMode = ScanMode.FULL) -> None:
        """
        파일 등록.

        Args:
            tracked: 등록할 파일 정보
            mode: FULL이면 중복 이름 에러, INCREMENTAL이면 갱신

        Raises:
            ConflictError: TEMPLATE_CONFLICT (FULL 모드에서 이름 중복)
        """
        if mode is ScanMode.FULL and tracked.name in self._files:
            raise ConflictError(
                ErrorCodes.TEMPLATE_CONFLICT,
                f"template '{tracked.name}' existed",
                name=tracked.name,
                path=str(tracked.path),
                existing_path=str(self._files[tracked.name].path),
            )
        self._files[tracked.name] = tracked

    def lookup(self, name: str) -> TrackedFile | None:
        return self._files.get(name)

    def reset(self) -> None:
        """fresh full walk 전에 전체 비우기."""
        self._files = {}

    def names(self) -> list[str]:
        return sorted(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, name: object) -> bool:
        return name in self._files

    def __iter__(self) -> Iterator[TrackedFile]:
        return iter(list(self._files.values()))
