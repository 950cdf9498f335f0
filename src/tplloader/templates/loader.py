"""
템플릿 로더: root 아래 파일 발견 → 파싱 → 개발 중 incremental reload.

상태:
    UNINITIALIZED --load()--> READY --reload()--> READY

규칙:
- load() = registry reset + full walk + 전체 파싱 (락 유지)
- reload() = 순회/읽기는 락 없이, 파싱 + registry 갱신만 락 안에서
- registry 갱신은 파일별로 파싱 성공 후 (실패 파일은 이전 mtime 유지 → 다음 reload에서 재시도)
- reload 중 파싱 실패 → 즉시 raise, 같은 배치에서 먼저 성공한 unit은 유지 (rollback 없음)
- scan 이후 registry가 바뀐 파일은 건너뜀 (동시 reload가 더 새 내용을 반영했을 수 있음)
- 디스크에서 지워진 파일은 registry/template set에서 제거하지 않음
  (렌더 중인 다른 스레드가 참조할 수 있음)
"""

import logging
import threading
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import Template, TemplateNotFound

from tplloader.config import loader_settings
from tplloader.core.registry import FileRegistry
from tplloader.core.scanner import full_scan, incremental_scan
from tplloader.core.walker import Walker, read_source, walk_tree
from tplloader.domain.constants import DEFAULT_EXTENSION
from tplloader.domain.errors import ErrorCodes, PreconditionError, TraversalError
from tplloader.domain.schemas import (
    Classification,
    FileState,
    LoaderState,
    ReloadResult,
    ScanMode,
    TrackedFile,
)
from tplloader.templates.engine import TemplateSet
from tplloader.templates.helpers import helper_map

logger = logging.getLogger(__name__)


class TemplateLoader:
    """
    root 하나에 대한 템플릿 로더.

    인스턴스마다 registry/template set이 독립 (전역 상태 없음).

    Usage:
        loader = TemplateLoader(Path("templates"))
        loader.load()
        html = loader.render("a/index.html", {"page": {}})
        ...
        loader.reload()  # 바뀐 파일만 다시 파싱
    """

    def __init__(
        self,
        root: Path,
        extension: str = DEFAULT_EXTENSION,
        *,
        debug: bool = False,
        autoescape: bool = True,
        walker: Walker = walk_tree,
    ) -> None:
        """
        Args:
            root: 템플릿 root 디렉터리
            extension: 허용 확장자 (정확히 일치)
            debug: 소스 캐시 + INFO 로그
            autoescape: html/htm/xml 이름에 autoescape 적용
            walker: 디렉터리 순회 함수 (테스트에서 주입)
        """
        self.root = Path(root)
        self.extension = extension
        self._debug = debug
        self._walker = walker

        self._lock = threading.RLock()
        self._registry = FileRegistry()
        self._templates = TemplateSet(autoescape=autoescape)
        self._state = LoaderState.UNINITIALIZED

        self.install_helpers()

    @classmethod
    def from_config(cls, config: dict[str, Any], **overrides: Any) -> "TemplateLoader":
        """load_config() 결과의 templates 섹션으로 생성."""
        settings = loader_settings(config)
        settings.update(overrides)
        root = settings.pop("root")
        return cls(root, **settings)

    # =========================================================================
    # Settings
    # =========================================================================

    def set_extension(self, extension: str) -> None:
        """다음 scan부터 적용."""
        self.extension = extension

    def enable_debug(self) -> None:
        self._debug = True

    def disable_debug(self) -> None:
        self._debug = False

    @property
    def debug(self) -> bool:
        return self._debug

    @property
    def state(self) -> LoaderState:
        return self._state

    @property
    def registry(self) -> FileRegistry:
        return self._registry

    @property
    def template_set(self) -> TemplateSet:
        return self._templates

    # =========================================================================
    # Helpers
    # =========================================================================

    def add_helpers(self, helpers: Mapping[str, Callable[..., Any]]) -> "TemplateLoader":
        """
        helper 함수 추가.

        첫 파싱 전에 호출해야 한다. 이후 호출은 경고만 남긴다
        (동작은 보장하지 않음).
        """
        with self._lock:
            if len(self._templates):
                logger.warning(
                    f"Helpers {sorted(helpers)} added after templates were parsed; "
                    f"call add_helpers() before load()"
                )
            self._templates.add_helpers(helpers)
        return self

    def install_helpers(self) -> None:
        """기본 helper (set, append, raw) 설치."""
        self.add_helpers(helper_map())

    # =========================================================================
    # Full Load
    # =========================================================================

    def walk(self) -> list[str]:
        """
        registry reset 후 root 전체 순회.

        Returns:
            등록된 logical name 목록

        Raises:
            ConflictError: TEMPLATE_CONFLICT
            TraversalError: TRAVERSAL_FAILED, RELATIVE_PATH_FAILED
        """
        with self._lock:
            return full_scan(self.root, self.extension, self._registry, self._walker)

    def parse_files(self) -> None:
        """
        registry의 모든 파일 읽기 + 파싱.

        Raises:
            PreconditionError: FILES_EMPTY (walk() 전 호출, 또는 매칭 파일 없음)
            TraversalError: SOURCE_READ_FAILED
            ParseError: TEMPLATE_SYNTAX_ERROR
        """
        with self._lock:
            if len(self._registry) == 0:
                raise PreconditionError(
                    ErrorCodes.FILES_EMPTY,
                    "files empty, you may call walk() before parse_files()",
                    root=str(self.root),
                    extension=self.extension,
                )

            for tracked in self._registry:
                source = self._read(tracked.name, tracked.path)
                if self._debug:
                    tracked.content = source
                self._templates.parse(tracked.name, source, filename=str(tracked.path))

    def load(self) -> None:
        """walk() + parse_files(). 성공 시 READY."""
        with self._lock:
            names = self.walk()
            self._log_names("Loading templates", names)
            self.parse_files()
            self._state = LoaderState.READY

    # =========================================================================
    # Incremental Reload
    # =========================================================================

    def reload(self) -> ReloadResult:
        """
        새 파일/수정된 파일만 다시 읽고 파싱.

        - 순회 중 개별 엔트리 에러는 건너뜀
        - mtime_ns가 같은 파일은 읽지 않음

        Returns:
            ReloadResult

        Raises:
            TraversalError: SOURCE_READ_FAILED (변경 파일 읽기 실패)
            ParseError: TEMPLATE_SYNTAX_ERROR (먼저 성공한 unit은 유지,
                실패 파일과 그 뒤 파일은 registry에 반영하지 않음)
        """
        scan = incremental_scan(self.root, self.extension, self._registry, self._walker)
        result = ReloadResult(unchanged=scan.unchanged, skipped_errors=scan.skipped_errors)
        if not scan.changed:
            return result

        pending: list[tuple[Classification, TrackedFile]] = []
        for item in scan.changed:
            source = self._read(item.name, item.entry.path)
            pending.append((
                item,
                TrackedFile(
                    name=item.name,
                    path=item.entry.path,
                    mtime_ns=item.entry.mtime_ns,
                    content=source,
                ),
            ))

        with self._lock:
            batch: list[tuple[Classification, TrackedFile]] = []
            for item, tracked in pending:
                current = self._registry.lookup(tracked.name)
                current_mtime_ns = current.mtime_ns if current is not None else None
                if current_mtime_ns != item.previous_mtime_ns:
                    # scan 이후 다른 reload가 먼저 반영함
                    continue
                batch.append((item, tracked))

            self._log_names("Updating templates", [tracked.name for _, tracked in batch])

            for item, tracked in batch:
                # 파싱 성공 후에만 registry 갱신 → 실패 파일과 그 뒤 파일은 다음 reload에서 재시도
                self._templates.parse(tracked.name, tracked.content, filename=str(tracked.path))
                self._registry.register(tracked, ScanMode.INCREMENTAL)
                if item.state is FileState.NEW:
                    result.added.append(tracked.name)
                else:
                    result.updated.append(tracked.name)

        return result

    # =========================================================================
    # Read Access
    # =========================================================================

    def lookup_template(self, name: str) -> Template | None:
        return self._templates.lookup(name)

    def names(self) -> list[str]:
        return self._templates.names()

    def render(self, name: str, data: Mapping[str, Any] | None = None, /, **kwargs: Any) -> str:
        """
        이름으로 렌더.

        Raises:
            jinja2.TemplateNotFound: 파싱된 unit 없음
        """
        template = self._templates.lookup(name)
        if template is None:
            raise TemplateNotFound(name)
        return template.render(data or {}, **kwargs)

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _read(self, name: str, path: Path) -> str:
        try:
            return read_source(path)
        except (OSError, UnicodeDecodeError) as e:
            raise TraversalError(
                ErrorCodes.SOURCE_READ_FAILED,
                f"failed to read template '{name}' from '{path}'",
                name=name,
                path=str(path),
            ) from e

    def _log_names(self, title: str, names: list[str]) -> None:
        if not names:
            return
        level = logging.INFO if self._debug else logging.DEBUG
        logger.log(level, f"{title} ({len(names)}): {', '.join(names)}")


def new(root: Path, **kwargs: Any) -> TemplateLoader:
    """독립 로더 생성 (기본 helper 설치됨)."""
    return TemplateLoader(root, **kwargs)
