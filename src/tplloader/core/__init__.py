"""
Core layer: 파일 추적 + 변경 감지.

역할:
- File Registry (registry.py)
- 디렉터리 순회 기본 구현 (walker.py)
- full/incremental 분류 (scanner.py)
"""

from .registry import FileRegistry
from .scanner import (
    IncrementalScan,
    classify_entry,
    full_scan,
    incremental_scan,
    logical_name,
)
from .walker import Walker, file_extension, read_source, walk_tree

__all__ = [
    # registry
    "FileRegistry",
    # scanner
    "classify_entry",
    "full_scan",
    "incremental_scan",
    "IncrementalScan",
    "logical_name",
    # walker
    "Walker",
    "walk_tree",
    "read_source",
    "file_extension",
]
