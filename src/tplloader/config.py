"""
설정 로드: default.yaml

templates:
  root: templates      # 필수 (from_config 사용 시)
  extension: .html
  debug: false
  autoescape: true
"""

from pathlib import Path
from typing import Any

import yaml

from tplloader.domain.constants import CONFIG_SECTION, DEFAULT_CONFIG_FILENAME, DEFAULT_EXTENSION
from tplloader.domain.errors import ConfigError, ErrorCodes


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    설정 파일 로드.

    Args:
        config_path: YAML 경로 (None이면 프로젝트 루트의 default.yaml)

    Returns:
        설정 dict (파일 없으면 빈 dict)

    Raises:
        ConfigError: INVALID_CONFIG (YAML 파싱 실패, 최상위가 mapping 아님)
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / DEFAULT_CONFIG_FILENAME

    if not config_path.exists():
        return {}

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(
            ErrorCodes.INVALID_CONFIG,
            f"failed to parse {config_path}",
            path=str(config_path),
            error=str(e),
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            ErrorCodes.INVALID_CONFIG,
            f"{config_path} must contain a mapping",
            path=str(config_path),
        )
    return data


def loader_settings(config: dict[str, Any]) -> dict[str, Any]:
    """
    templates 섹션 → TemplateLoader 생성 인자.

    Raises:
        ConfigError: INVALID_CONFIG (root 누락, 타입 불일치)
    """
    section = config.get(CONFIG_SECTION) or {}
    if not isinstance(section, dict):
        raise ConfigError(
            ErrorCodes.INVALID_CONFIG,
            f"'{CONFIG_SECTION}' must be a mapping",
            section=CONFIG_SECTION,
        )

    root = section.get("root")
    if not isinstance(root, str) or not root:
        raise ConfigError(
            ErrorCodes.INVALID_CONFIG,
            f"'{CONFIG_SECTION}.root' is required",
            value=root,
        )

    extension = section.get("extension", DEFAULT_EXTENSION)
    if not isinstance(extension, str):
        raise ConfigError(
            ErrorCodes.INVALID_CONFIG,
            f"'{CONFIG_SECTION}.extension' must be a string",
            value=extension,
        )

    settings: dict[str, Any] = {"root": Path(root), "extension": extension}
    for key, default in (("debug", False), ("autoescape", True)):
        value = section.get(key, default)
        if not isinstance(value, bool):
            raise ConfigError(
                ErrorCodes.INVALID_CONFIG,
                f"'{CONFIG_SECTION}.{key}' must be a boolean",
                value=value,
            )
        settings[key] = value
    return settings
