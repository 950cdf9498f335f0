"""
Domain Constants: 로더 전역 상수.
"""

# =============================================================================
# Template Files
# =============================================================================

# set_extension() 호출 전 기본 확장자
DEFAULT_EXTENSION = ".html"

# logical name 구분자 (OS와 무관하게 항상 "/")
LOGICAL_NAME_SEPARATOR = "/"

# 소스 파일 인코딩
SOURCE_ENCODING = "utf-8"

# =============================================================================
# Autoescape
# =============================================================================
# select_autoescape()에 넘기는 확장자 (점 없이)

AUTOESCAPE_EXTENSIONS = ("html", "htm", "xml")

# =============================================================================
# Configuration
# =============================================================================

DEFAULT_CONFIG_FILENAME = "default.yaml"
CONFIG_SECTION = "templates"
