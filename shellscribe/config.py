"""
Configuration for the documentation generator.

이 모듈은 렌더링 및 일괄 처리 설정과 '.scribeconf' 설정 파일 로더를 제공합니다.
설정은 파싱 결과에 영향을 주지 않고 출력 방식만 결정합니다.
"""

import os
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union

from . import __version__

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".scribeconf"

DEFAULT_FOOTER_TEXT = (
    "This documentation was auto generated with "
    f"[Shellscribe](https://github.com/tomcdj71/shellscribe) (v{__version__})"
)

LOG_LEVELS = {
    "minimal": logging.WARNING,
    "normal": logging.INFO,
    "verbose": logging.INFO,
    "debug": logging.DEBUG,
}


@dataclass
class Config:
    """생성기 설정"""
    doc_path: str = "./docs"
    format: str = "markdown"
    footer_text: str = DEFAULT_FOOTER_TEXT

    # about / filename / footer / none
    version_placement: str = "about"
    # about / pre-footer / footer / none
    license_placement: str = "pre-footer"
    copyright_placement: str = "pre-footer"
    linkify_usernames: bool = False

    log_level: str = "normal"

    # sequential / tabs
    example_display: str = "sequential"
    highlight_code: bool = True
    highlight_language: str = "bash"

    show_toc: bool = True
    show_alerts: bool = True
    show_shellcheck: bool = True

    # table / sequential / list
    arguments_display: str = "sequential"
    shellcheck_display: str = "sequential"

    traverse_symlinks: bool = True
    template_dir: Optional[str] = None
    max_files: int = 1000
    max_blocks: int = 1000

    @property
    def logging_level(self) -> int:
        """log_level 값과 SHELLSCRIBE_DEBUG 환경 변수에 따른 logging 레벨"""
        if os.environ.get("SHELLSCRIBE_DEBUG") == "1":
            return logging.DEBUG
        return LOG_LEVELS.get(self.log_level, logging.INFO)

    def set_value(self, key: str, value: str) -> bool:
        """
        문자열 값을 필드 타입에 맞게 변환하여 설정

        Args:
            key: 설정 키
            value: 설정 파일에서 읽은 문자열

        Returns:
            알려진 키이면 True
        """
        if key not in {f.name for f in fields(self)}:
            return False

        current = getattr(self, key)
        if isinstance(current, bool):
            setattr(self, key, value == "true")
        elif isinstance(current, int):
            try:
                setattr(self, key, int(value))
            except ValueError:
                logger.warning(f"정수가 아닌 설정 값 무시: {key} = {value}")
        elif key == "template_dir":
            self.template_dir = value or None
        else:
            setattr(self, key, value)
        return True


def _strip_inline_comment(value: str) -> str:
    index = value.find("#")
    if index != -1:
        value = value[:index]
    return value.strip()


def load_config(config_file: Optional[Union[str, Path]] = None, config: Optional[Config] = None) -> Config:
    """
    설정 파일 로드

    'key = value' 형식의 줄을 읽습니다. '#'으로 시작하는 줄과 값 뒤의 '#' 주석은 무시됩니다.

    Args:
        config_file: 설정 파일 경로. None이면 현재 디렉토리의 .scribeconf (없으면 기본값)
        config: 값을 덮어쓸 기존 설정. None이면 기본 설정에서 시작

    Returns:
        Config
    """
    if config is None:
        config = Config()

    if config_file is None:
        path = Path(DEFAULT_CONFIG_FILE)
        if not path.is_file():
            return config
    else:
        path = Path(config_file)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"설정 파일을 읽을 수 없음 {path}: {e} (기본값 사용)")
        return config

    for line in lines:
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if not config.set_value(key, _strip_inline_comment(value)):
            logger.warning(f"알 수 없는 설정 키: {key}")

    logger.debug(f"설정 로드 완료: {path}")
    return config
