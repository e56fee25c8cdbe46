"""
Line classifier for shell script sources.

이 모듈은 셸 스크립트의 한 줄을 판별하는 상태 없는 함수들을 제공합니다.
"""

import re
from typing import Optional


SPECIAL_ANNOTATION_KEYWORDS = ("shellcheck", "disable", "TODO", "FIXME", "XXX", "HACK")

_TAG_LINE_RE = re.compile(r"^\s*#\s*@[^\s:]+")
_FUNCTION_RE = re.compile(r"^\s*(?:function\s+)?([A-Za-z0-9_]+)\s*\(\s*\)\s*\{")
_SHELLCHECK_RE = re.compile(r"^\s*#\s*shellcheck", re.IGNORECASE)


def is_comment(line: str) -> bool:
    """첫 공백 아닌 문자가 '#'인지 확인"""
    return line.lstrip().startswith("#")


def is_tag_line(line: str) -> bool:
    """'# @tag content' 또는 '# @tag: content' 형식의 태그 줄인지 확인"""
    return _TAG_LINE_RE.match(line) is not None


def is_function_declaration(line: str) -> bool:
    """
    함수 선언 줄인지 확인

    'function name() {' 와 'name() {' 형식을 인식합니다.
    셸 문법 전체를 해석하지 않는 휴리스틱 판별입니다.
    """
    return _FUNCTION_RE.match(line) is not None


def extract_function_name(line: str) -> Optional[str]:
    """함수 선언 줄에서 함수 이름 추출"""
    match = _FUNCTION_RE.match(line)
    return match.group(1) if match else None


def is_special_annotation(line: str) -> bool:
    """연속 줄 수집을 중단시키는 특수 주석(shellcheck, TODO 등)인지 확인"""
    return any(keyword in line for keyword in SPECIAL_ANNOTATION_KEYWORDS)


def is_shellcheck_directive(line: str) -> bool:
    """'#' 뒤가 shellcheck로 시작하는지 확인 (대소문자 무시)"""
    return _SHELLCHECK_RE.match(line) is not None


def is_shebang(line: str) -> bool:
    return line.startswith("#!")


def extract_shebang(line: str) -> Optional[str]:
    """셔뱅 줄에서 인터프리터 경로 추출"""
    if not is_shebang(line):
        return None
    interpreter = line[2:].strip(" \t\r\n")
    return interpreter or None


def strip_comment(line: str, keep_indent: bool = False) -> str:
    """
    주석 기호 제거

    Args:
        line: 주석 줄
        keep_indent: True이면 '#' 뒤의 공백을 한 칸만 제거하여 들여쓰기를 보존

    Returns:
        '#' 이후의 텍스트
    """
    text = line.lstrip()
    if text.startswith("#"):
        text = text[1:]
    if keep_indent:
        return text[1:] if text.startswith(" ") else text
    return text.lstrip()
