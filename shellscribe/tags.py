"""
Tag extractor for documentation comments.

이 모듈은 태그 줄에서 (태그 이름, 내용) 쌍을 추출하고 태그 분류 목록을 제공합니다.
"""

import re
from typing import NamedTuple, Optional

from .models import AlertType


FILE_LEVEL_TAGS = frozenset([
    "file", "version", "author", "license", "copyright", "since",
    "description", "brief", "project", "package", "skip",
])

CONTEXT_TAGS = frozenset(["brief", "description"])

ALERT_TAGS = {
    "note": AlertType.NOTE,
    "tip": AlertType.TIP,
    "hint": AlertType.TIP,
    "important": AlertType.IMPORTANT,
    "warning": AlertType.WARNING,
    "caution": AlertType.CAUTION,
    "info": AlertType.INFO,
    "danger": AlertType.DANGER,
    "alert": AlertType.NOTE,
    "error": AlertType.NOTE,
}

DEPENDENCY_TAGS = {
    "dependency": "dependencies",
    "requires": "requires",
    "used-by": "used_by",
    "calls": "calls",
    "provides": "provides",
    "internal_call": "internal_calls",
    "internal-call": "internal_calls",
}

_TAG_RE = re.compile(r"^\s*#\s*@([^\s:]+):?\s*(.*)$")


class TagMatch(NamedTuple):
    """추출된 태그"""
    name: str
    content: str


def extract_tag(line: str) -> Optional[TagMatch]:
    """
    태그 줄에서 이름과 내용 추출

    이름은 '@' 뒤부터 첫 공백 또는 ':' 까지이고, 내용은 이름 뒤의 ':' 하나와
    이어지는 공백을 건너뛴 나머지입니다.

    Args:
        line: 줄 끝 개행이 제거된 입력 줄

    Returns:
        TagMatch, 태그 줄이 아니면 None
    """
    match = _TAG_RE.match(line)
    if match is None:
        return None
    return TagMatch(match.group(1), match.group(2))


def alert_type_for(tag: str) -> AlertType:
    """태그 이름을 알림 타입으로 정규화 (알 수 없는 태그는 NOTE)"""
    return ALERT_TAGS.get(tag.lower(), AlertType.NOTE)
