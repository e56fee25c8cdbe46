"""
Data models for shell script documentation blocks.

이 모듈은 셸 스크립트 주석에서 추출한 문서 블록(doc-block)을 저장하기 위한 데이터 모델을 제공합니다.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum


MAX_EXAMPLES = 10
EXAMPLE_SEPARATOR = "\n\n"


class AlertType(Enum):
    """알림(alert) 블록 타입"""
    NOTE = "NOTE"
    TIP = "TIP"
    IMPORTANT = "IMPORTANT"
    WARNING = "WARNING"
    CAUTION = "CAUTION"
    INFO = "INFO"
    DANGER = "DANGER"


@dataclass
class Argument:
    """함수 인자 정보 (@arg)"""
    name: str
    type: Optional[str] = None
    description: str = ""


@dataclass
class Param:
    """함수 매개변수 정보 (@param)"""
    name: str
    description: str = ""


@dataclass
class ReturnValue:
    """반환값 정보 (@retval)"""
    value: str
    description: str = ""


@dataclass
class ExitCode:
    """종료 코드 정보 (@exitcode)"""
    code: str
    description: str = ""


@dataclass
class Option:
    """명령행 옵션 정보 (@option)"""
    short_opt: Optional[str] = None
    long_opt: Optional[str] = None
    arg_spec: Optional[str] = None
    description: str = ""


@dataclass
class EnvVar:
    """환경 변수 정보 (@env)"""
    name: str
    default_value: Optional[str] = None
    description: str = ""


@dataclass
class GlobalVar:
    """함수가 설정하는 전역 변수 정보 (@set)"""
    name: str
    type: str = ""
    default_value: Optional[str] = None
    description: str = ""
    is_readonly: bool = False


@dataclass
class SeeAlso:
    """참고 항목 (@see)"""
    name: str
    url: Optional[str] = None
    is_internal: bool = True


@dataclass
class Alert:
    """알림 블록 (@note, @warning 등)"""
    type: AlertType
    content: str = ""


@dataclass
class Deprecation:
    """사용 중단(deprecation) 정보"""
    is_deprecated: bool = False
    version: Optional[str] = None
    replacement: Optional[str] = None
    eol: Optional[str] = None


@dataclass
class Section:
    """섹션 그룹 정보 (@section)"""
    name: str
    description: str = ""


@dataclass
class ShellcheckDirective:
    """shellcheck 지시문 정보"""
    code: str
    directive: str
    reason: Optional[str] = None


@dataclass
class DocBlock:
    """
    문서 블록

    인덱스 0의 블록은 항상 파일 수준 메타데이터를 담고 function_name이 None입니다.
    이후 블록은 각각 하나의 함수를 나타냅니다. 블록이 가진 문자열과 리스트는
    모두 해당 블록이 소유하며 다른 블록과 공유되지 않습니다.
    """
    # 식별 정보
    file_name: Optional[str] = None
    function_name: Optional[str] = None

    # 설명
    brief: Optional[str] = None
    description: Optional[str] = None
    function_brief: Optional[str] = None
    function_description: Optional[str] = None
    alias: Optional[str] = None

    # 파일 메타데이터
    version: Optional[str] = None
    author: Optional[str] = None
    author_contact: Optional[str] = None
    project: Optional[str] = None
    license: Optional[str] = None
    copyright: Optional[str] = None
    interpreter: Optional[str] = None

    # 시그니처
    arguments: List[Argument] = field(default_factory=list)
    params: List[Param] = field(default_factory=list)
    no_args: bool = False

    # 반환값
    return_desc: Optional[str] = None
    returns: List[ReturnValue] = field(default_factory=list)
    exitcodes: List[ExitCode] = field(default_factory=list)

    # 입출력
    stdin_doc: Optional[str] = None
    stdout_doc: Optional[str] = None
    stderr_doc: Optional[str] = None

    options: List[Option] = field(default_factory=list)
    env_vars: List[EnvVar] = field(default_factory=list)
    set_vars: List[GlobalVar] = field(default_factory=list)

    # 예제는 빈 줄("\n\n")로 구분된 하나의 문자열로 저장
    example: Optional[str] = None

    # 참조 및 의존성
    see_also: List[SeeAlso] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)
    internal_calls: List[str] = field(default_factory=list)
    requires: List[str] = field(default_factory=list)
    used_by: List[str] = field(default_factory=list)
    calls: List[str] = field(default_factory=list)
    provides: List[str] = field(default_factory=list)

    alerts: List[Alert] = field(default_factory=list)
    deprecation: Deprecation = field(default_factory=Deprecation)

    # 플래그
    is_internal: bool = False
    is_skipped: bool = False

    section: Optional[Section] = None
    shellcheck_directives: List[ShellcheckDirective] = field(default_factory=list)

    @property
    def is_file_level(self) -> bool:
        """파일 수준 블록 여부"""
        return self.function_name is None


@dataclass(frozen=True)
class BlockView:
    """
    렌더러용 읽기 전용 경량 뷰

    원본 DocBlock의 문자열을 복사하지 않고 참조만 합니다.
    """
    function_name: Optional[str] = None
    function_description: Optional[str] = None
    is_internal: bool = False
    is_skipped: bool = False


def create_model(blocks: List[DocBlock]) -> List[BlockView]:
    """
    문서 블록 목록에서 경량 뷰 목록 생성

    Args:
        blocks: 파싱된 문서 블록 목록

    Returns:
        블록과 같은 순서의 BlockView 목록. @skip 블록은 is_skipped만 설정됩니다.
    """
    model = []
    for block in blocks:
        if block.is_skipped:
            model.append(BlockView(is_skipped=True))
            continue
        model.append(BlockView(
            function_name=block.function_name,
            function_description=block.function_description,
            is_internal=block.is_internal
        ))
    return model


def get_examples(block: DocBlock) -> List[str]:
    """예제 문자열을 개별 예제 목록으로 분리 (최대 MAX_EXAMPLES개)"""
    if not block.example:
        return []
    segments = [s for s in block.example.split(EXAMPLE_SEPARATOR) if s]
    return segments[:MAX_EXAMPLES]


def has_multiple_examples(block: DocBlock) -> bool:
    """예제가 여러 개인지 확인"""
    return bool(block.example) and EXAMPLE_SEPARATOR in block.example


def get_file_metadata(blocks: List[DocBlock]) -> Optional[DocBlock]:
    """파일 메타데이터 블록(인덱스 0) 반환"""
    return blocks[0] if blocks else None
