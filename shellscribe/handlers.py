"""
Tag handlers for documentation blocks.

이 모듈은 태그 종류별로 내용을 해석하여 DocBlock을 갱신하는 처리 함수들을 제공합니다.
모든 처리 함수는 (block, content) -> bool 형식이며, 내용이 잘못된 경우 블록을
변경하지 않고 False를 반환합니다.
"""

import re
import logging
from functools import partial
from typing import Callable, Dict, Optional, Tuple

from .models import (
    DocBlock, Argument, Param, ReturnValue, ExitCode, Option, EnvVar,
    GlobalVar, SeeAlso, Alert, Section, ShellcheckDirective
)
from .classifier import is_shellcheck_directive, strip_comment
from .tags import ALERT_TAGS, DEPENDENCY_TAGS, alert_type_for

logger = logging.getLogger(__name__)

TagHandler = Callable[[DocBlock, str], bool]

# 태그 이름 -> DocBlock 필드
METADATA_FIELDS = {
    "file": "file_name",
    "version": "version",
    "author": "author",
    "since": "author_contact",
    "description": "description",
    "brief": "brief",
    "license": "license",
    "copyright": "copyright",
    "project": "project",
    "package": "project",
}

_ARG_SPEC_RE = re.compile(r"<([^>]*)>")
_FROM_RE = re.compile(r"\bfrom\b")
_SHELLCHECK_CODE_RE = re.compile(r"\b(?:disable|enable)=([^\s#]*)")


def _split_first(text: str) -> Tuple[str, str]:
    """첫 공백 기준으로 (첫 토큰, 나머지) 분리"""
    parts = text.strip().split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] == '"':
        return text[1:-1]
    return text


# ---------------------------------------------------------------------------
# 메타데이터
# ---------------------------------------------------------------------------

def process_file_metadata_tag(block: DocBlock, content: str, tag: str) -> bool:
    """
    파일 수준 메타데이터 태그 처리

    Args:
        block: 갱신할 문서 블록
        content: 태그 내용
        tag: 태그 이름 (file, version, author, ...)

    Returns:
        처리 여부. 메타데이터 태그가 아니면 False
    """
    if tag == "skip":
        block.is_skipped = True
        return True

    field_name = METADATA_FIELDS.get(tag)
    if field_name is None:
        return False

    setattr(block, field_name, content)
    return True


def process_brief_tag(block: DocBlock, content: str) -> bool:
    """@brief: 함수 블록이면 함수 요약, 아니면 파일 요약"""
    if block.function_name is None:
        block.brief = content
    else:
        block.function_brief = content
    return True


def process_description_tag(block: DocBlock, content: str) -> bool:
    """@description: 함수 블록이면 함수 설명, 아니면 파일 설명"""
    if block.function_name is None:
        block.description = content
    else:
        block.function_description = content
    return True


def process_function_tag(block: DocBlock, content: str) -> bool:
    """@function: 끝의 '()'를 제거한 함수 이름 설정"""
    name = content.strip()
    if name.endswith("()"):
        name = name[:-2]
    if not name:
        logger.debug("@function 태그에 함수 이름이 없음")
        return False
    block.function_name = name
    return True


def process_alias_tag(block: DocBlock, content: str) -> bool:
    if not content:
        return False
    block.alias = content
    return True


def process_internal_tag(block: DocBlock, content: str) -> bool:
    block.is_internal = True
    return True


def process_noargs_tag(block: DocBlock, content: str) -> bool:
    block.no_args = True
    return True


# ---------------------------------------------------------------------------
# 인자, 매개변수, 반환값
# ---------------------------------------------------------------------------

def process_argument_tag(block: DocBlock, content: str) -> bool:
    """
    @arg 처리

    형식: 'name [type] description'. 첫 토큰이 '-'로 시작하면 옵션으로 처리합니다.
    """
    name, rest = _split_first(content)
    if not name:
        logger.debug(f"@arg 형식 오류: '{content}'")
        return False

    if name.startswith("-"):
        return process_option_tag(block, content)

    arg_type, description = _split_first(rest)
    block.arguments.append(Argument(
        name=name,
        type=arg_type or None,
        description=_unquote(description)
    ))
    return True


def process_param_tag(block: DocBlock, content: str) -> bool:
    """@param 처리: 'name description'"""
    name, description = _split_first(content)
    if not name:
        logger.debug(f"@param 형식 오류: '{content}'")
        return False
    block.params.append(Param(name=name, description=description))
    return True


def process_return_tag(block: DocBlock, content: str) -> bool:
    """@return / @returns: 반환값 설명 덮어쓰기"""
    block.return_desc = content
    return True


def process_retval_tag(block: DocBlock, content: str) -> bool:
    """@retval 처리: 'VALUE description'"""
    value, description = _split_first(content)
    if not value:
        logger.debug(f"@retval 형식 오류: '{content}'")
        return False
    block.returns.append(ReturnValue(value=value, description=description))
    return True


def process_exitcode_tag(block: DocBlock, content: str) -> bool:
    """@exitcode 처리: 'CODE description' (코드는 검증하지 않음)"""
    code, description = _split_first(content)
    if not code:
        logger.debug(f"@exitcode 형식 오류: '{content}'")
        return False
    block.exitcodes.append(ExitCode(code=code, description=description))
    return True


# ---------------------------------------------------------------------------
# 옵션
# ---------------------------------------------------------------------------

def _find_arg_spec(text: str) -> Optional[str]:
    match = _ARG_SPEC_RE.search(text)
    return match.group(1) if match else None


def _option_name(token: str) -> str:
    """'-o=<file>' 또는 '--out<file>' 에서 옵션 이름만 남김"""
    for marker in ("=", "<"):
        index = token.find(marker)
        if index > 0:
            token = token[:index]
    return token


def parse_option_content(content: str) -> Optional[Tuple[str, Optional[str], str, Optional[str]]]:
    """
    옵션 태그 내용 해석

    지원 형식:
        -o | --opt description
        -o description
        -o=<arg> description
        -o <arg> description

    Returns:
        (첫 옵션, 파이프 뒤 옵션, 설명, 인자 명세) 또는 해석 실패 시 None
    """
    content = content.strip()
    if not content:
        return None

    second = None
    if "|" in content:
        first, after = content.split("|", 1)
        first = first.strip()
        second, description = _split_first(after)
        arg_spec = _find_arg_spec(first) or _find_arg_spec(second)
    else:
        first, description = _split_first(content)
        arg_spec = _find_arg_spec(first)

    if arg_spec is None:
        if description.startswith("<"):
            leading, remainder = _split_first(description)
            arg_spec = _find_arg_spec(leading)
            if arg_spec is not None:
                description = remainder
        else:
            arg_spec = _find_arg_spec(description)
    return first, second or None, description, arg_spec


def process_option_tag(block: DocBlock, content: str) -> bool:
    """@option 처리: 옵션 토큰을 짧은(-x) 또는 긴(--xxx) 옵션으로 분류"""
    parsed = parse_option_content(content)
    if parsed is None:
        logger.debug("@option 내용 없음")
        return False

    first, second, description, arg_spec = parsed
    option = Option(arg_spec=arg_spec, description=description)
    for index, token in enumerate((first, second)):
        if not token:
            continue
        name = _option_name(token)
        if name.startswith("--"):
            option.long_opt = option.long_opt or name
        elif name.startswith("-"):
            option.short_opt = option.short_opt or name
        elif index == 0:
            logger.debug(f"옵션은 '-'로 시작해야 함: '{token}'")
            return False
        else:
            # '-o | output' 형식의 파이프 뒤 단어는 긴 옵션 이름
            option.long_opt = option.long_opt or f"--{name}"

    if option.short_opt is None and option.long_opt is None:
        return False

    block.options.append(option)
    return True


# ---------------------------------------------------------------------------
# 변수, 참조
# ---------------------------------------------------------------------------

def process_env_tag(block: DocBlock, content: str) -> bool:
    """@env 처리: 'NAME description'"""
    name, description = _split_first(content)
    if not name:
        logger.debug(f"@env 형식 오류: '{content}'")
        return False
    block.env_vars.append(EnvVar(name=name, description=description))
    return True


def process_set_tag(block: DocBlock, content: str) -> bool:
    """@set 처리: 'name [type] [description]'"""
    name, rest = _split_first(content)
    if not name:
        logger.debug(f"@set 형식 오류: '{content}'")
        return False
    var_type, description = _split_first(rest)
    block.set_vars.append(GlobalVar(name=name, type=var_type, description=description))
    return True


def parse_see_content(content: str) -> Optional[SeeAlso]:
    """
    @see 내용 해석

    '[Name](URL)' 형식이면 외부 참조, 그 외에는 내부 참조로 취급합니다.
    """
    content = content.strip()
    if not content:
        return None

    open_bracket = content.find("[")
    close_bracket = content.find("]")
    open_paren = content.find("(")
    close_paren = content.find(")")
    if -1 < open_bracket < close_bracket < open_paren < close_paren:
        return SeeAlso(
            name=content[open_bracket + 1:close_bracket],
            url=content[open_paren + 1:close_paren],
            is_internal=False
        )
    return SeeAlso(name=content)


def process_see_tag(block: DocBlock, content: str) -> bool:
    see = parse_see_content(content)
    if see is None:
        logger.debug("@see 내용 없음")
        return False
    block.see_also.append(see)
    return True


def process_dependency_tag(block: DocBlock, content: str, field_name: str = "dependencies") -> bool:
    """의존성 계열 태그: 해당 목록에 내용을 그대로 추가"""
    if content is None:
        return False
    getattr(block, field_name).append(content)
    return True


# ---------------------------------------------------------------------------
# 알림, 사용 중단
# ---------------------------------------------------------------------------

def process_alert_tag(block: DocBlock, content: str, tag: str = "note") -> bool:
    block.alerts.append(Alert(type=alert_type_for(tag), content=content))
    return True


def process_deprecated_tag(block: DocBlock, content: str) -> bool:
    """
    @deprecated 처리

    내용에 'from'이 있으면 그 뒤를 버전으로, 없으면 내용 전체를 버전으로 저장합니다.
    """
    block.deprecation.is_deprecated = True
    content = content.strip()
    if not content:
        return True

    match = _FROM_RE.search(content)
    version = content[match.end():].strip() if match else content
    if version:
        block.deprecation.version = version
    return True


def process_replacement_tag(block: DocBlock, content: str) -> bool:
    if not content:
        return False
    block.deprecation.replacement = content
    return True


def process_eol_tag(block: DocBlock, content: str) -> bool:
    if not content:
        return False
    block.deprecation.eol = content
    return True


# ---------------------------------------------------------------------------
# 입출력, 섹션
# ---------------------------------------------------------------------------

def process_stdin_tag(block: DocBlock, content: str) -> bool:
    block.stdin_doc = content
    return True


def process_stdout_tag(block: DocBlock, content: str) -> bool:
    block.stdout_doc = content
    return True


def process_stderr_tag(block: DocBlock, content: str) -> bool:
    block.stderr_doc = content
    return True


def process_section_tag(block: DocBlock, content: str) -> bool:
    """@section 처리: 'name description'. 기존 섹션이 있으면 덮어씀"""
    name, description = _split_first(content)
    if not name:
        logger.debug("@section 이름 없음")
        return False
    if block.section is None:
        block.section = Section(name=name, description=description)
    else:
        block.section.name = name
        block.section.description = description
    return True


# ---------------------------------------------------------------------------
# 예제
# ---------------------------------------------------------------------------

def add_example(block: DocBlock, example: str) -> bool:
    """예제 추가. 기존 예제가 있으면 빈 줄로 구분하여 이어 붙임"""
    if example is None:
        return False
    if block.example is None:
        block.example = example
    else:
        block.example = f"{block.example}\n\n{example}"
    return True


# ---------------------------------------------------------------------------
# shellcheck
# ---------------------------------------------------------------------------

def parse_shellcheck_directive(directive: str) -> ShellcheckDirective:
    """
    shellcheck 지시문 해석

    'disable=CODE' 또는 'enable=CODE'에서 코드를 추출하고, 코드 뒤의 '#' 이후
    텍스트를 사유로 사용합니다. 코드가 없으면 지시문 전체를 코드로 저장합니다.
    """
    match = _SHELLCHECK_CODE_RE.search(directive)
    if match is None:
        return ShellcheckDirective(code=directive, directive=directive)

    reason = None
    hash_index = directive.find("#", match.end())
    if hash_index != -1:
        reason = directive[hash_index + 1:].strip() or None
    return ShellcheckDirective(code=match.group(1), directive=directive, reason=reason)


def process_shellcheck_line(block: DocBlock, line: str) -> bool:
    """shellcheck 지시문 줄을 블록에 추가"""
    if not is_shellcheck_directive(line):
        return False
    directive = strip_comment(line).rstrip()
    block.shellcheck_directives.append(parse_shellcheck_directive(directive))
    return True


# ---------------------------------------------------------------------------
# 태그 테이블
# ---------------------------------------------------------------------------

def build_tag_handlers() -> Dict[str, TagHandler]:
    """
    태그 이름 -> 처리 함수 테이블 생성

    @function, @example 및 연속 줄을 수집하는 태그의 수집 단계는 파서 상태에서
    처리하며, 여기서는 수집된 내용을 블록에 반영하는 함수만 등록합니다.
    """
    handlers: Dict[str, TagHandler] = {}

    for tag in METADATA_FIELDS:
        handlers[tag] = partial(process_file_metadata_tag, tag=tag)
    handlers["skip"] = partial(process_file_metadata_tag, tag="skip")

    handlers.update({
        "brief": process_brief_tag,
        "description": process_description_tag,
        "function": process_function_tag,
        "alias": process_alias_tag,
        "internal": process_internal_tag,
        "noargs": process_noargs_tag,
        "arg": process_argument_tag,
        "argument": process_argument_tag,
        "param": process_param_tag,
        "return": process_return_tag,
        "returns": process_return_tag,
        "retval": process_retval_tag,
        "exitcode": process_exitcode_tag,
        "option": process_option_tag,
        "env": process_env_tag,
        "set": process_set_tag,
        "see": process_see_tag,
        "deprecated": process_deprecated_tag,
        "replacement": process_replacement_tag,
        "eol": process_eol_tag,
        "stdin": process_stdin_tag,
        "stdout": process_stdout_tag,
        "stderr": process_stderr_tag,
        "section": process_section_tag,
        "example": add_example,
    })

    for tag in ALERT_TAGS:
        handlers[tag] = partial(process_alert_tag, tag=tag)

    for tag, field_name in DEPENDENCY_TAGS.items():
        handlers[tag] = partial(process_dependency_tag, field_name=field_name)

    return handlers
