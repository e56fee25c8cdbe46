"""
Parser state and continuation collector.

이 모듈은 한 줄 되돌리기(pushback)를 지원하는 줄 읽기 객체, 여러 줄에 걸친 주석 내용을
수집하는 함수, 그리고 태그를 현재 문서 블록에 반영하는 파서 상태를 제공합니다.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from .models import DocBlock
from .classifier import is_comment, is_tag_line, is_special_annotation, strip_comment
from .handlers import TagHandler, build_tag_handlers, add_example

logger = logging.getLogger(__name__)

# 연속 줄을 수집한 뒤 처리 함수로 넘기는 태그
CONTINUED_TAGS = frozenset(["description", "stdout"])


class LineReader:
    """
    줄 단위 읽기 객체

    개행이 제거된 줄을 하나씩 돌려주며, 마지막으로 읽은 줄 하나를 되돌릴 수 있습니다.
    """

    def __init__(self, lines: Iterable[str]):
        self._lines: Iterator[str] = iter(lines)
        self._pushed: Optional[str] = None
        self.line_number = 0

    def readline(self) -> Optional[str]:
        """다음 줄 반환. 더 이상 줄이 없으면 None"""
        if self._pushed is not None:
            line, self._pushed = self._pushed, None
        else:
            line = next(self._lines, None)
            if line is None:
                return None
            line = line.rstrip("\r\n")
        self.line_number += 1
        return line

    def push_back(self, line: str) -> None:
        """방금 읽은 줄을 되돌림 (한 줄만 가능)"""
        if self._pushed is not None:
            raise RuntimeError("한 번에 한 줄만 되돌릴 수 있습니다")
        self._pushed = line
        self.line_number -= 1

    def __iter__(self):
        return self

    def __next__(self) -> str:
        line = self.readline()
        if line is None:
            raise StopIteration
        return line


def is_continuation_line(line: str) -> bool:
    """태그도 특수 주석도 아닌 일반 주석 줄인지 확인"""
    return is_comment(line) and not is_tag_line(line) and not is_special_annotation(line)


def collect_continued_content(reader: LineReader, initial: str, keep_indent: bool = False) -> str:
    """
    연속 주석 줄 수집

    일반 주석 줄을 읽는 동안 '#'을 제거한 텍스트를 개행으로 이어 붙이고,
    조건을 만족하지 않는 첫 줄은 되돌려 놓습니다. 받아들인 줄만 소비하므로
    같은 위치에서 다시 호출해도 줄이 중복되거나 누락되지 않습니다.

    Args:
        reader: 태그 줄 다음 위치의 줄 읽기 객체
        initial: 태그 줄의 내용
        keep_indent: True이면 예제 코드처럼 들여쓰기를 보존

    Returns:
        수집된 전체 내용
    """
    parts: List[str] = [initial] if initial else []

    while True:
        line = reader.readline()
        if line is None:
            break
        if not is_continuation_line(line):
            logger.debug(f"연속 줄 종료 (줄 {reader.line_number}): '{line}'")
            reader.push_back(line)
            break
        parts.append(strip_comment(line, keep_indent=keep_indent))

    return "\n".join(parts)


class ParserState:
    """
    파서 상태

    현재 문서 블록, 문서 블록 수집 중 여부(in_docblock), 블록 목록과 블록 수 상한을
    관리합니다.
    """

    def __init__(self, reader: LineReader, blocks: List[DocBlock],
                 handlers: Optional[Dict[str, TagHandler]] = None,
                 max_blocks: int = 1000):
        self.reader = reader
        self.blocks = blocks
        self.current_block = blocks[0]
        self.in_docblock = False
        self.handlers = handlers if handlers is not None else build_tag_handlers()
        self.max_blocks = max_blocks
        self.limit_reached = False

    def new_block(self) -> Optional[DocBlock]:
        """
        새 문서 블록을 만들어 현재 블록으로 지정

        Returns:
            새 블록, 블록 수 상한에 도달했으면 None
        """
        if len(self.blocks) >= self.max_blocks:
            if not self.limit_reached:
                logger.debug(f"문서 블록 상한({self.max_blocks}) 도달, 이후 블록 무시")
            self.limit_reached = True
            return None

        block = DocBlock()
        self.blocks.append(block)
        self.current_block = block
        return block

    def process_tag(self, tag: str, content: str) -> bool:
        """
        태그 하나를 현재 블록에 반영

        Args:
            tag: '@' 없는 태그 이름
            content: 태그 내용

        Returns:
            처리 성공 여부. 알 수 없는 태그는 False
        """
        if tag == "function":
            if self.new_block() is None:
                return False
            self.in_docblock = True
            return self.handlers["function"](self.current_block, content)

        if tag == "example":
            example = collect_continued_content(self.reader, content, keep_indent=True)
            return add_example(self.current_block, example)

        if tag in CONTINUED_TAGS:
            content = collect_continued_content(self.reader, content)

        handler = self.handlers.get(tag)
        if handler is None:
            logger.debug(f"알 수 없는 태그 무시: @{tag} (줄 {self.reader.line_number})")
            return False

        result = handler(self.current_block, content)
        if not result:
            logger.debug(f"@{tag} 처리 실패 (줄 {self.reader.line_number}): '{content}'")
        return result
