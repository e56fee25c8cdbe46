"""
Shell script documentation parser.

이 모듈은 셸 스크립트를 한 줄씩 읽어 태그 주석을 해석하고 문서 블록 목록을 생성합니다.
"""

from pathlib import Path
from typing import List, TextIO, Union
import logging

from .models import DocBlock
from .classifier import (
    is_comment, is_tag_line, is_function_declaration, extract_function_name,
    is_shellcheck_directive, extract_shebang
)
from .tags import FILE_LEVEL_TAGS, extract_tag
from .handlers import build_tag_handlers, process_file_metadata_tag, process_shellcheck_line
from .state import LineReader, ParserState

logger = logging.getLogger(__name__)

DEFAULT_MAX_BLOCKS = 1000


class ShellScriptParser:
    """셸 스크립트 문서 주석 파서"""

    def __init__(self, max_blocks: int = DEFAULT_MAX_BLOCKS):
        """
        초기화

        Args:
            max_blocks: 파일 하나에서 수집할 최대 문서 블록 수 (파일 블록 포함)
        """
        self.max_blocks = max(1, max_blocks)
        self.handlers = build_tag_handlers()

    def parse_file(self, file_path: Union[str, Path]) -> List[DocBlock]:
        """
        셸 스크립트 파일 파싱

        Args:
            file_path: 스크립트 경로

        Returns:
            문서 블록 목록. 인덱스 0은 파일 메타데이터 블록이며,
            파일을 열거나 읽을 수 없으면 빈 목록
        """
        path = Path(file_path)
        try:
            with open(path, 'r', encoding='utf-8', errors='replace') as f:
                blocks = self._parse_stream(f, path.name)
        except OSError as e:
            logger.error(f"파일을 읽을 수 없음 {path}: {e}")
            return []

        logger.debug(f"{path}: {len(blocks)}개 문서 블록")
        return blocks

    def parse_text(self, text: str, file_name: str = "<string>") -> List[DocBlock]:
        """문자열로 주어진 스크립트 파싱 (테스트 및 표준 입력용)"""
        lines = text.splitlines()
        file_block = DocBlock(file_name=file_name)
        self._scan_metadata(lines, file_block)
        return self._parse_lines(LineReader(lines), file_block)

    def _parse_stream(self, f: TextIO, file_name: str) -> List[DocBlock]:
        file_block = DocBlock(file_name=file_name)
        self._scan_metadata(f, file_block)
        f.seek(0)
        return self._parse_lines(LineReader(f), file_block)

    def _scan_metadata(self, lines, file_block: DocBlock):
        """
        파일 메타데이터 사전 스캔

        파일 처음부터 첫 함수(@function 태그 또는 함수 선언)가 나오기 전까지의
        파일 수준 태그를 파일 블록에 기록합니다. 첫 줄의 셔뱅은 인터프리터로 기록합니다.
        """
        for line_number, raw_line in enumerate(lines, 1):
            line = raw_line.rstrip("\r\n")

            if line_number == 1:
                interpreter = extract_shebang(line)
                if interpreter:
                    file_block.interpreter = interpreter
                    continue

            if is_function_declaration(line):
                break

            match = extract_tag(line)
            if match is None:
                continue
            if match.name == "function":
                break
            if match.name in FILE_LEVEL_TAGS:
                logger.debug(f"파일 메타데이터: @{match.name} = {match.content}")
                process_file_metadata_tag(file_block, match.content, tag=match.name)

    def _parse_lines(self, reader: LineReader, file_block: DocBlock) -> List[DocBlock]:
        """본 파싱: 줄 단위 상태 머신"""
        blocks = [file_block]
        state = ParserState(reader, blocks, self.handlers, self.max_blocks)

        for line in reader:
            if state.limit_reached:
                break

            if reader.line_number == 1 and extract_shebang(line):
                continue

            if is_comment(line):
                if is_tag_line(line):
                    match = extract_tag(line)
                    state.process_tag(match.name, match.content)
                elif is_shellcheck_directive(line):
                    process_shellcheck_line(state.current_block, line)
                continue

            if is_function_declaration(line):
                self._enter_function(state, extract_function_name(line))
                continue

            # 빈 줄은 상태를 바꾸지 않음
            if line.strip():
                state.in_docblock = False

        return blocks

    def _enter_function(self, state: ParserState, name: str):
        """
        함수 선언 처리

        @function 태그로 시작된 블록이 대기 중이면 그 블록을 사용하고,
        아니면 새 블록을 만듭니다. 파일 블록에는 함수 이름을 붙이지 않습니다.
        """
        pending = state.in_docblock and state.current_block is not state.blocks[0]
        if not pending and state.new_block() is None:
            return

        block = state.current_block
        if block.function_name is None:
            block.function_name = name
        elif block.function_name != name:
            logger.warning(
                f"함수 이름 불일치 (줄 {state.reader.line_number}): "
                f"@function {block.function_name}, 선언 {name}"
            )
        logger.debug(f"함수 선언: {block.function_name} (줄 {state.reader.line_number})")
        state.in_docblock = False
