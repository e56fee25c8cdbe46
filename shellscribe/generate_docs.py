"""
Main script for shell script documentation generation.

이 스크립트는 전체 문서 생성 파이프라인을 실행합니다:
1. 셸 스크립트 탐색
2. 문서 주석 파싱
3. Markdown 문서 생성
"""

import os
import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import Config, load_config
from .generator import MarkdownGenerator
from .parser import ShellScriptParser
from .scanner import ScriptScanner

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

STATUS_OK = "OK"
STATUS_SKIPPED = "SKIPPED"
STATUS_FAILED = "FAILED"


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shellscribe",
        description="셸 스크립트 문서 주석으로 Markdown 문서 생성"
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="셸 스크립트 파일 또는 디렉토리"
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=__version__
    )
    parser.add_argument(
        "-c", "--config-file",
        default=None,
        help="설정 파일 경로 (기본값: ./.scribeconf)"
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="출력 디렉토리 (설정 파일의 doc_path보다 우선)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="디버그 로그 출력"
    )
    return parser


def process_script(script: Path, scanner: ScriptScanner, parser: ShellScriptParser,
                   generator: MarkdownGenerator) -> str:
    """
    스크립트 하나를 파싱하여 문서 생성

    Returns:
        STATUS_OK, STATUS_SKIPPED 또는 STATUS_FAILED
    """
    display = str(scanner.relative_path(script))

    if scanner.is_elf_binary(script):
        logger.info(f"{display:<40} [{STATUS_SKIPPED}] (ELF binary)")
        return STATUS_SKIPPED

    blocks = parser.parse_file(script)
    if not blocks:
        logger.error(f"{display:<40} [{STATUS_FAILED}] (error parsing documentation)")
        return STATUS_FAILED

    if blocks[0].is_skipped:
        logger.info(f"{display:<40} [{STATUS_SKIPPED}] (marked with @skip)")
        return STATUS_SKIPPED

    output_path = scanner.output_path_for(script)
    if not generator.write(blocks, output_path):
        logger.error(f"{display:<40} [{STATUS_FAILED}] (error writing {output_path})")
        return STATUS_FAILED

    logger.info(f"{display:<40} [{STATUS_OK}]")
    return STATUS_OK


def run(input_path: Path, config: Config) -> int:
    """
    파일 또는 디렉토리 처리

    Returns:
        종료 코드. 실패한 파일이 하나라도 있으면 1
    """
    if not input_path.exists():
        logger.error(f"입력 경로를 찾을 수 없음: {input_path}")
        return 1

    if config.format != "markdown":
        logger.warning(f"지원하지 않는 출력 형식 '{config.format}', markdown으로 생성")

    scanner = ScriptScanner(
        input_path, config.doc_path,
        traverse_symlinks=config.traverse_symlinks,
        max_files=config.max_files
    )
    scripts = scanner.find_scripts()
    if not scripts:
        logger.error(f"셸 스크립트를 찾을 수 없음: {input_path}")
        return 1

    parser = ShellScriptParser(max_blocks=config.max_blocks)
    generator = MarkdownGenerator(config)

    counts = {STATUS_OK: 0, STATUS_SKIPPED: 0, STATUS_FAILED: 0}
    for script in scripts:
        counts[process_script(script, scanner, parser, generator)] += 1

    if input_path.is_dir():
        logger.info(
            f"Summary: {counts[STATUS_OK]} OK, {counts[STATUS_SKIPPED]} SKIPPED, "
            f"{counts[STATUS_FAILED]} FAILED (total: {len(scripts)})"
        )

    return 1 if counts[STATUS_FAILED] else 0


def main(argv: Optional[List[str]] = None) -> int:
    """메인 함수"""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    debug = args.debug or os.environ.get("SHELLSCRIBE_DEBUG") == "1"
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT
    )

    config = load_config(args.config_file)
    if args.output:
        config.doc_path = args.output
    if args.debug:
        config.log_level = "debug"
    logging.getLogger().setLevel(config.logging_level)

    if args.input is None:
        arg_parser.print_usage()
        return 0

    logger.debug(f"설정: {config}")
    return run(Path(args.input), config)


if __name__ == "__main__":
    sys.exit(main())
