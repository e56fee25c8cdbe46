"""
Shell script scanner for documentation generation.

이 모듈은 입력 디렉토리에서 셸 스크립트를 찾고, 출력 문서 경로를 계산합니다.
"""

import os
from pathlib import Path
from typing import List, Union
import logging

logger = logging.getLogger(__name__)

SCRIPT_EXTENSIONS = (".sh", ".bash", ".zsh")
ELF_MAGIC = b"\x7fELF"


class ScriptScanner:
    """셸 스크립트 스캐너"""

    def __init__(self, source_root: Union[str, Path], doc_path: Union[str, Path],
                 traverse_symlinks: bool = True, max_files: int = 1000):
        """
        초기화

        Args:
            source_root: 입력 파일 또는 디렉토리
            doc_path: 출력 루트 디렉토리
            traverse_symlinks: 심볼릭 링크를 따라갈지 여부
            max_files: 최대 스캔 파일 수
        """
        self.source_root = Path(source_root)
        self.doc_path = Path(doc_path)
        self.traverse_symlinks = traverse_symlinks
        self.max_files = max_files

    @property
    def base_dir(self) -> Path:
        """상대 경로 계산 기준 디렉토리"""
        if self.source_root.is_dir():
            return self.source_root
        return self.source_root.parent

    def find_scripts(self) -> List[Path]:
        """
        셸 스크립트 목록 반환

        입력이 파일이면 그 파일 하나를, 디렉토리이면 하위 디렉토리까지 재귀적으로
        찾은 .sh, .bash, .zsh 파일을 경로 순으로 반환합니다.

        Returns:
            스크립트 경로 목록 (최대 max_files개)
        """
        if self.source_root.is_file():
            return [self.source_root]

        scripts = []
        for dirpath, dirnames, filenames in os.walk(self.source_root, followlinks=self.traverse_symlinks):
            dirnames.sort()
            for filename in sorted(filenames):
                path = Path(dirpath) / filename
                if not filename.endswith(SCRIPT_EXTENSIONS):
                    continue
                if path.is_symlink() and not self.traverse_symlinks:
                    continue
                if not path.is_file():
                    continue
                scripts.append(path)
                if len(scripts) >= self.max_files:
                    logger.warning(f"최대 파일 수({self.max_files}) 도달, 나머지 파일 무시")
                    return scripts

        logger.info(f"{len(scripts)}개의 셸 스크립트 발견: {self.source_root}")
        return scripts

    def relative_path(self, script: Path) -> Path:
        """기준 디렉토리에 대한 상대 경로 (기준 밖이면 파일 이름)"""
        try:
            return Path(script).relative_to(self.base_dir)
        except ValueError:
            return Path(Path(script).name)

    def output_path_for(self, script: Path) -> Path:
        """doc_path/<상대 디렉토리>/<파일 이름>.md"""
        relative = self.relative_path(script)
        return self.doc_path / relative.parent / f"{relative.stem}.md"

    @staticmethod
    def is_elf_binary(path: Union[str, Path]) -> bool:
        """ELF 실행 파일인지 확인 (읽을 수 없으면 False)"""
        try:
            with open(path, 'rb') as f:
                return f.read(4) == ELF_MAGIC
        except OSError:
            return False

