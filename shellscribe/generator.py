"""
Markdown documentation generator using Jinja2 templates.

이 모듈은 파싱된 문서 블록 목록을 바탕으로 스크립트별 Markdown 문서를 생성합니다.
생성기는 문서 블록을 읽기만 하며 변경하지 않습니다.
"""

import re
from pathlib import Path
from typing import List, Optional, Tuple, Union
from jinja2 import Environment, FileSystemLoader
import logging

from .config import Config
from .models import (
    DocBlock, AlertType, ShellcheckDirective, Deprecation,
    create_model, get_examples, get_file_metadata
)

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

SHELLCHECK_WIKI_URL = "https://www.shellcheck.net/wiki/"
GITHUB_URL = "https://github.com/"

# GitHub가 지원하지 않는 알림 타입 대체
GITHUB_ALERT_MARKERS = {
    AlertType.INFO: "NOTE",
    AlertType.DANGER: "CAUTION",
}

DEPENDENCY_GROUPS = [
    ("Required Dependencies", "requires"),
    ("Used By", "used_by"),
    ("Calls", "calls"),
    ("Provides", "provides"),
    ("Internal Calls", "internal_calls"),
    ("Other Dependencies", "dependencies"),
]

_AUTHOR_RE = re.compile(r"^(?P<name>.*?)\s*\(@?(?P<user>[^)\s]+)\)\s*$")


class MarkdownGenerator:
    """Markdown 문서 생성기"""

    def __init__(self, config: Optional[Config] = None):
        """
        초기화

        Args:
            config: 출력 설정. None이면 기본 설정
        """
        self.config = config or Config()
        self.template_dir = Path(self.config.template_dir) if self.config.template_dir else TEMPLATE_DIR

        # Jinja2 환경 설정
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True
        )

        # 커스텀 필터 등록
        self.env.filters['anchor'] = self._anchor
        self.env.filters['cell'] = self._escape_cell
        self.env.filters['code_block'] = self._code_block
        self.env.filters['alert_marker'] = self._alert_marker
        self.env.filters['authors'] = self._format_authors
        self.env.filters['toc_entry'] = self._toc_entry
        self.env.filters['see_link'] = self._see_link
        self.env.filters['shellcheck_link'] = self._shellcheck_link
        self.env.filters['unique_shellcheck'] = unique_shellcheck_directives
        self.env.filters['deprecation_notice'] = self._deprecation_notice
        self.env.filters['examples'] = get_examples
        self.env.filters['dependency_groups'] = dependency_groups

    def render(self, blocks: List[DocBlock]) -> str:
        """
        문서 블록 목록을 Markdown 문자열로 렌더링

        Args:
            blocks: 파서가 생성한 문서 블록 목록 (인덱스 0은 파일 메타데이터)

        Returns:
            Markdown 문서
        """
        meta = get_file_metadata(blocks) or DocBlock()
        model = create_model(blocks)
        functions = [
            block for block, view in zip(blocks, model)
            if view.function_name is not None and not view.is_internal and not view.is_skipped
        ]

        template = self.env.get_template("script.md.j2")
        text = template.render(
            config=self.config,
            meta=meta,
            title=self._title(meta),
            about=self._has_about_section(meta),
            functions=functions,
            language=self.config.highlight_language if self.config.highlight_code else "",
            pre_footer=self._placed_lines(meta, "pre-footer"),
            footer=self._footer_lines(meta)
        )

        text = re.sub(r"\n{3,}", "\n\n", text)
        return text.rstrip("\n") + "\n"

    def write(self, blocks: List[DocBlock], output_path: Union[str, Path]) -> bool:
        """
        렌더링 결과를 파일로 저장

        Returns:
            저장 성공 여부
        """
        output_path = Path(output_path)
        content = self.render(blocks)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error(f"문서 저장 실패 {output_path}: {e}")
            return False

        logger.debug(f"문서 저장: {output_path}")
        return True

    def _title(self, meta: DocBlock) -> str:
        title = meta.file_name or "Script"
        if meta.version and self.config.version_placement == "filename":
            title = f"{title} (v{meta.version})"
        return title

    def _has_about_section(self, meta: DocBlock) -> bool:
        config = self.config
        return any([
            meta.brief, meta.description, meta.author, meta.author_contact,
            meta.project, meta.interpreter,
            meta.version and config.version_placement == "about",
            meta.license and config.license_placement == "about",
            meta.copyright and config.copyright_placement == "about",
        ])

    def _placed_lines(self, meta: DocBlock, placement: str) -> List[str]:
        """지정 위치에 표시할 라이선스/저작권 줄"""
        lines = []
        if meta.license and self.config.license_placement == placement:
            lines.append(f"**License:** {meta.license}")
        if meta.copyright and self.config.copyright_placement == placement:
            lines.append(f"**Copyright:** {meta.copyright}")
        return lines

    def _footer_lines(self, meta: DocBlock) -> List[str]:
        lines = self._placed_lines(meta, "footer")
        if meta.version and self.config.version_placement == "footer":
            lines.append(f"**Version:** {meta.version}")
        if self.config.footer_text:
            lines.append(self.config.footer_text)
        return lines

    def _format_authors(self, author: str, linkify: bool = False) -> str:
        """쉼표로 구분된 작성자 목록. 'Name (@user)'는 선택적으로 GitHub 링크로 변환"""
        authors = []
        for name, username in parse_authors(author):
            if linkify and username:
                authors.append(f"{name} [@{username}]({GITHUB_URL}{username})".strip())
            elif username:
                authors.append(f"{name} (@{username})".strip())
            else:
                authors.append(name)
        return ", ".join(authors)

    def _toc_entry(self, block: DocBlock) -> str:
        entry = f"* [{block.function_name}](#{self._anchor(block.function_name)})"
        if block.function_brief:
            entry += f" - {block.function_brief}"
        return entry

    def _see_link(self, see) -> str:
        if see.is_internal or not see.url:
            return f"[{see.name}](#{self._anchor(see.name)})"
        return f"[{see.name}]({see.url})"

    @staticmethod
    def _anchor(name: str) -> str:
        """GitHub 방식 헤더 앵커"""
        slug = re.sub(r"[^\w\- ]", "", (name or "").strip().lower())
        return slug.replace(" ", "-")

    @staticmethod
    def _escape_cell(text: Optional[str]) -> str:
        """마크다운 표 셀 이스케이프"""
        if not text:
            return ""
        return text.replace("|", "\\|").replace("\n", "<br>")

    @staticmethod
    def _code_block(code: str, language: str = "") -> str:
        """코드 블록 포맷팅 필터"""
        return f"```{language}\n{code}\n```"

    @staticmethod
    def _alert_marker(alert_type: AlertType) -> str:
        return GITHUB_ALERT_MARKERS.get(alert_type, alert_type.value)

    @staticmethod
    def _shellcheck_link(code: str) -> str:
        if code.startswith("SC"):
            return f"[{code}]({SHELLCHECK_WIKI_URL}{code})"
        return code

    @staticmethod
    def _deprecation_notice(deprecation: Deprecation) -> str:
        notice = "**Deprecated**"
        if deprecation.version:
            notice += f" since {deprecation.version}"
        notice += "."
        if deprecation.replacement:
            notice += f" Use `{deprecation.replacement}` instead."
        if deprecation.eol:
            notice += f" Scheduled for removal: {deprecation.eol}."
        return notice


def parse_authors(author: Optional[str]) -> List[Tuple[str, Optional[str]]]:
    """
    작성자 문자열 해석

    Args:
        author: 'Jane Doe (@jane), John' 형식의 문자열

    Returns:
        (이름, GitHub 사용자명 또는 None) 목록
    """
    if not author:
        return []

    result = []
    for token in author.split(","):
        token = token.strip()
        if not token:
            continue
        match = _AUTHOR_RE.match(token)
        if match:
            result.append((match.group("name"), match.group("user")))
        else:
            result.append((token, None))
    return result


def unique_shellcheck_directives(directives: List[ShellcheckDirective]) -> List[ShellcheckDirective]:
    """코드 기준으로 중복을 제거한 shellcheck 지시문 (처음 나온 순서 유지)"""
    seen = set()
    unique = []
    for directive in directives:
        if not directive.code or directive.code in seen:
            continue
        seen.add(directive.code)
        unique.append(directive)
    return unique


def dependency_groups(block: DocBlock) -> List[Tuple[str, List[str]]]:
    """비어 있지 않은 의존성 목록을 (제목, 항목) 쌍으로 반환"""
    return [
        (title, getattr(block, field_name))
        for title, field_name in DEPENDENCY_GROUPS
        if getattr(block, field_name)
    ]

