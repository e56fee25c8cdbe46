"""
Tests for Markdown documentation generator.

이 모듈은 문서 생성기의 기능을 검증하는 테스트를 포함합니다.
"""

import copy
import pytest
import tempfile
import shutil
import sys
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from shellscribe.config import Config
from shellscribe.models import (
    DocBlock, Argument, ExitCode, Alert, AlertType, SeeAlso, ShellcheckDirective
)
from shellscribe.generator import MarkdownGenerator, parse_authors, unique_shellcheck_directives


class TestMarkdownGenerator:
    """MarkdownGenerator 테스트"""

    @pytest.fixture
    def temp_output_dir(self):
        """임시 출력 디렉토리 생성"""
        temp_dir = tempfile.mkdtemp()
        yield Path(temp_dir)
        shutil.rmtree(temp_dir)

    @pytest.fixture
    def sample_blocks(self):
        """샘플 문서 블록 생성"""
        file_block = DocBlock(
            file_name="t.sh",
            version="1.0",
            author="Jane Doe (@jane), Bob",
            license="MIT",
            description="Script description",
            interpreter="/bin/bash"
        )

        foo = DocBlock(
            function_name="foo",
            function_brief="Does foo",
            function_description="Longer text about foo",
            example="foo 1\n\nfoo 2"
        )
        foo.arguments.append(Argument(name="$1", type="string", description="The value"))
        foo.exitcodes.append(ExitCode(code="0", description="Success"))
        foo.alerts.append(Alert(type=AlertType.WARNING, content="Careful"))
        foo.see_also.append(SeeAlso(name="other"))
        foo.see_also.append(SeeAlso(name="Manual", url="https://example.com/manual", is_internal=False))
        foo.shellcheck_directives.append(
            ShellcheckDirective(code="SC2034", directive="shellcheck disable=SC2034", reason="unused on purpose"))
        foo.shellcheck_directives.append(
            ShellcheckDirective(code="SC2034", directive="shellcheck disable=SC2034"))
        foo.requires.append("curl")

        internal = DocBlock(function_name="_helper", is_internal=True)
        return [file_block, foo, internal]

    def test_render_structure(self, sample_blocks):
        """제목, About, 목차, 함수 섹션 생성"""
        text = MarkdownGenerator().render(sample_blocks)

        assert text.startswith("# t.sh\n")
        assert "## About" in text
        assert "**Interpreter:** /bin/bash" in text
        assert "**Version:** 1.0" in text
        assert "**Description:** Script description" in text
        assert "**Authors:** Jane Doe (@jane), Bob" in text
        assert "## Index" in text
        assert "* [foo](#foo) - Does foo" in text
        assert "### foo" in text
        assert "Longer text about foo" in text

    def test_about_with_brief_only(self):
        """@brief나 @since만 있어도 About 섹션 생성"""
        blocks = [DocBlock(file_name="t.sh", brief="B"), DocBlock(function_name="foo")]
        text = MarkdownGenerator().render(blocks)
        assert "## About" in text
        assert "**Brief:** B" in text

        blocks = [DocBlock(file_name="t.sh", author_contact="2024")]
        assert "**Since:** 2024" in MarkdownGenerator().render(blocks)

    def test_internal_functions_hidden(self, sample_blocks):
        """내부 함수는 문서에 포함하지 않음"""
        text = MarkdownGenerator().render(sample_blocks)
        assert "_helper" not in text

    def test_function_sections(self, sample_blocks):
        text = MarkdownGenerator().render(sample_blocks)
        assert "#### Examples" in text
        assert "```bash\nfoo 1\n```" in text
        assert "* `$1` (string): The value" in text
        assert "* **0**: Success" in text
        assert "> [!WARNING]\n> Careful\n" in text
        assert "* [other](#other)" in text
        assert "* [Manual](https://example.com/manual)" in text
        assert "* `curl`" in text

    def test_shellcheck_deduplicated(self, sample_blocks):
        """shellcheck 코드는 한 번만 표시"""
        text = MarkdownGenerator().render(sample_blocks)
        link = "[SC2034](https://www.shellcheck.net/wiki/SC2034)"
        assert text.count(link) == 1
        assert f"{link} (unused on purpose)" in text

    def test_shellcheck_table(self, sample_blocks):
        text = MarkdownGenerator(Config(shellcheck_display="table")).render(sample_blocks)
        assert "| Code | Reason |" in text
        assert "| [SC2034](https://www.shellcheck.net/wiki/SC2034) | unused on purpose |" in text

    def test_arguments_table(self, sample_blocks):
        text = MarkdownGenerator(Config(arguments_display="table")).render(sample_blocks)
        assert "| Argument | Type | Description |" in text
        assert "| `$1` | string | The value |" in text

    def test_example_tabs(self, sample_blocks):
        """tabs 모드는 예제마다 접을 수 있는 블록 생성"""
        text = MarkdownGenerator(Config(example_display="tabs")).render(sample_blocks)
        assert "<details open>" in text
        assert "<summary>Example 2</summary>" in text

    def test_highlight_disabled(self, sample_blocks):
        text = MarkdownGenerator(Config(highlight_code=False)).render(sample_blocks)
        assert "```\nfoo 1\n```" in text

    def test_alerts_hidden(self, sample_blocks):
        text = MarkdownGenerator(Config(show_alerts=False)).render(sample_blocks)
        assert "[!WARNING]" not in text

    def test_toc_hidden(self, sample_blocks):
        text = MarkdownGenerator(Config(show_toc=False)).render(sample_blocks)
        assert "## Index" not in text

    def test_version_in_title(self, sample_blocks):
        text = MarkdownGenerator(Config(version_placement="filename")).render(sample_blocks)
        assert text.startswith("# t.sh (v1.0)\n")
        assert "**Version:**" not in text

    def test_license_placement(self, sample_blocks):
        """라이선스는 기본적으로 함수 섹션 뒤에 표시"""
        text = MarkdownGenerator().render(sample_blocks)
        assert text.index("### foo") < text.index("**License:** MIT")

        text = MarkdownGenerator(Config(license_placement="about")).render(sample_blocks)
        assert text.index("**License:** MIT") < text.index("## Index")

        text = MarkdownGenerator(Config(license_placement="none")).render(sample_blocks)
        assert "**License:**" not in text

    def test_footer_text(self, sample_blocks):
        text = MarkdownGenerator(Config(footer_text="Generated for tests")).render(sample_blocks)
        assert text.endswith("Generated for tests\n")

    def test_linkify_usernames(self, sample_blocks):
        text = MarkdownGenerator(Config(linkify_usernames=True)).render(sample_blocks)
        assert "Jane Doe [@jane](https://github.com/jane), Bob" in text

    def test_deprecation_notice(self, sample_blocks):
        foo = sample_blocks[1]
        foo.deprecation.is_deprecated = True
        foo.deprecation.version = "2.0.0"
        foo.deprecation.replacement = "new_foo"
        text = MarkdownGenerator().render(sample_blocks)
        assert "> [!CAUTION]\n> **Deprecated** since 2.0.0. Use `new_foo` instead." in text

    def test_render_does_not_modify_blocks(self, sample_blocks):
        """렌더링은 문서 블록을 변경하지 않음"""
        before = copy.deepcopy(sample_blocks)
        MarkdownGenerator().render(sample_blocks)
        assert sample_blocks == before

    def test_write_creates_directories(self, sample_blocks, temp_output_dir):
        output = temp_output_dir / "nested" / "dir" / "t.md"
        assert MarkdownGenerator().write(sample_blocks, output)
        assert output.read_text(encoding="utf-8").startswith("# t.sh")

    def test_custom_template_dir(self, sample_blocks, temp_output_dir):
        """template_dir 설정으로 템플릿 교체"""
        (temp_output_dir / "script.md.j2").write_text("CUSTOM {{ title }}\n", encoding="utf-8")
        config = Config(template_dir=str(temp_output_dir))
        assert MarkdownGenerator(config).render(sample_blocks) == "CUSTOM t.sh\n"


class TestGeneratorHelpers:
    """생성기 보조 함수 테스트"""

    def test_parse_authors(self):
        assert parse_authors("Jane Doe (@jane), Bob, Max (max)") == [
            ("Jane Doe", "jane"), ("Bob", None), ("Max", "max")
        ]
        assert parse_authors(None) == []

    def test_unique_shellcheck_directives(self):
        directives = [
            ShellcheckDirective(code="SC1", directive="a"),
            ShellcheckDirective(code="SC2", directive="b"),
            ShellcheckDirective(code="SC1", directive="c"),
            ShellcheckDirective(code="", directive="d"),
        ]
        assert [d.directive for d in unique_shellcheck_directives(directives)] == ["a", "b"]

    def test_anchor(self):
        assert MarkdownGenerator._anchor("My Function") == "my-function"
        assert MarkdownGenerator._anchor("do_thing") == "do_thing"
