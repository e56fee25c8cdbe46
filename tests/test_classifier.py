"""
Tests for line classifier and tag extractor.

이 모듈은 줄 판별 함수와 태그 추출 기능을 검증하는 테스트를 포함합니다.
"""

import pytest
import sys
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from shellscribe.classifier import (
    is_comment, is_tag_line, is_function_declaration, extract_function_name,
    is_special_annotation, is_shellcheck_directive, extract_shebang, strip_comment
)
from shellscribe.tags import extract_tag, alert_type_for, FILE_LEVEL_TAGS
from shellscribe.models import AlertType


class TestLineClassifier:
    """줄 판별 함수 테스트"""

    @pytest.mark.parametrize("line,expected", [
        ("# comment", True),
        ("    # indented", True),
        ("#", True),
        ("echo '#'", False),
        ("", False),
    ])
    def test_is_comment(self, line, expected):
        """첫 공백 아닌 문자가 '#'인지 판별"""
        assert is_comment(line) is expected

    @pytest.mark.parametrize("line,expected", [
        ("# @brief Short summary", True),
        ("# @brief: Short summary", True),
        ("#@internal", True),
        ("  # @arg $1 string", True),
        ("# plain comment with @mention", False),
        ("echo @foo", False),
    ])
    def test_is_tag_line(self, line, expected):
        """두 가지 태그 문법 인식"""
        assert is_tag_line(line) is expected

    @pytest.mark.parametrize("line,name", [
        ("foo() {", "foo"),
        ("function foo() {", "foo"),
        ("function foo () {", "foo"),
        ("  my_func_2( )   {", "my_func_2"),
    ])
    def test_function_declaration(self, line, name):
        """함수 선언 형식 인식 및 이름 추출"""
        assert is_function_declaration(line)
        assert extract_function_name(line) == name

    @pytest.mark.parametrize("line", [
        "foo()",
        "foo() echo {",
        "my-func() {",
        "echo foo() {",
        "# foo() {",
    ])
    def test_not_function_declaration(self, line):
        """함수 선언이 아닌 줄"""
        assert not is_function_declaration(line)
        assert extract_function_name(line) is None

    @pytest.mark.parametrize("line", [
        "# shellcheck disable=SC2034",
        "# TODO: fix this",
        "# FIXME later",
        "# XXX",
        "# HACK around bug",
    ])
    def test_special_annotation(self, line):
        """연속 수집을 중단시키는 특수 주석"""
        assert is_special_annotation(line)

    def test_plain_comment_is_not_special(self):
        assert not is_special_annotation("# just some text")

    def test_shellcheck_directive_case_insensitive(self):
        """shellcheck 키워드는 대소문자를 구분하지 않음"""
        assert is_shellcheck_directive("# shellcheck disable=SC2034")
        assert is_shellcheck_directive("#ShellCheck source=lib.sh")
        assert not is_shellcheck_directive("# see shellcheck docs")

    def test_extract_shebang(self):
        assert extract_shebang("#!/usr/bin/env bash") == "/usr/bin/env bash"
        assert extract_shebang("#! /bin/sh") == "/bin/sh"
        assert extract_shebang("# not a shebang") is None

    def test_strip_comment(self):
        """주석 기호 제거 및 들여쓰기 보존"""
        assert strip_comment("#   text") == "text"
        assert strip_comment("#   indented", keep_indent=True) == "  indented"
        assert strip_comment("#") == ""


class TestTagExtractor:
    """태그 추출 테스트"""

    def test_space_syntax(self):
        """'# @tag content' 형식"""
        match = extract_tag("# @brief Short summary")
        assert match.name == "brief"
        assert match.content == "Short summary"

    def test_colon_syntax(self):
        """'# @tag: content' 형식"""
        match = extract_tag("# @version: 1.2.3")
        assert match.name == "version"
        assert match.content == "1.2.3"

    def test_tag_without_content(self):
        match = extract_tag("# @internal")
        assert match.name == "internal"
        assert match.content == ""

    def test_hyphenated_tag_name(self):
        match = extract_tag("# @used-by main")
        assert match.name == "used-by"
        assert match.content == "main"

    def test_non_tag_line(self):
        """태그 줄이 아니면 None"""
        assert extract_tag("# plain comment") is None
        assert extract_tag("echo hello") is None

    def test_alert_type_normalization(self):
        """알림 태그 이름 정규화"""
        assert alert_type_for("warning") is AlertType.WARNING
        assert alert_type_for("hint") is AlertType.TIP
        assert alert_type_for("unknown") is AlertType.NOTE

    def test_file_level_tags(self):
        for tag in ("file", "version", "author", "since", "license", "copyright", "skip"):
            assert tag in FILE_LEVEL_TAGS
        assert "arg" not in FILE_LEVEL_TAGS
