"""
Shellscribe: documentation generator for shell scripts.

이 패키지는 셸 스크립트의 태그 주석(@brief, @arg, ...)을 파싱하여 Markdown 문서를 생성합니다.
"""

__version__ = "1.0.0"
