"""Backends for xsys output generation (HTML)."""

from .html_generator import NO_RESULT_MESSAGE, generate_html, save_html_file

__all__ = ["NO_RESULT_MESSAGE", "generate_html", "save_html_file"]
