"""crawlcore.report: Генерация отчётов (JSON и HTML) для CLI и тестов."""

from crawlcore.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from crawlcore.report.json_report import render_json

__all__ = ["render_json", "render_html", "DEFAULT_TEMPLATE_DIR"]
