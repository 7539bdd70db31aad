# crawlcore/report/json_report.py

"""
Генерация JSON-отчёта для проекта CrawlCore.

Сериализация объекта CrawlReport в файл.
"""
import json
from dataclasses import asdict
from pathlib import Path

from crawlcore.aggregator import CrawlReport


def render_json(report: CrawlReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект CrawlReport с результатами обхода
    :param output_path: путь к JSON-файлу
    :param pretty: форматировать с отступом 2
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(asdict(report), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
