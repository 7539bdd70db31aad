#!/usr/bin/env python3
"""
Точка входа для запуска краулера CrawlCore через командную строку.

Команды:
  crawl URL   Обойти сайт начиная с URL и вывести/сохранить отчёты
  config      Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (по умолчанию встроенные значения)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --depth, -d INT         Максимальная глубина (override max_depth)
  --max-pages INT         Лимит страниц на домен (override max_pages_per_domain)
  --concurrency, -n INT   Число одновременных загрузок (override concurrency_limit)
  --delay SEC             Минимальный интервал между запросами к хосту
  --user-agent STR        Заголовок User-Agent
  --timeout SEC           Таймаут одного запроса
  --json PATH             Сохранить JSON-отчёт в файл
  --html PATH             Сохранить HTML-отчёт в файл
  --template DIR          Папка с Jinja2-шаблоном report.html.j2
  --pretty                Преформатировать JSON-вывод (отступ 2)
  --crawl-timeout SEC     Таймаут всего обхода (секунд)

Пример:
  crawlcore crawl https://books.toscrape.com/ --depth 2 --concurrency 20 --json report.json
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from crawlcore import __version__
from crawlcore.aggregator import aggregate_results
from crawlcore.config import CrawlConfig, load_config
from crawlcore.engine import run_crawl
from crawlcore.errors import CrawlError
from crawlcore.logger import DEFAULT_FORMAT, init_logging, logger
from crawlcore.report.html_report import render_html
from crawlcore.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='CrawlCore, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд CrawlCore CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path) if config_path else CrawlConfig()
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--depth', '-d', 'max_depth', type=int, default=None, help='Максимальная глубина обхода')
@click.option('--max-pages', 'max_pages', type=int, default=None, help='Лимит страниц на домен')
@click.option('--concurrency', '-n', 'concurrency', type=int, default=None, help='Число одновременных загрузок')
@click.option('--delay', 'delay', type=float, default=None, help='Интервал между запросами к хосту (секунд)')
@click.option('--user-agent', 'user_agent', default=None, help='Заголовок User-Agent')
@click.option('--timeout', 'request_timeout', type=float, default=None, help='Таймаут одного запроса (секунд)')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами (по умолчанию встроенный шаблон)'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.option('--crawl-timeout', 'crawl_timeout', type=float, default=None, help='Таймаут всего обхода (секунд)')
@click.pass_context
def crawl(ctx, url, max_depth, max_pages, concurrency, delay, user_agent, request_timeout,
          json_output, html_output, template_dir, pretty, crawl_timeout):
    """Обойти сайт начиная с URL и сгенерировать отчёты."""
    try:
        cfg = ctx.obj['config'].with_overrides(
            max_depth=max_depth,
            max_pages_per_domain=max_pages,
            concurrency_limit=concurrency,
            min_request_interval_per_host=delay,
            user_agent=user_agent,
            request_timeout=request_timeout,
        )
    except ValidationError as e:
        print_error(f'Некорректные параметры: {e}')

    logger.info('Crawling started: URL = %s, Depth = %d', url, cfg.max_depth)
    try:
        if crawl_timeout:
            pages, stats = asyncio.run(
                asyncio.wait_for(run_crawl(url, cfg), timeout=crawl_timeout)
            )
        else:
            pages, stats = asyncio.run(run_crawl(url, cfg))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {crawl_timeout} секунд')
    except CrawlError as e:
        print_error(f'Ошибка при обходе: {e}')

    report = aggregate_results(pages, stats, seed=url)
    logger.info('Crawling completed! %d pages fetched.', len(report.pages))
    if report.pages:
        logger.info('--- Crawl Report (Top 5 pages) ---')
        for line in report.summary_lines(top=5):
            logger.info(line)
        logger.info('--- End of Report ---')

    # Если не сохраняем в файл — печатаем в stdout
    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
