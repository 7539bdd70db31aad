"""crawlcore.utils: Утилиты для разбора адресов страниц."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import urlsplit

from yarl import URL

__all__: Sequence[str] = (
    "CRAWLABLE_SCHEMES",
    "DEFAULT_PORTS",
    "normalize_address",
    "extract_host",
)

CRAWLABLE_SCHEMES = ("http", "https")
DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_address(url: str) -> str:
    """
    Приводит URL к каноническому виду адреса так же, как его видит aiohttp (yarl):
    схема и хост в нижнем регистре (IDNA для не-ASCII хостов), путь и запрос
    в percent-encoding, точечные сегменты пути удалены, порт по умолчанию
    отброшен, пустой путь превращается в "/", фрагмент отбрасывается.
    Порядок параметров и завершающий слеш не трогаем.

    Бросает ValueError, если URL не абсолютный http(s) или у него нет хоста.
    """
    parsed = URL(url.strip())
    if parsed.scheme not in CRAWLABLE_SCHEMES:
        raise ValueError(f"unsupported scheme {parsed.scheme!r}")
    if not parsed.raw_host:
        raise ValueError("missing host")
    if parsed.explicit_port == DEFAULT_PORTS[parsed.scheme]:
        parsed = parsed.with_port(None)

    query = f"?{parsed.raw_query_string}" if parsed.raw_query_string else ""
    return f"{parsed.scheme}://{parsed.raw_authority}{parsed.raw_path}{query}"


def extract_host(url: str) -> str:
    """Возвращает хост URL без порта (пустая строка, если хоста нет)."""
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""
