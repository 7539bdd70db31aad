"""
Модуль для загрузки и валидации конфигурации краулера CrawlCore.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class CrawlConfig(BaseModel):
    """Неизменяемая конфигурация одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_depth: int = Field(3, ge=0, description="Максимальная глубина обхода ссылок.")
    max_pages_per_domain: int = Field(100, ge=1, description="Лимит сохранённых страниц на один хост.")
    concurrency_limit: int = Field(10, ge=1, description="Сколько загрузок может выполняться одновременно.")
    min_request_interval_per_host: float = Field(
        0.1, ge=0, description="Минимальный интервал между запросами к одному хосту (секунд)."
    )
    user_agent: str = Field("CrawlCore/0.1", min_length=1, description="Заголовок User-Agent.")
    request_timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")

    def with_overrides(self, **overrides: Any) -> CrawlConfig:
        """Возвращает новую проверенную копию, игнорируя значения None."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return CrawlConfig.model_validate({**self.model_dump(), **changes})


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlConfig(**data)


__all__ = ["CrawlConfig", "load_config", "ValidationError"]
