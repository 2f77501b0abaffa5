# === FILE: site_mapper/config.py ===
"""
Модуль для загрузки и валидации конфигурации SiteMapper.
Используется Pydantic для описания схемы и проверки данных.
Значения берутся из YAML/JSON-файла и переопределяются флагами CLI.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from site_mapper.crawler.resolver import InvalidURLError, canonical_url


class CrawlConfig(BaseModel):
    """Конфигурация для одного запуска построения sitemap."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str = Field(..., description="Стартовый URL (seed) обхода.")
    max_depth: int = Field(1, ge=0, description="Максимальная глубина обхода ссылок.")
    parallel: int = Field(1, ge=1, description="Число параллельных загрузок.")
    output_file: str = Field("sitemap.xml", min_length=1, description="Путь к итоговому sitemap.xml.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("SiteMapper/1.0", min_length=1, description="Заголовок User-Agent.")

    @field_validator("url")
    @classmethod
    def _check_seed(cls, v: str) -> str:
        try:
            canonical_url(v.strip())
        except InvalidURLError as exc:
            raise ValueError(str(exc)) from exc
        return v.strip()


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


def read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Читает YAML или JSON и возвращает словарь настроек без проверки схемы."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlConfig:
    """
    Собирает CrawlConfig из файла (если задан) и явных переопределений.

    Переопределения со значением None игнорируются, остальные имеют
    приоритет над значениями из файла. Ошибки схемы поднимаются как
    pydantic.ValidationError.
    """
    data: dict[str, Any] = read_config_file(path) if path is not None else {}
    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlConfig(**data)
