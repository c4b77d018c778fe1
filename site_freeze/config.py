# === FILE: site_freeze/config.py ===
"""
Загрузка и валидация конфигурации сборки SiteFreeze.
Схема описана моделями Pydantic; файл может быть YAML или JSON.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Annotated, Any, Dict, List, Literal, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

DEFAULT_EXTRA_PAGES = ["/about", "/license-policy", "/search-help"]
DEFAULT_EXCLUDE = ["testdata", "__pycache__"]


class DirectorySourceConfig(BaseModel):
    """Каталог на диске: подкаталоги записи каталога становятся страницами."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["directory"] = "directory"
    root: Path
    exclude: List[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE))


class ManifestSourceConfig(BaseModel):
    """Явный список путей для каждой записи каталога."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["manifest"] = "manifest"
    units: Dict[str, List[str]] = Field(default_factory=dict)


SourceConfig = Annotated[
    Union[DirectorySourceConfig, ManifestSourceConfig], Field(discriminator="kind")
]


class BuildConfig(BaseModel):
    """Конфигурация одного запуска генерации статического сайта."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    app: str = Field(..., min_length=3, description="Приложение aiohttp в виде 'module:attr'.")
    output_dir: Path = Field(Path("site"), description="Корень для сгенерированных файлов.")
    catalog: List[str] = Field(default_factory=list, description="Записи каталога для обхода.")
    sources: List[SourceConfig] = Field(default_factory=list, description="Источники метаданных.")
    extra_pages: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTRA_PAGES),
        description="Информационные страницы, рендерятся после главной.",
    )
    asset_bundles: Dict[str, Path] = Field(
        default_factory=dict, description="Имя каталога в выводе -> каталог с ассетами."
    )
    favicon: str = Field(
        "static/shared/icon/favicon.ico",
        description="Путь иконки внутри бандлов, копируется в корень.",
    )

    @field_validator("extra_pages")
    def _absolute_pages(cls, v: List[str]) -> List[str]:
        pages = []
        for page in v:
            page = "/" + page.strip("/")
            pages.append(page)
        return pages

    @field_validator("catalog")
    def _strip_entries(cls, v: List[str]) -> List[str]:
        return [entry.strip("/") for entry in v if entry.strip("/")]

    @model_validator(mode="after")
    def _check_bundles_exist(self) -> BuildConfig:
        missing = [str(p) for p in self.asset_bundles.values() if not Path(p).is_dir()]
        if missing:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), missing[0])
        return self


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


def load_config(path: Union[str, Path, None]) -> BuildConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект BuildConfig.
    При отсутствии файла конфига или каталогов ассетов бросает FileNotFoundError.
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

    try:
        return BuildConfig(**data)
    except ValidationError:
        raise


__all__ = [
    "BuildConfig",
    "DirectorySourceConfig",
    "ManifestSourceConfig",
    "load_config",
]
