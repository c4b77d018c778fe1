# File: site_freeze/aggregator.py
"""site_freeze.aggregator: итоговый отчёт о сборке статического сайта."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import List, TypedDict


class PageFailure(TypedDict):
    """Страница, которую не удалось отрендерить или переписать."""

    url_path: str
    error: str
    message: str


@dataclass(slots=True)
class BuildReport:
    """Результаты сборки: записанные страницы, ошибки и скопированные ассеты."""

    output_dir: str
    pages_total: int = 0
    pages: List[str] = field(default_factory=list)
    failures: List[PageFailure] = field(default_factory=list)
    assets: dict[str, int] = field(default_factory=dict)
    favicon: bool = False

    @property
    def ok(self) -> bool:
        return not self.failures

    def add_failure(self, url_path: str, exc: Exception) -> None:
        self.failures.append(
            {"url_path": url_path, "error": type(exc).__name__, "message": str(exc)}
        )

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


__all__ = ["BuildReport", "PageFailure"]
