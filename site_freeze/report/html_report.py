"""site_freeze.report.html_report: Генерация HTML-отчёта о сборке с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_freeze.aggregator import BuildReport

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


def render_html(
    report: BuildReport,
    template_dir: Optional[Union[Path, str]],
    output_path: Union[Path, str],
) -> Path:
    """Рендерит HTML-отчёт из шаблона ``report.html.j2`` и сохраняет его.

    Args:
        report: объект BuildReport.
        template_dir: директория с Jinja2-шаблонами (None → встроенный шаблон).
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.
    """
    template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template("report.html.j2")

    context: dict[str, Any] = {
        "output_dir": report.output_dir,
        "pages_total": report.pages_total,
        "pages": report.pages,
        "failures": report.failures,
        "assets": report.assets,
        "favicon": report.favicon,
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
