# site_freeze/report/json_report.py

"""
Генерация JSON-отчёта о сборке SiteFreeze.

Сериализация объекта BuildReport в файл.
"""
from pathlib import Path

from site_freeze.aggregator import BuildReport


def render_json(report: BuildReport, output_path: Path | str) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект BuildReport с результатами сборки
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.json(pretty=True), encoding="utf-8")
    return output
