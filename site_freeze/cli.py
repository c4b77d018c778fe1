# === FILE: site_freeze/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска генератора SiteFreeze через командную строку.

Команды:
  build     Отрендерить сайт в статическое дерево файлов
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда build опции:
  --output DIR          Каталог вывода (override output_dir)
  --json PATH           Сохранить JSON-отчёт о сборке
  --html PATH           Сохранить HTML-отчёт о сборке
  --template DIR        Папка с Jinja2-шаблоном report.html.j2
  --build-timeout SEC   Таймаут всей сборки (секунд)

Пример:
  site-freeze --config configs/default.yaml build --output site --json build.json
"""
import asyncio
import sys
from pathlib import Path

import click

from site_freeze import __version__
from site_freeze.config import load_config
from site_freeze.engine import start_build
from site_freeze.logger import init_logging
from site_freeze.report.html_report import render_html
from site_freeze.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg="red", err=True)
    sys.exit(1)


def echo_progress(current: int, total: int, url_path: str) -> None:
    click.echo(f"  [{current}/{total}] {url_path}", err=True)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", "-v", message="SiteFreeze, version %(version)s")
@click.option(
    "--config", "-c", "config_path",
    default="configs/default.yaml",
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Путь к файлу конфигурации YAML/JSON.",
)
@click.option(
    "--log-level", "log_level",
    default="INFO", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Уровень логирования",
)
@click.option(
    "--log-file", "log_file",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Путь к файлу логов (stderr, если не указан)",
)
@click.option(
    "--log-format", "log_format",
    default="%(asctime)s %(levelname)s %(message)s",
    show_default=True,
    help="Строка формата для логов",
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteFreeze CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f"Ошибка загрузки конфигурации: {e}")
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command("build", context_settings=CONTEXT_SETTINGS)
@click.option(
    "--output", "-o", "output_dir",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Каталог вывода (override output_dir)",
)
@click.option(
    "--json", "-j", "json_output",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Сохранить JSON-отчёт в файл",
)
@click.option(
    "--html", "html_output",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Сохранить HTML-отчёт в файл",
)
@click.option(
    "--template", "-t", "template_dir",
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Папка с Jinja2-шаблонами (по умолчанию встроенный шаблон)",
)
@click.option(
    "--build-timeout", "build_timeout",
    type=float,
    default=None,
    help="Таймаут всей сборки (секунд)",
)
@click.pass_context
def build(ctx, output_dir, json_output, html_output, template_dir, build_timeout):
    """Отрендерить все страницы и ассеты в статическое дерево."""
    cfg = ctx.obj["config"]
    target = output_dir or cfg.output_dir
    click.echo(f"Building {cfg.app} into {target}", err=True)
    try:
        coro = start_build(cfg, target, echo_progress)
        if build_timeout:
            report = asyncio.run(asyncio.wait_for(coro, timeout=build_timeout))
        else:
            report = asyncio.run(coro)
    except asyncio.TimeoutError:
        print_error(f"Сборка не завершена за {build_timeout} секунд")
    except Exception as e:
        print_error(f"Ошибка при сборке: {e}")

    click.echo(
        f"Static site generated in {report.output_dir}: "
        f"{len(report.pages)}/{report.pages_total} pages, {len(report.failures)} failed",
        err=True,
    )

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f"JSON report: {saved_json}")
        except Exception as e:
            print_error(f"Ошибка при сохранении JSON: {e}")

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f"HTML report: {saved_html}")
        except Exception as e:
            print_error(f"Ошибка при сохранении HTML: {e}")


@cli.command("config", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj["config"]
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
