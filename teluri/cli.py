# file: teluri/cli.py
"""
teluri CLI.

Commands:
  - parse: parse a tel: URI and print its fields
  - compare: compare two tel: URIs under RFC 3966 equality
  - build-local / build-global: assemble a tel: URI from its parts
  - export: write a record report as JSON or CSV
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click

from teluri import __version__
from teluri.builders import GlobalPhoneNumberBuilder, LocalPhoneNumberBuilder, PhoneNumberBuilder
from teluri.config import TeluriSettings, load_settings
from teluri.core.errors import ParseError, ValidationError
from teluri.core.parser import ParseOptions, parse_tel_uri
from teluri.core.record import PhoneNumberRecord
from teluri.io.report import export_csv, export_json, record_report
from teluri.logging_config import configure_logging

logger = logging.getLogger(__name__)

_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML config path.",
)


def _settings(config_path: Path | None) -> TeluriSettings:
    settings = load_settings(yaml_path=config_path)
    configure_logging(level=settings.log_level, json_logging=settings.json_logging)
    return settings


def _parse_params(values: tuple[str, ...]) -> dict[str, str] | None:
    if not values:
        return None
    params: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected name=value, got {item!r}", param_hint="--param")
        params[name] = value
    return params


def _parse(value: str, options: ParseOptions) -> PhoneNumberRecord:
    try:
        return parse_tel_uri(value, options=options)
    except ParseError as exc:
        logger.debug(
            "Rejected tel: URI: %s", exc.reason, extra={"tel_uri": value, "position": exc.position}
        )
        raise click.ClickException(f"Invalid tel: URI {value!r}: {exc}") from exc


def _build(builder: PhoneNumberBuilder, *, validate: bool) -> PhoneNumberRecord:
    try:
        return builder.build(validate=validate)
    except ValidationError as exc:
        raise click.ClickException(str(exc)) from exc
    except ParseError as exc:
        raise click.ClickException(f"Built value is not a valid tel: URI: {exc}") from exc


def _human_text(record: PhoneNumberRecord) -> str:
    lines: list[str] = [f"Value: {record.value}"]
    if record.number is None:
        lines.append("  (stored without validation)")
        return "\n".join(lines) + "\n"

    lines.append(f"  Type: {'global' if record.is_global_number else 'local'}")
    lines.append(f"  Number: {record.number}")
    if record.extension is not None:
        lines.append(f"  Extension: {record.extension}")
    if record.sub_address is not None:
        lines.append(f"  Subaddress: {record.sub_address}")
    if record.phone_context is not None:
        kind = "domain" if record.is_domain_phone_context else "numeric"
        lines.append(f"  Phone context: {record.phone_context} ({kind})")
    if record.params:
        lines.append("  Parameters:")
        for name, value in record.params.items():
            lines.append(f"    {name}={value if value is not None else ''}")
    return "\n".join(lines) + "\n"


def _emit(record: PhoneNumberRecord, *, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(record.to_dict(), indent=2, sort_keys=True))
    else:
        click.echo(_human_text(record), nl=False)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__)
def main() -> None:
    """RFC 3966 tel: URI parsing and comparison."""


@main.command("parse")
@click.argument("value", type=str)
@click.option("--lenient", is_flag=True, help="Store the value without grammar validation.")
@click.option("--json", "as_json", is_flag=True, help="Print the record as JSON.")
@_config_option
def parse_cmd(value: str, lenient: bool, as_json: bool, config_path: Path | None) -> None:
    """Parse a tel: URI and print its fields."""

    settings = _settings(config_path)
    options = ParseOptions(strict=False) if lenient else settings.parse_options()
    _emit(_parse(value, options), as_json=as_json)


@main.command("compare")
@click.argument("first", type=str)
@click.argument("second", type=str)
@_config_option
@click.pass_context
def compare_cmd(ctx: click.Context, first: str, second: str, config_path: Path | None) -> None:
    """
    Compare two tel: URIs. Exits with status 1 when they differ.

    Both values are always parsed strictly: records stored without validation
    carry no fields to compare.
    """

    _settings(config_path)
    options = ParseOptions(strict=True)
    equal = _parse(first, options) == _parse(second, options)
    click.echo("equal" if equal else "not equal")
    if not equal:
        ctx.exit(1)


_descriptor_options = [
    click.option("--ext", "extension", default=None, help="Extension digits."),
    click.option("--isub", "sub_address", default=None, help="ISDN subaddress."),
    click.option("--param", "params", multiple=True, help="Extra parameter as name=value."),
    click.option("--display", default=None, help="Display name stored on the record."),
    click.option("--no-validate", is_flag=True, help="Skip parsing the built value."),
    click.option("--json", "as_json", is_flag=True, help="Print the record as JSON."),
]


def _with_descriptor_options(fn: Any) -> Any:
    for option in reversed(_descriptor_options):
        fn = option(fn)
    return fn


@main.command("build-local")
@click.option("--subscriber", "subscriber_number", required=True, help="Subscriber number.")
@click.option("--country-code", default=None, help="Country code, e.g. 1 or +44.")
@click.option("--area-code", default=None, help="Numeric area code (with --country-code).")
@click.option("--domain", "domain_name", default=None, help="Domain name phone-context.")
@_with_descriptor_options
def build_local_cmd(
    subscriber_number: str,
    country_code: str | None,
    area_code: str | None,
    domain_name: str | None,
    extension: str | None,
    sub_address: str | None,
    params: tuple[str, ...],
    display: str | None,
    no_validate: bool,
    as_json: bool,
) -> None:
    """Build a local tel: URI qualified by a country code or a domain."""

    builder = LocalPhoneNumberBuilder(
        subscriber_number=subscriber_number,
        country_code=country_code,
        area_code=area_code,
        domain_name=domain_name,
        extension=extension,
        sub_address=sub_address,
        params=_parse_params(params),
        display=display,
    )
    _emit(_build(builder, validate=not no_validate), as_json=as_json)


@main.command("build-global")
@click.argument("global_number", type=str)
@_with_descriptor_options
def build_global_cmd(
    global_number: str,
    extension: str | None,
    sub_address: str | None,
    params: tuple[str, ...],
    display: str | None,
    no_validate: bool,
    as_json: bool,
) -> None:
    """Build a global tel: URI; a leading + is added when missing."""

    builder = GlobalPhoneNumberBuilder(
        global_number=global_number,
        extension=extension,
        sub_address=sub_address,
        params=_parse_params(params),
        display=display,
    )
    _emit(_build(builder, validate=not no_validate), as_json=as_json)


@main.command("export")
@click.argument("value", type=str)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "csv"], case_sensitive=False),
    default="json",
    show_default=True,
)
@click.option("--output", "output_path", type=click.Path(path_type=Path), default=None)
@_config_option
def export_cmd(value: str, fmt: str, output_path: Path | None, config_path: Path | None) -> None:
    """Write a report for a tel: URI as JSON (stdout by default) or CSV."""

    record = _parse(value, _settings(config_path).parse_options())
    report = record_report(record)

    if fmt.lower() == "csv":
        if output_path is None:
            raise click.ClickException("--output is required for CSV export.")
        export_csv(report, output_path)
        click.echo(str(output_path))
    elif output_path is not None:
        export_json(report, output_path)
        click.echo(str(output_path))
    else:
        click.echo(json.dumps(report, indent=2, sort_keys=True))
