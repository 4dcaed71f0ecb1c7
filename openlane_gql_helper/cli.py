"""Command-line entry points."""
from __future__ import annotations

import logging
import sys

import click

from .codegen import DEFAULT_CONFIG_PATH, generate as generate_client, load_config
from .controls import ControlOrder, ControlOrderField, ControlWhereInput, OrderDirection
from .errors import ConfigError, FetchError, MissingCredentialError
from .paginate import fetch_all
from .report import render_report
from .session import OpenlaneSession

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.option(
    "--log-level",
    envvar="OPENLANE_LOG_LEVEL",
    default="INFO",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Logging level for progress and errors (written to stderr).",
)
def cli(log_level: str) -> None:
    """Openlane GraphQL helper commands."""
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT, stream=sys.stderr)


@cli.command()
@click.option("--framework", default="SOC 2", show_default=True, help="Reference framework to filter on.")
@click.option("--system-owned/--no-system-owned", default=True, show_default=True)
@click.option("--page-size", default=10, show_default=True, type=click.IntRange(min=1))
@click.option(
    "--order-field",
    default=ControlOrderField.REF_CODE.value,
    show_default=True,
    type=click.Choice([f.value for f in ControlOrderField]),
)
@click.option("--descending", is_flag=True, help="Sort in descending order.")
def controls(framework: str, system_owned: bool, page_size: int, order_field: str, descending: bool) -> None:
    """List every control matching the filter, across all pages."""
    try:
        session = OpenlaneSession.from_env()
    except MissingCredentialError as exc:
        logger.critical("%s", exc)
        sys.exit(1)

    where = ControlWhereInput(reference_framework=framework, system_owned=system_owned)
    order_by = ControlOrder(
        ControlOrderField(order_field),
        OrderDirection.DESC if descending else OrderDirection.ASC,
    )
    try:
        results = fetch_all(session, where, order_by, page_size)
    except FetchError as exc:
        logger.critical("Error fetching controls: %s", exc)
        sys.exit(1)

    click.echo(render_report(results))


@cli.command()
@click.option(
    "--config",
    "config_path",
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="YAML file with ariadne-codegen settings.",
)
def generate(config_path: str) -> None:
    """Generate a typed GraphQL client from a YAML configuration."""
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        logger.critical("Failed to load config: %s", exc)
        sys.exit(2)

    try:
        generate_client(config)
    except Exception:
        logger.exception("Failed to generate client")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
