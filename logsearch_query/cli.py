"""
`logsearch-query` command line tool.

Renders the Solr filter queries the builder produces for a set of request
parameters, without talking to Solr. Useful for checking escaping and wildcard
handling of a search before sending it.

    logsearch-query render --log-message '"connection refused" *timeout*' \
        --equals type=hdfs_namenode --range logtime=2017-01-01T00:00:00Z.. \
        --exclude '[{"level": "DEBUG"}]'
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

import logsearch_query

from .builder import FilterBuilder
from .exceptions import LogSearchQueryError
from .schema import InMemorySchemaLookup, LogType
from .sink import FilterQuery

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbosity: int) -> None:
    """Send library logs to stderr: warnings by default, -v info, -vv debug."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger = logging.getLogger("logsearch_query")
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(level)


def _parse_assignments(
    _ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for item in values:
        field, sep, value = item.partition("=")
        if not sep or not field:
            raise click.BadParameter(f"expected FIELD=VALUE, got {item!r}", param=param)
        pairs.append((field, value))
    return pairs


def _load_schema(path: Path | None, log_type: LogType) -> InMemorySchemaLookup | None:
    if path is None:
        return None
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
        return InMemorySchemaLookup.from_solr_schema(log_type, document)
    except (json.JSONDecodeError, ValidationError) as e:
        raise click.BadParameter(f"not a Solr schema document: {e}", param_hint="--schema") from e


@click.group(
    name="logsearch-query",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("-v", "verbose", count=True, help="Increase verbosity (-v, -vv).")
@click.version_option(version=logsearch_query.__version__, prog_name="logsearch-query")
def cli(verbose: int) -> None:
    configure_logging(verbose)


@cli.command(name="render")
@click.option(
    "--log-type",
    type=click.Choice([t.value for t in LogType]),
    default=LogType.SERVICE.value,
    show_default=True,
)
@click.option(
    "--schema",
    "schema_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Solr schema API response (JSON) used for field-type aware escaping.",
)
@click.option("--equals", multiple=True, callback=_parse_assignments, help="FIELD=VALUE")
@click.option("--not-equals", multiple=True, callback=_parse_assignments, help="FIELD=VALUE")
@click.option("--contains", multiple=True, callback=_parse_assignments, help="FIELD=VALUE")
@click.option(
    "--in", "in_", multiple=True, callback=_parse_assignments, help="FIELD=V1,V2,..."
)
@click.option(
    "--range", "range_", multiple=True, callback=_parse_assignments, help="FIELD=FROM..TO"
)
@click.option("--log-message", default=None, help="Free-text log message search.")
@click.option("--include", default=None, help="JSON list of field/value maps to require.")
@click.option("--exclude", default=None, help="JSON list of field/value maps to exclude.")
@click.option("--json", "json_flag", is_flag=True, help="Print Solr params as JSON.")
def render_cmd(
    *,
    log_type: str,
    schema_path: Path | None,
    equals: list[tuple[str, str]],
    not_equals: list[tuple[str, str]],
    contains: list[tuple[str, str]],
    in_: list[tuple[str, str]],
    range_: list[tuple[str, str]],
    log_message: str | None,
    include: str | None,
    exclude: str | None,
    json_flag: bool,
) -> None:
    """Print the filter queries for the given request parameters."""
    selected = LogType(log_type)
    builder = FilterBuilder(_load_schema(schema_path, selected), log_type=selected)
    query = FilterQuery()

    for field, value in equals:
        builder.add_equals(query, field, value)
    for field, value in not_equals:
        builder.add_equals(query, field, value, negate=True)
    for field, value in contains:
        builder.add_contains(query, field, value)
    for field, value in in_:
        builder.add_list_filter(query, field, value)
    for field, bounds in range_:
        lower, _, upper = bounds.partition("..")
        builder.add_range(query, field, lower, upper)
    builder.add_free_text(query, log_message)

    try:
        builder.add_include_field_map(query, include)
        builder.add_exclude_field_map(query, exclude)
    except LogSearchQueryError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.exceptions.Exit(2) from e

    logger.info(f"Built {len(query)} filter queries")
    if json_flag:
        params: dict[str, Any] = query.to_params()
        click.echo(json.dumps(params, ensure_ascii=False))
        return
    for fq in query.filter_queries():
        click.echo(fq)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
