"""FamliCal CLI - recurrence rule tools."""

import json
import logging
import sys
from datetime import date, datetime

import click

from .adapters.rrule_text import RRuleParseError, format_rrule, parse_rrule
from .config import load_config
from .core.calendar import ordinal_of_week_in_month, weekday_of
from .core.presets import PresetOption, classify, from_preset
from .core.recurrence import RecurrenceConfiguration, WeekdayOrdinal
from .core.rule import from_external_rule, to_external_rule
from .core.summary import summarize

ANCHOR_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S"]


def _anchor(value: datetime | None) -> date:
    if value is None:
        return date.today()
    if value.time() == datetime.min.time():
        return value.date()
    return value


anchor_option = click.option(
    "--anchor",
    type=click.DateTime(formats=ANCHOR_FORMATS),
    default=None,
    help="Event start date (defaults to today)",
)


def _import(text: str, anchor: date, calendar) -> RecurrenceConfiguration:
    """Parse stored RRULE text, exiting with an error if it cannot be used."""
    try:
        rule = parse_rrule(text)
    except RRuleParseError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    config = from_external_rule(rule, anchor, calendar)
    if config is None:
        click.echo(f"Error: cannot import this rule (unsupported frequency {rule.frequency})", err=True)
        sys.exit(1)
    return config


def _rrule_text(config: RecurrenceConfiguration, anchor: date) -> str | None:
    rule = to_external_rule(config, anchor)
    return format_rrule(rule) if rule else None


@click.group()
@click.version_option(package_name="famlical")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """FamliCal - recurrence rule tools."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@anchor_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def presets(anchor: datetime | None, as_json: bool):
    """List quick presets with their rules and summaries."""
    config = load_config()
    calendar = config.calendar()
    anchor_date = _anchor(anchor)

    rows = []
    for option in PresetOption:
        recurrence = from_preset(option, anchor_date, calendar)
        if recurrence is None:
            continue
        rows.append(
            {
                "preset": option.value,
                "rrule": _rrule_text(recurrence, anchor_date),
                "summary": summarize(recurrence, anchor_date, calendar, config.summary_separator),
            }
        )

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    for row in rows:
        click.echo(f"{row['preset']:8} {row['rrule'] or '-':32} {row['summary']}")


@main.command()
@click.argument("option", type=click.Choice([o.value for o in PresetOption], case_sensitive=False))
@anchor_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def preset(option: str, anchor: datetime | None, as_json: bool):
    """Show the rule a quick preset produces."""
    config = load_config()
    calendar = config.calendar()
    anchor_date = _anchor(anchor)

    option = next(o for o in PresetOption if o.value.lower() == option.lower())
    recurrence = from_preset(option, anchor_date, calendar)
    if recurrence is None:
        click.echo("Custom has no preset rule; edit an existing rule instead.", err=True)
        sys.exit(1)

    rrule = _rrule_text(recurrence, anchor_date)
    summary = summarize(recurrence, anchor_date, calendar, config.summary_separator)

    if as_json:
        click.echo(json.dumps({"preset": option.value, "rrule": rrule, "summary": summary}, indent=2))
    else:
        click.echo(rrule or "(no rule)")
        click.echo(summary)


@main.command("summarize")
@click.argument("rrule")
@anchor_option
def summarize_command(rrule: str, anchor: datetime | None):
    """Describe stored RRULE text in plain words."""
    config = load_config()
    calendar = config.calendar()
    anchor_date = _anchor(anchor)

    recurrence = _import(rrule, anchor_date, calendar)
    click.echo(summarize(recurrence, anchor_date, calendar, config.summary_separator))


@main.command("classify")
@click.argument("rrule")
@anchor_option
def classify_command(rrule: str, anchor: datetime | None):
    """Show which quick preset stored RRULE text matches."""
    calendar = load_config().calendar()
    anchor_date = _anchor(anchor)

    recurrence = _import(rrule, anchor_date, calendar)
    click.echo(classify(recurrence, anchor_date, calendar).value)


@main.command()
@click.argument("rrule")
@anchor_option
def normalize(rrule: str, anchor: datetime | None):
    """Import RRULE text and write it back in canonical form."""
    calendar = load_config().calendar()
    anchor_date = _anchor(anchor)

    recurrence = _import(rrule, anchor_date, calendar)
    click.echo(_rrule_text(recurrence, anchor_date))


@main.command()
@click.argument("day", type=click.DateTime(formats=["%Y-%m-%d"]))
def ordinal(day: datetime):
    """Show which occurrence of its weekday a date is in its month."""
    calendar = load_config().calendar()
    value = day.date()

    ordinal_weekday = WeekdayOrdinal(ordinal_of_week_in_month(value, calendar), weekday_of(value, calendar))
    click.echo(f"{ordinal_weekday.ordinal} ({ordinal_weekday.describe()} of {value.strftime('%B %Y')})")
