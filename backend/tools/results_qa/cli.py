"""
CLI interface for result quality tools.

Usage:
    results-qa validate results/almaty_10k_hopa.json --distance 10K
    results-qa reconcile results/hopa.json results/evochip.yaml --save merged.json
    results-qa match-athletes results/unlinked.json roster.yaml --auto
    results-qa duplicate-events events.json
"""

import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from results_engine.config import settings
from results_engine.features.athletes import (
    AutoMatchResponse,
    MatchCandidateSchema,
    auto_match_results,
    find_matches_for_results,
    load_roster,
)
from results_engine.features.reconciliation import (
    EventSummarySchema,
    ReconciliationResponse,
    find_potential_duplicate_events,
    generate_reconciliation_report,
    reconcile_events,
)
from results_engine.features.results import load_result_set, read_document
from results_engine.features.validation import (
    ValidationResponse,
    generate_validation_report,
    validate_results,
)

logger = logging.getLogger(__name__)

# Suggestions shown per result in text mode
MAX_SUGGESTIONS_SHOWN = 3


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or settings.debug else getattr(logging, settings.log_level)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _load(loader, path):
    """Run a file loader, turning bad input into a clean CLI error."""
    try:
        return loader(path)
    except (ValidationError, ValueError, OSError) as e:
        raise click.ClickException(f"Cannot read {path}: {e}")


def _echo_json(data) -> None:
    click.echo(json.dumps(data, ensure_ascii=False, indent=2))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Validation, reconciliation and athlete matching for scraped race results."""
    _setup_logging(verbose)


@cli.command()
@click.argument("results_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--distance", default=None, help="Canonical distance (defaults to the file's event distance)")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a text report")
def validate(results_file, distance, as_json):
    """
    Validate a scraped result set.

    Exits with status 1 when the set is invalid.
    """
    result_set = _load(load_result_set, results_file)
    distance_name = distance or result_set.event.distance_name

    validation = validate_results(result_set.results, distance_name)

    if as_json:
        _echo_json(ValidationResponse.from_result(validation).model_dump(mode="json"))
    else:
        click.echo(generate_validation_report(validation))

    if not validation.is_valid:
        sys.exit(1)


@cli.command()
@click.argument("file_a", type=click.Path(exists=True, dir_okay=False))
@click.argument("file_b", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--threshold",
    default=None,
    type=click.IntRange(0, 100),
    help="Auto-merge confidence (default: AUTO_MERGE_CONFIDENCE setting)"
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a text report")
@click.option("--save", "save_path", default=None, type=click.Path(dir_okay=False), help="Write full JSON output to this file")
def reconcile(file_a, file_b, threshold, as_json, save_path):
    """
    Reconcile two result sets for the same event.

    FILE_A is the primary source, FILE_B the secondary one.
    """
    set_a = _load(load_result_set, file_a)
    set_b = _load(load_result_set, file_b)
    if threshold is None:
        threshold = settings.auto_merge_confidence

    result = reconcile_events(set_a, set_b, auto_merge_threshold=threshold)
    payload = ReconciliationResponse.from_result(result).model_dump(mode="json")

    if save_path:
        path = Path(save_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        logger.info(f"Saved reconciliation to {path}")

    if as_json:
        _echo_json(payload)
    else:
        click.echo(generate_reconciliation_report(result))


@cli.command("match-athletes")
@click.argument("results_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("roster_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--auto", "auto", is_flag=True, help="Link unambiguous matches instead of listing suggestions")
@click.option(
    "--threshold",
    default=None,
    type=click.IntRange(0, 100),
    help="Auto-link confidence (default: AUTO_LINK_CONFIDENCE setting)"
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
def match_athletes(results_file, roster_file, auto, threshold, as_json):
    """Suggest or auto-link athlete identities for unlinked results."""
    result_set = _load(load_result_set, results_file)
    roster = _load(load_roster, roster_file)

    if auto:
        summary = auto_match_results(
            result_set.results,
            roster,
            confidence_threshold=threshold if threshold is not None else settings.auto_link_confidence,
            name_threshold=settings.auto_match_name_threshold,
            search_limit=settings.roster_search_limit,
        )
        if as_json:
            _echo_json(AutoMatchResponse.from_summary(summary).model_dump(mode="json"))
            return
        click.echo(f"Linked: {summary.matched}, skipped: {summary.skipped}")
        for link in summary.links:
            click.echo(f"  {link.result.name} → {link.athlete.name} [{link.athlete.id}] ({link.confidence}%)")
        return

    suggestions = find_matches_for_results(
        result_set.results,
        roster,
        threshold=settings.candidate_name_threshold,
        search_limit=settings.roster_search_limit,
    )

    if as_json:
        _echo_json({
            str(index): [MatchCandidateSchema.from_candidate(c).model_dump(mode="json") for c in candidates]
            for index, candidates in suggestions.items()
        })
        return

    if not suggestions:
        click.echo("No candidate athletes found.")
        return

    for index, candidates in suggestions.items():
        click.echo(f"#{index} {result_set.results[index].name}")
        for c in candidates[:MAX_SUGGESTIONS_SHOWN]:
            click.echo(f"    {c.confidence:>3}%  {c.athlete.name} [{c.athlete.id}]")


@cli.command("duplicate-events")
@click.argument("events_file", type=click.Path(exists=True, dir_okay=False))
def duplicate_events(events_file):
    """List events that look like the same race scraped from two providers."""
    data = _load(read_document, events_file)
    if not isinstance(data, list):
        raise click.ClickException(f"{events_file} must contain a list of events")

    try:
        events = [EventSummarySchema.model_validate(e).to_model() for e in data]
    except ValidationError as e:
        raise click.ClickException(f"Cannot read {events_file}: {e}")

    candidates = find_potential_duplicate_events(events)
    if not candidates:
        click.echo("No potential duplicates found.")
        return

    for c in candidates:
        click.echo(f"{c.event_a} ~ {c.event_b} ({c.similarity}%)")


if __name__ == "__main__":
    cli()
