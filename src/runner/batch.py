"""Batch runner: score every domain in a file and append the results."""

import json
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from errors import InputError
from runner.pipeline import get_eco_score, normalize_url
from scoring.schemas import EcoScoreReport

logger = logging.getLogger(__name__)

SEPARATOR = "----------------------------------"

Scorer = Callable[[str], Awaitable[EcoScoreReport]]


@dataclass(frozen=True)
class DomainSuccess:
    """A domain that was scored."""

    url: str
    report: EcoScoreReport


@dataclass(frozen=True)
class DomainFailure:
    """A domain whose pipeline raised."""

    url: str
    error: Exception


DomainOutcome = DomainSuccess | DomainFailure


def read_domains(input_path: str | Path) -> list[str]:
    """Read newline-delimited domains, skipping blank lines."""
    try:
        text = Path(input_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Error reading domains file {input_path}: {e}") from e
    return [line.strip() for line in text.splitlines() if line.strip()]


def format_report(report: EcoScoreReport) -> str:
    """Render a report as the JSON body of a score block."""
    return json.dumps(report.model_dump(by_alias=True), indent=2)


def format_outcome(outcome: DomainOutcome) -> str:
    """Render one domain's section of the scores file."""
    lines = [f"Calculate for {outcome.url}:"]
    if isinstance(outcome, DomainSuccess):
        lines.append(f"Little Forest Eco Score >> {format_report(outcome.report)} <<")
        lines.append(SEPARATOR)
    else:
        lines.append(f"Error calculating Eco Score for {outcome.url}: {outcome.error}")
    return "\n".join(lines) + "\n"


async def score_domain(url: str, scorer: Scorer = get_eco_score) -> DomainOutcome:
    """Run the pipeline for one URL, turning any error into a DomainFailure."""
    try:
        report = await scorer(url)
    except Exception as e:
        logger.error(f"Error calculating Eco Score for {url}: {e}")
        return DomainFailure(url=url, error=e)
    return DomainSuccess(url=url, report=report)


async def process_domains(
    domains: Iterable[str],
    sink: TextIO | None = None,
    scorer: Scorer = get_eco_score,
) -> list[DomainOutcome]:
    """
    Score domains one at a time, in order.

    Each outcome is written to sink (if given) as soon as it is known.
    One domain failing never stops the others.

    Args:
        domains: Raw domain strings, normalized here
        sink: Text stream the formatted outcomes are appended to
        scorer: Per-URL pipeline

    Returns:
        One DomainSuccess or DomainFailure per domain, in input order
    """
    outcomes: list[DomainOutcome] = []
    for domain in domains:
        url = normalize_url(domain)
        logger.info(f"Calculating eco score for {url}")
        outcome = await score_domain(url, scorer)
        outcomes.append(outcome)
        if sink is not None:
            sink.write(format_outcome(outcome))
            sink.flush()
    return outcomes


async def process_domain_list(
    input_path: str | Path,
    output_path: str | Path,
    scorer: Scorer = get_eco_score,
) -> list[DomainOutcome]:
    """
    Score every domain listed in input_path and append results to output_path.

    The output file is opened once in append mode and closed on every exit path.

    Raises:
        InputError: if the domains file cannot be read
    """
    with open(output_path, "a", encoding="utf-8") as sink:
        domains = read_domains(input_path)
        logger.info(f"Processing {len(domains)} domains from {input_path}")
        outcomes = await process_domains(domains, sink, scorer)

    failures = sum(isinstance(outcome, DomainFailure) for outcome in outcomes)
    logger.info(f"Finished: {len(outcomes) - failures} scored, {failures} failed")
    return outcomes
