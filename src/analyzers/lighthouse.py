"""Lighthouse audit adapter."""

import asyncio
import json
import logging
import math
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from analyzers.base import AuditMeasurements
from config import settings
from errors import AuditError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lighthouse_process(cmd: list[str]) -> AsyncIterator[asyncio.subprocess.Process]:
    """
    Start a Lighthouse child process and make sure it is gone on exit.

    Lighthouse launches and closes its own headless Chrome, so the child
    process is the browser resource. If the caller leaves the block before
    the process finished (error, timeout, cancellation) it is killed and
    reaped so Chrome cannot outlive the audit.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        yield process
    finally:
        if process.returncode is None:
            logger.warning(f"Killing Lighthouse process {process.pid}")
            process.kill()
            await process.wait()


class LighthouseAnalyzer:
    """
    Runs Google Lighthouse audits via CLI.

    Collects the measurements the eco score needs:
    - Category scores: Performance, SEO
    - First Contentful Paint
    - Total byte weight, with a per resource type breakdown
    """

    CATEGORIES = "performance,seo"

    async def run_audit(self, url: str) -> AuditMeasurements:
        """
        Run a Lighthouse audit on the given URL.

        Args:
            url: Website URL to audit

        Returns:
            AuditMeasurements extracted from the report

        Raises:
            AuditError: if Lighthouse fails, times out or produces an unusable report
        """
        raw_data = await self._run_lighthouse(url)
        try:
            return extract_measurements(raw_data)
        except (KeyError, TypeError, ValueError) as e:
            raise AuditError(f"Malformed Lighthouse report for {url}: {e!r}") from e

    async def _run_lighthouse(self, url: str) -> dict:
        """
        Execute Lighthouse CLI and return JSON results.

        Args:
            url: URL to audit

        Returns:
            Lighthouse JSON output as dict
        """
        # Create temp file for output
        with tempfile.NamedTemporaryFile(
            mode="w",
            suffix=".json",
            delete=False,
        ) as f:
            output_path = f.name

        try:
            cmd = [
                settings.lighthouse_binary,
                url,
                "--output=json",
                f"--output-path={output_path}",
                f"--chrome-flags={settings.chrome_flags}",
                "--quiet",
                f"--only-categories={self.CATEGORIES}",
            ]

            logger.info(f"Running Lighthouse: {' '.join(cmd)}")

            try:
                async with lighthouse_process(cmd) as process:
                    _, stderr = await asyncio.wait_for(
                        process.communicate(),
                        timeout=settings.lighthouse_timeout,
                    )
            except asyncio.TimeoutError as e:
                raise AuditError(
                    f"Lighthouse audit timed out after {settings.lighthouse_timeout}s"
                ) from e
            except OSError as e:
                raise AuditError(f"Could not start Lighthouse: {e}") from e

            stderr_text = stderr.decode(errors="replace").strip()
            if process.returncode != 0:
                logger.warning(f"Lighthouse stderr: {stderr_text}")

            # Read JSON output
            output_file = Path(output_path)
            if not output_file.exists() or output_file.stat().st_size == 0:
                raise AuditError(f"Lighthouse output file not created: {stderr_text}")
            try:
                with open(output_file) as f:
                    return json.load(f)
            except json.JSONDecodeError as e:
                raise AuditError(f"Lighthouse output is not valid JSON: {e}") from e

        finally:
            Path(output_path).unlink(missing_ok=True)


def _to_number(value) -> float:
    """Coerce a Lighthouse numeric field, mapping anything non-numeric to NaN."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return math.nan
    return float(value)


def _or_zero(value: float) -> float:
    return 0.0 if math.isnan(value) else value


def _category_pct(categories: dict, name: str) -> float:
    """Category score as 0-100. Lighthouse reports null on runtime errors, which counts as 0."""
    return _or_zero(_to_number(categories[name].get("score"))) * 100


def extract_measurements(raw_data: dict) -> AuditMeasurements:
    """
    Extract the eco score measurements from Lighthouse JSON output.

    Category scores come on a 0-1 scale and are converted to 0-100.
    FCP is converted from milliseconds to seconds and byte counts to KB.
    """
    categories = raw_data["categories"]
    audits = raw_data["audits"]

    # Group network requests by resource type
    breakdown: dict[str, float] = {}
    requests = audits.get("network-requests", {}).get("details", {}).get("items", [])
    for request in requests:
        resource_type = request.get("resourceType") or "Other"
        transfer_size = request.get("transferSize") or 0
        breakdown[resource_type] = breakdown.get(resource_type, 0) + transfer_size / 1024

    return AuditMeasurements(
        performance_pct=_category_pct(categories, "performance"),
        seo_pct=_category_pct(categories, "seo"),
        load_time_seconds=_to_number(audits["first-contentful-paint"].get("numericValue")) / 1000,
        transfer_size_kb=_or_zero(_to_number(audits["total-byte-weight"].get("numericValue"))) / 1024,
        breakdown_by_resource_type=breakdown,
    )


# Convenience function for direct usage
async def run_audit(url: str) -> AuditMeasurements:
    """Run a Lighthouse audit on the given URL."""
    analyzer = LighthouseAnalyzer()
    return await analyzer.run_audit(url)
