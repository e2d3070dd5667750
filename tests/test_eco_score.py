"""
Tests for eco score aggregation.
"""

import math
import unittest

from analyzers.base import AuditMeasurements, ServerLocation
from errors import LocationUnavailableError
from scoring.eco_score import (
    co2_score,
    compute_eco_score,
    page_load_time_score,
    performance_score,
    round_half_up,
    seo_score,
)
from scoring.schemas import CO2Estimate


def make_measurements(**overrides):
    values = {
        "performance_pct": 100,
        "seo_pct": 100,
        "load_time_seconds": 0,
        "transfer_size_kb": 512.0,
        "breakdown_by_resource_type": {"Script": 300.0, "Image": 212.0},
    }
    values.update(overrides)
    return AuditMeasurements(**values)


LONDON = ServerLocation(country="United Kingdom", region="England", city="London")


class TestSubScores(unittest.TestCase):
    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(2.49), 2)

    def test_performance_is_not_normalized_against_goal(self):
        self.assertEqual(performance_score(100), 20)
        self.assertEqual(performance_score(85), 17)
        self.assertEqual(performance_score(52.5), 11)
        self.assertEqual(performance_score(0), 0)

    def test_seo_ratio_is_capped(self):
        self.assertEqual(seo_score(85), 20)
        self.assertEqual(seo_score(1000), 20)
        self.assertEqual(seo_score(1000), seo_score(85))
        self.assertEqual(seo_score(42.5), 10)
        self.assertEqual(seo_score(0), 0)

    def test_co2_zero_emissions_gets_full_weight(self):
        self.assertEqual(co2_score(0), 40)

    def test_co2_relative_to_goal(self):
        self.assertEqual(co2_score(0.6), 40)
        self.assertEqual(co2_score(0.3), 40)
        self.assertEqual(co2_score(1.2), 20)
        self.assertEqual(co2_score(2.4), 10)

    def test_co2_tiny_emissions_get_full_weight(self):
        self.assertEqual(co2_score(1e-310), 40)
        self.assertEqual(co2_score(5e-324), 40)

    def test_co2_monotonically_non_increasing(self):
        emissions = [0.001, 0.1, 0.5, 0.6, 0.7, 1.0, 2.0, 5.0, 50.0, 1000.0]
        scores = [co2_score(e) for e in emissions]
        for earlier, later in zip(scores, scores[1:]):
            self.assertGreaterEqual(earlier, later)

    def test_page_load_full_points_at_or_under_goal(self):
        for seconds in (0, 1.0, 3.0, 3.4):
            self.assertEqual(page_load_time_score(seconds), 20)

    def test_page_load_fewer_points_over_goal(self):
        self.assertEqual(page_load_time_score(6.8), 10)
        for seconds in (3.41, 3.45, 3.5, 4.0, 10.0, 100.0):
            self.assertLess(page_load_time_score(seconds), 20)

    def test_page_load_nan_counts_as_zero(self):
        self.assertEqual(page_load_time_score(math.nan), page_load_time_score(0))
        self.assertEqual(page_load_time_score(math.nan), 20)


class TestComputeEcoScore(unittest.TestCase):
    def test_perfect_page_scores_100(self):
        report = compute_eco_score(make_measurements(), CO2Estimate(grams=0), LONDON, True)
        self.assertEqual(report.eco_score, 100)

    def test_score_is_clamped_to_100(self):
        measurements = make_measurements(performance_pct=1000, seo_pct=1000, load_time_seconds=0)
        report = compute_eco_score(measurements, CO2Estimate(grams=0.000001), LONDON, True)
        self.assertEqual(report.eco_score, 100)
        self.assertIsInstance(report.eco_score, int)

    def test_tiny_emissions_do_not_overflow(self):
        report = compute_eco_score(make_measurements(), CO2Estimate(grams=1e-310), LONDON, False)
        self.assertEqual(report.eco_score, 100)

    def test_typical_page(self):
        measurements = make_measurements(performance_pct=50, seo_pct=85, load_time_seconds=6.8)
        report = compute_eco_score(measurements, CO2Estimate(grams=1.2), LONDON, False)
        # 10 + 20 + 20 + 10
        self.assertEqual(report.eco_score, 60)

    def test_score_is_always_within_bounds(self):
        for perf in (0, 37.5, 100):
            for seo in (0, 60, 100):
                for grams in (0, 0.2, 3.0, 99.0):
                    for seconds in (0, 2.0, 9.0, math.nan):
                        report = compute_eco_score(
                            make_measurements(performance_pct=perf, seo_pct=seo, load_time_seconds=seconds),
                            CO2Estimate(grams=grams),
                            LONDON,
                            False,
                        )
                        self.assertGreaterEqual(report.eco_score, 0)
                        self.assertLessEqual(report.eco_score, 100)

    def test_missing_location_raises(self):
        with self.assertRaises(LocationUnavailableError) as cm:
            compute_eco_score(make_measurements(), CO2Estimate(grams=0.1), None, True)
        self.assertIn("Could not determine server location", str(cm.exception))

    def test_report_passes_through_upstream_values(self):
        report = compute_eco_score(make_measurements(), CO2Estimate(grams=0.25), LONDON, False)
        self.assertEqual(report.page_weight_kb, 512.0)
        self.assertEqual(report.weight_breakdown, {"Script": 300.0, "Image": 212.0})
        self.assertEqual(report.emissions_grams, 0.25)
        self.assertEqual(report.server_country, "United Kingdom")
        self.assertFalse(report.green_hosting)

    def test_report_serializes_with_display_keys(self):
        report = compute_eco_score(make_measurements(), CO2Estimate(grams=0), LONDON, True)
        dumped = report.model_dump(by_alias=True)
        self.assertEqual(
            list(dumped),
            ["Eco Score", "Page Weight", "Weight Breakdown", "Emissions per page", "Server Location", "Green Hosting"],
        )
        self.assertEqual(dumped["Eco Score"], 100)
        self.assertTrue(dumped["Green Hosting"])


if __name__ == "__main__":
    unittest.main()
