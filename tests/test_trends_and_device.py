import random

import pytest

from dropcheck.exceptions import DeviceNotFound
from dropcheck.schemas.biomarker import BiomarkerStatus
from dropcheck.schemas.test_result import TestResult
from dropcheck.services.device_simulator import SAMPLE_BOUNDS, TEST_STEPS, DeviceSimulator
from dropcheck.services.trend_analyzer import compute_delta, summarize_trends


def test_trends_compare_two_newest_results():
    results = [
        TestResult(id="3", date="2024-03-01", hemoglobin=12.0, glucose=110, crp=1.0),
        TestResult(id="2", date="2024-02-01", hemoglobin=12.2, glucose=100, crp=2.0),
        TestResult(id="1", date="2024-01-01", hemoglobin=9.0, glucose=50, crp=9.0),
    ]

    trends = {t.kind.value: t for t in summarize_trends(results)}

    assert trends["glucose"].delta_percent == 10.0
    assert trends["glucose"].direction == "up"
    assert trends["glucose"].current_status == BiomarkerStatus.NEEDS_ATTENTION
    assert trends["hemoglobin"].direction == "stable"
    assert trends["crp"].direction == "down"
    assert trends["crp"].previous_date == "2024-02-01"


def test_trends_need_two_results_and_skip_zero_baseline():
    one = [TestResult(id="1", date="2024-01-01", hemoglobin=12.0, glucose=90, crp=1.0)]
    assert summarize_trends(one) == []

    two = [
        TestResult(id="2", date="2024-02-01", hemoglobin=12.0, glucose=90, crp=1.0),
        TestResult(id="1", date="2024-01-01", hemoglobin=12.0, glucose=90, crp=0.0),
    ]
    assert [t.kind.value for t in summarize_trends(two)] == ["hemoglobin", "glucose"]
    assert compute_delta(None, 1.0) is None


def test_scan_lists_known_devices():
    names = [d.name for d in DeviceSimulator().scan()]

    assert names == ["DropCheck-A7B2", "DropCheck-F3C9"]
    assert len(TEST_STEPS) == 4


def test_pair_known_and_unknown_device():
    paired = DeviceSimulator().pair("DropCheck-F3C9")

    assert paired.device.signal == "medium"
    assert paired.cartridge_detected is True
    with pytest.raises(DeviceNotFound):
        DeviceSimulator().pair("Other-1234")


def test_read_sample_is_within_bounds_and_reproducible():
    first = DeviceSimulator(random.Random(42)).read_sample()
    second = DeviceSimulator(random.Random(42)).read_sample()

    assert first == second
    for key, (low, high) in SAMPLE_BOUNDS.items():
        assert low <= first[key] <= high
