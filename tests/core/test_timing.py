"""
Tests for Timer and timed().
"""

import pytest

from pycovariance.core.compute.timing import Timer, timed


class TestTimer:

    def test_sections_accumulate(self):
        timer = Timer()
        timer.start()
        with timer.section('merge'):
            pass
        with timer.section('merge'):
            pass
        timer.stop()
        result = timer.result()
        assert set(result) == {'total_seconds', 'merge'}
        assert result['merge'] >= 0.0
        assert result['total_seconds'] >= result['merge']

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError, match="before stop"):
            timer.result()

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError, match="before start"):
            Timer().stop()

    def test_section_recorded_on_error(self):
        timer = Timer()
        timer.start()
        with pytest.raises(ValueError):
            with timer.section('validation'):
                raise ValueError("bad input")
        timer.stop()
        assert 'validation' in timer.result()


class TestTimed:

    def test_context_manager(self):
        with timed() as timer:
            sum(range(100))
        assert timer.result()['total_seconds'] >= 0.0
