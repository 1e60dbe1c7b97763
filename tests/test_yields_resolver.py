"""Tests for baseline unwrapping and delta finalization."""

import pytest

from yields_preview.engine.accumulator import add_amount, add_amount_no_multiplier, add_percent
from yields_preview.engine.yields_resolver import (
    BaselineYieldsCache, finalize, round_half_up, unwrap_player_yields, unwrap_yields_of_type
)
from yields_preview.models import BaselineYield, create_empty_delta
from yields_preview.utils.constants import DEFAULT_YIELD_TYPES

from conftest import yield_trace


class TestUnwrap:

    def test_reads_first_step(self):
        baseline = unwrap_yields_of_type(yield_trace(12, 25))
        assert baseline == BaselineYield(base_amount=12, percent=25)

    def test_missing_trace_is_zero(self):
        assert unwrap_yields_of_type(None) == BaselineYield()
        assert unwrap_yields_of_type({}) == BaselineYield()

    def test_malformed_trace_is_zero(self):
        assert unwrap_yields_of_type({'base': {'steps': []}}) == BaselineYield()
        assert unwrap_yields_of_type({'base': {'steps': [{'base': {}}]}}) == BaselineYield()

    def test_unwrap_player_yields(self, player):
        baselines = unwrap_player_yields(player)
        assert baselines['YIELD_SCIENCE'] == BaselineYield(base_amount=10, percent=50)
        assert baselines['YIELD_GOLD'] == BaselineYield()


class TestBaselineYieldsCache:

    def test_empty_until_updated(self, player):
        cache = BaselineYieldsCache()
        assert cache.get() == {}
        cache.update(player)
        assert cache.get_for_yield_type('YIELD_SCIENCE').percent == 50
        assert cache.get_for_yield_type('YIELD_FAITH') == BaselineYield()

    def test_clear(self, player):
        cache = BaselineYieldsCache()
        cache.update(player)
        cache.clear()
        assert cache.get() == {}


class TestRoundHalfUp:

    @pytest.mark.parametrize('value, expected', [
        (2.5, 3),
        (2.49, 2),
        (-2.5, -2),
        (-2.51, -3),
        (16.666, 17),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestFinalize:

    def test_empty_delta_is_all_zero(self):
        yields = finalize(create_empty_delta(), {}, DEFAULT_YIELD_TYPES)
        assert yields == {yield_type: 0 for yield_type in DEFAULT_YIELD_TYPES}

    def test_flat_amount(self):
        delta = create_empty_delta()
        add_amount(delta, 'YIELD_GOLD', 3)
        yields = finalize(delta, {'YIELD_GOLD': BaselineYield(0, 0)}, DEFAULT_YIELD_TYPES)
        assert yields['YIELD_GOLD'] == 3

    def test_player_percent_multiplies_amount_when_enabled(self):
        delta = create_empty_delta()
        add_amount(delta, 'YIELD_SCIENCE', 10)
        baseline = {'YIELD_SCIENCE': BaselineYield(base_amount=40, percent=50)}
        assert finalize(delta, baseline, DEFAULT_YIELD_TYPES, apply_player_percent=True)['YIELD_SCIENCE'] == 15
        assert finalize(delta, baseline, DEFAULT_YIELD_TYPES, apply_player_percent=False)['YIELD_SCIENCE'] == 10

    def test_percent_applies_to_baseline_plus_amount(self):
        delta = create_empty_delta()
        add_amount(delta, 'YIELD_CULTURE', 20)
        add_percent(delta, 'YIELD_CULTURE', 10)
        baseline = {'YIELD_CULTURE': BaselineYield(base_amount=100, percent=0)}
        # 20 + (100 + 20) * 0.1
        assert finalize(delta, baseline, DEFAULT_YIELD_TYPES)['YIELD_CULTURE'] == 32

    def test_percent_without_amount(self):
        delta = create_empty_delta()
        add_percent(delta, 'YIELD_CULTURE', 10)
        baseline = {'YIELD_CULTURE': BaselineYield(base_amount=55, percent=0)}
        assert finalize(delta, baseline, DEFAULT_YIELD_TYPES)['YIELD_CULTURE'] == 6

    def test_amount_no_multiplier_bypasses_percent(self):
        delta = create_empty_delta()
        add_amount_no_multiplier(delta, 'YIELD_GOLD', 4)
        baseline = {'YIELD_GOLD': BaselineYield(base_amount=100, percent=100)}
        assert finalize(delta, baseline, DEFAULT_YIELD_TYPES)['YIELD_GOLD'] == 4

    def test_unknown_yield_type_in_delta_is_kept(self):
        delta = create_empty_delta()
        add_amount(delta, 'YIELD_CUSTOM', 2)
        yields = finalize(delta, {}, ['YIELD_GOLD'])
        assert yields == {'YIELD_GOLD': 0, 'YIELD_CUSTOM': 2}
