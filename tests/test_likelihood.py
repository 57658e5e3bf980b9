"""
Tests for the measurement model: likelihood, schedule and oracles.
"""

import math

import numpy as np
import pytest

from bayesphase.errors import InvalidArgument, NumericalDegeneracy, OracleFailure
from bayesphase.likelihood import Outcome, check_probabilities, likelihood_at
from bayesphase.measurement import MeasurementOracle, SimulatedOracle, coerce_outcome
from bayesphase.schedule import next_trial_params


GRID = np.linspace(0.0, 1.0, 201)


# =============================================================================
# LIKELIHOOD
# =============================================================================

class TestLikelihood:
    """sin^2 / cos^2 response on the phase grid."""

    @pytest.mark.parametrize("time,angle", [(1.0, 0.0), (7.3, 0.013), (250.0, 0.02)])
    def test_values_are_probabilities(self, time, angle):
        for outcome in Outcome:
            values = likelihood_at(GRID, time, angle, outcome)
            assert values.shape == GRID.shape
            assert np.all(values >= 0.0)
            assert np.all(values <= 1.0)

    @pytest.mark.parametrize("time,angle", [(1.0, 0.0), (3.2, 0.01), (96.0, 0.005)])
    def test_outcomes_are_complementary(self, time, angle):
        zero = likelihood_at(GRID, time, angle, Outcome.ZERO)
        one = likelihood_at(GRID, time, angle, Outcome.ONE)
        np.testing.assert_allclose(zero + one, 1.0, atol=1e-12)

    def test_half_angle_in_argument(self):
        # phi=1, theta=0, t=pi -> sin^2(pi/2) = 1
        values = likelihood_at([0.0, 1.0], math.pi, 0.0, Outcome.ONE)
        assert values[0] == pytest.approx(0.0, abs=1e-15)
        assert values[1] == pytest.approx(1.0, abs=1e-15)

    def test_inversion_angle_shifts_the_zero(self):
        values = likelihood_at([0.25], 2.0, 0.25, Outcome.ONE)
        assert values[0] == pytest.approx(0.0, abs=1e-15)

    @pytest.mark.parametrize("time", [0.0, -1.0, float("inf"), float("nan")])
    def test_non_positive_time_rejected(self, time):
        with pytest.raises(InvalidArgument, match="time"):
            likelihood_at(GRID, time, 0.0, Outcome.ONE)

    def test_roundoff_is_clipped(self):
        values = check_probabilities([-1e-14, 0.3, 1.0 + 1e-14])
        np.testing.assert_array_equal(values, [0.0, 0.3, 1.0])

    @pytest.mark.parametrize("drifted", [
        [0.2, 1.0 + 1e-9],
        [-1e-6, 0.5],
        [np.nan, 0.5],
    ])
    def test_persistent_drift_rejected(self, drifted):
        with pytest.raises(NumericalDegeneracy, match="beyond roundoff"):
            check_probabilities(drifted)

    def test_non_binary_outcome_rejected(self):
        with pytest.raises(InvalidArgument, match="outcome"):
            likelihood_at(GRID, 1.0, 0.0, 2)


# =============================================================================
# SCHEDULE
# =============================================================================

class TestSchedule:
    """Geometric times, uniform inversion angles."""

    @pytest.mark.parametrize("k", [0, 1, 3, 10])
    def test_time_grows_geometrically(self, k):
        time, _ = next_trial_params(k, rng=np.random.default_rng(0))
        assert time == pytest.approx((9.0 / 8.0) ** k, rel=1e-15)

    def test_first_trial_has_unit_time(self):
        time, _ = next_trial_params(0, rng=np.random.default_rng(0))
        assert time == 1.0

    def test_angle_within_bound(self):
        rng = np.random.default_rng(123)
        angles = [next_trial_params(k, 0.02, rng)[1] for k in range(200)]
        assert min(angles) >= 0.0
        assert max(angles) <= 0.02

    def test_seeded_generators_reproduce(self):
        a = [next_trial_params(k, 0.02, np.random.default_rng(5)) for k in range(4)]
        b = [next_trial_params(k, 0.02, np.random.default_rng(5)) for k in range(4)]
        assert a == b

    def test_zero_bound_gives_zero_angle(self):
        _, angle = next_trial_params(2, 0.0, np.random.default_rng(1))
        assert angle == 0.0

    @pytest.mark.parametrize("k", [1.5, 2.0, True])
    def test_non_integer_index_rejected(self, k):
        with pytest.raises(InvalidArgument, match="integer"):
            next_trial_params(k, rng=np.random.default_rng(0))

    def test_numpy_integer_index_accepted(self):
        time, _ = next_trial_params(np.int64(2), rng=np.random.default_rng(0))
        assert time == pytest.approx(81.0 / 64.0)

    def test_overflowing_time_raises_degeneracy(self):
        with pytest.raises(NumericalDegeneracy, match="overflows") as excinfo:
            next_trial_params(7000, rng=np.random.default_rng(0))
        assert isinstance(excinfo.value.__cause__, OverflowError)

    def test_negative_index_rejected(self):
        with pytest.raises(InvalidArgument, match="trial_index"):
            next_trial_params(-1)

    def test_negative_bound_rejected(self):
        with pytest.raises(InvalidArgument, match="max_inversion_angle"):
            next_trial_params(0, -0.01)


# =============================================================================
# ORACLES
# =============================================================================

class TestCoerceOutcome:
    """Validation of raw oracle responses."""

    @pytest.mark.parametrize("raw,expected", [
        (Outcome.ONE, Outcome.ONE),
        (0, Outcome.ZERO),
        (1, Outcome.ONE),
        (True, Outcome.ONE),
        (False, Outcome.ZERO),
        (np.int64(1), Outcome.ONE),
        (np.bool_(False), Outcome.ZERO),
    ])
    def test_binary_values_accepted(self, raw, expected):
        assert coerce_outcome(raw) is expected

    @pytest.mark.parametrize("raw", [2, -1, 0.5, 1.0, "1", None])
    def test_non_binary_values_rejected(self, raw):
        with pytest.raises(OracleFailure, match="non-binary"):
            coerce_outcome(raw)


class TestSimulatedOracle:
    """Classical sampler of the documented response law."""

    def test_satisfies_protocol(self):
        assert isinstance(SimulatedOracle(0.3), MeasurementOracle)

    def test_certain_outcomes(self):
        oracle = SimulatedOracle(1.0, rng=np.random.default_rng(0))
        # sin^2(pi/2) = 1 and sin^2(0) = 0
        assert all(oracle.query(math.pi, 0.0) is Outcome.ONE for _ in range(20))
        assert all(oracle.query(math.pi, 1.0) is Outcome.ZERO for _ in range(20))
        assert oracle.calls == 40

    def test_frequency_matches_probability(self):
        oracle = SimulatedOracle(0.4, rng=np.random.default_rng(42))
        p = oracle.probability_one(2.0, 0.0)
        hits = sum(int(oracle.query(2.0, 0.0)) for _ in range(20000))
        assert hits / 20000 == pytest.approx(p, abs=0.02)

    def test_non_finite_phase_rejected(self):
        with pytest.raises(InvalidArgument):
            SimulatedOracle(float("nan"))
