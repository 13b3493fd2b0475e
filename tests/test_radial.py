"""
Tests for the radial (angular) scale.
"""

import pytest

from scalax.scale import InvalidArgumentError, OutOfRangeError
from scalax.radial import RadialScale


class TestBounds:
    def test_default_full_circle(self):
        scale = RadialScale(max_ticks=5)
        assert scale.get_bounds() == {"lower": 0, "upper": 360}

    def test_normalized(self):
        scale = RadialScale(max_ticks=5, low=-90, high=90)
        assert scale.get_bounds() == {"lower": 270, "upper": 450}

    def test_wrap_around(self):
        scale = RadialScale(max_ticks=5, low=350, high=30)
        assert scale.get_bounds() == {"lower": 350, "upper": 390}

    def test_large_angles(self):
        scale = RadialScale(max_ticks=5, low=400, high=500)
        assert scale.get_bounds() == {"lower": 40, "upper": 140}

    def test_identical_angles(self):
        with pytest.warns(UserWarning):
            scale = RadialScale(max_ticks=5, low=90, high=90)
        assert scale.get_bounds() == {"lower": 0, "upper": 360}

    def test_precision_not_supported(self):
        with pytest.raises(NotImplementedError):
            RadialScale(max_ticks=5).set_precision(5)

    def test_no_precision_argument(self):
        with pytest.raises(TypeError):
            RadialScale(5, 0, 90, precision=1)

    @pytest.mark.parametrize("max_ticks", [1, 1.4])
    def test_max_ticks_invalid(self, max_ticks):
        with pytest.raises(InvalidArgumentError):
            RadialScale(max_ticks=max_ticks)


class TestCompute:
    def test_example(self):
        scale = RadialScale(max_ticks=5, low=0, high=180).run()
        assert scale.get_ticks() == [0, 45, 90, 135, 180]
        assert scale.get_step_size() == 45
        assert scale.get_range() == 180

    def test_full_circle(self):
        scale = RadialScale(max_ticks=5).run()
        assert scale.get_ticks() == [0, 90, 180, 270]
        assert scale.get_tick_amount() == 4
        assert scale.get_extrema() == {"min": 0, "max": 360}
        assert scale.get_range() == 360

    def test_full_circle_fine(self):
        scale = RadialScale(max_ticks=13).run()
        assert scale.get_ticks() == [0, 30, 60, 90, 120, 150, 180, 210, 240, 270, 300, 330]

    def test_near_full_circle_snaps(self):
        scale = RadialScale(max_ticks=9, low=2, high=358).run()
        assert scale.get_extrema() == {"min": 0, "max": 360}
        assert scale.get_ticks() == [0, 45, 90, 135, 180, 225, 270, 315]

    def test_wrap_around(self):
        scale = RadialScale(max_ticks=5, low=350, high=30).run()
        assert scale.get_ticks() == [350, 0, 10, 20, 30]

    def test_wrap_around_escalates(self):
        scale = RadialScale(max_ticks=3, low=350, high=30).run()
        assert scale.get_ticks() == [330, 0, 30]
        assert scale.get_step_size() == 30

    def test_negative_start(self):
        scale = RadialScale(max_ticks=5, low=-90, high=90).run()
        assert scale.get_ticks() == [270, 315, 0, 45, 90]

    def test_escalation(self):
        scale = RadialScale(max_ticks=3, low=0, high=100).run()
        assert scale.get_ticks() == [0, 60, 120]

    def test_minimum_step(self):
        scale = RadialScale(max_ticks=10, low=10, high=12).run()
        assert scale.get_step_size() >= 1
        assert scale.get_ticks() == [10, 11, 12]

    @pytest.mark.parametrize("max_ticks, low, high", [
        (5, 0, 180),
        (4, 10, 80),
        (7, 200, 20),
        (2, 0, 360),
        (24, 0, 360),
        (6, 123, 321),
    ])
    def test_properties(self, max_ticks, low, high):
        scale = RadialScale(max_ticks=max_ticks, low=low, high=high).run()
        ticks = scale.get_ticks()

        assert len(ticks) == scale.get_tick_amount() <= max_ticks
        assert len(set(ticks)) == len(ticks)
        assert all(0 <= tick < 360 for tick in ticks)
        assert scale.get_range() <= 360


class TestProjection:
    def test_pct_of(self):
        scale = RadialScale(max_ticks=5, low=0, high=180).run()
        assert scale.pct_of(90) == 0.5
        assert scale.pct_of(45) == 0.25
        assert scale.pct_of(45, "max") == 0.75
        assert scale.pct_of(180) == 1

    def test_pct_of_wrap(self):
        scale = RadialScale(max_ticks=5, low=350, high=30).run()
        assert scale.pct_of(350) == 0
        assert scale.pct_of(10) == 0.5
        assert scale.pct_of(0) == 0.25
        assert scale.pct_of(-10) == 0
        assert scale.pct_of(30) == 1

    def test_pct_of_out_of_arc(self):
        scale = RadialScale(max_ticks=5, low=350, high=30).run()
        with pytest.raises(OutOfRangeError):
            scale.pct_of(100)

    def test_point_at(self):
        scale = RadialScale(max_ticks=5, low=350, high=30).run()
        assert scale.point_at(0) == 350
        assert scale.point_at(0.25) == 0
        assert scale.point_at(1) == 30
        assert scale.point_at(75) == 20

    def test_round_trip(self):
        scale = RadialScale(max_ticks=5, low=350, high=30).run()
        for value in (350, 355.5, 0, 12.25, 30):
            assert scale.point_at(scale.pct_of(value)) == pytest.approx(value, abs=1e-6)
        for pct in (0, 0.2, 0.5, 0.875, 1):
            assert scale.pct_of(scale.point_at(pct)) == pytest.approx(pct, abs=1e-6)

    def test_full_circle_projection(self):
        scale = RadialScale(max_ticks=5).run()
        assert scale.pct_of(270) == 0.75
        assert scale.point_at(0.5) == 180
        assert scale.tick_positions() == [0, 0.25, 0.5, 0.75]


class TestOutput:
    def test_labels(self):
        scale = RadialScale(max_ticks=5, low=350, high=30).run()
        assert scale.labels() == ["350°", "0°", "10°", "20°", "30°"]

    def test_to_frame(self):
        frame = RadialScale(max_ticks=5).run().to_frame()
        assert frame["tick"].tolist() == [0, 90, 180, 270]
        assert frame["position"].tolist() == [0, 0.25, 0.5, 0.75]
        assert frame["label"].tolist() == ["0°", "90°", "180°", "270°"]
