##############################################################################     ##    ######
#    A.J. Zwijnenburg                   2021-06-02           v1.2                 #  #      ##
#    Copyright (C) 2021 - AJ Zwijnenburg          GPLv3 license                  ######   ##
##############################################################################  ##    ## ######

## Copyright notice ##########################################################
# scalax calculates 'nice' axis scales, ticks and positions for plotting.
# Copyright (C) 2021 - AJ Zwijnenburg
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.
##############################################################################

"""
Linear scale with evenly spaced ticks.

:class: LinearScale
Searches for the smallest 'nice' step size (1, 2, 5 times a power of ten) that covers the
bounds within the maximum amount of ticks.
(see scale.Scale for attributes/functions)

"""
from __future__ import annotations
from typing import Tuple

import logging
import warnings

import numpy as np

from .scale import Scale, ScaleState, ComputationFailedError, MAX_ATTEMPTS

logger = logging.getLogger(__name__)

# The 'nice' multipliers of a power of ten
NICE_MULTIPLIERS: Tuple[int, ...] = (1, 2, 5, 10)

# Upper threshold (exclusive) of the leading digit that is rounded to the multiplier
NICE_THRESHOLDS: Tuple[float, ...] = (1.5, 3, 7, 10)

# Relative difference between a bound and a multiple of the step that is considered floating point noise
SNAP_TOLERANCE: float = 1e-9

class LinearScale(Scale):
    """
    Represents a linear scale between the lower and upper bound
        :param low: lower bound
        :param high: upper bound
        :param max_ticks: the maximum amount of ticks
        :param precision: the minimum step size
    """
    def __init__(self, low: float=None, high: float=None, max_ticks: int=None, precision: float=None):
        super().__init__(low, high, max_ticks, precision)

    @staticmethod
    def _decompose(value: float) -> Tuple[float, float]:
        """
        Splits a positive value into its leading part [1-10) and its power of ten
            :param value: the value to split
        """
        magnitude = float(10.0 ** np.floor(np.log10(value)))

        # Remove floating point noise, 0.3/0.1 should be 3 not 2.9999999999999996
        leading = round(value / magnitude, 9)

        return leading, magnitude

    def _nearest(self, value: float, rounding: bool) -> float:
        """
        Returns the 'nice' value near value.
            :param value: the (positive) value to make nice
            :param rounding: if True rounds to the nearest multiplier, if False floors to the multiplier below
        """
        leading, magnitude = self._decompose(value)

        if rounding:
            for multiplier, threshold in zip(NICE_MULTIPLIERS, NICE_THRESHOLDS):
                if leading < threshold:
                    return multiplier * magnitude
            return NICE_MULTIPLIERS[-1] * magnitude

        nearest = NICE_MULTIPLIERS[0]
        for multiplier in NICE_MULTIPLIERS:
            if multiplier <= leading:
                nearest = multiplier
        return nearest * magnitude

    def _next_nice(self, value: float) -> float:
        """
        Returns the smallest 'nice' value that is strictly larger than value
            :param value: the (positive) current value
        """
        leading, magnitude = self._decompose(value)

        for multiplier in NICE_MULTIPLIERS:
            if multiplier > leading:
                return multiplier * magnitude

        return 2 * NICE_MULTIPLIERS[-1] * magnitude

    def _initial_step(self, span: float) -> float:
        """
        Returns the first step size to try
            :param span: the distance between the bounds
        """
        if span <= 0:
            return self._precision

        nice_span = self._nearest(span, rounding=False)
        return max(self._nearest(nice_span / (self._max_ticks - 1), rounding=True), self._precision)

    @staticmethod
    def _quotient(value: float, step: float) -> float:
        """
        Returns value / step. A quotient that is an integer up to floating point noise (0.3/0.1)
        is returned as that integer.
        """
        quotient = value / step
        nearest = round(quotient)

        if abs((nearest * step) - value) <= abs(value) * SNAP_TOLERANCE:
            return float(nearest)

        return quotient

    @classmethod
    def _extrema(cls, lower: float, upper: float, step: float) -> Tuple[float, float]:
        """
        Returns the bounds snapped outwards to a multiple of step
        """
        minimum = float(np.floor(cls._quotient(lower, step))) * step
        maximum = float(np.ceil(cls._quotient(upper, step))) * step

        return minimum, maximum

    def compute(self) -> ScaleState:
        """
        Searches for the smallest nice step size that fits the bounds within max_ticks
        """
        step = self._initial_step(self._upper_bound - self._lower_bound)

        for attempt in range(0, MAX_ATTEMPTS, 1):
            minimum, maximum = self._extrema(self._lower_bound, self._upper_bound, step)

            if minimum == maximum:
                warnings.warn(f"lower and upper bound are identical ({self._lower_bound}); the scale is widened by one step of {step}")
                maximum = minimum + step

            tick_amount = int(round((maximum - minimum) / step)) + 1
            logger.debug(f"attempt {attempt}: step {step} -> [{minimum}, {maximum}] with {tick_amount} ticks")

            if tick_amount <= self._max_ticks:
                ticks = [minimum + (i * step) for i in range(0, tick_amount, 1)]
                return ScaleState(minimum, maximum, step, tick_amount, ticks)

            step = self._next_nice(step)

        raise ComputationFailedError(f"unable to fit [{self._lower_bound}, {self._upper_bound}] within {self._max_ticks} ticks at precision {self._precision}")

    def _point_at(self, state: ScaleState, pct: float) -> float:
        return (state.range * pct) + state.min

    def _pct_of(self, state: ScaleState, value: float) -> float:
        value = self._check_range(state, value)
        return (value - state.min) / state.range

    def _tick_position(self, state: ScaleState, index: int) -> float:
        return (state.ticks[index] - state.min) / state.range

    def _label(self, tick: float) -> str:
        """
        Integers are written out in full, thousands get a 'K' suffix
        """
        if not float(tick).is_integer():
            return "{:g}".format(tick)

        tick = int(tick)
        if tick//1000 != 0 and tick%1000 == 0:
            return "{}K".format(tick//1000)

        return "{}".format(tick)
