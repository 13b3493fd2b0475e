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
Radial (angular) scale in degrees, for full circles and arcs.

:class: RadialScale
A linear scale restricted to common angles. Arcs crossing 0 degrees are supported by continuing
the upper bound past 360 degrees, the output values are reduced back into [0, 360).
(see scale.Scale and linear.LinearScale for attributes/functions)

"""
from __future__ import annotations
from typing import List, Optional, Tuple

import logging
import warnings

from .scale import ScaleState, ComputationFailedError, OutOfRangeError, MAX_ATTEMPTS, RANGE_TOLERANCE
from .linear import LinearScale

logger = logging.getLogger(__name__)

FULL_CIRCLE: int = 360

# Step sizes (in degrees) for the initial step lookup
NICE_ANGLES: Tuple[int, ...] = (0, 1, 2, 5, 10, 15, 30, 45, 60, 90, 120, 180, 360)

# Step sizes (in degrees) to escalate to when there are too many ticks
ESCALATION_ANGLES: Tuple[int, ...] = (15, 30, 45, 60, 90, 120, 180, 360)

# Scales spanning atleast this many degrees are snapped to the full circle
FULL_CIRCLE_SNAP: int = 355

class RadialScale(LinearScale):
    """
    Represents an angular scale between the lower and upper angle (in degrees)
        :param max_ticks: the maximum amount of ticks
        :param low: the start angle
        :param high: the end angle; if smaller than low the arc crosses 0 degrees
    The step size is always a whole amount of degrees, so unlike the other scales a RadialScale takes no
    precision argument and set_precision() raises a NotImplementedError.
    """
    def __init__(self, max_ticks: int=None, low: float=0, high: float=FULL_CIRCLE):
        super().__init__(low, high, max_ticks)

    def set_bounds(self, low: float, high: float) -> RadialScale:
        """
        Sets the start and end angle. The angles are normalized into [0, 360). An end angle smaller
        than the start angle continues past 360 degrees, equal angles describe the full circle.
            :param low: the start angle
            :param high: the end angle
        """
        lower = float(low) % FULL_CIRCLE
        upper = float(high) % FULL_CIRCLE

        if upper < lower:
            upper += FULL_CIRCLE
        elif upper == lower:
            if float(low) == float(high):
                warnings.warn(f"start and end angle are identical ({low}); the scale is set to the full circle")
            lower = 0.0
            upper = float(FULL_CIRCLE)

        self._lower_bound = lower
        self._upper_bound = upper
        self._state = None

        return self

    def set_precision(self, precision: float) -> RadialScale:
        raise NotImplementedError("RadialScale has a fixed precision of 1 degree")

    @staticmethod
    def _nearest_angle(value: float) -> int:
        """
        Returns the nice angle closest to value; ties resolve to the larger angle
            :param value: the angle
        """
        nearest = NICE_ANGLES[0]
        difference = abs(value - nearest)

        for angle in NICE_ANGLES:
            if abs(value - angle) <= difference:
                nearest = angle
                difference = abs(value - angle)

        return nearest

    @staticmethod
    def _next_angle(step: float) -> Optional[int]:
        """
        Returns the next escalation angle, or None if the step is already the full circle
        """
        for angle in ESCALATION_ANGLES:
            if angle > step:
                return angle

        return None

    def compute(self) -> ScaleState:
        """
        Searches for the smallest nice angle that fits the arc within max_ticks
        """
        span = min(self._upper_bound - self._lower_bound, FULL_CIRCLE)
        step = max(self._nearest_angle(span / (self._max_ticks - 1)), 1)

        for attempt in range(0, MAX_ATTEMPTS, 1):
            minimum, maximum = self._extrema(self._lower_bound, self._upper_bound, step)
            tick_amount = int(round((maximum - minimum) / step)) + 1

            if maximum - minimum >= FULL_CIRCLE_SNAP:
                # The start and end tick coincide on a full circle, only one of them is kept
                minimum = 0.0
                maximum = float(FULL_CIRCLE)
                tick_amount = int(round(FULL_CIRCLE / step))

            logger.debug(f"attempt {attempt}: step {step} -> [{minimum}, {maximum}] with {tick_amount} ticks")

            if tick_amount <= self._max_ticks:
                ticks = [minimum + (i * step) for i in range(0, tick_amount, 1)]
                return ScaleState(minimum, maximum, step, tick_amount, ticks)

            step = self._next_angle(step)
            if step is None:
                break

        raise ComputationFailedError(f"unable to fit the arc [{self._lower_bound}, {self._upper_bound}] within {self._max_ticks} ticks")

    def _ticks(self, state: ScaleState) -> List[float]:
        return [x % FULL_CIRCLE for x in state.ticks]

    def _point_at(self, state: ScaleState, pct: float) -> float:
        return ((state.range * pct) + state.min) % FULL_CIRCLE

    def _pct_of(self, state: ScaleState, value: float) -> float:
        pct = ((value - state.min) % FULL_CIRCLE) / state.range

        if pct > 1 + RANGE_TOLERANCE:
            raise OutOfRangeError(f"angle '{value}' is outside of the arc [{state.min}, {state.max}]")

        return min(pct, 1.0)

    def _label(self, tick: float) -> str:
        return "{:g}°".format(tick)

    def _config(self) -> tuple:
        return (self._lower_bound, self._upper_bound, self._max_ticks)
