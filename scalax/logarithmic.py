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
Logarithmic scale with ticks on the powers of a base.

:class: LogarithmicScale
Places a tick on every power of the base between the precision and the bounds. Supports fully
negative scales and scales crossing zero, in which case an exact 0 tick is added. The precision
is the smallest tick magnitude next to zero; it is increased by a power of the base until the ticks
fit within max_ticks.
Ticks are placed at equal distance (by rank), values are projected logarithmically between their
neighbouring ticks.
(see scale.Scale for attributes/functions)

"""
from __future__ import annotations
from typing import List, Optional, Tuple

import bisect
import logging

import numpy as np

from .scale import Scale, ScaleState, InvalidArgumentError, ComputationFailedError, MAX_ATTEMPTS

logger = logging.getLogger(__name__)

# Prevents log(0) when projecting values next to the 0 tick
LOG_EPSILON: float = 1e-10

# Decimals of a logarithm that are significant for determining the exponent
EXPONENT_DECIMALS: int = 9

_SUPERSCRIPT = str.maketrans("-0123456789", "⁻⁰¹²³⁴⁵⁶⁷⁸⁹")

class LogarithmicScale(Scale):
    """
    Represents a logarithmic scale between the lower and upper bound
        :param low: lower bound
        :param high: upper bound
        :param max_ticks: the maximum amount of ticks
        :param precision: the smallest tick magnitude (rounded to a power of base)
        :param base: the logarithm base, has to be > 1
    """
    def __init__(self, low: float=None, high: float=None, max_ticks: int=None, precision: float=None, base: float=None):
        self._base: float = 10.0
        super().__init__(low, high, max_ticks, precision)

        if base is not None:
            self.set_base(base)

    def set_base(self, base: float) -> LogarithmicScale:
        """
        Sets the base of the logarithm
            :param base: the base, has to be > 1
        """
        if base <= 1:
            raise InvalidArgumentError(f"logarithm base must be greater than 1, not '{base}'")

        self._base = float(base)
        self._state = None

        return self

    def get_base(self) -> float:
        return self._base

    def _log(self, value: float) -> float:
        """
        Returns the logarithm (in base) of the magnitude of value. 0 returns 0.
        The result is rounded to remove floating point noise; log10(1000) should be 3 not 2.9999999999999996
            :param value: the value
        """
        if value == 0:
            return 0.0

        return round(float(np.log(abs(value)) / np.log(self._base)), EXPONENT_DECIMALS)

    def _power(self, exponent: int) -> float:
        """
        Returns base**exponent
        """
        try:
            return float(self._base) ** exponent
        except OverflowError as error:
            raise ComputationFailedError(f"tick {self._base}^{exponent} is too large to represent") from error

    def _wrap(self, value: float, exp_precision: int, outward: int) -> Tuple[int, Optional[int]]:
        """
        Wraps a bound onto the power lattice, returns the sign and exponent of the wrapped bound.
        The exponent is None if the bound wraps onto 0.
            :param value: the bound
            :param exp_precision: the smallest allowed exponent
            :param outward: the direction of the outside of the scale; -1 for the lower bound, 1 for the upper bound
        """
        if value == 0:
            return 0, None

        sign = 1 if value > 0 else -1

        if sign == outward:
            # Growing magnitude; wrap to the next power, but never below the precision
            return sign, max(int(np.ceil(self._log(value))), exp_precision)

        # Shrinking magnitude; wrap to the previous power, or onto 0 if below the precision
        exponent = int(np.floor(self._log(value)))
        if exponent < exp_precision:
            return 0, None

        return sign, exponent

    def _generate(self, precision: float) -> List[float]:
        """
        Generates the ticks for the bounds given the precision.
            :param precision: the smallest tick magnitude
        """
        exp_precision = int(round(self._log(precision)))

        lower_sign, lower_exp = self._wrap(self._lower_bound, exp_precision, outward=-1)
        upper_sign, upper_exp = self._wrap(self._upper_bound, exp_precision, outward=1)

        ticks: List[float] = []

        # Negative side
        if lower_sign < 0:
            for exponent in range(exp_precision, lower_exp + 1, 1):
                ticks.append(-self._power(exponent))

        # Positive side
        if upper_sign > 0:
            for exponent in range(exp_precision, upper_exp + 1, 1):
                ticks.append(self._power(exponent))

        crosses_zero = self._lower_bound < 0 and self._upper_bound > 0
        near_zero = abs(self._lower_bound) < precision or abs(self._upper_bound) < precision
        if crosses_zero or near_zero:
            ticks.append(0.0)

        return sorted(set(ticks))

    def compute(self) -> ScaleState:
        """
        Generates the ticks, the precision is increased by a power of base until the ticks fit in max_ticks
        """
        precision = self._precision

        for attempt in range(0, MAX_ATTEMPTS, 1):
            ticks = self._generate(precision)
            logger.debug(f"attempt {attempt}: precision {precision} -> {len(ticks)} ticks")

            if len(ticks) <= self._max_ticks:
                return ScaleState(ticks[0], ticks[-1], None, len(ticks), ticks)

            precision = self._power(int(round(self._log(precision))) + 1)

        raise ComputationFailedError(f"unable to reduce tick count of [{self._lower_bound}, {self._upper_bound}] to {self._max_ticks} ticks")

    ## Projections
    @staticmethod
    def _ln(value: float) -> float:
        return float(np.log(abs(value) + LOG_EPSILON))

    def _point_at(self, state: ScaleState, pct: float) -> float:
        intervals = len(state.ticks) - 1
        if intervals == 0:
            return state.ticks[0]

        position = pct * intervals
        index = min(int(position), intervals - 1)
        fraction = position - index

        start = state.ticks[index]
        end = state.ticks[index + 1]

        if fraction == 0:
            return start

        ln_start = self._ln(start)
        magnitude = np.exp(ln_start + fraction * (self._ln(end) - ln_start)) - LOG_EPSILON
        sign = 1 if (start + end) > 0 else -1

        return sign * float(magnitude)

    def _pct_of(self, state: ScaleState, value: float) -> float:
        value = self._check_range(state, value)

        intervals = len(state.ticks) - 1
        if intervals == 0:
            return 0.0

        # index of the first tick >= value
        index = bisect.bisect_left(state.ticks, value)
        if state.ticks[index] == value:
            return index / intervals

        start = state.ticks[index - 1]
        end = state.ticks[index]

        ln_start = self._ln(start)
        fraction = (self._ln(value) - ln_start) / (self._ln(end) - ln_start)

        return (index - 1 + fraction) / intervals

    def _tick_position(self, state: ScaleState, index: int) -> float:
        intervals = len(state.ticks) - 1
        if intervals == 0:
            return 0.0

        return index / intervals

    def _label(self, tick: float) -> str:
        """
        Powers are written as base with a superscript exponent, 10² / -10⁻¹
        """
        if tick == 0:
            return "0"

        exponent = int(round(self._log(tick)))
        if exponent == 0:
            value = "1"
        else:
            value = "{:g}{}".format(self._base, str(exponent).translate(_SUPERSCRIPT))

        return value if tick > 0 else "-" + value

    def _config(self) -> tuple:
        return super()._config() + (self._base,)
