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
Base classes for the calculation of axis scales.
A scale takes a (global) value range and a maximum amount of ticks and calculates a set
of 'nice' tick values that covers the range. Afterwards values can be projected onto the
relative (local) 0-1 space of the scale and back.

Usage is always: configure -> run() -> query. Any reconfiguration resets the scale.
    scale = LinearScale(3, 99, max_ticks=10).run()
    scale.get_ticks()   -> [0, 20, 40, 60, 80, 100]

:class: ScaleError
Base exception of all scale errors. The subclasses also inherit from the builtin
ValueError/RuntimeError so they can be caught as such.

:class: ScaleState
The (immutable) result of a single scale computation

:class: Scale
Abstract scale class providing the configuration and the query interface
.run()      - computes the scale, after which the scale is 'ready'
.get_ticks() - returns the tick values
.point_at() - returns the value at a relative position of the scale
.pct_of()   - returns the relative position of a value on the scale
.scaler()   - returns the relative positions of a list of values
.labels()   - returns a list of labels representative for the ticks
.to_frame() - returns a pd.DataFrame of the ticks, tick positions and labels

"""
from __future__ import annotations
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

# Maximum amount of attempts a step/precision search is allowed before giving up
MAX_ATTEMPTS: int = 100

# Output rounding of tick values, removes floating point noise
TICK_DECIMALS: int = 8

# Tolerance (relative to the range) of the bounds check in pct_of()
RANGE_TOLERANCE: float = 1e-9

class ScaleError(Exception):
    """
    Base class of all scale errors
    """
    pass

class InvalidArgumentError(ScaleError, ValueError):
    """
    Raised when a setter or query receives a value outside its domain
    """
    pass

class PreconditionFailedError(ScaleError, RuntimeError):
    """
    Raised when an operation requires configuration that has not been set
    """
    pass

class NotReadyError(ScaleError, RuntimeError):
    """
    Raised when the scale is queried before run() succeeded
    """
    pass

class OutOfRangeError(ScaleError, ValueError):
    """
    Raised when a value lies outside of the computed scale extrema
    """
    pass

class ComputationFailedError(ScaleError, RuntimeError):
    """
    Raised when no scale can be computed for the current configuration
    """
    pass

class ScaleState():
    """
    The result of a scale computation. Is only ever created as a whole.
        :param minimum: the scale minimum
        :param maximum: the scale maximum
        :param step_size: the distance between ticks (None for non-uniform scales)
        :param tick_amount: the amount of ticks
        :param ticks: the (unrounded) tick values in ascending order
    """
    __slots__ = ("min", "max", "step_size", "tick_amount", "range", "ticks")

    def __init__(self, minimum: float, maximum: float, step_size: Optional[float], tick_amount: int, ticks: List[float]):
        self.min: float = minimum
        self.max: float = maximum
        self.step_size: Optional[float] = step_size
        self.tick_amount: int = tick_amount
        self.range: float = maximum - minimum
        self.ticks: Tuple[float, ...] = tuple(ticks)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ScaleState):
            return False

        if self.min != other.min:
            return False
        if self.max != other.max:
            return False
        if self.step_size != other.step_size:
            return False
        if self.tick_amount != other.tick_amount:
            return False
        if self.ticks != other.ticks:
            return False

        return True

    def __repr__(self) -> str:
        return f"(ScaleState:[{self.min}-{self.max}] step={self.step_size} ticks={self.tick_amount})"

class Scale():
    """
    Abstract representation of a scale. Holds the configuration (bounds, max ticks, precision) and,
    after run(), the computed ScaleState. Should be subclassed for a scale-specific implementation.
        :param low: lower bound
        :param high: upper bound
        :param max_ticks: the maximum amount of ticks, has to be > 1
        :param precision: the minimum step between ticks, has to be > 0
    The configuration is only accessible through the getters and setters; every setter resets the
    computed scale.
    """
    def __init__(self, low: float=None, high: float=None, max_ticks: int=None, precision: float=None):
        self._lower_bound: Optional[float] = None
        self._upper_bound: Optional[float] = None
        self._max_ticks: Optional[int] = None
        self._precision: float = 1

        self._state: Optional[ScaleState] = None

        if low is not None and high is not None:
            self.set_bounds(low, high)

        if max_ticks is not None:
            self.set_max_ticks(max_ticks)

        if precision is not None:
            self.set_precision(precision)

    ## Configuration
    def set_bounds(self, low: float, high: float) -> Scale:
        """
        Sets the range the scale has to cover. The bounds are stored in ascending order.
            :param low: the lower bound
            :param high: the upper bound
        """
        low = float(low)
        high = float(high)

        self._lower_bound = min(low, high)
        self._upper_bound = max(low, high)
        self._state = None

        return self

    def set_max_ticks(self, max_ticks: int) -> Scale:
        """
        Sets the maximum amount of ticks. A scale needs atleast two ticks to span a range.
            :param max_ticks: the maximum amount of ticks
        """
        # Half values round up, 4.5 -> 5
        rounded = int(np.floor(max_ticks + 0.5))
        if rounded <= 1:
            raise InvalidArgumentError(f"maximum amount of ticks must be an integer value greater than 1, not '{max_ticks}'")

        self._max_ticks = rounded
        self._state = None

        return self

    def set_precision(self, precision: float) -> Scale:
        """
        Sets the precision; the smallest allowed step between two ticks
            :param precision: the precision
        """
        if precision <= 0:
            raise InvalidArgumentError(f"precision must be greater than 0, not '{precision}'")

        self._precision = float(precision)
        self._state = None

        return self

    def center_at(self, value: float=0) -> Scale:
        """
        Widens the bounds so they lie symmetrically around value
            :param value: the center of the scale
        """
        if self._lower_bound is None or self._upper_bound is None:
            raise PreconditionFailedError("the lower and upper bounds need to be set, please use set_bounds()")

        value = float(value)
        distance = max(abs(value - self._lower_bound), abs(value - self._upper_bound))

        self._lower_bound = value - distance
        self._upper_bound = value + distance
        self._state = None

        return self

    def get_bounds(self) -> Dict[str, Optional[float]]:
        return {"lower": self._lower_bound, "upper": self._upper_bound}

    def get_max_ticks(self) -> Optional[int]:
        return self._max_ticks

    def get_precision(self) -> float:
        return self._precision

    ## Computation
    def compute(self) -> ScaleState:
        """
        Calculates the scale from the current configuration. Must not modify the scale itself.
        Returns the computed state, or raises a ComputationFailedError.
        """
        raise NotImplementedError("implement in child class")

    def run(self) -> Scale:
        """
        Computes the scale. On success the scale is ready to be queried.
        """
        self._state = None

        if self._lower_bound is None or self._upper_bound is None or self._max_ticks is None:
            raise ComputationFailedError("failed to compute the scale, make sure the bounds and max ticks are set")

        self._state = self.compute()

        return self

    def is_ready(self) -> bool:
        return self._state is not None

    def _ready(self) -> ScaleState:
        """
        Returns the computed state or raises a NotReadyError
        """
        if self._state is None:
            raise NotReadyError("scale is not ready; set the bounds and max ticks and then call run()")

        return self._state

    ## Queries
    def get_minimum(self) -> float:
        return self._ready().min

    def get_maximum(self) -> float:
        return self._ready().max

    def get_extrema(self) -> Dict[str, float]:
        state = self._ready()
        return {"min": state.min, "max": state.max}

    def get_step_size(self) -> Optional[float]:
        return self._ready().step_size

    def get_tick_amount(self) -> int:
        return self._ready().tick_amount

    def get_range(self) -> float:
        return self._ready().range

    def is_negative(self) -> bool:
        """
        Whether the whole scale lies in the negative range
        """
        return self._ready().max <= 0

    def crosses_zero(self) -> bool:
        state = self._ready()
        return state.min < 0 and state.max > 0

    def get_ticks(self) -> List[float]:
        """
        Returns the tick values, rounded to remove floating point noise
        """
        return [self._round(x) for x in self._ticks(self._ready())]

    def get_ticks_reverse(self) -> List[float]:
        return self.get_ticks()[::-1]

    def _ticks(self, state: ScaleState) -> List[float]:
        """
        Returns the output tick values; can be overwritten for scales that transform their output
            :param state: the computed scale
        """
        return list(state.ticks)

    @staticmethod
    def _round(value: float) -> float:
        value = round(value, TICK_DECIMALS)
        # Prevent -0.0
        return value + 0.0

    ## Projections
    def point_at(self, pct: float) -> float:
        """
        Returns the scale value at the relative position
            :param pct: relative position as fraction [0-1] or percentage (1-100]
        """
        state = self._ready()
        return self._point_at(state, self._normalize_pct(pct))

    def pct_of(self, value: float, ref: str="min") -> float:
        """
        Returns the relative position of the value on the scale
            :param value: the value to project
            :param ref: 'min' for positions starting at the minimum, 'max' for positions starting at the maximum
        """
        if ref not in ("min", "max"):
            raise InvalidArgumentError(f"ref must be 'min' or 'max', not '{ref}'")

        state = self._ready()
        pct = self._pct_of(state, float(value))

        return 1 - pct if ref == "max" else pct

    def scaler(self, data: List[float], ref: str="min") -> List[float]:
        """
        Returns the relative position of each value; None values are passed on
            :param data: the values to project
            :param ref: see pct_of()
        """
        values: List[float] = []
        for value in data:
            if value is None:
                values.append(None)
            else:
                values.append(self.pct_of(value, ref))

        return values

    def tick_positions(self) -> List[float]:
        """
        Returns the relative position of each tick
        """
        state = self._ready()
        return [self._tick_position(state, i) for i in range(len(state.ticks))]

    def _point_at(self, state: ScaleState, pct: float) -> float:
        """
        Scale specific implementation of point_at(), receives a normalized [0-1] pct
        """
        raise NotImplementedError("implement in child class")

    def _pct_of(self, state: ScaleState, value: float) -> float:
        """
        Scale specific implementation of pct_of(), returns the pct relative to the minimum
        """
        raise NotImplementedError("implement in child class")

    def _tick_position(self, state: ScaleState, index: int) -> float:
        """
        Scale specific relative position of the tick at index
        """
        raise NotImplementedError("implement in child class")

    @staticmethod
    def _normalize_pct(pct: float) -> float:
        """
        Percentages above 1 are interpreted as [0-100] and converted into a fraction
        """
        pct = float(pct)
        if pct > 1:
            pct /= 100

        if pct < 0 or pct > 1:
            raise InvalidArgumentError(f"position must be within [0, 1] or [0, 100], not '{pct}'")

        return pct

    @staticmethod
    def _check_range(state: ScaleState, value: float) -> float:
        """
        Returns value clamped to the extrema. Values further outside than floating point noise raise
        an OutOfRangeError.
        """
        tolerance = abs(state.range) * RANGE_TOLERANCE

        if value < state.min - tolerance or value > state.max + tolerance:
            raise OutOfRangeError(f"value '{value}' is outside of the scale range [{state.min}, {state.max}]")

        return min(max(value, state.min), state.max)

    ## Output
    def labels(self) -> List[str]:
        """
        Returns a label for each tick
        """
        return [self._label(x) for x in self.get_ticks()]

    def _label(self, tick: float) -> str:
        """
        Converts a (rounded) tick value into a label
        """
        raise NotImplementedError("implement in child class")

    def to_frame(self) -> pd.DataFrame:
        """
        Returns a pd.DataFrame with the columns 'tick', 'position' and 'label', one row per tick
        """
        ticks = self.get_ticks()

        frame = pd.DataFrame({
            "tick": ticks,
            "position": [self._round(x) for x in self.tick_positions()],
            "label": self.labels()
        })

        return frame

    def _config(self) -> tuple:
        """
        The configuration used for equality testing
        """
        return (self._lower_bound, self._upper_bound, self._max_ticks, self._precision)

    def __eq__(self, other) -> bool:
        """
        Test for equality. Scales are equal if their type and configuration are equal.
        """
        if not isinstance(other, Scale):
            return False

        if type(self) is not type(other):
            return False

        return self._config() == other._config()

    def __repr__(self) -> str:
        output = f"({self.__class__.__name__}:[{self._lower_bound}-{self._upper_bound}]"
        if self._state is not None:
            output += f"->[{self._state.min}-{self._state.max}]x{self._state.tick_amount}"

        return output + ")"
