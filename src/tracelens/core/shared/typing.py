"""Shared typing aliases used across tracelens."""

from collections.abc import Mapping, Sequence

import numpy as np
import numpy.typing as npt

FloatArray = npt.NDArray[np.float64 | np.float32]
IntArray = npt.NDArray[np.int_]

# Anything numpy can turn into a 1-D float array.
SampleLike = Sequence[float] | FloatArray

# Variable name -> samples for one chain.
Trace = Mapping[str, SampleLike]
