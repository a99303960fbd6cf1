"""
Defines functions that operate on `gym.spaces` instances without relying on
the space's own random generator: sampling with a caller-owned
`RandomState`, describing a space as plain JSON-friendly data, sizing
discrete spaces, and converting samples to and from numeric vectors and
JSON values.
"""

from collections import OrderedDict
from typing import Any, Dict as DictType, Tuple, Union

import numpy as np
from numpy.random import RandomState
from gym.spaces import Space
from gym.spaces import Tuple as TupleSpace
from gym.spaces import Box, Dict, Discrete, MultiBinary, MultiDiscrete



def discrete_start(space: Discrete) -> int:
    """
    The smallest value of a `Discrete` space. Spaces of gym releases without
    `Discrete.start` begin at 0.
    """
    return int(getattr(space, 'start', 0))



def sample(space: Space, random: RandomState) -> Union[int, np.ndarray, tuple,\
    OrderedDict]:
    """
    Draws a sample from a space using `random` instead of the space's internal
    generator. Bounded `Box` variables are drawn uniformly, half-bounded ones
    from a shifted exponential, and unbounded ones from a standard normal.

    Args:
    * space: The `gym.spaces` instance to sample from.
    * random: The `RandomState` instance consumed by the draw.

    Returns:
    * A sample of the same type as `space.sample()`.
    """
    if isinstance(space, Discrete):
        return int(discrete_start(space) + random.randint(space.n))
    elif isinstance(space, MultiDiscrete):
        return random.randint(np.zeros_like(space.nvec), space.nvec)\
                     .astype(space.dtype)
    elif isinstance(space, MultiBinary):
        return random.randint(0, 2, size=space.shape).astype(space.dtype)
    elif isinstance(space, Box):
        integer = np.issubdtype(space.dtype, np.integer)
        low = space.low.astype(float)
        high = space.high.astype(float) + (1 if integer else 0)
        below = np.isfinite(low)
        above = np.isfinite(high)
        drawn = np.empty(space.shape)
        unbounded = ~below & ~above
        lower = below & ~above
        upper = ~below & above
        bounded = below & above
        drawn[unbounded] = random.normal(size=unbounded[unbounded].shape)
        drawn[lower] = random.exponential(size=lower[lower].shape) + low[lower]
        drawn[upper] = high[upper] - random.exponential(size=upper[upper].shape)
        drawn[bounded] = random.uniform(low[bounded], high[bounded])
        if integer:
            drawn = np.floor(drawn)
        return drawn.astype(space.dtype)
    elif isinstance(space, TupleSpace):
        return tuple(sample(subspace, random) for subspace in space.spaces)
    elif isinstance(space, Dict):
        return OrderedDict((name, sample(subspace, random)) for name, subspace\
                           in space.spaces.items())
    raise TypeError('Cannot sample from space of type {}.'\
                    .format(type(space).__name__))



def describe(space: Space) -> DictType[str, Any]:
    """
    Describes a space as a dictionary of plain python values. Enumerable spaces
    report their sizes, `Box` spaces report their bounds with infinite limits
    as `None`.

    Args:
    * space: The `gym.spaces` instance to describe.

    Returns:
    * A dictionary with a `type` key and type-specific keys.
    """
    if isinstance(space, Discrete):
        return {'type': 'discrete', 'n': int(space.n), 'start': int(discrete_start(space))}
    elif isinstance(space, MultiDiscrete):
        return {'type': 'multidiscrete', 'nvec': space.nvec.tolist()}
    elif isinstance(space, MultiBinary):
        return {'type': 'multibinary', 'n': np.asarray(space.n).tolist()}
    elif isinstance(space, Box):
        bds = bounds(space)
        return {'type': 'box',
                'low': [None if l is None else l.item() for l, _ in bds],
                'high': [None if h is None else h.item() for _, h in bds],
                'shape': list(space.shape),
                'dtype': np.dtype(space.dtype).name}
    elif isinstance(space, TupleSpace):
        return {'type': 'tuple',
                'spaces': [describe(subspace) for subspace in space.spaces]}
    elif isinstance(space, Dict):
        return {'type': 'dict',
                'spaces': OrderedDict((name, describe(subspace)) for \
                                      name, subspace in space.spaces.items())}
    return {'type': type(space).__name__}



def size_space(space: Space) -> int:
    """
    Calculates the size of a space. For continuous spaces, size is simply the
    range of values (# of states is infinite, however). I.e a (2,2) MultiDiscrete
    space returns 4. A Box(low=[0,0], high=[3, 2], dtype=float) returns 6.

    Args:
    * space: A space instance from `gym.spaces`.

    Returns:
    * The number of possible states.
    """
    n = 1
    if isinstance(space, MultiBinary):
        n = 2 ** int(np.prod(space.n))
    elif isinstance(space, Discrete):
        n = int(space.n)
    elif isinstance(space, MultiDiscrete):
        n = int(np.prod(space.nvec))
    elif isinstance(space, Box):
        if np.issubdtype(space.dtype, np.integer):
            n = int(np.prod(space.high - space.low + 1))  # +1 since high is inclusive
        else:
            n = np.prod(space.high - space.low)
    elif isinstance(space, TupleSpace):
        for subspace in space.spaces:
            n *= size_space(subspace)
    elif isinstance(space, Dict):
        for _, subspace in space.spaces.items():
            n *= size_space(subspace)
    return n



def bounds(space: Space) -> Tuple:
    """
    Computes the inclusive bounds for each variable in a tuple representing the
    space. So a TupleSpace(MultiDiscrete(2), MultiBinary([3, 5])) will have
    bounds of ((0,1), (0,1), (0,1), (0,2), (0, 4)). Infinite limits are returned
    as None in bounds.

    Args:
    * space (Space): Space instance describing the sample.

    Returns:
    * A flat tuple of inclusive (low, high) bounds for each variable in state.
    """
    if isinstance(space, Discrete):
        start = discrete_start(space)
        return ((start, start + space.n - 1),)
    elif isinstance(space, MultiDiscrete):
        return tuple(zip(np.zeros_like(space.nvec).ravel(), (space.nvec-1).ravel()))
    elif isinstance(space, MultiBinary):
        return tuple([(0, 1)] * int(np.prod(space.n)))
    elif isinstance(space, Box):
        bds = zip(space.low.ravel(), space.high.ravel())
        bds = [(None if l==-np.inf else l, None if h==np.inf else h) for \
                    l, h in bds]
        return tuple(bds)
    elif isinstance(space, TupleSpace):
        spaces = space.spaces
    elif isinstance(space, Dict):
        spaces = [subspace for _, subspace in space.spaces.items()]
    else:
        raise TypeError('Cannot bound space of type {}.'.format(type(space).__name__))
    flattened = []
    for subspace in spaces:
        flattened.extend(bounds(subspace))
    return tuple(flattened)



def is_continuous(space: Space) -> Tuple[bool]:
    """
    Checks whether each variable in space is continuous or discrete. Only True
    for Box space with float dtype.

    Args:
    * space: The `gym.spaces.Space` instance.

    Returns:
    * A tuple of length equal to variables in space which is True when the
    corresponding variable is continuous.
    """
    continuous = []
    if isinstance(space, Discrete):
        return (False,)
    elif isinstance(space, MultiDiscrete):
        return tuple([False] * space.nvec.size)
    elif isinstance(space, MultiBinary):
        return tuple([False] * int(np.prod(space.n)))
    elif isinstance(space, Box):
        res = not np.issubdtype(space.dtype, np.integer)
        return tuple([res] * int(np.prod(space.shape)))
    elif isinstance(space, Dict):
        spaces = [subspace for _, subspace in space.spaces.items()]
    elif isinstance(space, TupleSpace):
        spaces = space.spaces
    else:
        return (True,)
    for s in spaces:
        continuous.extend(is_continuous(s))
    return tuple(continuous)



def to_vector(sample: Any, dtype: np.dtype=np.float32) -> np.ndarray:
    """
    Converts a state or observation into a numeric array. Scalars become
    1-element vectors, arrays keep their shape, and nested tuples/dicts are
    flattened and concatenated in order.

    Args:
    * sample: The value to convert.
    * dtype: Element type of the returned array.

    Returns:
    * A `np.ndarray` of `dtype` with at least 1 dimension.
    """
    if isinstance(sample, dict):
        sample = tuple(sample.values())
    if isinstance(sample, (tuple, list)) and \
        not all(np.isscalar(s) for s in sample):
        parts = [to_vector(s, dtype).ravel() for s in sample]
        return np.concatenate(parts) if parts else np.zeros(0, dtype=dtype)
    return np.atleast_1d(np.asarray(sample, dtype=dtype))



def from_json(space: Space, value: Any) -> Union[int, np.ndarray, tuple,\
    OrderedDict]:
    """
    Reconstructs a sample of `space` from its decoded JSON form (numbers,
    nested lists, objects). Reverse of encoding a sample to JSON.

    Args:
    * space (Space): Space instance describing the sample.
    * value: The decoded JSON value.

    Returns:
    * Any one of int, np.array, tuple, OrderedDict depending on space. Values
    for unknown space types are returned unchanged.

    Raises:
    * ValueError/TypeError if `value` does not have the structure of `space`.
    """
    if isinstance(space, Discrete):
        if isinstance(value, (bool, str, bytes)) or not float(value).is_integer():
            raise ValueError('Expected an integer action, got {!r}.'.format(value))
        return int(value)
    elif isinstance(space, (Box, MultiDiscrete, MultiBinary)):
        arr = np.asarray(value, dtype=space.dtype)
        if arr.size != int(np.prod(space.shape)):
            raise ValueError('Expected {} values for shape {}, got {}.'\
                             .format(int(np.prod(space.shape)), space.shape, arr.size))
        return arr.reshape(space.shape)
    elif isinstance(space, TupleSpace):
        if not isinstance(value, (list, tuple)) or len(value) != len(space.spaces):
            raise ValueError('Expected a list of {} values.'.format(len(space.spaces)))
        return tuple(from_json(s, v) for s, v in zip(space.spaces, value))
    elif isinstance(space, Dict):
        if not isinstance(value, dict) or set(value) != set(space.spaces):
            raise ValueError('Expected an object with keys {}.'\
                             .format(sorted(space.spaces)))
        return OrderedDict((name, from_json(subspace, value[name])) for \
                           name, subspace in space.spaces.items())
    return value
