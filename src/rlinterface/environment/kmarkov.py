"""
Defines the `KMarkovEnvironment` class which stacks the last `k` observations
of an environment, making a k-th order Markov problem look first order.
"""

from collections import deque
from typing import Any, Tuple

import numpy as np
from gym.spaces import Space

from .environment import AbstractEnvironment



class KMarkovEnvironment:
    """
    KMarkovEnvironment decorates an environment so that each observation is the
    history of the last `k` observations stacked along a new last axis, the
    most recent last. After `reset()` the history holds `k` copies of the
    initial observation. A `step()` before any `reset()` fills the history with
    copies of the observation it returns.

    Args:
    * env: The environment to wrap. Any object with `reset`, `step`, and
    `obs_dimensions` methods returning numpy observations.
    * k: Length of the history, at least 1.

    Attributes:
    * history: A `deque` of the last `k` observations.
    """

    def __init__(self, env: AbstractEnvironment, k: int=1):
        if k < 1:
            raise ValueError('History length k must be at least 1, got {}.'.format(k))
        self.env = env
        self.k = k
        self.history = deque(maxlen=k)


    def __str__(self):
        return '{}({}, k={})'.format(self.__class__.__name__, self.env, self.k)


    def __getattr__(self, name):
        # forwards state, random, model etc. to the wrapped environment
        if name == 'env':
            raise AttributeError(name)
        return getattr(self.env, name)


    def stacked(self) -> np.ndarray:
        return np.stack(self.history, axis=-1)


    def reset(self) -> np.ndarray:
        obs = self.env.reset()
        self.history.clear()
        for _ in range(self.k):
            self.history.append(np.copy(obs))
        return self.stacked()


    def step(self, action) -> Tuple[np.ndarray, float, bool, Any]:
        obs, reward, terminal, info = self.env.step(action)
        # stepping before reset pads the history with the first observation
        while len(self.history) < self.k - 1:
            self.history.append(np.copy(obs))
        self.history.append(obs)
        return self.stacked(), reward, terminal, info


    def obs_dimensions(self) -> Tuple[int]:
        return tuple(self.env.obs_dimensions()) + (self.k,)


    def actions(self) -> Space:
        return self.env.actions()


    def sample_action(self) -> Any:
        return self.env.sample_action()


    def n_actions(self) -> int:
        return self.env.n_actions()


    def render(self):
        return self.env.render()


    def close(self):
        return self.env.close()
