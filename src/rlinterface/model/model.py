"""
Defines the `MDP` and `POMDP` base classes describing the interface a
decision-process model must expose to be driven by an environment. Models do
not have to inherit from these classes; any object with the same members can
be bound. The base classes supply defaults for the optional members.
"""

from abc import ABC, abstractmethod
from typing import Any, Tuple

import numpy as np
from numpy.random import RandomState
from gym.spaces import Space

from ..helpers.spaces import to_vector



class DecisionProcess(ABC):
    """
    Members shared by fully and partially observable models.

    Class attributes:

    * `has_info`: Whether `gen` returns an extra info value as its last element.
    * `obsvector_type`: The default numpy dtype of observation vectors.
    * `statetype`: Optional type of states, for reference only.
    """

    has_info = False
    obsvector_type = np.float32
    statetype = object


    @abstractmethod
    def initialstate(self, random: RandomState) -> Any:
        """
        Samples an initial state.
        """


    @abstractmethod
    def gen(self, state: Any, action: Any, random: RandomState) -> Tuple:
        ...


    @abstractmethod
    def isterminal(self, state: Any) -> bool:
        ...


    @abstractmethod
    def actions(self) -> Space:
        """
        Returns the `gym.spaces` instance of possible actions.
        """



class MDP(DecisionProcess):
    """
    A fully observable decision process. The environment observes the state
    itself.

    `gen(state, action, random)` returns a tuple of:
    * next state, reward, and info if `has_info` is set.
    """

    def convert_s(self, state: Any) -> np.ndarray:
        """
        Converts a state into a numeric array. Override for states that are
        not numbers, arrays, or nested tuples/dicts of them.
        """
        return to_vector(state, np.float64)



class POMDP(DecisionProcess):
    """
    A partially observable decision process. The environment only sees
    observations generated from the hidden state.

    `gen(state, action, random)` returns a tuple of:
    * next state, observation, reward, and info if `has_info` is set.
    """

    @abstractmethod
    def initialobs(self, state: Any, random: RandomState) -> Any:
        """
        Samples the observation emitted by an initial state.
        """


    def convert_o(self, obs: Any) -> np.ndarray:
        """
        Converts an observation into a numeric array.
        """
        return to_vector(obs, np.float64)
