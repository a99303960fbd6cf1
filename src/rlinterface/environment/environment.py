"""
Defines the `MDPEnvironment` and `POMDPEnvironment` classes that drive a
decision-process model step by step through a `gym.core.Env` compatible API.
Observations leaving an environment are always numpy arrays of the
environment's `obsvector_type`.
"""

from copy import deepcopy
from typing import Any, Tuple, Union

import numpy as np
from numpy.random import RandomState
from gym.core import Env
from gym.spaces import Space

from ..helpers import spaces
from ..log import logger
from ..model import ModelAdapter



class AbstractEnvironment(Env):
    """
    AbstractEnvironment wraps a decision-process model into a `gym.core.Env`.
    The environment owns the current state of the model and a single random
    number generator used by `reset()`, `step()`, and `sample_action()`, so an
    environment seeded with the same value replays the same episodes.

    Args:
    * model: The decision-process model. See `rlinterface.model`.
    * obsvector_type: numpy dtype of returned observation vectors. Defaults to
    the model's `obsvector_type` or `np.float32`.
    * random_state: An `int` seed or `np.random.RandomState` instance used for
    all random number generation. Defaults to 0.

    Attributes:
    * state: The current state of the model.
    * action_space: The model's action space.
    * random: The owned `RandomState`.

    Note: The environment does not check actions nor refuse to step from a
    terminal state. Call `reset()` once `step()` reports `terminal`.
    """

    partial = None

    def __init__(self, model: Any, obsvector_type: np.dtype=None,\
        random_state: Union[int, RandomState]=0):
        super().__init__()
        self.adapter = ModelAdapter(model, obsvector_type, partial=self.partial)
        self.model = model
        self.obsvector_type = self.adapter.obsvector_type
        self.random = random_state if isinstance(random_state, RandomState)\
                      else RandomState(random_state)
        self.action_space = self.adapter.actions()
        self.state = self.adapter.initialstate(self.random)
        logger.debug('Created %s for %s.', self, type(model).__name__)


    def __str__(self):
        return self.__class__.__name__


    def reset(self) -> np.ndarray:
        raise NotImplementedError


    def step(self, action) -> Tuple[np.ndarray, float, bool, Any]:
        raise NotImplementedError


    def obs_dimensions(self) -> Tuple[int]:
        raise NotImplementedError


    def actions(self) -> Space:
        """
        Returns the model's action space. Sample it with `sample_action()` to
        use the environment's random number generator.
        """
        return self.adapter.actions()


    def sample_action(self) -> Any:
        """
        Samples an action from the action space using the environment's random
        number generator.
        """
        return spaces.sample(self.actions(), self.random)


    def n_actions(self) -> int:
        """
        Returns the number of actions in a discrete action space.

        Raises:
        * ValueError if the action space has continuous variables.
        """
        space = self.actions()
        if any(spaces.is_continuous(space)):
            raise ValueError('Action space {} is not discrete.'.format(space))
        return int(spaces.size_space(space))


    def render(self):
        pass


    def close(self):
        pass



class MDPEnvironment(AbstractEnvironment):
    """
    An environment over a fully observable model. Observations are the
    converted states.
    """

    partial = False

    def reset(self) -> np.ndarray:
        """
        Samples an initial state and returns it.

        Returns:
        * The converted initial state.
        """
        self.state = self.adapter.initialstate(self.random)
        return self.adapter.convert(self.state)


    def step(self, action) -> Tuple[np.ndarray, float, bool, Any]:
        """
        Given an action, compute the next state and reward of the environment.

        Args:
        * action: An action from the model's action space.

        Returns a tuple of:
        * converted next state (np.ndarray), reward (float), terminal state
        (bool), info (`None` if the model has no info channel).
        """
        nstate, reward, info = self.adapter.advance(self.state, action, self.random)
        self.state = nstate
        terminal = self.adapter.isterminal(nstate)
        return self.adapter.convert(nstate), float(reward), terminal, info


    def obs_dimensions(self) -> Tuple[int]:
        """
        Returns the shape of observation vectors. An initial state is sampled
        from a copy of the random number generator, so neither the current
        state nor the random sequence seen by other calls change.
        """
        scratch = deepcopy(self.random)
        return self.adapter.convert(self.adapter.initialstate(scratch)).shape



class POMDPEnvironment(AbstractEnvironment):
    """
    An environment over a partially observable model. Observations are the
    converted observations generated by the model.
    """

    partial = True

    def reset(self) -> np.ndarray:
        """
        Samples an initial state, generates an observation from it and returns
        the observation.

        Returns:
        * The converted initial observation.
        """
        self.state = self.adapter.initialstate(self.random)
        obs = self.adapter.initialobs(self.state, self.random)
        return self.adapter.convert(obs)


    def step(self, action) -> Tuple[np.ndarray, float, bool, Any]:
        """
        Given an action, compute the next state, observation, and reward of the
        environment.

        Args:
        * action: An action from the model's action space.

        Returns a tuple of:
        * converted observation (np.ndarray), reward (float), terminal state
        (bool), info (`None` if the model has no info channel).
        """
        nstate, obs, reward, info = self.adapter.advance(self.state, action,\
                                                         self.random)
        self.state = nstate
        terminal = self.adapter.isterminal(nstate)
        return self.adapter.convert(obs), float(reward), terminal, info


    def obs_dimensions(self) -> Tuple[int]:
        """
        Returns the shape of observation vectors. An initial observation is
        generated using a copy of the random number generator.
        """
        scratch = deepcopy(self.random)
        state = self.adapter.initialstate(scratch)
        return self.adapter.convert(self.adapter.initialobs(state, scratch)).shape
