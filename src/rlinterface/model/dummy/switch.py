import numpy as np
from numpy.random import RandomState
from gym.spaces import Discrete

from ..model import MDP



class Switch(MDP):
    """
    A discrete model represented by a switch taking a finite number of
    states. A state is represented by a single number. An action moves the state
    value down (0), up (2), or leaves it static (1). Reaching a goal state ends
    the episode.

    Args:
    * start: A fixed initial state. Initial states are drawn uniformly when
    `None`.
    """

    NSTATES = 5
    GOAL_STATES = (2,)
    statetype = int


    def __init__(self, start: int=None):
        self.start = start


    def initialstate(self, random: RandomState) -> int:
        if self.start is not None:
            return self.start
        return int(random.randint(self.NSTATES))


    def gen(self, state: int, action: int, random: RandomState):
        if action not in (0, 1, 2):
            raise ValueError('Invalid action {!r} for {}.'\
                             .format(action, self.__class__.__name__))
        nstate = int(np.clip(state + action - 1, 0, self.NSTATES - 1))
        reward = 0. if nstate in self.GOAL_STATES else -1.
        return nstate, reward


    def isterminal(self, state: int) -> bool:
        return state in self.GOAL_STATES


    def actions(self) -> Discrete:
        return Discrete(3)
