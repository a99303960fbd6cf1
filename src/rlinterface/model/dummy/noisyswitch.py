import numpy as np
from numpy.random import RandomState
from gym.spaces import Discrete

from ..model import POMDP
from .switch import Switch



class NoisySwitch(POMDP):
    """
    A `Switch` whose position is only seen through a noisy sensor. With
    probability `noise` the sensor reports a uniformly random position instead
    of the true one. Observations are converted to one-hot vectors.

    Args:
    * noise: Probability of a random reading in [0, 1].
    * info: Whether transitions report the hidden next state as info.
    * start: A fixed initial state, drawn uniformly when `None`.
    """

    NSTATES = Switch.NSTATES
    statetype = int


    def __init__(self, noise: float=0.2, info: bool=False, start: int=None):
        self.noise = noise
        self.has_info = info
        self.switch = Switch(start=start)


    def sense(self, state: int, random: RandomState) -> int:
        if random.rand() < self.noise:
            return int(random.randint(self.NSTATES))
        return state


    def initialstate(self, random: RandomState) -> int:
        return self.switch.initialstate(random)


    def initialobs(self, state: int, random: RandomState) -> int:
        return self.sense(state, random)


    def gen(self, state: int, action: int, random: RandomState):
        nstate, reward = self.switch.gen(state, action, random)
        obs = self.sense(nstate, random)
        if self.has_info:
            return nstate, obs, reward, {'state': nstate}
        return nstate, obs, reward


    def isterminal(self, state: int) -> bool:
        return self.switch.isterminal(state)


    def actions(self) -> Discrete:
        return self.switch.actions()


    def convert_o(self, obs: int) -> np.ndarray:
        onehot = np.zeros(self.NSTATES)
        onehot[obs] = 1.
        return onehot
