import numpy as np
from numpy.random import RandomState
from gym.spaces import Discrete

from ..model import MDP



class Line(MDP):
    """
    A 1D line with limits `+/- MAX_X`, `+/- MAX_V`, and `+/- MAX_A` for
    displacement, velocity, and acceleration respectively. There are two
    actions, left (0) and right (1) which cause acceleration. The goal is to
    remain in the middle with low velocity defined by tolerances `GOAL_X_TOL`
    and `GOAL_V_TOL` as fractions of `MAX_X/V` values.

      |---------- 0 ----------|
    -MAX_X                  +MAX_X

    States are `(x / MAX_X, v / MAX_V)` arrays. Each transition reports in its
    info whether the velocity or displacement hit a limit.
    """

    MAX_V = 0.05
    MAX_A = 0.01
    MAX_X = 1.

    GOAL_X = 0.         # As a fraction of MAX_X
    GOAL_V = 0.         # As a fraction of MAX_V

    GOAL_X_TOL = 0.1    # As a fraction of MAX_X
    GOAL_V_TOL = 1.0    # As a fraction of MAX_V

    has_info = True
    statetype = np.ndarray


    def initialstate(self, random: RandomState) -> np.ndarray:
        return random.uniform(-1, 1, size=2)


    def gen(self, state: np.ndarray, action: int, random: RandomState):
        if action not in (0, 1):
            raise ValueError('Invalid action {!r} for {}.'\
                             .format(action, self.__class__.__name__))
        x, v = state[0] * self.MAX_X, state[1] * self.MAX_V
        v += self.MAX_A * (action * 2 - 1)
        clipped_v = abs(v) > self.MAX_V
        v = np.clip(v, -self.MAX_V, self.MAX_V)
        x += v
        clipped_x = abs(x) > self.MAX_X
        x = np.clip(x, -self.MAX_X, self.MAX_X)
        nstate = np.asarray((x / self.MAX_X, v / self.MAX_V))
        reward = 10. if self.isterminal(nstate) else -1.
        return nstate, reward, {'clipped_v': bool(clipped_v), 'clipped_x': bool(clipped_x)}


    def isterminal(self, state: np.ndarray) -> bool:
        x_rel, v_rel = state
        centre_x = abs(x_rel - self.GOAL_X)
        centre_v = abs(v_rel - self.GOAL_V)
        return bool((centre_v <= self.GOAL_V_TOL) and (centre_x <= self.GOAL_X_TOL))


    def actions(self) -> Discrete:
        return Discrete(2)
