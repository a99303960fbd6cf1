"""
Defines the decision-process model interface and the `ModelAdapter` that
binds a model to an environment.

A model exposes:

* `initialstate(random)` which samples an initial state,
* `initialobs(state, random)` which samples an initial observation (POMDP only),
* `gen(state, action, random)` which generates the next state, observation
(POMDP only), reward, and info (if `has_info` is set),
* `isterminal(state)` which checks if a state ends the episode,
* `actions()` which returns the `gym.spaces` instance of possible actions.

`random` is always the `np.random.RandomState` owned by the environment.
"""

from .model import DecisionProcess, MDP, POMDP
from .adapter import ModelAdapter, bind, is_pomdp
from . import dummy
