"""
Defines `Environment` classes that wrap a decision-process model into a
`gym.core.Env` compatible object.

All `Environment` classes have the following API:

* Methods:
  * `reset()` which samples a new initial state and returns its observation
  vector.
  * `step(action)` which returns the next observation vector, reward, episode
  over, and any object containing diagnostic info (`None` if the model has no
  info channel).
  * `actions()` which returns the model's action space.
  * `sample_action()` which samples an action with the environment's own
  random number generator.
  * `obs_dimensions()` which returns the shape of observation vectors.

* Attributes:
  * `state`: The current state of the model.
  * `action_space`: A `gym.spaces` instance which defines the actions possible.
"""

from .environment import AbstractEnvironment, MDPEnvironment, POMDPEnvironment
from .kmarkov import KMarkovEnvironment
