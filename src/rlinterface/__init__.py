"""
rlinterface drives Markov decision process (MDP) and partially observable MDP
(POMDP) models step by step like reinforcement learning environments, and
serves them over a ZeroMQ socket so an agent in another process can reset and
step them.

* `model`: the model interface and the `ModelAdapter` binding models to
environments.
* `environment`: `MDPEnvironment`, `POMDPEnvironment`, `KMarkovEnvironment`.
* `server`: `ZMQServer`, `RemoteEnvironment` and the JSON message protocol.
"""

from .exceptions import RLInterfaceError, IncompatibleModelError, ProtocolError,\
                        RemoteError
from .model import MDP, POMDP, ModelAdapter
from .environment import AbstractEnvironment, MDPEnvironment, POMDPEnvironment,\
                         KMarkovEnvironment
from .server import ZMQServer, RemoteEnvironment, run_env_server

__version__ = '0.1.0'
