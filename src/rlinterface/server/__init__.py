"""
Defines the `ZMQServer` which exposes an environment to other processes over
a ZeroMQ socket, the `RemoteEnvironment` client, and the JSON message format
they share (see `protocol`).

Commands and their results:

* `reset`: the initial observation as a list.
* `step` (payload: action): `{observation, reward, terminal, info}`.
* `actions`: a description of the action space.
* `sample_action`: an action sampled by the environment.
* `obs_dimensions`: the shape of observations.
* `n_actions`: the number of discrete actions.
* `render`: `null`.
* `close`: `null`, and the server stops.
"""

from . import protocol
from .server import ZMQServer, run_env_server
from .client import RemoteEnvironment
