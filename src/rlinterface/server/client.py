"""
Defines the `RemoteEnvironment` class, a client for `ZMQServer` with the same
methods as a local environment.
"""

from typing import Any, Dict, Tuple, Union

import numpy as np
import zmq

from ..exceptions import RemoteError
from . import protocol



class RemoteEnvironment:
    """
    RemoteEnvironment sends each method call as a request over a ZeroMQ request
    (REQ) socket and waits for the reply.

    Args:
    * ip: The server's address.
    * port: The server's TCP port.
    * address: A full ZeroMQ endpoint. Overrides `ip` and `port`.
    * context: A `zmq.Context`. Defaults to the global instance.
    * timeout: Milliseconds to wait for a reply before `zmq.Again` is raised.
    Waits forever when `None`. A socket that timed out cannot be reused.
    """

    def __init__(self, ip: str='127.0.0.1', port: int=5555, address: str=None,\
        context: zmq.Context=None, timeout: int=None):
        self.address = address if address is not None\
                       else 'tcp://{}:{}'.format(ip, port)
        self.context = context if context is not None else zmq.Context.instance()
        self.socket = self.context.socket(zmq.REQ)
        if timeout is not None:
            self.socket.setsockopt(zmq.RCVTIMEO, timeout)
        self.socket.connect(self.address)


    def __enter__(self):
        return self


    def __exit__(self, *args):
        self.close()


    def send(self, message: Union[str, bytes]) -> Dict[str, Any]:
        """
        Sends a raw request frame and returns the decoded reply.
        """
        if isinstance(message, str):
            message = message.encode('utf-8')
        self.socket.send(message)
        return protocol.decode_reply(self.socket.recv())


    def request(self, command: str, payload: Any=None) -> Any:
        """
        Sends a command and returns its result.

        Raises:
        * RemoteError if the server replies with an error.
        """
        reply = self.send(protocol.request(command, payload))
        if reply['status'] == protocol.ERROR:
            raise RemoteError(reply.get('error', ''), command)
        return reply.get('result')


    def reset(self) -> np.ndarray:
        return np.asarray(self.request(protocol.RESET))


    def step(self, action) -> Tuple[np.ndarray, float, bool, Any]:
        result = self.request(protocol.STEP, action)
        return np.asarray(result['observation']), result['reward'],\
               result['terminal'], result['info']


    def actions(self) -> Dict[str, Any]:
        """
        Returns the description of the action space. See
        `rlinterface.helpers.spaces.describe`.
        """
        return self.request(protocol.ACTIONS)


    def sample_action(self) -> Any:
        return self.request(protocol.SAMPLE_ACTION)


    def obs_dimensions(self) -> Tuple[int]:
        return tuple(self.request(protocol.OBS_DIMENSIONS))


    def n_actions(self) -> int:
        return self.request(protocol.N_ACTIONS)


    def render(self):
        self.request(protocol.RENDER)


    def shutdown(self):
        """
        Asks the server to stop serving.
        """
        self.request(protocol.CLOSE)


    def close(self):
        self.socket.close(linger=0)
