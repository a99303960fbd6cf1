"""
Defines the `ZMQServer` class which exposes an environment over a ZeroMQ
reply (REP) socket. The server answers one request at a time, so the
environment is never accessed concurrently.
"""

from typing import Any, Dict, Union

import zmq

from ..environment import AbstractEnvironment
from ..exceptions import ProtocolError
from ..helpers import spaces
from ..log import logger
from . import protocol



class ZMQServer:
    """
    ZMQServer receives requests, dispatches them to an environment, and sends
    back replies until `stop()` is called or a `close` request is served. Any
    error raised while handling a request, by the protocol, the environment, or
    the model, is sent back as an error reply and the server keeps running.

    Args:
    * env: The environment to expose. See `rlinterface.environment`.
    * ip: The interface to bind to.
    * port: The TCP port to bind to.
    * address: A full ZeroMQ endpoint (e.g. `ipc://...`, `inproc://...`).
    Overrides `ip` and `port`.
    * context: A `zmq.Context`. Defaults to the global instance.

    Attributes:
    * handlers: A dictionary of command names to functions taking the request
    payload and returning the result.
    """

    def __init__(self, env: AbstractEnvironment, ip: str='127.0.0.1',\
        port: int=5555, address: str=None, context: zmq.Context=None):
        self.env = env
        self.address = address if address is not None\
                       else 'tcp://{}:{}'.format(ip, port)
        self.context = context if context is not None else zmq.Context.instance()
        self.socket = None
        self.running = False
        self.handlers = {
            protocol.RESET: lambda _: self.env.reset(),
            protocol.STEP: self._step,
            protocol.ACTIONS: lambda _: spaces.describe(self.env.actions()),
            protocol.SAMPLE_ACTION: lambda _: self.env.sample_action(),
            protocol.OBS_DIMENSIONS: lambda _: list(self.env.obs_dimensions()),
            protocol.N_ACTIONS: lambda _: self.env.n_actions(),
            protocol.RENDER: lambda _: self.env.render(),
            protocol.CLOSE: self._close,
        }


    def __str__(self):
        return '{}({})'.format(self.__class__.__name__, self.address)


    def __enter__(self):
        self.bind()
        return self


    def __exit__(self, *args):
        self.close()


    def _step(self, payload: Any) -> Dict[str, Any]:
        try:
            action = spaces.from_json(self.env.actions(), payload)
        except (ValueError, TypeError) as exc:
            raise ProtocolError('Invalid action payload: {}'.format(exc)) from exc
        obs, reward, terminal, info = self.env.step(action)
        return {'observation': obs, 'reward': reward, 'terminal': terminal,\
                'info': info}


    def _close(self, _) -> None:
        self.running = False


    def bind(self):
        """
        Creates the REP socket and binds it to `address`.
        """
        if self.socket is not None:
            return
        self.socket = self.context.socket(zmq.REP)
        self.socket.bind(self.address)
        logger.info('Serving %s at %s.', self.env, self.address)


    def handle(self, message: Union[str, bytes]) -> str:
        """
        Decodes a request, dispatches it to the environment, and encodes the
        reply. Never raises.

        Args:
        * message: The raw request frame.

        Returns:
        * The encoded reply.
        """
        try:
            command, payload = protocol.decode_request(message)
            logger.debug('Request: %s %r', command, payload)
            return protocol.ok(self.handlers[command](payload))
        except ProtocolError as exc:
            logger.warning('Rejected request: %s', exc)
            return protocol.error(str(exc))
        except Exception as exc:
            logger.warning('Request failed: %s: %s', type(exc).__name__, exc)
            return protocol.error('{}: {}'.format(type(exc).__name__, exc))


    def serve(self):
        """
        Binds the socket if needed and serves requests until stopped. The
        socket is released on return.
        """
        self.bind()
        self.running = True
        try:
            while self.running:
                message = self.socket.recv()
                self.socket.send_string(self.handle(message))
        finally:
            self.close()


    def stop(self):
        """
        Stops serving after the request being handled, if any, is answered.
        """
        self.running = False


    def close(self):
        self.running = False
        if self.socket is not None:
            self.socket.close(linger=0)
            self.socket = None
            logger.info('Stopped serving at %s.', self.address)



def run_env_server(env: AbstractEnvironment, ip: str='127.0.0.1', port: int=5555):
    """
    Serves an environment over TCP until a `close` request is received or the
    process is interrupted.
    """
    ZMQServer(env, ip=ip, port=port).serve()
