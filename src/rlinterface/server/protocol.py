"""
Defines the request/reply messages exchanged with `ZMQServer`. Messages are
JSON objects sent as text frames.

Requests:

    {"command": "step", "payload": <action>}

Replies:

    {"status": "ok", "result": <result>}
    {"status": "error", "error": <message>}

See `COMMANDS` for the accepted commands. Only `step` carries a payload.
"""

import json
from typing import Any, Dict, Tuple, Union

import numpy as np

from ..exceptions import ProtocolError

RESET = 'reset'
STEP = 'step'
ACTIONS = 'actions'
SAMPLE_ACTION = 'sample_action'
OBS_DIMENSIONS = 'obs_dimensions'
N_ACTIONS = 'n_actions'
RENDER = 'render'
CLOSE = 'close'

COMMANDS = (RESET, STEP, ACTIONS, SAMPLE_ACTION, OBS_DIMENSIONS, N_ACTIONS,\
            RENDER, CLOSE)
PAYLOAD_COMMANDS = (STEP,)

OK = 'ok'
ERROR = 'error'



class NumpyEncoder(json.JSONEncoder):
    """
    A JSON encoder that writes numpy arrays as (nested) lists and numpy
    scalars as python numbers. Sets become lists and any other value is
    written as its `str()`, so a reply never fails after the environment has
    already changed.
    """

    def default(self, o):
        if isinstance(o, np.ndarray):
            return o.tolist()
        if isinstance(o, np.generic):
            return o.item()
        if isinstance(o, (set, frozenset)):
            return list(o)
        return str(o)



def encode(obj: Any) -> str:
    return json.dumps(obj, cls=NumpyEncoder)



def decode(message: Union[str, bytes]) -> Any:
    """
    Parses a JSON text frame.

    Raises:
    * ProtocolError if the frame is not UTF-8 JSON.
    """
    try:
        if isinstance(message, bytes):
            message = message.decode('utf-8')
        return json.loads(message)
    except (UnicodeDecodeError, ValueError) as exc:
        raise ProtocolError('Malformed message: {}'.format(exc)) from exc



def decode_request(message: Union[str, bytes]) -> Tuple[str, Any]:
    """
    Decodes and validates a request.

    Args:
    * message: The raw request frame.

    Returns a tuple of:
    * The command name and its payload (`None` for commands without one).

    Raises:
    * ProtocolError if the message is not a JSON object, has an unknown or
    missing command, or lacks a required payload.
    """
    request = decode(message)
    if not isinstance(request, dict):
        raise ProtocolError('Request must be a JSON object, got {}.'\
                            .format(type(request).__name__))
    command = request.get('command')
    if command is None:
        raise ProtocolError('Request has no "command" field.')
    if command not in COMMANDS:
        raise ProtocolError('Unknown command {!r}. Expected one of: {}.'\
                            .format(command, ', '.join(COMMANDS)))
    if command in PAYLOAD_COMMANDS and request.get('payload') is None:
        raise ProtocolError('Command {!r} requires a "payload" field.'.format(command))
    return command, request.get('payload')



def request(command: str, payload: Any=None) -> str:
    message = {'command': command}
    if payload is not None:
        message['payload'] = payload
    return encode(message)



def ok(result: Any) -> str:
    return encode({'status': OK, 'result': result})



def error(message: str) -> str:
    return encode({'status': ERROR, 'error': message})



def decode_reply(message: Union[str, bytes]) -> Dict[str, Any]:
    """
    Decodes a reply and checks it has a valid status.

    Raises:
    * ProtocolError if the reply is malformed.
    """
    reply = decode(message)
    if not isinstance(reply, dict) or reply.get('status') not in (OK, ERROR):
        raise ProtocolError('Malformed reply: {!r}'.format(reply))
    return reply
