"""
Command line entry point to serve a model over a ZeroMQ socket.

Usage:

    > python -m rlinterface -h
    > python -m rlinterface --model noisyswitch --port 5555 --kmarkov 4
    > python -m rlinterface --model mypackage.models:GridWorld
"""

from argparse import ArgumentParser
from importlib import import_module
from typing import Any, List, Union

import numpy as np

from ..environment import MDPEnvironment, POMDPEnvironment, KMarkovEnvironment
from ..log import logger
from ..model import dummy, is_pomdp
from .server import ZMQServer

MODELS = {
    'switch': dummy.Switch,
    'line': dummy.Line,
    'noisyswitch': dummy.NoisySwitch,
}



def load_model(name: str) -> Any:
    """
    Instantiates a model from a built-in name (see `MODELS`) or a
    `package.module:Class` path. The class is called without arguments.
    """
    if name in MODELS:
        return MODELS[name]()
    module, _, attr = name.partition(':')
    if not attr:
        raise ValueError('Model must be one of {} or a "module:Class" path, got {!r}.'\
                         .format(', '.join(MODELS), name))
    return getattr(import_module(module), attr)()



def make_environment(model: Any, obsvector_type: np.dtype=None, seed: int=0,\
    k: int=1) -> Union[MDPEnvironment, POMDPEnvironment, KMarkovEnvironment]:
    """
    Wraps a model into the environment matching its variant, stacking `k`
    observations when `k > 1`.
    """
    env_class = POMDPEnvironment if is_pomdp(model) else MDPEnvironment
    env = env_class(model, obsvector_type=obsvector_type, random_state=seed)
    if k > 1:
        env = KMarkovEnvironment(env, k)
    return env



def main(argv: List[str]=None):
    args = ArgumentParser(description='Serve a decision-process model as an '
                                      'environment over a ZeroMQ socket.')
    args.add_argument('-m', '--model', metavar='M', type=str,
                      help="Built-in model ({}) or 'module:Class'"\
                           .format(', '.join(MODELS)), default='switch')
    args.add_argument('-i', '--ip', metavar='IP', type=str,
                      help="Interface to bind to", default='127.0.0.1')
    args.add_argument('-p', '--port', metavar='P', type=int,
                      help="TCP port to bind to", default=5555)
    args.add_argument('-s', '--seed', metavar='SEED', type=int,
                      help="Random number seed", default=0)
    args.add_argument('-k', '--kmarkov', metavar='K', type=int,
                      help="Number of past observations to stack", default=1)
    args.add_argument('--dtype', metavar='DTYPE', type=str,
                      help="Element type of observation vectors", default=None)
    args.add_argument('-v', '--verbose', action='store_true',
                      help="Log every request", default=False)
    args = args.parse_args(argv)

    if args.verbose:
        logger.setLevel('DEBUG')
    env = make_environment(load_model(args.model),
                           obsvector_type=None if args.dtype is None else np.dtype(args.dtype),
                           seed=args.seed, k=args.kmarkov)
    server = ZMQServer(env, ip=args.ip, port=args.port)
    try:
        server.serve()
    except KeyboardInterrupt:
        logger.info('Interrupted.')
