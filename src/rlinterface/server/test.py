import json
import threading
import unittest
from itertools import count

import numpy as np
import zmq
from gym.spaces import Box, Tuple as TupleSpace, Discrete

from ..environment import MDPEnvironment, POMDPEnvironment, KMarkovEnvironment
from ..exceptions import ProtocolError, RemoteError
from ..model import dummy
from . import protocol, ZMQServer, RemoteEnvironment
from .cli import load_model, make_environment

_ids = count()



class TupleSwitch(dummy.Switch):
    """
    A `Switch` whose actions are `(move, unused)` tuples.
    """

    def gen(self, state, action, random):
        return super().gen(state, action[0], random)


    def actions(self):
        return TupleSpace((Discrete(3), Box(low=0., high=1., shape=(2,))))



class Marker:

    def __str__(self):
        return 'marker'



class VisitedSwitch(dummy.Switch):
    """
    A `Switch` reporting python sets and plain objects as info.
    """

    has_info = True

    def gen(self, state, action, random):
        nstate, reward = super().gen(state, action, random)
        return nstate, reward, {'visited': {nstate}, 'marker': Marker()}



class TestProtocol(unittest.TestCase):


    def test_decode_request(self):
        self.assertEqual(protocol.decode_request('{"command": "reset"}'), ('reset', None))
        self.assertEqual(protocol.decode_request(b'{"command": "step", "payload": 1}'),\
                         ('step', 1))


    def test_malformed_requests(self):
        for message in ('not json', b'\xff\xfe', '[1, 2]', '{}',\
                        '{"command": "bogus"}', '{"command": "step"}'):
            with self.assertRaises(ProtocolError):
                protocol.decode_request(message)


    def test_encode(self):
        message = protocol.ok({'obs': np.arange(3, dtype=np.float32),\
                               'r': np.float64(1.5), 't': np.bool_(True)})
        self.assertEqual(json.loads(message),\
                         {'status': 'ok', 'result': {'obs': [0., 1., 2.], 'r': 1.5, 't': True}})
        self.assertEqual(json.loads(protocol.error('bad')),\
                         {'status': 'error', 'error': 'bad'})
        self.assertEqual(json.loads(protocol.encode({'s': {3}, 'f': frozenset()})),\
                         {'s': [3], 'f': []})
        self.assertEqual(json.loads(protocol.encode(Marker())), 'marker')


    def test_decode_reply(self):
        self.assertEqual(protocol.decode_reply('{"status": "ok", "result": 1}')['result'], 1)
        with self.assertRaises(ProtocolError):
            protocol.decode_reply('{"result": 1}')



class TestServerHandle(unittest.TestCase):


    def setUp(self):
        self.env = MDPEnvironment(dummy.Switch(start=0))
        self.server = ZMQServer(self.env, address='inproc://unused')


    def handle(self, command, payload=None):
        return json.loads(self.server.handle(protocol.request(command, payload)))


    def test_commands(self):
        reply = self.handle('reset')
        self.assertEqual(reply, {'status': 'ok', 'result': [0.]})
        reply = self.handle('step', 2)
        self.assertEqual(reply['status'], 'ok')
        self.assertEqual(reply['result'],\
                         {'observation': [1.], 'reward': -1., 'terminal': False, 'info': None})
        reply = self.handle('actions')
        self.assertEqual(reply['result'], {'type': 'discrete', 'n': 3, 'start': 0})
        reply = self.handle('sample_action')
        self.assertIn(reply['result'], (0, 1, 2))
        self.assertEqual(self.handle('obs_dimensions')['result'], [1])
        self.assertEqual(self.handle('n_actions')['result'], 3)
        self.assertEqual(self.handle('render'), {'status': 'ok', 'result': None})


    def test_errors_do_not_touch_environment(self):
        self.env.reset()
        state = self.env.state
        for message in ('{"command": "bogus"}', '{"command": "step"}', 'garbage'):
            reply = json.loads(self.server.handle(message))
            self.assertEqual(reply['status'], 'error')
            self.assertIsInstance(reply['error'], str)
        reply = self.handle('step', 1.5)
        self.assertEqual(reply['status'], 'error')
        self.assertEqual(self.env.state, state)


    def test_model_error(self):
        reply = self.handle('step', 7)
        self.assertEqual(reply['status'], 'error')
        self.assertIn('ValueError', reply['error'])
        self.assertEqual(self.handle('reset')['status'], 'ok')


    def test_structured_actions(self):
        server = ZMQServer(MDPEnvironment(TupleSwitch(start=0)), address='inproc://unused')
        reply = json.loads(server.handle(protocol.request('sample_action')))
        action = reply['result']
        self.assertEqual(len(action), 2)
        reply = json.loads(server.handle(protocol.request('step', [2, [0.5, 0.5]])))
        self.assertEqual(reply['result']['observation'], [1.])
        reply = json.loads(server.handle(protocol.request('step', [2, [0.5]])))
        self.assertEqual(reply['status'], 'error')
        reply = json.loads(server.handle(protocol.request('actions')))
        self.assertEqual(reply['result']['type'], 'tuple')


    def test_info_encoding(self):
        server = ZMQServer(POMDPEnvironment(dummy.NoisySwitch(info=True, start=0)),\
                           address='inproc://unused')
        reply = json.loads(server.handle(protocol.request('step', 2)))
        self.assertEqual(reply['result']['info'], {'state': 1})


    def test_non_json_info(self):
        env = MDPEnvironment(VisitedSwitch(start=0))
        server = ZMQServer(env, address='inproc://unused')
        reply = json.loads(server.handle(protocol.request('step', 2)))
        self.assertEqual(reply['status'], 'ok')
        self.assertEqual(reply['result']['info'], {'visited': [1], 'marker': 'marker'})
        self.assertEqual(reply['result']['observation'], [env.state])


    def test_close_command(self):
        self.server.running = True
        self.assertEqual(self.handle('close')['status'], 'ok')
        self.assertFalse(self.server.running)



class TestServerLoop(unittest.TestCase):


    def setUp(self):
        self.context = zmq.Context()
        self.address = 'inproc://rlinterface-test-{}'.format(next(_ids))


    def tearDown(self):
        self.context.term()


    def start(self, env):
        server = ZMQServer(env, address=self.address, context=self.context)
        server.bind()
        thread = threading.Thread(target=server.serve, daemon=True)
        thread.start()
        client = RemoteEnvironment(address=self.address, context=self.context,\
                                   timeout=5000)
        return server, thread, client


    def stop(self, server, thread, client):
        client.shutdown()
        thread.join(timeout=5)
        client.close()
        self.assertFalse(thread.is_alive())
        self.assertIsNone(server.socket)


    def test_session(self):
        env = POMDPEnvironment(dummy.NoisySwitch(), random_state=0)
        twin = POMDPEnvironment(dummy.NoisySwitch(), random_state=0)
        server, thread, client = self.start(env)
        try:
            obs = client.reset()
            self.assertTrue(np.array_equal(obs, twin.reset()))
            self.assertEqual(client.obs_dimensions(), twin.obs_dimensions())
            self.assertEqual(obs.shape, client.obs_dimensions())
            for _ in range(10):
                action = client.sample_action()
                self.assertEqual(action, twin.sample_action())
                obs, r, t, info = client.step(action)
                tobs, tr, tt, tinfo = twin.step(action)
                self.assertTrue(np.array_equal(obs, tobs))
                self.assertEqual((r, t, info), (tr, tt, tinfo))
            self.assertEqual(client.n_actions(), 3)
        finally:
            self.stop(server, thread, client)


    def test_actions_and_bogus(self):
        server, thread, client = self.start(MDPEnvironment(dummy.Switch()))
        try:
            reply = client.send('{"command": "actions"}')
            self.assertEqual(reply, {'status': 'ok',\
                                     'result': {'type': 'discrete', 'n': 3, 'start': 0}})
            reply = client.send('{"command": "bogus"}')
            self.assertEqual(reply['status'], 'error')
            self.assertIn('bogus', reply['error'])
            self.assertEqual(client.actions()['n'], 3)
        finally:
            self.stop(server, thread, client)


    def test_invalid_action_then_reset(self):
        server, thread, client = self.start(MDPEnvironment(dummy.Switch(start=0)))
        try:
            with self.assertRaises(RemoteError) as ctx:
                client.step(9)
            self.assertEqual(ctx.exception.command, 'step')
            self.assertEqual(client.reset().tolist(), [0.])
        finally:
            self.stop(server, thread, client)


    def test_kmarkov(self):
        env = KMarkovEnvironment(MDPEnvironment(dummy.Line()), k=4)
        server, thread, client = self.start(env)
        try:
            self.assertEqual(client.obs_dimensions(), (2, 4))
            self.assertEqual(client.reset().shape, (2, 4))
            obs, _, _, info = client.step(1)
            self.assertEqual(obs.shape, (2, 4))
            self.assertIn('clipped_x', info)
        finally:
            self.stop(server, thread, client)



class TestCli(unittest.TestCase):


    def test_load_model(self):
        self.assertIsInstance(load_model('switch'), dummy.Switch)
        self.assertIsInstance(load_model('rlinterface.model.dummy:Line'), dummy.Line)
        with self.assertRaises(ValueError):
            load_model('nonexistent')


    def test_make_environment(self):
        self.assertIsInstance(make_environment(dummy.Switch()), MDPEnvironment)
        env = make_environment(dummy.NoisySwitch(), obsvector_type=np.float64, k=2)
        self.assertIsInstance(env, KMarkovEnvironment)
        self.assertIsInstance(env.env, POMDPEnvironment)
        self.assertEqual(env.reset().dtype, np.float64)



if __name__ == '__main__':
    unittest.main(verbosity=0)
