import unittest
from copy import deepcopy
from numbers import Number

import numpy as np
from numpy.random import RandomState
from gym.spaces import Box

from ..exceptions import IncompatibleModelError
from ..model import dummy
from . import MDPEnvironment, POMDPEnvironment, KMarkovEnvironment



class ContinuousLine(dummy.Line):
    """
    A `Line` model accepting a continuous acceleration in [-1, 1].
    """

    def gen(self, state, action, random):
        return super().gen(state, int(action[0] > 0), random)


    def actions(self):
        return Box(low=-1., high=1., shape=(1,), dtype=np.float32)



class Float64Switch(dummy.Switch):

    obsvector_type = np.float64



class TestEnvironment(unittest.TestCase):


    def setUp(self):
        self.envs = [MDPEnvironment(dummy.Switch()),
                     MDPEnvironment(dummy.Line()),
                     POMDPEnvironment(dummy.NoisySwitch()),
                     POMDPEnvironment(dummy.NoisySwitch(info=True))]


    def test_transitions(self):
        for env in self.envs:
            env.reset()
            for _ in range(50):
                obs, r, t, _ = env.step(env.sample_action())
                self.assertIsInstance(obs, np.ndarray)
                self.assertEqual(obs.dtype, np.float32)
                self.assertIsInstance(r, float)
                self.assertIsInstance(t, bool)
                if t:
                    env.reset()


    def test_reset_shape(self):
        for env in self.envs:
            self.assertEqual(env.reset().shape, env.obs_dimensions())
        self.assertEqual(self.envs[0].obs_dimensions(), (1,))
        self.assertEqual(self.envs[1].obs_dimensions(), (2,))
        self.assertEqual(self.envs[2].obs_dimensions(), (dummy.NoisySwitch.NSTATES,))


    def test_obs_dimensions_side_effect_free(self):
        for i, env in enumerate(self.envs):
            twin = deepcopy(env)
            state = deepcopy(env.state)
            self.assertEqual(env.obs_dimensions(), env.obs_dimensions())
            self.assertTrue(np.array_equal(env.state, state))
            self.assertTrue(np.array_equal(env.reset(), twin.reset()))
            a = twin.sample_action()
            self.assertEqual(env.sample_action(), a)
            o1, r1, t1, _ = env.step(a)
            o2, r2, t2, _ = twin.step(a)
            self.assertTrue(np.array_equal(o1, o2))
            self.assertEqual((r1, t1), (r2, t2))


    def test_determinism(self):
        def run(env):
            trace = [env.reset().tolist()]
            for _ in range(30):
                obs, r, t, _ = env.step(env.sample_action())
                trace.append((obs.tolist(), r, t))
                if t:
                    trace.append(env.reset().tolist())
            return trace
        for make in (lambda: MDPEnvironment(dummy.Line(), random_state=7),
                     lambda: POMDPEnvironment(dummy.NoisySwitch(), random_state=7)):
            self.assertEqual(run(make()), run(make()))
        self.assertNotEqual(run(MDPEnvironment(dummy.Line(), random_state=1)),
                            run(MDPEnvironment(dummy.Line(), random_state=2)))


    def test_seed_replay(self):
        env = MDPEnvironment(dummy.Switch(start=0), random_state=0)
        first = env.reset()
        self.assertEqual(first.shape, env.obs_dimensions())
        obs, r, t, info = env.step(2)
        self.assertIsInstance(t, bool)
        self.assertIsInstance(r, Number)
        self.assertTrue(np.array_equal(env.reset(), first))


    def test_info(self):
        for env in (self.envs[0], self.envs[2]):
            env.reset()
            for _ in range(10):
                self.assertIsNone(env.step(env.sample_action())[3])
        env = self.envs[3]
        env.reset()
        for _ in range(10):
            state, action = env.state, env.sample_action()
            expected = env.model.gen(state, action, deepcopy(env.random))[3]
            self.assertEqual(env.step(action)[3], expected)
            self.assertEqual(env.step(env.sample_action())[3], {'state': env.state})
        env = self.envs[1]
        env.reset()
        state, action = env.state, 1
        expected = env.model.gen(state, action, deepcopy(env.random))[2]
        self.assertEqual(env.step(action)[3], expected)


    def test_state_updates(self):
        env = MDPEnvironment(dummy.Switch(start=0))
        env.reset()
        self.assertEqual(env.state, 0)
        obs, _, t, _ = env.step(2)
        self.assertEqual(env.state, 1)
        self.assertEqual(obs.tolist(), [1.])
        self.assertFalse(t)
        obs, r, t, _ = env.step(2)
        self.assertTrue(t)
        self.assertEqual(r, 0.)
        # stepping past a terminal state is allowed
        obs, _, t, _ = env.step(2)
        self.assertEqual(env.state, 3)
        self.assertFalse(t)


    def test_state_valid_after_construction(self):
        for env in self.envs:
            self.assertIsNotNone(env.state)


    def test_invalid_action(self):
        env = MDPEnvironment(dummy.Switch(start=0))
        env.reset()
        with self.assertRaises(ValueError):
            env.step(5)
        self.assertEqual(env.state, 0)


    def test_construction_errors(self):
        with self.assertRaises(IncompatibleModelError):
            MDPEnvironment(dummy.NoisySwitch())
        with self.assertRaises(IncompatibleModelError):
            POMDPEnvironment(dummy.Switch())
        with self.assertRaises(TypeError):
            MDPEnvironment(object())


    def test_obsvector_type(self):
        self.assertEqual(MDPEnvironment(Float64Switch()).reset().dtype, np.float64)
        env = MDPEnvironment(Float64Switch(), obsvector_type=np.int32)
        self.assertEqual(env.reset().dtype, np.int32)
        self.assertEqual(env.step(1)[0].dtype, np.int32)


    def test_actions(self):
        env = self.envs[0]
        self.assertEqual(env.actions(), env.action_space)
        self.assertEqual(env.n_actions(), 3)
        for _ in range(20):
            self.assertTrue(env.action_space.contains(env.sample_action()))
        env = MDPEnvironment(ContinuousLine())
        self.assertTrue(env.actions().contains(env.sample_action()))
        env.step(env.sample_action())
        with self.assertRaises(ValueError):
            env.n_actions()


    def test_shared_random_state(self):
        random = RandomState(3)
        env = MDPEnvironment(dummy.Line(), random_state=random)
        self.assertIs(env.random, random)



class TestKMarkovEnvironment(unittest.TestCase):


    def setUp(self):
        self.k = 3
        self.env = KMarkovEnvironment(POMDPEnvironment(dummy.NoisySwitch(noise=0.)),\
                                      k=self.k)


    def test_shapes(self):
        obs = self.env.reset()
        self.assertEqual(obs.shape, (dummy.NoisySwitch.NSTATES, self.k))
        self.assertEqual(obs.shape, self.env.obs_dimensions())
        obs, r, t, info = self.env.step(self.env.sample_action())
        self.assertEqual(obs.shape, self.env.obs_dimensions())
        self.assertIsInstance(r, float)
        self.assertIsNone(info)


    def test_history(self):
        obs = self.env.reset()
        for i in range(1, self.k):
            self.assertTrue(np.array_equal(obs[:, 0], obs[:, i]))
        state = self.env.state
        actions = [1, 1, 1, 1]
        for a in actions:
            obs, _, _, _ = self.env.step(a)
        # static switch with a noiseless sensor observes the same position
        self.assertTrue(np.all(obs[state] == 1.))
        inner = KMarkovEnvironment(MDPEnvironment(dummy.Switch(start=0)), k=2)
        inner.reset()
        obs, _, _, _ = inner.step(2)
        self.assertEqual(obs.tolist(), [[0., 1.]])


    def test_step_before_reset(self):
        env = KMarkovEnvironment(MDPEnvironment(dummy.Switch(start=0)), k=2)
        obs, _, _, _ = env.step(2)
        self.assertEqual(obs.shape, env.obs_dimensions())
        self.assertEqual(obs.tolist(), [[1., 1.]])
        obs, _, _, _ = env.step(2)
        self.assertEqual(obs.tolist(), [[1., 2.]])
        obs, _, _, _ = self.env.step(0)
        self.assertEqual(obs.shape, self.env.obs_dimensions())


    def test_forwarding(self):
        self.assertEqual(self.env.n_actions(), 3)
        self.assertIs(self.env.random, self.env.env.random)
        self.assertEqual(self.env.actions(), self.env.env.actions())


    def test_invalid_k(self):
        with self.assertRaises(ValueError):
            KMarkovEnvironment(MDPEnvironment(dummy.Switch()), k=0)



if __name__ == '__main__':
    unittest.main(verbosity=0)
