import unittest
from collections import OrderedDict

import gym
import numpy as np
from numpy.random import RandomState

from . import spaces



class TestSpaces(unittest.TestCase):


    def setUp(self):
        self.boxspace = gym.spaces.Box(low=0, high=4, shape=(2,), dtype=int)
        self.boxcont = gym.spaces.Box(low=0, high=4, shape=(2,), dtype=float)
        self.boxinf = gym.spaces.Box(low=np.array([-np.inf, 0., -np.inf]),\
                                     high=np.array([np.inf, np.inf, 0.]), dtype=float)
        self.discspace = gym.spaces.Discrete(3)
        self.binspace = gym.spaces.MultiBinary(2)
        self.multispace = gym.spaces.MultiDiscrete([3, 2])
        
        self.tuplespace = gym.spaces.Tuple((self.multispace, self.binspace, self.discspace))
        self.tuplecont = gym.spaces.Tuple((self.boxcont, self.binspace, self.discspace))
        self.dictspace = gym.spaces.Dict({'b': self.binspace, 'm': self.multispace, 'd': self.discspace})


    def test_sample_contained(self):
        random = RandomState(0)
        for space in (self.boxspace, self.boxcont, self.boxinf, self.discspace,\
                      self.binspace, self.multispace, self.tuplespace,\
                      self.tuplecont, self.dictspace):
            for _ in range(20):
                self.assertTrue(space.contains(spaces.sample(space, random)))


    def test_sample_reproducible(self):
        r1, r2 = RandomState(42), RandomState(42)
        s1 = [spaces.sample(self.tuplecont, r1) for _ in range(5)]
        s2 = [spaces.sample(self.tuplecont, r2) for _ in range(5)]
        for a, b in zip(s1, s2):
            self.assertTrue(np.array_equal(a[0], b[0]))
            self.assertTrue(np.array_equal(a[1], b[1]))
            self.assertEqual(a[2], b[2])


    def test_sample_discrete_start(self):
        space = gym.spaces.Discrete(3, start=5)
        random = RandomState(1)
        samples = {spaces.sample(space, random) for _ in range(50)}
        self.assertEqual(samples, {5, 6, 7})
        self.assertEqual(spaces.bounds(space), ((5, 7),))
        self.assertEqual(spaces.describe(space)['start'], 5)


    def test_discrete_start(self):
        self.assertEqual(spaces.discrete_start(gym.spaces.Discrete(3, start=2)), 2)
        space = gym.spaces.Discrete(3)
        del space.start
        self.assertEqual(spaces.discrete_start(space), 0)
        self.assertEqual(spaces.bounds(space), ((0, 2),))
        self.assertEqual(spaces.describe(space), {'type': 'discrete', 'n': 3, 'start': 0})
        self.assertIn(spaces.sample(space, RandomState(0)), (0, 1, 2))


    def test_describe(self):
        d = spaces.describe(self.discspace)
        self.assertEqual(d, {'type': 'discrete', 'n': 3, 'start': 0})
        b = spaces.describe(self.boxinf)
        self.assertEqual(b['type'], 'box')
        self.assertEqual(b['low'], [None, 0., None])
        self.assertEqual(b['high'], [None, None, 0.])
        self.assertEqual(b['shape'], [3])
        t = spaces.describe(self.tuplespace)
        self.assertEqual(t['type'], 'tuple')
        self.assertEqual(t['spaces'][0], {'type': 'multidiscrete', 'nvec': [3, 2]})
        self.assertEqual(t['spaces'][1], {'type': 'multibinary', 'n': 2})
        d = spaces.describe(self.dictspace)
        self.assertEqual(list(d['spaces'].keys()), list(self.dictspace.spaces.keys()))


    def test_size_space(self):
        self.assertEqual(spaces.size_space(self.tuplespace), 6*4*3)
        self.assertEqual(spaces.size_space(self.boxspace), 5**2)
        self.assertEqual(spaces.size_space(self.tuplecont), 16*4*3)


    def test_bounds(self):
        b = spaces.bounds(self.tuplespace)
        self.assertEqual(b, ((0, 2), (0, 1), (0, 1), (0, 1), (0, 2)))


    def test_is_continuous(self):
        self.assertEqual(spaces.is_continuous(self.tuplecont),\
                         (True, True, False, False, False))
        self.assertFalse(any(spaces.is_continuous(self.dictspace)))


    def test_to_vector(self):
        v = spaces.to_vector(3)
        self.assertEqual(v.shape, (1,))
        self.assertEqual(v.dtype, np.float32)
        v = spaces.to_vector(np.zeros((2, 3)), np.float64)
        self.assertEqual(v.shape, (2, 3))
        self.assertEqual(v.dtype, np.float64)
        v = spaces.to_vector((1, np.array([2., 3.]), {'a': 4, 'b': (5, 6)}))
        self.assertEqual(v.tolist(), [1., 2., 3., 4., 5., 6.])


    def test_from_json(self):
        self.assertEqual(spaces.from_json(self.discspace, 2), 2)
        self.assertEqual(spaces.from_json(self.discspace, 2.0), 2)
        with self.assertRaises(ValueError):
            spaces.from_json(self.discspace, 1.5)
        with self.assertRaises(ValueError):
            spaces.from_json(self.discspace, True)
        for value in ('2', b'2', 'two'):
            with self.assertRaises(ValueError):
                spaces.from_json(self.discspace, value)
        a = spaces.from_json(self.boxcont, [1, 2])
        self.assertIsInstance(a, np.ndarray)
        self.assertEqual(a.shape, (2,))
        with self.assertRaises(ValueError):
            spaces.from_json(self.boxcont, [1, 2, 3])
        t = spaces.from_json(self.tuplespace, [[1, 0], [1, 1], 2])
        self.assertIsInstance(t, tuple)
        self.assertTrue(self.tuplespace.contains(t))
        d = spaces.from_json(self.dictspace, {'d': 1, 'm': [2, 1], 'b': [0, 1]})
        self.assertIsInstance(d, OrderedDict)
        self.assertTrue(self.dictspace.contains(d))
        with self.assertRaises(ValueError):
            spaces.from_json(self.dictspace, {'d': 1})



if __name__ == '__main__':
    unittest.main(verbosity=0)
