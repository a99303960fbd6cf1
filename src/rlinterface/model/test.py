import unittest

import numpy as np
from numpy.random import RandomState
from gym.spaces import Discrete

from ..exceptions import IncompatibleModelError
from . import dummy, ModelAdapter, bind, is_pomdp



class DuckSwitch:
    """
    A model that does not inherit from `MDP` but exposes the same members.
    """

    def initialstate(self, random):
        return 0

    def gen(self, state, action, random):
        return state + 1, 1.

    def isterminal(self, state):
        return state >= 3

    def actions(self):
        return Discrete(1)



class Incomplete:
    """
    A model missing `isterminal` and `actions`.
    """

    def initialstate(self, random):
        return 0

    def gen(self, state, action, random):
        return state, 0.



class FailingSwitch(dummy.Switch):

    def gen(self, state, action, random):
        raise RuntimeError('generation failed')



class TaggedSwitch(dummy.NoisySwitch):
    """
    A `NoisySwitch` whose `gen` always returns an info value, whatever
    `has_info` says later.
    """

    def __init__(self):
        super().__init__(noise=0., info=True)


    def gen(self, state, action, random):
        nstate, reward = self.switch.gen(state, action, random)
        return nstate, self.sense(nstate, random), reward, {'tag': nstate}



class TestModelAdapter(unittest.TestCase):


    def setUp(self):
        self.random = RandomState(0)


    def test_classification(self):
        mdp = ModelAdapter(dummy.Switch())
        self.assertFalse(mdp.partial)
        self.assertFalse(mdp.has_info)
        self.assertIs(mdp.statetype, int)
        line = ModelAdapter(dummy.Line())
        self.assertFalse(line.partial)
        self.assertTrue(line.has_info)
        pomdp = ModelAdapter(dummy.NoisySwitch(info=True))
        self.assertTrue(pomdp.partial)
        self.assertTrue(pomdp.has_info)
        self.assertTrue(is_pomdp(dummy.NoisySwitch()))
        self.assertFalse(is_pomdp(DuckSwitch()))


    def test_duck_typed_model(self):
        adapter = bind(DuckSwitch())
        self.assertFalse(adapter.partial)
        self.assertIs(adapter.statetype, object)
        self.assertEqual(adapter.advance(0, 0, self.random), (1, 1., None))
        self.assertEqual(adapter.convert(2).dtype, np.float32)


    def test_missing_capability(self):
        with self.assertRaises(IncompatibleModelError) as ctx:
            ModelAdapter(Incomplete())
        self.assertIn('isterminal', str(ctx.exception))
        self.assertIn('actions', str(ctx.exception))
        self.assertIsInstance(ctx.exception, TypeError)


    def test_variant_mismatch(self):
        with self.assertRaises(IncompatibleModelError):
            ModelAdapter(dummy.NoisySwitch(), partial=False)
        with self.assertRaises(IncompatibleModelError):
            ModelAdapter(dummy.Switch(), partial=True)


    def test_advance_arity(self):
        s, r, info = ModelAdapter(dummy.Switch()).advance(0, 2, self.random)
        self.assertEqual((s, r, info), (1, -1., None))
        s, r, info = ModelAdapter(dummy.Line()).advance(np.zeros(2), 1, self.random)
        self.assertIsInstance(info, dict)
        self.assertIn('clipped_v', info)
        s, o, r, info = ModelAdapter(dummy.NoisySwitch()).advance(0, 2, self.random)
        self.assertIsNone(info)
        s, o, r, info = ModelAdapter(dummy.NoisySwitch(info=True))\
                        .advance(0, 2, self.random)
        self.assertEqual(info, {'state': s})


    def test_advance_selected_once(self):
        adapter = ModelAdapter(TaggedSwitch())
        adapter.model.has_info = False
        self.assertTrue(adapter.has_info)
        s, o, r, info = adapter.advance(0, 1, self.random)
        self.assertEqual(info, {'tag': s})


    def test_model_errors_propagate(self):
        adapter = ModelAdapter(FailingSwitch())
        with self.assertRaises(RuntimeError):
            adapter.advance(0, 1, self.random)
        adapter = ModelAdapter(dummy.Switch())
        with self.assertRaises(ValueError):
            adapter.advance(0, 7, self.random)


    def test_convert(self):
        adapter = ModelAdapter(dummy.NoisySwitch(), obsvector_type=np.float64)
        v = adapter.convert(3)
        self.assertEqual(v.dtype, np.float64)
        self.assertEqual(v.tolist(), [0., 0., 0., 1., 0.])
        adapter = ModelAdapter(dummy.Switch(), obsvector_type=np.int32)
        self.assertEqual(adapter.convert(3).tolist(), [3])
        self.assertEqual(adapter.convert(3).dtype, np.int32)



class TestDummyModels(unittest.TestCase):


    def model_tester(self, model, steps=50):
        random = RandomState(1)
        adapter = ModelAdapter(model)
        space = adapter.actions()
        state = adapter.initialstate(random)
        for _ in range(steps):
            out = adapter.advance(state, int(random.randint(space.n)), random)
            state = out[0]
            self.assertIsInstance(out[-2], float)
            self.assertIsInstance(adapter.isterminal(state), bool)
            if adapter.isterminal(state):
                state = adapter.initialstate(random)


    def test_switch(self):
        self.model_tester(dummy.Switch())


    def test_line(self):
        self.model_tester(dummy.Line())


    def test_noisy_switch(self):
        self.model_tester(dummy.NoisySwitch(noise=0.5, info=True))



if __name__ == '__main__':
    unittest.main(verbosity=0)
