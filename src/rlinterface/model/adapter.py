"""
Defines the `ModelAdapter` class that normalizes access to a decision-process
model. The adapter inspects the model once when bound and fixes:

* whether the model is fully (MDP) or partially (POMDP) observable,
* whether the model's `gen` emits an extra info value,
* how states/observations are converted to numeric vectors.

The generation routine matching these choices is stored as `advance`, so
callers never branch on the model's variant or info channel.
"""

from typing import Any, Tuple

import numpy as np
from numpy.random import RandomState
from gym.spaces import Space

from ..exceptions import IncompatibleModelError
from ..helpers.spaces import to_vector
from ..log import logger
from .model import POMDP

MDP_CAPABILITIES = ('initialstate', 'gen', 'isterminal', 'actions')
POMDP_CAPABILITIES = MDP_CAPABILITIES + ('initialobs',)



def is_pomdp(model: Any) -> bool:
    """
    Whether a model is partially observable i.e. it generates observations.
    """
    return isinstance(model, POMDP) or callable(getattr(model, 'initialobs', None))



class ModelAdapter:
    """
    Wraps a decision-process model and selects, once, the routines used to
    generate transitions and convert outputs.

    Args:
    * model: The model. See `rlinterface.model.MDP` and `POMDP` for the
    required members.
    * obsvector_type: numpy dtype of converted vectors. Defaults to the model's
    `obsvector_type` attribute, or `np.float32`.
    * partial: If given, the variant the caller expects. `True` for POMDP,
    `False` for MDP. A model of the other variant is rejected.

    Attributes:
    * advance (Callable): Takes `state, action, random` and returns
    `(next state, reward, info)` for MDPs or
    `(next state, observation, reward, info)` for POMDPs. `info` is `None` when
    the model has no info channel.
    * partial (bool): Whether the model is a POMDP.
    * has_info (bool): Whether the model's `gen` emits info.
    * statetype: The model's declared state type or `object`.
    * obsvector_type (np.dtype): Element type of converted vectors.

    Raises:
    * IncompatibleModelError if the model lacks a required member or is of
    the wrong variant.
    """

    def __init__(self, model: Any, obsvector_type: np.dtype=None, partial: bool=None):
        detected = is_pomdp(model)
        if partial is not None and partial != detected:
            raise IncompatibleModelError('Expected a {} model, got {} which is a {}.'\
                .format('POMDP' if partial else 'MDP', type(model).__name__,\
                        'POMDP' if detected else 'MDP'))
        self.partial = detected
        required = POMDP_CAPABILITIES if self.partial else MDP_CAPABILITIES
        missing = [name for name in required if not callable(getattr(model, name, None))]
        if missing:
            raise IncompatibleModelError('Model {} does not define: {}.'\
                .format(type(model).__name__, ', '.join(missing)))

        self.model = model
        self.has_info = bool(getattr(model, 'has_info', False))
        self.statetype = getattr(model, 'statetype', object)
        if obsvector_type is None:
            obsvector_type = getattr(model, 'obsvector_type', np.float32)
        self.obsvector_type = np.dtype(obsvector_type)

        if self.partial:
            self.advance = self._advance_pomdp_info if self.has_info\
                           else self._advance_pomdp
            converter = getattr(model, 'convert_o', None)
        else:
            self.advance = self._advance_mdp_info if self.has_info\
                           else self._advance_mdp
            converter = getattr(model, 'convert_s', None)
        self._converter = converter if callable(converter) else to_vector
        logger.debug('Bound %s model %s (info=%s, obsvector_type=%s).',\
                     'POMDP' if self.partial else 'MDP', type(model).__name__,\
                     self.has_info, self.obsvector_type)


    def __str__(self):
        return '{}({})'.format(self.__class__.__name__, type(self.model).__name__)


    def _advance_mdp(self, state, action, random: RandomState) -> Tuple:
        nstate, reward = self.model.gen(state, action, random)
        return nstate, reward, None


    def _advance_mdp_info(self, state, action, random: RandomState) -> Tuple:
        nstate, reward, info = self.model.gen(state, action, random)
        return nstate, reward, info


    def _advance_pomdp(self, state, action, random: RandomState) -> Tuple:
        nstate, obs, reward = self.model.gen(state, action, random)
        return nstate, obs, reward, None


    def _advance_pomdp_info(self, state, action, random: RandomState) -> Tuple:
        nstate, obs, reward, info = self.model.gen(state, action, random)
        return nstate, obs, reward, info


    def initialstate(self, random: RandomState) -> Any:
        return self.model.initialstate(random)


    def initialobs(self, state: Any, random: RandomState) -> Any:
        return self.model.initialobs(state, random)


    def isterminal(self, state: Any) -> bool:
        return bool(self.model.isterminal(state))


    def actions(self) -> Space:
        return self.model.actions()


    def convert(self, value: Any) -> np.ndarray:
        """
        Converts a state (MDP) or an observation (POMDP) into an array of
        `obsvector_type` with at least one dimension.
        """
        return np.atleast_1d(np.asarray(self._converter(value),\
                                        dtype=self.obsvector_type))



def bind(model: Any, obsvector_type: np.dtype=None) -> ModelAdapter:
    """
    Creates a `ModelAdapter` for a model of either variant.
    """
    return ModelAdapter(model, obsvector_type)
