"""
Defines dummy models to illustrate and test environments and the protocol
server. The models have simple control policy solutions described in their
documentations.
"""

from .switch import Switch
from .line import Line
from .noisyswitch import NoisySwitch
