"""
Defines helper functions shared by the environment and server layers. See
the `spaces` module for sampling, describing, and converting `gym.spaces`
samples.
"""

from . import spaces
