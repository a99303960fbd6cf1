import unittest

from .environment.test import *
from .helpers.test import *
from .model.test import *
from .server.test import *



if __name__ == '__main__':
    unittest.main(verbosity=0)
