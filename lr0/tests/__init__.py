import os.path
import unittest


def suite() -> unittest.TestSuite:
    here = os.path.dirname(__file__)
    top = os.path.dirname(os.path.dirname(here))
    return unittest.defaultTestLoader.discover(here, top_level_dir=top)
