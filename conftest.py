"""Pytest configuration: make ``hoccoo_quest`` importable from a checkout."""

import os
import sys

# The tests import the package directly, so put the repository root (the
# directory containing this file) on ``sys.path`` unless it was installed.
ROOT_DIR = os.path.abspath(os.path.dirname(__file__))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)
