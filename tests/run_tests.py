"""
Test runner script for the tinmesh library.
Run this script to execute all tests.
"""
import os
import sys

import pytest


def run_tests():
    """Discover and run all tests."""
    return pytest.main([os.path.dirname(os.path.abspath(__file__)), "-v"])


if __name__ == '__main__':
    sys.exit(run_tests())
