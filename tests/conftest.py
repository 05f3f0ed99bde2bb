"""
Test Configuration and Utilities

Common base classes and helper functions for RefInjection tests
"""

import unittest
from typing import Any, Dict

from refinjection import Definition, RefInjectionCore


class RefInjectionTestCase(unittest.TestCase):
    """
    Base test case class for RefInjection tests.

    Creates a fresh isolated container before each test and closes it
    afterwards.
    """

    def setUp(self):
        """Create a fresh container before each test"""
        self.app = RefInjectionCore()

    def tearDown(self):
        """Close the container after each test"""
        self.app.close()


def create_value_definitions(values: Dict[str, Any]) -> list:
    """
    Create plain value definitions from a name -> value mapping.

    Example:
        >>> app.set_all(create_value_definitions({"host": "localhost", "port": 8000}))
    """
    return [Definition(name=name, value=value) for name, value in values.items()]
