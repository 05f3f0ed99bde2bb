"""
RefInjectionLifeCycle Enum

Defines how a registered service produces its value
"""

from enum import Enum


class RefInjectionLifeCycle(Enum):
    """Lifecycle of services"""
    VALUE = "VALUE"
    FACTORY = "FACTORY"
    SINGLETON = "SINGLETON"
