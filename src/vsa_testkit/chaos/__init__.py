"""Chaos injection for resilience testing."""

from .injector import ChaosInjector

__all__ = ["ChaosInjector"]
