"""Workflow State Engine.

Clients declare finite-state workflows (states + actions), start instances of
them, and move each instance between states by executing validated actions.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
