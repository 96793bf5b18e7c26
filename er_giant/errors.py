"""
er_giant/errors.py — Exception types raised by the simulator.

Both kinds are local to a single trial. The batch driver in
er_giant.pipeline records them per trial and keeps sweeping.
"""


class ErGiantError(Exception):
    """Base class for all er_giant errors."""


class InvalidParameter(ErGiantError, ValueError):
    """A sampling parameter is out of range (n < 1, p outside [0, 1], ...)."""


class InvalidInput(ErGiantError, ValueError):
    """Graph data is malformed (vertex outside 1..n, self-loop, bad label)."""
