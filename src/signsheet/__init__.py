"""signsheet — compact yearly sign-in registers, one bit per day."""

__version__ = "0.1.0"
