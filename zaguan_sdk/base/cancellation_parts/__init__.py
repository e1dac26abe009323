"""Cancellation primitives split one concern per module; import from ``base.cancellation``."""
