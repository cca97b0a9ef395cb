"""machineflags - driver flag adaptation for machine provisioning."""

__version__ = "0.1.0"
