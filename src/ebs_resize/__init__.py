"""EBS volume resize toolkit: grow an instance's volume through snapshot and restore."""

__version__ = "1.0.0"
