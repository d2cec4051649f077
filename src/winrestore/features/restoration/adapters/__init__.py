"""Adapters binding restoration ports to the local machine."""
