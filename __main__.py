"""Pulumi program entry point."""
from homelab.program import declare_stack

declare_stack()
