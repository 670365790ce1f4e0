"""Stack configuration handling."""
from homelab.config.loader import StackConfigLoader, StackOptions
from homelab.config.stack_file import StackFile, StackReport, check_stack_file
from homelab.core.errors import ConfigValidationError

__all__ = [
    'ConfigValidationError',
    'StackConfigLoader',
    'StackFile',
    'StackOptions',
    'StackReport',
    'check_stack_file',
]
