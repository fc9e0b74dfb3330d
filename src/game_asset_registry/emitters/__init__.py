"""Emitters for generated asset registries.

Each module format registers itself with the FormatRegistry when this
package is imported.
"""

from ..registry import FormatRegistry
from .base import RegistryEmitter, export_identifier, registry_key
from .formats import CommonJSEmitter, ESModuleEmitter

# Auto-register at module import
FormatRegistry.register_format(CommonJSEmitter.format_name, CommonJSEmitter)
FormatRegistry.register_format(ESModuleEmitter.format_name, ESModuleEmitter)

__all__ = [
    "CommonJSEmitter",
    "ESModuleEmitter",
    "RegistryEmitter",
    "export_identifier",
    "registry_key",
]
