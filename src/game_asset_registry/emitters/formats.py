"""Module formats for generated registries.

Two output formats are supported: CommonJS (``require`` and
``module.exports``) for older bundlers and ES modules (``import`` and
``export default``) for newer ones.
"""

import json

from .base import RegistryEmitter


class CommonJSEmitter(RegistryEmitter):
    """Emit a CommonJS module."""

    format_name = "commonjs"

    def module_reference(self, module: str, companions: dict[str, str]) -> str:
        return f"require({json.dumps(module)})"

    def wrap(self, registry: str, companions: dict[str, str]) -> str:
        return (
            f"const Assets = require({json.dumps(self.runtime_module)}).Assets;\n"
            "\n"
            f"module.exports = {registry};\n"
        )


class ESModuleEmitter(RegistryEmitter):
    """Emit an ES module.

    Companion modules become namespace imports at the top of the file,
    one per distinct module.
    """

    format_name = "esm"

    def module_reference(self, module: str, companions: dict[str, str]) -> str:
        if module not in companions:
            companions[module] = f"_companion{len(companions)}"
        return companions[module]

    def wrap(self, registry: str, companions: dict[str, str]) -> str:
        imports = [f"import {{ Assets }} from {json.dumps(self.runtime_module)};"]
        imports.extend(
            f"import * as {binding} from {json.dumps(module)};"
            for module, binding in companions.items()
        )
        return "\n".join(imports) + f"\n\nexport default {registry};\n"
