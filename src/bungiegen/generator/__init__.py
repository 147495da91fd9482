"""TypeScript generator -- render a parsed OpenAPI document into source files.

This sub-package is responsible for the second half of the bungiegen
pipeline: taking a :class:`~bungiegen.models.ParsedSpec` (produced by the
parser) and rendering it into a ``{relative path: file content}`` map. No
function here touches the filesystem; :mod:`bungiegen.sync` does the writing.

Typical usage::

    from bungiegen.generator import (
        build_namespace_tree,
        component_names,
        render_module_files,
        render_namespace_files,
    )

    tree, diagnostics = build_namespace_tree(component_names(parsed_spec), parsed_spec)
    files = render_namespace_files(tree)
    module_files, module_diagnostics = render_module_files(parsed_spec)

Sub-modules:

* :mod:`~bungiegen.generator.writer` -- Indentation-aware line builder.
* :mod:`~bungiegen.generator.naming` -- Symbol, file path and import
  specifier conventions.
* :mod:`~bungiegen.generator.types` -- Schema node to TypeScript type
  expression mapping.
* :mod:`~bungiegen.generator.namespace` -- Schema and response declarations
  organised into a namespace tree.
* :mod:`~bungiegen.generator.modules` -- One class per API module with one
  method per endpoint.
"""

from bungiegen.generator.modules import build_modules, render_module, render_module_files
from bungiegen.generator.namespace import (
    NamespaceBuilder,
    build_namespace_tree,
    component_names,
    render_namespace_files,
)
from bungiegen.generator.types import TypeResolver
from bungiegen.generator.writer import CodeWriter

__all__ = [
    "CodeWriter",
    "TypeResolver",
    "NamespaceBuilder",
    "build_namespace_tree",
    "component_names",
    "render_namespace_files",
    "build_modules",
    "render_module",
    "render_module_files",
]
