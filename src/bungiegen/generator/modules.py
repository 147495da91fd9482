"""Build one TypeScript module class per API area from the document's ``paths``.

Every path item's ``summary`` is ``<Module>.<endpoint>``
(``Destiny2.GetProfile``). Path items are grouped by the module prefix, and
each group becomes a class extending the runtime ``Module`` base with one
method per endpoint::

    /**
     * Returns Destiny Profile information for the supplied membership.
     *
     * @param {BungieMembershipType} membershipType
     * @param {string} destinyMembershipId
     * @param {DestinyComponentType[]} [components]
     * @returns {Promise<DestinyProfileResponse>}
     * @memberof Destiny2
     */
    public GetProfile(membershipType: BungieMembershipType, ...): Promise<DestinyProfileResponse> {
        return this.client.get(`Destiny2/${membershipType}/Profile/${destinyMembershipId}`, { components });
    }

**Algorithm summary**

1. :func:`build_modules` groups path items into
   :class:`~bungiegen.models.ModuleDefinition` records, skipping extension
   keys and items whose summary or operation cannot be parsed.
2. :func:`render_module` resolves each operation's response and parameters,
   collecting one ``import`` per referenced component along the way.
3. :func:`render_module_files` renders every module to
   ``modules/<kebab-name>.ts``.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from bungiegen.diagnostics import Diagnostics
from bungiegen.generator.naming import COMPONENTS_PREFIX, get_path, pascal, sort_key
from bungiegen.generator.types import TypeResolver
from bungiegen.generator.writer import CodeWriter
from bungiegen.models import (
    APIParameter,
    HTTPMethod,
    ModuleDefinition,
    OperationRecord,
    ParameterLocation,
    ParsedSpec,
)
from bungiegen.parser.extractor import extract_parameters
from bungiegen.parser.resolver import is_reference, reference_name

MODULE_DIRECTORY = "modules"
MODULE_BASE_CLASS = "Module"
JSON_MEDIA_TYPE = "application/json"
SUCCESS_RESPONSE_KEYS = ("200", 200, "default")

_PATH_PLACEHOLDER = re.compile(r"(\{[a-zA-Z0-9]+\})")


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------


def build_modules(spec: ParsedSpec, diagnostics: Diagnostics) -> list[ModuleDefinition]:
    """Group the document's path items into module definitions.

    Modules and the endpoints within them keep document order. An endpoint
    name seen twice in one module keeps its first position but takes the
    later path item.

    Args:
        spec: The parsed document.
        diagnostics: Receives a warning for every skipped path item.

    Returns:
        One :class:`~bungiegen.models.ModuleDefinition` per summary prefix.
    """
    modules: dict[str, dict[str, OperationRecord]] = {}

    for path, item in spec.paths.items():
        if path.startswith("x-"):
            continue
        if not isinstance(item, dict):
            diagnostics.warn(path, "Path item is not an object, skipping")
            continue

        summary = item.get("summary")
        parts = summary.split(".") if isinstance(summary, str) else []
        if len(parts) < 2 or not parts[0] or not parts[1]:
            diagnostics.warn(path, f"Unable to parse summary {summary!r}, skipping")
            continue
        module_name, endpoint = parts[0], parts[1]

        method = _select_method(item)
        if method is None:
            diagnostics.warn(path, "No get, post or put operation, skipping")
            continue

        if module_name not in modules:
            diagnostics.info(path, f"Creating module {module_name}")
            modules[module_name] = {}
        endpoints = modules[module_name]
        if endpoint in endpoints:
            diagnostics.warn(path, f"Endpoint {module_name}.{endpoint} redefined")

        endpoints[endpoint] = OperationRecord(
            module=module_name,
            endpoint=endpoint,
            path=path,
            method=method,
            operation=item[method.value],
            path_item=item,
        )

    return [
        ModuleDefinition(name=name, operations=list(endpoints.values()))
        for name, endpoints in modules.items()
    ]


def _select_method(item: dict[str, Any]) -> Optional[HTTPMethod]:
    for method in HTTPMethod:
        if isinstance(item.get(method.value), dict):
            return method
    return None


def path_template(path: str) -> str:
    """Convert ``/Destiny2/{membershipType}/`` into ``Destiny2/${membershipType}``."""
    return _PATH_PLACEHOLDER.sub(r"$\1", path.strip("/"))


def order_parameters(parameters: list[APIParameter]) -> list[APIParameter]:
    """Required parameters first, each group keeping declaration order."""
    return sorted(parameters, key=lambda param: not param.required)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class _ModuleRenderer:
    """Render one module class while collecting its imports."""

    def __init__(
        self,
        module: ModuleDefinition,
        spec: ParsedSpec,
        diagnostics: Diagnostics,
        indent: str,
    ) -> None:
        self.module = module
        self.spec = spec
        self.diagnostics = diagnostics
        self.indent = indent
        self.types = TypeResolver(spec, diagnostics)
        self.imports: dict[str, set[str]] = {}

    def add_import(self, reference: dict[str, Any]) -> None:
        ref = reference["$ref"]
        if not ref.startswith(COMPONENTS_PREFIX):
            self.diagnostics.warn(self.module.name, f"Unable to import {ref}")
            return
        directory, _, name = ref[len(COMPONENTS_PREFIX):].replace(".", "/").rpartition("/")
        self.imports.setdefault(f"../{get_path(directory)}", set()).add(pascal(name))

    def render_class(self) -> str:
        body = CodeWriter(self.indent)
        for record in self.module.operations:
            self.render_method(body, record)

        writer = CodeWriter(self.indent)
        writer.write_line(f"export class {self.module.name} extends {MODULE_BASE_CLASS} {{")
        writer.indent()
        writer.write(body.get_output().removesuffix("\n"))
        writer.unindent()
        writer.write_line("}")
        return writer.get_output()

    def render_method(self, writer: CodeWriter, record: OperationRecord) -> None:
        location = f"{record.module}.{record.endpoint}"
        self.diagnostics.info(location, f"Parsing endpoint {record.endpoint}")

        return_type = self.return_type(record, location)
        if return_type is None:
            return

        template = path_template(record.path)
        raw_parameters = record.operation.get("parameters")
        if raw_parameters is None:
            raw_parameters = record.path_item.get("parameters")
        parameters = extract_parameters(self.spec, raw_parameters, self.diagnostics, location)

        signature: list[str] = []
        query: list[str] = []
        documentation = f"{record.description}\n\n" if record.description else ""

        for param in order_parameters(parameters):
            if param.location == ParameterLocation.PATH and f"${{{param.name}}}" not in template:
                self.diagnostics.warn(
                    location,
                    f"Parameter {param.name} was marked as a path variable but did not appear in the path",
                )
                continue
            param_type = self.types.resolve(param.schema_, self.add_import, f"{location}.{param.name}")
            if param.location == ParameterLocation.QUERY:
                query.append(param.name)

            if param.required:
                signature.append(f"{param.name}: {param_type}")
                documentation += f"@param {{{param_type}}} {param.name}\n"
            else:
                signature.append(f"{param.name}?: {param_type}")
                documentation += f"@param {{{param_type}}} [{param.name}]\n"

        documentation += f"@returns {{Promise<{return_type}>}}\n"
        documentation += f"@memberof {record.module}"

        options = f", {{ {', '.join(query)} }}" if query else ""
        writer.write_doc_comment(documentation)
        writer.write_line(f"public {record.endpoint}({', '.join(signature)}): Promise<{return_type}> {{")
        writer.indent()
        writer.write_line(f"return this.client.{record.method.value}(`{template}`{options});")
        writer.unindent()
        writer.write_line("}")
        writer.write_blank_line()

    def return_type(self, record: OperationRecord, location: str) -> Optional[str]:
        responses = record.operation.get("responses")
        if is_reference(responses):
            responses = self.spec.resolve(responses)

        response = None
        if isinstance(responses, dict):
            response = next(
                (responses[key] for key in SUCCESS_RESPONSE_KEYS if key in responses),
                None,
            )
        if response is None:
            self.diagnostics.warn(location, "Unable to parse response information, skipping")
            return None

        if is_reference(response):
            self.add_import(response)
            return pascal(reference_name(response))

        schema = None
        content = response.get("content") if isinstance(response, dict) else None
        if isinstance(content, dict) and isinstance(content.get(JSON_MEDIA_TYPE), dict):
            schema = content[JSON_MEDIA_TYPE].get("schema")
        if schema is None:
            self.diagnostics.warn(location, "Response has no JSON schema, skipping")
            return None
        return self.types.resolve(schema, self.add_import, location)


def render_module(
    module: ModuleDefinition,
    spec: ParsedSpec,
    diagnostics: Diagnostics,
    indent: str = "\t",
    module_import: str = "../module",
) -> str:
    """Render the file content of one module class.

    Args:
        module: The module to render.
        spec: The document the module's operations come from.
        diagnostics: Receives a warning for every skipped endpoint or
            degraded type.
        indent: Indentation unit.
        module_import: Import specifier of the runtime ``Module`` base class.

    Returns:
        The imports, a blank line and the class declaration.
    """
    renderer = _ModuleRenderer(module, spec, diagnostics, indent)
    renderer.imports[module_import] = {MODULE_BASE_CLASS}
    class_text = renderer.render_class()

    writer = CodeWriter(indent)
    for specifier in sorted(renderer.imports, key=sort_key):
        symbols = ", ".join(sorted(renderer.imports[specifier], key=sort_key))
        writer.write_line(f"import {{{symbols}}} from '{specifier}';")
    writer.write_blank_line()
    writer.write(class_text)
    return writer.get_output()


def module_file_path(module: ModuleDefinition) -> str:
    """``Destiny2`` -> ``modules/destiny2.ts``, ``GroupV2`` -> ``modules/group-v2.ts``."""
    return f"{MODULE_DIRECTORY}/{get_path(module.name)}.ts"


def render_module_files(
    spec: ParsedSpec,
    indent: str = "\t",
    module_import: str = "../module",
) -> tuple[dict[str, str], Diagnostics]:
    """Render every module of *spec* to ``{file path: content}``.

    Pure: nothing is written. The file paths are relative to the output root.
    """
    diagnostics = Diagnostics()
    files: dict[str, str] = {}
    for module in build_modules(spec, diagnostics):
        diagnostics.info(module.name, f"Parsing module {module.name}")
        files[module_file_path(module)] = render_module(
            module, spec, diagnostics, indent=indent, module_import=module_import
        )
    return files, diagnostics
