"""Build and render the namespace tree of schema and response declarations.

Component names in the platform document are dot-qualified
(``Destiny.HistoricalStats.DestinyHistoricalStatsActivity``). Every dot
becomes a namespace, and the terminal segment becomes a declaration inside
it. The tree is built first and rendered second:

* :class:`NamespaceBuilder` adds one dotted name at a time, renders its
  declaration with :class:`~bungiegen.generator.writer.CodeWriter` and stores
  it as a :class:`Leaf` together with the symbols it references.
* :func:`render_namespace_files` walks the finished tree and produces one
  file per namespace, computing each import relative to the file the leaf
  finally landed in.

A namespace holding only leaves renders to ``<path>.ts``. A namespace with
at least one child namespace renders to ``<path>/index.ts`` and re-exports
each child (``import * as Child from './child'; export {Child};``).

When a name needs a namespace where a leaf already sits (``Foo`` was added
before ``Foo.Bar``), the leaf moves into the new namespace under the
``index`` key. When a leaf arrives where a namespace already sits, it is
stored as that namespace's ``index``. Declarations keep their component
references as placeholders until the tree is complete, so a reference to a
moved leaf is imported from its new namespace, or spelled ``Foo.Foo`` in the
file that binds ``Foo`` to the re-exported namespace.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, Union

from bungiegen.diagnostics import Diagnostics
from bungiegen.generator.naming import (
    COMPONENTS_PREFIX,
    get_path,
    pascal,
    relative_specifier,
    sort_key,
    split_symbol,
)
from bungiegen.generator.types import ReferenceCallback, TypeResolver
from bungiegen.generator.writer import CodeWriter
from bungiegen.models import ParsedSpec
from bungiegen.parser.resolver import is_reference
from bungiegen.parser.schemas import (
    DictionaryShape,
    EnumShape,
    ObjectShape,
    classify_declaration,
)

INDEX_KEY = "index"
JSON_MEDIA_TYPE = "application/json"

_MARK = "\x00"
_MARKER_RE = re.compile(f"{_MARK}([^{_MARK}]*){_MARK}([^{_MARK}]*){_MARK}")


# --- Tree ---


@dataclass
class Leaf:
    """A rendered declaration and the symbols it imports.

    ``imports`` maps a dotted target namespace path (``schemas.Destiny``) to
    the set of symbol names taken from it. ``template`` is the declaration
    with every component reference left as a placeholder; the file it lands
    in decides how each one is spelled (see :func:`render_namespace`).
    """

    symbol: str
    template: str
    imports: dict[str, set[str]] = field(default_factory=dict)

    @property
    def text(self) -> str:
        """The declaration with every reference spelled as its bare name."""
        return fill_references(self.template, lambda namespace, name: name)


def reference_marker(namespace: str, name: str) -> str:
    return f"{_MARK}{namespace}{_MARK}{name}{_MARK}"


def fill_references(template: str, spell: Callable[[str, str], str]) -> str:
    """Replace each placeholder in *template* with ``spell(namespace, name)``."""
    return _MARKER_RE.sub(lambda match: spell(match.group(1), match.group(2)), template)


@dataclass
class Namespace:
    """A node of the namespace tree; children keep insertion order."""

    path: str
    children: dict[str, Union[Leaf, Namespace]] = field(default_factory=dict)

    def has_namespaces(self) -> bool:
        return any(isinstance(child, Namespace) for child in self.children.values())

    def leaves(self) -> list[Leaf]:
        return [child for child in self.children.values() if isinstance(child, Leaf)]

    def namespaces(self) -> list[tuple[str, Namespace]]:
        return [
            (name, child)
            for name, child in self.children.items()
            if isinstance(child, Namespace)
        ]

    def file_path(self) -> str:
        """The output file of this namespace, relative to the output root."""
        if self.has_namespaces():
            return f"{get_path(self.path)}/{INDEX_KEY}.ts"
        return f"{get_path(self.path)}.ts"

    def directory(self) -> str:
        """The directory :meth:`file_path` lives in."""
        if self.has_namespaces():
            return get_path(self.path)
        return get_path(split_symbol(self.path)[0])

    def find(self, path: str) -> Optional[Namespace]:
        """Return the descendant namespace at dotted *path* (relative to this node)."""
        node = self
        for segment in path.split(".") if path else []:
            child = node.children.get(segment)
            if not isinstance(child, Namespace):
                return None
            node = child
        return node

    def walk(self) -> Iterable[Namespace]:
        """Yield this namespace and every descendant, depth first."""
        yield self
        for _, child in self.namespaces():
            yield from child.walk()


def _join(parent: str, segment: str) -> str:
    return f"{parent}.{segment}" if parent else segment


# --- Builder ---


class NamespaceBuilder:
    """Add dotted component names to a namespace tree.

    Args:
        spec: The document the components are looked up in.
        diagnostics: Receives progress entries and a warning for every
            component that cannot be rendered.
        indent: Indentation unit of the rendered declarations.
    """

    def __init__(
        self,
        spec: ParsedSpec,
        diagnostics: Optional[Diagnostics] = None,
        indent: str = "\t",
    ) -> None:
        self.spec = spec
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.indent = indent
        self.types = TypeResolver(spec, self.diagnostics)
        self.root = Namespace(path="")

    def add(self, dotted_name: str) -> None:
        """Add ``schemas.<Name>`` or ``responses.<Name>`` to the tree.

        Intermediate namespaces are created as needed. A component that
        cannot be found or rendered is reported and leaves no leaf behind,
        although the namespaces on its path remain.
        """
        segments = dotted_name.split(".")
        symbol = pascal(segments[-1]) or INDEX_KEY

        current = self.root
        for segment in segments[:-1]:
            existing = current.children.get(segment)
            if isinstance(existing, Namespace):
                current = existing
                continue

            namespace = Namespace(path=_join(current.path, segment))
            if isinstance(existing, Leaf):
                self.diagnostics.info(
                    dotted_name,
                    f"Moving {existing.symbol} into {namespace.path} as {INDEX_KEY}",
                )
                namespace.children[INDEX_KEY] = existing
            current.children[segment] = namespace
            current = namespace

        schema = self._lookup(dotted_name)
        if schema is None:
            self.diagnostics.warn(dotted_name, "Unable to find schema")
            return

        leaf = self.render_leaf(symbol, schema, location=dotted_name)
        if leaf is None:
            return

        existing = current.children.get(symbol)
        if isinstance(existing, Namespace):
            existing.children[INDEX_KEY] = leaf
        else:
            current.children[symbol] = leaf

    def _lookup(self, dotted_name: str) -> Any:
        collection, _, name = dotted_name.partition(".")
        if collection == "schemas":
            schema = self.spec.schemas.get(name)
        elif collection == "responses":
            schema = _json_schema(self._dereference(self.spec.responses.get(name)))
        else:
            return None

        if is_reference(schema):
            target = self.spec.resolve(schema)
            if isinstance(target, dict) and "content" in target:
                target = _json_schema(target)
            schema = target
        return schema if isinstance(schema, dict) else None

    def _dereference(self, node: Any) -> Any:
        if is_reference(node):
            return self.spec.resolve(node)
        return node

    # --- Declarations ---

    def render_leaf(self, symbol: str, schema: dict[str, Any], location: str = "") -> Optional[Leaf]:
        """Render *schema* as the declaration of *symbol*.

        Returns:
            The leaf, or ``None`` (with a warning) for shapes that have no
            top-level declaration form.
        """
        self.diagnostics.info(location, f"Processing {symbol}")
        imports: dict[str, set[str]] = {}

        def add_import(reference: dict[str, Any]) -> Optional[str]:
            ref = reference["$ref"]
            if not ref.startswith(COMPONENTS_PREFIX):
                self.diagnostics.warn(location, f"Unable to add import {ref}")
                return None
            namespace, name = split_symbol(ref[len(COMPONENTS_PREFIX):].replace("/", "."))
            imports.setdefault(namespace, set()).add(name)
            return reference_marker(namespace, name)

        writer = CodeWriter(self.indent)
        shape = classify_declaration(schema)

        if isinstance(shape, EnumShape):
            self._write_enum(writer, symbol, shape)
        elif isinstance(shape, ObjectShape):
            self._write_interface(writer, symbol, shape, add_import, location)
        elif (
            isinstance(shape, DictionaryShape)
            and isinstance(shape.key, dict)
            and isinstance(shape.value, dict)
        ):
            self._write_dictionary(writer, symbol, shape, add_import, location)
        else:
            self.diagnostics.warn(location, f"Unknown schema type {shape.kind.value}, skipping")
            return None

        return Leaf(symbol=symbol, template=writer.get_output(), imports=imports)

    def _write_enum(self, writer: CodeWriter, symbol: str, shape: EnumShape) -> None:
        if shape.description is not None:
            writer.write_doc_comment(shape.description)
        writer.write_line(f"export enum {symbol} {{")
        writer.indent()
        for value in shape.values:
            if value.numeric_value is None:
                writer.write_line(f"{value.identifier},")
            else:
                writer.write_line(f"{value.identifier} = {value.numeric_value},")
        writer.unindent()
        writer.write_line("}")
        writer.write_blank_line()

    def _write_interface(
        self,
        writer: CodeWriter,
        symbol: str,
        shape: ObjectShape,
        add_import: ReferenceCallback,
        location: str,
    ) -> None:
        if shape.description is not None:
            writer.write_doc_comment(shape.description)
        writer.write_line(f"export interface {symbol} {{")
        writer.indent()
        for name, prop in shape.properties.items():
            prop_schema = self.spec.resolve(prop) if is_reference(prop) else prop
            if not isinstance(prop_schema, dict):
                self.diagnostics.warn(location, f"Unable to resolve property {name}")
                continue

            description = prop_schema.get("description")
            if not is_reference(prop) and isinstance(description, str):
                writer.write_doc_comment(description)
            optional = "?:" if prop_schema.get("nullable") else ":"
            prop_type = self.types.resolve(prop, add_import, f"{location}.{name}")
            writer.write_line(f"{name}{optional} {prop_type};")
        writer.unindent()
        writer.write_line("}")
        writer.write_blank_line()

    def _write_dictionary(
        self,
        writer: CodeWriter,
        symbol: str,
        shape: DictionaryShape,
        add_import: ReferenceCallback,
        location: str,
    ) -> None:
        value_type = self.types.resolve(shape.value, add_import, location)
        key_type = self.types.dictionary_key(shape.key, location)
        if shape.description is not None:
            writer.write_doc_comment(shape.description)
        writer.write_line(f"export class {symbol} {{")
        writer.indent()
        writer.write_line(f"[field: {key_type}]: {value_type};")
        writer.unindent()
        writer.write_line("}")
        writer.write_blank_line()


def _json_schema(response: Any) -> Any:
    if not isinstance(response, dict):
        return None
    content = response.get("content")
    if not isinstance(content, dict):
        return None
    media = content.get(JSON_MEDIA_TYPE)
    if not isinstance(media, dict):
        return None
    return media.get("schema")


def component_names(spec: ParsedSpec) -> list[str]:
    """Return every ``schemas.<Name>`` then every ``responses.<Name>`` in document order."""
    names = [f"schemas.{name}" for name in spec.schemas]
    names.extend(f"responses.{name}" for name in spec.responses)
    return names


def build_namespace_tree(
    names: Iterable[str],
    spec: ParsedSpec,
    indent: str = "\t",
) -> tuple[Namespace, Diagnostics]:
    """Build a namespace tree from *names* without touching the filesystem.

    Example::

        tree, diagnostics = build_namespace_tree(component_names(spec), spec)
        files = render_namespace_files(tree)
    """
    diagnostics = Diagnostics()
    builder = NamespaceBuilder(spec, diagnostics, indent=indent)
    for name in names:
        builder.add(name)
    return builder.root, diagnostics


# --- Rendering ---


def _home(root: Optional[Namespace], target: str, name: str) -> str:
    """Return the namespace that finally declares *name*, referenced as ``target.name``."""
    node = root.find(target) if root is not None else None
    if node is not None:
        child = node.children.get(name)
        if isinstance(child, Namespace):
            index = child.children.get(INDEX_KEY)
            if isinstance(index, Leaf) and index.symbol == name:
                return child.path
    return target


def render_namespace(
    namespace: Namespace,
    indent: str = "\t",
    root: Optional[Namespace] = None,
) -> str:
    """Render the file content of a single namespace.

    With *root*, references to a symbol that was moved into its own
    namespace as ``index`` follow it there. Inside the file that re-exports
    that namespace, where the bare name is bound by ``import * as``, the
    reference is qualified instead (``Foo.Foo``).
    """
    writer = CodeWriter(indent)
    leaves = namespace.leaves()
    declared = {leaf.symbol for leaf in leaves}
    children = namespace.namespaces()
    bound = {name for name, _ in children}
    prefix = f"{namespace.path}."

    merged: dict[str, set[str]] = {}
    directory = namespace.directory()

    def spell(target: str, name: str) -> str:
        home = _home(root, target, name)
        if home == namespace.path:
            return name
        if name in bound and home.startswith(prefix):
            return f"{home[len(prefix):]}.{name}"
        if name not in declared:
            specifier = relative_specifier(directory, get_path(home))
            merged.setdefault(specifier, set()).add(name)
        return name

    if children:
        for name, _ in children:
            writer.write_line(f"import * as {name} from './{get_path(name)}';")
            writer.write_line(f"export {{{name}}};")
        writer.write_blank_line()

    for leaf in leaves:
        writer.write(fill_references(leaf.template, spell))

    # imports are only known once every reference has been spelled
    if merged:
        header = CodeWriter(indent)
        for specifier in sorted(merged, key=sort_key):
            symbols = ", ".join(sorted(merged[specifier], key=sort_key))
            header.write_line(f"import {{{symbols}}} from '{specifier}';")
        header.write_blank_line()
        writer.prepend(header.get_output())

    return writer.get_output()


def render_namespace_files(root: Namespace, indent: str = "\t") -> dict[str, str]:
    """Render every namespace below *root* to ``{file path: content}``.

    The root itself has no file; its children (``schemas``, ``responses``)
    are the top-level output directories.
    """
    files: dict[str, str] = {}
    for namespace in root.walk():
        if namespace is root:
            continue
        files[namespace.file_path()] = render_namespace(namespace, indent, root)
    return files
