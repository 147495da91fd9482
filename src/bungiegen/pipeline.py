"""End-to-end generation: fetch once, render both passes, then write.

Both passes are pure functions of the same :class:`~bungiegen.models.ParsedSpec`,
so the document is loaded a single time and nothing reaches the disk until
every file has been rendered. A rendering bug therefore never leaves a
half-regenerated tree behind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from bungiegen.diagnostics import Diagnostics
from bungiegen.generator import (
    build_namespace_tree,
    component_names,
    render_module_files,
    render_namespace_files,
)
from bungiegen.models import GeneratorConfig, ParsedSpec
from bungiegen.parser import extract_spec, load_spec, validate_openapi_version
from bungiegen.sync import plan_output, sync_output


@dataclass
class GenerationResult:
    """Outcome of :func:`run_generation`.

    ``written`` lists the files on disk after a real run, or the files that
    would be written after a dry run.
    """

    spec: ParsedSpec
    files: dict[str, str]
    diagnostics: Diagnostics
    written: list[Path] = field(default_factory=list)
    dry_run: bool = False


def load_parsed_spec(source: str) -> ParsedSpec:
    """Load, validate and extract the document at *source*.

    Raises:
        SpecParseError: If the document cannot be fetched or parsed.
    """
    raw = load_spec(source)
    version = validate_openapi_version(raw)
    return extract_spec(raw, version)


def render_all(spec: ParsedSpec, config: GeneratorConfig) -> tuple[dict[str, str], Diagnostics]:
    """Run the namespace and module passes and merge their output."""
    tree, diagnostics = build_namespace_tree(component_names(spec), spec, indent=config.indent)
    files = render_namespace_files(tree, indent=config.indent)

    module_files, module_diagnostics = render_module_files(
        spec, indent=config.indent, module_import=config.module_import
    )
    files.update(module_files)
    diagnostics.extend(module_diagnostics)
    return files, diagnostics


def run_generation(config: GeneratorConfig, dry_run: bool = False) -> GenerationResult:
    """Generate the client source tree described by *config*.

    Args:
        config: The effective configuration.
        dry_run: Render everything but leave the output directory untouched.

    Returns:
        A :class:`GenerationResult` with the rendered files and diagnostics.

    Raises:
        SpecParseError: If the document cannot be loaded.
        OutputError: If the output tree cannot be written.
    """
    spec = load_parsed_spec(config.spec)
    files, diagnostics = render_all(spec, config)

    if dry_run:
        written = plan_output(config.output_dir, files)
    else:
        written = sync_output(config.output_dir, files)

    return GenerationResult(
        spec=spec,
        files=files,
        diagnostics=diagnostics,
        written=written,
        dry_run=dry_run,
    )
