"""Built-in CLI sub-commands for bungiegen.

This package groups the Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~bungiegen.commands.generate` -- render the client source tree.
* :mod:`~bungiegen.commands.inspect` -- examine modules, schemas and info
  of a document without writing anything.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``inspect``) or a plain callback function
registered directly on the root app (for single commands like
``generate``).
"""
