"""Line-oriented text builder for the emitted TypeScript."""

from __future__ import annotations


class CodeWriter:
    """Accumulate lines of source text at a tracked indentation level.

    Every line written through :meth:`write_line` is prefixed with the
    indentation unit repeated once per :meth:`indent` call. Blank lines are
    never indented.

    Example::

        writer = CodeWriter()
        writer.write_line("export enum Kind {")
        writer.indent()
        writer.write_line("None = 0,")
        writer.unindent()
        writer.write_line("}")
        writer.get_output()  # 'export enum Kind {\\n\\tNone = 0,\\n}\\n'
    """

    def __init__(self, indent: str = "\t") -> None:
        self._unit = indent
        self._level = 0
        self._lines: list[str] = []

    def indent(self) -> None:
        self._level += 1

    def unindent(self) -> None:
        if self._level > 0:
            self._level -= 1

    def write_line(self, text: str = "") -> None:
        """Append *text* as one line at the current indentation level."""
        if text:
            self._lines.append(self._unit * self._level + text)
        else:
            self._lines.append("")

    def write_blank_line(self) -> None:
        self._lines.append("")

    def write(self, text: str) -> None:
        """Append a multi-line block, re-indenting every line.

        A single trailing newline terminates the block and does not produce
        an extra blank line, so the output of another writer can be nested
        verbatim.
        """
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        for line in lines:
            self.write_line(line.rstrip("\r"))

    def write_doc_comment(self, text: str) -> None:
        """Append *text* as a ``/** ... */`` block, one `` * `` line per input line."""
        self.write_line("/**")
        for line in text.split("\n"):
            line = line.rstrip("\r")
            self.write_line(f" * {line}" if line else " *")
        self.write_line(" */")

    def prepend(self, text: str) -> None:
        """Insert a block before everything written so far, without indentation."""
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        self._lines[:0] = lines

    def get_output(self) -> str:
        """Return the accumulated text, newline-terminated (empty if nothing was written)."""
        if not self._lines:
            return ""
        return "\n".join(self._lines) + "\n"
