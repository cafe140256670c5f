"""Text renderer: structural tree → CS2 text."""

from __future__ import annotations

from .hexcodec import format_bytes
from .model import Block, Entry, Record, Scalar, is_section_key
from .options import CS2Options


def render(root: Record, options: CS2Options | None = None) -> str:
    """Render *root* as CS2 text, one ``\\n``-terminated line per entry.

    Output depends only on the entry order of the tree, so equal trees
    always render to identical text.
    """
    options = options or CS2Options()
    lines: list[str] = []
    for entry in root.entries:
        if is_section_key(entry.key) and isinstance(entry.value, Record):
            lines.append(entry.key)
            for child in entry.value.entries:
                _render_entry(child, 0, options, lines)
        else:
            _render_entry(entry, 0, options, lines)
    return "".join(f"{line}\n" for line in lines)


def _indent(depth: int) -> str:
    # depth 0 is flush left, deeper levels get one space and a dot run
    return " " + "." * depth if depth else ""


def _render_entry(entry: Entry, depth: int, options: CS2Options, lines: list[str]) -> None:
    prefix = _indent(depth)
    node = entry.value

    if isinstance(node, Scalar):
        lines.append(f"{prefix}{entry.key}={node.text}")
        return

    if isinstance(node, Block):
        wrap = options.block_wrap
        data = node.data
        chunks = [data[i:i + wrap] for i in range(0, len(data), wrap)] or [b""]
        lines.append(f"{prefix}{entry.key}={format_bytes(chunks[0])}")
        cont = _indent(depth + 1)
        lines.extend(f"{cont}{format_bytes(chunk)}" for chunk in chunks[1:])
        return

    lines.append(f"{prefix}{entry.key}")
    for child in node.entries:
        _render_entry(child, depth + 1, options, lines)
