from __future__ import annotations

"""
Tree Renderer.

Converts a StructureNode tree into an ASCII preview using the standard
'├──' / '└──' connectors. Truncated directories are suffixed with an
ellipsis marker so the preview never hides that entries were cut.
"""

from typing import List, Optional

from projectscope.domain.structure_models import KIND_SYMLINK, StructureNode

TRUNCATED_MARKER = " [...]"
SYMLINK_MARKER = " ->"


def render_tree_lines(root: StructureNode) -> List[str]:
    """
    Render the tree below the root as a list of lines.

    The root itself is emitted first, using its name.
    """
    lines: List[str] = [_label(root)]
    _render_children(root.children, lines, prefix="")
    return lines


def _label(node: StructureNode) -> str:
    text = node.name + ("/" if node.is_directory else "")
    if node.kind == KIND_SYMLINK:
        text += SYMLINK_MARKER
    if node.truncated:
        text += TRUNCATED_MARKER
    return text


def _render_children(children: Optional[List[StructureNode]], lines: List[str], prefix: str) -> None:
    if not children:
        return

    total = len(children)
    for i, child in enumerate(children):
        is_last = i == total - 1
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{_label(child)}")

        if child.is_directory:
            new_prefix = prefix + ("    " if is_last else "│   ")
            _render_children(child.children, lines, new_prefix)
