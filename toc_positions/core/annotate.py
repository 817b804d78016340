from typing import List, Mapping, Sequence

from toc_positions.core.models import AnnotatedTocNode, AssignedRange, NodePath, TocNode


def annotate_toc(
    toc: Sequence[TocNode],
    assigned: Mapping[NodePath, AssignedRange],
    parent: NodePath = (),
) -> List[AnnotatedTocNode]:
    """Copies the TOC tree, attaching each node's range (or None) by path."""
    result = []
    for index, node in enumerate(toc):
        path = parent + (index,)
        node_range = assigned.get(path)
        result.append(AnnotatedTocNode(
            title=node.title,
            href=node.href,
            start_position=node_range.start if node_range else None,
            end_position=node_range.end if node_range else None,
            children=annotate_toc(node.children, assigned, path),
            media_type=node.media_type,
        ))
    return result
