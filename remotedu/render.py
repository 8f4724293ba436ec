"""
Listing renderers for a built disk usage tree.
"""
from typing import Iterator, List, Optional

from .models import SizeMap, TreeNode


SCALE_NAMES = ["B", "K", "M", "G", "T"]


def format_size(size: int, human: bool = False) -> str:
    """
    Format a byte count.
    
    Args:
        size: Byte count
        human: Scale by 1024 and append a unit letter, up to T
        
    Returns:
        ``"2048"`` in raw mode, ``"2.0K"`` in human mode
    """
    if not human:
        return str(size)
    
    fsize = float(size)
    scale = 0
    while fsize >= 1024 and scale < len(SCALE_NAMES) - 1:
        scale += 1
        fsize /= 1024
    return f"{fsize:.1f}{SCALE_NAMES[scale]}"


def format_entry(node: TreeNode, sizes: SizeMap, human: bool = False) -> str:
    return f"{format_size(sizes.get(node.name, 0), human)}\t{node}"


def full_listing(node: TreeNode, sizes: SizeMap, human: bool = False) -> List[str]:
    """One line per node, files included, children before their parent."""
    return [format_entry(n, sizes, human) for n in _post_order(node)]


def depth_listing(node: TreeNode, sizes: SizeMap, human: bool = False, depth: int = 0) -> List[str]:
    """
    Directory lines only, down to ``depth`` levels below ``node``.
    
    Depth 0 prints ``node`` alone; a negative depth prints nothing.
    """
    return [format_entry(n, sizes, human) for n in _post_order(node, depth) if n.is_dir()]


def render(node: TreeNode, sizes: SizeMap, human: bool = False, depth: int = -1) -> List[str]:
    """Depth-limited listing when ``depth >= 0``, full listing otherwise."""
    if depth >= 0:
        return depth_listing(node, sizes, human, depth)
    return full_listing(node, sizes, human)


def _post_order(node: TreeNode, depth: Optional[int] = None) -> Iterator[TreeNode]:
    """
    Yield ``node`` and its descendants, children first, in listing order.
    With a depth, nodes more than ``depth`` levels down are not visited.
    """
    if depth is not None and depth < 0:
        return
    
    stack = [(node, depth, iter(node.children))]
    while stack:
        current, remaining, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            yield current
            continue
        
        child_depth = None if remaining is None else remaining - 1
        if child_depth is not None and child_depth < 0:
            continue
        stack.append((child, child_depth, iter(child.children)))
