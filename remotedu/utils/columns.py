"""
Utility for aligning tab-separated output into columns.
"""
from typing import Iterable, List


def align_columns(lines: Iterable[str], padding: int = 1) -> List[str]:
    """
    Pad tab-terminated cells so each column lines up.
    
    Every cell followed by a tab is widened with spaces to the widest cell
    in its column plus ``padding``. The trailing cell of a line is left as is.
    
    Args:
        lines: Lines whose cells are separated by tabs
        padding: Spaces added after the widest cell of a column
        
    Returns:
        Aligned lines without tabs
    """
    rows = [line.split("\t") for line in lines]
    
    widths: List[int] = []
    for cells in rows:
        for i, cell in enumerate(cells[:-1]):
            if i == len(widths):
                widths.append(len(cell))
            else:
                widths[i] = max(widths[i], len(cell))
    
    aligned = []
    for cells in rows:
        padded = [cell.ljust(widths[i] + padding) for i, cell in enumerate(cells[:-1])]
        aligned.append("".join(padded) + cells[-1])
    return aligned
