"""
Models for remotedu.
Contains the directory entry, tree node and size map definitions.
"""
from typing import Any, Dict, List, Mapping, Optional


class DirEntry:
    """A single item returned by the directory server."""
    
    def __init__(self, name: str, kind: str, blocks: Optional[List[int]] = None):
        self.name: str = name
        self.kind: str = kind
        self.blocks: List[int] = list(blocks or [])
    
    @property
    def size(self) -> int:
        """Own byte size; directories contribute nothing directly."""
        if self.is_dir():
            return 0
        return sum(self.blocks)
    
    def is_dir(self) -> bool:
        return self.kind == "dir"
    
    def is_regular(self) -> bool:
        return self.kind == "file"
    
    def is_link(self) -> bool:
        return self.kind == "link"
    
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DirEntry":
        """
        Decode the wire form of an entry.
        
        Args:
            data: ``{"name": str, "kind": str, "blocks": [{"size": int}, ...]}``
            
        Returns:
            Decoded DirEntry
            
        Raises:
            ValueError: A required field is missing or has the wrong type
        """
        name = data.get("name")
        kind = data.get("kind")
        if not isinstance(name, str) or not name:
            raise ValueError(f"entry has no name: {data!r}")
        if not isinstance(kind, str):
            raise ValueError(f"entry {name} has no kind")
        
        raw_blocks = data.get("blocks") or []
        if not isinstance(raw_blocks, list):
            raise ValueError(f"entry {name} has invalid blocks: {raw_blocks!r}")
        
        blocks = []
        for block in raw_blocks:
            size = block.get("size") if isinstance(block, Mapping) else None
            if isinstance(size, bool) or not isinstance(size, int) or size < 0:
                raise ValueError(f"entry {name} has an invalid block: {block!r}")
            blocks.append(size)
        
        return cls(name, kind, blocks)
    
    def __repr__(self) -> str:
        return f"DirEntry({self.name!r}, {self.kind!r}, size={self.size})"


class TreeNode:
    """
    One entry in the in-memory tree, with its children in listing order.
    The root sentinel is the only node without an entry.
    """
    
    def __init__(self, entry: Optional[DirEntry] = None):
        self.entry: Optional[DirEntry] = entry
        self.children: List["TreeNode"] = []
    
    @property
    def name(self) -> str:
        return self.entry.name if self.entry is not None else ""
    
    def is_dir(self) -> bool:
        return self.entry is not None and self.entry.is_dir()
    
    def __str__(self) -> str:
        return self.name


# Path name -> cumulative byte size
SizeMap = Dict[str, int]
