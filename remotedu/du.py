"""
Disk usage engine.
Builds the in-memory tree for each root and accumulates directory sizes
bottom-up into a size map shared by every root of a run.
"""
import logging
from typing import Dict, Iterator, List, Optional

from .dir_client import DirClient
from .errors import InvariantError
from .models import DirEntry, SizeMap, TreeNode


# Configure logger
logger = logging.getLogger(__name__)


class _DirFrame:
    """A directory whose children are still being visited."""
    
    def __init__(self, node: TreeNode, children: List[DirEntry]):
        self.node = node
        self.children: Iterator[DirEntry] = iter(children)
        self.total = 0


class DiskUsage:
    """Tree builder and size aggregator."""
    
    def __init__(self, client: DirClient):
        """
        Initialize the engine.
        
        Args:
            client: Directory client used to list directories
        """
        self.client = client
        self.sizes: SizeMap = {}
        self._nodes: Dict[str, TreeNode] = {}
    
    def build_root(self, entry: DirEntry) -> TreeNode:
        """
        Build the tree for one top-level entry.
        
        Args:
            entry: Entry resolved from a path argument
            
        Returns:
            The entry's tree node, with ``sizes`` filled in for the whole subtree
            
        Raises:
            ListingError: A directory could not be listed
            InvariantError: The entry did not produce exactly one node
        """
        root = TreeNode()
        self.attach(entry, root)
        
        if len(root.children) != 1:
            raise InvariantError(
                f"root {entry.name} produced {len(root.children)} top-level nodes, expected 1"
            )
        return root.children[0]
    
    def attach(self, entry: DirEntry, parent: TreeNode) -> int:
        """
        Attach ``entry`` under ``parent``, listing directories depth first.
        
        Args:
            entry: Entry to attach
            parent: Node receiving the entry as its last child
            
        Returns:
            Cumulative size contributed by the entry
        """
        size = self._attach_known(entry, parent)
        if size is not None:
            return size
        
        # entry is a directory that must be listed
        stack = [self._open_dir(entry, parent)]
        while stack:
            frame = stack[-1]
            child = next(frame.children, None)
            
            if child is None:
                stack.pop()
                self.sizes[frame.node.name] = frame.total
                if stack:
                    stack[-1].total += frame.total
                continue
            
            size = self._attach_known(child, frame.node)
            if size is None:
                stack.append(self._open_dir(child, frame.node))
            else:
                frame.total += size
        
        return self.sizes[entry.name]
    
    def _attach_known(self, entry: DirEntry, parent: TreeNode) -> Optional[int]:
        """
        Attach anything that needs no listing call.
        A path counted earlier reuses its existing node, so a shared subtree
        appears under every parent that references it.
        Returns None when ``entry`` is a directory still to be listed.
        """
        # zero doubles as "not computed yet", so empty paths are visited again
        size = self.sizes.get(entry.name, 0)
        if size:
            parent.children.append(self._nodes[entry.name])
            return size
        
        if entry.is_dir():
            return None
        
        if entry.is_regular() or entry.is_link():
            self._add_node(entry, parent)
            self.sizes[entry.name] = entry.size
            return entry.size
        
        logger.debug(f"Skipping {entry.name}: unknown kind {entry.kind!r}")
        return 0
    
    def _open_dir(self, entry: DirEntry, parent: TreeNode) -> _DirFrame:
        node = self._add_node(entry, parent)
        logger.debug(f"Listing {entry.name}")
        return _DirFrame(node, self.client.list_children(entry.name))
    
    def _add_node(self, entry: DirEntry, parent: TreeNode) -> TreeNode:
        node = TreeNode(entry)
        parent.children.append(node)
        self._nodes[entry.name] = node
        return node
