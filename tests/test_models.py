"""
Unit tests for models.py
"""
import pytest

from remotedu.models import DirEntry, TreeNode


def test_file_entry_size_is_sum_of_blocks():
    """Test a file's size is the sum of its block sizes."""
    entry = DirEntry("/a/f", "file", [512, 512, 100])
    
    assert entry.size == 1124
    assert entry.is_regular()
    assert not entry.is_dir()
    assert not entry.is_link()


def test_directory_entry_has_no_direct_size():
    """Test directories contribute no size of their own."""
    entry = DirEntry("/a", "dir", [4096])
    
    assert entry.size == 0
    assert entry.is_dir()


def test_link_entry():
    entry = DirEntry("/a/l", "link", [12])
    
    assert entry.is_link()
    assert entry.size == 12


def test_entry_without_blocks():
    entry = DirEntry("/a/empty", "file")
    
    assert entry.blocks == []
    assert entry.size == 0


def test_from_dict():
    """Test decoding the wire form of an entry."""
    entry = DirEntry.from_dict({
        "name": "/a/f",
        "kind": "file",
        "blocks": [{"size": 1000}, {"size": 24}],
    })
    
    assert entry.name == "/a/f"
    assert entry.kind == "file"
    assert entry.blocks == [1000, 24]
    assert entry.size == 1024


def test_from_dict_without_blocks():
    entry = DirEntry.from_dict({"name": "/a", "kind": "dir"})
    
    assert entry.is_dir()
    assert entry.blocks == []


@pytest.mark.parametrize("data", [
    {"kind": "file"},
    {"name": "", "kind": "file"},
    {"name": "/a/f"},
    {"name": "/a/f", "kind": "file", "blocks": [{"size": -1}]},
    {"name": "/a/f", "kind": "file", "blocks": [{"size": "10"}]},
    {"name": "/a/f", "kind": "file", "blocks": [10]},
    {"name": "/a/f", "kind": "file", "blocks": 5},
])
def test_from_dict_rejects_bad_entries(data):
    """Test malformed wire entries are rejected."""
    with pytest.raises(ValueError):
        DirEntry.from_dict(data)


def test_tree_node():
    """Test tree nodes keep children in insertion order."""
    root = TreeNode(DirEntry("/a", "dir"))
    first = TreeNode(DirEntry("/a/z", "file", [1]))
    second = TreeNode(DirEntry("/a/b", "dir"))
    
    root.children.append(first)
    root.children.append(second)
    
    assert root.name == "/a"
    assert str(root) == "/a"
    assert root.is_dir()
    assert [child.name for child in root.children] == ["/a/z", "/a/b"]
    assert not first.is_dir()


def test_sentinel_node():
    """Test the root sentinel has no entry."""
    sentinel = TreeNode()
    
    assert sentinel.entry is None
    assert sentinel.name == ""
    assert not sentinel.is_dir()
    assert sentinel.children == []
