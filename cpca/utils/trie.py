"""
Character trie for longest-prefix matching of administrative names.

Every registered key (canonical name or abbreviation) maps to a canonical
value, so "广东" and "广东省" both resolve to "广东省".

Example:
    >>> trie = Trie()
    >>> trie.insert("广东", "广东省")
    >>> trie.insert("广东省", "广东省")
    >>> trie.find_longest_prefix("广东省深圳市")
    ('广东省', '广东省', 3)
"""
from typing import Dict, List, Optional, Tuple


class TrieNode:
    """A node in the trie."""

    __slots__ = ('children', 'value', 'is_end')

    def __init__(self):
        self.children: Dict[str, 'TrieNode'] = {}
        self.value: Optional[str] = None
        self.is_end = False


class Trie:
    """Prefix tree keyed by character."""

    def __init__(self):
        self.root = TrieNode()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, name: str) -> bool:
        return self.contains(name)

    def insert(self, name: str, value: str) -> None:
        """
        Register name -> value. Re-inserting an existing key overwrites its value.

        Args:
            name: Key to register (full name or abbreviation)
            value: Canonical name returned on match
        """
        node = self.root
        for char in name:
            if char not in node.children:
                node.children[char] = TrieNode()
            node = node.children[char]
        if not node.is_end:
            self._size += 1
        node.is_end = True
        node.value = value

    def get(self, name: str) -> Optional[str]:
        """Exact lookup. Returns None unless name itself is registered."""
        node = self.root
        for char in name:
            node = node.children.get(char)
            if node is None:
                return None
        return node.value if node.is_end else None

    def contains(self, name: str) -> bool:
        return self.get(name) is not None

    def find_longest_prefix(self, text: str) -> Optional[Tuple[str, str, int]]:
        """
        Find the longest registered key that is a prefix of text.

        Keeps walking past intermediate terminal nodes, so with both
        "广东" and "广东省" registered, "广东省深圳市" yields "广东省".

        Args:
            text: Text to match from position 0

        Returns:
            (matched_slice, value, length) or None. length counts characters.
        """
        node = self.root
        last_match = None

        for length, char in enumerate(text, 1):
            node = node.children.get(char)
            if node is None:
                break
            if node.is_end:
                last_match = (text[:length], node.value, length)

        return last_match

    def find_all(self, text: str) -> List[Tuple[int, str, str]]:
        """
        Longest-prefix match attempted at every character position.

        Returns:
            List of (start, matched_slice, value)

        Example:
            >>> trie.find_all("广东省深圳市")
            [(0, '广东省', '广东省'), ...]
        """
        results = []
        for start in range(len(text)):
            match = self.find_longest_prefix(text[start:])
            if match:
                results.append((start, match[0], match[1]))
        return results
