"""AVL-balanced rope with character, UTF-8 byte and newline metrics.

Every node caches the number of characters, encoded bytes and newlines it
covers, so offset conversions descend a single root-to-leaf path. Nodes are
never mutated after construction; edits split and re-join subtrees.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

LEAF_SIZE = 1024


class RopeNode:
    __slots__ = ("text", "left", "right", "chars", "nbytes", "newlines", "height")

    def __init__(
        self,
        text: Optional[str] = None,
        left: Optional["RopeNode"] = None,
        right: Optional["RopeNode"] = None,
    ) -> None:
        self.text = text
        self.left = left
        self.right = right
        if text is not None:
            self.chars = len(text)
            self.nbytes = len(text.encode("utf-8"))
            self.newlines = text.count("\n")
            self.height = 1
        else:
            assert left is not None and right is not None
            self.chars = left.chars + right.chars
            self.nbytes = left.nbytes + right.nbytes
            self.newlines = left.newlines + right.newlines
            self.height = max(left.height, right.height) + 1

    @property
    def is_leaf(self) -> bool:
        return self.text is not None


def _height(node: Optional[RopeNode]) -> int:
    return node.height if node is not None else 0


def _rotate_left(node: RopeNode) -> RopeNode:
    pivot = node.right
    assert pivot is not None and node.left is not None
    return RopeNode(left=RopeNode(left=node.left, right=pivot.left), right=pivot.right)


def _rotate_right(node: RopeNode) -> RopeNode:
    pivot = node.left
    assert pivot is not None and node.right is not None
    return RopeNode(left=pivot.left, right=RopeNode(left=pivot.right, right=node.right))


def _balance(node: RopeNode) -> RopeNode:
    if node.is_leaf:
        return node
    assert node.left is not None and node.right is not None
    skew = node.left.height - node.right.height
    if skew > 1:
        left = node.left
        if _height(left.left) < _height(left.right):
            node = RopeNode(left=_rotate_left(left), right=node.right)
        return _rotate_right(node)
    if skew < -1:
        right = node.right
        if _height(right.right) < _height(right.left):
            node = RopeNode(left=node.left, right=_rotate_right(right))
        return _rotate_left(node)
    return node


def join(left: Optional[RopeNode], right: Optional[RopeNode]) -> Optional[RopeNode]:
    if left is None or left.chars == 0:
        return right
    if right is None or right.chars == 0:
        return left
    if left.is_leaf and right.is_leaf and left.chars + right.chars <= LEAF_SIZE:
        return RopeNode(text=(left.text or "") + (right.text or ""))
    if left.height > right.height + 1:
        assert left.left is not None
        return _balance(RopeNode(left=left.left, right=join(left.right, right)))
    if right.height > left.height + 1:
        assert right.right is not None
        return _balance(RopeNode(left=join(left, right.left), right=right.right))
    return RopeNode(left=left, right=right)


def split(
    node: Optional[RopeNode], index: int
) -> Tuple[Optional[RopeNode], Optional[RopeNode]]:
    """Split ``node`` before character ``index``."""

    if node is None:
        return None, None
    if index <= 0:
        return None, node
    if index >= node.chars:
        return node, None
    if node.is_leaf:
        text = node.text or ""
        return RopeNode(text=text[:index]), RopeNode(text=text[index:])
    assert node.left is not None and node.right is not None
    if index <= node.left.chars:
        head, tail = split(node.left, index)
        return head, join(tail, node.right)
    head, tail = split(node.right, index - node.left.chars)
    return join(node.left, head), tail


def build(text: str) -> Optional[RopeNode]:
    """Build a balanced tree over ``text`` cut into leaf-sized chunks."""

    if not text:
        return None
    leaves = [
        RopeNode(text=text[i : i + LEAF_SIZE]) for i in range(0, len(text), LEAF_SIZE)
    ]
    return _build_balanced(leaves, 0, len(leaves))


def _build_balanced(leaves: List[RopeNode], lo: int, hi: int) -> RopeNode:
    if hi - lo == 1:
        return leaves[lo]
    mid = (lo + hi) // 2
    return RopeNode(
        left=_build_balanced(leaves, lo, mid), right=_build_balanced(leaves, mid, hi)
    )


class Rope:
    """Mutable handle around an immutable :class:`RopeNode` tree.

    Character indices are the primary address; byte and line coordinates are
    derived from the cached node metrics.
    """

    def __init__(self, text: str = "") -> None:
        self._root = build(text)

    def __len__(self) -> int:
        return self.len_chars

    def __str__(self) -> str:
        return "".join(self.chunks())

    @property
    def len_chars(self) -> int:
        return self._root.chars if self._root else 0

    @property
    def len_bytes(self) -> int:
        return self._root.nbytes if self._root else 0

    @property
    def len_lines(self) -> int:
        return (self._root.newlines if self._root else 0) + 1

    @property
    def depth(self) -> int:
        return _height(self._root)

    def chunks(self) -> Iterator[str]:
        stack: List[RopeNode] = [self._root] if self._root else []
        while stack:
            node = stack.pop()
            if node.is_leaf:
                yield node.text or ""
                continue
            assert node.left is not None and node.right is not None
            stack.append(node.right)
            stack.append(node.left)

    def insert(self, char_idx: int, text: str) -> None:
        if not text:
            return
        self._check_char(char_idx)
        head, tail = split(self._root, char_idx)
        self._root = join(join(head, build(text)), tail)

    def remove(self, start: int, end: int) -> None:
        self._check_char(start)
        self._check_char(end)
        if start >= end:
            return
        head, rest = split(self._root, start)
        _, tail = split(rest, end - start)
        self._root = join(head, tail)

    def slice(self, start: int, end: int) -> str:
        self._check_char(start)
        self._check_char(end)
        if start >= end:
            return ""
        pieces: List[str] = []
        self._collect(self._root, start, end, pieces)
        return "".join(pieces)

    def _collect(
        self, node: Optional[RopeNode], start: int, end: int, out: List[str]
    ) -> None:
        if node is None or start >= end:
            return
        if node.is_leaf:
            out.append((node.text or "")[start:end])
            return
        assert node.left is not None
        left_chars = node.left.chars
        if start < left_chars:
            self._collect(node.left, start, min(end, left_chars), out)
        if end > left_chars:
            self._collect(node.right, max(start - left_chars, 0), end - left_chars, out)

    def char(self, char_idx: int) -> str:
        if not 0 <= char_idx < self.len_chars:
            raise IndexError(f"char index {char_idx} out of range")
        node = self._root
        while node is not None and not node.is_leaf:
            assert node.left is not None
            if char_idx < node.left.chars:
                node = node.left
            else:
                char_idx -= node.left.chars
                node = node.right
        assert node is not None
        return (node.text or "")[char_idx]

    def char_to_byte(self, char_idx: int) -> int:
        self._check_char(char_idx)
        offset = 0
        node = self._root
        while node is not None and not node.is_leaf:
            assert node.left is not None
            if char_idx < node.left.chars:
                node = node.left
            else:
                char_idx -= node.left.chars
                offset += node.left.nbytes
                node = node.right
        if node is None:
            return offset
        return offset + len((node.text or "")[:char_idx].encode("utf-8"))

    def byte_to_char(self, byte_idx: int) -> int:
        """Convert a byte offset; raises ``ValueError`` inside a code point."""

        if not 0 <= byte_idx <= self.len_bytes:
            raise ValueError(f"byte offset {byte_idx} out of range")
        chars = 0
        node = self._root
        while node is not None and not node.is_leaf:
            assert node.left is not None
            if byte_idx < node.left.nbytes:
                node = node.left
            else:
                byte_idx -= node.left.nbytes
                chars += node.left.chars
                node = node.right
        if node is None:
            return chars
        prefix = (node.text or "").encode("utf-8")[:byte_idx]
        try:
            return chars + len(prefix.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise ValueError("byte offset splits a code point") from exc

    def char_to_line(self, char_idx: int) -> int:
        self._check_char(char_idx)
        line = 0
        node = self._root
        while node is not None and not node.is_leaf:
            assert node.left is not None
            if char_idx <= node.left.chars:
                node = node.left
            else:
                char_idx -= node.left.chars
                line += node.left.newlines
                node = node.right
        if node is None:
            return line
        return line + (node.text or "").count("\n", 0, char_idx)

    def line_to_char(self, line_idx: int) -> int:
        """Char index where ``line_idx`` starts; ``len_lines`` maps to the end."""

        if not 0 <= line_idx <= self.len_lines:
            raise IndexError(f"line index {line_idx} out of range")
        if line_idx == 0:
            return 0
        if line_idx >= self.len_lines:
            return self.len_chars
        # position just past the line_idx-th newline
        remaining = line_idx
        chars = 0
        node = self._root
        while node is not None and not node.is_leaf:
            assert node.left is not None
            if remaining <= node.left.newlines:
                node = node.left
            else:
                remaining -= node.left.newlines
                chars += node.left.chars
                node = node.right
        assert node is not None
        text = node.text or ""
        pos = -1
        for _ in range(remaining):
            pos = text.index("\n", pos + 1)
        return chars + pos + 1

    def _check_char(self, char_idx: int) -> None:
        if not 0 <= char_idx <= self.len_chars:
            raise IndexError(f"char index {char_idx} out of range")


__all__ = ["LEAF_SIZE", "Rope", "RopeNode", "build", "join", "split"]
