"""Materialized path encoding for threaded comments.

Every comment carries its full ancestry as a string of dot-separated,
fixed-width decimal segments, e.g. ``0001`` for the first top-level comment
and ``0001.0007`` for the seventh reply to it. Because each segment is
zero-padded to the same width, plain lexicographic ordering of paths equals
numeric sibling ordering and equals a preorder walk of the tree. That only
holds while no parent has more than ``MAX_POSITION`` direct children, so the
encoder refuses to produce a wider segment instead of silently truncating.
"""

import re
from typing import Optional

from pydantic import field_validator

from murmur.domain.error import CapacityExceededError
from murmur.domain.value.common import RootValueObject

SEGMENT_WIDTH = 4
MAX_POSITION = 10**SEGMENT_WIDTH - 1
SEPARATOR = "."

_PATH_PATTERN = re.compile(r"^\d{4}(?:\.\d{4})*$")


def pad_segment(position: int) -> str:
    """Render a sibling position as a fixed-width path segment.

    Args:
        position: Allocated sibling position (1-based)

    Returns:
        Zero-padded segment, e.g. ``0042``

    Raises:
        ValueError: If position is lower than 1
        CapacityExceededError: If position does not fit in a segment
    """
    if position < 1:
        raise ValueError(f"Position must be >= 1, got {position}")
    if position > MAX_POSITION:
        raise CapacityExceededError(position, MAX_POSITION)
    return str(position).zfill(SEGMENT_WIDTH)


class CommentPath(RootValueObject[str]):
    """Materialized path of a comment within its post.

    Format: one or more 4-digit segments joined by dots.
    Examples: '0001', '0001.0003', '0012.0001.0009'
    """

    @field_validator("root")
    @classmethod
    def validate_path_format(cls, v: str) -> str:
        """Validate path segments are 4-digit and at least 1."""
        if not _PATH_PATTERN.match(v):
            raise ValueError(
                "Path must be dot-separated 4-digit segments, e.g. '0001.0002'"
            )
        if any(int(segment) == 0 for segment in v.split(SEPARATOR)):
            raise ValueError("Path segments start at 0001")
        return v

    @property
    def segments(self) -> list[str]:
        return self.root.split(SEPARATOR)

    @property
    def depth(self) -> int:
        """Nesting level: 0 for top-level comments."""
        return self.root.count(SEPARATOR)

    @property
    def position(self) -> int:
        """Sibling position encoded in the last segment."""
        return int(self.segments[-1])

    @property
    def parent(self) -> Optional["CommentPath"]:
        """Path of the parent comment, None for top-level paths."""
        if self.depth == 0:
            return None
        return CommentPath(self.root.rsplit(SEPARATOR, 1)[0])

    @property
    def descendant_prefix(self) -> str:
        """String prefix shared by every strict descendant of this path."""
        return self.root + SEPARATOR

    def is_ancestor_of(self, other: "CommentPath") -> bool:
        return other.root.startswith(self.descendant_prefix)

    def is_child_of(self, other: "CommentPath") -> bool:
        return other.is_ancestor_of(self) and self.depth == other.depth + 1


def encode_path(parent_path: Optional[CommentPath], position: int) -> CommentPath:
    """Derive a child's path from its parent's path and allocated position.

    Args:
        parent_path: Parent comment path (None for a top-level comment)
        position: Position allocated for the child among its siblings

    Returns:
        Full materialized path of the child

    Raises:
        CapacityExceededError: If position does not fit in a segment
    """
    segment = pad_segment(position)
    if parent_path is None:
        return CommentPath(segment)
    return CommentPath(parent_path.root + SEPARATOR + segment)
