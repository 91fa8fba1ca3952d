"""SQLAlchemy table definitions for Murmur.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# POSTS TABLE (only the columns the comment engine reads or maintains)
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("author_id", UUID, nullable=False),  # Owned by the identity provider
    Column("text", Text, nullable=True),
    Column("audio_url", String(2048), nullable=True),
    Column("next_comment_sequence", Integer, nullable=False, server_default="0"),
    Column("comments_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("next_comment_sequence >= 0", name="posts_sequence_non_negative"),
    CheckConstraint("comments_count >= 0", name="posts_comments_count_non_negative"),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    # No FK: a non-cascading delete leaves replies pointing at a removed parent
    Column("parent_id", UUID, nullable=True),
    Column("author_id", UUID, nullable=False),
    Column("author_handle", String(255), nullable=False),  # Denormalized from identity
    # Byte-order collation so string order matches tree order
    Column("path", String(collation="C"), nullable=False),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("position", Integer, nullable=False),
    Column("text", Text, nullable=True),
    Column("audio_url", String(2048), nullable=True),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    Column("replies_count", Integer, nullable=False, server_default="0"),
    Column("next_reply_sequence", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "(text IS NOT NULL OR audio_url IS NOT NULL)",
        name="text_or_audio_required",
    ),
    CheckConstraint("position >= 1", name="comments_position_positive"),
    CheckConstraint("likes_count >= 0", name="comments_likes_count_non_negative"),
    CheckConstraint("replies_count >= 0", name="comments_replies_count_non_negative"),
)

# Tree-order range scans, and uniqueness of a path within its post
Index(
    "idx_comments_post_path",
    comments_table.c.post_id,
    comments_table.c.path,
    unique=True,
)
# Reply listings in creation order
Index(
    "idx_comments_parent_position",
    comments_table.c.parent_id,
    comments_table.c.position,
)

# ============================================================================
# COMMENT LIKES TABLE
# ============================================================================
comment_likes_table = Table(
    "comment_likes",
    metadata,
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("comment_id", "user_id", name="pk_comment_likes"),
)

Index("idx_comment_likes_user_id", comment_likes_table.c.user_id)
