"""initial_schema

Create the comment threading schema for Murmur:
- Posts (only the columns the comment engine reads or maintains)
- Comments (materialized path threading with sibling sequences and counters)
- Comment likes (one per user per comment)

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-10-18 10:12:04.518302

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # POSTS
    # ========================================================================
    op.create_table(
        "posts",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("text", sa.Text(), nullable=True),
        sa.Column("audio_url", sa.String(2048), nullable=True),
        sa.Column(
            "next_comment_sequence", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column("comments_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "next_comment_sequence >= 0", name="posts_sequence_non_negative"
        ),
        sa.CheckConstraint(
            "comments_count >= 0", name="posts_comments_count_non_negative"
        ),
    )
    op.create_index(
        "idx_posts_created_at", "posts", [sa.text("created_at DESC")], unique=False
    )

    # ========================================================================
    # COMMENTS
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("post_id", sa.UUID(), nullable=False),
        # Not a foreign key: non-cascading deletes leave replies in place
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_handle", sa.String(255), nullable=False),
        # "C" collation: byte order, so path order is tree order
        sa.Column("path", sa.String(collation="C"), nullable=False),
        sa.Column("depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("text", sa.Text(), nullable=True),
        sa.Column("audio_url", sa.String(2048), nullable=True),
        sa.Column("likes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("replies_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "next_reply_sequence", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "(text IS NOT NULL OR audio_url IS NOT NULL)",
            name="text_or_audio_required",
        ),
        sa.CheckConstraint("position >= 1", name="comments_position_positive"),
        sa.CheckConstraint(
            "likes_count >= 0", name="comments_likes_count_non_negative"
        ),
        sa.CheckConstraint(
            "replies_count >= 0", name="comments_replies_count_non_negative"
        ),
    )
    op.create_index(
        "idx_comments_post_path", "comments", ["post_id", "path"], unique=True
    )
    op.create_index(
        "idx_comments_parent_position",
        "comments",
        ["parent_id", "position"],
        unique=False,
    )

    # ========================================================================
    # COMMENT LIKES
    # ========================================================================
    op.create_table(
        "comment_likes",
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("comment_id", "user_id", name="pk_comment_likes"),
    )
    op.create_index(
        "idx_comment_likes_user_id", "comment_likes", ["user_id"], unique=False
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_comment_likes_user_id", table_name="comment_likes")
    op.drop_table("comment_likes")

    op.drop_index("idx_comments_parent_position", table_name="comments")
    op.drop_index("idx_comments_post_path", table_name="comments")
    op.drop_table("comments")

    op.drop_index("idx_posts_created_at", table_name="posts")
    op.drop_table("posts")
