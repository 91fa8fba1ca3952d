"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from murmur.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentCountRequest,
    GetCommentCountResponse,
    GetCommentCountUseCase,
    GetCommentRequest,
    GetCommentResponse,
    GetCommentUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    ListRepliesRequest,
    ListRepliesResponse,
    ListRepliesUseCase,
    ReplyToCommentRequest,
    ReplyToCommentResponse,
    ReplyToCommentUseCase,
    ToggleCommentLikeRequest,
    ToggleCommentLikeResponse,
    ToggleCommentLikeUseCase,
)
from murmur.domain.error import DomainError
from murmur.interface.api.auth import get_auth_token
from murmur.interface.error import to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CommentContentAPIRequest(BaseModel):
    """API request body for a comment or reply.

    Length and URL rules are enforced by the domain so clients get the same
    messages regardless of entry point.
    """

    text: str | None = None
    audio_url: str | None = None


@router.post(
    "/posts/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CommentContentAPIRequest,
    use_case: FromDishka[CreateCommentUseCase],
    auth_token: str | None = Depends(get_auth_token),
) -> CreateCommentResponse:
    """Add a top-level comment to a post.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Comment content
        use_case: Create comment use case (injected)
        auth_token: JWT from cookie or Bearer header

    Returns:
        Created comment
    """
    try:
        return await use_case.execute(
            CreateCommentRequest(
                post_id=post_id,
                text=request.text,
                audio_url=request.audio_url,
                auth_token=auth_token,
            )
        )
    except DomainError as e:
        logfire.warn("Comment creation failed", post_id=post_id, error=str(e))
        raise to_http_exception(e)


@router.post(
    "/comments/{comment_id}/replies",
    response_model=ReplyToCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def reply_to_comment(
    comment_id: str,
    request: CommentContentAPIRequest,
    use_case: FromDishka[ReplyToCommentUseCase],
    auth_token: str | None = Depends(get_auth_token),
) -> ReplyToCommentResponse:
    """Reply to a comment at any depth.

    Requires authentication.

    Args:
        comment_id: Parent comment UUID
        request: Reply content
        use_case: Reply use case (injected)
        auth_token: JWT from cookie or Bearer header

    Returns:
        Created reply
    """
    try:
        return await use_case.execute(
            ReplyToCommentRequest(
                parent_id=comment_id,
                text=request.text,
                audio_url=request.audio_url,
                auth_token=auth_token,
            )
        )
    except DomainError as e:
        logfire.warn("Reply creation failed", parent_id=comment_id, error=str(e))
        raise to_http_exception(e)


@router.get("/posts/{post_id}/comments", response_model=ListCommentsResponse)
async def list_comments(
    post_id: str,
    use_case: FromDishka[ListCommentsUseCase],
    cursor: str | None = None,
    limit: int | None = None,
    max_depth: int | None = None,
    auth_token: str | None = Depends(get_auth_token),
) -> ListCommentsResponse:
    """List a post's comments in tree order.

    Authentication is optional; when present, is_liked reflects the caller.

    Args:
        post_id: Post UUID
        use_case: List comments use case (injected)
        cursor: next_cursor from the previous page
        limit: Page size (clamped to the configured maximum)
        max_depth: Deepest level to include, 0 for top-level only
        auth_token: JWT from cookie or Bearer header

    Returns:
        Page of comments
    """
    try:
        return await use_case.execute(
            ListCommentsRequest(
                post_id=post_id,
                cursor=cursor,
                limit=limit,
                max_depth=max_depth,
                auth_token=auth_token,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/posts/{post_id}/comments/count", response_model=GetCommentCountResponse)
async def get_comment_count(
    post_id: str,
    use_case: FromDishka[GetCommentCountUseCase],
) -> GetCommentCountResponse:
    """Get the number of top-level comments on a post."""
    try:
        return await use_case.execute(GetCommentCountRequest(post_id=post_id))
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/comments/{comment_id}", response_model=GetCommentResponse)
async def get_comment(
    comment_id: str,
    use_case: FromDishka[GetCommentUseCase],
    auth_token: str | None = Depends(get_auth_token),
) -> GetCommentResponse:
    """Get a single comment."""
    try:
        return await use_case.execute(
            GetCommentRequest(comment_id=comment_id, auth_token=auth_token)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/comments/{comment_id}/replies", response_model=ListRepliesResponse)
async def list_replies(
    comment_id: str,
    use_case: FromDishka[ListRepliesUseCase],
    cursor: str | None = None,
    limit: int | None = None,
    auth_token: str | None = Depends(get_auth_token),
) -> ListRepliesResponse:
    """List the direct replies of a comment, oldest first.

    Args:
        comment_id: Parent comment UUID
        use_case: List replies use case (injected)
        cursor: next_cursor from the previous page
        limit: Page size (clamped to the configured maximum)
        auth_token: JWT from cookie or Bearer header

    Returns:
        Page of replies
    """
    try:
        return await use_case.execute(
            ListRepliesRequest(
                parent_id=comment_id,
                cursor=cursor,
                limit=limit,
                auth_token=auth_token,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/comments/{comment_id}/like", response_model=ToggleCommentLikeResponse)
async def toggle_comment_like(
    comment_id: str,
    use_case: FromDishka[ToggleCommentLikeUseCase],
    auth_token: str | None = Depends(get_auth_token),
) -> ToggleCommentLikeResponse:
    """Like a comment, or remove the caller's like.

    Requires authentication.
    """
    try:
        return await use_case.execute(
            ToggleCommentLikeRequest(comment_id=comment_id, auth_token=auth_token)
        )
    except DomainError as e:
        logfire.warn("Comment like toggle failed", comment_id=comment_id, error=str(e))
        raise to_http_exception(e)


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    use_case: FromDishka[DeleteCommentUseCase],
    cascade: bool = False,
    auth_token: str | None = Depends(get_auth_token),
) -> DeleteCommentResponse:
    """Delete the caller's own comment.

    Requires authentication. With ``cascade=true`` every reply below the
    comment is deleted too; otherwise replies are left in place.

    Args:
        comment_id: Comment UUID
        use_case: Delete comment use case (injected)
        cascade: Whether to delete the whole subtree
        auth_token: JWT from cookie or Bearer header

    Returns:
        Confirmation message
    """
    try:
        return await use_case.execute(
            DeleteCommentRequest(
                comment_id=comment_id, cascade=cascade, auth_token=auth_token
            )
        )
    except DomainError as e:
        logfire.warn("Comment deletion failed", comment_id=comment_id, error=str(e))
        raise to_http_exception(e)
