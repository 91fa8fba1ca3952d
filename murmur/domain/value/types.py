"""Domain value objects for Murmur.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum
from typing import Optional

from pydantic import AnyHttpUrl, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from murmur.domain.error import ValidationError
from murmur.domain.value.common import RootValueObject, ValueObject
from murmur.domain.value.identifiers import UserId

DEFAULT_MAX_TEXT_LENGTH = 2000
DEFAULT_MAX_URL_LENGTH = 2048

_http_url = TypeAdapter(AnyHttpUrl)


class RateLimitAction(str, Enum):
    """Mutating actions guarded by the rate limiter."""

    CREATE_COMMENT = "create_comment"
    REPLY_TO_COMMENT = "reply_to_comment"
    TOGGLE_LIKE = "toggle_like"
    DELETE_ACTION = "delete_action"


class Handle(RootValueObject[str]):
    """Public handle of a user, denormalized onto the content they write."""

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Handle must be 1-255 characters")
        return v


class Identity(ValueObject):
    """Authenticated caller, as resolved from the auth token."""

    user_id: UserId
    handle: Handle


class CommentContent(ValueObject):
    """Body of a comment: text, an audio reference, or both.

    Use ``CommentContent.parse`` for untrusted input; it trims the text and
    enforces the configured length and URL rules.
    """

    text: Optional[str] = None
    audio_url: Optional[str] = None

    @classmethod
    def parse(
        cls,
        text: Optional[str],
        audio_url: Optional[str],
        max_text_length: int = DEFAULT_MAX_TEXT_LENGTH,
        max_url_length: int = DEFAULT_MAX_URL_LENGTH,
    ) -> "CommentContent":
        """Sanitize and validate user supplied comment content.

        Args:
            text: Raw comment text (trimmed; blank counts as missing)
            audio_url: Reference to an already uploaded audio clip
            max_text_length: Maximum number of characters for the text
            max_url_length: Maximum number of characters for the URL

        Returns:
            Validated content

        Raises:
            ValidationError: If content is empty, too long or the URL is malformed
        """
        text = text.strip() if text else None
        text = text or None
        audio_url = audio_url or None

        if text and len(text) > max_text_length:
            raise ValidationError(
                f"Comment text exceeds maximum length of {max_text_length} characters"
            )

        if audio_url:
            if len(audio_url) > max_url_length:
                raise ValidationError(
                    f"URL exceeds maximum length of {max_url_length} characters"
                )
            try:
                _http_url.validate_python(audio_url)
            except PydanticValidationError:
                raise ValidationError("Invalid URL format")

        if not text and not audio_url:
            raise ValidationError("Comment must have either text or audio")

        return cls(text=text, audio_url=audio_url)
