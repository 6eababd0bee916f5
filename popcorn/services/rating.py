"""Star rating input."""

from typing import List, NamedTuple, Optional, Sequence


class Star(NamedTuple):
    value: int
    filled: bool


class RatingInput:
    """A star selector producing an integer rating.

    Hovering previews a value without committing it; clicking commits.
    An uncommitted input reports ``default_rating`` (0 unless configured).
    """

    def __init__(
        self,
        max_rating: int = 5,
        icon_size: int = 48,
        messages: Optional[Sequence[str]] = None,
        default_rating: int = 0,
    ):
        if max_rating < 1:
            raise ValueError("max_rating must be a positive integer")
        if icon_size < 1:
            raise ValueError("icon_size must be a positive integer")
        if messages is not None and len(messages) != max_rating:
            raise ValueError(
                f"Expected {max_rating} messages, got {len(messages)}"
            )
        if not 0 <= default_rating <= max_rating:
            raise ValueError(f"default_rating must be within 0..{max_rating}")

        self.max_rating = max_rating
        self.icon_size = icon_size
        self.messages = list(messages) if messages is not None else None
        self.default_rating = default_rating
        self.rating = default_rating
        self.hovered: int = 0

    def _check(self, value: int) -> int:
        if not 1 <= value <= self.max_rating:
            raise ValueError(f"Rating must be within 1..{self.max_rating}")
        return value

    def hover(self, value: int) -> None:
        self.hovered = self._check(value)

    def leave(self) -> None:
        self.hovered = 0

    def click(self, value: int) -> int:
        self.rating = self._check(value)
        return self.rating

    def reset(self) -> None:
        self.rating = self.default_rating
        self.hovered = 0

    @property
    def display_value(self) -> int:
        return self.hovered or self.rating

    @property
    def label(self) -> str:
        value = self.display_value
        if not value:
            return ""
        if self.messages:
            return self.messages[value - 1]
        return str(value)

    def stars(self) -> List[Star]:
        shown = self.display_value
        return [Star(value, value <= shown) for value in range(1, self.max_rating + 1)]
