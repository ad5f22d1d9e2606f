"""
Explicit input validation.

Request bodies are parsed leniently by pydantic and then checked here,
so the rules (required fields, minimum lengths, bounds, uniqueness) live
in plain functions that return a `ValidationResult` instead of relying on
the storage layer to reject bad rows.
"""

from dataclasses import dataclass, field

from bloglist.configs import (
    MAX_AUTHOR_LENGTH,
    MAX_LIKES,
    MAX_NAME_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_URL_LENGTH,
    MAX_USERNAME_LENGTH,
    MIN_LIKES,
    MIN_PASSWORD_LENGTH,
    MIN_USERNAME_LENGTH,
)
from bloglist.schemas.blog import BlogInput
from bloglist.schemas.user import UserCreate


@dataclass(frozen=True)
class FieldError:
    """A single failed rule on one field."""

    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one payload: success, or the list of failures."""

    model: str
    errors: tuple[FieldError, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        """Human readable summary, empty when validation passed."""
        if self.ok:
            return ""
        return f"{self.model} validation failed: " + ", ".join(str(e) for e in self.errors)


def required(name: str) -> FieldError:
    return FieldError(name, f"Path `{name}` is required.")


def too_short(name: str, value: str | None, minimum: int) -> FieldError:
    shown = f" (`{value}`)" if value is not None else ""
    return FieldError(
        name,
        f"Path `{name}`{shown} is shorter than the minimum allowed length ({minimum}).",
    )


def too_long(name: str, value: str, maximum: int) -> FieldError:
    return FieldError(
        name,
        f"Path `{name}` (`{value}`) is longer than the maximum allowed length ({maximum}).",
    )


def below_minimum(name: str, value: int, minimum: int) -> FieldError:
    return FieldError(
        name,
        f"Path `{name}` ({value}) is less than minimum allowed value ({minimum}).",
    )


def above_maximum(name: str, value: int, maximum: int) -> FieldError:
    return FieldError(
        name,
        f"Path `{name}` ({value}) is more than maximum allowed value ({maximum}).",
    )


def unique_violation(model: str, name: str, value: str) -> str:
    """Full message for a value that collides with an existing record."""
    error = FieldError(name, f"Error, expected `{name}` to be unique. Value: `{value}`")
    return ValidationResult(model, (error,)).message


def _check_length(
    errors: list[FieldError],
    name: str,
    value: str | None,
    maximum: int,
) -> None:
    if value is not None and len(value) > maximum:
        errors.append(too_long(name, value, maximum))


def validate_blog(blog: BlogInput) -> ValidationResult:
    """
    Check a blog payload.

    Title and url must be present and non-empty; likes, when given,
    must lie between 0 and the largest value the likes column holds.
    Text fields are bounded by their column lengths.
    """
    errors: list[FieldError] = []

    if not blog.title:
        errors.append(required("title"))
    _check_length(errors, "title", blog.title, MAX_TITLE_LENGTH)
    _check_length(errors, "author", blog.author, MAX_AUTHOR_LENGTH)
    if not blog.url:
        errors.append(required("url"))
    _check_length(errors, "url", blog.url, MAX_URL_LENGTH)

    if blog.likes is not None:
        if blog.likes < MIN_LIKES:
            errors.append(below_minimum("likes", blog.likes, MIN_LIKES))
        elif blog.likes > MAX_LIKES:
            errors.append(above_maximum("likes", blog.likes, MAX_LIKES))

    return ValidationResult("Blog", tuple(errors))


def validate_user(user: UserCreate, *, username_taken: bool = False) -> ValidationResult:
    """
    Check a registration payload.

    Unlike the other rules, a short password is reported without its
    value, so the message reads ``Path `password` is shorter than ...``
    rather than ``Path `password` (`pw`) is shorter than ...``.

    Args:
        user: Parsed registration body
        username_taken: Whether the username already belongs to another user

    Returns:
        ValidationResult: One error per violated rule
    """
    errors: list[FieldError] = []

    if not user.username:
        errors.append(required("username"))
    elif len(user.username) < MIN_USERNAME_LENGTH:
        errors.append(too_short("username", user.username, MIN_USERNAME_LENGTH))
    elif len(user.username) > MAX_USERNAME_LENGTH:
        errors.append(too_long("username", user.username, MAX_USERNAME_LENGTH))
    elif username_taken:
        errors.append(
            FieldError(
                "username",
                f"Error, expected `username` to be unique. Value: `{user.username}`",
            ),
        )

    _check_length(errors, "name", user.name, MAX_NAME_LENGTH)

    if not user.password:
        errors.append(required("password"))
    elif len(user.password) < MIN_PASSWORD_LENGTH:
        errors.append(too_short("password", None, MIN_PASSWORD_LENGTH))

    return ValidationResult("User", tuple(errors))
