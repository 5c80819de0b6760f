import pathlib
from dataclasses import dataclass
from typing import NotRequired, TypedDict

import pydantic_core
from typing_extensions import override

__all__ = (
    "ApplicationError",
    "Location",
    "ParseError",
    "ConsistencyError",
    "CharsetOverlapError",
    "PolicyFileError",
)


@dataclass(slots=True)
class ApplicationError(Exception):
    class Context(TypedDict): ...

    message: str
    ctx: Context | None = None

    def format_message(self) -> str:
        return self.message.format(ctx=self.ctx or {})

    @override
    def __str__(self) -> str:
        return self.format_message()


class Location(TypedDict):
    filename: pathlib.Path
    line: NotRequired[int]
    col: NotRequired[int]


@dataclass(slots=True)
class ParseError(ApplicationError):
    """
    Raised when a serialized policy is not valid JSON or does not have the shape of a
    policy document.
    """

    class Context(TypedDict):
        """
        Attributes:
            errors: Field-level problems reported by the model layer, if any.
        """

        errors: NotRequired[list[pydantic_core.ErrorDetails]]

    ctx: Context | None = None

    @override
    def format_message(self) -> str:
        msg = "Malformed policy: %s" % self.message
        if self.ctx and (errors := self.ctx.get("errors")):
            msg += "\n\n" + "\n".join(
                "  %s: %s" % (".".join(map(str, err["loc"])) or "<root>", err["msg"])
                for err in errors
            )
        return msg


@dataclass(slots=True)
class ConsistencyError(ApplicationError):
    """
    Raised when a policy contradicts itself, e.g. two charsets share a character or
    a required location can't exist given the rule's minimum length.

    The message is plain text, the offending path is kept in the context and
    prepended when the error is rendered.
    """

    class Context(TypedDict):
        """
        Attributes:
            path: Location of the offending field within the policy, e.g.
                ``rules[2].charset_requirements[digits]``.
        """

        path: str

    ctx: Context  # type: ignore[assignment]

    @property
    def path(self) -> str:
        return self.ctx["path"]

    @override
    def format_message(self) -> str:
        return "%s: %s" % (self.ctx["path"], self.message)


@dataclass(slots=True)
class CharsetOverlapError(ConsistencyError):
    """Raised when two charsets of a policy share at least one character."""

    class Context(ConsistencyError.Context):
        """
        Attributes:
            charsets: Names of the two overlapping charsets.
            shared: Characters found in both charsets.
        """

        charsets: tuple[str, str]
        shared: str

    ctx: Context  # type: ignore[assignment]


@dataclass(slots=True)
class PolicyFileError(ApplicationError):
    """
    Raised when a policy file can't be decoded or doesn't describe a policy.
    """

    class Context(TypedDict):
        loc: Location

    ctx: Context  # type: ignore[assignment]

    @override
    def format_message(self) -> str:
        return "Decoding failed for policy file %r.\n\n%s" % (
            str(self.ctx["loc"]["filename"]),
            self.message,
        )
