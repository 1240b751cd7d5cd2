"""Scope vocabulary and the ``scope`` request/response parameter.

A *scope* is any value that converts to and from a string token and
compares by value.  Plain ``str`` works, and so does any ``enum.Enum``
whose values are strings, which is how providers declare a typed
permission vocabulary::

    class GitHubScope(str, enum.Enum):
        REPO = "repo"
        READ_USER = "read:user"

:class:`ScopeParameter` is the ordered, de-duplicated collection sent as
``scope`` on the wire (RFC 6749 section 3.3): tokens joined with a single
space.  Parsing also accepts comma-delimited values, which several
providers emit instead, and JSON lists.
"""

from __future__ import annotations

import enum
from typing import Any, Generic, Iterable, Iterator, Protocol, TypeVar, runtime_checkable

from pydantic_core import core_schema

from grantflow.exceptions import ScopeFromStrError

SCOPE_PARAMETER_DELIMITER = " "


@runtime_checkable
class Scope(Protocol):
    """A permission token: string-convertible, hashable and comparable."""

    def __str__(self) -> str: ...

    def __eq__(self, other: object) -> bool: ...

    def __hash__(self) -> int: ...


S = TypeVar("S", bound=Scope)


def scope_to_str(scope: Scope) -> str:
    """Return the wire token for *scope*."""
    if isinstance(scope, enum.Enum):
        return str(scope.value)
    return str(scope)


def scope_from_str(scope_type: type, token: str) -> Any:
    """Build a scope of *scope_type* from its wire token.

    Raises:
        ScopeFromStrError: If *token* is not a member of *scope_type*.
    """
    if scope_type is str:
        return token
    try:
        return scope_type(token)
    except (ValueError, TypeError) as exc:
        raise ScopeFromStrError(
            f"Unknown scope '{token}' for {scope_type.__name__}"
        ) from exc


def _split(value: str) -> list[str]:
    if SCOPE_PARAMETER_DELIMITER in value:
        tokens = value.split(SCOPE_PARAMETER_DELIMITER)
    elif "," in value:
        tokens = value.split(",")
    else:
        tokens = [value]
    return [token.strip() for token in tokens if token.strip()]


class ScopeParameter(Generic[S]):
    """Ordered set of scopes serialized as the ``scope`` parameter.

    Duplicates are dropped on construction (first occurrence wins).
    Equality ignores order, so a parameter survives a round trip through
    the wire format even when the server reorders tokens.

    Args:
        scopes: The scopes, in request order.

    Example::

        param = ScopeParameter.parse("openid,email")
        assert param.to_wire() == "openid email"
    """

    __slots__ = ("_scopes",)

    def __init__(self, scopes: Iterable[S] = ()) -> None:
        self._scopes: list[S] = []
        for scope in scopes:
            if not isinstance(scope, Scope):
                raise TypeError(f"Not a scope: {scope!r} ({type(scope).__name__} is unhashable)")
            if scope not in self._scopes:
                self._scopes.append(scope)

    @classmethod
    def parse(cls, value: Any, scope_type: type = str) -> ScopeParameter:
        """Parse a wire value into a :class:`ScopeParameter`.

        Args:
            value: A space- or comma-delimited string, a list of tokens,
                or an existing :class:`ScopeParameter`.
            scope_type: The scope type to build tokens into.

        Returns:
            The parsed parameter.

        Raises:
            ScopeFromStrError: If a token is not valid for *scope_type*.
            ValueError: If *value* has an unsupported shape.
        """
        if isinstance(value, ScopeParameter):
            return value.cast(scope_type)
        if isinstance(value, str):
            tokens = _split(value)
        elif isinstance(value, (list, tuple)):
            tokens = [scope_to_str(item) for item in value]
        else:
            raise ValueError(f"Unsupported scope value: {value!r}")
        return cls(scope_from_str(scope_type, token) for token in tokens)

    def to_wire(self) -> str:
        return SCOPE_PARAMETER_DELIMITER.join(scope_to_str(s) for s in self._scopes)

    def cast(self, scope_type: type) -> ScopeParameter:
        """Convert every scope to *scope_type* through its wire token."""
        return ScopeParameter(
            scope_from_str(scope_type, scope_to_str(s)) for s in self._scopes
        )

    def to_strings(self) -> ScopeParameter[str]:
        return self.cast(str)

    # ------------------------------------------------------------------ #
    # Container protocol
    # ------------------------------------------------------------------ #

    def __iter__(self) -> Iterator[S]:
        return iter(self._scopes)

    def __len__(self) -> int:
        return len(self._scopes)

    def __contains__(self, scope: object) -> bool:
        return scope in self._scopes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScopeParameter):
            return NotImplemented
        return {scope_to_str(s) for s in self} == {scope_to_str(s) for s in other}

    def __hash__(self) -> int:
        return hash(frozenset(scope_to_str(s) for s in self._scopes))

    def __str__(self) -> str:
        return self.to_wire()

    def __repr__(self) -> str:
        return f"ScopeParameter({self.to_wire()!r})"

    # ------------------------------------------------------------------ #
    # pydantic integration
    # ------------------------------------------------------------------ #

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: Any
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.parse,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda param: param.to_wire()
            ),
        )
