"""Result type returned by every public operation.

Operations never raise past the public boundary. A ``Result`` carries either
the success payload or the typed error describing why the call failed:

    result = client.files.metadata("/Photos")
    if result:
        print(result.value.data["contents"])
    else:
        print(result.error.message)

Callers who prefer exceptions can use ``result.unwrap()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from ptcloud_client.exceptions import CloudError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Success payload or typed error, never both."""

    value: T | None = None
    error: CloudError | None = None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: CloudError) -> Result[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """True when the operation succeeded."""
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> T:
        """Return the payload, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
