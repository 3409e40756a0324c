"""
Outcome of an account operation.

Every operation returns a Result instead of raising: either the requested
data, or a Failure with a kind and a message that is safe to show to users.
"""
from dataclasses import dataclass
from typing import Any, Callable, Optional

# Failure kinds
NOT_FOUND = "not_found"                      # unknown username, bad / expired token
CONFLICT = "conflict"                        # username or email already in use
INVALID_CREDENTIALS = "invalid_credentials"  # wrong password
MECHANICAL = "mechanical"                    # store, hashing or mail backend failed


@dataclass
class Failure:
    kind: str
    message: str

    @property
    def code(self) -> str:
        return self.kind.upper()


@dataclass
class Result:
    data: Any = None
    error: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: Any) -> "Result":
        return cls(data=data)

    @classmethod
    def failure(cls, kind: str, message: str) -> "Result":
        return cls(error=Failure(kind, message))

    def to_response(self, serialize: Optional[Callable[[Any], Any]] = None) -> dict:
        """
        Render the API envelope:
            {"success": True, "data": ...}
            {"success": False, "error": {"code": ..., "message": ...}}
        """
        if self.error is not None:
            return {"success": False, "error": {"code": self.error.code, "message": self.error.message}}
        data = serialize(self.data) if serialize else self.data
        return {"success": True, "data": data}
