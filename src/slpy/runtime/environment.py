"""
Execution Environment

The only mutable runtime state: a single flat mapping from variable name
to its current integer value. Created empty for each program run and
owned by that run alone.
"""

from typing import Dict, Iterator, Optional

from ..shared.errors import UnboundVariableError
from ..shared.source_location import SourceLocation


class Environment:
    """
    Variable bindings of one program run (the Ctxt).
    - set_value(name, value): bind, overwriting any prior binding
    - get_value(name, location): lookup; reading before assignment is an error
    """
    _bindings: Dict[str, int]

    def __init__(self):
        self._bindings = {}

    def set_value(self, name: str, value: int) -> None:
        self._bindings[name] = value

    def get_value(self, name: str, location: Optional[SourceLocation] = None) -> int:
        try:
            return self._bindings[name]
        except KeyError:
            raise UnboundVariableError(
                f"Run-time error: variable '{name}' is used before it is assigned.",
                location,
                label="not assigned yet",
                note="a variable must be assigned before it is read",
            ) from None

    def as_dict(self) -> Dict[str, int]:
        """Snapshot of the current bindings."""
        return dict(self._bindings)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __repr__(self) -> str:
        return f"Environment({self._bindings!r})"
