from typing import Mapping, Optional

DEFAULT_VARIABLES: dict[str, float] = {
    "x": 42.0,
    "pi": 3.14159265359,
}


class VariableStore(dict[str, float]):
    """Identifier -> value mapping shared by every evaluation in a session.

    Reading a name that was never assigned yields 0.0 and records it, so a
    later read sees the same binding.
    """

    def __missing__(self, name: str) -> float:
        self[name] = 0.0
        return 0.0

    @classmethod
    def with_defaults(cls, extra: Optional[Mapping[str, float]] = None) -> "VariableStore":
        store = cls(DEFAULT_VARIABLES)
        if extra:
            store.update(extra)
        return store
