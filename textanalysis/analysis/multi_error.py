import threading


class MultiError(Exception):
    """Immutable snapshot of every failure recorded during one run."""

    def __init__(self, errors: list[BaseException]) -> None:
        self.errors: tuple[BaseException, ...] = tuple(errors)
        super().__init__(" and ".join(str(err) for err in self.errors))

    def __len__(self) -> int:
        return len(self.errors)


class MultiErrorBuilder:
    """Collects independent failures from concurrent branches.

    Recording an error never interrupts other branches; callers decide when
    to inspect the outcome via `build()`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._errors: list[BaseException] = []

    def add(self, error: BaseException) -> None:
        with self._lock:
            self._errors.append(error)

    def __len__(self) -> int:
        with self._lock:
            return len(self._errors)

    def build(self) -> MultiError | None:
        """Return the combined error, or None if nothing was recorded."""
        with self._lock:
            if not self._errors:
                return None
            return MultiError(self._errors)
