"""
Owner Container - Single-slot value holder that lends out full ownership.

The Owner holds exactly one value and can hand it out to a borrower:
1. take(): moves the value out, leaving the slot empty
2. replace(): moves a value back in, overwriting whatever is there

Between a take and its matching replace the slot is empty. Accessing the
value in that window is a contract violation, never a silent default.

The Owner performs no locking. Callers sharing one across threads must
guard it themselves.
"""

import warnings
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

import niceowner.config

K = TypeVar("K")

OVERWRITE_POLICIES = ("silent", "warn", "strict")

# Marks an empty slot, so that None stays a legal held value
_EMPTY: Any = object()

# Attributes that live on the Owner itself, never on the held value
_OWN_ATTRS = frozenset({"_data", "_overwrite", "_warn_unreturned"})


def _load_settings() -> tuple[str, bool]:
    """Read the configured defaults, falling back to the schema on a bad file."""
    try:
        cfg = niceowner.config.get()
        return cfg.overwrite_policy, cfg.warn_unreturned
    except niceowner.config.ConfigLoadError as e:
        warnings.warn(
            f"Ignoring niceowner config, using defaults: {e}",
            RuntimeWarning,
            stacklevel=3,
        )
        schema = niceowner.config.SCHEMA
        return schema["overwrite_policy"].default, schema["warn_unreturned"].default


class OwnerError(Exception):
    """Base exception for recoverable Owner errors."""
    pass


class EmptyOwnerError(OwnerError):
    """Raised when take() finds the slot empty (the value is lent out)."""
    pass


class OccupiedOwnerError(OwnerError):
    """Raised by a strict replace when the slot still holds a value."""
    pass


class OwnerContractError(RuntimeError):
    """
    Raised on misuse that the caller is not expected to recover from.

    Deliberately outside the OwnerError hierarchy: `except OwnerError`
    must not swallow it.
    """
    pass


class OverwriteWarning(RuntimeWarning):
    """Emitted when replace() drops a value that was never taken."""
    pass


class Loan(Generic[K]):
    """Borrowed value handed out by Owner.lend(). Reassign `value` freely."""

    __slots__ = ("value",)

    def __init__(self, value: K):
        self.value = value

    def __repr__(self) -> str:
        return f"Loan({self.value!r})"


class Owner(Generic[K]):
    """
    An owner who lends out their value: not only borrowed, but owned.

    Usage:
        owned_dog = Owner(Dog(name="Dee'O G"))

        dog = owned_dog.take()        # the borrower owns the dog now
        dog.name = "Amy's dog"
        owned_dog.replace(dog)        # and must give it back

        owned_dog.name                # "Amy's dog", read through the owner

        with owned_dog.lend() as loan:
            loan.value.name = "Dee'O G"   # returned on exit, even on error

    Attribute reads and writes that the Owner does not define itself are
    forwarded to the held value.
    """

    def __init__(self, data: K, *, overwrite: str | None = None):
        """
        Create an Owner whose slot holds `data`.

        Args:
            data: The initial value. Any value is accepted, including None.
            overwrite: What replace() does when the slot is still occupied:
                'silent' overwrites, 'warn' overwrites with an
                OverwriteWarning, 'strict' raises OccupiedOwnerError.
                None defers to the `overwrite_policy` config field.

        The config is read here, once; later changes to it do not affect
        this Owner.

        Raises:
            ValueError: If `overwrite` is not a known policy
        """
        if overwrite is not None and overwrite not in OVERWRITE_POLICIES:
            raise ValueError(
                f"Unknown overwrite policy {overwrite!r}, expected one of {OVERWRITE_POLICIES}"
            )
        policy, warn_unreturned = _load_settings()
        # Bypass our own __setattr__, which forwards to the held value
        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_overwrite", overwrite or policy)
        object.__setattr__(self, "_warn_unreturned", warn_unreturned)

    @property
    def is_empty(self) -> bool:
        """True while the value is lent out and not yet replaced."""
        return self._data is _EMPTY

    @property
    def overwrite_policy(self) -> str:
        """The effective overwrite policy for this Owner."""
        return self._overwrite

    def take(self) -> K:
        """
        Own the value, moving it out of the slot.

        Returns:
            The held value. The Owner keeps no reference to it.

        Raises:
            EmptyOwnerError: If the value was already taken and not returned
        """
        data = self._data
        if data is _EMPTY:
            raise EmptyOwnerError(
                "Expected Owner to hold a value, but nothing was returned back."
            )
        object.__setattr__(self, "_data", _EMPTY)
        return data

    def replace(self, value: K) -> None:
        """
        Return a value to the Owner.

        Under the default 'silent' policy a value still in the slot is
        dropped without notice.

        Raises:
            OccupiedOwnerError: If the policy is 'strict' and the slot is occupied
        """
        if self._data is not _EMPTY:
            policy = self.overwrite_policy
            if policy == "strict":
                raise OccupiedOwnerError(
                    "Owner already holds a value; take() it before replacing."
                )
            if policy == "warn":
                warnings.warn(
                    f"Owner overwrote a value that was never taken: {self._data!r}",
                    OverwriteWarning,
                    stacklevel=2,
                )
        object.__setattr__(self, "_data", value)

    def replace_strict(self, value: K) -> None:
        """
        Return a value to the Owner, refusing to overwrite one.

        Raises:
            OccupiedOwnerError: If the slot is occupied
        """
        if self._data is not _EMPTY:
            raise OccupiedOwnerError(
                "Owner already holds a value; take() it before replacing."
            )
        object.__setattr__(self, "_data", value)

    def with_callback(self, f: Callable[[K], K]) -> None:
        """
        Temporarily own the value and do something with it.

        `f` receives the value and must return the value to store back:

            owned.with_callback(lambda s: "")

        An empty slot here is fatal, unlike take(). If `f` raises, the
        exception propagates and the slot stays empty.

        Raises:
            OwnerContractError: If the slot is empty
        """
        try:
            owned = self.take()
        except EmptyOwnerError as e:
            raise OwnerContractError(f"with_callback() on an empty Owner: {e}") from e
        self.replace(f(owned))

    @contextmanager
    def lend(self) -> Iterator[Loan[K]]:
        """
        Lend the value for the duration of a `with` block.

        Whatever `loan.value` holds when the block exits is put back, also
        when the block raises.

        Raises:
            EmptyOwnerError: If the value is already lent out
        """
        loan = Loan(self.take())
        try:
            yield loan
        finally:
            # The slot was emptied by our own take(); this is its matching return
            object.__setattr__(self, "_data", loan.value)

    def _require(self) -> K:
        data = self._data
        if data is _EMPTY:
            raise OwnerContractError(
                "Owner is empty: its value was taken and never returned."
            )
        return data

    def get(self) -> K:
        """Read the held value. Raises OwnerContractError when empty."""
        return self._require()

    def set(self, value: K) -> None:
        """Overwrite the held value in place. Raises OwnerContractError when empty."""
        self._require()
        object.__setattr__(self, "_data", value)

    value = property(get, set, doc="The held value; empty access raises OwnerContractError.")

    def __getattr__(self, name: str) -> Any:
        # Only reached for names the Owner does not define itself
        if name in _OWN_ATTRS or (name.startswith("__") and name.endswith("__")):
            raise AttributeError(name)
        return getattr(self._require(), name)

    def __setattr__(self, name: str, value: Any) -> None:
        if (
            name in _OWN_ATTRS
            or (name.startswith("__") and name.endswith("__"))
            or hasattr(type(self), name)
        ):
            object.__setattr__(self, name, value)
            return
        setattr(self._require(), name, value)

    def __del__(self):
        """Warn about a value that was never returned, if configured to."""
        state = object.__getattribute__(self, "__dict__")
        if state.get("_data") is _EMPTY and state.get("_warn_unreturned"):
            warnings.warn(
                "Owner dropped while its value was still lent out",
                ResourceWarning,
            )

    def __repr__(self) -> str:
        if self._data is _EMPTY:
            return "Owner<empty>"
        return f"Owner<{type(self._data).__name__}, occupied>"
