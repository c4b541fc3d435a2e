"""
models.py
Member record and its membership variants (Standard / Coached / Academic).
"""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Union

from errors import InvalidVariant

if TYPE_CHECKING:
    from fees import RateConfig

log = logging.getLogger(__name__)

# Performance rating domain (inclusive)
RATING_MIN = 0
RATING_MAX = 10

# Attributes whose change invalidates a store index
NAME_FIELDS = ("first_name", "last_name")
INDEXED_FIELDS = NAME_FIELDS + ("rating",)


class VariantKind(str, Enum):
    STANDARD = "standard"
    COACHED = "coached"
    ACADEMIC = "academic"


@dataclass
class Standard:
    kind = VariantKind.STANDARD


@dataclass
class Coached:
    trainer_name: str
    sessions_per_month: int

    kind = VariantKind.COACHED


@dataclass
class Academic:
    student_id: str
    institution: str

    kind = VariantKind.ACADEMIC


Variant = Union[Standard, Coached, Academic]
FeePolicy = Callable[[Variant, "RateConfig"], float]


def rating_in_range(value) -> bool:
    # bool is an int subclass; True/False are not ratings
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return RATING_MIN <= value <= RATING_MAX


@dataclass(eq=False)
class MemberRecord:
    """
    One membership entry. Records are handles: equality is identity.

    `id` cannot change once set. A rating outside RATING_MIN..RATING_MAX is
    ignored and the previous value kept. Stores that index this record
    register a weakly held observer so name/rating changes made through the
    handle reach their indices. Observers run with no store lock held.
    """

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    variant: Variant = field(default_factory=Standard)
    rating: int = RATING_MIN
    goal_achieved: bool = False
    _observers: list = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        for name in ("id", "first_name", "last_name", "email", "phone"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{name} must be a non-empty string")
        if not isinstance(self.variant, (Standard, Coached, Academic)):
            raise TypeError(f"unknown membership variant: {self.variant!r}")

    def __setattr__(self, name: str, value) -> None:
        initialised = "_observers" in self.__dict__
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("member id is immutable")
        if name == "variant" and "variant" in self.__dict__:
            raise AttributeError("membership variant is fixed at creation")
        if name == "rating" and not rating_in_range(value):
            log.warning("Rejected rating %r for member %s", value, self.__dict__.get("id"))
            if "rating" not in self.__dict__:
                object.__setattr__(self, name, RATING_MIN)
            return
        if name in NAME_FIELDS and initialised and (not isinstance(value, str) or not value.strip()):
            raise ValueError(f"{name} must be a non-empty string")

        old = self.__dict__.get(name)
        object.__setattr__(self, name, value)
        if initialised and name in INDEXED_FIELDS and old != value:
            self._notify(name)

    # ---------- observers ----------

    def watch(self, callback) -> None:
        """Register a bound method to call as callback(record, attribute) on change."""
        self._observers.append(weakref.WeakMethod(callback))

    def unwatch(self, callback) -> None:
        ref = weakref.WeakMethod(callback)
        self._observers[:] = [r for r in self._observers if r != ref]

    def _notify(self, name: str) -> None:
        dead = False
        for ref in list(self._observers):
            callback = ref()
            if callback is None:
                dead = True
                continue
            callback(self, name)
        if dead:
            # owners that were garbage collected without removing us
            self._observers[:] = [r for r in self._observers if r() is not None]

    def set_name(self, first_name: str, last_name: str) -> None:
        """Change both names, then notify observers once. Nothing changes if either is empty."""
        for label, value in (("first_name", first_name), ("last_name", last_name)):
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{label} must be a non-empty string")
        if (first_name, last_name) == (self.first_name, self.last_name):
            return
        object.__setattr__(self, "first_name", first_name)
        object.__setattr__(self, "last_name", last_name)
        self._notify("first_name")

    # ---------- derived values ----------

    @property
    def kind(self) -> VariantKind:
        return self.variant.kind

    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def monthly_fee(self, policy: FeePolicy, rates: RateConfig) -> float:
        return policy(self.variant, rates)

    # ---------- variant-specific accessors ----------

    def _require(self, cls) -> Variant:
        if not isinstance(self.variant, cls):
            raise InvalidVariant(cls.kind, self.variant.kind)
        return self.variant

    @property
    def trainer_name(self) -> str:
        return self._require(Coached).trainer_name

    @trainer_name.setter
    def trainer_name(self, value: str) -> None:
        self._require(Coached).trainer_name = value

    @property
    def sessions_per_month(self) -> int:
        return self._require(Coached).sessions_per_month

    @sessions_per_month.setter
    def sessions_per_month(self, value: int) -> None:
        self._require(Coached).sessions_per_month = value

    @property
    def student_id(self) -> str:
        return self._require(Academic).student_id

    @student_id.setter
    def student_id(self, value: str) -> None:
        self._require(Academic).student_id = value

    @property
    def institution(self) -> str:
        return self._require(Academic).institution

    @institution.setter
    def institution(self, value: str) -> None:
        self._require(Academic).institution = value
