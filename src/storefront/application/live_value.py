"""Last-value broadcast used for loading, error, results and cart state.

A LiveValue always has a current value.  New observers receive it
immediately on subscribe and then every later update.  Only the owning
component calls ``set()``.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Observer = Callable[[T], None]


class Subscription:

    def __init__(self, detach: Callable[[], None]) -> None:
        self._detach = detach
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._detach()


class LiveValue(Generic[T]):

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._observers: list[Observer[T]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Replace the current value and notify every observer in
        subscription order."""
        self._value = value
        for observer in list(self._observers):
            observer(value)

    def subscribe(self, observer: Observer[T]) -> Subscription:
        self._observers.append(observer)
        observer(self._value)
        return Subscription(lambda: self._observers.remove(observer))
