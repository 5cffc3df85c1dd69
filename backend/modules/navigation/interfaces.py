"""
Navigation module interface.

The guard issues redirects through INavigator; the hosting client
supplies the implementation (router.replace on the client side).
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class INavigator(Protocol):
    """Replaces the current location."""

    def replace(self, path: str) -> None:
        ...
