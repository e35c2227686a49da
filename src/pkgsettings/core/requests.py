#!/usr/bin/env python3
"""
Requests handed to the settings service.

The CLI turns its arguments into a :class:`SettingsRequest`; the service
validates it and dispatches it to the matching operation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import RequestError


class CommandType(Enum):
    """Which part of the settings document a request targets."""
    SOURCE = "source"
    FEATURE = "feature"
    APIKEY = "apikey"


class Action(Enum):
    """What to do with the targeted entries."""
    LIST = "list"
    ADD = "add"
    REMOVE = "remove"
    ENABLE = "enable"
    DISABLE = "disable"
    GET = "get"
    SET = "set"


MUTATING_ACTIONS = frozenset({Action.ADD, Action.REMOVE, Action.ENABLE, Action.DISABLE, Action.SET})

SUPPORTED_ACTIONS = {
    CommandType.SOURCE: (Action.LIST, Action.ADD, Action.REMOVE, Action.ENABLE, Action.DISABLE),
    CommandType.FEATURE: (Action.LIST, Action.ENABLE, Action.DISABLE),
    CommandType.APIKEY: (Action.GET, Action.SET),
}


@dataclass
class SettingsRequest:
    """A single settings operation and its parameters.

    ``name`` is the source id or feature name. ``source`` is the source
    location: the URL of a new source, or the source an API key belongs to.
    """

    command: CommandType
    action: Action
    name: Optional[str] = None
    source: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    key: Optional[str] = None
    regular_output: bool = True
    noop: bool = False

    @property
    def is_mutating(self) -> bool:
        return self.action in MUTATING_ACTIONS

    def validate(self):
        """Raise RequestError when the request cannot be carried out."""
        if self.action not in SUPPORTED_ACTIONS[self.command]:
            raise RequestError(
                f"'{self.action.value}' is not a valid action for '{self.command.value}'"
            )

        needs_name = self.action in (Action.ADD, Action.REMOVE, Action.ENABLE, Action.DISABLE)
        if needs_name and not self.name:
            raise RequestError(
                f"When specifying the subcommand '{self.action.value}', you must also specify a name"
            )

        if self.command == CommandType.SOURCE and self.action == Action.ADD and not self.source:
            raise RequestError("When adding a source, you must also specify the source location")

        if self.command == CommandType.APIKEY and self.action == Action.SET:
            if not self.source or not self.key:
                raise RequestError("Setting an api key requires both a source and a key")
