"""Action key bindings attached to a searchable component.

An action key maps a key code to a message that is sent instead of normal
text input while the searchable has focus. Bindings are collected in a
prepend-only table: the head is the most recently added binding and lookups
scan head to tail, so for a duplicated key code the last declared binding
wins.
"""

from collections.abc import Iterator

from attrs import define, field

from src.config import get_logger

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class ActionKeyInfo:
    """A single key code to message binding."""

    key_code: int
    query_action_msg: str | None = None
    suggest_action_msg: str | None = None
    suggest_action_msg_column: str | None = None

    @property
    def has_message(self) -> bool:
        """True if at least one of the three message fields is usable."""
        return any(
            (self.query_action_msg, self.suggest_action_msg, self.suggest_action_msg_column)
        )


@define(frozen=True, slots=True)
class ActionKeyTable:
    """Immutable prepend-only sequence of action key bindings.

    ``bindings`` is stored in scan order, head first.
    """

    bindings: tuple[ActionKeyInfo, ...] = field(default=(), converter=tuple)

    def prepend(
        self,
        key_code: int,
        query_action_msg: str | None = None,
        suggest_action_msg: str | None = None,
        suggest_action_msg_column: str | None = None,
    ) -> "ActionKeyTable":
        """Return a new table with the binding at the head.

        The table is returned unchanged when the binding has key code 0 or
        no usable message.
        """
        info = ActionKeyInfo(
            key_code,
            query_action_msg,
            suggest_action_msg,
            suggest_action_msg_column,
        )
        return self.prepend_info(info)

    def prepend_info(self, info: ActionKeyInfo) -> "ActionKeyTable":
        """Prepend an already built binding, applying the same rejection rules."""
        if info.key_code == 0:
            logger.debug("Dropping action key without a key code")
            return self
        if not info.has_message:
            logger.debug(f"Dropping action key {info.key_code}: no action message")
            return self
        return ActionKeyTable((info, *self.bindings))

    def find(self, key_code: int) -> ActionKeyInfo | None:
        """Return the first binding for ``key_code`` in scan order."""
        for info in self.bindings:
            if info.key_code == key_code:
                return info
        return None

    def declaration_order(self) -> Iterator[ActionKeyInfo]:
        """Iterate tail to head, i.e. in the order bindings were added."""
        return reversed(self.bindings)

    def __iter__(self) -> Iterator[ActionKeyInfo]:
        return iter(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)

    def __bool__(self) -> bool:
        return bool(self.bindings)


EMPTY_ACTION_KEYS = ActionKeyTable()
