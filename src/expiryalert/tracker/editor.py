"""Add/edit form workflow on top of the inventory store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from expiryalert.models.inventory import Item
from expiryalert.tracker.store import InventoryStore

logger = logging.getLogger(__name__)


@dataclass
class EntryForm:
    """Transient name/expiry form that submits to ``InventoryStore``.

    Two policies govern shelf-life suggestions while the user types a name:

    * ``suggest_only_if_empty``: a suggestion is applied only while the expiry
      field is blank, so a typed date is never overwritten.
    * ``suggest_only_while_adding``: no suggestion is applied while an existing
      item is being edited.
    """

    store: InventoryStore
    suggest_only_if_empty: bool = True
    suggest_only_while_adding: bool = True
    name: str = ""
    expiry: str = ""
    editing_id: Optional[int] = field(default=None)

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def set_name(self, name: str, now: Optional[date] = None) -> Optional[date]:
        """Store the typed name and return the suggestion applied, if any."""

        self.name = name
        if self.suggest_only_while_adding and self.is_editing:
            return None
        if self.suggest_only_if_empty and self.expiry.strip():
            return None

        suggestion = self.store.suggest_expiry(name, now)
        if suggestion is not None:
            self.expiry = suggestion.isoformat()
            logger.debug("Suggested expiry %s for %r", self.expiry, name)
        return suggestion

    def set_expiry(self, value: str) -> None:
        self.expiry = value

    def begin_edit(self, item_id: int) -> Item:
        """Load an active item into the form; raises ``ItemNotFoundError``."""

        item = self.store.get(item_id)
        self.name = item.name
        self.expiry = item.expiry.isoformat()
        self.editing_id = item.id
        return item

    def cancel(self) -> None:
        self.name = ""
        self.expiry = ""
        self.editing_id = None

    def submit(self) -> Optional[Item]:
        """Add or update depending on edit mode.

        Incomplete submissions are ignored and leave both the form and the store
        untouched. Malformed dates still raise ``ItemValidationError``.
        """

        if not self.name.strip() or not self.expiry.strip():
            logger.debug("Ignoring incomplete submission name=%r expiry=%r", self.name, self.expiry)
            return None

        if self.editing_id is not None:
            saved = self.store.update(self.editing_id, self.name, self.expiry)
        else:
            saved = self.store.add(self.name, self.expiry)
        self.cancel()
        return saved


__all__ = ["EntryForm"]
