"""Daily ledger: per-day entries with totals kept consistent under mutation.

Totals are never patched incrementally. Every mutation rebuilds the affected
day's totals with ``compute_totals`` so they cannot drift from the entries.

Adds are optimistic: the entry shows up immediately under a ``Pending`` key
and is swapped to its ``Persisted`` key once the adapter confirms, or removed
again if the adapter fails. Edits and deletes of persisted entries wait for
the adapter before touching local state. Only one write per entry may be in
flight; a second one is rejected with ``EntryBusyError``.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from uuid import uuid4

from burnit.domain.entries import (
    DayLedger,
    EntryKey,
    FoodEntry,
    Pending,
    Persisted,
    Totals,
    compute_totals,
)
from burnit.domain.errors import EntryBusyError, NotFoundError
from burnit.services.sync import SyncAdapter
from burnit.services.validation import (
    apply_patch,
    normalize_patch,
    parse_day,
    parse_new_entry,
    validate_entry,
)

EntryRef = int | Pending | Persisted

_logger = logging.getLogger(__name__)


@dataclass
class LedgerService:
    """In-memory day-indexed ledger synchronized through a ``SyncAdapter``."""

    sync: SyncAdapter
    _days: dict[date, DayLedger] = field(default_factory=dict, init=False, repr=False)
    _in_flight: set[EntryKey] = field(default_factory=set, init=False, repr=False)

    def day(self, day: date | str) -> DayLedger:
        """Return the ledger for a day, creating an empty one on first access."""
        resolved = parse_day(day)
        ledger = self._days.get(resolved)
        if ledger is None:
            ledger = DayLedger(day=resolved)
            self._days[resolved] = ledger
        return ledger

    def days(self) -> list[date]:
        """Return every day touched this session, oldest first."""
        return sorted(self._days)

    def totals_for(self, day: date | str) -> Totals:
        return self.day(day).totals

    def entries_for(self, day: date | str) -> list[FoodEntry]:
        return list(self.day(day).entries)

    def is_in_flight(self, key: EntryKey) -> bool:
        return key in self._in_flight

    async def add_entry(
        self, day: date | str, draft: FoodEntry | dict[str, object]
    ) -> FoodEntry:
        """Validate, show optimistically, persist, then confirm or roll back."""
        ledger = self.day(day)
        if isinstance(draft, FoodEntry):
            entry = validate_entry(replace(draft, day=ledger.day, key=None))
        else:
            entry = parse_new_entry({**draft, "date": ledger.day})

        pending = replace(entry, key=Pending(uuid4().hex))
        self._in_flight.add(pending.key)
        try:
            ledger.entries.append(pending)
            self._recompute(ledger)
            stored = await self.sync.create_entry(entry)
        except BaseException:
            _logger.warning(
                "Rolling back unsaved entry %r on %s", entry.name, ledger.day
            )
            self._discard(ledger, pending.key)
            raise
        finally:
            self._in_flight.discard(pending.key)

        index = self._position(ledger, pending.key)
        if index is None:
            # The day was reset while the save was in flight.
            return stored
        ledger.entries[index] = stored
        self._recompute(ledger)
        return stored

    async def edit_entry(
        self, day: date | str, ref: EntryRef, patch: dict[str, object]
    ) -> FoodEntry:
        """Merge supplied fields into an entry and recompute totals."""
        ledger = self.day(day)
        entry = self._resolve(ledger, ref)
        key = entry.key
        self._ensure_idle(key)
        changes = normalize_patch(patch)
        updated = apply_patch(entry, changes)

        if isinstance(key, Persisted) and changes:
            self._in_flight.add(key)
            try:
                await self.sync.update_entry(key.id, changes)
            except NotFoundError:
                _logger.info("Entry %s vanished remotely; dropping it", key.id)
                self._discard(ledger, key)
                raise
            finally:
                self._in_flight.discard(key)

        index = self._position(ledger, key)
        if index is None:
            return updated
        if updated.day != ledger.day:
            del ledger.entries[index]
            self._recompute(ledger)
            target = self.day(updated.day)
            target.entries.append(updated)
            self._recompute(target)
        else:
            ledger.entries[index] = updated
            self._recompute(ledger)
        return updated

    async def delete_entry(self, day: date | str, ref: EntryRef) -> FoodEntry:
        """Remove exactly the identified entry and recompute totals."""
        ledger = self.day(day)
        entry = self._resolve(ledger, ref)
        key = entry.key
        self._ensure_idle(key)

        if isinstance(key, Persisted):
            self._in_flight.add(key)
            try:
                await self.sync.delete_entry(key.id)
            except NotFoundError:
                _logger.info("Entry %s was already deleted remotely", key.id)
            finally:
                self._in_flight.discard(key)

        self._discard(ledger, key)
        return entry

    def reset_day(self, day: date | str) -> None:
        """Clear a day's entries locally. Always succeeds."""
        ledger = self.day(day)
        ledger.entries.clear()
        self._recompute(ledger)

    async def load_day(self, day: date | str) -> DayLedger:
        """Replace a day's persisted entries with the adapter's copy.

        Entries still waiting for their first save are kept after the
        fetched ones.
        """
        ledger = self.day(day)
        fetched = await self.sync.list_entries(ledger.day)
        local_only = [
            entry for entry in ledger.entries if isinstance(entry.key, Pending)
        ]
        ledger.entries = [*fetched, *local_only]
        self._recompute(ledger)
        return ledger

    def replace_day(self, day: date | str, entries: list[FoodEntry]) -> DayLedger:
        """Install entries for a day wholesale (used by backup import)."""
        ledger = self.day(day)
        ledger.entries = [
            replace(
                entry,
                day=ledger.day,
                key=entry.key or Pending(uuid4().hex),
            )
            for entry in entries
        ]
        self._recompute(ledger)
        return ledger

    def clear(self) -> None:
        """Forget every day."""
        self._days.clear()

    def _ensure_idle(self, key: EntryKey | None) -> None:
        if key is not None and key in self._in_flight:
            raise EntryBusyError("Entry is still being saved; try again shortly")

    @staticmethod
    def _resolve(ledger: DayLedger, ref: EntryRef) -> FoodEntry:
        if isinstance(ref, Pending | Persisted):
            for entry in ledger.entries:
                if entry.key == ref:
                    return entry
            raise NotFoundError(f"Entry {ref} not found on {ledger.day}")
        if isinstance(ref, int) and not isinstance(ref, bool):
            if 0 <= ref < len(ledger.entries):
                return ledger.entries[ref]
        raise NotFoundError(f"No entry at position {ref!r} on {ledger.day}")

    @staticmethod
    def _position(ledger: DayLedger, key: EntryKey | None) -> int | None:
        for index, entry in enumerate(ledger.entries):
            if entry.key == key:
                return index
        return None

    def _discard(self, ledger: DayLedger, key: EntryKey | None) -> None:
        index = self._position(ledger, key)
        if index is not None:
            del ledger.entries[index]
        self._recompute(ledger)

    @staticmethod
    def _recompute(ledger: DayLedger) -> None:
        ledger.totals = compute_totals(ledger.entries)
