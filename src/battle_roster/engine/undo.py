"""Snapshot undo/redo for the roster.

UndoEngine keeps two bounded stacks of whole-roster snapshots. Every
checkpoint is a deep copy, taken before an action runs. Undo restores
every tracked field at once; there is no partial undo.

UndoableRoster is the surface collaborators call. It exposes each
RosterStore mutator under the same name and checkpoints before
delegating. A checkpoint is discarded again when the action reports
that nothing happened, so no-op actions never reach the undo stack.

Example:
    >>> roster = UndoableRoster()
    >>> roster.set_fear_pool(3)
    >>> roster.spend_fear(5)
    False
    >>> [meta.label for meta in roster.undo_stack]
    ['Set fear pool']
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pydantic import ValidationError as PydanticValidationError

from battle_roster.core.config import RosterSettings
from battle_roster.core.exceptions import ValidationError
from battle_roster.core.logging import get_logger
from battle_roster.engine.dice import DiceRoller
from battle_roster.engine.overrides import effective_attack
from battle_roster.engine.roster import AnyTracker, ListOrUpdater, RosterStore, tracker_name
from battle_roster.models.enums import DetailTab, RollKind, RosterTab
from battle_roster.models.snapshot import RosterSnapshot, UndoEntry, UndoEntryMeta
from battle_roster.models.templates import Adversary, Environment
from battle_roster.models.trackers import (
    AdversaryTracker,
    CharacterTracker,
    EnvironmentTracker,
    NewCharacterDraft,
    RollHistoryEntry,
    SpotlightHistoryEntry,
    TrackerSelection,
)


logger = get_logger(__name__)

R = TypeVar("R")


def _is_none(result: object) -> bool:
    return result is None


def _is_false(result: object) -> bool:
    return result is False


def _is_zero(result: object) -> bool:
    return result == 0


class UndoEngine:
    """Bounded undo and redo stacks over a RosterStore.

    Both stacks are newest first and truncated to ``max_depth``.

    Attributes:
        max_depth: Maximum entries kept on each stack.
    """

    def __init__(self, store: RosterStore, max_depth: int | None = None) -> None:
        """Initialize the engine with empty stacks.

        Args:
            store: Store to snapshot and restore.
            max_depth: Stack cap. Defaults to the store's configured depth.
        """
        self._store = store
        self.max_depth = max_depth if max_depth is not None else store.settings.max_undo_depth
        self._past: list[UndoEntry] = []
        self._future: list[UndoEntry] = []
        # What the last push evicted and cleared; pop_undo puts them back.
        self._evicted: list[UndoEntry] = []
        self._cleared_future: list[UndoEntry] = []

    @property
    def past(self) -> list[UndoEntry]:
        return list(self._past)

    @property
    def future(self) -> list[UndoEntry]:
        return list(self._future)

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    @property
    def undo_stack(self) -> list[UndoEntryMeta]:
        """Metadata of the undo entries, newest first."""
        return [entry.meta for entry in self._past]

    @property
    def redo_stack(self) -> list[UndoEntryMeta]:
        """Metadata of the redo entries, newest first."""
        return [entry.meta for entry in self._future]

    def _checkpoint(self, label: str) -> UndoEntry:
        return UndoEntry(meta=UndoEntryMeta(label=label), snapshot=self._store.export_snapshot())

    def _forget_push(self) -> None:
        self._evicted = []
        self._cleared_future = []

    def push_undo(self, label: str) -> UndoEntryMeta:
        """Checkpoint the current state and invalidate redo.

        Args:
            label: Human-readable name of the action about to run.

        Returns:
            Metadata of the new entry.
        """
        entry = self._checkpoint(label)
        stacked = [entry, *self._past]
        self._past = stacked[: self.max_depth]
        self._evicted = stacked[self.max_depth :]
        self._cleared_future = self._future
        self._future = []
        logger.debug("Undo checkpoint", label=label, depth=len(self._past))
        return entry.meta

    def pop_undo(self, *, restore_redo: bool = False) -> UndoEntry | None:
        """Discard the newest checkpoint without restoring it.

        Checkpoints evicted by the matching push return to the bottom of
        the undo stack, so the stack length is what it was before the push.

        Args:
            restore_redo: Also bring back the redo stack the push cleared.

        Returns:
            The discarded entry, or None if the undo stack is empty.
        """
        if not self._past:
            return None
        entry, *self._past = self._past
        self._past = [*self._past, *self._evicted][: self.max_depth]
        if restore_redo:
            self._future = self._cleared_future
        self._evicted = []
        self._cleared_future = []
        logger.debug("Undo checkpoint discarded", label=entry.meta.label)
        return entry

    def undo(self) -> UndoEntryMeta | None:
        """Restore the newest checkpoint.

        The current state moves to the redo stack under the same label.

        Returns:
            Metadata of the undone action, or None if there is nothing to undo.
        """
        if not self._past:
            return None
        entry, *remaining = self._past
        current = self._checkpoint(entry.meta.label)
        self._forget_push()
        self._past = remaining
        self._future = [current, *self._future][: self.max_depth]
        self._store.import_snapshot(entry.snapshot)
        logger.info(f"Undone: {entry.meta.label}", label=entry.meta.label)
        return entry.meta

    def redo(self) -> UndoEntryMeta | None:
        """Reapply the newest undone action.

        Returns:
            Metadata of the redone action, or None if there is nothing to redo.
        """
        if not self._future:
            return None
        entry, *remaining = self._future
        current = self._checkpoint(entry.meta.label)
        self._forget_push()
        self._future = remaining
        self._past = [current, *self._past][: self.max_depth]
        self._store.import_snapshot(entry.snapshot)
        logger.info(f"Redone: {entry.meta.label}", label=entry.meta.label)
        return entry.meta

    def clear_history(self) -> None:
        """Drop both stacks."""
        self._past = []
        self._future = []
        self._forget_push()


class UndoableRoster:
    """Roster actions with undo tracking.

    Every mutator checkpoints before it delegates to the store. Tab
    setters and queries pass straight through.

    Attributes:
        store: The wrapped RosterStore.
        undo_engine: Undo and redo stacks.
        roller: Dice roller for adversary rolls.
    """

    def __init__(
        self,
        store: RosterStore | None = None,
        *,
        settings: RosterSettings | None = None,
        roller: DiceRoller | None = None,
    ) -> None:
        """Initialize the roster.

        Args:
            store: Existing store to wrap. A new one is created if omitted.
            settings: Settings for a newly created store.
            roller: Dice roller. A new unseeded one is created if omitted.
        """
        self.store = store or RosterStore(settings)
        self.undo_engine = UndoEngine(self.store)
        self.roller = roller or DiceRoller()

    def _tracked(
        self,
        label: str,
        operation: Callable[..., R],
        *args: Any,
        failed: Callable[[R], bool] | None = None,
    ) -> R:
        self.undo_engine.push_undo(label)
        try:
            result = operation(*args)
        except Exception:
            self.undo_engine.pop_undo(restore_redo=True)
            raise
        if failed is not None and failed(result):
            self.undo_engine.pop_undo()
        return result

    # =========================================================================
    # Pass-throughs
    # =========================================================================

    @property
    def state(self) -> RosterSnapshot:
        return self.store.state

    @property
    def selected_item(self) -> AnyTracker | None:
        return self.store.selected_item

    @property
    def spotlight_item(self) -> AnyTracker | None:
        return self.store.spotlight_item

    @property
    def items(self) -> list[AnyTracker]:
        return self.store.items

    def get_character(self, tracker_id: str) -> CharacterTracker | None:
        return self.store.get_character(tracker_id)

    def get_adversary(self, tracker_id: str) -> AdversaryTracker | None:
        return self.store.get_adversary(tracker_id)

    def get_environment(self, tracker_id: str) -> EnvironmentTracker | None:
        return self.store.get_environment(tracker_id)

    def resolve(self, selection: TrackerSelection | None) -> AnyTracker | None:
        return self.store.resolve(selection)

    def undo(self) -> UndoEntryMeta | None:
        return self.undo_engine.undo()

    def redo(self) -> UndoEntryMeta | None:
        return self.undo_engine.redo()

    @property
    def can_undo(self) -> bool:
        return self.undo_engine.can_undo

    @property
    def can_redo(self) -> bool:
        return self.undo_engine.can_redo

    @property
    def undo_stack(self) -> list[UndoEntryMeta]:
        return self.undo_engine.undo_stack

    @property
    def redo_stack(self) -> list[UndoEntryMeta]:
        return self.undo_engine.redo_stack

    def clear_history(self) -> None:
        self.undo_engine.clear_history()

    def set_active_roster_tab(self, tab: RosterTab) -> None:
        self.store.set_active_roster_tab(tab)

    def set_active_detail_tab(self, tab: DetailTab) -> None:
        self.store.set_active_detail_tab(tab)

    # =========================================================================
    # Entities
    # =========================================================================

    def add_character(self, draft: NewCharacterDraft | Mapping[str, Any]) -> str | None:
        return self._tracked("Add character", self.store.add_character, draft, failed=_is_none)

    def add_adversary(self, template: Adversary) -> str:
        return self._tracked(f"Add adversary: {template.name}", self.store.add_adversary, template)

    def add_environment(self, template: Environment) -> str:
        return self._tracked(
            f"Add environment: {template.name}", self.store.add_environment, template
        )

    def update_character(
        self,
        tracker_id: str,
        updater: Callable[[CharacterTracker], CharacterTracker],
    ) -> bool:
        return self._tracked(
            "Update character", self.store.update_character, tracker_id, updater, failed=_is_false
        )

    def update_adversary(
        self,
        tracker_id: str,
        updater: Callable[[AdversaryTracker], AdversaryTracker],
    ) -> bool:
        return self._tracked(
            "Update adversary", self.store.update_adversary, tracker_id, updater, failed=_is_false
        )

    def update_environment(
        self,
        tracker_id: str,
        updater: Callable[[EnvironmentTracker], EnvironmentTracker],
    ) -> bool:
        return self._tracked(
            "Update environment",
            self.store.update_environment,
            tracker_id,
            updater,
            failed=_is_false,
        )

    def remove_item(self, item: AnyTracker | TrackerSelection) -> bool:
        return self._tracked(f"Remove {item.kind}", self.store.remove_item, item, failed=_is_false)

    # =========================================================================
    # Selection & spotlight
    # =========================================================================

    def handle_select(self, item: AnyTracker) -> None:
        self._tracked(f"Select {item.kind}", self.store.handle_select, item)

    def set_selection(self, selection: TrackerSelection | None) -> None:
        self._tracked("Set selection", self.store.set_selection, selection)

    def handle_spotlight(self, item: AnyTracker) -> None:
        self._tracked("Change spotlight", self.store.handle_spotlight, item)

    def set_spotlight(self, selection: TrackerSelection | None) -> None:
        self._tracked("Set spotlight", self.store.set_spotlight, selection)

    # =========================================================================
    # Rounds
    # =========================================================================

    def advance_round(self) -> int:
        label = f"Advance to round {self.store.state.current_round + 1}"
        return self._tracked(label, self.store.advance_round)

    def set_current_round(self, value: int) -> None:
        self._tracked(f"Set round to {value}", self.store.set_current_round, value)

    def toggle_adversary_acted(self, tracker_id: str) -> bool:
        return self._tracked(
            "Toggle adversary acted",
            self.store.toggle_adversary_acted,
            tracker_id,
            failed=_is_false,
        )

    # =========================================================================
    # Fear economy & toggles
    # =========================================================================

    def set_fear_pool(self, value: int) -> None:
        self._tracked("Set fear pool", self.store.set_fear_pool, value)

    def spend_fear(self, amount: int) -> bool:
        return self._tracked(f"Spend {amount} Fear", self.store.spend_fear, amount, failed=_is_false)

    def set_max_fear(self, value: int | None) -> None:
        self._tracked("Set max fear", self.store.set_max_fear, value)

    def set_use_massive_threshold(self, value: bool) -> None:
        label = "Enable massive threshold" if value else "Disable massive threshold"
        self._tracked(label, self.store.set_use_massive_threshold, value)

    # =========================================================================
    # History logs
    # =========================================================================

    def add_roll_to_history(self, entry: RollHistoryEntry) -> None:
        self._tracked("Add roll to history", self.store.add_roll_to_history, entry)

    def clear_roll_history(self) -> None:
        self._tracked("Clear roll history", self.store.clear_roll_history)

    def set_roll_history(self, value: ListOrUpdater[RollHistoryEntry]) -> None:
        self._tracked("Set roll history", self.store.set_roll_history, value)

    def clear_spotlight_history_timeline(self) -> None:
        self._tracked("Clear spotlight history timeline", self.store.clear_spotlight_history_timeline)

    def set_spotlight_history_timeline(self, value: ListOrUpdater[SpotlightHistoryEntry]) -> None:
        self._tracked(
            "Set spotlight history timeline", self.store.set_spotlight_history_timeline, value
        )

    # =========================================================================
    # Bulk setters
    # =========================================================================

    def set_characters(self, value: ListOrUpdater[CharacterTracker]) -> None:
        self._tracked("Set characters", self.store.set_characters, value)

    def set_adversaries(self, value: ListOrUpdater[AdversaryTracker]) -> None:
        self._tracked("Set adversaries", self.store.set_adversaries, value)

    def set_environments(self, value: ListOrUpdater[EnvironmentTracker]) -> None:
        self._tracked("Set environments", self.store.set_environments, value)

    def set_spotlight_history(self, value: ListOrUpdater[TrackerSelection]) -> None:
        self._tracked("Set spotlight history", self.store.set_spotlight_history, value)

    # =========================================================================
    # Countdowns & environment features
    # =========================================================================

    def reduce_all_countdowns(self) -> int:
        return self._tracked(
            "Reduce countdowns", self.store.reduce_all_countdowns, failed=_is_zero
        )

    def toggle_environment_feature(self, tracker_id: str, feature_id: str) -> bool:
        return self._tracked(
            "Toggle environment feature",
            self.store.toggle_environment_feature,
            tracker_id,
            feature_id,
            failed=_is_false,
        )

    # =========================================================================
    # Adversary rolls
    # =========================================================================

    def roll_adversary_attack(self, tracker_id: str) -> RollHistoryEntry | None:
        """Roll ``1d20`` plus the adversary's effective attack modifier.

        Returns:
            The recorded roll, or None if the adversary does not exist.
        """
        adversary = self.store.get_adversary(tracker_id)
        if adversary is None:
            return None
        result = self.roller.roll_attack(effective_attack(adversary).modifier_value)
        return self._tracked(
            f"Roll attack: {tracker_name(adversary)}",
            self.store.record_adversary_roll,
            tracker_id,
            RollKind.ATTACK,
            result,
            failed=_is_none,
        )

    def roll_adversary_damage(self, tracker_id: str) -> RollHistoryEntry | None:
        """Roll the adversary's effective damage expression.

        Returns:
            The recorded roll, or None if the adversary does not exist.

        Raises:
            DiceRollError: If the damage line holds no rollable expression.
        """
        adversary = self.store.get_adversary(tracker_id)
        if adversary is None:
            return None
        result = self.roller.roll_damage(effective_attack(adversary).damage)
        return self._tracked(
            f"Roll damage: {tracker_name(adversary)}",
            self.store.record_adversary_roll,
            tracker_id,
            RollKind.DAMAGE,
            result,
            failed=_is_none,
        )

    # =========================================================================
    # Sessions
    # =========================================================================

    def load_session(self, data: RosterSnapshot | Mapping[str, Any]) -> None:
        """Replace the roster with saved session data and clear history.

        Args:
            data: A snapshot, or a mapping such as ``snapshot.model_dump()``.

        Raises:
            ValidationError: If the mapping is not a valid roster snapshot.
        """
        if isinstance(data, RosterSnapshot):
            snapshot = data
        else:
            try:
                snapshot = RosterSnapshot.model_validate(data)
            except PydanticValidationError as exc:
                raise ValidationError(
                    "Invalid roster session data",
                    details={"errors": exc.error_count()},
                ) from exc

        self.store.import_snapshot(snapshot)
        self.undo_engine.clear_history()
        logger.info(
            "Session loaded",
            characters=len(snapshot.characters),
            adversaries=len(snapshot.adversaries),
            environments=len(snapshot.environments),
        )

    def new_session(self) -> None:
        """Start an empty encounter and clear history."""
        self.store.import_snapshot(self.store.blank_snapshot())
        self.undo_engine.clear_history()
        logger.info("New session started")


__all__ = [
    "UndoEngine",
    "UndoableRoster",
]
