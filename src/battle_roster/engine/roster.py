"""Roster store for a combat encounter.

The RosterStore owns every participant collection along with selection,
spotlight, the round counter, the fear pool and the bounded history
logs. All operations are synchronous and total. Failure is reported
through the return value (``None`` or ``False``) and never by raising.
The exception is an updater that breaks tracker identity, which is a
programming error.

Selection and spotlight are weak ``{kind, id}`` references. Reads
re-resolve them through the collections, and ``remove_item`` nulls any
reference to the removed tracker immediately.

The store does no undo bookkeeping itself. ``export_snapshot`` and
``import_snapshot`` are the hooks the undo engine uses.

Example:
    >>> store = RosterStore()
    >>> hero_id = store.add_character(NewCharacterDraft(name="Marlowe", hp_max="6"))
    >>> store.set_fear_pool(3)
    >>> store.spend_fear(5)
    False
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar, Union

from battle_roster.core.config import RosterSettings, get_settings
from battle_roster.core.exceptions import InvalidRosterStateError
from battle_roster.core.logging import get_logger
from battle_roster.engine.dice import DiceExpression
from battle_roster.engine.overrides import effective_attack
from battle_roster.engine.parsing import normalize_environment_feature, to_number
from battle_roster.models.enums import DetailTab, RollKind, RosterTab, TrackerKind
from battle_roster.models.snapshot import RosterSnapshot
from battle_roster.models.templates import Adversary, Environment
from battle_roster.models.trackers import (
    AdversaryTracker,
    AttackRollCache,
    CharacterTracker,
    DamageRollCache,
    EnvironmentTracker,
    Gauge,
    NewCharacterDraft,
    RollHistoryEntry,
    SpotlightHistoryEntry,
    TrackerSelection,
    new_tracker_id,
)


logger = get_logger(__name__)

AnyTracker = CharacterTracker | AdversaryTracker | EnvironmentTracker
T = TypeVar("T")
ListOrUpdater = Union[list[T], Callable[[list[T]], Sequence[T]]]

_COLLECTIONS: dict[str, str] = {
    TrackerKind.CHARACTER: "characters",
    TrackerKind.ADVERSARY: "adversaries",
    TrackerKind.ENVIRONMENT: "environments",
}


def tracker_name(item: AnyTracker) -> str:
    """Display name of a tracker, as copied into history logs."""
    if item.kind == TrackerKind.CHARACTER:
        return item.name
    return item.source.name


def _apply(value: ListOrUpdater[T], current: list[T]) -> list[T]:
    if callable(value):
        return list(value(list(current)))
    return list(value)


class RosterStore:
    """In-memory model of one combat encounter.

    Attributes:
        settings: Caps and draft fallbacks in effect.
        active_roster_tab: Roster list tab (UI state, not snapshotted).
        active_detail_tab: Detail panel tab (UI state, not snapshotted).
    """

    def __init__(self, settings: RosterSettings | None = None) -> None:
        """Initialize an empty encounter.

        Args:
            settings: Roster settings. Defaults to the application settings.
        """
        self.settings = settings or get_settings().roster
        self._state = self.blank_snapshot()
        self.active_roster_tab = RosterTab.CHARACTERS
        self.active_detail_tab = DetailTab.QUICK
        logger.debug("RosterStore initialized", max_fear=self._state.max_fear)

    def blank_snapshot(self) -> RosterSnapshot:
        """State of a fresh encounter under the current settings."""
        return RosterSnapshot(
            current_round=self.settings.starting_round,
            max_fear=self.settings.default_max_fear,
        )

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def state(self) -> RosterSnapshot:
        """Live roster state. Treat it as read-only."""
        return self._state

    @property
    def characters(self) -> list[CharacterTracker]:
        return self._state.characters

    @property
    def adversaries(self) -> list[AdversaryTracker]:
        return self._state.adversaries

    @property
    def environments(self) -> list[EnvironmentTracker]:
        return self._state.environments

    @property
    def items(self) -> list[AnyTracker]:
        """Every tracker, characters first, then adversaries, then environments."""
        return [*self._state.characters, *self._state.adversaries, *self._state.environments]

    def get_character(self, tracker_id: str) -> CharacterTracker | None:
        return self._find(TrackerKind.CHARACTER, tracker_id)

    def get_adversary(self, tracker_id: str) -> AdversaryTracker | None:
        return self._find(TrackerKind.ADVERSARY, tracker_id)

    def get_environment(self, tracker_id: str) -> EnvironmentTracker | None:
        return self._find(TrackerKind.ENVIRONMENT, tracker_id)

    def resolve(self, selection: TrackerSelection | None) -> AnyTracker | None:
        """Resolve a weak reference against the live collections.

        Returns:
            The tracker, or None if the reference is empty or stale.
        """
        if selection is None:
            return None
        return self._find(selection.kind, selection.id)

    @property
    def selected_item(self) -> AnyTracker | None:
        """Tracker shown in the detail panel, if it still exists."""
        return self.resolve(self._state.selection)

    @property
    def spotlight_item(self) -> AnyTracker | None:
        """Tracker holding the spotlight, if it still exists."""
        return self.resolve(self._state.spotlight)

    def _find(self, kind: str, tracker_id: str) -> AnyTracker | None:
        for item in getattr(self._state, _COLLECTIONS[kind]):
            if item.id == tracker_id:
                return item
        return None

    # =========================================================================
    # Creation
    # =========================================================================

    def add_character(self, draft: NewCharacterDraft | Mapping[str, Any]) -> str | None:
        """Add a character from raw form input and select it.

        Args:
            draft: Unparsed form fields, as a draft or a plain mapping.

        Returns:
            The new tracker id, or None if the trimmed name is blank. In
            that case nothing changes, selection included.
        """
        if not isinstance(draft, NewCharacterDraft):
            draft = NewCharacterDraft.model_validate(draft)
        name = draft.name.strip()
        if not name:
            logger.info("Character rejected, blank name")
            return None

        hp_max = to_number(draft.hp_max, self.settings.default_character_hp)
        stress_max = to_number(draft.stress_max, self.settings.default_character_stress)
        evasion = to_number(draft.evasion, self.settings.default_character_evasion)
        entry = CharacterTracker(
            id=new_tracker_id(),
            name=name,
            evasion=evasion,
            hp=Gauge.full(hp_max),
            stress=Gauge.full(stress_max),
        )
        self._append(entry)
        logger.debug("Character added", tracker_id=entry.id, name=name, hp=hp_max)
        return entry.id

    def add_adversary(self, template: Adversary) -> str:
        """Add an adversary at full HP and stress and select it."""
        entry = AdversaryTracker(
            id=new_tracker_id(),
            source=template,
            hp=Gauge.full(template.hp),
            stress=Gauge.full(template.stress),
        )
        self._append(entry)
        logger.debug("Adversary added", tracker_id=entry.id, name=template.name)
        return entry.id

    def add_environment(self, template: Environment) -> str:
        """Add an environment and select it.

        Template features are normalized into toggleable entries here, once.
        """
        entry = EnvironmentTracker(
            id=new_tracker_id(),
            source=template,
            features=[
                normalize_environment_feature(feature, index)
                for index, feature in enumerate(template.features)
            ],
        )
        self._append(entry)
        logger.debug(
            "Environment added",
            tracker_id=entry.id,
            name=template.name,
            features=len(entry.features),
        )
        return entry.id

    def _append(self, entry: AnyTracker) -> None:
        attr = _COLLECTIONS[entry.kind]
        setattr(self._state, attr, [*getattr(self._state, attr), entry])
        self._state.selection = TrackerSelection.of(entry)

    # =========================================================================
    # Update & removal
    # =========================================================================

    def update_character(
        self,
        tracker_id: str,
        updater: Callable[[CharacterTracker], CharacterTracker],
    ) -> bool:
        """Replace a character with ``updater(previous)``.

        Returns:
            False if no character has this id (nothing changes).

        Raises:
            InvalidRosterStateError: If the updater changes id or kind.
        """
        return self._update(TrackerKind.CHARACTER, tracker_id, updater)

    def update_adversary(
        self,
        tracker_id: str,
        updater: Callable[[AdversaryTracker], AdversaryTracker],
    ) -> bool:
        """Replace an adversary with ``updater(previous)``. See update_character."""
        return self._update(TrackerKind.ADVERSARY, tracker_id, updater)

    def update_environment(
        self,
        tracker_id: str,
        updater: Callable[[EnvironmentTracker], EnvironmentTracker],
    ) -> bool:
        """Replace an environment with ``updater(previous)``. See update_character."""
        return self._update(TrackerKind.ENVIRONMENT, tracker_id, updater)

    def _update(self, kind: str, tracker_id: str, updater: Callable) -> bool:
        attr = _COLLECTIONS[kind]
        items = getattr(self._state, attr)
        for index, previous in enumerate(items):
            if previous.id == tracker_id:
                break
        else:
            logger.debug("Update skipped, tracker not found", kind=kind, tracker_id=tracker_id)
            return False

        updated = updater(previous.model_copy(deep=True))
        if type(updated) is not type(previous) or updated.kind != previous.kind:
            raise InvalidRosterStateError(
                "Updater returned a different tracker kind",
                kind=kind,
                tracker_id=tracker_id,
            )
        if updated.id != previous.id:
            raise InvalidRosterStateError(
                "Updater changed the tracker id",
                kind=kind,
                tracker_id=tracker_id,
                details={"new_id": updated.id},
            )

        setattr(self._state, attr, [*items[:index], updated, *items[index + 1 :]])
        logger.debug("Tracker updated", kind=kind, tracker_id=tracker_id)
        return True

    def remove_item(self, item: AnyTracker | TrackerSelection) -> bool:
        """Remove a tracker and drop every live reference to it.

        Selection and spotlight are cleared if they point at the tracker,
        and it is pruned from the recent spotlight list. The spotlight
        timeline and roll history keep their entries.

        Returns:
            False if no tracker of that kind has this id.
        """
        kind, tracker_id = item.kind, item.id
        attr = _COLLECTIONS[kind]
        items = getattr(self._state, attr)
        remaining = [entry for entry in items if entry.id != tracker_id]
        if len(remaining) == len(items):
            logger.debug("Remove skipped, tracker not found", kind=kind, tracker_id=tracker_id)
            return False

        setattr(self._state, attr, remaining)
        if self._state.selection is not None and self._state.selection.matches(kind, tracker_id):
            self._state.selection = None
        if self._state.spotlight is not None and self._state.spotlight.matches(kind, tracker_id):
            self._state.spotlight = None
        self._state.spotlight_history = [
            entry for entry in self._state.spotlight_history if not entry.matches(kind, tracker_id)
        ]
        logger.debug("Tracker removed", kind=kind, tracker_id=tracker_id)
        return True

    # =========================================================================
    # Selection & spotlight
    # =========================================================================

    def handle_select(self, item: AnyTracker) -> None:
        """Point the detail panel at a tracker."""
        self._state.selection = TrackerSelection.of(item)

    def set_selection(self, selection: TrackerSelection | None) -> None:
        self._state.selection = selection

    def handle_spotlight(self, item: AnyTracker) -> None:
        """Give a tracker the spotlight and log the event.

        The recent list moves the tracker to the front, deduplicated by
        ``(kind, id)``. The timeline appends every event, tagged with the
        current round and the tracker's name at this moment.
        """
        selection = TrackerSelection.of(item)
        self._state.spotlight = selection

        recent = [
            entry for entry in self._state.spotlight_history
            if not entry.matches(selection.kind, selection.id)
        ]
        self._state.spotlight_history = [selection, *recent][: self.settings.recent_spotlight_limit]

        event = SpotlightHistoryEntry(
            selection=selection,
            round=self._state.current_round,
            entity_name=tracker_name(item),
        )
        timeline = [*self._state.spotlight_history_timeline, event]
        self._state.spotlight_history_timeline = timeline[-self.settings.spotlight_timeline_limit :]
        logger.debug(
            "Spotlight moved",
            kind=selection.kind,
            tracker_id=selection.id,
            round=self._state.current_round,
        )

    def set_spotlight(self, selection: TrackerSelection | None) -> None:
        """Set the spotlight pointer without logging an event."""
        self._state.spotlight = selection

    # =========================================================================
    # Rounds
    # =========================================================================

    def advance_round(self) -> int:
        """Start the next round and clear every adversary's acted flag.

        Returns:
            The new round number.
        """
        self._state.current_round += 1
        self._state.adversaries = [
            adversary.model_copy(update={"has_acted_this_round": False})
            if adversary.has_acted_this_round
            else adversary
            for adversary in self._state.adversaries
        ]
        logger.debug("Round advanced", round=self._state.current_round)
        return self._state.current_round

    def set_current_round(self, value: int) -> None:
        """Set the round counter. Values below 1 are raised to 1."""
        self._state.current_round = max(1, value)

    def toggle_adversary_acted(self, tracker_id: str) -> bool:
        """Flip an adversary's "acted this round" flag."""
        return self.update_adversary(
            tracker_id,
            lambda adversary: adversary.model_copy(
                update={"has_acted_this_round": not adversary.has_acted_this_round}
            ),
        )

    # =========================================================================
    # Fear economy
    # =========================================================================

    @property
    def fear_pool(self) -> int:
        return self._state.fear_pool

    def set_fear_pool(self, value: int) -> None:
        """Set the fear pool, clamped to ``0..max_fear``."""
        self._state.fear_pool = self._clamp_fear(value)

    def spend_fear(self, amount: int) -> bool:
        """Spend fear if the pool can cover it.

        Returns:
            True if spent. False if ``amount`` is negative or exceeds the
            pool, in which case the pool is unchanged.
        """
        if amount < 0 or amount > self._state.fear_pool:
            logger.info("Not enough fear", requested=amount, available=self._state.fear_pool)
            return False
        self._state.fear_pool -= amount
        logger.debug("Fear spent", amount=amount, remaining=self._state.fear_pool)
        return True

    def set_max_fear(self, value: int | None) -> None:
        """Set the fear ceiling. A lower ceiling clamps the current pool."""
        self._state.max_fear = value
        self._state.fear_pool = self._clamp_fear(self._state.fear_pool)

    def _clamp_fear(self, value: int) -> int:
        value = max(0, value)
        if self._state.max_fear is not None:
            value = min(value, self._state.max_fear)
        return value

    def set_use_massive_threshold(self, value: bool) -> None:
        self._state.use_massive_threshold = value

    # =========================================================================
    # History logs
    # =========================================================================

    def add_roll_to_history(self, entry: RollHistoryEntry) -> None:
        """Prepend a roll record. The oldest records fall off past the cap."""
        history = [entry, *self._state.roll_history]
        self._state.roll_history = history[: self.settings.roll_history_limit]

    def clear_roll_history(self) -> None:
        self._state.roll_history = []

    def set_roll_history(self, value: ListOrUpdater[RollHistoryEntry]) -> None:
        self._state.roll_history = _apply(value, self._state.roll_history)

    def clear_spotlight_history_timeline(self) -> None:
        self._state.spotlight_history_timeline = []

    def set_spotlight_history_timeline(self, value: ListOrUpdater[SpotlightHistoryEntry]) -> None:
        self._state.spotlight_history_timeline = _apply(
            value, self._state.spotlight_history_timeline
        )

    def record_adversary_roll(
        self,
        tracker_id: str,
        kind: RollKind,
        result: DiceExpression,
    ) -> RollHistoryEntry | None:
        """Store a roll in the adversary's cache and in the roll history.

        Args:
            tracker_id: Adversary that rolled.
            kind: Attack or damage.
            result: The rolled dice.

        Returns:
            The history entry written, or None if the adversary is gone.
        """
        adversary = self.get_adversary(tracker_id)
        if adversary is None:
            return None

        if kind == RollKind.ATTACK:
            natural = result.natural if result.natural is not None else result.total
            cache_update = {"last_attack_roll": AttackRollCache(roll=natural, total=result.total)}
            entry = RollHistoryEntry(
                type=RollKind.ATTACK,
                entity_id=adversary.id,
                entity_name=tracker_name(adversary),
                entity_kind=TrackerKind.ADVERSARY,
                roll=natural,
                total=result.total,
                dice=result.expression,
                modifier=effective_attack(adversary).modifier,
                is_critical=result.is_critical,
                is_fumble=result.is_fumble,
                round=self._state.current_round,
            )
        else:
            cache_update = {
                "last_damage_roll": DamageRollCache(
                    dice=result.expression,
                    rolls=list(result.dice),
                    total=result.total,
                )
            }
            entry = RollHistoryEntry(
                type=RollKind.DAMAGE,
                entity_id=adversary.id,
                entity_name=tracker_name(adversary),
                entity_kind=TrackerKind.ADVERSARY,
                roll=sum(result.dice),
                total=result.total,
                dice=result.expression,
                rolls=list(result.dice),
                modifier=result.modifier,
                round=self._state.current_round,
            )

        self.update_adversary(tracker_id, lambda prev: prev.model_copy(update=cache_update))
        self.add_roll_to_history(entry)
        logger.debug(
            "Adversary roll recorded",
            tracker_id=tracker_id,
            roll_type=kind,
            total=result.total,
        )
        return entry

    # =========================================================================
    # Countdowns & environment features
    # =========================================================================

    def reduce_all_countdowns(self) -> int:
        """Tick every enabled, positive countdown down by one.

        Returns:
            Number of trackers whose countdown changed.
        """
        changed = 0

        def tick(item: T) -> T:
            nonlocal changed
            if item.countdown_enabled and item.countdown is not None and item.countdown > 0:
                changed += 1
                return item.model_copy(update={"countdown": item.countdown - 1})
            return item

        adversaries = [tick(item) for item in self._state.adversaries]
        environments = [tick(item) for item in self._state.environments]
        if changed:
            self._state.adversaries = adversaries
            self._state.environments = environments
        logger.debug("Countdowns reduced", changed=changed)
        return changed

    def toggle_environment_feature(self, tracker_id: str, feature_id: str) -> bool:
        """Flip one normalized feature of an environment on or off.

        Returns:
            False if the environment or the feature does not exist.
        """
        environment = self.get_environment(tracker_id)
        if environment is None or not any(f.id == feature_id for f in environment.features):
            return False

        def flip(prev: EnvironmentTracker) -> EnvironmentTracker:
            features = [
                feature.model_copy(update={"active": not feature.active})
                if feature.id == feature_id
                else feature
                for feature in prev.features
            ]
            return prev.model_copy(update={"features": features})

        return self.update_environment(tracker_id, flip)

    # =========================================================================
    # Bulk setters
    # =========================================================================

    def set_characters(self, value: ListOrUpdater[CharacterTracker]) -> None:
        self._state.characters = _apply(value, self._state.characters)

    def set_adversaries(self, value: ListOrUpdater[AdversaryTracker]) -> None:
        self._state.adversaries = _apply(value, self._state.adversaries)

    def set_environments(self, value: ListOrUpdater[EnvironmentTracker]) -> None:
        self._state.environments = _apply(value, self._state.environments)

    def set_spotlight_history(self, value: ListOrUpdater[TrackerSelection]) -> None:
        self._state.spotlight_history = _apply(value, self._state.spotlight_history)

    # =========================================================================
    # UI tabs (not part of snapshots)
    # =========================================================================

    def set_active_roster_tab(self, tab: RosterTab) -> None:
        self.active_roster_tab = RosterTab(tab)

    def set_active_detail_tab(self, tab: DetailTab) -> None:
        self.active_detail_tab = DetailTab(tab)

    # =========================================================================
    # Snapshots
    # =========================================================================

    def export_snapshot(self) -> RosterSnapshot:
        """Deep copy of every undoable field."""
        return self._state.copy_deep()

    def import_snapshot(self, snapshot: RosterSnapshot) -> None:
        """Replace the whole state with a deep copy of ``snapshot``.

        The copy ensures a stored snapshot never aliases live state.
        """
        self._state = snapshot.copy_deep()


__all__ = [
    "RosterStore",
    "AnyTracker",
    "tracker_name",
]
