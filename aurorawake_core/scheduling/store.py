"""
Alarm Schedule Store implementation.

Owns the alarm collection and applies every state transition, keeping each
alarm's next ring time and platform reminder consistent with its settings.
"""

import asyncio
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Set

from aurorawake_core.events.bus import EventBus
from aurorawake_core.events.types import AlarmEvent, EventType
from aurorawake_core.interfaces.notifications import NotificationSchedulerInterface
from aurorawake_core.interfaces.persistence import AlarmPersistenceInterface
from aurorawake_core.models.alarm import Alarm, AlarmDraft, AlarmPatch, generate_alarm_id
from aurorawake_core.models.config import SchedulerConfig
from aurorawake_core.scheduling.ordering import due_alarms, next_alarm_to_ring, sort_alarms
from aurorawake_core.scheduling.recurrence import compute_next_ring_time
from aurorawake_core.utils.async_utils import KeyedLock, retry_async, run_with_timeout
from aurorawake_core.utils.clock import Clock, resolve_timezone, system_clock, to_zone
from aurorawake_core.utils.exceptions import NotFoundError, NotificationError, StorageError
from aurorawake_core.utils.logging import get_logger, log_alarm, log_error
from aurorawake_core.utils.validation import validate_alarm_id, validate_duration_minutes

logger = get_logger(__name__)


def _find(alarms: List[Alarm], alarm_id: str) -> Optional[Alarm]:
    return next((alarm for alarm in alarms if alarm.id == alarm_id), None)


def _splice(
    alarms: List[Alarm],
    upsert: Optional[Alarm],
    remove_id: Optional[str],
) -> List[Alarm]:
    if remove_id is not None:
        alarms = [a for a in alarms if a.id != remove_id]

    if upsert is not None:
        for index, alarm in enumerate(alarms):
            if alarm.id == upsert.id:
                alarms[index] = upsert
                break
        else:
            alarms.append(upsert)

    return alarms


class AlarmScheduleStore:
    """
    Authoritative alarm collection and its state transitions.

    Every mutating operation reads the collection from persistence, applies
    one transition, recomputes the alarm's next ring time, cancels and
    re-arms its platform reminder, persists, and returns the collection
    sorted by next ring time.

    Features:
    - Transitions on the same alarm id never interleave
    - Transitions on different ids never overwrite each other's records
    - Every collaborator call is bounded by ``io_timeout_seconds``
    - A refused reminder degrades the alarm instead of failing the call
    - Optional event bus notified of every transition

    Example:
        >>> store = AlarmScheduleStore(persistence, notifier)
        >>> alarms = await store.create(AlarmDraft(
        ...     name="Work",
        ...     hour=7,
        ...     minute=0,
        ...     repeat_days=[WeekDay.MONDAY, WeekDay.FRIDAY],
        ...     wake_up_settings=RadioWakeUp(station_id="fip", station_url="https://..."),
        ... ))
        >>> snoozed = await store.snooze(alarms[0].id)
        >>> await store.dismiss(alarms[0].id)
    """

    def __init__(
        self,
        persistence: AlarmPersistenceInterface,
        notifier: NotificationSchedulerInterface,
        config: Optional[SchedulerConfig] = None,
        event_bus: Optional[EventBus] = None,
        clock: Optional[Clock] = None,
        id_factory: Callable[[], str] = generate_alarm_id,
    ):
        """
        Initialize the schedule store.

        Args:
            persistence: Alarm collection storage
            notifier: Platform reminder scheduling
            config: Scheduler configuration (defaults if omitted)
            event_bus: Optional bus notified of transitions
            clock: Source of "now" when an operation is not given one
            id_factory: Generator for new alarm ids
        """
        self.persistence = persistence
        self.notifier = notifier
        self.config = config or SchedulerConfig()
        self.event_bus = event_bus

        self.notifier.set_lead_time(self.config.notification_lead_seconds)

        self._tz = resolve_timezone(self.config.timezone)
        self._clock = clock or system_clock(self._tz)
        self._id_factory = id_factory

        self._alarm_locks = KeyedLock()
        self._collection_lock = asyncio.Lock()

        # Cancelled handles that may still be referenced by a stored record
        self._stale_handles: Set[str] = set()

        self._stats: Dict[str, int] = {
            "created": 0,
            "updated": 0,
            "toggled": 0,
            "deleted": 0,
            "snoozed": 0,
            "dismissed": 0,
            "refreshed": 0,
            "armed": 0,
            "disarmed": 0,
            "degraded": 0,
        }

        logger.info(
            "schedule_store_initialized",
            timezone=str(self._tz),
            io_timeout_seconds=self.config.io_timeout_seconds,
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def create(self, draft: AlarmDraft, now: Optional[datetime] = None) -> List[Alarm]:
        """
        Create an alarm and arm its first reminder.

        Args:
            draft: Caller-supplied alarm fields
            now: Reference time (defaults to the store clock)

        Returns:
            Sorted collection including the new alarm

        Raises:
            StorageError: If the collection cannot be loaded or saved
        """
        now = self._resolve_now(now)

        alarm = Alarm(
            id=self._id_factory(),
            name=draft.name,
            hour=draft.hour,
            minute=draft.minute,
            repeat_days=draft.repeat_days,
            active=draft.active,
            wake_up_settings=draft.wake_up_settings,
        )
        alarm = alarm.model_copy(update={"next_ring_time": compute_next_ring_time(alarm, now)})

        async with self._alarm_locks.acquire(alarm.id):
            handle = await self._arm(alarm)
            alarm = alarm.model_copy(update={"notification_id": handle})
            alarms = await self._commit(upsert=alarm, armed_handle=handle)

        self._stats["created"] += 1
        logger.info("alarm_created", **log_alarm(alarm))
        await self._publish(EventType.ALARM_CREATED, alarm)

        return alarms

    async def update(
        self,
        alarm_id: str,
        patch: AlarmPatch,
        now: Optional[datetime] = None,
    ) -> List[Alarm]:
        """
        Apply a partial edit to an alarm.

        The existing reminder is cancelled before the next ring time is
        recomputed; a new one is armed only if the alarm is still active
        and scheduled.

        Args:
            alarm_id: Alarm to edit
            patch: Fields to change; unset fields keep their values
            now: Reference time (defaults to the store clock)

        Returns:
            Sorted collection

        Raises:
            NotFoundError: If no alarm has this id
            NotificationError: If the existing reminder cannot be cancelled
            StorageError: If the collection cannot be loaded or saved
        """
        alarm = await self._edit(alarm_id, patch.changes(), now)

        self._stats["updated"] += 1
        logger.info(
            "alarm_updated",
            fields=sorted(patch.changes().keys()),
            **log_alarm(alarm),
        )
        await self._publish(EventType.ALARM_UPDATED, alarm)

        return await self.list_alarms()

    async def toggle(
        self,
        alarm_id: str,
        active: bool,
        now: Optional[datetime] = None,
    ) -> List[Alarm]:
        """
        Enable or disable an alarm.

        Disabling clears the next ring time and cancels the reminder;
        enabling recomputes the time and arms a new one.

        Args:
            alarm_id: Alarm to toggle
            active: Desired state
            now: Reference time (defaults to the store clock)

        Returns:
            Sorted collection

        Raises:
            NotFoundError: If no alarm has this id
            NotificationError: If the existing reminder cannot be cancelled
            StorageError: If the collection cannot be loaded or saved
        """
        alarm = await self._edit(alarm_id, {"active": active}, now)

        self._stats["toggled"] += 1
        logger.info("alarm_toggled", alarm_id=alarm_id, active=active)
        await self._publish(EventType.ALARM_TOGGLED, alarm)

        return await self.list_alarms()

    async def delete(self, alarm_id: str) -> List[Alarm]:
        """
        Delete an alarm after cancelling its reminder.

        Deleting an unknown id is a no-op, since two deletions of the same
        alarm may legitimately race.

        Args:
            alarm_id: Alarm to delete

        Returns:
            Sorted collection (unchanged if the id was unknown)

        Raises:
            NotificationError: If the reminder cannot be cancelled
            StorageError: If the collection cannot be loaded or saved
        """
        alarm_id = validate_alarm_id(alarm_id)

        async with self._alarm_locks.acquire(alarm_id):
            alarms = await self._load()
            current = _find(alarms, alarm_id)
            if current is None:
                logger.debug("alarm_delete_ignored", alarm_id=alarm_id)
                return sort_alarms(alarms)

            await self._disarm(current)
            alarms = await self._commit(remove_id=alarm_id, previous=current)

        self._stats["deleted"] += 1
        logger.info("alarm_deleted", alarm_id=alarm_id)
        await self._publish(
            EventType.ALARM_DELETED,
            current.model_copy(update={"notification_id": None}),
        )

        return alarms

    async def snooze(
        self,
        alarm_id: str,
        duration_minutes: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Optional[Alarm]:
        """
        Postpone a ringing alarm.

        The next ring time becomes ``now + duration_minutes`` regardless of
        the alarm's time of day and repeat days.
        An inactive alarm never rings, so it is returned unchanged: snoozing
        does not re-enable it and does not give it a ring time.

        Args:
            alarm_id: Ringing alarm
            duration_minutes: Snooze length (defaults to ``snooze_minutes``)
            now: Reference time (defaults to the store clock)

        Returns:
            The updated alarm, or None if the alarm no longer exists

        Raises:
            ValidationError: If the duration is not a positive number of minutes
            NotificationError: If the existing reminder cannot be cancelled
            StorageError: If the collection cannot be loaded or saved
        """
        alarm_id = validate_alarm_id(alarm_id)
        if duration_minutes is None:
            duration_minutes = self.config.snooze_minutes
        duration_minutes = validate_duration_minutes(duration_minutes)
        now = self._resolve_now(now)

        async with self._alarm_locks.acquire(alarm_id):
            current = _find(await self._load(), alarm_id)
            if current is None:
                logger.info("alarm_snooze_ignored", alarm_id=alarm_id)
                return None
            if not current.active:
                logger.info("alarm_snooze_ignored", alarm_id=alarm_id, reason="inactive")
                return current

            await self._disarm(current)
            snoozed = current.model_copy(
                update={
                    "next_ring_time": now + timedelta(minutes=duration_minutes),
                    "notification_id": None,
                }
            )
            handle = await self._arm(snoozed)
            snoozed = snoozed.model_copy(update={"notification_id": handle})
            await self._commit(upsert=snoozed, armed_handle=handle, previous=current)

        self._stats["snoozed"] += 1
        logger.info(
            "alarm_snoozed",
            duration_minutes=duration_minutes,
            **log_alarm(snoozed),
        )
        await self._publish(EventType.ALARM_SNOOZED, snoozed, duration_minutes=duration_minutes)

        return snoozed

    async def dismiss(self, alarm_id: str, now: Optional[datetime] = None) -> List[Alarm]:
        """
        Stop a ringing alarm.

        A repeating alarm is rescheduled for its next occurrence after
        ``now``; a one-shot alarm is disabled.

        Args:
            alarm_id: Ringing alarm
            now: Reference time (defaults to the store clock)

        Returns:
            Sorted collection (unchanged if the id was unknown)

        Raises:
            NotificationError: If the existing reminder cannot be cancelled
            StorageError: If the collection cannot be loaded or saved
        """
        alarm_id = validate_alarm_id(alarm_id)
        now = self._resolve_now(now)

        async with self._alarm_locks.acquire(alarm_id):
            alarms = await self._load()
            current = _find(alarms, alarm_id)
            if current is None:
                logger.info("alarm_dismiss_ignored", alarm_id=alarm_id)
                return sort_alarms(alarms)

            if current.repeat_days:
                dismissed = await self._reschedule(current, {}, now)
            else:
                await self._disarm(current)
                dismissed = current.model_copy(
                    update={"active": False, "next_ring_time": None, "notification_id": None}
                )

            alarms = await self._commit(
                upsert=dismissed,
                armed_handle=dismissed.notification_id,
                previous=current,
            )

        self._stats["dismissed"] += 1
        logger.info("alarm_dismissed", **log_alarm(dismissed))
        await self._publish(EventType.ALARM_DISMISSED, dismissed)

        return alarms

    async def refresh(self, now: Optional[datetime] = None) -> List[Alarm]:
        """
        Reconcile every alarm with the current time.

        Meant for app start and periodic wake-ups:
        - active alarms whose ring time is missing or is behind ``now`` by
          more than the ringing window are rescheduled and re-armed
        - active, scheduled alarms left without a reminder get another arm attempt
        - inactive alarms still holding a reminder or a ring time are cleared

        Alarms with a valid upcoming time, snoozed ones included, are left as is.

        Args:
            now: Reference time (defaults to the store clock)

        Returns:
            Sorted collection

        Raises:
            NotificationError: If a stale reminder cannot be cancelled
            StorageError: If the collection cannot be loaded or saved
        """
        now = self._resolve_now(now)
        rescheduled = 0

        for snapshot in await self._load():
            async with self._alarm_locks.acquire(snapshot.id):
                current = _find(await self._load(), snapshot.id)
                if current is None:
                    continue

                reconciled = await self._reconcile(current, now)
                if reconciled is None:
                    continue

                await self._commit(
                    upsert=reconciled,
                    armed_handle=reconciled.notification_id,
                    previous=current,
                )
                rescheduled += 1

        alarms = await self.list_alarms()

        self._stats["refreshed"] += 1
        logger.info("alarms_refreshed", total=len(alarms), rescheduled=rescheduled)
        if self.event_bus:
            await self.event_bus.publish(
                AlarmEvent(
                    event_type=EventType.ALARMS_REFRESHED,
                    alarm_id="*",
                    data={"total": len(alarms), "rescheduled": rescheduled},
                )
            )

        return alarms

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_alarms(self) -> List[Alarm]:
        """
        Load the collection sorted by next ring time.

        Raises:
            StorageError: If the collection cannot be loaded
        """
        return sort_alarms(await self._load())

    async def get_alarm(self, alarm_id: str) -> Optional[Alarm]:
        """
        Get an alarm by id.

        Returns:
            The alarm, or None if not found
        """
        return _find(await self._load(), alarm_id)

    async def next_alarm(self) -> Optional[Alarm]:
        """
        Get the alarm that will ring next.

        Returns:
            Soonest active scheduled alarm, or None
        """
        return next_alarm_to_ring(await self._load())

    async def due(self, now: Optional[datetime] = None) -> List[Alarm]:
        """
        Get the alarms that should be ringing now.

        Uses ``ring_window_seconds`` as the tolerance on either side of each
        alarm's scheduled instant.

        Args:
            now: Reference time (defaults to the store clock)

        Returns:
            Ringing alarms, soonest first
        """
        now = self._resolve_now(now)
        return due_alarms(await self._load(), now, self.config.ring_window_seconds)

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get store statistics.

        Returns:
            Dict with operation counters
        """
        return {
            **self._stats,
            "locks_in_flight": len(self._alarm_locks),
            "timezone": str(self._tz),
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve_now(self, now: Optional[datetime]) -> datetime:
        # Wall-clock arithmetic must happen in the store zone, whatever the caller passed.
        return to_zone(self._clock() if now is None else now, self._tz)

    async def _edit(
        self,
        alarm_id: str,
        changes: Dict[str, Any],
        now: Optional[datetime],
    ) -> Alarm:
        alarm_id = validate_alarm_id(alarm_id)
        now = self._resolve_now(now)

        async with self._alarm_locks.acquire(alarm_id):
            current = _find(await self._load(), alarm_id)
            if current is None:
                raise NotFoundError("Alarm not found", details={"alarm_id": alarm_id})

            updated = await self._reschedule(current, changes, now)
            await self._commit(
                upsert=updated,
                armed_handle=updated.notification_id,
                previous=current,
            )

        return updated

    async def _reschedule(
        self,
        current: Alarm,
        changes: Dict[str, Any],
        now: datetime,
    ) -> Alarm:
        """Cancel, apply changes, recompute and re-arm. Nothing is persisted."""
        await self._disarm(current)

        candidate = current.model_copy(update={**changes, "notification_id": None})
        candidate = candidate.model_copy(
            update={"next_ring_time": compute_next_ring_time(candidate, now)}
        )

        handle = await self._arm(candidate)
        return candidate.model_copy(update={"notification_id": handle})

    async def _reconcile(self, alarm: Alarm, now: datetime) -> Optional[Alarm]:
        """Return the corrected alarm, or None when nothing needs to change."""
        if not alarm.active:
            if alarm.notification_id is None and alarm.next_ring_time is None:
                return None
            await self._disarm(alarm)
            return alarm.model_copy(update={"next_ring_time": None, "notification_id": None})

        window = timedelta(seconds=self.config.ring_window_seconds)
        if alarm.next_ring_time is not None and alarm.next_ring_time > now - window:
            if alarm.is_armed and alarm.notification_id not in self._stale_handles:
                return None
            handle = await self._arm(alarm)
            if handle is None and alarm.notification_id is None:
                return None
            self._stale_handles.discard(alarm.notification_id)
            return alarm.model_copy(update={"notification_id": handle})

        return await self._reschedule(alarm, {}, now)

    async def _arm(self, alarm: Alarm) -> Optional[str]:
        """Arm a reminder if the alarm needs one. Failures degrade, never raise."""
        if not alarm.active or alarm.next_ring_time is None:
            return None

        try:
            handle = await retry_async(
                self._arm_once,
                alarm,
                max_retries=self.config.notification_retries,
                delay=self.config.retry_delay_seconds,
            )
        except Exception as e:
            await self._record_degraded(alarm, reason="arm_failed", error=e)
            return None

        if handle is None:
            await self._record_degraded(alarm, reason="arm_declined")
            return None

        self._stats["armed"] += 1
        logger.debug("notification_armed", alarm_id=alarm.id, notification_id=handle)
        return handle

    async def _arm_once(self, alarm: Alarm) -> Optional[str]:
        return await run_with_timeout(self.notifier.arm(alarm), self.config.io_timeout_seconds)

    async def _disarm(self, alarm: Alarm) -> None:
        """Cancel the alarm's reminder. Failure aborts the transition."""
        if alarm.notification_id is None:
            return
        await self._disarm_handle(alarm.id, alarm.notification_id)

    async def _disarm_handle(self, alarm_id: str, handle: str) -> None:
        try:
            await run_with_timeout(self.notifier.disarm(handle), self.config.io_timeout_seconds)
        except asyncio.TimeoutError as e:
            raise NotificationError(
                "Timed out cancelling reminder",
                details={"alarm_id": alarm_id, "notification_id": handle},
                cause=e,
            )
        except Exception as e:
            raise NotificationError(
                "Failed to cancel reminder",
                details={"alarm_id": alarm_id, "notification_id": handle},
                cause=e,
            )

        self._stats["disarmed"] += 1
        logger.debug("notification_disarmed", alarm_id=alarm_id, notification_id=handle)

    async def _record_degraded(
        self,
        alarm: Alarm,
        reason: str,
        error: Optional[Exception] = None,
    ) -> None:
        self._stats["degraded"] += 1
        extra = log_error(error) if error else {}
        logger.warning("scheduling_degraded", reason=reason, **log_alarm(alarm), **extra)
        await self._publish(EventType.SCHEDULING_DEGRADED, alarm, reason=reason)

    async def _load(self) -> List[Alarm]:
        try:
            return list(
                await run_with_timeout(
                    self.persistence.load_all(), self.config.io_timeout_seconds
                )
            )
        except StorageError:
            raise
        except asyncio.TimeoutError as e:
            raise StorageError("Timed out loading alarms", cause=e)
        except Exception as e:
            logger.error("alarms_load_failed", **log_error(e))
            raise StorageError("Failed to load alarms", cause=e)

    async def _save(self, alarms: List[Alarm]) -> None:
        try:
            await run_with_timeout(
                self.persistence.save_all(alarms), self.config.io_timeout_seconds
            )
        except StorageError:
            raise
        except asyncio.TimeoutError as e:
            raise StorageError("Timed out saving alarms", details={"count": len(alarms)}, cause=e)
        except Exception as e:
            logger.error("alarms_save_failed", **log_error(e, {"count": len(alarms)}))
            raise StorageError("Failed to save alarms", details={"count": len(alarms)}, cause=e)

    async def _commit(
        self,
        upsert: Optional[Alarm] = None,
        remove_id: Optional[str] = None,
        armed_handle: Optional[str] = None,
        previous: Optional[Alarm] = None,
    ) -> List[Alarm]:
        """
        Write one record into the latest persisted collection.

        The collection is reloaded under the collection lock so concurrent
        transitions on other alarms are preserved. If saving fails:
        - a reminder armed for this transition is cancelled
        - the reminder of ``previous``, already cancelled by this transition,
          is detached from the stored record so ``refresh`` re-arms the alarm
        before the error propagates.
        """
        try:
            async with self._collection_lock:
                alarms = _splice(await self._load(), upsert, remove_id)
                await self._save(alarms)

        except StorageError:
            if armed_handle is not None:
                await self._rollback_arm(upsert.id if upsert else remove_id, armed_handle)
            if previous is not None and previous.notification_id is not None:
                await self._detach(previous)
            raise

        return sort_alarms(alarms)

    async def _rollback_arm(self, alarm_id: Optional[str], handle: str) -> None:
        try:
            await self._disarm_handle(alarm_id or "", handle)
        except NotificationError as e:
            logger.error(
                "reminder_rollback_failed",
                alarm_id=alarm_id,
                notification_id=handle,
                **log_error(e),
            )

    async def _detach(self, previous: Alarm) -> None:
        """Clear a cancelled reminder handle from the stored record, best effort."""
        handle = previous.notification_id
        self._stale_handles.add(handle)

        try:
            async with self._collection_lock:
                alarms = await self._load()
                stored = _find(alarms, previous.id)
                if stored is None or stored.notification_id != handle:
                    return
                detached = stored.model_copy(update={"notification_id": None})
                await self._save(_splice(alarms, detached, None))
        except StorageError as e:
            logger.error(
                "reminder_detach_failed",
                alarm_id=previous.id,
                notification_id=handle,
                **log_error(e),
            )
            return

        self._stale_handles.discard(handle)
        logger.warning("reminder_detached", alarm_id=previous.id, notification_id=handle)

    async def _publish(self, event_type: EventType, alarm: Alarm, **data: Any) -> None:
        if self.event_bus is None:
            return
        await self.event_bus.publish(AlarmEvent.from_alarm(event_type, alarm, **data))
