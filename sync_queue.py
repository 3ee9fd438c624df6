"""Debounced write-behind queue mirroring questions to markdown files.

Edits are collected per question id; only the latest version of a question is
kept (last write wins). Once no new edit has arrived for the quiet period, the
queued questions are rendered with the markdown codec and written through the
storage backend on a small worker pool. A question id never has more than one
write in flight.
"""
from __future__ import annotations

import copy
import enum
import logging
import threading
import uuid
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from markdown_codec import file_name_for_title, generate
from models import Question
from storage import FileStorage, StorageDeleteFailed, StorageError, StorageWriteFailed

log = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 1.0
DEFAULT_MAX_WORKERS = 4


class EntryState(str, enum.Enum):
    """Lifecycle of a queued question."""

    PENDING = "pending"  # waiting for the quiet period
    DRAINING = "draining"  # write in flight
    SETTLED = "settled"
    FAILED = "failed"


@dataclass
class SyncEntry:
    question: Question
    previous_title: Optional[str] = None
    state: EntryState = EntryState.PENDING
    file_name: Optional[str] = None
    deleted_file_name: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def question_id(self) -> str:
        return self.question.id or ""

    @property
    def is_rename(self) -> bool:
        return bool(self.previous_title) and self.previous_title != self.question.title


class SyncQueue:
    def __init__(
        self,
        storage: FileStorage,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        max_workers: int = DEFAULT_MAX_WORKERS,
        on_error: Optional[Callable[[SyncEntry], None]] = None,
        enable_code_formatting: Optional[bool] = None,
        default_language: Optional[str] = None,
    ):
        self._storage = storage
        self._debounce_seconds = debounce_seconds
        self._on_error = on_error
        self._enable_code_formatting = enable_code_formatting
        self._default_language = default_language
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="question_sync"
        )
        # re-entrant: done callbacks may fire on the submitting thread
        self._lock = threading.RLock()
        self._pending: Dict[str, SyncEntry] = {}
        self._in_flight: Dict[str, Future] = {}
        self._failures: List[SyncEntry] = []
        self._timer: Optional[threading.Timer] = None
        self._closed = False

    # ---- public API ----
    def enqueue(self, question: Question, previous_title: Optional[str] = None) -> SyncEntry:
        """Queue ``question`` for writing, replacing any pending version of it."""
        if self._closed:
            raise RuntimeError("Sync queue is shut down")
        if question.is_new:
            question.id = uuid.uuid4().hex

        with self._lock:
            earlier = self._pending.get(question.id)
            if earlier is not None and earlier.previous_title:
                # the title in between was never written
                previous_title = earlier.previous_title
            entry = SyncEntry(
                question=copy.deepcopy(question),
                previous_title=previous_title,
            )
            self._pending[question.id] = entry
            self._restart_timer()

        if earlier is not None:
            log.debug("Coalesced pending write for question %s", question.id)
        return entry

    def delete_file(self, name: str) -> bool:
        """Delete ``name``. Returns False when it was already absent."""
        try:
            self._storage.delete(name)
        except FileNotFoundError:
            log.debug("File %s already absent", name)
            return False
        except OSError as exc:
            raise StorageDeleteFailed(name, exc) from exc
        log.info("Deleted %s", name)
        return True

    def flush(self) -> List[SyncEntry]:
        """Drain everything now and wait for it, returning the processed entries."""
        processed: List[SyncEntry] = []
        while True:
            with self._lock:
                self._cancel_timer()
                # done callbacks may not have run yet
                for question_id, future in list(self._in_flight.items()):
                    if future.done():
                        del self._in_flight[question_id]
                self._start_ready_entries()
                futures = list(self._in_flight.values())
            if not futures:
                break
            wait(futures)
            for future in futures:
                if future.exception() is None:
                    processed.append(future.result())
        return processed

    def shutdown(self) -> None:
        self.flush()
        with self._lock:
            self._closed = True
            self._cancel_timer()
        self._executor.shutdown(wait=True)

    @property
    def is_draining(self) -> bool:
        with self._lock:
            return any(not future.done() for future in self._in_flight.values())

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    @property
    def failures(self) -> List[SyncEntry]:
        with self._lock:
            return list(self._failures)

    def pop_failures(self) -> List[SyncEntry]:
        with self._lock:
            failures, self._failures = self._failures, []
        return failures

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            return {
                "pending": sorted(self._pending),
                "draining": sorted(
                    question_id
                    for question_id, future in self._in_flight.items()
                    if not future.done()
                ),
                "failures": len(self._failures),
            }

    # ---- scheduling (call with the lock held) ----
    def _restart_timer(self) -> None:
        self._cancel_timer()
        self._timer = threading.Timer(self._debounce_seconds, self._on_quiet_period)
        self._timer.daemon = True
        self._timer.start()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _start_ready_entries(self) -> None:
        for question_id in list(self._pending):
            if question_id in self._in_flight:
                continue
            entry = self._pending.pop(question_id)
            entry.state = EntryState.DRAINING
            future = self._executor.submit(self._sync_entry, entry)
            self._in_flight[question_id] = future
            future.add_done_callback(
                lambda done, qid=question_id: self._entry_done(qid, done)
            )

    def _on_quiet_period(self) -> None:
        with self._lock:
            if threading.current_thread() is not self._timer:
                return  # superseded by a newer timer or a flush
            self._timer = None
            if not self._closed:
                self._start_ready_entries()

    def _entry_done(self, question_id: str, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            log.error("Unexpected error syncing question %s", question_id, exc_info=exc)
        with self._lock:
            if self._in_flight.get(question_id) is future:
                del self._in_flight[question_id]
            if question_id in self._pending and self._timer is None and not self._closed:
                self._restart_timer()

    # ---- worker ----
    def _sync_entry(self, entry: SyncEntry) -> SyncEntry:
        question = entry.question
        try:
            enable_code_formatting = question.enable_code_formatting
            if enable_code_formatting is None:
                enable_code_formatting = self._enable_code_formatting
            content = generate(
                question,
                enable_code_formatting,
                question.code_language or self._default_language,
            )
            entry.file_name = file_name_for_title(question.title)
            if entry.is_rename:
                old_name = file_name_for_title(entry.previous_title)
                # case-only title changes map to the same file
                if old_name != entry.file_name:
                    self.delete_file(old_name)
                    entry.deleted_file_name = old_name
            try:
                self._storage.write_text(entry.file_name, content)
            except (OSError, ValueError) as exc:
                raise StorageWriteFailed(entry.file_name, exc) from exc
        except (ValueError, StorageError) as exc:
            entry.state = EntryState.FAILED
            entry.error = exc
            log.error("Failed to sync question %s: %s", entry.question_id, exc)
            with self._lock:
                self._failures.append(entry)
            if self._on_error is not None:
                self._on_error(entry)
            return entry

        entry.state = EntryState.SETTLED
        log.info("Synced question %s to %s", entry.question_id, entry.file_name)
        return entry
