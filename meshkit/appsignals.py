"""Application signals raised by OS signals, file changes or direct calls."""

from __future__ import annotations

import errno
import logging
import os
import queue
import signal as _signal_module
import threading
from dataclasses import dataclass
from typing import Any, Protocol

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

_log = logging.getLogger(__name__)

_MUTATIONS = frozenset({"created", "modified", "deleted", "moved"})


@dataclass(frozen=True)
class Signal:
    """A notification: where it came from and the signal it stands for."""

    source: str
    signal: int


class _Listener(Protocol):
    def put_nowait(self, item: Signal) -> None: ...


_lock = threading.RLock()
_listeners: list[_Listener] = []
_os_signal_installed = False


def _on_os_signal(signum: int, frame: Any) -> None:
    notify("os", signum)


def _install_os_signal() -> None:
    sigusr1 = getattr(_signal_module, "SIGUSR1", None)
    if sigusr1 is None:
        _log.debug("SIGUSR1 is not available on this platform")
        return
    if threading.current_thread() is not threading.main_thread():
        _log.debug("SIGUSR1 handler can only be installed from the main thread")
        return
    _signal_module.signal(sigusr1, _on_os_signal)


def watch(listener: _Listener) -> None:
    """Deliver every notification to listener, typically a queue.Queue.

    The first call also arranges for SIGUSR1 to be delivered as a
    notification with source "os".
    """
    global _os_signal_installed
    with _lock:
        if not _os_signal_installed:
            _install_os_signal()
            _os_signal_installed = True
        _listeners.append(listener)


def notify(trigger: str, signum: int) -> None:
    """Send a notification to every listener; full listeners miss it."""
    with _lock:
        listeners = list(_listeners)
    for listener in listeners:
        _log.debug(
            "watcher.notify: dispatching to listener %r (trigger: %r, signal: %s)",
            listener,
            trigger,
            signum,
        )
        try:
            listener.put_nowait(Signal(trigger, signum))
        except queue.Full:
            _log.warning(
                "watcher.notify: signal queue is full (trigger: %r, signal: %s)", trigger, signum
            )


def _normalize(path: str | bytes) -> str:
    return os.path.normcase(os.path.realpath(os.fsdecode(path)))


class _TriggerHandler(FileSystemEventHandler):
    def __init__(self, target: str | None, fire: Any) -> None:
        super().__init__()
        self._target = target
        self._fire = fire

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in _MUTATIONS:
            return
        if self._target is not None:
            paths = [event.src_path, getattr(event, "dest_path", "")]
            if not any(p and _normalize(p) == self._target for p in paths):
                return
        self._fire()


class FileTrigger:
    """Sends a notification whenever the watched file or directory changes.

    Watching stops on stop(), on leaving a with block, or once the optional
    shutdown event is set.
    """

    def __init__(self, path: str, signum: int, shutdown: threading.Event | None = None) -> None:
        if not os.path.exists(path):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        self.path = path
        self.signum = signum
        self._stopped = threading.Event()
        self._stop_lock = threading.Lock()

        if os.path.isdir(path):
            directory, target = path, None
        else:
            directory = os.path.dirname(os.path.abspath(path))
            target = _normalize(path)

        self._observer = Observer()
        self._observer.schedule(_TriggerHandler(target, self._fire), directory, recursive=False)
        self._observer.start()

        if shutdown is not None:
            threading.Thread(
                target=self._await_shutdown,
                args=(shutdown,),
                name="file-trigger-shutdown",
                daemon=True,
            ).start()

    def _fire(self) -> None:
        if self._stopped.is_set():
            return
        _log.warning("File watch triggered: %s", self.path)
        notify(self.path, self.signum)

    def _await_shutdown(self, shutdown: threading.Event) -> None:
        while not self._stopped.is_set():
            if shutdown.wait(0.1):
                _log.info("Shutting down file watcher: %s", self.path)
                self.stop()
                return

    def stop(self) -> None:
        """Stop watching; further changes send nothing."""
        with self._stop_lock:
            if self._stopped.is_set():
                return
            self._stopped.set()
        self._observer.stop()
        if self._observer is not threading.current_thread():
            self._observer.join()

    def __enter__(self) -> "FileTrigger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()


def file_trigger(path: str, signum: int, shutdown: threading.Event | None = None) -> FileTrigger:
    """Start sending notifications when path changes; raise if it does not exist."""
    return FileTrigger(path, signum, shutdown)