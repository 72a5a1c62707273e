"""Background task helpers for Retroactive.

Network fetches run on worker threads; anything that touches UI state is
posted to a GUIUpdateQueue and applied when the UI thread drains it.
"""

import logging
import queue
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, TypeVar

logger = logging.getLogger("retroactive.threading")


T = TypeVar("T")


# Update types posted by AppManager
UPDATE_AVAILABLE = "update_available"
DOCUMENT_TITLE = "document_title"


class TaskStatus(Enum):
    """Status of a background task."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class TaskResult(Generic[T]):
    """Result of a background task."""
    status: TaskStatus
    result: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class ThreadedTask(Generic[T]):
    """
    Runs a callable once in a daemon thread.

    Usage:
        task = ThreadedTask(client.fetch_plist, args=(url,), name="manifest")
        task.start()

        # Later, or from a test:
        result = task.get_result(timeout=5)
    """

    def __init__(
        self,
        target: Callable[..., T],
        args: tuple = (),
        kwargs: Optional[dict] = None,
        on_complete: Optional[Callable[[TaskResult[T]], None]] = None,
        name: Optional[str] = None
    ):
        """
        Initialize a threaded task.

        Args:
            target: Callable to run in background
            args: Positional arguments for target
            kwargs: Keyword arguments for target
            on_complete: Callback when task finishes (called from worker thread)
            name: Thread name, used in log output
        """
        self._target = target
        self._args = args
        self._kwargs = kwargs or {}
        self._on_complete = on_complete
        self._name = name

        self._thread: Optional[threading.Thread] = None
        self._result: Optional[TaskResult[T]] = None
        self._status = TaskStatus.PENDING

    def start(self) -> "ThreadedTask[T]":
        """Start the background task."""
        if self._status != TaskStatus.PENDING:
            raise RuntimeError("Task already started")

        self._status = TaskStatus.RUNNING
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()
        return self

    def _run(self) -> None:
        """Internal method that runs in the background thread."""
        try:
            result = self._target(*self._args, **self._kwargs)
            self._result = TaskResult(status=TaskStatus.COMPLETED, result=result)
        except Exception as e:
            logger.exception(f"Background task {self._name or ''} failed")
            self._result = TaskResult(status=TaskStatus.FAILED, error=e)

        self._status = self._result.status

        if self._on_complete:
            self._on_complete(self._result)

    def get_result(self, timeout: Optional[float] = None) -> TaskResult[T]:
        """
        Wait for task completion and return result.

        Args:
            timeout: Maximum time to wait (None = forever)

        Returns:
            TaskResult with status and result/error

        Raises:
            TimeoutError: If timeout expires before task completes
        """
        if self._thread:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                raise TimeoutError("Task did not complete within timeout")

        return self._result or TaskResult(status=TaskStatus.PENDING)


class GUIUpdateQueue:
    """
    Thread-safe channel from worker threads to the UI thread.

    Usage:
        # In main thread:
        update_queue = GUIUpdateQueue()
        manager = AppManager(..., update_queue=update_queue)

        # In the UI event loop (main thread):
        def poll_updates():
            update_queue.dispatch({
                UPDATE_AVAILABLE: lambda _: update_button.show(),
                DOCUMENT_TITLE: window.set_title,
            })
            root.after(100, poll_updates)
    """

    def __init__(self):
        """Initialize the update queue."""
        self._queue: "queue.Queue[Tuple[str, Any]]" = queue.Queue()

    def put(self, update_type: str, data: Any) -> None:
        """
        Put an update in the queue (thread-safe).

        Args:
            update_type: Type identifier for the update
            data: Update data
        """
        self._queue.put((update_type, data))

    def get(self) -> Optional[Tuple[str, Any]]:
        """
        Get a single update from the queue.

        Returns:
            Tuple of (update_type, data) or None if empty
        """
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def get_all(self) -> List[Tuple[str, Any]]:
        """
        Get all pending updates from the queue.

        Returns:
            List of (update_type, data) tuples
        """
        updates = []
        while True:
            try:
                updates.append(self._queue.get_nowait())
            except queue.Empty:
                break
        return updates

    def dispatch(self, handlers: Dict[str, Callable[[Any], None]]) -> int:
        """
        Drain the queue and call the handler registered for each update.

        Must be called from the UI thread. Updates with no handler are
        dropped.

        Args:
            handlers: Mapping of update_type to callable(data)

        Returns:
            Number of updates handled
        """
        handled = 0
        for update_type, data in self.get_all():
            handler = handlers.get(update_type)
            if handler is None:
                logger.debug(f"No handler for update {update_type}")
                continue
            handler(data)
            handled += 1
        return handled

    def clear(self) -> None:
        """Clear all pending updates."""
        self.get_all()
