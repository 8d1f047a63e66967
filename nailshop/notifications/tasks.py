"""
Tâches annexes « best-effort » (fire-and-forget).

Une BestEffortTask est une unité de travail détachée de la réponse HTTP:
- planifiée sur les BackgroundTasks de Starlette, exécutée après l'envoi de la réponse
- ne lève jamais vers l'appelant: l'erreur est journalisée puis transmise au canal on_error
Utilisée par le webhook Stripe; le chemin « demande de prestation » envoie ses emails
de façon synchrone et propage les erreurs.
"""
import logging
import time
from collections import deque
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Deque, Dict, List, Optional

from fastapi import BackgroundTasks

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[str, BaseException], None]


class BestEffortTask:
    def __init__(
        self,
        label: str,
        func: Callable[..., Any],
        *args: Any,
        on_error: Optional[ErrorCallback] = None,
        **kwargs: Any,
    ):
        self.label = label
        self.func = func
        self.args = args
        self.kwargs = kwargs
        self.on_error = on_error
        self.error: Optional[BaseException] = None

    def __call__(self) -> None:
        try:
            self.func(*self.args, **self.kwargs)
        except Exception as e:
            self.error = e
            logger.exception("side_task.failed label=%s", self.label)
            if self.on_error is not None:
                self.on_error(self.label, e)

    def schedule(self, background_tasks: BackgroundTasks) -> "BestEffortTask":
        # Fonction synchrone: Starlette l'exécute dans le threadpool
        background_tasks.add_task(self)
        return self


@dataclass(frozen=True)
class TaskFailure:
    label: str
    error: str
    at: float


class TaskFailureLog:
    """Canal d'erreurs des tâches annexes: garde les N derniers échecs (exposé via /health)."""

    def __init__(self, maxlen: int = 100):
        self._items: Deque[TaskFailure] = deque(maxlen=maxlen)
        self._total = 0
        self._lock = Lock()

    def record(self, label: str, error: BaseException) -> None:
        with self._lock:
            self._items.append(TaskFailure(label=label, error=str(error), at=time.time()))
            self._total += 1

    @property
    def total(self) -> int:
        return self._total

    def recent(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [{"label": f.label, "error": f.error, "at": f.at} for f in self._items]
