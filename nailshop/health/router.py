from fastapi import APIRouter, Depends, Request

from nailshop.dependencies import get_task_failures
from nailshop.notifications.tasks import TaskFailureLog
from nailshop.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_root(failures: TaskFailureLog = Depends(get_task_failures)):
    return {"ok": True, "side_task_failures": failures.total}


@router.get("/side-tasks")
def health_side_tasks(failures: TaskFailureLog = Depends(get_task_failures)):
    # Derniers échecs d'emails post-paiement (non remontés à Stripe)
    return {"total": failures.total, "recent": failures.recent()}


@router.get("/rate-limit")
def health_rate_limit(request: Request):
    return rate_limit_health_info(request)
