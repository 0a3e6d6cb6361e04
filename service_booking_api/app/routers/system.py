"""
System procedures.

``health`` is a public liveness check.  ``notifyOwner`` lets an
administrator send an arbitrary notification through the owner channel,
which is also handy for checking the channel configuration.
"""

from typing import Dict

from ..rpc.context import RequestContext
from ..rpc.guards import admin_procedure, public_procedure
from ..rpc.router import Router
from ..schemas.system import HealthCheck, OwnerNotification
from ..services.notification_service import NotificationService


@public_procedure.query(HealthCheck)
async def health(ctx: RequestContext, data: HealthCheck) -> Dict[str, bool]:
    return {"ok": True}


@admin_procedure.mutation(OwnerNotification)
async def notify_owner(ctx: RequestContext, data: OwnerNotification) -> Dict[str, bool]:
    delivered = await NotificationService.notify_owner(title=data.title, content=data.content)
    return {"success": delivered}


router = Router({"health": health, "notifyOwner": notify_owner})
