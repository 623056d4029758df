"""
Kill Switch

Process-wide gate that disables public traffic without stopping the process.

States: live (default) and killed. Both transitions are idempotent.
Requests under /admin are never gated so the switch can always be reversed.
"""

import logging

logger = logging.getLogger(__name__)

ADMIN_PREFIX = "/admin"


class KillSwitch:
    """
    Single boolean flag shared by every request handler.

    Only touched from the event loop thread, so a plain attribute is enough.
    """

    def __init__(self) -> None:
        self._killed = False

    @property
    def killed(self) -> bool:
        return self._killed

    def kill(self) -> None:
        if not self._killed:
            logger.warning("Kill switch engaged: public traffic disabled")
        self._killed = True

    def unkill(self) -> None:
        if self._killed:
            logger.warning("Kill switch released: public traffic enabled")
        self._killed = False


def is_admin_path(path: str) -> bool:
    return path == ADMIN_PREFIX or path.startswith(ADMIN_PREFIX + "/")
