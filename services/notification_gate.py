# -*- coding: utf-8 -*-

from typing import Callable, Optional

from storage.repos import PERMISSION_KEY, AppStateRepo
from utils.logger import get_logger

logger = get_logger(__name__)

PERMISSION_DEFAULT = "default"
PERMISSION_GRANTED = "granted"
PERMISSION_DENIED = "denied"


class NotificationGate:
    """
    Decides whether a user alert may be shown.
    The host's request_permission() is asked once; the answer is
    remembered in app_state so later phase changes do not re-prompt.
    """

    def __init__(
        self,
        state_repo: Optional[AppStateRepo] = None,
        request_permission: Optional[Callable[[], bool]] = None,
    ):
        self.state_repo = state_repo
        self.request_permission = request_permission
        self._permission = self._load()

    def _load(self) -> str:
        if self.state_repo is None:
            return PERMISSION_DEFAULT
        value = self.state_repo.get(PERMISSION_KEY)
        if value in (PERMISSION_GRANTED, PERMISSION_DENIED):
            return value
        return PERMISSION_DEFAULT

    @property
    def permission(self) -> str:
        return self._permission

    def allowed(self) -> bool:
        if self._permission == PERMISSION_DEFAULT:
            self._ask()
        return self._permission == PERMISSION_GRANTED

    def _ask(self) -> None:
        if self.request_permission is None:
            # no prompt available on this host: alerts are allowed
            self._permission = PERMISSION_GRANTED
            return
        try:
            granted = bool(self.request_permission())
        except Exception:
            logger.exception("Notification permission request failed")
            granted = False

        self._permission = PERMISSION_GRANTED if granted else PERMISSION_DENIED
        if self.state_repo is not None:
            self.state_repo.set(PERMISSION_KEY, self._permission)
