"""Remote server lifecycle: one listener slot with Stopped -> Running -> Stopped transitions"""

import logging
import threading
import time
from typing import Callable, Optional, Protocol

import uvicorn
from fastapi import FastAPI

from manifold.core.errors import RemoteServerError
from manifold.core.models import CamelModel


STARTUP_TIMEOUT = 10.0
SHUTDOWN_TIMEOUT = 10.0
_WILDCARD_HOSTS = {"", "0.0.0.0", "::"}

logger = logging.getLogger(__name__)


class RemoteServerStatus(CamelModel):
    running:    bool
    host:       Optional[str] = None
    port:       Optional[int] = None
    server_url: Optional[str] = None

    @classmethod
    def stopped(cls) -> "RemoteServerStatus":
        return cls(running=False)

    @classmethod
    def running_on(cls, host: str, port: int) -> "RemoteServerStatus":
        return cls(running=True, host=host, port=port, server_url=server_url(host, port))


def server_url(host: str, port: int) -> str:
    """URL a local browser can reach; wildcard binds are advertised as loopback."""
    reachable = "127.0.0.1" if host in _WILDCARD_HOSTS else host
    if ":" in reachable:
        reachable = f"[{reachable}]"
    return f"http://{reachable}:{port}"


class ServerHandle(Protocol):
    def start(self) -> None: ...
    def stop(self) -> None: ...
    def wait(self) -> None: ...


class UvicornServerHandle:
    """A uvicorn server running on a daemon thread."""

    def __init__(self, app: FastAPI, host: str, port: int):
        self.host = host
        self.port = port
        config = uvicorn.Config(app, host=host, port=port, log_level="warning", access_log=False)
        self.server = uvicorn.Server(config)
        self.thread = threading.Thread(target=self.server.run, name="manifold-remote", daemon=True)

    def start(self) -> None:
        """Start the thread and block until the listener is bound.

        uvicorn exits its thread on bind failure, which surfaces here as a dead
        thread before `started` is set.
        """
        self.thread.start()
        deadline = time.monotonic() + STARTUP_TIMEOUT
        while not self.server.started:
            if not self.thread.is_alive():
                raise RemoteServerError(f"Failed to start remote server on {self.host}:{self.port}")
            if time.monotonic() > deadline:
                self.stop()
                raise RemoteServerError(f"Timed out starting remote server on {self.host}:{self.port}")
            time.sleep(0.05)

    def stop(self) -> None:
        self.server.should_exit = True
        self.thread.join(SHUTDOWN_TIMEOUT)

    def wait(self) -> None:
        self.thread.join()


HandleFactory = Callable[[FastAPI, str, int], ServerHandle]


class RemoteServerSlot:
    """Owns at most one running remote server; all transitions hold the lock."""

    def __init__(self, handle_factory: HandleFactory = UvicornServerHandle):
        self._handle_factory = handle_factory
        self._lock = threading.Lock()
        self._handle: Optional[ServerHandle] = None
        self._status = RemoteServerStatus.stopped()

    def status(self) -> RemoteServerStatus:
        with self._lock:
            return self._status.model_copy()

    def start(self, host: str, port: int, build_app: Callable[[], FastAPI]) -> RemoteServerStatus:
        """Start a listener, or return the current status if one is already running."""
        with self._lock:
            if self._handle is not None:
                return self._status.model_copy()
            handle = self._handle_factory(build_app(), host, port)
            handle.start()
            self._handle = handle
            self._status = RemoteServerStatus.running_on(host, port)
            logger.info("Remote server listening on %s:%d", host, port)
            return self._status.model_copy()

    def stop(self) -> RemoteServerStatus:
        """Signal graceful shutdown and clear the slot. No-op when stopped."""
        with self._lock:
            if self._handle is not None:
                self._handle.stop()
                logger.info("Remote server stopped")
            self._handle = None
            self._status = RemoteServerStatus.stopped()
            return self._status.model_copy()

    def wait(self) -> None:
        """Block until the running server exits (used by the foreground CLI)."""
        with self._lock:
            handle = self._handle
        if handle is not None:
            handle.wait()
