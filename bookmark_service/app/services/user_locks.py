from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass(slots=True)
class _UserLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    refs: int = 0


class UserLockRegistry:
    """유저 ID 별 뮤텍스 레지스트리.

    같은 유저의 reload-mutate-persist 구간을 한 프로세스 안에서 직렬화한다.
    다른 유저끼리는 서로 기다리지 않는다. 사용 중인 유저가 없어지면 락도 제거한다.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, _UserLock] = {}

    @contextmanager
    def hold(self, user_id: str) -> Iterator[None]:
        with self._guard:
            entry = self._locks.get(user_id)
            if entry is None:
                entry = _UserLock()
                self._locks[user_id] = entry
            entry.refs += 1

        entry.lock.acquire()
        try:
            yield
        finally:
            entry.lock.release()
            with self._guard:
                entry.refs -= 1
                if entry.refs == 0:
                    del self._locks[user_id]

    def active_users(self) -> list[str]:
        with self._guard:
            return sorted(self._locks)
