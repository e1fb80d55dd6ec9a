from __future__ import annotations

from typing import Protocol


class KVStoreError(Exception):
    """KV 스토어 자체의 읽기/쓰기 실패 (키 부재는 에러가 아니다)."""


class KVStoreInterface(Protocol):
    """바이트 값을 문자열 키로 읽고 쓰는 최소한의 KV 스토어 계약.

    - get 은 키가 없으면 None 을 반환하고, 실제 장애는 KVStoreError 로 알린다.
    - set 은 무조건 덮어쓰기이며 CAS, 트랜잭션, 락을 제공하지 않는다.
    """

    def get(self, key: str) -> bytes | None:  # pragma: no cover - Protocol
        ...

    def set(self, key: str, value: bytes) -> None:  # pragma: no cover - Protocol
        ...
