from __future__ import annotations
from typing import BinaryIO, Protocol, TypeVar, Union, runtime_checkable


@runtime_checkable
class Entity(Protocol):
    @property
    def entity_id(self) -> int:
        ...


E = TypeVar("E", bound=Entity)


class EndOfStream:
    """Marker returned by ``read_one`` once the stream holds no more records."""

    _instance = None

    def __new__(cls) -> "EndOfStream":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "END_OF_STREAM"

    def __bool__(self) -> bool:
        return False


END_OF_STREAM = EndOfStream()


@runtime_checkable
class RecordCodec(Protocol[E]):
    record_size: int

    def encode(self, entity: E) -> bytes:
        ...

    def decode(self, record: bytes) -> E:
        ...

    def write_one(self, stream: BinaryIO, entity: E) -> None:
        ...

    def read_one(self, stream: BinaryIO) -> Union[E, EndOfStream, None]:
        ...
