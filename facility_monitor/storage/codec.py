"""
Fixed-width binary records for accounts and sensors.

Layouts mirror the host structs the data files were first written with:

    account: u32 number | char nif[9] | char secret[256] | 3 pad | u32 role   (276 bytes)
    sensor:  u32 id     | u32 kind    | i32 data[64]                           (264 bytes)

A data file is the plain concatenation of records, without header or count.
"""
from __future__ import annotations

import logging
import struct
from typing import BinaryIO, Generic, TypeVar, Union

from ..core.errors import CorruptRecordError
from ..domain.interfaces import END_OF_STREAM, EndOfStream
from ..domain.models import (
    DATA_SIZE,
    NIF_CAPACITY,
    SECRET_CAPACITY,
    Account,
    Role,
    Sensor,
    SensorKind,
    in_id_range,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

ACCOUNT_STRUCT = struct.Struct(f"<I{NIF_CAPACITY}s{SECRET_CAPACITY}s3xI")
SENSOR_STRUCT = struct.Struct(f"<II{DATA_SIZE}i")


def pack_text(value: str, capacity: int) -> bytes:
    """Encode ``value`` into a NUL-terminated buffer of ``capacity`` bytes.

    Anything beyond ``capacity - 1`` bytes is dropped so the terminator always fits,
    cutting only between whole characters.
    """
    raw = value.encode("utf-8")[: capacity - 1]
    raw = raw.decode("utf-8", errors="ignore").encode("utf-8")
    return raw + b"\x00" * (capacity - len(raw))


def unpack_text(buf: bytes) -> str:
    return buf.split(b"\x00", 1)[0].decode("utf-8", errors="replace")


class BinaryCodec(Generic[T]):
    """Shared stream handling; subclasses supply ``encode``/``decode``."""

    record_struct: struct.Struct

    @property
    def record_size(self) -> int:
        return self.record_struct.size

    def encode(self, entity: T) -> bytes:
        raise NotImplementedError

    def decode(self, record: bytes) -> T:
        raise NotImplementedError

    def write_one(self, stream: BinaryIO, entity: T) -> None:
        stream.write(self.encode(entity))

    def read_one(self, stream: BinaryIO) -> Union[T, EndOfStream, None]:
        """Read the next record.

        Returns the decoded entity, ``END_OF_STREAM`` when the stream is exhausted,
        or ``None`` for a record that failed validation (the caller skips it).
        """
        record = stream.read(self.record_size)
        if not record:
            return END_OF_STREAM
        if len(record) < self.record_size:
            logger.warning(
                "Truncated trailing record (%d of %d bytes) ignored",
                len(record), self.record_size,
            )
            return END_OF_STREAM
        try:
            return self.decode(record)
        except CorruptRecordError as e:
            logger.warning("Corrupt record skipped: %s", e)
            return None


class AccountCodec(BinaryCodec[Account]):
    record_struct = ACCOUNT_STRUCT

    def encode(self, entity: Account) -> bytes:
        return self.record_struct.pack(
            entity.number,
            pack_text(entity.nif, NIF_CAPACITY),
            pack_text(entity.secret, SECRET_CAPACITY),
            int(entity.role),
        )

    def decode(self, record: bytes) -> Account:
        try:
            number, nif_buf, secret_buf, role_tag = self.record_struct.unpack(record)
        except struct.error as e:
            raise CorruptRecordError(f"Malformed account record: {e}") from e

        if not in_id_range(number):
            raise CorruptRecordError(f"Account number {number} out of range", number)
        if role_tag == Role.ADMIN:
            role = Role.ADMIN
        elif role_tag == Role.EMPLOYEE:
            role = Role.EMPLOYEE
        else:
            raise CorruptRecordError(f"Unknown role tag {role_tag}", number)

        nif = unpack_text(nif_buf)
        secret = unpack_text(secret_buf)
        if not nif:
            raise CorruptRecordError("Empty NIF", number)
        if not secret:
            raise CorruptRecordError("Empty secret", number)

        return Account(number=number, nif=nif, secret=secret, role=role)


class SensorCodec(BinaryCodec[Sensor]):
    record_struct = SENSOR_STRUCT

    def encode(self, entity: Sensor) -> bytes:
        return self.record_struct.pack(entity.sensor_id, int(entity.kind), *entity.data)

    def decode(self, record: bytes) -> Sensor:
        try:
            sensor_id, kind_tag, *data = self.record_struct.unpack(record)
        except struct.error as e:
            raise CorruptRecordError(f"Malformed sensor record: {e}") from e

        if not in_id_range(sensor_id):
            raise CorruptRecordError(f"Sensor id {sensor_id} out of range", sensor_id)
        try:
            kind = SensorKind(kind_tag)
        except ValueError:
            raise CorruptRecordError(f"Unknown sensor kind tag {kind_tag}", sensor_id) from None

        return Sensor(sensor_id=sensor_id, kind=kind, data=data)


account_codec = AccountCodec()
sensor_codec = SensorCodec()
