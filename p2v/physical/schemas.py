# This file is part of P2V
#
# P2V is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# P2V is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with P2V.  If not, see <http://www.gnu.org/licenses/>.

"""Physical machine description schemas."""

from enum import StrEnum

from pydantic import validator

from p2v.abstract import EntityModel


def _reject_bool(value: object) -> object:
    if isinstance(value, bool):
        msg = 'boolean is not a valid integer'
        raise ValueError(msg)
    return value


class RTCBasis(StrEnum):
    """Real-time clock basis enumerated."""

    UNKNOWN = 'unknown'
    UTC = 'utc'
    LOCALTIME = 'localtime'


class CPUSchema(EntityModel):
    """
    CPU model.

    Zero ``sockets``, ``cores`` or ``threads`` means the value is not
    known.
    """

    vendor: str | None = None
    model: str | None = None
    sockets: int = 0
    cores: int = 0
    threads: int = 0
    acpi: bool = False
    apic: bool = False
    pae: bool = False

    @validator('sockets', 'cores', 'threads', pre=True)
    def _check_topology_type(cls, value: object) -> object:  # noqa: N805
        return _reject_bool(value)

    @validator('sockets', 'cores', 'threads')
    def _check_topology(cls, value: int) -> int:  # noqa: N805
        if value < 0:
            msg = 'CPU topology values cannot be negative'
            raise ValueError(msg)
        return value


class RTCSchema(EntityModel):
    """Real-time clock model. ``offset`` is in seconds."""

    basis: RTCBasis = RTCBasis.UNKNOWN
    offset: int = 0


class PhysicalMachineSchema(EntityModel):
    """Physical machine model."""

    guestname: str
    memory: int
    vcpus: int
    cpu: CPUSchema = CPUSchema()
    rtc: RTCSchema = RTCSchema()
    disks: list[str] = []
    removable: list[str] | None = None
    interfaces: list[str] | None = None
    network_map: list[str] | None = None

    @validator('memory', 'vcpus', pre=True)
    def _check_numbers_type(cls, value: object) -> object:  # noqa: N805
        return _reject_bool(value)

    @validator('guestname')
    def _check_guestname(cls, value: str) -> str:  # noqa: N805
        if not value:
            msg = 'guestname cannot be empty'
            raise ValueError(msg)
        return value

    @validator('memory')
    def _check_memory(cls, value: int) -> int:  # noqa: N805
        if not 0 <= value < 2**64:
            msg = 'memory must be an unsigned 64-bit number of bytes'
            raise ValueError(msg)
        return value

    @validator('vcpus')
    def _check_vcpus(cls, value: int) -> int:  # noqa: N805
        if value < 1:
            msg = 'vcpus must be positive'
            raise ValueError(msg)
        return value


class DataConnSchema(EntityModel):
    """Established disk data connection."""

    nbd_remote_port: int

    @validator('nbd_remote_port', pre=True)
    def _check_port_type(cls, value: object) -> object:  # noqa: N805
        return _reject_bool(value)

    @validator('nbd_remote_port')
    def _check_port(cls, value: int) -> int:  # noqa: N805
        if not 0 < value < 65536:
            msg = f'invalid TCP port: {value}'
            raise ValueError(msg)
        return value


class ConversionSchema(EntityModel):
    """Physical machine snapshot with its disk data connections."""

    config: PhysicalMachineSchema
    data_conns: list[DataConnSchema] = []
