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

"""
Create the physical machine XML description.

The document is a piece of phony libvirt XML used to communicate the
metadata of the physical machine to virt-v2v on the conversion server.
It is not input for libvirt itself: virt-v2v generates the real target
XML if needed.
"""

__all__ = ['PhysicalMachineConfig', 'generate_physical_xml']

import io
import logging
import platform
from pathlib import Path

from p2v import PROGRAM_NAME, __version__
from p2v.abstract import EntityConfig
from p2v.exceptions import PhysicalConfigError
from p2v.utils import diskutils, netutils

from .schemas import (
    CPUSchema,
    DataConnSchema,
    PhysicalMachineSchema,
    RTCBasis,
    RTCSchema,
)
from .xmlwriter import XMLWriter


log = logging.getLogger(__name__)

HOST_ARCH = platform.machine()

NOTICE = """ NOTE!

  This libvirt XML is generated by the virt-p2v front end, in
  order to communicate with the backend virt-v2v process running
  on the conversion server.  It is a minimal description of the
  physical machine.  If the target of the conversion is libvirt,
  then virt-v2v will generate the real target libvirt XML, which
  has only a little to do with the XML in this file.

  TL;DR: Don't try to load this XML into libvirt. """


class PhysicalMachineConfig(EntityConfig):
    """Physical machine XML description builder."""

    def __init__(
        self,
        schema: PhysicalMachineSchema,
        data_conns: list[DataConnSchema],
        *,
        arch: str | None = None,
        program: str = PROGRAM_NAME,
        sysfs_net: str | Path = netutils.SYSFS_NET,
    ):
        """
        Initialise PhysicalMachineConfig.

        :param schema: PhysicalMachineSchema object
        :param data_conns: Data connections, one per disk, in the same
            order as ``schema.disks``.
        :param arch: Host architecture, detected if not set.
        :param program: Program name written in the document header.
        :param sysfs_net: Directory to read interfaces MAC addresses from.
        """
        if len(data_conns) < len(schema.disks):
            raise PhysicalConfigError(
                f'{len(schema.disks)} disks given, but only '
                f'{len(data_conns)} data connections established'
            )
        self.schema = schema
        self.data_conns = data_conns
        self.arch = arch or HOST_ARCH
        self.program = program
        self.sysfs_net = Path(sysfs_net)

    def _gen_cpu_xml(self, xo: XMLWriter, cpu: CPUSchema) -> None:
        # https://libvirt.org/formatdomain.html#elementsCPU
        with xo.element('cpu', match='minimum'):
            if cpu.vendor is not None:
                xo.single_element('vendor', cpu.vendor)
            if cpu.model is not None:
                with xo.element('model', fallback='allow'):
                    xo.text(cpu.model)
            if cpu.sockets or cpu.cores or cpu.threads:
                with xo.element('topology'):
                    if cpu.sockets:
                        xo.attribute_format('sockets', '%u', cpu.sockets)
                    if cpu.cores:
                        xo.attribute_format('cores', '%u', cpu.cores)
                    if cpu.threads:
                        xo.attribute_format('threads', '%u', cpu.threads)

    def _gen_clock_xml(self, xo: XMLWriter, rtc: RTCSchema) -> None:
        match rtc.basis:
            case RTCBasis.UTC if rtc.offset == 0:
                with xo.element('clock', offset='utc'):
                    pass
            case RTCBasis.UTC:
                with xo.element('clock'):
                    xo.attribute('offset', 'variable')
                    xo.attribute('basis', 'utc')
                    xo.attribute_format('adjustment', '%d', rtc.offset)
            case RTCBasis.LOCALTIME:
                # offset is always 0 here
                with xo.element('clock', offset='localtime'):
                    pass

    def _gen_disk_xml(
        self, xo: XMLWriter, target_dev: str, conn: DataConnSchema
    ) -> None:
        with xo.element('disk', type='network', device='disk'):
            with xo.element('driver', name='qemu', type='raw'):
                pass
            with xo.element('source', protocol='nbd'):
                with xo.element('host', name='localhost'):
                    xo.attribute_format('port', '%d', conn.nbd_remote_port)
            # TODO: set bus to "ide" or "scsi" once the source bus is known
            with xo.element('target', dev=target_dev):
                pass

    def _gen_removable_xml(self, xo: XMLWriter, device: str) -> None:
        with xo.element('disk', type='network', device='cdrom'):
            with xo.element('driver', name='qemu', type='raw'):
                pass
            with xo.element('target', dev=device):
                pass

    def _gen_interface_xml(self, xo: XMLWriter, interface: str) -> None:
        network = netutils.map_interface_to_network(
            self.schema.network_map, interface
        )
        mac = netutils.get_mac_address(interface, self.sysfs_net)
        log.debug(
            "Interface '%s': network=%s, mac=%s", interface, network, mac
        )
        with xo.element('interface', type='network'):
            with xo.element('source', network=network):
                pass
            with xo.element('target', dev=interface):
                pass
            if mac is not None:
                with xo.element('mac', address=mac):
                    pass

    def write(self, xo: XMLWriter) -> None:
        """
        Write document into opened writer.

        :param xo: XMLWriter object
        """
        config = self.schema
        cpu = config.cpu
        memkb = config.memory // 1024

        xo.comment(f' {self.program} {__version__} ')
        xo.comment(NOTICE)

        with xo.element('domain', type='physical'):
            xo.single_element('name', config.guestname)
            with xo.element('memory', unit='KiB'):
                xo.text_format('%d', memkb)
            with xo.element('currentMemory', unit='KiB'):
                xo.text_format('%d', memkb)
            xo.single_element_format('vcpu', '%d', config.vcpus)

            if (
                cpu.vendor is not None
                or cpu.model is not None
                or cpu.sockets
                or cpu.cores
                or cpu.threads
            ):
                self._gen_cpu_xml(xo, cpu)

            self._gen_clock_xml(xo, config.rtc)

            with xo.element('os'):
                with xo.element('type', arch=self.arch):
                    xo.text('hvm')

            with xo.element('features'):
                if cpu.acpi:
                    xo.empty_element('acpi')
                if cpu.apic:
                    xo.empty_element('apic')
                if cpu.pae:
                    xo.empty_element('pae')

            with xo.element('devices'):
                for index, disk in enumerate(config.disks):
                    target_dev = diskutils.get_disk_target(disk, index)
                    log.debug("Disk '%s' attached as '%s'", disk, target_dev)
                    self._gen_disk_xml(xo, target_dev, self.data_conns[index])
                for device in config.removable or []:
                    self._gen_removable_xml(xo, device)
                for interface in config.interfaces or []:
                    self._gen_interface_xml(xo, interface)

    def save(self, filename: str | Path) -> None:
        """
        Write document to file. Existing file is overwritten.

        :param filename: Output file path.
        """
        log.info(
            "Writing physical machine XML for '%s' to %s",
            self.schema.guestname,
            filename,
        )
        with XMLWriter(filename) as xo:
            self.write(xo)
        log.info(
            'Written %s: disks=%d, removable=%d, interfaces=%d',
            filename,
            len(self.schema.disks),
            len(self.schema.removable or []),
            len(self.schema.interfaces or []),
        )

    def to_xml(self) -> str:
        """Return XML document as string."""
        buffer = io.BytesIO()
        with XMLWriter(buffer) as xo:
            self.write(xo)
        return buffer.getvalue().decode('UTF-8')


def generate_physical_xml(
    config: PhysicalMachineSchema,
    data_conns: list[DataConnSchema],
    filename: str | Path,
    **options: str | Path,
) -> None:
    """
    Write XML description of physical machine to `filename`.

    :param config: PhysicalMachineSchema object
    :param data_conns: Data connections, one per disk.
    :param filename: Output file path.
    :param options: Keyword options for :class:`PhysicalMachineConfig`.
    """
    PhysicalMachineConfig(config, data_conns, **options).save(filename)
