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

"""Network interfaces helpers."""

import logging
from pathlib import Path


log = logging.getLogger(__name__)

DEFAULT_NETWORK = 'default'
SYSFS_NET = Path('/sys/class/net')


def map_interface_to_network(
    network_map: list[str] | None, interface: str
) -> str:
    """
    Map host network interface to target network name.

    Map entries are checked in order and the first match wins. An entry
    is either ``IFACE:NETWORK`` or bare ``NETWORK`` which matches any
    interface. Entries after a bare one are never reached.

    .. code-block:: shell-session

       >>> map_interface_to_network(['eth0:prod', 'backup'], 'eth0')
       'prod'
       >>> map_interface_to_network(['eth0:prod', 'backup'], 'eth1')
       'backup'
       >>> map_interface_to_network(['eth0:prod'], 'eth1')
       'default'

    :param network_map: List of map entries, may be None.
    :param interface: Host interface name.
    :return: Target network name or ``default`` if nothing matched.
    """
    for entry in network_map or []:
        if ':' not in entry:
            return entry
        prefix, network = entry.split(':', 1)
        if prefix == interface:
            return network
    return DEFAULT_NETWORK


def get_mac_address(interface: str, sysfs: Path = SYSFS_NET) -> str | None:
    """
    Return MAC address of host network interface or None.

    :param interface: Host interface name.
    :param sysfs: Directory with per-interface entries.
    """
    path = Path(sysfs) / interface / 'address'
    try:
        mac = path.read_bytes().decode('UTF-8')
    except (OSError, ValueError) as e:
        log.debug("Cannot read MAC address of '%s': %s", interface, e)
        return None
    return mac.removesuffix('\n')
