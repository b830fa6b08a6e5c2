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

"""Auxiliary functions for working with disks."""

import string


MAX_TARGET_DEV_LEN = 63


def drive_name(index: int) -> str:
    """
    Return drive name suffix for zero-based disk index.

    .. code-block:: shell-session

       >>> drive_name(0)
       'a'
       >>> drive_name(25)
       'z'
       >>> drive_name(26)
       'aa'
       >>> drive_name(702)
       'aaa'

    :param index: Disk index starting from zero.
    """
    if index < 0:
        msg = f'disk index must be non-negative, got {index}'
        raise ValueError(msg)
    letters = []
    while index >= 0:
        letters.append(string.ascii_lowercase[index % 26])
        index = index // 26 - 1
    return ''.join(reversed(letters))


def get_disk_target(disk: str, index: int, prefix: str = 'sd') -> str:
    """
    Return target device name for disk.

    Disks given as absolute paths are named after their position
    (`sda`, `sdb`, ...). Any other value is taken as device name hint
    and used as is, unless it is too long to be a device name.

    .. code-block:: shell-session

       >>> get_disk_target('/dev/sda', 1)
       'sdb'
       >>> get_disk_target('vda', 0)
       'vda'

    :param disk: Disk path or device name.
    :param index: Disk index in disks list.
    :param prefix: Disk name prefix.
    """
    if not disk.startswith('/') and len(disk) <= MAX_TARGET_DEV_LEN:
        return disk
    return prefix + drive_name(index)
