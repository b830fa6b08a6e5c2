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

"""Physical machine description for virt-v2v conversion."""

__version__ = '0.1.0'

PROGRAM_NAME = 'p2v-physxml'

from .physical import (  # noqa: E402
    ConversionSchema,
    DataConnSchema,
    PhysicalMachineConfig,
    PhysicalMachineSchema,
    XMLWriter,
    generate_physical_xml,
)
