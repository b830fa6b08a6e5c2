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

from .domain import PhysicalMachineConfig, generate_physical_xml
from .schemas import (
    ConversionSchema,
    CPUSchema,
    DataConnSchema,
    PhysicalMachineSchema,
    RTCBasis,
    RTCSchema,
)
from .xmlwriter import XMLWriter
