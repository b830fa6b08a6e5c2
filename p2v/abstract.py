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

"""Base classes for input models and XML description builders."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Extra


class EntityModel(BaseModel):
    """Base model of physical machine and settings input."""

    class Config:
        """Reject unknown keys in input."""

        extra = Extra.forbid


class EntityConfig(ABC):
    """Builder of an XML description from validated input."""

    @abstractmethod
    def to_xml(self) -> str:
        """Return XML description as string."""
        raise NotImplementedError
