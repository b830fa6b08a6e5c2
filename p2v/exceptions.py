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

"""Exceptions."""


class P2VError(Exception):
    """Basic exception class."""


class ConfigLoaderError(P2VError):
    """Something went wrong when loading configuration."""


class PhysicalConfigError(P2VError):
    """Physical machine description is inconsistent."""


class XMLWriterError(P2VError):
    """
    XML document cannot be constructed.

    Raised on output I/O errors and on writer misuse, e.g. unbalanced
    elements or an attribute written after element content.

    :ivar str operation: name of the failed writer call.
    """

    def __init__(self, operation: str, reason: str | Exception):
        """Initialise XMLWriterError."""
        self.operation = operation
        super().__init__(
            f'error constructing XML near call to "{operation}": {reason}'
        )
