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

"""Dict tools."""


def override(a: dict, b: dict) -> dict:
    """
    Override dict `a` by `b` values.

    Keys that not exists in `a`, but exists in `b` will be
    appended to `a`.

    .. code-block:: shell-session

       >>> from p2v.utils import dictutil
       >>> default = {
       ...     'log': {'level': None, 'file': None},
       ...     'host': {'arch': 'x86_64'},
       ... }
       >>> dictutil.override(default, {'log': {'level': 'debug'}})
       {'log': {'level': 'debug', 'file': None}, 'host': {'arch': 'x86_64'}}

    NOTE: merging dicts contained in lists is not supported.

    :param a: Dict to be overwritten.
    :param b: A dict whose values will be used to rewrite dict `a`.
    :return: Modified `a` dict.
    """
    for key in b:
        if key in a and isinstance(a[key], dict) and isinstance(b[key], dict):
            override(a[key], b[key])
        else:
            a[key] = b[key]
    return a
