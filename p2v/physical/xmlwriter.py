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
Scoped XML document writer.

:class:`XMLWriter` mirrors the libxml2 text writer call sequence
(start element, attributes, content, end element) on top of lxml, so
the document is built in the same order it reads. Elements opened with
:meth:`XMLWriter.element` are always closed, and the writer closes all
open elements when leaving its context, so the output stays
well-formed even when building stops half way.

.. code-block:: python

   with XMLWriter('physical.xml') as xo:
       with xo.element('domain', type='physical'):
           xo.single_element('name', 'host1')
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO

from lxml import etree

from p2v.exceptions import XMLWriterError


log = logging.getLogger(__name__)

XML_DECLARATION = b'<?xml version="1.0"?>\n'


class _Frame:
    """Open element and its state."""

    def __init__(self, element: etree.Element):
        self.element = element
        self.has_content = False


class XMLWriter:
    """
    XML document writer.

    :ivar str indent: indentation string.
    """

    def __init__(self, file: str | Path | IO[bytes], indent: str = '  '):
        """
        Initialise XMLWriter.

        :param file: Output file path or writable binary file object.
            File objects are not closed by the writer.
        :param indent: Indentation string.
        """
        self.file = file
        self.indent = indent
        self._output = None
        self._owns_output = False
        self._closed = False
        self._stack: list[_Frame] = []
        self._root = None
        self._head: list[etree.Element] = []
        self._tail: list[etree.Element] = []

    def __enter__(self) -> 'XMLWriter':
        """Open output."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        """Close all elements and output."""
        if exc_type is None:
            self.close()
            return
        log.debug('Closing XML document after error: %s', exc_value)
        try:
            self.close()
        except XMLWriterError as e:
            log.debug('Cannot finalize XML document: %s', e)

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._stack)

    def _current(self, operation: str) -> _Frame:
        if self._closed:
            raise XMLWriterError(operation, 'writer is closed')
        if not self._stack:
            raise XMLWriterError(operation, 'no open element')
        return self._stack[-1]

    def _check_open(self, operation: str) -> None:
        if self._closed:
            raise XMLWriterError(operation, 'writer is closed')
        if self._output is None:
            raise XMLWriterError(operation, 'writer is not opened')

    def open(self) -> None:
        """Open output. Existing file is overwritten."""
        if self._output is not None or self._closed:
            raise XMLWriterError('open', 'writer is already opened')
        if isinstance(self.file, str | Path):
            try:
                self._output = Path(self.file).open('wb')  # noqa: SIM115
            except OSError as e:
                raise XMLWriterError('open', e) from e
            self._owns_output = True
        else:
            self._output = self.file

    def start_element(self, name: str) -> None:
        """Open element `name` inside current element."""
        self._check_open('start_element')
        try:
            if self._stack:
                frame = self._stack[-1]
                element = etree.SubElement(frame.element, name)
                frame.has_content = True
            elif self._root is None:
                element = etree.Element(name)
                self._root = element
            else:
                raise XMLWriterError('start_element', 'root already closed')
        except ValueError as e:
            raise XMLWriterError('start_element', e) from e
        self._stack.append(_Frame(element))

    def end_element(self) -> None:
        """Close current element."""
        self._current('end_element')
        self._stack.pop()

    @contextmanager
    def element(self, name: str, /, **attributes: str) -> Iterator[None]:
        """
        Open element, close it on exit from `with` block.

        :param name: Element name.
        :param attributes: Attributes written right after element start.
        """
        self.start_element(name)
        try:
            for key, value in attributes.items():
                self.attribute(key, value)
            yield
        finally:
            self.end_element()

    def attribute(self, name: str, value: str) -> None:
        """Set attribute of current element."""
        frame = self._current('attribute')
        if frame.has_content:
            raise XMLWriterError(
                'attribute', f"'{name}' written after element content"
            )
        try:
            frame.element.set(name, str(value))
        except ValueError as e:
            raise XMLWriterError('attribute', e) from e

    def attribute_format(self, name: str, fmt: str, *args: object) -> None:
        """Set attribute of current element to ``fmt % args``."""
        self.attribute(name, fmt % args)

    def text(self, value: str) -> None:
        """Write text into current element."""
        frame = self._current('text')
        element = frame.element
        try:
            if len(element):
                element[-1].tail = (element[-1].tail or '') + value
            else:
                element.text = (element.text or '') + value
        except ValueError as e:
            raise XMLWriterError('text', e) from e
        frame.has_content = True

    def text_format(self, fmt: str, *args: object) -> None:
        """Write ``fmt % args`` into current element."""
        self.text(fmt % args)

    def empty_element(self, name: str) -> None:
        """Write empty element `name` into current element."""
        self._current('empty_element')
        with self.element(name):
            pass

    def single_element(self, name: str, value: str) -> None:
        """Write element `name` containing text `value`."""
        with self.element(name):
            self.text(value)

    def single_element_format(
        self, name: str, fmt: str, *args: object
    ) -> None:
        """Write element `name` containing ``fmt % args``."""
        self.single_element(name, fmt % args)

    def comment(self, value: str) -> None:
        """Write comment at current position."""
        self._check_open('comment')
        if not value[:1].isspace():
            value = ' ' + value
        if not value[-1:].isspace():
            value = value + ' '
        try:
            comment = etree.Comment(value)
        except ValueError as e:
            raise XMLWriterError('comment', e) from e
        if self._stack:
            frame = self._stack[-1]
            frame.element.append(comment)
            frame.has_content = True
        elif self._root is None:
            self._head.append(comment)
        else:
            self._tail.append(comment)

    def close(self) -> None:
        """Close all open elements, write document and close output."""
        if self._closed:
            return
        self._closed = True
        self._stack.clear()
        try:
            if self._output is None:
                raise XMLWriterError('close', 'writer is not opened')
            if self._root is None:
                raise XMLWriterError('close', 'document has no root element')
            self._output.write(self._serialize())
            self._output.flush()
        except OSError as e:
            raise XMLWriterError('close', e) from e
        finally:
            if self._owns_output and self._output is not None:
                try:
                    self._output.close()
                except OSError as e:
                    raise XMLWriterError('close', e) from e

    def _serialize(self) -> bytes:
        for comment in self._head:
            self._root.addprevious(comment)
        node = self._root
        for comment in self._tail:
            node.addnext(comment)
            node = comment
        etree.indent(self._root, space=self.indent)
        return XML_DECLARATION + etree.tostring(
            self._root.getroottree(),
            encoding='UTF-8',
            xml_declaration=False,
            pretty_print=True,
        )
