import io

import pytest
from lxml import etree

from p2v.exceptions import XMLWriterError
from p2v.physical import XMLWriter


def render(build, **kwargs) -> str:
    buffer = io.BytesIO()
    with XMLWriter(buffer, **kwargs) as xo:
        build(xo)
    return buffer.getvalue().decode('UTF-8')


def test_document_layout():
    def build(xo):
        xo.comment('hello')
        with xo.element('a', x='1'):
            xo.single_element('b', 'text')
            with xo.element('c'):
                xo.empty_element('d')
            xo.empty_element('e')

    assert render(build) == (
        '<?xml version="1.0"?>\n'
        '<!-- hello -->\n'
        '<a x="1">\n'
        '  <b>text</b>\n'
        '  <c>\n'
        '    <d/>\n'
        '  </c>\n'
        '  <e/>\n'
        '</a>\n'
    )


def test_custom_indent():
    def build(xo):
        with xo.element('a'):
            xo.empty_element('b')

    assert render(build, indent='\t') == (
        '<?xml version="1.0"?>\n<a>\n\t<b/>\n</a>\n'
    )


def test_escaping():
    def build(xo):
        with xo.element('a', v='"<&>'):
            xo.text('1 < 2 & 3 > 2')

    xml = render(build)
    assert '<a v="&quot;&lt;&amp;&gt;">1 &lt; 2 &amp; 3 &gt; 2</a>' in xml
    root = etree.fromstring(xml.encode())
    assert root.get('v') == '"<&>'
    assert root.text == '1 < 2 & 3 > 2'


def test_format_helpers():
    def build(xo):
        with xo.element('a'):
            xo.attribute_format('n', '%d', -7)
            xo.single_element_format('b', '%s-%u', 'x', 3)
            with xo.element('c'):
                xo.text_format('%d', 2**64 - 1)

    root = etree.fromstring(render(build).encode())
    assert root.get('n') == '-7'
    assert root.findtext('b') == 'x-3'
    assert root.findtext('c') == '18446744073709551615'


def test_text_after_child():
    def build(xo):
        with xo.element('a'):
            xo.empty_element('b')
            xo.text('tail')

    root = etree.fromstring(render(build).encode())
    assert root[0].tail == 'tail'


def test_comment_padding_is_kept():
    def build(xo):
        xo.comment(' padded ')
        with xo.element('a'):
            xo.comment('inner')

    xml = render(build)
    assert '<!-- padded -->' in xml
    assert '<!-- inner -->' in xml


def test_comment_after_root():
    def build(xo):
        with xo.element('a'):
            pass
        xo.comment('one')
        xo.comment('two')

    xml = render(build)
    assert xml.index('<!-- one -->') < xml.index('<!-- two -->')
    assert xml.index('<a/>') < xml.index('<!-- one -->')


def test_attribute_after_content():
    with pytest.raises(XMLWriterError, match='"attribute"'):
        with XMLWriter(io.BytesIO()) as xo:
            with xo.element('a'):
                xo.empty_element('b')
                xo.attribute('x', '1')


def test_attribute_after_text():
    with pytest.raises(XMLWriterError, match='after element content'):
        with XMLWriter(io.BytesIO()) as xo:
            with xo.element('a'):
                xo.text('t')
                xo.attribute('x', '1')


@pytest.mark.parametrize(
    ('call', 'args'),
    [
        ('attribute', ('x', '1')),
        ('text', ('t',)),
        ('empty_element', ('b',)),
        ('end_element', ()),
    ],
)
def test_no_open_element(call, args):
    xo = XMLWriter(io.BytesIO())
    xo.open()
    with pytest.raises(XMLWriterError, match=f'"{call}": no open element'):
        getattr(xo, call)(*args)


def test_second_root():
    xo = XMLWriter(io.BytesIO())
    xo.open()
    xo.start_element('a')
    xo.end_element()
    with pytest.raises(XMLWriterError, match='root already closed'):
        xo.start_element('b')


def test_not_opened():
    with pytest.raises(XMLWriterError, match='not opened'):
        XMLWriter(io.BytesIO()).start_element('a')


def test_close_without_root():
    xo = XMLWriter(io.BytesIO())
    xo.open()
    with pytest.raises(XMLWriterError, match='no root element'):
        xo.close()


def test_write_after_close():
    xo = XMLWriter(io.BytesIO())
    with xo:
        xo.single_element('a', 'b')
    with pytest.raises(XMLWriterError, match='closed'):
        xo.comment('late')


def test_invalid_characters():
    with pytest.raises(XMLWriterError, match='"text"'):
        with XMLWriter(io.BytesIO()) as xo:
            with xo.element('a'):
                xo.text('\x00')


def test_invalid_element_name():
    with pytest.raises(XMLWriterError, match='"start_element"'):
        with XMLWriter(io.BytesIO()) as xo:
            xo.start_element('not valid')


def test_open_error(tmp_path):
    xo = XMLWriter(tmp_path / 'missing' / 'out.xml')
    with pytest.raises(XMLWriterError, match='"open"'):
        xo.open()


def test_elements_closed_on_error(tmp_path):
    path = tmp_path / 'out.xml'
    with pytest.raises(RuntimeError):
        with XMLWriter(path) as xo:
            with xo.element('a'):
                with xo.element('b'):
                    xo.empty_element('c')
                    raise RuntimeError('abort')
    root = etree.parse(str(path)).getroot()
    assert root.tag == 'a'
    assert root.find('b/c') is not None


def test_unbalanced_elements_are_closed(tmp_path):
    path = tmp_path / 'out.xml'
    with XMLWriter(path) as xo:
        xo.start_element('a')
        xo.start_element('b')
        assert xo.depth == 2
    assert xo.depth == 0
    assert etree.parse(str(path)).getroot().find('b') is not None


def test_file_is_overwritten(tmp_path):
    path = tmp_path / 'out.xml'
    path.write_text('x' * 1000)
    with XMLWriter(path) as xo:
        xo.single_element('a', 'b')
    assert path.read_text() == '<?xml version="1.0"?>\n<a>b</a>\n'


def test_file_object_is_not_closed():
    buffer = io.BytesIO()
    with XMLWriter(buffer) as xo:
        xo.single_element('a', 'b')
    assert not buffer.closed


def test_attribute_called_name():
    def build(xo):
        with xo.element('a', name='x'):
            with xo.element('driver', name='qemu', type='raw'):
                pass

    root = etree.fromstring(render(build).encode())
    assert root.get('name') == 'x'
    assert dict(root.find('driver').attrib) == {'name': 'qemu', 'type': 'raw'}
