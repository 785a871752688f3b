"""
A minimal XML element tree that writes straight to a binary stream.

Element text can be given as a str, as bytes (written verbatim, e.g., raw appended
data), or through a ``text_writer`` callback that writes to the stream itself. The
latter avoids holding a second, stringified copy of large arrays in memory.
"""

from xml.sax.saxutils import quoteattr

XML_DECLARATION = b'<?xml version="1.0"?>\n'


def _to_bytes(text):
    if isinstance(text, str):
        return text.encode()
    return bytes(text)


class Element:
    def __init__(self, name, **kwargs):
        self.name = name
        self.attrib = kwargs
        self._children = []
        self.text = None
        self.text_writer = None

    def insert(self, pos, elem):
        self._children.insert(pos, elem)

    def append(self, elem):
        self._children.append(elem)

    def set(self, key, value):
        self.attrib[key] = value

    def get(self, key, default=None):
        return self.attrib.get(key, default)

    def __iter__(self):
        return iter(self._children)

    def __len__(self):
        return len(self._children)

    def write(self, f):
        kw_list = [f"{key}={quoteattr(str(value))}" for key, value in self.attrib.items()]
        start = " ".join([self.name] + kw_list)
        if self.text is None and self.text_writer is None and not self._children:
            f.write(f"<{start}/>\n".encode())
            return

        f.write(f"<{start}>\n".encode())
        if self.text is not None:
            f.write(_to_bytes(self.text))
            f.write(b"\n")
        if self.text_writer is not None:
            self.text_writer(f)
            f.write(b"\n")
        for child in self._children:
            child.write(f)
        f.write(f"</{self.name}>\n".encode())


class SubElement(Element):
    def __init__(self, parent, name, **kwargs):
        super().__init__(name, **kwargs)
        parent.append(self)


class Comment:
    def __init__(self, text):
        self.text = text

    def write(self, f):
        f.write(f"<!--{self.text}-->\n".encode())


class ElementTree:
    def __init__(self, root):
        self.root = root

    def write(self, f, xml_declaration=True):
        if xml_declaration:
            f.write(XML_DECLARATION)
        self.root.write(f)
