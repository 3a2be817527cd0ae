# *-* coding: utf-8 *-*
"""
Raw MIME structure reader.

The standard library parser re-serialises parts on output, which breaks
signatures computed over the original bytes.  Header blocks are therefore
parsed with :mod:`email`, while multipart bodies are split on their boundary
delimiters here so that every node keeps the exact bytes it was sent with.
"""
import re
import logging
from email import policy, utils
from email.parser import BytesParser
from typing import Optional

logger = logging.getLogger(__name__)

_HEADER_END = re.compile(rb'\r?\n\r?\n')
_LEADING_NEWLINE = re.compile(rb'\A\r?\n')


class ContentNode(object):
    def __init__(self, path: str, raw: bytes):
        self.path = path
        self.raw = raw
        self.children = []

        header, self.body = _split_header(raw)
        if header:
            header += b'\n'
        self.message = BytesParser(policy=policy.compat32).parsebytes(
            header + b'\n' + self.body, headersonly=True
        )
        self.headers = list(self.message.items())
        self.content_type = self.message.get_content_type()
        self.params = {}
        for key, value in self.message.get_params(failobj=[], header='content-type')[1:]:
            self.params[key.lower()] = utils.collapse_rfc2231_value(value)

        if self.content_type.split('/')[0] == 'multipart':
            boundary = self.message.get_boundary()
            if boundary is None:
                logger.debug(f'node {path!r}: multipart without boundary')
            else:
                for no, part in enumerate(_split_multipart(self.body, boundary.encode('utf-8', 'surrogateescape')), 1):
                    child = '%d' % no if not path else '%s.%d' % (path, no)
                    self.children.append(ContentNode(child, part))

    def header(self, name: str) -> list:
        name = name.lower()
        return [value for key, value in self.headers if key.lower() == name]

    @property
    def content(self) -> bytes:
        """Body with the content transfer encoding removed."""
        if self.children:
            return self.body
        payload = self.message.get_payload(decode=True)
        if payload is None:
            return b''
        return payload

    def __repr__(self):
        return '<ContentNode %r %s>' % (self.path, self.content_type)


class ParsedMessage(object):
    def __init__(self, root: ContentNode):
        self.root = root
        self.nodes = {}
        stack = [root]
        while stack:
            node = stack.pop()
            self.nodes[node.path] = node
            stack.extend(node.children)

    def get_node(self, path: str) -> Optional[ContentNode]:
        return self.nodes.get(path)

    @property
    def from_address(self) -> Optional[str]:
        """First address of the From header, None if there is none."""
        values = self.root.header('from')
        if not values:
            return None
        for _, address in utils.getaddresses(values):
            if address:
                return address
        return None


def _split_header(raw):
    m = _LEADING_NEWLINE.match(raw)
    if m is not None:
        return b'', raw[m.end():]
    m = _HEADER_END.search(raw)
    if m is None:
        return raw, b''
    return raw[:m.start()], raw[m.end():]


def _split_multipart(body, boundary):
    # the line break in front of a delimiter belongs to the delimiter
    delimiter = re.compile(
        rb'(?:\A|\r?\n)--' + re.escape(boundary) + rb'(--)?[ \t]*(?:\r?\n|\Z)'
    )
    parts = []
    start = None
    for m in delimiter.finditer(body):
        if start is not None:
            parts.append(body[start:m.start()])
        if m.group(1):
            return parts
        start = m.end()
    if start is not None:
        # missing close delimiter
        parts.append(body[start:])
    return parts


def parse(raw) -> ParsedMessage:
    """
    Parse a raw message into a tree of content nodes.

    :param raw: Full MIME message, preferably bytes; str is encoded as UTF-8.
    :return: ParsedMessage
    """
    if isinstance(raw, str):
        raw = raw.encode('utf-8', 'surrogateescape')
    return ParsedMessage(ContentNode('', raw))
