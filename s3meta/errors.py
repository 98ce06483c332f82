"""
Error type and provider fault translation.

Every failure (missing input, transport or credential problems, provider
faults, local I/O) is surfaced as a single MetaError carrying a message.
"""

import xml.etree.ElementTree as ET

XML_MARKER = "<?xml"


class MetaError(Exception):
    """Failure with a human readable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_exception(cls, exc: BaseException) -> "MetaError":
        """Wrap any underlying error, reducing fault documents to their message."""
        if isinstance(exc, MetaError):
            return exc
        return cls(translate_fault(str(exc)))


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def translate_fault(message: str) -> str:
    """
    Extract the <Message> text from an XML fault document.

    Messages that are not XML documents are returned untouched, as is the
    raw message whenever the document is malformed, truncated or carries
    no Message element. This function never raises.
    """
    if not message.startswith(XML_MARKER):
        return message

    parser = ET.XMLPullParser(events=("start", "end"))
    target = None

    try:
        parser.feed(message)
        for event, elem in parser.read_events():
            if event == "start" and target is None and _local_name(elem.tag) == "Message":
                target = elem
            elif event == "end" and elem is target:
                return "".join(elem.itertext())
    except (ET.ParseError, ValueError):
        pass

    return message
