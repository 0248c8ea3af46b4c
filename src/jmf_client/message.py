"""
JMF envelope — one Command or Query plus the root-level metadata the
protocol requires (DeviceID, TimeStamp, SenderID, Version).

The envelope is a mutable builder owned by whoever created it. The
dispatcher stamps it, the MIME packager rewrites its queue submission
URL and, on request, it is reinitialised after a submission. Call
``copy()`` before handing the same message to another owner.
"""

import copy
import uuid
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Optional

from jmf_client.errors import ConfigurationError

JMF_NAMESPACE = "http://www.CIP4.org/JDFSchema_1_1"
JMF_MEDIA_TYPE = "application/vnd.cip4-jmf+xml"
JDF_MEDIA_TYPE = "application/vnd.cip4-jdf+xml"
PROTOCOL_VERSION = "1.3"
DEFAULT_FAMILY = "JMF"
DEFAULT_SENDER_ID = "jmf-client"

QUEUE_SUBMISSION = "SubmitQueueEntry"
LOCAL_REFERENCE_SCHEME = "cid://"

MESSAGE_KINDS = ("Command", "Query")

ET.register_namespace("", JMF_NAMESPACE)


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on qualified tags."""
    return tag.rsplit("}", 1)[-1]


def find_child(element: ET.Element, name: str) -> Optional[ET.Element]:
    """First direct child with the given local name, namespaced or not."""
    for child in element:
        if local_name(child.tag) == name:
            return child
    return None


def _new_message_id() -> str:
    # JDF IDs are XML IDs and must not start with a digit.
    return f"M{uuid.uuid4().hex}"


class Envelope:
    def __init__(
        self,
        family: str = DEFAULT_FAMILY,
        sender_id: str = DEFAULT_SENDER_ID,
        version: str = PROTOCOL_VERSION,
    ):
        self._sender_id = sender_id
        self._version = version
        self._root: ET.Element
        self.reinitialize(family)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Envelope":
        """Load an existing JMF document, e.g. one written by another tool."""
        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise ConfigurationError(f"Not a well-formed JMF document: {e}")
        kinds = [child for child in root if local_name(child.tag) in MESSAGE_KINDS]
        if len(kinds) > 1:
            raise ConfigurationError("A JMF envelope may carry only one Command or Query")
        envelope = cls(
            family=local_name(root.tag),
            sender_id=root.get("SenderID", DEFAULT_SENDER_ID),
            version=root.get("Version", PROTOCOL_VERSION),
        )
        envelope._root = root
        return envelope

    @staticmethod
    def _qualify(name: str) -> str:
        return f"{{{JMF_NAMESPACE}}}{name}"

    # -- metadata -----------------------------------------------------------

    @property
    def root(self) -> ET.Element:
        return self._root

    @property
    def family(self) -> str:
        return local_name(self._root.tag)

    @property
    def device_id(self) -> Optional[str]:
        return self._root.get("DeviceID")

    @property
    def timestamp(self) -> Optional[str]:
        return self._root.get("TimeStamp")

    def set_device(self, device_id: str) -> "Envelope":
        self._root.set("DeviceID", device_id)
        return self

    def stamp(self, now: Optional[datetime] = None) -> str:
        """Set TimeStamp and give the Command/Query a fresh ID. Returns the ID."""
        now = now or datetime.now(timezone.utc)
        self._root.set("TimeStamp", now.isoformat(timespec="seconds"))
        message_id = _new_message_id()
        node = self.message
        if node is not None:
            node.set("ID", message_id)
        return message_id

    def serialize(self) -> bytes:
        return ET.tostring(self._root, encoding="utf-8", xml_declaration=True)

    def reinitialize(self, family: Optional[str] = None) -> "Envelope":
        """Drop all content and return to an empty message of ``family``."""
        family = family or self.family
        self._root = ET.Element(self._qualify(family))
        self._root.set("SenderID", self._sender_id)
        self._root.set("Version", self._version)
        return self

    def copy(self) -> "Envelope":
        return copy.deepcopy(self)

    # -- message content ----------------------------------------------------

    @property
    def message(self) -> Optional[ET.Element]:
        """The single Command or Query node, if one is present."""
        for child in self._root:
            if local_name(child.tag) in MESSAGE_KINDS:
                return child
        return None

    @property
    def command(self) -> Optional[ET.Element]:
        return find_child(self._root, "Command")

    @property
    def query(self) -> Optional[ET.Element]:
        return find_child(self._root, "Query")

    def add_command(self, command_type: str) -> ET.Element:
        return self._set_message("Command", command_type)

    def add_query(self, query_type: str) -> ET.Element:
        return self._set_message("Query", query_type)

    def _set_message(self, kind: str, message_type: str) -> ET.Element:
        existing = self.message
        if existing is not None:
            self._root.remove(existing)
        return ET.SubElement(self._root, self._qualify(kind), {"Type": message_type})

    def submit_queue_entry(self, url: str) -> "Envelope":
        """Turn this envelope into a SubmitQueueEntry command for the JDF at ``url``."""
        command = self.add_command(QUEUE_SUBMISSION)
        ET.SubElement(command, self._qualify("QueueSubmissionParams"), {"URL": url})
        return self

    @property
    def is_queue_submission(self) -> bool:
        command = self.command
        return command is not None and command.get("Type") == QUEUE_SUBMISSION

    @property
    def submission_url(self) -> Optional[str]:
        params = self._submission_params()
        return params.get("URL") if params is not None else None

    @submission_url.setter
    def submission_url(self, url: str) -> None:
        params = self._submission_params()
        if params is None:
            raise ConfigurationError("Envelope has no Command/QueueSubmissionParams element")
        params.set("URL", url)

    @property
    def uses_local_reference(self) -> bool:
        """True when the referenced JDF travels in the same MIME package."""
        url = self.submission_url
        return self.is_queue_submission and url is not None and url.startswith(LOCAL_REFERENCE_SCHEME)

    def _submission_params(self) -> Optional[ET.Element]:
        command = self.command
        if command is None:
            return None
        return find_child(command, "QueueSubmissionParams")

    def __repr__(self) -> str:
        node = self.message
        kind = f"{local_name(node.tag)}:{node.get('Type')}" if node is not None else "empty"
        return f"<Envelope {self.family} {kind}>"
