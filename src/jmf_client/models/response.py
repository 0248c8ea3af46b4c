"""
Response models — the parsed JMF Response node and its classification.
"""

import xml.etree.ElementTree as ET
from typing import Optional, Union

from pydantic import BaseModel, Field

from jmf_client.message import JMF_NAMESPACE


class JMFResponse(BaseModel):
    return_code: int = 0
    comment: str = ""
    type: Optional[str] = None
    id: Optional[str] = None
    ref_id: Optional[str] = None
    raw: bytes = Field(default=b"", exclude=True, repr=False)

    @property
    def succeeded(self) -> bool:
        """ReturnCode 0 or negative means the server accepted the message."""
        return self.return_code <= 0

    def to_xml(self) -> bytes:
        """Render as a JMF document holding this single Response."""
        ns = f"{{{JMF_NAMESPACE}}}"
        root = ET.Element(f"{ns}JMF")
        node = ET.SubElement(root, f"{ns}Response", {"ReturnCode": str(self.return_code)})
        for attr, value in (("Type", self.type), ("ID", self.id), ("refID", self.ref_id)):
            if value is not None:
                node.set(attr, value)
        if self.comment:
            notification = ET.SubElement(node, f"{ns}Notification")
            ET.SubElement(notification, f"{ns}Comment").text = self.comment
        return ET.tostring(root, encoding="utf-8", xml_declaration=True)


class Success(BaseModel):
    response: JMFResponse


class Failure(BaseModel):
    message: str = ""
    return_code: int


Classification = Union[Success, Failure]
