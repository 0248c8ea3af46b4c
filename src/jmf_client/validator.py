"""
Response validation — turns raw response bytes into a JMFResponse and
decides whether the server accepted the message.
"""

import xml.etree.ElementTree as ET
from typing import Optional

from jmf_client.errors import ResponseParseError
from jmf_client.message import find_child, local_name
from jmf_client.models.response import Classification, Failure, JMFResponse, Success


def _find_response(root: ET.Element) -> Optional[ET.Element]:
    for element in root.iter():
        if local_name(element.tag) == "Response":
            return element
    return None


class ResponseValidator:
    def parse(self, raw: bytes) -> JMFResponse:
        text = raw.decode("utf-8", errors="replace")
        try:
            root = ET.fromstring(raw)
        except ET.ParseError:
            raise ResponseParseError(f"The JMF server responded with invalid XML: {text}", raw)

        node = _find_response(root)
        if node is None:
            raise ResponseParseError(f"The JMF server response has no Response element: {text}", raw)
        try:
            return_code = int(node.get("ReturnCode", ""))
        except ValueError:
            raise ResponseParseError(f"The JMF server response has no valid ReturnCode: {text}", raw)

        comment = ""
        notification = find_child(node, "Notification")
        if notification is not None:
            comment_node = find_child(notification, "Comment")
            if comment_node is not None:
                comment = "".join(comment_node.itertext())

        return JMFResponse(
            return_code=return_code,
            comment=comment,
            type=node.get("Type"),
            id=node.get("ID"),
            ref_id=node.get("refID"),
            raw=raw,
        )

    def classify(self, response: JMFResponse) -> Classification:
        if response.succeeded:
            return Success(response=response)
        return Failure(message=response.comment, return_code=response.return_code)
