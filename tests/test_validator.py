import pytest

from jmf_client.errors import ResponseParseError
from jmf_client.models.response import Failure, JMFResponse, Success
from jmf_client.validator import ResponseValidator

validator = ResponseValidator()


def test_parse_namespaced_response():
    raw = (
        b'<?xml version="1.0"?>'
        b'<JMF xmlns="http://www.CIP4.org/JDFSchema_1_1" Version="1.3">'
        b'<Response ID="R1" refID="M1" Type="SubmitQueueEntry" ReturnCode="0"/>'
        b"</JMF>"
    )
    response = validator.parse(raw)
    assert response.return_code == 0
    assert response.comment == ""
    assert response.type == "SubmitQueueEntry"
    assert response.id == "R1"
    assert response.ref_id == "M1"
    assert response.raw == raw


def test_parse_comment_without_namespace():
    raw = b'<JMF><Response ReturnCode="5"><Notification Class="Error"><Comment>Queue full</Comment></Notification></Response></JMF>'
    response = validator.parse(raw)
    assert response.return_code == 5
    assert response.comment == "Queue full"


@pytest.mark.parametrize("raw", [
    b"",
    b"not xml at all",
    b"<JMF><Response ReturnCode='0'>",
    b"<JMF><Signal/></JMF>",
    b"<JMF><Response/></JMF>",
    b"<JMF><Response ReturnCode='abc'/></JMF>",
])
def test_parse_rejects_malformed(raw):
    with pytest.raises(ResponseParseError) as exc:
        validator.parse(raw)
    assert exc.value.raw == raw


def test_classify_by_return_code_sign():
    assert isinstance(validator.classify(JMFResponse(return_code=0)), Success)
    assert isinstance(validator.classify(JMFResponse(return_code=-1)), Success)

    failure = validator.classify(JMFResponse(return_code=5, comment="Queue full"))
    assert isinstance(failure, Failure)
    assert failure.message == "Queue full"
    assert failure.return_code == 5

    assert validator.classify(JMFResponse(return_code=3)).message == ""


@pytest.mark.parametrize("return_code,comment", [(0, ""), (-2, "warning"), (5, "Queue full"), (103, "Unknown <device> & co")])
def test_round_trip(return_code, comment):
    response = JMFResponse(return_code=return_code, comment=comment, type="Status")
    parsed = validator.parse(response.to_xml())
    assert parsed.return_code == return_code
    assert parsed.comment == comment
    assert parsed.type == "Status"


def test_comment_keeps_text_around_inline_elements():
    raw = b'<JMF><Response ReturnCode="5"><Notification><Comment>Queue <b>very</b> full</Comment></Notification></Response></JMF>'
    assert validator.parse(raw).comment == "Queue very full"
