import re
import xml.etree.ElementTree as ET
from datetime import datetime

import pytest

from jmf_client.errors import ConfigurationError
from jmf_client.message import JMF_NAMESPACE, Envelope, local_name

NS = f"{{{JMF_NAMESPACE}}}"


def test_new_envelope_is_empty_jmf():
    env = Envelope()
    assert env.family == "JMF"
    assert env.message is None
    assert env.root.get("SenderID") == "jmf-client"
    assert env.root.get("Version") == "1.3"


def test_set_device_overwrites():
    env = Envelope().set_device("PRESS1")
    env.set_device("PRESS2")
    assert env.device_id == "PRESS2"


def test_stamp_sets_timestamp_and_id_on_command():
    env = Envelope()
    env.add_command("SubmitQueueEntry")
    message_id = env.stamp()

    assert message_id
    assert env.command.get("ID") == message_id
    assert datetime.fromisoformat(env.timestamp)
    assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}[+-]\d{2}:\d{2}$", env.timestamp)


def test_stamp_sets_id_on_query():
    env = Envelope()
    env.add_query("KnownDevices")
    message_id = env.stamp()
    assert env.query.get("ID") == message_id
    assert env.command is None


def test_stamp_ids_are_unique_across_envelopes():
    first, second = Envelope(), Envelope()
    first.add_query("Status")
    second.add_query("Status")
    assert first.stamp() != second.stamp()


def test_stamp_on_empty_envelope_only_sets_timestamp():
    env = Envelope()
    env.stamp()
    assert env.timestamp
    assert env.message is None


def test_only_one_command_or_query():
    env = Envelope()
    env.add_command("SubmitQueueEntry")
    env.add_query("QueueStatus")
    kinds = [local_name(child.tag) for child in env.root]
    assert kinds == ["Query"]


def test_serialize_is_namespaced_xml_without_side_effects():
    env = Envelope().set_device("PRESS1")
    env.add_query("KnownDevices")
    before = env.serialize()
    assert env.serialize() == before

    root = ET.fromstring(before)
    assert root.tag == f"{NS}JMF"
    assert root.get("DeviceID") == "PRESS1"
    assert root.find(f"{NS}Query").get("Type") == "KnownDevices"
    assert before.startswith(b"<?xml")


def test_reinitialize_discards_content():
    env = Envelope().set_device("PRESS1")
    env.add_command("SubmitQueueEntry")
    env.stamp()
    env.reinitialize()
    assert env.message is None
    assert env.device_id is None
    assert env.timestamp is None
    assert env.family == "JMF"
    assert env.root.get("SenderID") == "jmf-client"


def test_submit_queue_entry_and_url_rewrite():
    env = Envelope().submit_queue_entry("cid://job.jdf")
    assert env.is_queue_submission
    assert env.uses_local_reference
    env.submission_url = "http://files.example/job.jdf"
    assert env.submission_url == "http://files.example/job.jdf"
    assert not env.uses_local_reference


def test_setting_url_without_submission_params_fails():
    env = Envelope()
    env.add_query("Status")
    with pytest.raises(ConfigurationError):
        env.submission_url = "cid://1.JDF"


def test_cid_reference_on_other_command_is_not_local():
    env = Envelope()
    command = env.add_command("ResubmitQueueEntry")
    ET.SubElement(command, f"{NS}QueueSubmissionParams", {"URL": "cid://job.jdf"})
    assert not env.uses_local_reference


def test_copy_is_independent():
    env = Envelope()
    env.add_query("Status")
    clone = env.copy()
    clone.stamp()
    assert env.query.get("ID") is None


def test_from_bytes_without_namespace():
    data = b'<JMF SenderID="mis" Version="1.2"><Command Type="SubmitQueueEntry">' \
           b'<QueueSubmissionParams URL="cid://job.jdf"/></Command></JMF>'
    env = Envelope.from_bytes(data)
    assert env.family == "JMF"
    assert env.submission_url == "cid://job.jdf"
    assert env.uses_local_reference
    env.reinitialize()
    assert env.root.get("SenderID") == "mis"
    assert env.root.get("Version") == "1.2"


def test_from_bytes_rejects_two_messages():
    with pytest.raises(ConfigurationError):
        Envelope.from_bytes(b'<JMF><Query Type="A"/><Command Type="B"/></JMF>')


def test_from_bytes_rejects_malformed_xml():
    with pytest.raises(ConfigurationError):
        Envelope.from_bytes(b"<JMF>")
