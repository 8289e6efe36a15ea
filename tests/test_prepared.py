import pytest

from justllm.errors import InvalidRequestError
from justllm.prepared import PreparedChatRequest, PreparedChatRequestPreview


def _body(**extra):
    body = {
        "model": "deepseek-chat",
        "messages": [{"role": "user", "content": "hi"}, {"role": "user", "content": "again"}],
    }
    body.update(extra)
    return body


def test_accessors_read_from_body():
    prepared = PreparedChatRequest("deepseek", _body())
    assert prepared.backend_id == "deepseek"
    assert prepared.model() == "deepseek-chat"
    assert prepared.message_count() == 2


def test_preview_without_optional_fields():
    prepared = PreparedChatRequest("deepseek", _body())
    assert prepared.preview() == PreparedChatRequestPreview(0, False, False)


def test_preview_counts_tools_and_flags():
    tools = [{"type": "function", "function": {"name": "a"}}] * 3
    prepared = PreparedChatRequest(
        "deepseek", _body(tools=tools, stream=True, response_format={"type": "text"})
    )
    assert prepared.preview() == PreparedChatRequestPreview(3, True, True)


def test_present_null_response_format_counts():
    prepared = PreparedChatRequest("deepseek", _body(response_format=None))
    assert prepared.preview().has_response_format is True


def test_non_boolean_stream_is_not_streaming():
    assert PreparedChatRequest("deepseek", _body(stream="yes")).has_stream() is False
    assert PreparedChatRequest("deepseek", _body(stream=False)).has_stream() is False


def test_body_must_be_object():
    with pytest.raises(InvalidRequestError) as info:
        PreparedChatRequest("deepseek", ["model"])
    assert info.value.message == "prepared request body must be a JSON object"


def test_body_requires_string_model():
    with pytest.raises(InvalidRequestError) as info:
        PreparedChatRequest("deepseek", {"model": 3, "messages": []})
    assert info.value.message == "prepared request body must include a string model field"


def test_body_requires_messages_array():
    with pytest.raises(InvalidRequestError) as info:
        PreparedChatRequest("deepseek", {"model": "m", "messages": {}})
    assert info.value.message == "prepared request body must include a messages array"


def test_request_body_text_is_compact_sorted_json():
    prepared = PreparedChatRequest("deepseek", {"model": "m", "messages": []})
    assert prepared.request_body_text() == '{"messages":[],"model":"m"}'


def test_ensure_backend_rejects_other_backend():
    prepared = PreparedChatRequest("deepseek", _body())
    prepared.ensure_backend("deepseek")
    with pytest.raises(InvalidRequestError) as info:
        prepared.ensure_backend("openai-compatible")
    assert "'deepseek'" in info.value.message
    assert "'openai-compatible'" in info.value.message


def test_body_is_copied_on_construction():
    body = _body()
    prepared = PreparedChatRequest("deepseek", body)
    body["messages"].clear()
    assert prepared.message_count() == 2


def test_dict_round_trip():
    prepared = PreparedChatRequest("deepseek", _body(stream=True))
    assert PreparedChatRequest.from_dict(prepared.to_dict()) == prepared


def test_from_dict_validates_body():
    with pytest.raises(InvalidRequestError):
        PreparedChatRequest.from_dict({"backend_id": "deepseek", "request_body": {"model": "m"}})


def test_from_dict_requires_backend_id():
    with pytest.raises(ValueError):
        PreparedChatRequest.from_dict({"request_body": _body()})