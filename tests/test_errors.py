import pytest

from web_image_tools.errors import DecodeError, ImageIOError, ImageToolError, pipeline_stage


def test_stage_is_stamped_on_unstaged_errors():
    with pytest.raises(DecodeError) as raised:
        with pipeline_stage("decode"):
            raise DecodeError("bad bytes")
    assert raised.value.stage == "decode"
    assert str(raised.value) == "decode: bad bytes"


def test_inner_stage_wins():
    with pytest.raises(ImageToolError) as raised:
        with pipeline_stage("encode"):
            with pipeline_stage("crop"):
                raise ImageToolError("oops")
    assert raised.value.stage == "crop"


def test_os_error_is_wrapped_with_cause():
    original = PermissionError("denied")
    with pytest.raises(ImageIOError) as raised:
        with pipeline_stage("encode"):
            raise original
    assert raised.value.stage == "encode"
    assert raised.value.__cause__ is original


def test_other_exceptions_pass_through():
    with pytest.raises(KeyError):
        with pipeline_stage("crop"):
            raise KeyError("x")


def test_message_without_stage():
    assert str(ImageToolError("plain")) == "plain"
