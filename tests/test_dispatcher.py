from __future__ import annotations

import json

import pytest

from conftest import flip_bit, sign
from discordapp.dispatcher import DispatchResult, dispatch, route
from discordapp.errors import UnrecognizedInteraction
from discordapp.interactions import ApplicationCommand, ChannelMessage, CommandOption, Ping, Pong, Unsupported
from discordapp.security import RawRequest

MISSING = {"title": "Unauthorized", "detail": "Headers for signature is missing."}
INVALID = {"title": "Unauthorized", "detail": "Your signature is invalid."}
BROKEN = {"title": "Broken Request Body", "detail": "Your request's body is broken."}
UNEXPECTED = {
    "title": "Unexpected Request Body",
    "detail": "Your request's body is something different from our expectations.",
}


def signed(body: str, timestamp: str = "12345") -> RawRequest:
    return RawRequest(body=body.encode("utf-8"), signature=sign(body, timestamp), timestamp=timestamp)


def test_ping_is_answered_with_pong(trusted_key):
    assert dispatch(signed('{"type":1}'), trusted_key) == DispatchResult(200, {"type": 1})


@pytest.mark.parametrize(
    "signature,timestamp",
    [(None, "12345"), ("", "12345"), ("SIG", None), ("SIG", ""), (None, None)],
)
def test_missing_headers_are_unauthorized(trusted_key, signature, timestamp):
    body = '{"type":1}'
    if signature == "SIG":
        signature = sign(body, "12345")
    request = RawRequest(body=body.encode(), signature=signature, timestamp=timestamp)
    assert dispatch(request, trusted_key) == DispatchResult(401, MISSING)


def test_wrong_signature_is_unauthorized(trusted_key):
    body = '{"type":1}'
    request = RawRequest(body=body.encode(), signature=flip_bit(sign(body, "12345"), 0), timestamp="12345")
    assert dispatch(request, trusted_key) == DispatchResult(401, INVALID)


def test_signature_checked_before_body_is_parsed(trusted_key):
    request = RawRequest(body=b"not json", signature="00" * 64, timestamp="12345")
    assert dispatch(request, trusted_key) == DispatchResult(401, INVALID)


def test_stale_timestamp_is_unauthorized_when_tolerance_set(trusted_key):
    request = signed('{"type":1}', timestamp="1000")
    assert dispatch(request, trusted_key, timestamp_tolerance=300, now=1100.0).status == 200
    assert dispatch(request, trusted_key, timestamp_tolerance=300, now=5000.0) == DispatchResult(401, INVALID)


@pytest.mark.parametrize("body", ["", "not json", '{"type":1', "{'type': 1}"])
def test_broken_json_is_bad_request(trusted_key, body):
    assert dispatch(signed(body), trusted_key) == DispatchResult(400, BROKEN)


def test_dice_rolls_a_number(trusted_key, command_body):
    result = dispatch(signed(command_body("dice")), trusted_key)
    assert result.status == 200
    assert result.body["type"] == 4
    content = result.body["data"]["content"]
    assert isinstance(content, str)
    assert 1 <= int(content) <= 6


def test_echo_repeats_message(trusted_key, command_body):
    body = command_body("echo", [{"name": "message", "value": "hi"}])
    assert dispatch(signed(body), trusted_key) == DispatchResult(200, {"type": 4, "data": {"content": "hi"}})


def test_echo_without_message_is_unexpected(trusted_key, command_body):
    assert dispatch(signed(command_body("echo")), trusted_key) == DispatchResult(400, UNEXPECTED)


@pytest.mark.parametrize(
    "body",
    [
        '{"type":2,"data":{"name":"unknown-cmd"}}',
        '{"type":2,"data":{"name":"Dice"}}',
        '{"type":2}',
        '{"type":3,"data":{"custom_id":"button"}}',
        '{"type":5}',
        "[1, 2, 3]",
        "{}",
    ],
)
def test_unhandled_interactions_are_unexpected(trusted_key, body):
    assert dispatch(signed(body), trusted_key) == DispatchResult(400, UNEXPECTED)


def test_result_body_is_json_serializable(trusted_key, command_body):
    body = command_body("echo", [{"name": "message", "value": 'a "quoted" é line'}])
    result = dispatch(signed(body), trusted_key)
    assert json.loads(json.dumps(result.body))["data"]["content"] == 'a "quoted" é line'


def test_same_request_dispatches_identically(trusted_key):
    request = signed('{"type":1}')
    assert [dispatch(request, trusted_key) for _ in range(3)] == [DispatchResult(200, {"type": 1})] * 3


def test_route_directly():
    assert route(Ping()) == Pong()
    assert route(ApplicationCommand("echo", (CommandOption("message", "x"),))) == ChannelMessage("x")
    with pytest.raises(UnrecognizedInteraction):
        route(Unsupported(9))
    with pytest.raises(UnrecognizedInteraction):
        route(ApplicationCommand("nope"))


def test_rejections_are_logged_without_secrets(trusted_key, caplog):
    body = '{"type":1}'
    signature = flip_bit(sign(body, "12345"), 3)
    with caplog.at_level("WARNING", logger="discordapp.dispatcher"):
        dispatch(RawRequest(body=body.encode(), signature=signature, timestamp="12345"), trusted_key)
    assert "InvalidSignature" in caplog.text
    assert signature not in caplog.text
