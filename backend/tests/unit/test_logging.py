import json
import logging

from discuss_board.obs import logging as obs_logging


def _record(**extra) -> logging.LogRecord:
	record = logging.LogRecord("discuss_board.test", logging.INFO, __file__, 1, "post_created", None, None)
	for key, value in extra.items():
		setattr(record, key, value)
	return record


def test_formatter_emits_json_with_context():
	tokens = obs_logging.bind_context(request_id="req-1", route="/discussBoard/posts")
	try:
		line = obs_logging.JSONLogFormatter().format(_record(post_id="p-1"))
	finally:
		obs_logging.reset_context(tokens)
	payload = json.loads(line)
	assert payload["msg"] == "post_created"
	assert payload["level"] == "info"
	assert payload["request_id"] == "req-1"
	assert payload["route"] == "/discussBoard/posts"
	assert payload["post_id"] == "p-1"


def test_formatter_redacts_sensitive_fields():
	payload = json.loads(
		obs_logging.JSONLogFormatter().format(_record(refresh_token="abc", email="a@b.c", nested={"password": "x", "ok": 1}))
	)
	assert payload["refresh_token"] == "[redacted]"
	assert payload["email"] == "[redacted]"
	assert payload["nested"] == {"password": "[redacted]", "ok": 1}


def test_long_values_are_truncated():
	payload = json.loads(obs_logging.JSONLogFormatter().format(_record(reason="x" * 400, ids=list(range(20)))))
	assert len(payload["reason"]) == 257
	assert len(payload["ids"]) == 11


def test_request_id_context_is_reset():
	tokens = obs_logging.bind_context(request_id="req-2")
	assert obs_logging.current_request_id() == "req-2"
	obs_logging.reset_context(tokens)
	assert obs_logging.current_request_id() is None
