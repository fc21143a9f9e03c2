"""Central registry for Prometheus metrics used across the backend."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

REQUEST_COUNTER = Counter(
	"discuss_board_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"discuss_board_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

AUTH_EVENTS = Counter(
	"discuss_board_auth_events_total",
	"Authentication events by kind and outcome",
	["kind", "role", "outcome"],
)

POSTS_CREATED = Counter(
	"discuss_board_posts_created_total",
	"Posts created",
)

COMMENTS_CREATED = Counter(
	"discuss_board_comments_created_total",
	"Comments created",
)

REACTIONS_RECORDED = Counter(
	"discuss_board_reactions_total",
	"Reactions recorded",
	["target", "reaction_type"],
)

REPORTS_CREATED = Counter(
	"discuss_board_content_reports_created_total",
	"Content reports filed",
	["content_type"],
)

MODERATION_ACTIONS = Counter(
	"discuss_board_moderation_actions_total",
	"Moderation actions taken",
	["action_type"],
)

APPEAL_DECISIONS = Counter(
	"discuss_board_appeal_decisions_total",
	"Appeal review outcomes",
	["status"],
)

NOTIFICATIONS_CREATED = Counter(
	"discuss_board_notifications_created_total",
	"Notifications persisted",
	["event_type"],
)

DEPENDENCY_UP = Gauge(
	"discuss_board_dependency_up",
	"Whether a backing dependency answered its last health probe",
	["dependency"],
)

POLL_VOTES = Counter(
	"discuss_board_poll_votes_total",
	"Poll votes cast",
)


def observe_request(route: str, method: str, status: int, duration_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(duration_seconds)


def inc_auth_event(kind: str, role: str, outcome: str) -> None:
	AUTH_EVENTS.labels(kind=kind, role=role, outcome=outcome).inc()


def inc_posts_created() -> None:
	POSTS_CREATED.inc()


def inc_comments_created() -> None:
	COMMENTS_CREATED.inc()


def inc_reaction(target: str, reaction_type: str) -> None:
	REACTIONS_RECORDED.labels(target=target, reaction_type=reaction_type).inc()


def inc_report_created(content_type: str) -> None:
	REPORTS_CREATED.labels(content_type=content_type).inc()


def inc_moderation_action(action_type: str) -> None:
	MODERATION_ACTIONS.labels(action_type=action_type).inc()


def inc_appeal_decision(status: str) -> None:
	APPEAL_DECISIONS.labels(status=status).inc()


def inc_notification(event_type: str) -> None:
	NOTIFICATIONS_CREATED.labels(event_type=event_type).inc()


def inc_poll_votes(count: int = 1) -> None:
	POLL_VOTES.inc(count)


def mark_dependency(name: str, ok: bool) -> None:
	DEPENDENCY_UP.labels(dependency=name).set(1 if ok else 0)
