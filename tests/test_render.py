# ruff: noqa: S101
import copy

from poke.formatting import IDLE_HINT, PENDING_TEXT, ResponseTab, format_body, request_lines
from poke.models import ExecutionRecord, HttpResponse
from poke.render import render
from poke.state import Focus, UIState


def _records(store, **overrides):
    records = [ExecutionRecord.idle() for _ in store]
    for index, record in overrides.items():
        records[int(index[1:])] = record
    return records


def test_render_does_not_mutate_inputs(sample_store):
    state = UIState(selected=1, focus=Focus.RESPONSE)
    records = _records(sample_store)
    before_state = copy.deepcopy(state)
    before_records = list(records)

    render(state, sample_store, records)

    assert state == before_state
    assert records == before_records


def test_request_list_shows_names_and_methods(sample_store):
    frame = render(UIState(), sample_store, _records(sample_store))
    lines = frame.request_list.plain.splitlines()
    assert "GET" in lines[0] and "List users" in lines[0]
    assert "POST" in lines[1] and "Create user" in lines[1]


def test_request_list_marks_execution_state(sample_store):
    response = HttpResponse(status=404, text="", duration_ms=2.0, reason="Not Found")
    records = [ExecutionRecord.pending(), ExecutionRecord.succeeded(response)]
    lines = render(UIState(), sample_store, records).request_list.plain.splitlines()
    assert lines[0].startswith("…")
    assert lines[1].startswith("404")


def test_detail_shows_resolved_request(sample_store):
    frame = render(UIState(selected=1), sample_store, _records(sample_store))
    assert frame.detail.plain.splitlines() == request_lines(sample_store[1])
    assert frame.detail.plain.startswith("POST https://api.example.com/users")


def test_detail_honours_scroll(sample_store):
    state = UIState(selected=1)
    state.scroll[Focus.DETAIL] = 2
    frame = render(state, sample_store, _records(sample_store))
    assert frame.detail.plain.splitlines() == request_lines(sample_store[1])[2:]


def test_response_idle_pending_failed(sample_store):
    state = UIState()
    assert render(state, sample_store, _records(sample_store)).response.plain == IDLE_HINT
    pending = render(state, sample_store, _records(sample_store, r0=ExecutionRecord.pending()))
    assert pending.response.plain == PENDING_TEXT
    assert pending.response_status.plain == "Loading..."
    failed = render(state, sample_store, _records(sample_store, r0=ExecutionRecord.failed("Request failed: refused")))
    assert failed.response.plain == "Request failed: refused"
    assert failed.response_status.plain == "Error"


def test_response_body_is_pretty_printed(sample_store):
    response = HttpResponse(status=200, text='{"ok":true}', duration_ms=12.34, reason="OK")
    frame = render(UIState(), sample_store, _records(sample_store, r0=ExecutionRecord.succeeded(response)))
    assert frame.response.plain == format_body('{"ok":true}')
    assert '"ok": true' in frame.response.plain
    assert frame.response_status.plain == "200 OK  12.3 ms"


def test_response_headers_tab(sample_store):
    response = HttpResponse(status=200, text="", duration_ms=1.0, headers=(("Set-Cookie", "a"), ("Set-Cookie", "b")))
    state = UIState(response_tab=ResponseTab.HEADERS)
    frame = render(state, sample_store, _records(sample_store, r0=ExecutionRecord.succeeded(response)))
    assert frame.response.plain == "Set-Cookie: a\nSet-Cookie: b"
    assert "[Headers]" in frame.response_title


def test_variables_panel_lists_used_variables(sample_store):
    frame = render(UIState(), sample_store, _records(sample_store))
    assert frame.variables_title == "Variables"
    assert frame.variables.plain.splitlines() == [
        "@baseUrl = https://api.example.com",
        "@token = secret123",
    ]


def test_status_bar_counts(sample_store):
    state = UIState(status_message="Reloaded.")
    frame = render(state, sample_store, _records(sample_store, r1=ExecutionRecord.pending()))
    assert "2 request(s)" in frame.status_bar.plain
    assert "1 in flight" in frame.status_bar.plain
    assert "Reloaded." in frame.status_bar.plain


def test_format_body_plain_text():
    assert format_body("boom") == "boom"


def test_filtered_list_title_and_filter_line(sample_store):
    state = UIState(selected=1, filter_active=True, filter_text="create")
    frame = render(state, sample_store, _records(sample_store))
    assert frame.request_list.plain.splitlines() == ["  POST    Create user"]
    assert frame.request_list_title == "Requests (1/2)"
    assert frame.filter_line.plain == "/create"
    assert frame.selected_row == 0
    assert frame.detail.plain.startswith("POST")


def test_filter_without_matches_shows_placeholder(sample_store):
    state = UIState(filter_active=True, filter_text="nothing")
    frame = render(state, sample_store, _records(sample_store))
    assert frame.request_list.plain == "No matching requests"
    assert frame.detail.plain == "No request selected"
    assert frame.response_status.plain == "Idle"


def test_unfiltered_list_has_plain_title(sample_store):
    frame = render(UIState(), sample_store, _records(sample_store))
    assert frame.request_list_title == "Requests"
    assert frame.filter_line is None
