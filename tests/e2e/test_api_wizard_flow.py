from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routes import router
from config.registry import COMPLETION_KEY, bind_collaborator


app = FastAPI()
app.include_router(router)
client = TestClient(app)


def _event(session_id, **body):
    resp = client.post(f"/api/wizard-sessions/{session_id}/events", json=body)
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_full_flow():
    delivered = []
    bind_collaborator(COMPLETION_KEY, lambda session_id, submission: delivered.append(submission.as_records()))

    start_resp = client.post("/api/wizard-sessions/start")
    assert start_resp.status_code == 200
    body = start_resp.json()
    session_id = body["session_id"]
    assert body["state"]["step"] == 0
    assert body["recording_pending"] is True
    assert body["view"]["actions"][0]["id"] == "enable_recording"

    blocked = _event(session_id, type="advance")
    assert blocked["accepted"] is False
    assert blocked["state"]["step"] == 0

    body = _event(session_id, type="recording_signal", active=True)
    assert body["recording_pending"] is False
    assert body["view"]["actions"][0]["id"] == "continue"

    assert _event(session_id, type="advance")["state"]["step"] == 1
    collapsed = _event(session_id, type="start_task")
    assert collapsed["state"]["visible"] is False
    assert collapsed["view"]["tab"] == "Instructions"
    assert _event(session_id, type="open_panel")["state"]["step"] == 1
    assert _event(session_id, type="finish_task")["state"]["step"] == 2

    invalid = _event(session_id, type="advance")
    assert invalid["state"]["errors"] == {"task_success": "Please select an option"}
    assert invalid["view"]["question"]["error"] == "Please select an option"

    for field, value in (
        ("task_success", "partially"),
        ("difficulty", 3),
        ("confusing", "nothing"),
        ("worked_well", "layout"),
    ):
        answered = _event(session_id, type="answer", field=field, value=value)
        assert answered["state"]["errors"] == {}
        _event(session_id, type="advance")

    final = client.get(f"/api/wizard-sessions/{session_id}").json()
    assert final["submitted"] is True
    assert final["state"]["step"] == 5
    assert "entries" not in final
    assert delivered == [
        [
            {"questionId": "task-success", "questionText": "Did you complete the task successfully?", "answer": "partially"},
            {"questionId": "difficulty-rating", "questionText": "How difficult was this task?", "answer": "3"},
            {"questionId": "most-confusing", "questionText": "What was most confusing or difficult?", "answer": "nothing"},
            {"questionId": "what-worked-well", "questionText": "What worked well?", "answer": "layout"},
        ]
    ]


def test_unknown_session_returns_404():
    assert client.get("/api/wizard-sessions/missing").status_code == 404
    resp = client.post("/api/wizard-sessions/missing/events", json={"type": "advance"})
    assert resp.status_code == 404


def test_invalid_answers_return_422():
    session_id = client.post("/api/wizard-sessions/start").json()["session_id"]
    bad_value = client.post(
        f"/api/wizard-sessions/{session_id}/events",
        json={"type": "answer", "field": "difficulty", "value": 9},
    )
    assert bad_value.status_code == 422
    bad_field = client.post(
        f"/api/wizard-sessions/{session_id}/events",
        json={"type": "answer", "field": "mood", "value": "happy"},
    )
    assert bad_field.status_code == 422
    bad_type = client.post(f"/api/wizard-sessions/{session_id}/events", json={"type": "teleport"})
    assert bad_type.status_code == 422


def test_recording_error_is_display_only():
    session_id = client.post("/api/wizard-sessions/start").json()["session_id"]
    body = _event(session_id, type="recording_signal", active=False, error="Permission denied")
    assert body["view"]["recording_error"] == "Permission denied"
    assert body["state"]["step"] == 0
    retried = _event(session_id, type="request_recording")
    assert retried["accepted"] is True
    assert retried["recording_pending"] is True


def _to_last_question(session_id):
    _event(session_id, type="recording_signal", active=True)
    _event(session_id, type="advance")
    _event(session_id, type="finish_task")
    for field, value in (("task_success", "yes"), ("difficulty", 2), ("confusing", "dates")):
        _event(session_id, type="answer", field=field, value=value)
        _event(session_id, type="advance")


def test_earlier_answer_cannot_be_cleared_at_last_question():
    delivered = []
    bind_collaborator(COMPLETION_KEY, lambda session_id, submission: delivered.append(submission))
    session_id = client.post("/api/wizard-sessions/start").json()["session_id"]
    _to_last_question(session_id)

    cleared = client.post(
        f"/api/wizard-sessions/{session_id}/events",
        json={"type": "answer", "field": "difficulty", "value": None},
    )
    assert cleared.status_code == 422
    _event(session_id, type="answer", field="worked_well", value="layout")
    body = _event(session_id, type="advance")
    assert body["submitted"] is True
    assert [entry.answer for entry in delivered[0].entries] == ["yes", "2", "dates", "layout"]


def test_resent_answer_is_not_delivered_twice():
    delivered = []
    bind_collaborator(COMPLETION_KEY, lambda session_id, submission: delivered.append(submission))
    session_id = client.post("/api/wizard-sessions/start").json()["session_id"]
    _to_last_question(session_id)
    _event(session_id, type="answer", field="worked_well", value="layout")
    _event(session_id, type="advance")
    _event(session_id, type="answer", field="worked_well", value="layout")
    again = _event(session_id, type="advance")
    assert again["accepted"] is False
    assert len(delivered) == 1


def test_out_of_range_rating_returns_422():
    session_id = client.post("/api/wizard-sessions/start").json()["session_id"]
    _event(session_id, type="recording_signal", active=True)
    _event(session_id, type="advance")
    _event(session_id, type="finish_task")
    _event(session_id, type="answer", field="task_success", value="no")
    _event(session_id, type="advance")
    resp = client.post(
        f"/api/wizard-sessions/{session_id}/events",
        json={"type": "answer", "field": "difficulty", "value": 9},
    )
    assert resp.status_code == 422
    assert client.get(f"/api/wizard-sessions/{session_id}").json()["state"]["step"] == 3
