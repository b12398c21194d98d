import inspect

from api.routes import router


def test_all_routes_run_on_the_event_loop():
    endpoints = {route.path: route.endpoint for route in router.routes}
    assert set(endpoints) == {
        "/api/wizard-sessions/start",
        "/api/wizard-sessions/{session_id}",
        "/api/wizard-sessions/{session_id}/events",
    }
    for endpoint in endpoints.values():
        assert inspect.iscoroutinefunction(endpoint)
