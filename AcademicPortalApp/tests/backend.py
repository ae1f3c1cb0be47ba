"""In-process stand-in for the REST API, served through ``httpx.MockTransport``."""
import json

import httpx

TOKEN = "tok-123"


def user_payload(role="student", user_id=7):
    return {
        "id": user_id,
        "email": f"{role}@example.com",
        "role": role,
        "firstName": role.title(),
        "lastName": "User",
    }


class FakeBackend:
    """Route table keyed by (method, path); records every request it receives."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method, path, body=None, status=200):
        self.routes[(method, path)] = (status, body)

    def __call__(self, request):
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        if (request.method, path) not in self.routes:
            return httpx.Response(404, json={"success": False, "error": f"No route {request.method} {path}"})
        status, body = self.routes[(request.method, path)]
        if callable(body):
            body = body(request)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def calls(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path.removeprefix("/api") == path]

    @staticmethod
    def json_of(request):
        return json.loads(request.content)
