import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from types import SimpleNamespace

import pytest

from gbp_audit.storage import KeyValueStore


CATEGORIES = [
    "Profile Completeness & Accuracy",
    "Review Strategy & Responsiveness",
    "Photo & Video Strategy",
    "Post Frequency & Engagement",
    "Q&A Engagement",
    "Local SEO Signals",
    "Service/Product Listing Optimization",
]


def build_payload(overall=72, categories=7, recommendations=4, score=70):
    return {
        "overallScore": overall,
        "auditBreakdown": [
            {"category": CATEGORIES[i % len(CATEGORIES)] + ("" if i < len(CATEGORIES) else f" {i}"),
             "score": score,
             "comment": "Solid, with room to grow."}
            for i in range(categories)
        ],
        "recommendations": [
            {"title": f"Recommendation {i + 1}", "description": "Do this next."}
            for i in range(recommendations)
        ],
    }


class FakeCompletions:
    """Stands in for AsyncGroq().chat.completions."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=response))]
        )


class FakeGroq:
    def __init__(self, *responses):
        self.completions = FakeCompletions(responses)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self):
        return self.completions.calls


@pytest.fixture
def make_payload():
    return build_payload


@pytest.fixture
def fake_groq():
    """FakeGroq factory; str responses become message content, dicts are JSON-encoded."""
    def factory(*responses):
        encoded = [json.dumps(r) if isinstance(r, dict) else r for r in responses]
        return FakeGroq(*encoded)
    return factory


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "gbp_audit.db"


@pytest.fixture
def store(db_path):
    return KeyValueStore(db_path)


@pytest.fixture
def business_fields():
    return {
        "business_name": "Joe's Pizza",
        "location": "Brooklyn, NY",
        "email": "owner@joespizza.com",
        "phone_number": "555-0100",
    }


SUMMARY_TEXT = (
    "Here is the summary of your Google Business Profile audit for Joe's Pizza:\n\n"
    "OVERALL SCORE\n72/100\n"
)


class ChatCompletionsHandler(BaseHTTPRequestHandler):
    """Answers Groq chat completion calls: JSON audits when a schema is sent, text otherwise."""
    # Keep-alive, so the SDK pools the connection between calls
    protocol_version = "HTTP/1.1"

    def do_POST(self):
        body = json.loads(self.rfile.read(int(self.headers["Content-Length"])))
        self.server.requests.append((self.path, body))

        if self.server.status != 200:
            payload = {"error": {"message": "model overloaded", "type": "server_error"}}
        else:
            if "response_format" in body:
                content = json.dumps(self.server.audit_payload)
            else:
                content = self.server.summary_text
            payload = {
                "id": "chatcmpl-test",
                "object": "chat.completion",
                "created": 0,
                "model": body["model"],
                "choices": [{
                    "index": 0,
                    "message": {"role": "assistant", "content": content},
                    "finish_reason": "stop",
                }],
                "usage": {"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 2},
            }

        data = json.dumps(payload).encode()
        self.send_response(self.server.status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def groq_server(monkeypatch):
    """A local HTTP server speaking enough of the Groq API for the real SDK."""
    for var in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(var, raising=False)

    server = ThreadingHTTPServer(("127.0.0.1", 0), ChatCompletionsHandler)
    server.requests = []
    server.status = 200
    server.audit_payload = build_payload()
    server.summary_text = SUMMARY_TEXT
    server.url = f"http://127.0.0.1:{server.server_port}"

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
