import pytest


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["service"] == "chat-markdown"


def test_parse_returns_typed_blocks(client):
    resp = client.post("/api/parse", json={"text": "# Title\n\nHello **world**\n\n5. a\n9. b"})
    assert resp.status_code == 200
    data = resp.json()

    assert [b["type"] for b in data["blocks"]] == ["header", "paragraph", "numbered_list"]
    assert data["blocks"][0]["level"] == 1
    runs = data["blocks"][1]["text"]["runs"]
    assert runs[1] == {"text": "world", "styles": ["bold"], "url": None}
    assert all(b["id"] for b in data["blocks"])
    assert data["footer"] is None


def test_parse_with_citations_builds_collapsed_footer(client):
    resp = client.post(
        "/api/parse",
        json={
            "text": "Eat protein [1]",
            "citations": [
                {"id": "1", "title": "USDA", "url": "https://fdc.nal.usda.gov"},
                {"id": "2", "title": "Notes"},
            ],
        },
    )
    assert resp.status_code == 200
    footer = resp.json()["footer"]

    assert footer["summary"] == "2 sources"
    assert footer["expanded"] is False
    assert [e["domain_label"] for e in footer["entries"]] == ["fdc.nal.usda.gov", "Source"]


def test_parse_table_and_code(client):
    text = "| A | B |\n|---|---|\n| 1 |\n\n```sh\necho hi\n```"
    blocks = client.post("/api/parse", json={"text": text}).json()["blocks"]

    assert blocks[0]["headers"] == ["A", "B"]
    assert blocks[0]["rows"] == [["1"]]
    assert blocks[1] == {"id": blocks[1]["id"], "type": "code", "language": "sh", "code": "echo hi"}


def test_parse_empty_text(client):
    resp = client.post("/api/parse", json={"text": ""})
    assert resp.status_code == 200
    assert resp.json()["blocks"] == []


def test_parse_rejects_oversized_text(client, small_limit):
    resp = client.post("/api/parse", json={"text": "x" * (small_limit + 1)})
    assert resp.status_code == 413


def test_parse_requires_text(client):
    resp = client.post("/api/parse", json={})
    assert resp.status_code == 422


def test_inline(client):
    resp = client.post("/api/inline", json={"text": "a [b](https://x.example) c"})
    assert resp.status_code == 200
    runs = resp.json()["runs"]
    assert runs[1] == {"text": "b", "styles": ["link"], "url": "https://x.example"}


def test_render(client):
    resp = client.post("/api/render", json={"text": "7. one\n8. two"})
    assert resp.json()["plain_text"] == "1. one\n2. two"


@pytest.mark.parametrize(
    "url,action",
    [("https://www.nih.gov/health", "open"), ("https://unknown.example", "confirm")],
)
def test_resolve_link(client, url, action):
    resp = client.post("/api/links/resolve", json={"url": url})
    assert resp.status_code == 200
    assert resp.json()["action"] == action


def test_resolve_link_rejects_empty(client):
    resp = client.post("/api/links/resolve", json={"url": "  "})
    assert resp.status_code == 400


@pytest.mark.integration
def test_full_message_round_trip(client):
    text = (
        "## Your plan\n"
        "Aim for **120g** protein daily.\n"
        "- Eggs\n"
        "- Greek yogurt\n"
        "\n"
        "> Consult a *professional*\n"
        "---\n"
        "Source: [USDA](https://fdc.nal.usda.gov)"
    )
    data = client.post("/api/parse", json={"text": text, "citations": [{"id": "1", "title": "USDA"}]}).json()

    assert [b["type"] for b in data["blocks"]] == ["header", "paragraph", "bullet_list", "blockquote", "hr", "paragraph"]
    assert data["footer"]["summary"] == "1 source"
    plain = client.post("/api/render", json={"text": text}).json()["plain_text"]
    assert "• Eggs" in plain


def test_inline_with_many_unclosed_markers(client):
    text = " _a" * 8000
    resp = client.post("/api/inline", json={"text": text})

    assert resp.status_code == 200
    assert [r["text"] for r in resp.json()["runs"]] == [text]
