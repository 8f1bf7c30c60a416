"""HTTP contract tests for the case simulation frontend."""

import pytest
from fastapi.testclient import TestClient

from pbl_tutor.config.compose import Container
from pbl_tutor.config.settings import AppSettings
from pbl_tutor.domain.errors import EmbeddingError
from pbl_tutor.domain.models import Card
from pbl_tutor.interface.http.api import create_app, status_for

CARDS = [
    Card(id="c1", case_id="1", title="Fever", content="Patient has fever", initial=True),
    Card(id="c2", case_id="1", title="Cough", content="Dry cough"),
    Card(id="c3", case_id="2", title="Rash", content="Red rash"),
]


class FakeEmbedding:
    """fever → x-axis, cough → y-axis, rash → z-axis; "boom" fails."""

    def __init__(self, fail_all: bool = False) -> None:
        self.fail_all = fail_all

    def embed(self, text: str) -> list[float]:
        lowered = text.lower()
        if self.fail_all or "boom" in lowered:
            raise EmbeddingError("Embedding API error 500: boom", status_code=500)
        if "fever" in lowered:
            return [1.0, 0.0, 0.0]
        if "cough" in lowered:
            return [0.0, 1.0, 0.0]
        return [0.0, 0.0, 1.0]


class FakeLoader:
    def load(self) -> list[Card]:
        return list(CARDS)


def make_client(tmp_path, embedding=None, **settings) -> TestClient:
    cfg = AppSettings(public_dir=str(tmp_path / "public"), **settings)
    container = Container(cfg, embedding=embedding or FakeEmbedding(), card_loader=FakeLoader())
    return TestClient(create_app(container))


@pytest.fixture
def client(tmp_path):
    with make_client(tmp_path) as c:
        yield c


def test_health_reports_ready_after_startup(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "ready": True, "cards": 3}


def test_bootstrap_returns_initial_card(client):
    resp = client.get("/bootstrap", params={"case_id": "1"})

    assert resp.status_code == 200
    assert resp.json() == {"initial": {"id": "c1", "title": "Fever", "content": "Patient has fever"}}


def test_bootstrap_defaults_to_case_one(client):
    assert client.get("/bootstrap").json()["initial"]["id"] == "c1"


def test_bootstrap_without_initial_card_is_404(client):
    resp = client.get("/bootstrap", params={"case_id": "2"})

    assert resp.status_code == 404
    assert resp.json() == {"error": "No initial card"}


def test_ask_hit(client):
    resp = client.post("/ask", json={"case_id": "1", "question": "Does the patient have fever?"})

    assert resp.status_code == 200
    assert resp.json() == {
        "reply_blocks": [{"id": "c1", "title": "Fever", "content": "Patient has fever"}],
        "newly_revealed_ids": ["c1"],
        "nohit": False,
    }


def test_ask_accepts_numeric_case_id(client):
    resp = client.post("/ask", json={"case_id": 1, "question": "any cough?"})

    assert resp.status_code == 200
    assert resp.json()["newly_revealed_ids"] == ["c2"]


def test_ask_no_hit(client):
    resp = client.post("/ask", json={"case_id": "1", "question": "Any rash?"})

    assert resp.status_code == 200
    assert resp.json() == {"reply_blocks": [], "newly_revealed_ids": [], "nohit": True}


def test_ask_skips_revealed_cards(client):
    resp = client.post(
        "/ask", json={"case_id": "1", "question": "fever?", "revealed_ids": ["c1"]}
    )

    assert resp.status_code == 200
    assert resp.json()["nohit"] is True


@pytest.mark.parametrize(
    "body",
    [
        {"case_id": "1"},
        {"question": "fever?"},
        {"case_id": "1", "question": ""},
        {"case_id": "1", "question": "fever?", "revealed_ids": "c1"},
        {"case_id": "1", "question": "fever?", "revealed_ids": [{"id": "c1"}]},
    ],
)
def test_ask_input_errors_are_400(client, body):
    resp = client.post("/ask", json=body)

    assert resp.status_code == 400
    assert "error" in resp.json()


def test_ask_embedding_failure_is_server_error(client):
    resp = client.post("/ask", json={"case_id": "1", "question": "boom?"})

    assert resp.status_code == 502
    assert "500" in resp.json()["error"]


def test_failed_startup_build_reports_not_ready(tmp_path):
    with make_client(tmp_path, embedding=FakeEmbedding(fail_all=True)) as c:
        health = c.get("/health").json()
        resp = c.post("/ask", json={"case_id": "1", "question": "fever?"})
        bootstrap = c.get("/bootstrap", params={"case_id": "1"})

    assert health["ready"] is False
    assert resp.status_code == 503
    assert "error" in resp.json()
    # bootstrap reads the card catalog and does not need the index
    assert bootstrap.status_code == 200


def test_top_k_setting_applies(tmp_path):
    with make_client(tmp_path, top_k=2, sim_threshold=0.0) as c:
        resp = c.post("/ask", json={"case_id": "1", "question": "fever?"})

    assert resp.json()["newly_revealed_ids"] == ["c1", "c2"]


def test_spa_fallback_serves_index_html(tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<html>tutor</html>", encoding="utf-8")
    (public / "app.js").write_text("console.log('hi')", encoding="utf-8")

    with make_client(tmp_path) as c:
        page = c.get("/case/1/intro")
        asset = c.get("/app.js")
        root = c.get("/")

    assert page.status_code == 200
    assert "tutor" in page.text
    assert asset.text == "console.log('hi')"
    assert "tutor" in root.text


def test_spa_without_public_dir_is_404(client):
    assert client.get("/anything").status_code == 404


@pytest.mark.parametrize(
    "error, status",
    [
        (EmbeddingError("x"), 502),
        (RuntimeError("x"), 500),
    ],
)
def test_status_mapping(error, status):
    assert status_for(error) == status
