from chargen.providers import ChatRateLimitError, ChatServiceError
from chargen.services import CharacterGeneratorService, fix_json
from chargen.services.errors import NoJsonFoundError


class StubCharacterService(CharacterGeneratorService):
    """Returns canned results (or raises) instead of calling the LLM."""

    def __init__(self, result=None, error=None):
        super().__init__()
        self.result = result
        self.error = error
        self.calls = []

    async def generate_character(self, prompt, model, api_key):
        self.calls.append(("generate", prompt, model, api_key))
        if self.error:
            raise self.error
        return self.result

    async def refine_character(self, prompt, model, current_character, api_key):
        self.calls.append(("refine", prompt, model, current_character, api_key))
        if self.error:
            raise self.error
        return self.result


def _result(name="Test"):
    return {"character": fix_json('{"name": "%s"}' % name), "rawPrompt": "test prompt", "rawResponse": "{}"}


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_fix_json(client):
    res = client.post("/api/fix-json", json={"content": 'Sure! ```json\n{name: "Fixed",}\n```'})
    assert res.status_code == 200
    character = res.json()["character"]
    assert character["name"] == "Fixed"
    assert character["settings"] == {"secrets": {}, "voice": {"model": ""}}


def test_fix_json_requires_content(client):
    res = client.post("/api/fix-json", json={})
    assert res.status_code == 400
    assert res.json()["detail"] == "Content is required"


def test_fix_json_no_json(client):
    res = client.post("/api/fix-json", json={"content": "no braces here"})
    assert res.status_code == 422
    assert res.json()["detail"]["error"] == "no_json_found"


def test_fix_json_malformed(client):
    res = client.post("/api/fix-json", json={"content": "{bad json"})
    assert res.status_code == 422
    detail = res.json()["detail"]
    assert detail["error"] == "malformed_json"
    assert detail["details"]


def test_generate_character_missing_fields(client, override_service):
    stub = override_service(StubCharacterService(result=_result()))
    res = client.post("/api/generate-character", json={})
    assert res.status_code == 400
    assert "Missing required fields" in res.json()["detail"]
    assert stub.calls == []


def test_generate_character(client, override_service):
    stub = override_service(StubCharacterService(result=_result()))
    res = client.post(
        "/api/generate-character",
        headers={"X-API-Key": "test-key"},
        json={"prompt": "test prompt", "model": "test-model"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["character"]["name"] == "Test"
    assert body["rawPrompt"] == "test prompt"
    assert body["rawResponse"] == "{}"
    assert stub.calls == [("generate", "test prompt", "test-model", "test-key")]


def test_generate_character_service_error(client, override_service):
    override_service(StubCharacterService(error=ChatServiceError("Service Error")))
    res = client.post(
        "/api/generate-character",
        headers={"X-API-Key": "test-key"},
        json={"prompt": "test prompt", "model": "test-model"},
    )
    assert res.status_code == 502
    assert res.json()["detail"] == "Service Error"


def test_generate_character_rate_limited(client, override_service):
    override_service(StubCharacterService(error=ChatRateLimitError("slow down")))
    res = client.post(
        "/api/generate-character",
        headers={"X-API-Key": "test-key"},
        json={"prompt": "test prompt", "model": "test-model"},
    )
    assert res.status_code == 429


def test_generate_character_unusable_reply(client, override_service):
    override_service(StubCharacterService(error=NoJsonFoundError("No complete JSON object found in response")))
    res = client.post(
        "/api/generate-character",
        headers={"X-API-Key": "test-key"},
        json={"prompt": "test prompt", "model": "test-model"},
    )
    assert res.status_code == 422
    assert res.json()["detail"]["error"] == "no_json_found"


def test_refine_character(client, override_service):
    stub = override_service(StubCharacterService(result=_result("Refined")))
    current = {"name": "Test", "bio": ["old"]}
    res = client.post(
        "/api/refine-character",
        headers={"X-API-Key": "test-key"},
        json={"prompt": "make it better", "model": "test-model", "currentCharacter": current},
    )
    assert res.status_code == 200
    assert res.json()["character"]["name"] == "Refined"
    assert stub.calls == [("refine", "make it better", "test-model", current, "test-key")]


def test_refine_character_missing_current_character(client, override_service):
    override_service(StubCharacterService(result=_result()))
    res = client.post(
        "/api/refine-character",
        headers={"X-API-Key": "test-key"},
        json={"prompt": "make it better", "model": "test-model"},
    )
    assert res.status_code == 400


def test_process_files(client):
    files = [
        ("files", ("notes.txt", b"The sky is blue. Grass is green!\n- a list item\nWhy?", "text/plain")),
        ("files", ("photo.png", b"\x89PNG", "image/png")),
        ("files", ("facts.md", b"Water boils at 100 degrees", "text/markdown")),
    ]
    res = client.post("/api/process-files", files=files)
    assert res.status_code == 200
    assert res.json()["knowledge"] == [
        "The sky is blue.",
        "Grass is green.",
        "Water boils at 100 degrees.",
    ]


def test_process_files_requires_files(client):
    res = client.post("/api/process-files")
    assert res.status_code == 400
    assert res.json()["detail"] == "No files uploaded"


def test_fix_json_deeply_nested(client):
    nested = '{"a":' * 60 + "1" + "}" * 60
    res = client.post("/api/fix-json", json={"content": "Here: " + nested})
    assert res.status_code == 200
    assert "a" in res.json()["character"]
