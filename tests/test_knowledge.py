from chargen.services import UploadedDocument, extract_knowledge, split_sentences
from chargen.services import knowledge
from chargen.services.knowledge import is_pdf_file, is_text_file


def test_split_sentences():
    assert split_sentences("Hello world. - item! Why?") == ["Hello world.", "Why."]
    assert split_sentences("Wait... what?!  Really") == ["Wait.", "what.", "Really."]
    assert split_sentences("") == []


def test_file_type_detection():
    assert is_text_file("notes.TXT")
    assert is_text_file("data.csv")
    assert not is_text_file("image.png")
    assert not is_text_file("README")
    assert is_pdf_file("paper.pdf")
    assert is_pdf_file("upload", "application/pdf")
    assert not is_pdf_file("notes.txt", "text/plain")


def test_extract_knowledge_uses_pdf_text(monkeypatch):
    monkeypatch.setattr(knowledge, "extract_pdf_text", lambda data: "Page one fact. Page two fact")
    docs = [UploadedDocument("paper.pdf", "application/pdf", b"%PDF-1.4")]
    assert extract_knowledge(docs) == ["Page one fact.", "Page two fact."]


def test_extract_knowledge_skips_broken_files():
    docs = [
        UploadedDocument("broken.pdf", "application/pdf", b"definitely not a pdf"),
        UploadedDocument("notes.txt", "text/plain", "Café au lait. Fin".encode("utf-8")),
    ]
    assert extract_knowledge(docs) == ["Café au lait.", "Fin."]
