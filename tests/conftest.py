import importlib
import sys
import types
import pytest

from PIL import Image, ImageDraw

from storage.card_store import CardStore
from storage.sqlite_store import SQLiteStore

CARD_LINES = [
    "9:41",
    "Chase Sapphire Reserve®",
    "•••• 4242",
    "Available credit $5,000.00",
]


@pytest.fixture(scope="session")
def tmp_workspace(tmp_path_factory):
    root = tmp_path_factory.mktemp("bcc_ws")
    (root / "screens").mkdir()
    return root


@pytest.fixture(scope="session")
def sample_card_image(tmp_workspace):
    """Small PNG for OCR tests. EasyOCR is stubbed, so content can be minimal."""
    img_path = tmp_workspace / "screens" / "card.png"
    img = Image.new("RGB", (400, 200), "white")
    d = ImageDraw.Draw(img)
    d.text((20, 20), "\n".join(CARD_LINES), fill="black")
    img.save(img_path)
    return img_path


@pytest.fixture
def broken_image(tmp_path):
    p = tmp_path / "broken.png"
    p.write_bytes(b"definitely not a png")
    return p


class _FakeEasyOCRReader:
    lines = list(CARD_LINES)
    fail = False

    def __init__(self, *_, **__):
        pass

    def readtext(self, image, detail=1, paragraph=False):
        if self.fail:
            raise RuntimeError("engine crashed")
        out = []
        for i, item in enumerate(self.lines):
            # plain text gets its own row; (text, x, row) places a span explicitly
            t, x, row = item if isinstance(item, tuple) else (item, 0, i)
            y = row * 30
            out.append(([(x, y), (x + 200, y), (x + 200, y + 20), (x, y + 20)], t, 0.95))
        return out


@pytest.fixture
def fake_easyocr(monkeypatch):
    # Create a fake 'easyocr' module that provides Reader
    fake = types.ModuleType("easyocr")
    fake.Reader = _FakeEasyOCRReader
    monkeypatch.setitem(sys.modules, "easyocr", fake)
    monkeypatch.setattr(_FakeEasyOCRReader, "lines", list(CARD_LINES))
    monkeypatch.setattr(_FakeEasyOCRReader, "fail", False)

    # Reload our wrapper so it picks up the fake module no matter how it imports
    import ocr.reader as reader_mod

    importlib.reload(reader_mod)
    return _FakeEasyOCRReader


class MemoryKV:
    """Dict-backed stand-in for SQLiteStore's key-value interface."""

    def __init__(self, initial=None):
        self.data = dict(initial or {})
        self.writes = 0

    def get_value(self, key):
        return self.data.get(key)

    def set_value(self, key, value):
        self.data[key] = value
        self.writes += 1


@pytest.fixture
def memory_kv():
    return MemoryKV()


@pytest.fixture
def card_store(memory_kv):
    return CardStore(memory_kv)


@pytest.fixture
def sqlite_kv(tmp_path):
    with SQLiteStore(tmp_path / "cards.sqlite") as kv:
        kv.ensure_schema()
        yield kv
