import base64
import io

import pytest
from PIL import Image

from src.medattend.medattend.core.enums import ComponentType
from src.medattend.medattend.core.exceptions import ValidationError
from src.medattend.medattend.integrations.timetable import (
    TimetableImportService,
    canonical_subject_name,
    normalize_image,
    parse_recognized,
)
from src.medattend.medattend.settings.model import UserSettings
from src.medattend.medattend.state.snapshot import Snapshot
from src.medattend.medattend.state.store import StateStore
from src.medattend.medattend.subjects.service import RegistryService


def _png_base64(mode="RGBA", size=(40, 20)):
    buf = io.BytesIO()
    Image.new(mode, size, (200, 30, 30, 128) if mode == "RGBA" else 128).save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


class FakeRecognizer:
    def __init__(self, rows):
        self.rows = rows
        self.images = []

    def recognize(self, image_base64):
        self.images.append(image_base64)
        return self.rows


ROWS = [
    {"subjectName": "PSM", "type": "Theory", "frequencyPerWeek": 3},
    {"subjectName": "Community Medicine", "type": "Practical", "frequencyPerWeek": 1},
    {"subjectName": "psm", "type": "Theory", "frequencyPerWeek": 2},
    {"subjectName": "Path", "type": "prac", "frequencyPerWeek": "two"},
    {"subjectName": "  ", "type": "Theory"},
]


def _service(recognizer, settings=None):
    store = StateStore(Snapshot(settings=settings or UserSettings()))
    return store, TimetableImportService(store, RegistryService(store), recognizer)


def test_normalize_image_reencodes_as_rgb_jpeg():
    out = normalize_image("data:image/png;base64," + _png_base64())

    with Image.open(io.BytesIO(base64.b64decode(out))) as img:
        assert img.format == "JPEG"
        assert img.mode == "RGB"
        assert img.size == (40, 20)


def test_normalize_image_shrinks_large_uploads():
    out = normalize_image(base64.b64decode(_png_base64(mode="L", size=(4096, 1024))))

    with Image.open(io.BytesIO(base64.b64decode(out))) as img:
        assert max(img.size) == 2048


@pytest.mark.parametrize("payload", ["%%% not base64 %%%", base64.b64encode(b"hello").decode("ascii")])
def test_normalize_image_rejects_garbage(payload):
    with pytest.raises(ValidationError):
        normalize_image(payload)


def test_parse_recognized_cleans_rows():
    parsed = parse_recognized(ROWS)

    assert [p.subject_name for p in parsed] == ["Community Medicine", "Community Medicine", "Community Medicine", "Pathology"]
    assert parsed[3].component_type == ComponentType.PRACTICAL
    assert parsed[3].weekly_frequency == 0


def test_canonical_names_are_case_insensitive():
    assert canonical_subject_name("obg") == "Obstetrics & Gynecology"
    assert canonical_subject_name("Biochemistry") == "Biochemistry"


def test_import_image_groups_components_per_subject():
    recognizer = FakeRecognizer(ROWS)
    store, svc = _service(recognizer)

    created = svc.import_image(_png_base64())

    assert len(recognizer.images) == 1
    assert [s.name for s in created] == ["Community Medicine", "Pathology"]
    community = created[0]
    assert [(c.component_type, c.required_percent) for c in community.components] == [
        (ComponentType.THEORY, 75),
        (ComponentType.PRACTICAL, 80),
    ]
    assert len(store.snapshot.subjects) == 2


def test_import_uses_scholarship_thresholds():
    _, svc = _service(None, UserSettings(is_scholarship=True))

    created = svc.import_subjects(parse_recognized([{"subjectName": "Anatomy", "type": "Practical"}]))

    assert created[0].components[0].required_percent == 85


def test_recognize_without_collaborator_is_rejected():
    _, svc = _service(None)

    with pytest.raises(ValidationError):
        svc.recognize(_png_base64())
