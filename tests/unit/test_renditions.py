import pytest

from dynmedia.core.renditions import Rendition, RenditionKind, classify, find_web_rendition, is_generated


@pytest.mark.parametrize(
    "name,kind",
    [
        ("cq5dam.web.960.640.jpg", RenditionKind.WEB),
        ("cq5dam.thumbnail.48.48.png", RenditionKind.THUMBNAIL),
        ("cq5dam.video.hq.m4v", RenditionKind.VIDEO),
        ("cq5dam.zoom.2048.2048.jpg", RenditionKind.OTHER),
        ("cqdam.text.txt", RenditionKind.OTHER),
        ("cq5dam.thumbnail", RenditionKind.OTHER),
        ("original", None),
        ("custom.jpg", None),
        ("my.cq5dam.web.1.jpg", None),
    ],
)
def test_classify(name, kind):
    assert classify(name) is kind


def test_other_pattern_covers_specific_kinds():
    assert RenditionKind.OTHER.matches("cq5dam.web.960.640.jpg")
    assert RenditionKind.OTHER.matches("cq5dam.thumbnail.48.48.png")
    assert not RenditionKind.WEB.matches("cq5dam.thumbnail.48.48.png")


def test_is_generated():
    assert is_generated("cqdam.pdf.preview.png")
    assert not is_generated("original")


def test_find_web_rendition_returns_first():
    renditions = [
        Rendition("original", 4000, 2000),
        Rendition("cq5dam.thumbnail.48.48.png", 48, 24),
        Rendition("cq5dam.web.1280.1280.jpg", 1280, 640),
        Rendition("cq5dam.web.640.640.jpg", 640, 320),
    ]
    assert find_web_rendition(renditions).name == "cq5dam.web.1280.1280.jpg"
    assert find_web_rendition(renditions[:2]) is None
