import pytest

from factorio_wiki.errors import ImageDownloadError
from factorio_wiki.images import ensure_image

IMAGE_URL = "https://wiki.test/images/Wood.png"


def test_existing_file_is_trusted(config, logger, fake_session):
    destination = config.image_dir / "Wood.png"
    destination.write_bytes(b"stale bytes")
    session = fake_session()

    assert ensure_image(session, IMAGE_URL, destination, logger) is False
    assert session.calls == []
    assert destination.read_bytes() == b"stale bytes"


def test_download_is_complete_before_returning(config, logger, fake_session, png_bytes):
    destination = config.image_dir / "Wood.png"
    session = fake_session({IMAGE_URL: (200, png_bytes)})

    assert ensure_image(session, IMAGE_URL, destination, logger) is True
    assert destination.read_bytes() == png_bytes
    assert not destination.with_name("Wood.png.part").exists()


def test_non_image_payload_is_discarded(config, logger, fake_session):
    destination = config.image_dir / "Wood.png"
    session = fake_session({IMAGE_URL: (200, "<html>maintenance</html>")})

    with pytest.raises(ImageDownloadError):
        ensure_image(session, IMAGE_URL, destination, logger)
    assert list(config.image_dir.iterdir()) == []


def test_http_error_leaves_no_file(config, logger, fake_session):
    destination = config.image_dir / "Wood.png"
    session = fake_session({IMAGE_URL: (500, "boom")})

    with pytest.raises(ImageDownloadError, match="HTTP 500"):
        ensure_image(session, IMAGE_URL, destination, logger)
    assert list(config.image_dir.iterdir()) == []


def test_transport_error_is_wrapped(config, logger, fake_session, connection_error):
    destination = config.image_dir / "Wood.png"
    session = fake_session({IMAGE_URL: connection_error})

    with pytest.raises(ImageDownloadError) as excinfo:
        ensure_image(session, IMAGE_URL, destination, logger)
    assert excinfo.value.__cause__ is connection_error
    assert not destination.exists()
