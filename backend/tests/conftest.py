import pytest

from pagebuilder import create_app
from pagebuilder.extensions import db
from pagebuilder.services import (
    AssetLifecycleCoordinator,
    PageHierarchyResolver,
    PageService,
    SectionService,
)

from fakes import InMemoryPageRepository, InMemorySectionRepository


@pytest.fixture
def media_root(tmp_path):
    (tmp_path / "uploads").mkdir()
    return tmp_path


@pytest.fixture
def page_repo():
    return InMemoryPageRepository()


@pytest.fixture
def section_repo():
    return InMemorySectionRepository()


@pytest.fixture
def coordinator(section_repo, media_root):
    return AssetLifecycleCoordinator(section_repo, base_dir=str(media_root))


@pytest.fixture
def resolver(page_repo):
    return PageHierarchyResolver(page_repo)


@pytest.fixture
def page_service(page_repo, coordinator, resolver):
    return PageService(page_repo, coordinator, resolver)


@pytest.fixture
def section_service(section_repo, page_repo, coordinator):
    return SectionService(section_repo, page_repo, coordinator)


@pytest.fixture
def write_upload(media_root):
    """Create a file inside the uploads folder and return its /uploads/ reference."""

    def _write(filename, data=b"data"):
        (media_root / "uploads" / filename).write_bytes(data)
        return f"/uploads/{filename}"

    return _write


# -------------------------------------------------
# HTTP layer
# -------------------------------------------------

@pytest.fixture
def app(media_root):
    app = create_app("testing")
    app.config["MEDIA_ROOT"] = str(media_root)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()
