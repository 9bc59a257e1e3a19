"""
Tests for page tree resolution and the page service rules built on it.
"""
import pytest
import pytest_asyncio

from pagebuilder.domain.exceptions import Conflict, ContentValidationError, HierarchyError, NotFound
from pagebuilder.services import PageHierarchyResolver, join_path, split_path


@pytest_asyncio.fixture
async def tree(page_service):
    """home, media -> gallery -> summer"""
    home = await page_service.create(title="Home", slug="home")
    media = await page_service.create(title="Media", slug="media")
    gallery = await page_service.create(title="Gallery", slug="gallery", parent_id=media.id)
    summer = await page_service.create(title="Summer", slug="summer", parent_id=gallery.id)
    return {"home": home, "media": media, "gallery": gallery, "summer": summer}


class TestPathHelpers:

    @pytest.mark.parametrize("path,segments", [
        ("/media/gallery", ["media", "gallery"]),
        ("media/gallery/", ["media", "gallery"]),
        ("//media//gallery", ["media", "gallery"]),
        ("/", []),
        ("", []),
    ])
    def test_split_path(self, path, segments):
        assert split_path(path) == segments

    def test_join_path(self):
        assert join_path(["media", "gallery"]) == "/media/gallery"


class TestResolvePath:

    @pytest.mark.asyncio
    async def test_resolves_nested_page(self, resolver, tree):
        page = await resolver.resolve_path(["media", "gallery"])

        assert page.id == tree["gallery"].id
        assert await resolver.compute_full_path(page) == "/media/gallery"

    @pytest.mark.asyncio
    async def test_resolves_path_string(self, resolver, tree):
        page = await resolver.resolve_path_string("/media/gallery/summer/")

        assert page.id == tree["summer"].id

    @pytest.mark.asyncio
    async def test_full_path_round_trips(self, resolver, tree):
        for page in tree.values():
            path = await resolver.compute_full_path(page)
            resolved = await resolver.resolve_path(split_path(path))
            assert resolved.id == page.id

    @pytest.mark.asyncio
    async def test_empty_path_is_not_found(self, resolver, tree):
        with pytest.raises(NotFound):
            await resolver.resolve_path([])

    @pytest.mark.asyncio
    async def test_first_unmatched_segment_is_reported(self, resolver, tree):
        with pytest.raises(NotFound) as exc_info:
            await resolver.resolve_path(["media", "video", "summer"])

        assert "/media/video" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_nested_page_is_not_a_root(self, resolver, tree):
        with pytest.raises(NotFound):
            await resolver.resolve_path(["gallery"])

    @pytest.mark.asyncio
    async def test_root_lookup_by_slug(self, resolver, tree):
        assert (await resolver.find_root_by_slug("media")).id == tree["media"].id

        with pytest.raises(NotFound):
            await resolver.find_root_by_slug("gallery")


class TestFullPaths:

    @pytest.mark.asyncio
    async def test_batch_paths(self, resolver, tree):
        paths = await resolver.compute_full_paths()

        assert paths == {
            tree["home"].id: "/home",
            tree["media"].id: "/media",
            tree["gallery"].id: "/media/gallery",
            tree["summer"].id: "/media/gallery/summer",
        }

    @pytest.mark.asyncio
    async def test_batch_paths_for_selected_pages(self, resolver, tree):
        paths = await resolver.compute_full_paths([tree["summer"]])

        assert paths[tree["summer"].id] == "/media/gallery/summer"

    @pytest.mark.asyncio
    async def test_cyclic_parent_chain(self, resolver, page_repo, tree):
        # Corrupt the stored graph behind the service's back
        tree["media"].parent_id = tree["summer"].id

        with pytest.raises(HierarchyError):
            await resolver.compute_full_path(tree["gallery"])
        with pytest.raises(HierarchyError):
            await resolver.compute_full_paths()

    @pytest.mark.asyncio
    async def test_dangling_parent(self, resolver, page_repo, tree):
        del page_repo.records[tree["media"].id]

        with pytest.raises(HierarchyError):
            await resolver.compute_full_path(tree["gallery"])
        with pytest.raises(HierarchyError):
            await resolver.compute_full_paths([tree["summer"]])

    @pytest.mark.asyncio
    async def test_depth_limit(self, page_repo, tree):
        shallow = PageHierarchyResolver(page_repo, max_depth=2)

        assert await shallow.compute_full_path(tree["gallery"]) == "/media/gallery"
        with pytest.raises(HierarchyError):
            await shallow.compute_full_path(tree["summer"])


class TestPageRules:

    @pytest.mark.asyncio
    async def test_duplicate_root_slug(self, page_service, tree):
        with pytest.raises(Conflict):
            await page_service.create(title="Home again", slug="home")

    @pytest.mark.asyncio
    async def test_same_slug_under_other_parent(self, page_service, tree):
        page = await page_service.create(title="Home", slug="home", parent_id=tree["media"].id)

        assert await page_service.full_path(page) == "/media/home"

    @pytest.mark.asyncio
    async def test_unknown_parent(self, page_service):
        with pytest.raises(NotFound):
            await page_service.create(title="Orphan", slug="orphan", parent_id="missing")

    @pytest.mark.asyncio
    async def test_slug_must_be_one_segment(self, page_service):
        with pytest.raises(ContentValidationError) as exc_info:
            await page_service.create(title="Nested", slug="a/b")

        assert exc_info.value.fields == ["slug"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title,slug,field", [
        ("Page", 42, "slug"),
        (["Page"], "page", "title"),
        ("Page", {"a": "b"}, "slug"),
    ])
    async def test_title_and_slug_must_be_strings(self, page_service, title, slug, field):
        with pytest.raises(ContentValidationError) as exc_info:
            await page_service.create(title=title, slug=slug)

        assert exc_info.value.fields == [field]

    @pytest.mark.asyncio
    async def test_update_slug_must_be_a_string(self, page_service, tree):
        with pytest.raises(ContentValidationError) as exc_info:
            await page_service.update(tree["home"].id, {"slug": 7})

        assert exc_info.value.fields == ["slug"]

    @pytest.mark.asyncio
    async def test_move_under_descendant_is_refused(self, page_service, tree):
        with pytest.raises(Conflict):
            await page_service.update(tree["media"].id, {"parent_id": tree["summer"].id})
        with pytest.raises(Conflict):
            await page_service.update(tree["media"].id, {"parent_id": tree["media"].id})

    @pytest.mark.asyncio
    async def test_move_checks_slug_under_new_parent(self, page_service, tree):
        await page_service.create(title="Summer", slug="summer", parent_id=tree["media"].id)

        with pytest.raises(Conflict):
            await page_service.update(tree["summer"].id, {"parent_id": tree["media"].id})

    @pytest.mark.asyncio
    async def test_move_to_root(self, page_service, tree):
        page = await page_service.update(tree["gallery"].id, {"parent_id": None})

        assert await page_service.full_path(page) == "/gallery"
        assert await page_service.get_all_full_paths() == [
            "/gallery", "/gallery/summer", "/home", "/media",
        ]

    @pytest.mark.asyncio
    async def test_no_op_update_is_rejected(self, page_service, tree):
        with pytest.raises(ContentValidationError):
            await page_service.update(tree["home"].id, {"slug": "home", "status": "draft"})

    @pytest.mark.asyncio
    async def test_children_and_roots(self, page_service, tree):
        children = await page_service.get_children(tree["media"].id)
        roots = await page_service.get_roots()

        assert [p.slug for p in children] == ["gallery"]
        assert [p.slug for p in roots] == ["home", "media"]
        with pytest.raises(NotFound):
            await page_service.get_children("missing")

    @pytest.mark.asyncio
    async def test_delete_page_with_children_is_refused(self, page_service, page_repo, tree):
        with pytest.raises(Conflict):
            await page_service.delete(tree["gallery"].id)

        assert tree["gallery"].id in page_repo.records

    @pytest.mark.asyncio
    async def test_delete_page_removes_sections_and_files(
        self, page_service, section_repo, page_repo, write_upload, media_root, tree
    ):
        image = write_upload("bg.jpg")
        await section_repo.create({
            "page_id": tree["home"].id,
            "type": "text-block",
            "order": 1,
            "content": {"type": "text-block", "content": "Hi", "textAlignment": "left"},
        })
        await section_repo.create({
            "page_id": tree["home"].id,
            "type": "hero",
            "order": 2,
            "content": {
                "type": "hero",
                "backgroundImage": image,
                "backgroundImageAlt": "bg",
                "title": "T",
                "subtitle": "S",
                "ctaButton": {"text": "Go", "url": "/go"},
                "textAlignment": "left",
            },
        })

        await page_service.delete(tree["home"].id)

        assert tree["home"].id not in page_repo.records
        assert section_repo.records == {}
        assert not (media_root / "uploads" / "bg.jpg").exists()
