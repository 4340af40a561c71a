from __future__ import annotations

from conftest import FakePicker, FlakyBackend, RecordingNotifier, item, new

from app.viewmodels.collection_detail_vm import CollectionDetailVM
from app.viewmodels.collections_vm import CollectionsVM, CreateCollectionVM
from app.viewmodels.gallery_vm import GalleryVM
from app.viewmodels.home_vm import HomeVM
from app.viewmodels.import_vm import ImportVM
from app.viewmodels.media_vm import MediaDetailVM, MediaVM
from core.models import MediaType
from core.services.interfaces import PickedAsset
from core.services.selection_service import SelectionMode
from infrastructure.kv_backends import InMemoryBackend
from infrastructure.library_store import LibraryStore

# Gallery


async def test_gallery_selection_cancel_deletes_nothing(
    store: LibraryStore, notifier: RecordingNotifier
) -> None:
    x, y = await store.add_media([new("x"), new("y")])
    vm = GalleryVM(store, notifier)
    await vm.load()

    vm.long_press(x)
    assert vm.selection.mode is SelectionMode.SELECTING
    assert vm.press(x) is None
    assert vm.selection.mode is SelectionMode.BROWSING

    assert vm.press(x) is x
    vm.long_press(x)
    vm.press(y)
    vm.cancel_selection()

    assert vm.selection.mode is SelectionMode.BROWSING
    assert len(await store.load_media()) == 2
    assert notifier.messages == []


async def test_gallery_delete_selected(store: LibraryStore, notifier: RecordingNotifier) -> None:
    x, y, z = await store.add_media([new("x"), new("y"), new("z")])
    vm = GalleryVM(store, notifier)
    await vm.load()
    vm.long_press(x)
    vm.press(z)

    assert vm.delete_prompt[1] == "Are you sure you want to delete 2 photos permanently?"
    assert await vm.delete_selected() == 2

    assert [m.id for m in vm.media] == [y.id]
    assert vm.selection.mode is SelectionMode.BROWSING
    assert notifier.messages == [("Success", "2 photos deleted!")]


async def test_gallery_delete_failure_returns_to_browsing(
    store: LibraryStore, backend: FlakyBackend, notifier: RecordingNotifier
) -> None:
    (x,) = await store.add_media([new("x")])
    vm = GalleryVM(store, notifier)
    await vm.load()
    vm.long_press(x)
    backend.fail_writes = True

    assert await vm.delete_selected() == 0

    assert vm.selection.mode is SelectionMode.BROWSING
    assert notifier.messages == [("Error", "Failed to delete photos.")]


async def test_gallery_filters_and_tags(store: LibraryStore, notifier: RecordingNotifier) -> None:
    await store.add_media([new("a", "Bride"), new("b", "Groom"), new("c", "Bride", "Kids")])
    vm = GalleryVM(store, notifier)
    await vm.load()

    assert vm.available_tags == ["All", "Bride", "Groom", "Kids"]
    vm.select_tag("Bride")
    assert [m.uri for m in vm.filtered] == ["a", "c"]
    vm.set_search_text("ki")
    assert [m.uri for m in vm.filtered] == ["c"]


async def test_gallery_malformed_storage_is_reported(notifier: RecordingNotifier) -> None:
    store = LibraryStore(InMemoryBackend({"media": "{oops"}))
    vm = GalleryVM(store, notifier)
    await vm.load()
    assert vm.media == []
    assert notifier.messages == [("Error", "Failed to load media.")]


async def test_gallery_import_permission_denied(
    store: LibraryStore, notifier: RecordingNotifier
) -> None:
    vm = GalleryVM(store, notifier, FakePicker(denied=True))
    assert await vm.start_import() is None
    assert notifier.titles == ["Permission Required"]


# Import


async def test_import_session_save_and_skip(
    store: LibraryStore, notifier: RecordingNotifier
) -> None:
    assets = [
        PickedAsset("a"),
        PickedAsset("b", MediaType.VIDEO),
        PickedAsset("c"),
    ]
    gallery = GalleryVM(store, notifier, FakePicker(assets))
    session = await gallery.start_import()
    assert isinstance(session, ImportVM)

    session.toggle_tag("Bride")
    session.toggle_tag("Groom")
    session.toggle_tag("Bride")
    first = await session.save_current()
    assert first is not None and first.tags == ["Groom"]
    assert session.tags == []

    await session.skip_current()
    await session.save_current()

    assert session.is_finished
    assert [m.uri for m in gallery.media] == ["a", "c"]
    assert notifier.messages == [("Success", "3 photo(s) imported!")]


async def test_import_save_failure_stays_on_asset(
    store: LibraryStore, backend: FlakyBackend, notifier: RecordingNotifier
) -> None:
    session = ImportVM(store, notifier, [PickedAsset("a")])
    backend.fail_writes = True

    assert await session.save_current() is None
    assert session.current == PickedAsset("a")
    assert notifier.messages == [("Error", "Failed to save photo.")]


async def test_import_all_requires_tags(store: LibraryStore, notifier: RecordingNotifier) -> None:
    session = ImportVM(store, notifier, [PickedAsset("a"), PickedAsset("b", MediaType.VIDEO)])

    assert await session.import_all() == []
    assert notifier.titles == ["Tags Required"]

    session.toggle_tag("Wedding")
    created = await session.import_all()
    assert [(m.uri, m.type, m.tags) for m in created] == [
        ("a", MediaType.IMAGE, ["Wedding"]),
        ("b", MediaType.VIDEO, ["Wedding"]),
    ]
    assert session.is_finished


# Media detail and home


async def test_media_detail_add_to_gallery(
    store: LibraryStore, notifier: RecordingNotifier
) -> None:
    vm = MediaDetailVM(store, notifier, item("p1", "Kids"), show_add_button=True)

    assert await vm.add_to_gallery() is True
    assert await vm.add_to_gallery() is False
    assert notifier.titles == ["Success", "Already Added"]
    assert len(await store.load_media()) == 1


def test_media_vm_properties() -> None:
    vm = MediaVM(item("p1", "Bride", "Groom", uri="file:///dcim/IMG_1.jpg"))
    assert vm.file_name == "IMG_1.jpg"
    assert vm.tags_label == "Bride, Groom"
    assert vm.category == ""
    assert vm.is_video is False


async def test_home_loads_stats_and_previews(store: LibraryStore) -> None:
    photos = await store.add_media([new("a", "Bride"), new("b")])
    await store.create_collection("A", photos)
    vm = HomeVM(store)
    await vm.load()

    assert (vm.stats.photos, vm.stats.tags, vm.stats.collections) == (2, 1, 1)
    assert [p.name for p in vm.previews] == ["Bride", "Other"]


# Collections


async def test_create_collection_flow(store: LibraryStore, notifier: RecordingNotifier) -> None:
    (a,) = await store.add_media([new("a")])
    picker = FakePicker([PickedAsset("device-1")])
    vm = CreateCollectionVM(store, notifier, picker)

    assert vm.confirm_name("   ") is False
    assert vm.confirm_name(" Wedding ") is True

    assert await vm.create() is None
    assert notifier.messages[-1] == (
        "No Photos",
        "Please select at least one photo for the collection.",
    )

    await vm.load_library()
    vm.toggle_photo(vm.library[0])
    assert await vm.pick_from_device() == 1
    assert picker.calls == [False]

    created = await vm.create()
    assert created is not None
    assert created.name == "Wedding"
    assert [p.uri for p in created.photos] == ["a", "device-1"]
    assert created.photos[0].id == a.id
    assert notifier.messages[-1] == ("Success", 'Collection "Wedding" created!')
    assert len(await store.load_media()) == 1


async def test_collections_bulk_delete(store: LibraryStore, notifier: RecordingNotifier) -> None:
    first = await store.create_collection("A", [item("p1")])
    await store.create_collection("B", [item("p2")])
    vm = CollectionsVM(store, notifier)
    await vm.load()

    vm.long_press(first)
    assert "This will not delete the photos" in vm.delete_prompt[1]
    assert await vm.delete_selected() == 1

    assert [c.name for c in vm.collections] == ["B"]
    assert notifier.messages == [("Success", "1 collection deleted!")]


async def test_create_collection_write_failure(
    store: LibraryStore, backend: FlakyBackend, notifier: RecordingNotifier
) -> None:
    vm = CreateCollectionVM(store, notifier)
    assert vm.confirm_name("Wedding") is True
    vm.toggle_photo(item("p1"))
    backend.fail_writes = True

    assert await vm.create() is None

    assert notifier.messages == [("Error", "Failed to create collection.")]
    backend.fail_writes = False
    assert await store.load_collections() == []


async def test_collections_delete_failure_returns_to_browsing(
    store: LibraryStore, backend: FlakyBackend, notifier: RecordingNotifier
) -> None:
    first = await store.create_collection("A", [item("p1")])
    vm = CollectionsVM(store, notifier)
    await vm.load()
    vm.long_press(first)
    backend.fail_writes = True

    assert await vm.delete_selected() == 0

    assert notifier.messages == [("Error", "Failed to delete collections.")]
    assert vm.selection.mode is SelectionMode.BROWSING
    assert [c.id for c in vm.collections] == [first.id]


async def test_collection_detail_filter_remove_and_add(
    store: LibraryStore, notifier: RecordingNotifier
) -> None:
    collection = await store.create_collection(
        "A", [item("p1", "Bride"), item("p2", "Groom"), item("p3", "Bride")]
    )
    vm = CollectionDetailVM(store, notifier, collection, FakePicker([PickedAsset("dev")]))

    vm.select_category("Bride")
    assert [p.id for p in vm.photos] == ["p1", "p3"]

    vm.long_press(item("p1"))
    assert await vm.remove_selected() is True
    assert [p.id for p in vm.photos] == ["p3"]
    assert vm.selection.mode is SelectionMode.BROWSING

    assert await vm.add_photos([]) is False
    assert notifier.titles == ["No Photos"]

    assert await vm.add_from_device() is True
    vm.select_category("All")
    assert [p.uri for p in vm.photos][-1] == "dev"
    assert vm.photos[-1].tags == []
    assert notifier.messages[-1] == ("Success", "1 photo(s) added to collection!")


async def test_collection_detail_detects_deleted_collection(
    store: LibraryStore, notifier: RecordingNotifier
) -> None:
    collection = await store.create_collection("A", [item("p1")])
    vm = CollectionDetailVM(store, notifier, collection)
    await store.delete_collections({collection.id})

    assert await vm.add_photos([item("p2")]) is False
    assert vm.is_gone is True
    assert notifier.messages == [("Error", "Failed to add photos to collection.")]
